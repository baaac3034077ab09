"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

from rich.console import Console

from ..config import DossierConfig, load_config
from ..layout.links import LinkFactory
from ..layout.paths import OutputLayout
from ..loader import load_registry_file
from ..model.registry import EntityRegistry
from ..resolve.resolver import QualifiedNameResolver

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    output: Optional[Path] = None,
    elide_index: Optional[bool] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> DossierConfig:
    """Build the run configuration from CLI options."""
    overrides = {}
    if output is not None:
        overrides["output_root"] = str(output)
    if elide_index is not None:
        overrides["elide_index_modules"] = elide_index
    return load_config(config_file=config, verbose=verbose, quiet=quiet, **overrides)


def open_session(
    graph: Path, settings: DossierConfig
) -> tuple[EntityRegistry, OutputLayout, LinkFactory]:
    """Load the entity graph and set up the layout and link factory for one run."""
    registry = load_registry_file(graph)
    layout = OutputLayout.from_config(registry, settings)
    layout.plan()
    resolver = QualifiedNameResolver(registry, max_depth=settings.max_reference_depth)
    return registry, layout, LinkFactory(layout, resolver)
