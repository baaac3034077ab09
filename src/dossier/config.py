"""Configuration loading and management for Dossier.

Configuration sources are merged in priority order:
    1. Defaults (defined in DossierConfig)
    2. Global config (~/.dossier.toml)
    3. Project config (./dossier.toml)
    4. Explicit config file
    5. Environment variables (DOSSIER_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(output_root="build/docs", elide_index_modules=True)
    >>> config.output_root
    'build/docs'
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Iterable, Literal, Optional, get_type_hints

from .exceptions import DossierError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]


@dataclass(frozen=True)
class DossierConfig:
    """Configuration for one documentation run.

    Attributes:
        Output layout:
            output_root: Directory every generated path is placed under
            source_prefix: Prefix stripped from source files (None = common prefix)
            module_prefix: Prefix stripped from module files (None = common prefix)
            elide_index_modules: Store foo/bar/index.js as foo_bar instead of
                foo_bar_index when no sibling foo/bar.js exists

        Resolution:
            max_reference_depth: References with more segments resolve to nothing

        Output control:
            index_filename: Name of the navigation index written under output_root
            verbosity: Logging verbosity level
    """

    # Output layout
    output_root: str = "docs"
    source_prefix: Optional[str] = None
    module_prefix: Optional[str] = None
    elide_index_modules: bool = False

    # Resolution
    max_reference_depth: int = 64

    # Output control
    index_filename: str = "types.js"
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.output_root:
            raise InvalidConfigError("output_root", self.output_root, "must not be empty")
        if self.max_reference_depth < 1:
            raise InvalidConfigError(
                "max_reference_depth", self.max_reference_depth, "must be at least 1"
            )
        if not self.index_filename or "/" in self.index_filename:
            raise InvalidConfigError(
                "index_filename", self.index_filename, "must be a plain file name"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )


def load_config(config_file: Optional[Path] = None, **overrides) -> DossierConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). None values
            are ignored so unset CLI options never mask file settings.

    Returns:
        Validated DossierConfig instance

    Raises:
        DossierError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".dossier.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise DossierError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "dossier.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise DossierError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise DossierError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise DossierError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return DossierConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise DossierError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from DOSSIER_* environment variables.

    Supported environment variables:
        DOSSIER_OUTPUT_ROOT: str
        DOSSIER_SOURCE_PREFIX: str
        DOSSIER_MODULE_PREFIX: str
        DOSSIER_ELIDE_INDEX_MODULES: bool (true/false/1/0)
        DOSSIER_MAX_REFERENCE_DEPTH: int
        DOSSIER_INDEX_FILENAME: str
        DOSSIER_VERBOSITY: quiet/normal/verbose
    """
    type_hints = get_type_hints(DossierConfig)

    result: dict[str, Any] = {}

    for field_name in DossierConfig.__dataclass_fields__:
        env_key = f"DOSSIER_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise DossierError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    # String (including Literal types like Verbosity)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        # Fallback to tomli for Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        data = tomllib.load(f)
    # Settings may live at the top level or under [dossier]
    return data.get("dossier", data)


# ── Path prefixes ──────────────────────────────────────────────────


def common_prefix(paths: Iterable[PurePosixPath]) -> PurePosixPath:
    """Longest directory-wise common prefix of ``paths``."""
    parts_list = [PurePosixPath(p).parts for p in paths]
    if not parts_list:
        return PurePosixPath(".")
    shared: list[str] = []
    for column in zip(*parts_list):
        if any(part != column[0] for part in column):
            break
        shared.append(column[0])
    return PurePosixPath(*shared) if shared else PurePosixPath(".")


def source_prefix_for(
    sources: Iterable[PurePosixPath], modules: Iterable[PurePosixPath] = ()
) -> PurePosixPath:
    """Prefix stripped from every rendered source file.

    When there is a single input, the common prefix is the file itself, so
    step up to its directory.
    """
    inputs = {PurePosixPath(p) for p in sources} | {PurePosixPath(p) for p in modules}
    prefix = common_prefix(inputs)
    if prefix in inputs:
        prefix = prefix.parent
    return prefix


def module_prefix_for(
    modules: Iterable[PurePosixPath], explicit: Optional[str] = None
) -> PurePosixPath:
    """Prefix stripped from every module path.

    Raises:
        InvalidConfigError: If an explicit prefix is not an ancestor of every module
    """
    modules = [PurePosixPath(m) for m in modules]
    if explicit is not None:
        prefix = PurePosixPath(explicit)
        for module in modules:
            if prefix not in module.parents:
                raise InvalidConfigError(
                    "module_prefix", explicit, f"not an ancestor of module {module}"
                )
        return prefix

    prefix = common_prefix(modules)
    if prefix in modules:
        prefix = prefix.parent
    return prefix
