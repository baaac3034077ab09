"""Resolve command: shows where references in comments would link to."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..exceptions import DossierError
from ..logging_config import setup_logging
from . import app
from ._common import console, open_session, resolve_config


@app.command()
def resolve(
    graph: Path = typer.Argument(
        ...,
        help="Entity graph (JSON) exported by the analysis front end",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    references: List[str] = typer.Argument(..., help="References such as Foo#bar"),
    module: Optional[str] = typer.Option(
        None,
        "--module",
        "-m",
        help="Resolve relative to this module (id or require name)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    Resolve references against an entity graph.

    Unresolved references are listed too; they would render as plain text.
    """
    setup_logging(verbose=verbose)

    try:
        settings = resolve_config(config=config, verbose=verbose)
        registry, layout, links = open_session(graph, settings)

        scope = None
        if module is not None:
            scope = registry.get_module(module)
            if scope is None:
                console.print(f"[red]Error:[/red] unknown module {escape(module)}")
                raise typer.Exit(1)

        table = Table(title="References")
        table.add_column("Reference", style="cyan")
        table.add_column("Resolves to")
        table.add_column("Link")

        for reference in references:
            target = links.resolver.resolve(reference, scope)
            link = links.link_reference(reference, scope)
            if target is None:
                table.add_row(reference, "[dim]unresolved[/dim]", "")
            else:
                table.add_row(reference, target.name, link.href if link else "[dim]-[/dim]")

        console.print(table)
    except DossierError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
