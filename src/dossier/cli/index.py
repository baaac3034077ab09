"""Index command: writes the navigation index for an entity graph."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..exceptions import DossierError
from ..index.type_index import build_index
from ..logging_config import setup_logging
from . import app
from ._common import console, open_session, resolve_config


@app.command()
def index(
    graph: Path = typer.Argument(
        ...,
        help="Entity graph (JSON) exported by the analysis front end",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output root directory",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Write plain JSON (types.json) instead of a page script",
    ),
    elide_index: Optional[bool] = typer.Option(
        None,
        "--elide-index/--no-elide-index",
        help="Store foo/bar/index.js as module/foo_bar.html when unambiguous",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress logging"),
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
    Plan the output layout and write the navigation index.

    [bold cyan]Examples:[/bold cyan]

      dossier index graph.json --output build/docs

      dossier index graph.json --json
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config, output=output, elide_index=elide_index, verbose=verbose, quiet=quiet
        )
        registry, layout, links = open_session(graph, settings)
        type_index = build_index(registry, layout, links)

        out_dir = Path(settings.output_root)
        out_dir.mkdir(parents=True, exist_ok=True)
        if as_json:
            target = out_dir / "types.json"
            target.write_text(type_index.to_json(indent=2), encoding="utf-8")
        else:
            target = out_dir / settings.index_filename
            target.write_text(type_index.to_script(), encoding="utf-8")
        logger.debug("Wrote %s", target)

        document = type_index.to_dict()
        if settings.verbosity != "quiet":
            console.print(
                f"[green]Indexed {len(document['modules'])} modules and "
                f"{len(document['types'])} types[/green] -> {target}"
            )
    except DossierError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
