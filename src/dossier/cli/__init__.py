"""CLI entry point: registers all subcommands."""

import typer

app = typer.Typer(
    name="dossier",
    help="Dossier - cross-linked API documentation layout for JavaScript",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .index import index as _index  # noqa: F401, E402
from .resolve import resolve as _resolve  # noqa: F401, E402
