"""
Logging configuration for Dossier.

Log records go to stderr through rich so they never interleave with a
navigation index or a resolve table written to stdout.

Records routinely quote raw references such as ``Array<string>[]`` or
quoted module prefixes, so rich markup is switched off in the handler:
square brackets in a message are printed as they are instead of being
read as style tags. ``force=True`` replaces handlers left by an earlier
command run in the same process.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False, quiet: bool = False, log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to

    Returns:
        Configured logger instance for dossier
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    console = Console(stderr=True)

    handlers: list[logging.Handler] = [
        RichHandler(
            console=console,
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger("dossier")
    logger.setLevel(level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'dossier.layout.paths')
              If None, returns the root dossier logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger("dossier")

    if not name.startswith("dossier"):
        name = f"dossier.{name}"

    return logging.getLogger(name)
