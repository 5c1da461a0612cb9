"""Logging setup for the command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from addrscope.config import get_settings


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Route the root logger through rich on stderr."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(get_settings().log_level)
        if not isinstance(level, int):
            level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        rich_tracebacks=debug,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(handler)
