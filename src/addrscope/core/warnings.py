"""Warning side channel for targets that could not be resolved."""

import logging
from typing import Protocol

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("addrscope")


class WarningSink(Protocol):
    def warn(self, message: str) -> None:
        ...


class LoggingWarningSink:
    """Send warnings to the addrscope logger."""

    def warn(self, message: str) -> None:
        logger.warning(message)


class ConsoleWarningSink:
    """
    Print warnings to a rich console.

    Greppable mode prints nothing so that stdout stays machine-readable.
    Accessible mode prints the bare message without markup.
    """

    def __init__(self, console: Console, greppable: bool = False, accessible: bool = False):
        self.console = console
        self.greppable = greppable
        self.accessible = accessible

    def warn(self, message: str) -> None:
        logger.debug(message)
        if self.greppable:
            return
        if self.accessible:
            self.console.print(message, markup=False, highlight=False)
        else:
            self.console.print(f"[bold red][!][/] {escape(message)}")


class CollectingWarningSink:
    """Keep warnings in memory."""

    def __init__(self):
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)
