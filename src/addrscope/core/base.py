"""Abstract base classes defining lookup interfaces."""

from abc import ABC, abstractmethod

from addrscope.core.models import IPAddress


class BaseLookupStrategy(ABC):
    """One way of turning a hostname into addresses.

    Implementations never raise for lookup failures; they return an empty
    list instead so that strategies can be chained.
    """

    name: str

    @abstractmethod
    def lookup(self, hostname: str) -> list[IPAddress]:
        """Resolve hostname to zero or more addresses."""
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
