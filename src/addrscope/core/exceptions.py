"""Exception hierarchy for target resolution."""

from pathlib import Path


class AddrScopeError(Exception):
    """Base class for all addrscope errors."""


class UnresolvedTargetError(AddrScopeError):
    """A token is not an IP, a CIDR block, a resolvable hostname or a file."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Host {token!r} could not be resolved.")


class TargetFileNotFound(UnresolvedTargetError):
    """The fallback file path does not point at a regular file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(str(path))


class TargetFileReadError(AddrScopeError):
    """A target file exists but could not be opened or read."""

    def __init__(self, path: str | Path, cause: OSError):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not read target file {str(path)!r}: {cause}")


class ResolverConstructionError(AddrScopeError):
    """The fallback DNS resolver could not be built."""
