"""Core library modules for target parsing and resolution."""

from addrscope.core.models import (
    IPAddress,
    NameserverEndpoint,
    ResolverOrigin,
    TargetOptions,
    TargetReport,
    TokenKind,
    TransportProtocol,
)
from addrscope.core.pipeline import parse_addresses, resolve_targets

__all__ = [
    "IPAddress",
    "NameserverEndpoint",
    "ResolverOrigin",
    "TargetOptions",
    "TargetReport",
    "TokenKind",
    "TransportProtocol",
    "parse_addresses",
    "resolve_targets",
]
