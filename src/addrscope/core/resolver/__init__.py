"""DNS resolver construction and hostname lookup."""

from addrscope.core.resolver.hostname import (
    HostnameResolver,
    NameserverLookupStrategy,
    SystemLookupStrategy,
    resolve_hostname,
)
from addrscope.core.resolver.provider import ResolverHandle, build_resolver

__all__ = [
    "HostnameResolver",
    "NameserverLookupStrategy",
    "ResolverHandle",
    "SystemLookupStrategy",
    "build_resolver",
    "resolve_hostname",
]
