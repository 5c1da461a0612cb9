"""Exclusion networks built from CIDRs, IPs and hostnames."""

import logging
from ipaddress import IPv4Network, IPv6Network, ip_network
from typing import Iterable, Iterator, Sequence

from addrscope.core.models import IPAddress
from addrscope.core.resolver.hostname import HostnameResolver
from addrscope.core.resolver.provider import ResolverHandle
from addrscope.core.targets.classifier import parse_cidr, parse_ip

logger = logging.getLogger(__name__)

Network = IPv4Network | IPv6Network


class ExclusionSet:
    """Immutable collection of networks used for containment tests."""

    __slots__ = ("_networks",)

    def __init__(self, networks: Iterable[Network] = ()):
        self._networks = frozenset(networks)

    def contains(self, address: IPAddress) -> bool:
        return any(address in network for network in self._networks)

    def __contains__(self, address: object) -> bool:
        return self.contains(address)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[Network]:
        return iter(self._networks)

    def __len__(self) -> int:
        return len(self._networks)

    def __bool__(self) -> bool:
        return bool(self._networks)

    def __repr__(self) -> str:
        return f"ExclusionSet({sorted(str(n) for n in self._networks)})"


def parse_exclusion(spec: str, hostname_resolver: HostnameResolver) -> list[Network]:
    """
    CIDR, then single IP, then hostname (one host network per address).

    CIDR specs with host bits set are accepted: 192.168.0.1/30 excludes
    192.168.0.0/30 rather than being dropped as malformed.
    """
    spec = spec.strip()
    if not spec:
        return []

    network = parse_cidr(spec)
    if network is not None:
        return [network]

    ip = parse_ip(spec)
    if ip is not None:
        return [ip_network(ip)]

    return [ip_network(addr) for addr in hostname_resolver.resolve(spec)]


def build_exclusions(
    specs: Sequence[str] | None,
    resolver: ResolverHandle | HostnameResolver,
) -> ExclusionSet:
    """Parse exclusion specs. Specs that cannot be parsed are dropped."""
    if not specs:
        return ExclusionSet()

    if isinstance(resolver, HostnameResolver):
        hostname_resolver = resolver
    else:
        hostname_resolver = HostnameResolver.for_handle(resolver)

    networks: list[Network] = []
    for spec in specs:
        parsed = parse_exclusion(spec, hostname_resolver)
        if not parsed:
            logger.debug("Dropping exclusion %r", spec)
        networks.extend(parsed)

    return ExclusionSet(networks)
