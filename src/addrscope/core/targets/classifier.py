"""Classify raw target tokens as IPs, CIDR blocks or hostnames."""

import logging
from ipaddress import IPv4Network, IPv6Network, ip_address, ip_network

from addrscope.core.models import IPAddress, TokenKind
from addrscope.core.resolver.hostname import HostnameResolver
from addrscope.core.resolver.provider import ResolverHandle

logger = logging.getLogger(__name__)


def parse_ip(token: str) -> IPAddress | None:
    """Strict IPv4/IPv6 literal, or None."""
    try:
        return ip_address(token)
    except ValueError:
        return None


def parse_cidr(token: str) -> IPv4Network | IPv6Network | None:
    """
    Parse address/prefix-length into the enclosing network.

    Host bits are allowed: 192.128.1.1/24 is the 192.128.1.0/24 block.
    """
    if "/" not in token:
        return None
    try:
        return ip_network(token, strict=False)
    except ValueError:
        return None


def expand_network(network: IPv4Network | IPv6Network) -> list[IPAddress]:
    """Every address of the block in ascending order, network and broadcast included."""
    return list(network)


class TargetClassifier:
    """
    Turns one token into the addresses it stands for.

    Order of interpretation: IP literal, CIDR block, hostname. A token that
    none of these produce addresses for is unresolved and yields an empty
    list; trying it as a file path is left to the caller.
    """

    def __init__(self, hostname_resolver: HostnameResolver):
        self.hostname_resolver = hostname_resolver

    @classmethod
    def for_handle(cls, handle: ResolverHandle) -> "TargetClassifier":
        return cls(HostnameResolver.for_handle(handle))

    def kind_of(self, token: str) -> TokenKind:
        """Syntactic kind of a token, without resolving anything."""
        token = token.strip()
        if not token:
            return TokenKind.UNRESOLVED
        if parse_ip(token) is not None:
            return TokenKind.IP
        if parse_cidr(token) is not None:
            return TokenKind.CIDR
        return TokenKind.HOSTNAME

    def classify(self, token: str) -> list[IPAddress]:
        token = token.strip()
        if not token:
            return []

        ip = parse_ip(token)
        if ip is not None:
            return [ip]

        network = parse_cidr(token)
        if network is not None:
            return expand_network(network)

        addresses = self.hostname_resolver.resolve(token)
        if not addresses:
            logger.debug("Token %r did not resolve", token)
        return addresses


def classify(token: str, handle: ResolverHandle) -> list[IPAddress]:
    """Classify a single token using the default lookup chain for handle."""
    return TargetClassifier.for_handle(handle).classify(token)
