"""Hostname resolution through an ordered chain of lookup strategies."""

import logging
import socket
from ipaddress import ip_address
from typing import Sequence

import dns.exception

from addrscope.config import get_settings
from addrscope.core.base import BaseLookupStrategy
from addrscope.core.models import IPAddress
from addrscope.core.resolver.provider import ResolverHandle

logger = logging.getLogger(__name__)


class SystemLookupStrategy(BaseLookupStrategy):
    """Platform lookup (getaddrinfo). Keeps the first address only."""

    name = "system"

    def __init__(self, port: int | None = None):
        self.port = port if port is not None else get_settings().lookup_port

    def lookup(self, hostname: str) -> list[IPAddress]:
        try:
            infos = socket.getaddrinfo(hostname, self.port, proto=socket.IPPROTO_TCP)
        except (OSError, ValueError) as e:
            logger.debug("System lookup of %r failed: %s", hostname, e)
            return []

        for _family, _type, _proto, _canonname, sockaddr in infos:
            try:
                return [ip_address(sockaddr[0])]
            except ValueError:
                continue
        return []


class NameserverLookupStrategy(BaseLookupStrategy):
    """Query the configured nameservers for every A/AAAA record."""

    name = "nameserver"

    def __init__(self, handle: ResolverHandle):
        self.handle = handle

    def lookup(self, hostname: str) -> list[IPAddress]:
        try:
            return self.handle.lookup(hostname)
        except (dns.exception.DNSException, ValueError) as e:
            logger.debug("Nameserver lookup of %r failed: %s", hostname, e)
            return []


class HostnameResolver:
    """
    Resolve hostnames by trying each strategy in order.

    The first strategy to return a non-empty result wins. Nothing is raised:
    a name that no strategy can resolve yields an empty list.
    """

    def __init__(self, strategies: Sequence[BaseLookupStrategy]):
        self.strategies = tuple(strategies)

    @classmethod
    def for_handle(cls, handle: ResolverHandle) -> "HostnameResolver":
        """OS lookup first, then the explicit resolver."""
        return cls([SystemLookupStrategy(), NameserverLookupStrategy(handle)])

    def resolve(self, hostname: str) -> list[IPAddress]:
        for strategy in self.strategies:
            addresses = strategy.lookup(hostname)
            if addresses:
                logger.debug("%s resolved %r via %s", hostname, addresses, strategy.name)
                return addresses
        return []


def resolve_hostname(hostname: str, handle: ResolverHandle) -> list[IPAddress]:
    """Resolve hostname with the default strategy chain."""
    return HostnameResolver.for_handle(handle).resolve(hostname)
