"""DNS resolver construction.

A resolver is built once per run and then only read. The source, when given,
is either a file with one nameserver IP per line or a comma-separated list of
nameserver IPs. Without a source the OS resolver configuration is used, and
when that is unavailable a public DNS-over-TLS resolver takes over.
"""

import logging
import socket
from ipaddress import ip_address
from pathlib import Path

import dns.nameserver
import dns.resolver

from addrscope.config import Settings, get_settings
from addrscope.core.exceptions import ResolverConstructionError
from addrscope.core.models import (
    IPAddress,
    NameserverEndpoint,
    ResolverOrigin,
    TransportProtocol,
)

logger = logging.getLogger(__name__)

DNS_PORT = 53
DOT_PORT = 853

CLOUDFLARE_TLS_NAME = "cloudflare-dns.com"
CLOUDFLARE_ADDRESSES = (
    "1.1.1.1",
    "1.0.0.1",
    "2606:4700:4700::1111",
    "2606:4700:4700::1001",
)


class ResolverHandle:
    """Read-only wrapper around a configured dnspython resolver."""

    __slots__ = ("_resolver", "_origin", "_nameservers")

    def __init__(
        self,
        resolver: dns.resolver.Resolver,
        origin: ResolverOrigin,
        nameservers: tuple[NameserverEndpoint, ...] = (),
    ):
        self._resolver = resolver
        self._origin = origin
        self._nameservers = tuple(nameservers)

    @property
    def origin(self) -> ResolverOrigin:
        return self._origin

    @property
    def nameservers(self) -> tuple[NameserverEndpoint, ...]:
        return self._nameservers

    def lookup(self, hostname: str) -> list[IPAddress]:
        """Return every A and AAAA answer for hostname.

        Raises dns.exception.DNSException when the name cannot be resolved.
        """
        answer = self._resolver.resolve_name(hostname, family=socket.AF_UNSPEC)
        return [ip_address(addr) for addr in answer.addresses()]

    def describe(self) -> str:
        servers = ", ".join(str(ns) for ns in self._nameservers) or "none"
        return f"{self._origin.value} resolver ({servers})"

    def __repr__(self) -> str:
        return f"<ResolverHandle {self.describe()}>"


# ============================================================================
# Source Parsing
# ============================================================================


def read_resolver_file(path: str | Path) -> list[IPAddress]:
    """Read one nameserver IP per line, skipping lines that do not parse.

    Raises OSError when the file cannot be opened or read.
    """
    ips: list[IPAddress] = []
    for line in Path(path).read_text().splitlines():
        try:
            ips.append(ip_address(line.strip()))
        except ValueError:
            continue
    return ips


def parse_resolver_list(text: str) -> list[IPAddress]:
    """Parse a comma-separated list of nameserver IPs, skipping failures."""
    ips: list[IPAddress] = []
    for part in text.split(","):
        try:
            ips.append(ip_address(part.strip()))
        except ValueError:
            logger.debug("Ignoring resolver entry %r", part)
    return ips


def nameservers_from_source(source: str) -> list[IPAddress]:
    """Treat source as a file first, then as a comma-separated list."""
    try:
        return read_resolver_file(source)
    except (OSError, ValueError):
        return parse_resolver_list(source)


# ============================================================================
# Resolver Construction
# ============================================================================


def _apply_limits(resolver: dns.resolver.Resolver, settings: Settings) -> None:
    resolver.timeout = settings.dns_timeout
    resolver.lifetime = settings.dns_lifetime


def _custom_resolver(ips: list[IPAddress], settings: Settings) -> ResolverHandle:
    resolver = dns.resolver.Resolver(configure=False)
    resolver.nameservers = [dns.nameserver.Do53Nameserver(str(ip), DNS_PORT) for ip in ips]
    _apply_limits(resolver, settings)
    endpoints = tuple(NameserverEndpoint(address=ip, port=DNS_PORT) for ip in ips)
    return ResolverHandle(resolver, ResolverOrigin.CUSTOM, endpoints)


def _endpoint_from(
    nameserver: str | dns.nameserver.Nameserver, default_port: int
) -> NameserverEndpoint | None:
    if isinstance(nameserver, str):
        address, port, protocol, tls_name = nameserver, default_port, TransportProtocol.UDP, None
    elif isinstance(nameserver, dns.nameserver.DoTNameserver):
        address, port = nameserver.address, nameserver.port
        protocol, tls_name = TransportProtocol.TLS, nameserver.hostname
    elif isinstance(nameserver, dns.nameserver.Do53Nameserver):
        address, port, protocol, tls_name = (
            nameserver.address,
            nameserver.port,
            TransportProtocol.UDP,
            None,
        )
    else:
        return None

    try:
        return NameserverEndpoint(
            address=ip_address(address), port=port, protocol=protocol, tls_name=tls_name
        )
    except ValueError:
        return None


def _system_resolver(settings: Settings) -> ResolverHandle:
    resolver = dns.resolver.Resolver(configure=True)
    _apply_limits(resolver, settings)
    endpoints = tuple(
        ep
        for ep in (_endpoint_from(ns, resolver.port) for ns in resolver.nameservers)
        if ep is not None
    )
    return ResolverHandle(resolver, ResolverOrigin.SYSTEM, endpoints)


def _public_resolver(settings: Settings) -> ResolverHandle:
    try:
        resolver = dns.resolver.Resolver(configure=False)
        resolver.nameservers = [
            dns.nameserver.DoTNameserver(addr, DOT_PORT, hostname=CLOUDFLARE_TLS_NAME)
            for addr in CLOUDFLARE_ADDRESSES
        ]
        _apply_limits(resolver, settings)
    except Exception as e:
        raise ResolverConstructionError(f"Could not build public fallback resolver: {e}") from e

    endpoints = tuple(
        NameserverEndpoint(
            address=ip_address(addr),
            port=DOT_PORT,
            protocol=TransportProtocol.TLS,
            tls_name=CLOUDFLARE_TLS_NAME,
        )
        for addr in CLOUDFLARE_ADDRESSES
    )
    return ResolverHandle(resolver, ResolverOrigin.PUBLIC, endpoints)


def build_resolver(source: str | None = None, settings: Settings | None = None) -> ResolverHandle:
    """
    Build the resolver used for hostname fallback.

    1. With a source: nameserver IPs from the file it names, or from the
       comma-separated list it holds, each on port 53 over UDP.
    2. Without a source, or when the source yields no nameserver: the OS
       resolver configuration (e.g. /etc/resolv.conf).
    3. Finally, Cloudflare over DNS-over-TLS.

    Only a failure in step 3 raises (ResolverConstructionError).
    """
    settings = settings or get_settings()

    if source:
        ips = nameservers_from_source(source)
        if ips:
            handle = _custom_resolver(ips, settings)
            logger.debug("Using %s", handle.describe())
            return handle
        logger.warning("No nameserver could be parsed from %r, using default resolver", source)

    try:
        handle = _system_resolver(settings)
    except (dns.resolver.NoResolverConfiguration, OSError) as e:
        logger.info("System resolver configuration unavailable (%s), using public resolver", e)
        handle = _public_resolver(settings)

    logger.debug("Using %s", handle.describe())
    return handle
