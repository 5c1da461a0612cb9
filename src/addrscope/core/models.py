"""Core data models for addrscope."""

from enum import Enum
from ipaddress import IPv4Address, IPv6Address

from pydantic import BaseModel, ConfigDict, Field

IPAddress = IPv4Address | IPv6Address


class TransportProtocol(str, Enum):
    """Transport used to reach a nameserver."""

    UDP = "udp"
    TCP = "tcp"
    TLS = "tls"


class ResolverOrigin(str, Enum):
    """Where the resolver configuration came from."""

    CUSTOM = "custom"
    SYSTEM = "system"
    PUBLIC = "public"


class TokenKind(str, Enum):
    """Classification of a raw target token."""

    IP = "ip"
    CIDR = "cidr"
    HOSTNAME = "hostname"
    FILE = "file"
    UNRESOLVED = "unresolved"


# ============================================================================
# Resolver Models
# ============================================================================


class NameserverEndpoint(BaseModel):
    """Single nameserver the resolver talks to."""

    model_config = ConfigDict(frozen=True)

    address: IPAddress
    port: int = Field(default=53, description="Nameserver port")
    protocol: TransportProtocol = Field(default=TransportProtocol.UDP)
    tls_name: str | None = Field(default=None, description="TLS server name for tls endpoints")

    def __str__(self) -> str:
        host = f"[{self.address}]" if self.address.version == 6 else str(self.address)
        return f"{host}:{self.port}/{self.protocol.value}"


# ============================================================================
# Pipeline Models
# ============================================================================


class TargetOptions(BaseModel):
    """Inputs handed over by the CLI or config layer."""

    addresses: list[str] = Field(default_factory=list, description="Raw target tokens")
    resolver: str | None = Field(
        default=None, description="Resolver file path or comma-separated nameserver IPs"
    )
    exclude_addresses: list[str] | None = Field(
        default=None, description="CIDRs, IPs or hostnames to leave out"
    )
    greppable: bool = Field(default=False, description="Suppress decorated warnings")
    accessible: bool = Field(default=False, description="Plain-text warnings")


class TargetReport(BaseModel):
    """Outcome of one pipeline run."""

    addresses: list[IPAddress] = Field(default_factory=list)
    unresolved: list[str] = Field(default_factory=list)
    duplicates_removed: int = 0
    excluded_removed: int = 0
    resolver_origin: ResolverOrigin | None = None

    @property
    def total(self) -> int:
        return len(self.addresses)

    def as_dict(self) -> dict:
        """JSON-friendly representation."""
        return {
            "addresses": [str(ip) for ip in self.addresses],
            "unresolved": list(self.unresolved),
            "duplicates_removed": self.duplicates_removed,
            "excluded_removed": self.excluded_removed,
            "resolver_origin": self.resolver_origin.value if self.resolver_origin else None,
        }
