"""Pytest configuration and fixtures."""

import socket
from ipaddress import ip_address
from unittest.mock import MagicMock

import dns.resolver
import pytest

from addrscope.core.base import BaseLookupStrategy
from addrscope.core.models import NameserverEndpoint, ResolverOrigin
from addrscope.core.resolver.hostname import HostnameResolver
from addrscope.core.resolver.provider import ResolverHandle
from addrscope.core.targets.classifier import TargetClassifier

KNOWN_HOSTS = {
    "scanme.test": ["10.0.0.5"],
    "dual.test": ["10.0.0.7", "fd00::7"],
    "router.test": ["192.168.0.1"],
}


class RecordingStrategy(BaseLookupStrategy):
    """Lookup strategy backed by a dict, remembering every query."""

    def __init__(self, name: str, answers: dict[str, list[str]]):
        self.name = name
        self.answers = answers
        self.calls: list[str] = []

    def lookup(self, hostname):
        self.calls.append(hostname)
        return [ip_address(a) for a in self.answers.get(hostname, [])]


def _fake_resolve_name(name, family=socket.AF_UNSPEC):
    if name not in KNOWN_HOSTS:
        raise dns.resolver.NXDOMAIN()
    answer = MagicMock()
    answer.addresses.return_value = list(KNOWN_HOSTS[name])
    return answer


@pytest.fixture(autouse=True)
def no_system_lookup(monkeypatch):
    """Make the OS lookup fail so no test depends on real DNS."""

    def fail(*args, **kwargs):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr(socket, "getaddrinfo", fail)


@pytest.fixture
def fake_handle() -> ResolverHandle:
    """Resolver handle answering only for KNOWN_HOSTS."""
    resolver = MagicMock(spec=dns.resolver.Resolver)
    resolver.resolve_name.side_effect = _fake_resolve_name
    return ResolverHandle(
        resolver,
        ResolverOrigin.CUSTOM,
        (NameserverEndpoint(address=ip_address("192.0.2.53")),),
    )


@pytest.fixture
def hostname_resolver(fake_handle) -> HostnameResolver:
    return HostnameResolver.for_handle(fake_handle)


@pytest.fixture
def classifier(hostname_resolver) -> TargetClassifier:
    return TargetClassifier(hostname_resolver)


@pytest.fixture
def hosts_file(tmp_path):
    """Target file with valid and invalid IPs and hostnames."""
    path = tmp_path / "hosts.txt"
    path.write_text("127.0.0.1\nscanme.test\n999.999.999.999\nim_wrong.invalid\n\n10.0.0.9\n")
    return path


@pytest.fixture
def empty_file(tmp_path):
    path = tmp_path / "empty_hosts.txt"
    path.write_text("")
    return path


@pytest.fixture
def naughty_file(tmp_path):
    """Target file full of hostile strings that must not resolve."""
    path = tmp_path / "naughty_string.txt"
    path.write_text(
        "\n".join(
            [
                "undefined",
                "../../../../etc/passwd",
                "<script>alert(1)</script>",
                "' OR 1=1 --",
                "%00",
                "‮test‮",
                "\u0000",
                "1.2.3.4/99",
                "::::::",
                "$HOME",
            ]
        ),
        encoding="utf-8",
    )
    return path
