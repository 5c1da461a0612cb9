"""Tests for end-to-end target resolution."""

from ipaddress import ip_address

import pytest

from addrscope.core import pipeline
from addrscope.core.exceptions import ResolverConstructionError
from addrscope.core.models import ResolverOrigin, TargetOptions
from addrscope.core.pipeline import parse_addresses, resolve_targets
from addrscope.core.warnings import CollectingWarningSink


def run(fake_handle, addresses, exclude=None):
    sink = CollectingWarningSink()
    options = TargetOptions(addresses=addresses, exclude_addresses=exclude)
    report = resolve_targets(options, sink=sink, resolver=fake_handle)
    return report, sink


class TestParseAddresses:
    """Tests covering the documented pipeline behaviour."""

    def test_correct_addresses(self, fake_handle):
        report, sink = run(fake_handle, ["127.0.0.1", "192.168.0.0/30"])

        assert [str(ip) for ip in report.addresses] == [
            "127.0.0.1",
            "192.168.0.0",
            "192.168.0.1",
            "192.168.0.2",
            "192.168.0.3",
        ]
        assert sink.messages == []

    def test_host_exclusion(self, fake_handle):
        report, _ = run(fake_handle, ["192.168.0.0/30"], exclude=["192.168.0.1"])
        assert [str(ip) for ip in report.addresses] == ["192.168.0.0", "192.168.0.2", "192.168.0.3"]
        assert report.excluded_removed == 1

    def test_cidr_exclusion(self, fake_handle):
        report, _ = run(fake_handle, ["192.168.0.0/29"], exclude=["192.168.0.0/30"])
        assert [str(ip) for ip in report.addresses] == [
            "192.168.0.4",
            "192.168.0.5",
            "192.168.0.6",
            "192.168.0.7",
        ]

    def test_hostname_exclusion(self, fake_handle):
        report, _ = run(fake_handle, ["192.168.0.0/30"], exclude=["router.test"])
        assert ip_address("192.168.0.1") not in report.addresses
        assert len(report.addresses) == 3

    def test_invalid_exclusion_ignored(self, fake_handle):
        report, sink = run(fake_handle, ["192.168.0.0/30"], exclude=["im_wrong"])
        assert len(report.addresses) == 4
        assert sink.messages == []

    def test_hostname_target(self, fake_handle):
        report, _ = run(fake_handle, ["scanme.test"])
        assert report.addresses == [ip_address("10.0.0.5")]

    def test_correct_and_incorrect_addresses(self, fake_handle):
        report, sink = run(fake_handle, ["127.0.0.1", "im_wrong"])

        assert report.addresses == [ip_address("127.0.0.1")]
        assert sink.messages == ["Host 'im_wrong' could not be resolved."]
        assert report.unresolved == ["im_wrong"]

    def test_incorrect_addresses(self, fake_handle):
        report, sink = run(fake_handle, ["im_wrong", "300.10.1.1"])

        assert report.addresses == []
        assert len(sink.messages) == 2
        assert report.unresolved == ["im_wrong", "300.10.1.1"]

    def test_duplicate_cidrs(self, fake_handle):
        report, _ = run(fake_handle, ["79.98.104.0/21", "79.98.104.0/24"])

        assert len(report.addresses) == 2048
        assert report.duplicates_removed == 256

    def test_overspecific_cidr(self, fake_handle):
        report, _ = run(fake_handle, ["192.128.1.1/24"])
        assert len(report.addresses) == 256

    def test_hosts_file(self, fake_handle, hosts_file):
        report, sink = run(fake_handle, [str(hosts_file)])

        assert [str(ip) for ip in report.addresses] == ["127.0.0.1", "10.0.0.5", "10.0.0.9"]
        assert sink.messages == []

    def test_empty_hosts_file(self, fake_handle, empty_file):
        report, sink = run(fake_handle, [str(empty_file)])

        assert report.addresses == []
        assert sink.messages == []

    def test_naughty_host_file(self, fake_handle, naughty_file):
        report, sink = run(fake_handle, [str(naughty_file)])

        assert report.addresses == []
        assert sink.messages == []

    def test_direct_tokens_precede_file_tokens(self, fake_handle, tmp_path):
        path = tmp_path / "targets.txt"
        path.write_text("10.0.0.50\n10.0.0.1\n")

        report, _ = run(fake_handle, [str(path), "10.0.0.1", "10.0.0.2"])

        assert [str(ip) for ip in report.addresses] == ["10.0.0.1", "10.0.0.2", "10.0.0.50"]
        assert report.duplicates_removed == 1

    def test_files_in_token_order(self, fake_handle, tmp_path):
        first = tmp_path / "first.txt"
        first.write_text("10.0.1.1\n")
        second = tmp_path / "second.txt"
        second.write_text("10.0.2.1\n")

        report, _ = run(fake_handle, [str(second), str(first)])

        assert [str(ip) for ip in report.addresses] == ["10.0.2.1", "10.0.1.1"]

    def test_unreadable_file_warns_once(self, fake_handle, hosts_file, monkeypatch):
        from pathlib import Path

        def deny(self, *args, **kwargs):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "open", deny)

        report, sink = run(fake_handle, [str(hosts_file)])

        assert report.addresses == []
        assert sink.messages == [f"Host {str(hosts_file)!r} could not be resolved."]

    def test_report_origin(self, fake_handle):
        report, _ = run(fake_handle, ["10.0.0.1"])
        assert report.resolver_origin == ResolverOrigin.CUSTOM

    def test_parse_addresses_returns_list(self, fake_handle):
        options = TargetOptions(addresses=["10.0.0.1", "10.0.0.1"])
        assert parse_addresses(options, resolver=fake_handle) == [ip_address("10.0.0.1")]

    def test_default_sink_logs(self, fake_handle, caplog):
        options = TargetOptions(addresses=["im_wrong"])

        with caplog.at_level("WARNING", logger="addrscope"):
            assert parse_addresses(options, resolver=fake_handle) == []

        assert "Host 'im_wrong' could not be resolved." in caplog.text

    def test_empty_collecting_sink_receives_warnings(self, fake_handle):
        sink = CollectingWarningSink()

        resolve_targets(TargetOptions(addresses=["im_wrong"]), sink=sink, resolver=fake_handle)

        assert sink.messages == ["Host 'im_wrong' could not be resolved."]


class TestResolverLifecycle:
    """Tests for how the pipeline obtains its resolver."""

    def test_builds_resolver_once(self, fake_handle, monkeypatch):
        calls = []

        def fake_build(source):
            calls.append(source)
            return fake_handle

        monkeypatch.setattr(pipeline, "build_resolver", fake_build)
        options = TargetOptions(
            addresses=["scanme.test", "im_wrong"],
            resolver="8.8.8.8",
            exclude_addresses=["dual.test"],
        )

        resolve_targets(options, sink=CollectingWarningSink())

        assert calls == ["8.8.8.8"]

    def test_resolver_construction_failure_propagates(self, monkeypatch):
        def boom(source):
            raise ResolverConstructionError("no resolver")

        monkeypatch.setattr(pipeline, "build_resolver", boom)

        with pytest.raises(ResolverConstructionError):
            resolve_targets(TargetOptions(addresses=["10.0.0.1"]))
