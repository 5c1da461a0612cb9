"""Merge resolved addresses into the final scan list."""

from typing import Iterable

from addrscope.core.models import IPAddress
from addrscope.core.targets.exclusions import ExclusionSet


def aggregate_with_stats(
    direct_results: Iterable[IPAddress],
    file_results: Iterable[IPAddress],
    exclusions: ExclusionSet | None = None,
) -> tuple[list[IPAddress], int, int]:
    """Same as aggregate, also returning (duplicates, excluded) counts."""
    if exclusions is None:
        exclusions = ExclusionSet()
    seen: set[IPAddress] = set()
    kept: list[IPAddress] = []
    duplicates = excluded = 0

    for source in (direct_results, file_results):
        for ip in source:
            if ip in seen:
                duplicates += 1
                continue
            seen.add(ip)
            if exclusions.contains(ip):
                excluded += 1
                continue
            kept.append(ip)

    return kept, duplicates, excluded


def aggregate(
    direct_results: Iterable[IPAddress],
    file_results: Iterable[IPAddress],
    exclusions: ExclusionSet | None = None,
) -> list[IPAddress]:
    """
    Direct results then file results, first occurrence wins, excluded
    addresses dropped. Encounter order is preserved.
    """
    return aggregate_with_stats(direct_results, file_results, exclusions)[0]
