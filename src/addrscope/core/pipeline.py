"""End-to-end target resolution."""

import logging

from addrscope.core.exceptions import TargetFileReadError, UnresolvedTargetError
from addrscope.core.models import IPAddress, TargetOptions, TargetReport
from addrscope.core.resolver.hostname import HostnameResolver
from addrscope.core.resolver.provider import ResolverHandle, build_resolver
from addrscope.core.targets.aggregate import aggregate_with_stats
from addrscope.core.targets.classifier import TargetClassifier
from addrscope.core.targets.exclusions import build_exclusions
from addrscope.core.targets.loader import load_file
from addrscope.core.warnings import LoggingWarningSink, WarningSink

logger = logging.getLogger(__name__)


def resolve_targets(
    options: TargetOptions,
    sink: WarningSink | None = None,
    resolver: ResolverHandle | None = None,
    hostname_resolver: HostnameResolver | None = None,
) -> TargetReport:
    """
    Resolve every target token into the final, ordered scan list.

    Tokens that are IPs, CIDR blocks or hostnames are resolved first, in
    input order. Tokens that resolve to nothing are then tried as target
    files; each one that is neither produces a single warning. Duplicates and
    excluded addresses are removed last.
    """
    if sink is None:
        sink = LoggingWarningSink()
    if resolver is None:
        resolver = build_resolver(options.resolver)
    if hostname_resolver is None:
        hostname_resolver = HostnameResolver.for_handle(resolver)

    classifier = TargetClassifier(hostname_resolver)
    direct: list[IPAddress] = []
    pending: list[str] = []

    for token in options.addresses:
        addresses = classifier.classify(token)
        if addresses:
            direct.extend(addresses)
        else:
            pending.append(token)

    from_files: list[IPAddress] = []
    unresolved: list[str] = []

    for token in pending:
        try:
            from_files.extend(load_file(token, classifier))
        except (UnresolvedTargetError, TargetFileReadError) as e:
            logger.debug("Giving up on %r: %s", token, e)
            sink.warn(str(UnresolvedTargetError(token)))
            unresolved.append(token)

    exclusions = build_exclusions(options.exclude_addresses, hostname_resolver)
    addresses, duplicates, excluded = aggregate_with_stats(direct, from_files, exclusions)

    logger.info(
        "Resolved %d addresses (%d duplicates, %d excluded, %d unresolved)",
        len(addresses),
        duplicates,
        excluded,
        len(unresolved),
    )

    # addresses are ipaddress objects already, skip re-validation
    return TargetReport.model_construct(
        addresses=addresses,
        unresolved=unresolved,
        duplicates_removed=duplicates,
        excluded_removed=excluded,
        resolver_origin=resolver.origin,
    )


def parse_addresses(
    options: TargetOptions,
    sink: WarningSink | None = None,
    resolver: ResolverHandle | None = None,
) -> list[IPAddress]:
    """Ordered, duplicate-free, exclusion-filtered addresses for options."""
    return resolve_targets(options, sink=sink, resolver=resolver).addresses
