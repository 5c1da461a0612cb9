"""Load targets from a file, one token per line."""

import logging
from pathlib import Path

from addrscope.core.exceptions import TargetFileNotFound, TargetFileReadError
from addrscope.core.models import IPAddress
from addrscope.core.resolver.provider import ResolverHandle
from addrscope.core.targets.classifier import TargetClassifier

logger = logging.getLogger(__name__)


def load_file(
    path: str | Path,
    resolver: ResolverHandle | TargetClassifier,
) -> list[IPAddress]:
    """
    Classify every line of a target file, in file order.

    Each non-blank line may be an IP, a CIDR block or a hostname. Lines are
    never treated as further file paths. Lines that do not resolve, lines
    starting with '#', and lines that are not valid UTF-8 contribute nothing.

    Raises:
        TargetFileNotFound: path is not an existing regular file.
        TargetFileReadError: the file could not be opened or read.
    """
    path = Path(path)
    if isinstance(resolver, TargetClassifier):
        classifier = resolver
    else:
        classifier = TargetClassifier.for_handle(resolver)

    try:
        is_file = path.is_file()
    except (OSError, ValueError):
        is_file = False
    if not is_file:
        raise TargetFileNotFound(path)

    addresses: list[IPAddress] = []
    try:
        with path.open("rb") as fh:
            for lineno, raw in enumerate(fh, 1):
                try:
                    line = raw.decode("utf-8").strip()
                except UnicodeDecodeError:
                    logger.debug("%s:%d is not valid UTF-8, skipping", path, lineno)
                    continue

                if not line or line.startswith("#"):
                    continue

                addresses.extend(classifier.classify(line))
    except OSError as e:
        raise TargetFileReadError(path, e) from e

    logger.info("Loaded %d addresses from %s", len(addresses), path)
    return addresses
