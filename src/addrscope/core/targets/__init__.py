"""Target classification, file loading, exclusions and aggregation."""

from addrscope.core.targets.aggregate import aggregate, aggregate_with_stats
from addrscope.core.targets.classifier import TargetClassifier, classify
from addrscope.core.targets.exclusions import ExclusionSet, build_exclusions
from addrscope.core.targets.loader import load_file

__all__ = [
    "ExclusionSet",
    "TargetClassifier",
    "aggregate",
    "aggregate_with_stats",
    "build_exclusions",
    "classify",
    "load_file",
]
