"""
Composer fork status reporting.

Correlates the VCS forks declared in composer.json with their dependencies,
branch activity and upstream pull requests.
"""

from .aggregator import ForkStatusAggregator
from .config import ForkStatusConfig
from .core import ForkStatusReporter
from .data_models import ForkEntry, ForkStatusReport, MatchResult, StatusRow
from .manifest import ComposerManifest, ForkStatusError, ManifestError

__all__ = [
    "ForkStatusAggregator",
    "ForkStatusConfig",
    "ForkStatusReporter",
    "ForkEntry",
    "ForkStatusReport",
    "MatchResult",
    "StatusRow",
    "ComposerManifest",
    "ForkStatusError",
    "ManifestError",
]
