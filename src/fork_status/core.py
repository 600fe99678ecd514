"""
Report generation over all forks of a manifest.
"""

import time

from ..shared_utilities import RateLimitManager, get_logger, trace_operation
from .aggregator import ForkStatusAggregator
from .config import ForkStatusConfig
from .data_models import ForkStatusReport
from .github_client import ForkMetadataClient
from .manifest import ComposerManifest
from .matcher import DependencyMatcher


class ForkStatusReporter:
    """Generates the fork status report for one composer.json."""

    def __init__(
        self,
        config: ForkStatusConfig,
        client: ForkMetadataClient | None = None,
    ):
        """Initialize reporter.

        Args:
            config: Operating parameters
            client: Metadata client (created from the config when omitted)
        """
        self.logger = get_logger(__name__)
        self.config = config
        self.client = client or ForkMetadataClient(
            token=config.token, timeout=config.timeout
        )
        self.rate_limit_manager = RateLimitManager()

    def load_manifest(self) -> ComposerManifest:
        return ComposerManifest.load(self.config.composer_path)

    def generate_report(self, manifest: ComposerManifest) -> ForkStatusReport:
        """Build one row per fork, in manifest order."""
        refs = self.config.candidate_refs
        matcher = DependencyMatcher(
            manifest.dependencies,
            package_name_lookup=lambda owner, repo: self.client.get_package_name(
                owner, repo, refs
            ),
        )
        aggregator = ForkStatusAggregator(
            self.client,
            manifest.dependencies,
            matcher=matcher,
            description_length=self.config.description_length,
        )

        self.logger.info(
            f"Checking {len(manifest.forks)} forks against "
            f"{len(manifest.dependencies)} dependencies"
        )

        start_time = time.time()
        report = ForkStatusReport(manifest_path=manifest.path)
        for index, fork in enumerate(manifest.forks, start=1):
            with trace_operation("fork_status.build_row", {"url": fork.url}):
                self.logger.debug(f"[{index}/{len(manifest.forks)}] {fork.url}")
                report.rows.append(aggregator.build_row(fork))

        report.metadata = {
            "fork_count": len(report.rows),
            "dependency_count": len(manifest.dependencies),
            "duration_seconds": round(time.time() - start_time, 2),
        }
        return report

    def log_rate_limit(self) -> None:
        self.rate_limit_manager.log_rate_limit_status(
            self.client.github, tool_name="fork-status"
        )
