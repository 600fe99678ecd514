"""
Per-fork status row assembly.
"""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone

from ..shared_utilities import get_logger
from .data_models import NO_PR, PLACEHOLDER, ForkEntry, StatusRow
from .formatting import relative_time, truncate
from .github_client import ForkMetadataClient
from .matcher import DependencyMatcher, ForkContext
from .repository_url import RepositoryRef, normalize_github_url
from .version_constraint import encode_branch, parse_branch

logger = get_logger(__name__)


class ForkStatusAggregator:
    """
    Builds the status row of a single fork.

    For each fork: match it to a dependency, read the branch from the
    dependency's constraint, then look up branch age, the open pull request
    from that branch, its merge status and the repository description.
    Failed lookups degrade to placeholders; build_row never raises.
    """

    def __init__(
        self,
        client: ForkMetadataClient,
        dependencies: Mapping[str, str],
        matcher: DependencyMatcher | None = None,
        clock: Callable[[], datetime] | None = None,
        description_length: int = 25,
    ):
        self.client = client
        self.dependencies = dependencies
        self.matcher = matcher or DependencyMatcher(
            dependencies, package_name_lookup=client.get_package_name
        )
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.description_length = description_length

    def build_row(self, fork: ForkEntry) -> StatusRow:
        """Produce the status row for one fork."""
        context = ForkContext.from_fork(fork)
        partial = self._placeholder_row(context)
        try:
            return self._build_row(context, partial)
        except Exception as e:
            logger.warning(
                f"Unexpected error building status for {fork.url}: "
                f"{type(e).__name__}: {e}"
            )
            # Only the description survives a failure part way through
            return self._placeholder_row(context, partial.description)

    def _placeholder_row(
        self, context: ForkContext, description: str = PLACEHOLDER
    ) -> StatusRow:
        return StatusRow(
            display_name=context.display_name,
            repo_url=normalize_github_url(context.url),
            description=description,
        )

    def _build_row(self, context: ForkContext, partial: StatusRow) -> StatusRow:
        logger.debug(
            f"Processing {context.url} (owner={context.owner}, "
            f"name={context.display_name})"
        )
        match = self.matcher.match(context)

        repository = context.repository
        if repository is None:
            logger.warning(f"Could not determine owner/repository from {context.url}")
            return self._placeholder_row(context)

        description = self.fetch_description(repository)
        partial.description = description

        if match is None:
            return self._placeholder_row(context, description)

        branch = parse_branch(match.constraint)
        if branch is None:
            logger.debug(
                f"{match.package} uses '{match.constraint}', not a dev- branch constraint"
            )
            row = self._placeholder_row(context, description)
            row.package = match.package
            return row

        fork_pr, merged = self.fetch_pull_request_status(repository, branch)
        return StatusRow(
            display_name=context.display_name,
            repo_url=repository.html_url,
            age=self.fetch_branch_age(repository, branch),
            branch=branch,
            branch_url=f"{repository.html_url}/tree/{encode_branch(branch)}",
            fork_pr=fork_pr,
            merged=merged,
            description=description,
            package=match.package,
        )

    def fetch_description(self, repository: RepositoryRef) -> str:
        result = self.client.get_repository_info(repository.owner, repository.name)
        if not result.ok or result.value is None:
            return PLACEHOLDER
        return truncate(result.value.description, self.description_length)

    def fetch_branch_age(self, repository: RepositoryRef, branch: str) -> str:
        result = self.client.get_latest_commit(repository.owner, repository.name, branch)
        if not result.ok or result.value is None:
            return PLACEHOLDER
        return relative_time(result.value.timestamp, now=self.clock())

    def fetch_pull_request_status(
        self, repository: RepositoryRef, branch: str
    ) -> tuple[str, str]:
        """
        Find the open pull request for a branch and whether it is merged.

        Returns:
            (fork PR cell, merged cell)
        """
        pulls = self.client.find_open_pull_requests_by_head(
            repository.owner, repository.name, repository.owner, branch
        )
        if not pulls.ok or not pulls.value:
            return NO_PR, PLACEHOLDER

        pull = pulls.value[0]
        merged = self.client.get_pull_request_merge_status(
            repository.owner, repository.name, pull.number
        )
        if not merged.ok:
            merged_cell = PLACEHOLDER
        else:
            merged_cell = "Yes" if merged.value else "No"
        logger.debug(f"PR found at {pull.url}, merged status: {merged_cell}")
        return f"[PR]({pull.url})", merged_cell
