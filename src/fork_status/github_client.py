"""
GitHub API client for fetching fork metadata.

Every lookup returns a FetchResult and never raises; API, transport and
payload errors are reported as FetchError values.
"""

import json
import os
from collections.abc import Callable, Sequence
from typing import Any, TypeVar

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from ..shared_utilities import get_logger
from .data_models import CommitInfo, FetchResult, PullRequestRef, RepositoryInfo

T = TypeVar("T")

logger = get_logger(__name__)

DEFAULT_PACKAGE_REFS = ("main", "master", "develop")
COMPOSER_FILE = "composer.json"


class ForkMetadataClient:
    """Read-only client for the repository data shown in the status table."""

    def __init__(self, token: str | None = None, timeout: int = 15):
        """Initialize GitHub client with optional token."""
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if self.token:
            logger.debug("Using authenticated GitHub client")
            self.github = Github(auth=Auth.Token(self.token), timeout=timeout)
        else:
            logger.debug("Using unauthenticated GitHub client (rate limited)")
            self.github = Github(timeout=timeout)

        self._repositories: dict[str, Repository] = {}

    def _get_repo(self, owner: str, repo: str) -> Repository:
        full_name = f"{owner}/{repo}"
        if full_name not in self._repositories:
            self._repositories[full_name] = self.github.get_repo(full_name, lazy=True)
        return self._repositories[full_name]

    def _fetch(self, operation: str, func: Callable[[], T]) -> FetchResult[T]:
        """Run one lookup, converting any failure into a FetchResult."""
        try:
            return FetchResult.success(func())
        except GithubException as e:
            message = e.data.get("message", str(e)) if isinstance(e.data, dict) else str(e)
            result: FetchResult[T] = FetchResult.failure(operation, message, e.status)
        except requests.RequestException as e:
            result = FetchResult.failure(operation, f"request error: {e}")
        except (ValueError, UnicodeDecodeError, LookupError, AttributeError) as e:
            result = FetchResult.failure(operation, f"malformed response: {e}")

        logger.debug(str(result.error))
        return result

    def get_file_at_ref(
        self, owner: str, repo: str, path: str, ref: str
    ) -> FetchResult[bytes]:
        """Get the raw contents of a file at a branch, tag or commit."""

        def fetch() -> bytes:
            content = self._get_repo(owner, repo).get_contents(path, ref=ref)
            if isinstance(content, list):
                raise ValueError(f"'{path}' is a directory")
            return content.decoded_content

        return self._fetch(f"get {owner}/{repo}/{path}@{ref}", fetch)

    def get_repository_info(self, owner: str, repo: str) -> FetchResult[RepositoryInfo]:
        """Get basic repository information."""
        return self._fetch(
            f"get repository {owner}/{repo}",
            lambda: RepositoryInfo(description=self._get_repo(owner, repo).description),
        )

    def get_latest_commit(
        self, owner: str, repo: str, branch: str
    ) -> FetchResult[CommitInfo]:
        """Get the newest commit on a branch."""

        def fetch() -> CommitInfo:
            commits = self._get_repo(owner, repo).get_commits(sha=branch).get_page(0)
            if not commits:
                raise LookupError(f"no commits on branch '{branch}'")
            latest = commits[0]
            return CommitInfo(sha=latest.sha, timestamp=latest.commit.author.date)

        return self._fetch(f"get latest commit {owner}/{repo}@{branch}", fetch)

    def find_open_pull_requests_by_head(
        self, owner: str, repo: str, head_owner: str, head_branch: str
    ) -> FetchResult[list[PullRequestRef]]:
        """List open pull requests whose head is ``head_owner:head_branch``."""

        def fetch() -> list[PullRequestRef]:
            pulls = self._get_repo(owner, repo).get_pulls(
                state="open", head=f"{head_owner}:{head_branch}"
            )
            return [
                PullRequestRef(url=pull.html_url, number=pull.number)
                for pull in pulls.get_page(0)
            ]

        return self._fetch(
            f"list pull requests {owner}/{repo} head={head_owner}:{head_branch}", fetch
        )

    def get_pull_request_merge_status(
        self, owner: str, repo: str, number: int
    ) -> FetchResult[bool]:
        """Whether a pull request has been merged."""
        return self._fetch(
            f"get merge status {owner}/{repo}#{number}",
            lambda: self._get_repo(owner, repo).get_pull(number).is_merged(),
        )

    def get_package_name(
        self,
        owner: str,
        repo: str,
        refs: Sequence[str] = DEFAULT_PACKAGE_REFS,
    ) -> str | None:
        """
        Get the package name a repository declares in its composer.json.

        Args:
            owner: Repository owner
            repo: Repository name
            refs: Branches to try in order

        Returns:
            The declared package name, or None if no ref has a composer.json
            with a name
        """
        for ref in refs:
            logger.debug(f"Trying to fetch {COMPOSER_FILE} from {owner}/{repo}@{ref}")
            result = self.get_file_at_ref(owner, repo, COMPOSER_FILE, ref)
            if not result.ok:
                continue

            name = _declared_name(result.value)
            if name:
                logger.debug(f"Found package name in {COMPOSER_FILE}: {name}")
                return name

        logger.debug(f"No {COMPOSER_FILE} with a name property in {owner}/{repo}")
        return None


def _declared_name(content: bytes | None) -> str | None:
    if not content:
        return None
    try:
        data: Any = json.loads(content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as e:
        logger.debug(f"Unreadable {COMPOSER_FILE}: {e}")
        return None
    if isinstance(data, dict) and isinstance(data.get("name"), str):
        return data["name"]
    return None
