"""
Data models for fork status reporting.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Generic, TypeVar

T = TypeVar("T")

PLACEHOLDER = "-"
NO_PR = "No PR"


@dataclass(frozen=True)
class ForkEntry:
    """A forked VCS repository declared in the manifest."""

    url: str


@dataclass(frozen=True)
class MatchResult:
    """Dependency resolved for a fork."""

    package: str  # e.g. "acme/widget"
    constraint: str  # e.g. "dev-feature/y as 1.2.x"
    strategy: str = ""  # name of the matching tier that produced it


@dataclass(frozen=True)
class FetchError:
    """Why a remote lookup produced no value."""

    operation: str
    message: str
    status: int | None = None

    def __str__(self) -> str:
        status = f" (HTTP {self.status})" if self.status is not None else ""
        return f"{self.operation} failed{status}: {self.message}"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Outcome of a remote lookup: either a value or a FetchError."""

    value: T | None = None
    error: FetchError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls, operation: str, message: str, status: int | None = None
    ) -> "FetchResult[T]":
        return cls(error=FetchError(operation, message, status))


@dataclass(frozen=True)
class RepositoryInfo:
    description: str | None


@dataclass(frozen=True)
class CommitInfo:
    sha: str
    timestamp: datetime | None


@dataclass(frozen=True)
class PullRequestRef:
    url: str
    number: int


@dataclass
class StatusRow:
    """One line of the fork status table."""

    display_name: str
    repo_url: str
    age: str = PLACEHOLDER
    branch: str | None = None
    branch_url: str | None = None
    fork_pr: str = PLACEHOLDER
    merged: str = PLACEHOLDER
    description: str = PLACEHOLDER
    package: str | None = None

    @property
    def package_link(self) -> str:
        return f"[{self.display_name}]({self.repo_url})"

    @property
    def branch_link(self) -> str:
        if not self.branch or not self.branch_url:
            return PLACEHOLDER
        return f"[{self.branch}]({self.branch_url})"

    def to_markdown(self) -> str:
        """Render the row in the markdown table syntax."""
        cells = [
            self.age,
            self.package_link,
            self.branch_link,
            self.fork_pr,
            self.merged,
            self.description,
        ]
        return "| " + " | ".join(cells) + " |"

    def to_dict(self) -> dict[str, Any]:
        return {
            "age": self.age,
            "name": self.display_name,
            "repository": self.repo_url,
            "package": self.package,
            "branch": self.branch,
            "branch_url": self.branch_url,
            "fork_pr": self.fork_pr,
            "merged": self.merged,
            "description": self.description,
        }


@dataclass
class ForkStatusReport:
    """Complete result of one run over a manifest."""

    manifest_path: str
    rows: list[StatusRow] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
