"""
Resolution of forks to the Composer dependencies they provide.

Fork repository names and package names often diverge, so matching runs
through an ordered list of strategies and stops at the first that yields a
dependency:

1. package name declared in the fork's own composer.json
2. last segment of the package name equals the repository name
3. ``owner/repository`` equals the package name
4. package name contains the repository name
5. package name ends with the repository name

Every comparison except the first is case-insensitive.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from ..shared_utilities import get_logger
from .data_models import ForkEntry, MatchResult
from .repository_url import RepositoryRef, display_name, parse_repository_url

logger = get_logger(__name__)

PackageNameLookup = Callable[[str, str], str | None]
MatchStrategy = Callable[["ForkContext", Mapping[str, str]], MatchResult | None]


@dataclass(frozen=True)
class ForkContext:
    """A fork entry with the values derived from its URL."""

    url: str
    repository: RepositoryRef | None
    display_name: str

    @classmethod
    def from_fork(cls, fork: ForkEntry) -> "ForkContext":
        return cls(
            url=fork.url,
            repository=parse_repository_url(fork.url),
            display_name=display_name(fork.url),
        )

    @property
    def owner(self) -> str | None:
        return self.repository.owner if self.repository else None


def _first(
    dependencies: Mapping[str, str], predicate: Callable[[str], bool], strategy: str
) -> MatchResult | None:
    for package, constraint in dependencies.items():
        if predicate(package):
            return MatchResult(package, constraint, strategy)
    return None


def match_package_name_segment(
    context: ForkContext, dependencies: Mapping[str, str]
) -> MatchResult | None:
    name = context.display_name.lower()
    return _first(
        dependencies,
        lambda package: package.rsplit("/", 1)[-1].lower() == name,
        "package_name_segment",
    )


def match_vendor_and_name(
    context: ForkContext, dependencies: Mapping[str, str]
) -> MatchResult | None:
    if not context.owner:
        return None
    candidate = f"{context.owner.lower()}/{context.display_name.lower()}"
    return _first(
        dependencies, lambda package: package.lower() == candidate, "vendor_and_name"
    )


def match_substring(
    context: ForkContext, dependencies: Mapping[str, str]
) -> MatchResult | None:
    name = context.display_name.lower()
    return _first(dependencies, lambda package: name in package.lower(), "substring")


def match_suffix(
    context: ForkContext, dependencies: Mapping[str, str]
) -> MatchResult | None:
    name = context.display_name.lower()
    return _first(
        dependencies, lambda package: package.lower().endswith(name), "suffix"
    )


HEURISTIC_STRATEGIES: list[MatchStrategy] = [
    match_package_name_segment,
    match_vendor_and_name,
    match_substring,
    match_suffix,
]


class DependencyMatcher:
    """Finds the dependency a fork provides."""

    def __init__(
        self,
        dependencies: Mapping[str, str],
        package_name_lookup: PackageNameLookup | None = None,
    ):
        """
        Args:
            dependencies: Merged require/require-dev mapping of package -> constraint
            package_name_lookup: Callable returning the package name declared by
                a repository's composer.json, or None when it cannot be read
        """
        self.dependencies = dependencies
        self.package_name_lookup = package_name_lookup
        self.strategies: list[MatchStrategy] = [
            self.match_declared_package_name,
            *HEURISTIC_STRATEGIES,
        ]

    def match_declared_package_name(
        self, context: ForkContext, dependencies: Mapping[str, str]
    ) -> MatchResult | None:
        if self.package_name_lookup is None or context.repository is None:
            return None

        package = self.package_name_lookup(
            context.repository.owner, context.repository.name
        )
        if package and package in dependencies:
            return MatchResult(package, dependencies[package], "declared_package_name")
        return None

    def match(self, context: ForkContext) -> MatchResult | None:
        """Run the strategies in order and return the first match."""
        for strategy in self.strategies:
            # An empty name is a substring and suffix of every package
            if not context.display_name and strategy in HEURISTIC_STRATEGIES:
                continue
            result = strategy(context, self.dependencies)
            if result is not None:
                logger.debug(
                    f"Matched {context.display_name} to {result.package} "
                    f"({result.strategy})"
                )
                return result

        logger.debug(f"No matching dependency found for {context.display_name}")
        return None
