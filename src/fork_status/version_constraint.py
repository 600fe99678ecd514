"""
Branch extraction from Composer version constraints.

Only branch-tracking constraints resolve to a branch:

    dev-main               -> main
    dev-feature/x as 1.2.x -> feature/x
    ^1.2                   -> None
"""

from urllib.parse import quote

DEV_PREFIX = "dev-"
ALIAS_SEPARATOR = " as "


def is_branch_constraint(constraint: str) -> bool:
    return constraint.startswith(DEV_PREFIX)


def parse_branch(constraint: str) -> str | None:
    """
    Extract the branch name a version constraint tracks.

    Args:
        constraint: Composer version constraint

    Returns:
        The branch name (slashes preserved), or None if the constraint
        does not track a branch
    """
    if not is_branch_constraint(constraint):
        return None

    alias_index = constraint.find(ALIAS_SEPARATOR)
    if alias_index != -1:
        return constraint[len(DEV_PREFIX) : alias_index]
    return constraint[len(DEV_PREFIX) :]


def encode_branch(branch: str) -> str:
    """Percent-encode a branch name as a single URL path segment."""
    return quote(branch, safe="")
