"""
Parsing and normalization of GitHub repository URLs.

Accepted forms:

    git@github.com:OWNER/REPO(.git)
    git://github.com/OWNER/REPO(.git)
    https://github.com/OWNER/REPO(.git)
"""

import re
from dataclasses import dataclass

GITHUB_HOST = "github.com"
GITHUB_BASE_URL = f"https://{GITHUB_HOST}"

_OWNER_REPO_PATTERN = re.compile(r"github\.com[:/]+([^/]+)/([^/.]+)")

# Prefixes of the accepted forms, each rewritten to GITHUB_BASE_URL
_URL_FORMS = [
    re.compile(r"^git@github\.com:"),
    re.compile(r"^git://github\.com/"),
    re.compile(r"^https://github\.com/"),
]


@dataclass(frozen=True)
class RepositoryRef:
    """Owner and name of a GitHub repository."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def html_url(self) -> str:
        return f"{GITHUB_BASE_URL}/{self.full_name}"


def is_github_url(url: str) -> bool:
    return GITHUB_HOST in url


def parse_repository_url(url: str) -> RepositoryRef | None:
    """
    Extract owner and repository name from any accepted URL form.

    Returns:
        RepositoryRef, or None if the URL does not look like a GitHub repository
    """
    match = _OWNER_REPO_PATTERN.search(url or "")
    if not match:
        return None
    return RepositoryRef(owner=match.group(1), name=match.group(2))


def normalize_github_url(url: str) -> str:
    """
    Convert an accepted URL form to its browsable https form.

    A trailing ``.git`` is kept. URLs in no accepted form are returned unchanged.
    """
    for form in _URL_FORMS:
        if form.match(url):
            return form.sub(f"{GITHUB_BASE_URL}/", url, count=1)
    return url


def display_name(url: str) -> str:
    """Final path segment of the URL without a ``.git`` suffix."""
    stripped = url.rstrip("/").removesuffix(".git")
    return stripped.rsplit("/", 1)[-1]
