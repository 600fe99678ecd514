"""
Reading forks and dependencies from composer.json.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .data_models import ForkEntry
from .repository_url import is_github_url

DEPENDENCY_SECTIONS = ("require", "require-dev")


class ForkStatusError(Exception):
    """Base exception for fork status operations."""

    pass


class ManifestError(ForkStatusError):
    """The manifest could not be read or parsed."""

    pass


def merge_dependencies(*sections: dict[str, str]) -> dict[str, str]:
    """Merge dependency sections; later sections win on key collision."""
    merged: dict[str, str] = {}
    for section in sections:
        merged.update(section)
    return merged


@dataclass
class ComposerManifest:
    """The parts of composer.json the report needs."""

    path: str
    dependencies: dict[str, str] = field(default_factory=dict)
    forks: list[ForkEntry] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | Path) -> "ComposerManifest":
        """
        Load and parse a composer.json file.

        Raises:
            ManifestError: If the file is missing, unreadable or not valid JSON
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ManifestError(f"Cannot read manifest '{path}': {e}") from e
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in manifest '{path}': {e}") from e

        return cls.from_dict(data, str(path))

    @classmethod
    def from_dict(cls, data: Any, path: str = "composer.json") -> "ComposerManifest":
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest '{path}' must contain a JSON object")

        sections = []
        for name in DEPENDENCY_SECTIONS:
            section = data.get(name) or {}
            if not isinstance(section, dict):
                raise ManifestError(f"'{name}' in '{path}' must be an object")
            sections.append({str(k): str(v) for k, v in section.items()})

        return cls(
            path=path,
            dependencies=merge_dependencies(*sections),
            forks=_github_forks(data.get("repositories") or [], path),
        )


def _github_forks(repositories: Any, path: str) -> list[ForkEntry]:
    # Composer also allows "repositories" as an object keyed by name
    if isinstance(repositories, dict):
        repositories = list(repositories.values())
    if not isinstance(repositories, list):
        raise ManifestError(f"'repositories' in '{path}' must be a list or object")

    return [
        ForkEntry(url=repository["url"])
        for repository in repositories
        if isinstance(repository, dict)
        and repository.get("type") == "vcs"
        and isinstance(repository.get("url"), str)
        and is_github_url(repository["url"])
    ]
