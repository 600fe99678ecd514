"""
Configuration for fork status reporting.
"""

import os
from dataclasses import dataclass, field

from .github_client import DEFAULT_PACKAGE_REFS

DEFAULT_COMPOSER_PATH = "./composer.json"
DEFAULT_DESCRIPTION_LENGTH = 25
DEFAULT_TIMEOUT = 15
ACTION_OUTPUT_NAME = "fork_status"

_FALSE_VALUES = {"", "0", "false", "no", "off"}


def env_flag(name: str, environ: dict[str, str] | None = None) -> bool:
    """Interpret an environment variable as an on/off toggle."""
    environ = os.environ if environ is None else environ
    return environ.get(name, "").strip().lower() not in _FALSE_VALUES


@dataclass
class ForkStatusConfig:
    """Operating parameters for one run."""

    composer_path: str = DEFAULT_COMPOSER_PATH
    token: str | None = None
    debug: bool = False
    github_output: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    description_length: int = DEFAULT_DESCRIPTION_LENGTH
    candidate_refs: tuple[str, ...] = field(default=DEFAULT_PACKAGE_REFS)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ForkStatusConfig":
        """Build a configuration from COMPOSER_JSON, GITHUB_TOKEN, DEBUG and GITHUB_OUTPUT."""
        environ = dict(os.environ) if environ is None else environ

        timeout = environ.get("FORK_STATUS_TIMEOUT")
        try:
            timeout_seconds = int(timeout) if timeout else DEFAULT_TIMEOUT
        except ValueError as e:
            raise ValueError(
                f"FORK_STATUS_TIMEOUT must be an integer, got '{timeout}'"
            ) from e

        return cls(
            composer_path=environ.get("COMPOSER_JSON") or DEFAULT_COMPOSER_PATH,
            token=environ.get("GITHUB_TOKEN") or None,
            debug=env_flag("DEBUG", environ),
            github_output=environ.get("GITHUB_OUTPUT") or None,
            timeout=timeout_seconds,
        )
