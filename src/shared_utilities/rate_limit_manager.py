"""
Rate limit reporting for GitHub API usage.
Reads the X-RateLimit state that PyGithub tracks from response headers.
"""

import time
from dataclasses import dataclass

import requests
from github import Github, GithubException
from loguru import logger


@dataclass
class RateLimitStatus:
    """Current rate limit status from GitHub API."""

    limit: int  # Total requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_time: int  # Unix timestamp when limit resets

    @property
    def used(self) -> int:
        return self.limit - self.remaining

    @property
    def usage_percentage(self) -> float:
        """Percentage of rate limit used (0.0 to 1.0)."""
        if self.limit == 0:
            return 0.0
        return (self.limit - self.remaining) / self.limit

    @property
    def minutes_until_reset(self) -> float:
        """Minutes until rate limit resets."""
        return max(0, (self.reset_time - time.time()) / 60)


class RateLimitManager:
    """Tracks and logs the GitHub API rate limit of a PyGithub client."""

    def __init__(self, safety_buffer: int = 10):
        """
        Initialize rate limit manager.

        Args:
            safety_buffer: Remaining request count below which a warning is logged
        """
        self.safety_buffer = safety_buffer
        self.last_status: RateLimitStatus | None = None

    def extract_rate_limit_status(self, github: Github) -> RateLimitStatus | None:
        """
        Read the rate limit state from a PyGithub client.

        Args:
            github: The client whose last responses carried rate limit headers

        Returns:
            RateLimitStatus or None if the state could not be determined
        """
        try:
            remaining, limit = github.rate_limiting
            reset_time = github.rate_limiting_resettime
        except (GithubException, requests.RequestException) as e:
            logger.warning(f"Failed to read rate limit state: {e}")
            return None

        status = RateLimitStatus(
            limit=int(limit), remaining=int(remaining), reset_time=int(reset_time)
        )
        self.last_status = status
        return status

    def log_rate_limit_status(self, github: Github, tool_name: str = "unknown") -> None:
        """
        Log current rate limit status, warning when the quota is nearly spent.

        Args:
            github: PyGithub client used for the run
            tool_name: Name of tool making the requests for better logging
        """
        status = self.extract_rate_limit_status(github)
        if status is None:
            return

        if status.remaining <= self.safety_buffer:
            logger.warning(
                f"[{tool_name}] GitHub rate limit nearly exhausted: "
                f"{status.remaining}/{status.limit} remaining, "
                f"resets in {status.minutes_until_reset:.1f}m. "
                "Set GITHUB_TOKEN for a higher limit."
            )
        else:
            logger.info(f"[{tool_name}] {self.format_status_summary()}")

    def format_status_summary(self) -> str:
        """Get a formatted summary of current rate limit status."""
        if self.last_status is None:
            return "Rate limit status: Unknown"

        status = self.last_status
        return (
            f"Rate limit: {status.remaining}/{status.limit} remaining "
            f"({status.usage_percentage:.1%} used), "
            f"resets in {status.minutes_until_reset:.1f} minutes"
        )
