"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest
from loguru import logger

from src.fork_status.data_models import (
    CommitInfo,
    FetchResult,
    PullRequestRef,
    RepositoryInfo,
)
from src.fork_status.github_client import ForkMetadataClient

FIXED_NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now():
    """Reference time used by aggregator tests."""
    return FIXED_NOW


@pytest.fixture
def sample_composer_data():
    """Sample composer.json content with forks and dependencies."""
    return {
        "name": "acme/site",
        "require": {
            "php": "^8.1",
            "acme/widget": "dev-feature/y",
            "silverstripe/framework": "^5.0",
        },
        "require-dev": {
            "phpunit/phpunit": "^9.5",
        },
        "repositories": [
            {"type": "vcs", "url": "git@github.com:acme/widget.git"},
            {"type": "composer", "url": "https://packagist.example.com"},
            {"type": "vcs", "url": "https://gitlab.com/acme/other.git"},
            {"type": "vcs", "url": "https://github.com/acme/framework"},
        ],
    }


@pytest.fixture
def mock_metadata_client(fixed_now):
    """Mock metadata client answering for the acme/widget fork."""
    client = Mock(spec=ForkMetadataClient)
    client.get_package_name.return_value = None
    client.get_repository_info.return_value = FetchResult.success(
        RepositoryInfo(description="A sample widget library for testing")
    )
    client.get_latest_commit.return_value = FetchResult.success(
        CommitInfo(sha="abc123", timestamp=fixed_now - timedelta(seconds=86400))
    )
    client.find_open_pull_requests_by_head.return_value = FetchResult.success(
        [PullRequestRef(url="https://x/pull/9", number=9)]
    )
    client.get_pull_request_merge_status.return_value = FetchResult.success(False)
    return client


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop log sinks added by a test (e.g. CLI runs writing to captured stderr)."""
    yield
    logger.remove()
