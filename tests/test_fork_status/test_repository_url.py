"""
Tests for GitHub repository URL handling.
"""

import pytest

from src.fork_status.repository_url import (
    RepositoryRef,
    display_name,
    is_github_url,
    normalize_github_url,
    parse_repository_url,
)

URL_FORMS = [
    "git@github.com:acme/widget",
    "git://github.com/acme/widget",
    "https://github.com/acme/widget",
]


class TestNormalizeGithubUrl:
    """Test normalize_github_url."""

    @pytest.mark.parametrize("url", URL_FORMS)
    def test_all_forms_share_canonical_url(self, url):
        assert normalize_github_url(url) == "https://github.com/acme/widget"

    @pytest.mark.parametrize("url", URL_FORMS + [u + ".git" for u in URL_FORMS])
    def test_idempotent(self, url):
        once = normalize_github_url(url)
        assert normalize_github_url(once) == once

    def test_git_suffix_kept(self):
        assert (
            normalize_github_url("git@github.com:acme/widget.git")
            == "https://github.com/acme/widget.git"
        )

    def test_unknown_form_unchanged(self):
        assert normalize_github_url("ssh://example.org/x") == "ssh://example.org/x"


class TestParseRepositoryUrl:
    """Test parse_repository_url."""

    @pytest.mark.parametrize("url", URL_FORMS + [u + ".git" for u in URL_FORMS])
    def test_owner_and_name(self, url):
        assert parse_repository_url(url) == RepositoryRef("acme", "widget")

    @pytest.mark.parametrize(
        "url", ["", "https://gitlab.com/acme/widget", "github.com", "not a url"]
    )
    def test_undetermined(self, url):
        assert parse_repository_url(url) is None

    def test_repository_ref_urls(self):
        ref = RepositoryRef("acme", "widget")
        assert ref.full_name == "acme/widget"
        assert ref.html_url == "https://github.com/acme/widget"


class TestDisplayName:
    """Test display_name and is_github_url."""

    @pytest.mark.parametrize(
        "url",
        [
            "git@github.com:acme/widget.git",
            "https://github.com/acme/widget",
            "git://github.com/acme/widget.git",
            "https://github.com/acme/widget/",
        ],
    )
    def test_last_segment_without_git_suffix(self, url):
        assert display_name(url) == "widget"

    def test_keeps_dots_inside_name(self):
        assert display_name("https://github.com/acme/my.lib.git") == "my.lib"

    def test_is_github_url(self):
        assert is_github_url("git@github.com:acme/widget.git")
        assert not is_github_url("https://gitlab.com/acme/widget")
