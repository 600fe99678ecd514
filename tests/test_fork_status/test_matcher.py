"""
Tests for matching forks to dependencies.
"""

from unittest.mock import Mock

import pytest

from src.fork_status.data_models import ForkEntry
from src.fork_status.matcher import (
    DependencyMatcher,
    ForkContext,
    match_package_name_segment,
    match_substring,
    match_suffix,
    match_vendor_and_name,
)


def context_for(url: str) -> ForkContext:
    return ForkContext.from_fork(ForkEntry(url=url))


class TestForkContext:
    """Test ForkContext derivation."""

    def test_from_fork(self):
        context = context_for("git@github.com:Acme/Widget.git")
        assert context.owner == "Acme"
        assert context.repository.name == "Widget"
        assert context.display_name == "Widget"

    def test_undetermined_owner(self):
        context = context_for("https://example.org/acme/widget.git")
        assert context.repository is None
        assert context.owner is None
        assert context.display_name == "widget"


class TestHeuristicStrategies:
    """Test each matching tier on its own."""

    def test_package_name_segment_is_case_insensitive(self):
        deps = {"other/thing": "1.0", "vendor/Widget": "dev-main"}
        result = match_package_name_segment(context_for("https://github.com/a/widget"), deps)
        assert (result.package, result.constraint) == ("vendor/Widget", "dev-main")

    def test_package_name_segment_takes_first(self):
        deps = {"one/widget": "1.0", "two/widget": "2.0"}
        result = match_package_name_segment(context_for("https://github.com/a/widget"), deps)
        assert result.package == "one/widget"

    def test_vendor_and_name(self):
        deps = {"ACME/Widget-Lib": "dev-x"}
        result = match_vendor_and_name(
            context_for("https://github.com/acme/widget-lib"), deps
        )
        assert result.package == "ACME/Widget-Lib"

    def test_vendor_and_name_needs_owner(self):
        deps = {"acme/widget": "dev-x"}
        assert match_vendor_and_name(context_for("widget"), deps) is None

    def test_substring(self):
        deps = {"acme/Widget-extras": "1.0"}
        result = match_substring(context_for("https://github.com/a/widget"), deps)
        assert result.package == "acme/Widget-extras"

    def test_suffix(self):
        deps = {"acme/super-widget": "1.0"}
        result = match_suffix(context_for("https://github.com/a/WIDGET"), deps)
        assert result.package == "acme/super-widget"

    def test_no_candidates(self):
        deps = {"acme/gadget": "1.0"}
        context = context_for("https://github.com/a/widget")
        assert match_package_name_segment(context, deps) is None
        assert match_substring(context, deps) is None
        assert match_suffix(context, deps) is None


class TestDependencyMatcher:
    """Test tier ordering in DependencyMatcher."""

    def test_declared_package_name_wins(self):
        deps = {"acme/widget": "dev-a", "acme/renamed-package": "dev-b"}
        lookup = Mock(return_value="acme/renamed-package")
        matcher = DependencyMatcher(deps, package_name_lookup=lookup)

        result = matcher.match(context_for("git@github.com:acme/widget.git"))

        assert result.package == "acme/renamed-package"
        assert result.constraint == "dev-b"
        assert result.strategy == "declared_package_name"
        lookup.assert_called_once_with("acme", "widget")

    def test_declared_name_not_in_dependencies_falls_through(self):
        deps = {"acme/widget": "dev-a"}
        matcher = DependencyMatcher(deps, package_name_lookup=Mock(return_value="x/y"))
        result = matcher.match(context_for("git@github.com:acme/widget.git"))
        assert result.package == "acme/widget"
        assert result.strategy == "package_name_segment"

    def test_lookup_skipped_without_owner(self):
        lookup = Mock(return_value="acme/widget")
        matcher = DependencyMatcher({"acme/widget": "dev-a"}, package_name_lookup=lookup)
        result = matcher.match(context_for("https://example.org/widget"))
        lookup.assert_not_called()
        assert result.strategy == "package_name_segment"

    def test_exact_segment_preferred_over_substring_and_suffix(self):
        deps = {
            "acme/widget-tools": "dev-substring",
            "acme/superwidget": "dev-suffix",
            "other/widget": "dev-exact",
        }
        matcher = DependencyMatcher(deps)
        result = matcher.match(context_for("https://github.com/acme/widget"))
        assert result.package == "other/widget"
        assert result.strategy == "package_name_segment"

    def test_substring_preferred_over_suffix(self):
        deps = {"acme/superwidget": "dev-suffix", "acme/widget-tools": "dev-substring"}
        matcher = DependencyMatcher(deps)
        result = matcher.match(context_for("https://github.com/acme/widget"))
        # "acme/superwidget" contains "widget" too and comes first
        assert result.package == "acme/superwidget"
        assert result.strategy == "substring"

    @pytest.mark.parametrize("deps", [{}, {"acme/gadget": "dev-main"}])
    def test_no_match(self, deps):
        matcher = DependencyMatcher(deps, package_name_lookup=Mock(return_value=None))
        assert matcher.match(context_for("https://github.com/acme/widget")) is None

    def test_trailing_slash_matches_by_name(self):
        deps = {"php": "^8.1", "acme/widget": "dev-main"}
        matcher = DependencyMatcher(deps)
        result = matcher.match(context_for("https://github.com/acme/widget/"))
        assert result.package == "acme/widget"
        assert result.strategy == "package_name_segment"

    def test_empty_name_skips_heuristics(self):
        context = ForkContext(url="https://github.com/", repository=None, display_name="")
        matcher = DependencyMatcher({"php": "^8.1", "acme/widget": "dev-main"})
        assert matcher.match(context) is None
