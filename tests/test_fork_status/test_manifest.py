"""
Tests for composer.json reading.
"""

import json

import pytest

from src.fork_status.data_models import ForkEntry
from src.fork_status.manifest import ComposerManifest, ManifestError, merge_dependencies


class TestMergeDependencies:
    """Test dependency section merging."""

    def test_later_section_wins(self):
        merged = merge_dependencies({"a/b": "1.0"}, {"a/b": "dev-x"})
        assert merged == {"a/b": "dev-x"}

    def test_union_of_sections(self):
        merged = merge_dependencies({"a/b": "1.0"}, {"c/d": "2.0"})
        assert merged == {"a/b": "1.0", "c/d": "2.0"}


class TestComposerManifest:
    """Test ComposerManifest loading."""

    def test_load(self, tmp_path, sample_composer_data):
        path = tmp_path / "composer.json"
        path.write_text(json.dumps(sample_composer_data))

        manifest = ComposerManifest.load(path)

        assert manifest.path == str(path)
        assert manifest.dependencies["acme/widget"] == "dev-feature/y"
        assert manifest.dependencies["phpunit/phpunit"] == "^9.5"
        assert manifest.forks == [
            ForkEntry(url="git@github.com:acme/widget.git"),
            ForkEntry(url="https://github.com/acme/framework"),
        ]

    def test_require_dev_overrides_require(self):
        manifest = ComposerManifest.from_dict(
            {"require": {"a/b": "1.0"}, "require-dev": {"a/b": "dev-x"}}
        )
        assert manifest.dependencies == {"a/b": "dev-x"}

    def test_missing_sections(self):
        manifest = ComposerManifest.from_dict({"name": "acme/site"})
        assert manifest.dependencies == {}
        assert manifest.forks == []

    def test_repositories_as_object(self):
        manifest = ComposerManifest.from_dict(
            {
                "repositories": {
                    "widget": {"type": "vcs", "url": "https://github.com/acme/widget"},
                    "packagist.org": False,
                }
            }
        )
        assert manifest.forks == [ForkEntry(url="https://github.com/acme/widget")]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            ComposerManifest.load(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "composer.json"
        path.write_text("{not json")
        with pytest.raises(ManifestError, match="Invalid JSON"):
            ComposerManifest.load(path)

    @pytest.mark.parametrize(
        "data",
        [[], {"require": ["a/b"]}, {"repositories": "github.com/acme/widget"}],
    )
    def test_malformed_structure(self, data):
        with pytest.raises(ManifestError):
            ComposerManifest.from_dict(data)
