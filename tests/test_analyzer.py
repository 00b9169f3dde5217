"""
Tests for readmegen.analyzer module.

Tests how detection, extraction and tree rendering combine into ProjectInfo.
"""

import dataclasses
import json
import tempfile
from pathlib import Path

import pytest

from readmegen.analyzer import analyze_project
from readmegen.schema import CIProvider, Ecosystem


def write_package_json(root: Path, **manifest) -> None:
    (root / "package.json").write_text(json.dumps(manifest))


class TestAnalyzeProject:
    """Tests for analyze_project()."""

    def test_node_project(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "test-project"
            root.mkdir()
            write_package_json(
                root,
                name="test-project",
                version="1.0.0",
                description="A test project",
                license="MIT",
                scripts={"start": "node index.js", "test": "jest"},
                dependencies={"express": "^4.18.0"},
            )
            (root / "index.js").write_text("")
            (root / "index.test.js").write_text("")

            info = analyze_project(root)

            assert info.ecosystem == Ecosystem.NODE
            assert info.name == "test-project"
            assert info.version == "1.0.0"
            assert info.description == "A test project"
            assert info.license == "MIT"
            assert info.scripts == {"start": "node index.js", "test": "jest"}
            assert info.dependencies == {"express": "^4.18.0"}
            assert info.has_tests is True
            assert "index.js" in info.file_tree
            assert info.warnings == ()

    def test_manifest_name_overrides_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "checkout"
            root.mkdir()
            write_package_json(root, name="published-name")

            assert analyze_project(root).name == "published-name"

    def test_directory_name_fallback(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "plain-dir"
            root.mkdir()
            (root / "main.c").write_text("")

            info = analyze_project(root)

            assert info.ecosystem == Ecosystem.UNKNOWN
            assert info.name == "plain-dir"
            assert info.version is None
            assert info.description is None

    def test_license_file_kept_when_manifest_silent(self):
        """A manifest without a license field does not erase the detected one."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_package_json(root, name="app")
            (root / "LICENSE").write_text("MIT License\n\nCopyright (c) 2024")

            assert analyze_project(root).license == "MIT"

    def test_manifest_license_wins(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            write_package_json(root, name="app", license="ISC")
            (root / "LICENSE").write_text("MIT License")

            assert analyze_project(root).license == "ISC"

    def test_malformed_manifest_degrades(self):
        """Broken manifests produce defaults plus a warning, never an error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir) / "broken-app"
            root.mkdir()
            (root / "package.json").write_text("{ nope")

            info = analyze_project(root)

            assert info.ecosystem == Ecosystem.NODE
            assert info.name == "broken-app"
            assert len(info.warnings) == 1

    def test_providers_detected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / ".travis.yml").write_text("")

            info = analyze_project(root)

            assert info.ci_provider == CIProvider.TRAVIS
            assert info.coverage_provider is None

    def test_max_depth_forwarded(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            (root / "a" / "b").mkdir(parents=True)
            (root / "a" / "b" / "deep.txt").write_text("")

            assert "deep.txt" not in analyze_project(root).file_tree
            assert "deep.txt" in analyze_project(root, max_depth=4).file_tree

    def test_result_is_frozen(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            info = analyze_project(tmpdir)
            with pytest.raises(dataclasses.FrozenInstanceError):
                info.license = "MIT"

    def test_missing_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ValueError, match="does not exist"):
                analyze_project(Path(tmpdir) / "missing")

    def test_file_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "file.txt"
            target.write_text("")
            with pytest.raises(ValueError, match="not a directory"):
                analyze_project(target)
