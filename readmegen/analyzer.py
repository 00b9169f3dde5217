"""
readmegen Project Analyzer

Orchestrates detection, metadata extraction and tree rendering into a single
ProjectInfo record. Analysis of an existing directory always succeeds:
unreadable or malformed sources only leave fields empty and add warnings.
"""

from pathlib import Path
from typing import Any

from readmegen.detector import (
    detect_ci_provider,
    detect_coverage_provider,
    detect_ecosystem,
    detect_license,
    has_tests,
)
from readmegen.extractors import extract_metadata
from readmegen.schema import ProjectInfo
from readmegen.tree import DEFAULT_MAX_DEPTH, render_tree


def analyze_project(
    path: str | Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> ProjectInfo:
    """
    Analyze a project directory.

    The ecosystem is decided once from marker files; the matching extractor's
    fields are then merged over the defaults (directory name, detected
    license). A manifest field only overrides a default when the manifest
    actually declares it.

    Args:
        path: Project root directory
        max_depth: Depth limit for the rendered file tree

    Returns:
        A frozen ProjectInfo describing the project

    Raises:
        ValueError: If the path does not exist or is not a directory
    """
    root = Path(path).resolve()
    if not root.exists():
        raise ValueError(f"Path does not exist: {root}")
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    warnings: list[str] = []
    ecosystem = detect_ecosystem(root)

    fields: dict[str, Any] = {
        "name": root.name,
        "license": detect_license(root, warnings),
        "file_tree": render_tree(root, max_depth),
        "has_tests": has_tests(root),
        "ci_provider": detect_ci_provider(root),
        "coverage_provider": detect_coverage_provider(root),
    }
    fields.update(extract_metadata(ecosystem, root, warnings))

    return ProjectInfo(ecosystem=ecosystem, warnings=tuple(warnings), **fields)
