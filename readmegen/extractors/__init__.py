"""
Metadata extractors, one per ecosystem.

Each extractor is a function `extract(root_path, warnings) -> dict` that
returns a partial ProjectInfo containing only the fields it found. The
EXTRACTORS table maps every Ecosystem member to its extractor, so adding an
ecosystem means adding one entry here.

Available Extractors:
    - extract_node: package.json
    - extract_python: pyproject.toml, setup.py, requirements.txt
    - extract_go: go.mod
    - extract_rust: Cargo.toml

Usage:
    from readmegen.extractors import extract_metadata

    warnings: list[str] = []
    fields = extract_metadata(Ecosystem.NODE, root_path, warnings)
"""

from pathlib import Path
from typing import Any, Callable, Optional

from readmegen.extractors.go import extract_go
from readmegen.extractors.node import extract_node
from readmegen.extractors.python import extract_python
from readmegen.extractors.rust import extract_rust
from readmegen.schema import Ecosystem

Extractor = Callable[[Path, list[str]], dict[str, Any]]


def extract_nothing(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """Unknown projects have no manifest to read."""
    return {}


EXTRACTORS: dict[Ecosystem, Extractor] = {
    Ecosystem.NODE: extract_node,
    Ecosystem.PYTHON: extract_python,
    Ecosystem.GO: extract_go,
    Ecosystem.RUST: extract_rust,
    Ecosystem.UNKNOWN: extract_nothing,
}


def extract_metadata(
    ecosystem: Ecosystem,
    root_path: str | Path,
    warnings: Optional[list[str]] = None,
) -> dict[str, Any]:
    """
    Run the extractor for `ecosystem` against a project directory.

    Args:
        ecosystem: The detected ecosystem
        root_path: Project root directory
        warnings: Optional list that receives non-fatal problems

    Returns:
        Partial ProjectInfo fields (possibly empty)
    """
    if warnings is None:
        warnings = []
    return EXTRACTORS[ecosystem](Path(root_path), warnings)


__all__ = [
    "EXTRACTORS",
    "extract_go",
    "extract_metadata",
    "extract_node",
    "extract_python",
    "extract_rust",
]
