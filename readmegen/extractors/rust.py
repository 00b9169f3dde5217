"""
Rust Metadata Extractor

Parses Cargo.toml. Fields are read from the [package] table only, so
dependency tables that reuse `name` or `version` keys cannot leak into the
project metadata.

When the manifest is not valid TOML, a tolerant line-pattern scan recovers
name, version and license from the first matching `key = "value"` lines.
"""

import re
from pathlib import Path
from typing import Any, Optional

from readmegen.extractors.base import (
    drop_empty,
    read_file_safe,
    string_or_none,
    tomllib,
)

MANIFEST = "Cargo.toml"

FALLBACK_PATTERNS: dict[str, re.Pattern[str]] = {
    "name": re.compile(r'^\s*name\s*=\s*"(.+)"', re.MULTILINE),
    "version": re.compile(r'^\s*version\s*=\s*"(.+)"', re.MULTILINE),
    "license": re.compile(r'^\s*license\s*=\s*"(.+)"', re.MULTILINE),
}


def _dependency_version(spec: Any) -> str:
    """Cargo allows `dep = "1.0"` or `dep = { version = "1.0", features = [...] }`."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, dict) and isinstance(spec.get("version"), str):
        return spec["version"]
    return "*"


def _dependency_table(table: Any) -> dict[str, str]:
    if not isinstance(table, dict):
        return {}
    return {name: _dependency_version(spec) for name, spec in table.items()}


def _first_author(authors: Any) -> Optional[str]:
    if isinstance(authors, list):
        for author in authors:
            if string_or_none(author):
                return author
    return None


def _scan_lines(content: str) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for key, pattern in FALLBACK_PATTERNS.items():
        match = pattern.search(content)
        if match:
            fields[key] = match.group(1)
    return fields


def extract_rust(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """
    Extract package metadata from Cargo.toml.

    Args:
        root_path: Project root directory
        warnings: List that receives non-fatal problems

    Returns:
        Partial ProjectInfo fields; empty if Cargo.toml is missing
    """
    content = read_file_safe(root_path / MANIFEST, warnings)
    if content is None:
        return {}

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        warnings.append(f"Failed to parse {MANIFEST}, falling back to line scan: {e}")
        return _scan_lines(content)

    package = data.get("package")
    if not isinstance(package, dict):
        # Virtual workspace manifests have no [package] table
        return {}

    return drop_empty({
        "name": string_or_none(package.get("name")),
        "version": string_or_none(package.get("version")),
        "license": string_or_none(package.get("license")),
        "description": string_or_none(package.get("description")),
        "repository_url": string_or_none(package.get("repository")),
        "author": _first_author(package.get("authors")),
        "dependencies": _dependency_table(data.get("dependencies")),
        "dev_dependencies": _dependency_table(data.get("dev-dependencies")),
    })
