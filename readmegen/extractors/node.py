"""
Node.js Metadata Extractor

Parses package.json, the npm package manifest.

Supported Metadata:
    - name, description, version, license
    - author (string or {name, email} object)
    - repository (string or {type, url} object)
    - scripts, dependencies, devDependencies

Heuristics and Limitations:
    - Only package.json is read; lockfiles and source code are ignored
    - Legacy array-valued "licenses" fields are not supported
"""

from pathlib import Path
from typing import Any, Optional

from readmegen.extractors.base import (
    drop_empty,
    format_person,
    load_json,
    string_mapping,
    string_or_none,
)

MANIFEST = "package.json"


def _parse_author(author: Any) -> Optional[str]:
    """
    Normalize the package.json author field.

    npm accepts either "Name <email> (url)" or {"name", "email", "url"}.
    """
    if isinstance(author, str):
        return string_or_none(author)
    if isinstance(author, dict):
        return format_person(
            string_or_none(author.get("name")),
            string_or_none(author.get("email")),
        )
    return None


def _parse_repository(repository: Any) -> Optional[str]:
    """Normalize the repository field (bare string or object with a url)."""
    if isinstance(repository, str):
        return string_or_none(repository)
    if isinstance(repository, dict):
        return string_or_none(repository.get("url"))
    return None


def extract_node(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """
    Extract metadata from package.json.

    Args:
        root_path: Project root directory
        warnings: List that receives non-fatal problems

    Returns:
        Partial ProjectInfo fields; empty if the manifest is missing or
        is not a JSON object
    """
    data = load_json(root_path / MANIFEST, warnings)
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.append(f"{MANIFEST} does not contain a JSON object")
        return {}

    return drop_empty({
        "name": string_or_none(data.get("name")),
        "description": string_or_none(data.get("description")),
        "version": string_or_none(data.get("version")),
        "license": string_or_none(data.get("license")),
        "author": _parse_author(data.get("author")),
        "repository_url": _parse_repository(data.get("repository")),
        "scripts": string_mapping(data.get("scripts")),
        "dependencies": string_mapping(data.get("dependencies")),
        "dev_dependencies": string_mapping(data.get("devDependencies")),
    })
