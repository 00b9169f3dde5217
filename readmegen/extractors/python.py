"""
Python Metadata Extractor

This module extracts metadata from Python projects by parsing:
    - pyproject.toml (PEP 621 [project] table, or Poetry's [tool.poetry])
    - setup.py (regex-based, only when pyproject.toml has no metadata)
    - requirements.txt (dependencies, only when none were declared)

Extraction Priority:
    1. pyproject.toml
    2. setup.py
    3. Directory name (fallback for the project name)

Heuristics and Limitations:
    - setup.py is never executed; only literal keyword arguments are found
    - Dynamic metadata (`dynamic = ["version"]`) is not resolved
    - Environment markers in requirements are kept as part of the version range
"""

import re
from pathlib import Path
from typing import Any, Optional

from readmegen.extractors.base import (
    drop_empty,
    format_person,
    load_toml,
    read_file_safe,
    string_or_none,
)

# Pattern: name[extras] followed by an optional version specifier
REQUIREMENT_PATTERN = re.compile(r"^([A-Za-z0-9][A-Za-z0-9._-]*)(?:\[[^\]]*\])?\s*(.*)$")

# Pattern: Name <email> or just Name
AUTHOR_PATTERN = re.compile(r"^([^<]+?)(?:\s*<([^>]+)>)?$")


def parse_requirement(line: str) -> Optional[tuple[str, str]]:
    """
    Split a requirement string into (name, version range).

    Handles "package", "package==1.0", "package>=1.0,<2" and
    "package[extra]>=1.0". The version range is "*" when unconstrained.
    """
    line = line.split("#", 1)[0].strip()
    if not line:
        return None

    match = REQUIREMENT_PATTERN.match(line)
    if not match:
        return None

    name, version = match.group(1), match.group(2).strip()
    return name, version or "*"


def _requirements_to_mapping(requirements: Any) -> dict[str, str]:
    if not isinstance(requirements, list):
        return {}

    mapping: dict[str, str] = {}
    for requirement in requirements:
        if not isinstance(requirement, str):
            continue
        parsed = parse_requirement(requirement)
        if parsed:
            mapping[parsed[0]] = parsed[1]
    return mapping


def _parse_license(value: Any) -> Optional[str]:
    """PEP 621 allows a plain SPDX string or a {text = ...} / {file = ...} table."""
    if isinstance(value, str):
        return string_or_none(value)
    if isinstance(value, dict):
        return string_or_none(value.get("text"))
    return None


def _first_pep621_author(authors: Any) -> Optional[str]:
    if not isinstance(authors, list):
        return None
    for author in authors:
        if isinstance(author, dict):
            formatted = format_person(
                string_or_none(author.get("name")),
                string_or_none(author.get("email")),
            )
            if formatted:
                return formatted
    return None


def _first_poetry_author(authors: Any) -> Optional[str]:
    """Poetry authors are "Name <email>" strings."""
    if not isinstance(authors, list):
        return None
    for author in authors:
        if not isinstance(author, str):
            continue
        match = AUTHOR_PATTERN.match(author.strip())
        if match and match.group(1).strip():
            return format_person(match.group(1).strip(), match.group(2))
    return None


def _poetry_dependencies(dependencies: Any) -> dict[str, str]:
    """
    Convert a Poetry dependency table to a mapping.

    Poetry allows both string versions ("^3.8") and tables
    ({version = "^3.8", optional = true}). The python constraint is skipped.
    """
    if not isinstance(dependencies, dict):
        return {}

    mapping: dict[str, str] = {}
    for name, spec in dependencies.items():
        if name == "python":
            continue
        if isinstance(spec, str):
            mapping[name] = spec
        elif isinstance(spec, dict) and isinstance(spec.get("version"), str):
            mapping[name] = spec["version"]
        else:
            mapping[name] = "*"
    return mapping


def _from_pyproject(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    data = load_toml(root_path / "pyproject.toml", warnings)
    if not data:
        return {}

    project = data.get("project")
    if isinstance(project, dict):
        optional = project.get("optional-dependencies")
        dev_requirements: list[Any] = []
        if isinstance(optional, dict):
            for group in ("dev", "test", "tests"):
                if isinstance(optional.get(group), list):
                    dev_requirements.extend(optional[group])

        return drop_empty({
            "name": string_or_none(project.get("name")),
            "version": string_or_none(project.get("version")),
            "description": string_or_none(project.get("description")),
            "license": _parse_license(project.get("license")),
            "author": _first_pep621_author(project.get("authors")),
            "repository_url": _repository_from_urls(project.get("urls")),
            "dependencies": _requirements_to_mapping(project.get("dependencies")),
            "dev_dependencies": _requirements_to_mapping(dev_requirements),
        })

    poetry = data.get("tool", {}).get("poetry") if isinstance(data.get("tool"), dict) else None
    if isinstance(poetry, dict):
        return drop_empty({
            "name": string_or_none(poetry.get("name")),
            "version": string_or_none(poetry.get("version")),
            "description": string_or_none(poetry.get("description")),
            "license": string_or_none(poetry.get("license")),
            "author": _first_poetry_author(poetry.get("authors")),
            "repository_url": string_or_none(poetry.get("repository")),
            "dependencies": _poetry_dependencies(poetry.get("dependencies")),
        })

    return {}


def _repository_from_urls(urls: Any) -> Optional[str]:
    """Pick the source URL from the [project.urls] table."""
    if not isinstance(urls, dict):
        return None
    for key, value in urls.items():
        if key.lower() in ("repository", "source", "source code", "homepage"):
            url = string_or_none(value)
            if url:
                return url
    return None


def _from_setup_py(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """
    Scan setup.py for literal keyword arguments of the setup() call.

    Works for most simple setup.py files but misses values that come from
    variables or function calls.
    """
    content = read_file_safe(root_path / "setup.py", warnings)
    if content is None:
        return {}

    def extract_string_kwarg(key: str) -> Optional[str]:
        match = re.search(rf"\b{key}\s*=\s*[\"']([^\"']+)[\"']", content)
        return match.group(1) if match else None

    return drop_empty({
        "name": extract_string_kwarg("name"),
        "version": extract_string_kwarg("version"),
        "description": extract_string_kwarg("description"),
        "license": extract_string_kwarg("license"),
        "author": format_person(
            extract_string_kwarg("author"),
            extract_string_kwarg("author_email"),
        ),
        "repository_url": extract_string_kwarg("url"),
    })


def _from_requirements(root_path: Path, warnings: list[str]) -> dict[str, str]:
    content = read_file_safe(root_path / "requirements.txt", warnings)
    if content is None:
        return {}

    dependencies: dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()

        # Skip comments, -r/-e flags, and direct URL installs
        if not line or line.startswith(("#", "-", "git+", "http://", "https://")):
            continue

        parsed = parse_requirement(line)
        if parsed:
            dependencies[parsed[0]] = parsed[1]
    return dependencies


def extract_python(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """
    Extract metadata from Python project files.

    The project name always falls back to the directory name.

    Args:
        root_path: Project root directory
        warnings: List that receives non-fatal problems

    Returns:
        Partial ProjectInfo fields
    """
    fields: dict[str, Any] = {"name": root_path.name}

    declared = _from_pyproject(root_path, warnings)
    if not declared:
        declared = _from_setup_py(root_path, warnings)
    fields.update(declared)

    if "dependencies" not in fields:
        requirements = _from_requirements(root_path, warnings)
        if requirements:
            fields["dependencies"] = requirements

    return fields
