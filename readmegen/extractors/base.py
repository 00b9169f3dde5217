"""
Shared helpers for metadata extractors.

Every extractor is a plain function `extract(root_path, warnings) -> dict`
returning a partial ProjectInfo: only the fields it actually found. The
helpers here read and parse manifest files without ever raising; problems
are appended to the caller's warning list instead.

Design Principles:
    1. Graceful Degradation: missing or malformed files produce no fields
    2. Source Attribution: warnings name the file that caused them
"""

import json
from pathlib import Path
from typing import Any, Optional

# tomllib is in the standard library from Python 3.11; tomli before that
try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore


def read_file_safe(
    path: Path,
    warnings: list[str],
    encoding: str = "utf-8",
) -> Optional[str]:
    """
    Read a file's contents, returning None on any error.

    A missing file is not worth a warning (callers usually probe for
    optional manifests); every other failure is recorded.

    Args:
        path: File to read
        warnings: List that receives a message on failure
        encoding: File encoding (default: utf-8)

    Returns:
        File contents, or None if the file could not be read
    """
    try:
        with open(path, "r", encoding=encoding) as f:
            return f.read()
    except FileNotFoundError:
        return None
    except PermissionError:
        warnings.append(f"Permission denied: {path.name}")
        return None
    except UnicodeDecodeError:
        warnings.append(f"Could not decode file (not {encoding}): {path.name}")
        return None
    except OSError as e:
        warnings.append(f"Could not read file {path.name}: {e}")
        return None


def load_json(path: Path, warnings: list[str]) -> Optional[Any]:
    """Read and parse a JSON file; None if missing or malformed."""
    content = read_file_safe(path, warnings)
    if content is None:
        return None

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        warnings.append(f"Failed to parse {path.name}: {e}")
        return None


def load_toml(path: Path, warnings: list[str]) -> Optional[dict[str, Any]]:
    """Read and parse a TOML file; None if missing or malformed."""
    content = read_file_safe(path, warnings)
    if content is None:
        return None

    try:
        return tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        warnings.append(f"Failed to parse {path.name}: {e}")
        return None


def string_or_none(value: Any) -> Optional[str]:
    """Return `value` if it is a non-empty string, else None."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def string_mapping(value: Any) -> dict[str, str]:
    """
    Coerce a manifest table into a name -> string mapping.

    Non-mapping values yield an empty dict; non-string entries are skipped.
    """
    if not isinstance(value, dict):
        return {}
    return {
        str(key): item
        for key, item in value.items()
        if isinstance(item, str)
    }


def format_person(name: Optional[str], email: Optional[str] = None) -> Optional[str]:
    """Format an author as "Name <email>" (or just the name)."""
    if not name:
        return None
    if email:
        return f"{name} <{email}>"
    return name


def drop_empty(fields: dict[str, Any]) -> dict[str, Any]:
    """Remove None values and empty mappings from a partial record."""
    return {
        key: value
        for key, value in fields.items()
        if value is not None and value != {}
    }
