"""
Go Metadata Extractor

Reads the module path from go.mod. The full module path (for example
"github.com/acme/tool") becomes the project name, and a module hosted on a
known forge also yields the repository URL.

Dependencies come from `require` directives only, either single-line
(`require example.com/x v1.0.0`) or grouped in a `require ( ... )` block.
`replace`, `exclude` and `retract` directives are ignored.
"""

import re
from pathlib import Path
from typing import Any

from readmegen.extractors.base import read_file_safe

MODULE_PATTERN = re.compile(r"^\s*module\s+(\S+)", re.MULTILINE)
REQUIREMENT_PATTERN = re.compile(r"^([\w.\-/]+\.[\w.\-/]+)\s+(v\S+)")
BLOCK_START_PATTERN = re.compile(r"^(\w+)\s*\($")

FORGE_HOSTS = ("github.com/", "gitlab.com/", "bitbucket.org/")


def _parse_requirements(content: str) -> dict[str, str]:
    """Collect module -> version from the require directives of go.mod."""
    dependencies: dict[str, str] = {}
    block = None

    for raw_line in content.splitlines():
        line = raw_line.split("//", 1)[0].strip()
        if not line:
            continue

        if block is not None:
            if line == ")":
                block = None
            elif block == "require":
                match = REQUIREMENT_PATTERN.match(line)
                if match:
                    dependencies[match.group(1)] = match.group(2)
            continue

        start = BLOCK_START_PATTERN.match(line)
        if start:
            block = start.group(1)
            continue

        parts = line.split(None, 1)
        if len(parts) == 2 and parts[0] == "require":
            match = REQUIREMENT_PATTERN.match(parts[1])
            if match:
                dependencies[match.group(1)] = match.group(2)

    return dependencies


def extract_go(root_path: Path, warnings: list[str]) -> dict[str, Any]:
    """
    Extract the module declaration and requirements from go.mod.

    Returns:
        Partial ProjectInfo fields; empty if go.mod is missing or unreadable
    """
    content = read_file_safe(root_path / "go.mod", warnings)
    if content is None:
        return {}

    fields: dict[str, Any] = {}

    match = MODULE_PATTERN.search(content)
    if match:
        module = match.group(1).strip('"')
        fields["name"] = module
        if module.startswith(FORGE_HOSTS):
            # Keep only host/owner/repo; sub-packages and /vN suffixes are dropped
            fields["repository_url"] = "https://" + "/".join(module.split("/")[:3])
    else:
        warnings.append("go.mod has no module declaration")

    dependencies = _parse_requirements(content)
    if dependencies:
        fields["dependencies"] = dependencies

    return fields
