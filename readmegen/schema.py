"""
readmegen Project Schema

This module defines the data structures that flow through the generation
pipeline. The analyzer builds exactly one ProjectInfo per run; every other
stage (badges, renderer, CLI, API) only reads it.

Design Principles:
    1. The ecosystem is a closed enum; ecosystem-specific behavior lives in
       lookup tables keyed by it, never in subclasses
    2. Optional fields are None when nothing could be discovered
    3. ProjectInfo is frozen once the analyzer returns it
    4. Non-fatal analysis problems travel with the record as warnings
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Ecosystem(Enum):
    """
    Toolchain family of an analyzed project.

    Detection order is NODE, PYTHON, GO, RUST; anything else is UNKNOWN.
    """
    NODE = "node"
    PYTHON = "python"
    GO = "go"
    RUST = "rust"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# Display names used in prose sections and CLI output
ECOSYSTEM_LABELS: dict[Ecosystem, str] = {
    Ecosystem.NODE: "Node.js",
    Ecosystem.PYTHON: "Python",
    Ecosystem.GO: "Go",
    Ecosystem.RUST: "Rust",
    Ecosystem.UNKNOWN: "Unknown",
}


class Template(Enum):
    """README verbosity tiers, each a superset of the previous one."""
    MINIMAL = "minimal"
    STANDARD = "standard"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"

    def __str__(self) -> str:
        return self.value


class CIProvider(Enum):
    GITHUB_ACTIONS = "github-actions"
    CIRCLECI = "circleci"
    TRAVIS = "travis"


class CoverageProvider(Enum):
    CODECOV = "codecov"
    COVERALLS = "coveralls"


class QualityProvider(Enum):
    CODECLIMATE = "codeclimate"
    CODEFACTOR = "codefactor"


@dataclass(frozen=True)
class ProjectInfo:
    """
    Everything the renderer needs to know about a project.

    Attributes:
        ecosystem: Detected toolchain family (decided once, by marker files)
        name: Display name (directory name unless a manifest says otherwise)
        description: Short project description
        version: Declared version string
        license: License identifier (e.g. "MIT", "Apache-2.0", "Custom")
        author: Primary author as a single display string
        repository_url: Source repository URL as declared in the manifest
        scripts: Task name -> shell command (Node.js projects only)
        dependencies: Package name -> version range
        dev_dependencies: Package name -> version range (development only)
        file_tree: Pre-rendered ASCII tree of the project directory
        has_tests: Whether an existing test suite was detected
        ci_provider: CI service inferred from config files, if any
        coverage_provider: Coverage service inferred from config files, if any
        warnings: Non-fatal problems encountered during analysis

    Example:
        >>> info = ProjectInfo(ecosystem=Ecosystem.NODE, name="my-app")
        >>> info.file_tree
        ''
    """
    ecosystem: Ecosystem
    name: str
    description: Optional[str] = None
    version: Optional[str] = None
    license: Optional[str] = None
    author: Optional[str] = None
    repository_url: Optional[str] = None
    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    file_tree: str = ""
    has_tests: bool = False
    ci_provider: Optional[CIProvider] = None
    coverage_provider: Optional[CoverageProvider] = None
    warnings: tuple[str, ...] = ()

    @property
    def ecosystem_label(self) -> str:
        """Human-readable ecosystem name (e.g. "Node.js")."""
        return ECOSYSTEM_LABELS[self.ecosystem]

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Enum members are replaced by their string values.
        """
        return {
            "ecosystem": self.ecosystem.value,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "license": self.license,
            "author": self.author,
            "repository_url": self.repository_url,
            "scripts": dict(self.scripts),
            "dependencies": dict(self.dependencies),
            "dev_dependencies": dict(self.dev_dependencies),
            "file_tree": self.file_tree,
            "has_tests": self.has_tests,
            "ci_provider": self.ci_provider.value if self.ci_provider else None,
            "coverage_provider": (
                self.coverage_provider.value if self.coverage_provider else None
            ),
            "warnings": list(self.warnings),
        }
