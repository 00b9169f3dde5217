"""
readmegen Project Detectors

Cheap, existence-based heuristics that classify a project directory:

    - detect_ecosystem(): which toolchain family the project belongs to
    - detect_license(): license identifier from the license file text
    - has_tests(): whether an existing test suite is present
    - detect_ci_provider() / detect_coverage_provider(): which CI and
      coverage services the repository is configured for

Only file existence (and, for licenses, file text) is examined. Manifest
contents are the extractors' job.
"""

from pathlib import Path
from typing import Optional

from readmegen.schema import CIProvider, CoverageProvider, Ecosystem

# Marker files per ecosystem, checked in this order; first match wins.
# A polyglot repository with both package.json and go.mod is a Node.js project.
ECOSYSTEM_MARKERS: list[tuple[Ecosystem, tuple[str, ...]]] = [
    (Ecosystem.NODE, ("package.json",)),
    (Ecosystem.PYTHON, ("setup.py", "pyproject.toml", "requirements.txt")),
    (Ecosystem.GO, ("go.mod",)),
    (Ecosystem.RUST, ("Cargo.toml",)),
]

LICENSE_FILENAMES: tuple[str, ...] = ("LICENSE", "LICENSE.md", "LICENSE.txt", "LICENCE")

# (substring, identifier); first substring found in the license text wins
LICENSE_SIGNATURES: list[tuple[str, str]] = [
    ("MIT License", "MIT"),
    ("Apache License", "Apache-2.0"),
    ("GNU GENERAL PUBLIC LICENSE", "GPL-3.0"),
    ("BSD", "BSD"),
]

CUSTOM_LICENSE = "Custom"

TEST_DIRS: tuple[str, ...] = ("test", "tests", "__tests__", "spec")
TEST_FILES: tuple[str, ...] = ("test.js", "test.ts", "test.py", "test.go")
TEST_INFIXES: tuple[str, ...] = (".test.", ".spec.")

CI_MARKERS: list[tuple[str, CIProvider]] = [
    (".github/workflows", CIProvider.GITHUB_ACTIONS),
    (".circleci", CIProvider.CIRCLECI),
    (".travis.yml", CIProvider.TRAVIS),
]

COVERAGE_MARKERS: list[tuple[str, CoverageProvider]] = [
    ("codecov.yml", CoverageProvider.CODECOV),
    (".codecov.yml", CoverageProvider.CODECOV),
    (".coveralls.yml", CoverageProvider.COVERALLS),
]


def detect_ecosystem(path: str | Path) -> Ecosystem:
    """
    Classify a project by the marker files in its root directory.

    Args:
        path: Project root directory

    Returns:
        The first ecosystem whose marker exists, or Ecosystem.UNKNOWN
    """
    root = Path(path)
    for ecosystem, markers in ECOSYSTEM_MARKERS:
        if any((root / marker).exists() for marker in markers):
            return ecosystem
    return Ecosystem.UNKNOWN


def classify_license_text(content: str) -> str:
    """Map license file text to an identifier, or "Custom" if unrecognized."""
    for signature, identifier in LICENSE_SIGNATURES:
        if signature in content:
            return identifier
    return CUSTOM_LICENSE


def detect_license(
    path: str | Path,
    warnings: Optional[list[str]] = None,
) -> Optional[str]:
    """
    Detect the project license from the first conventional license file.

    Only the first existing file in LICENSE_FILENAMES is considered, even if
    its text is unrecognized.

    Args:
        path: Project root directory
        warnings: Optional list that receives a message if the file is unreadable

    Returns:
        License identifier, "Custom" for unrecognized text, or None when no
        license file exists
    """
    root = Path(path)
    for filename in LICENSE_FILENAMES:
        license_path = root / filename
        if not license_path.exists():
            continue

        try:
            content = license_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            if warnings is not None:
                warnings.append(f"Could not read {filename}: {e}")
            return None

        return classify_license_text(content)

    return None


def has_tests(path: str | Path) -> bool:
    """
    Heuristically decide whether the project has a test suite.

    True if a conventional test directory or root-level test file exists,
    or if any root entry looks like "*.test.*" / "*.spec.*".
    """
    root = Path(path)

    if any((root / name).exists() for name in TEST_DIRS):
        return True

    if any((root / name).exists() for name in TEST_FILES):
        return True

    try:
        names = [entry.name for entry in root.iterdir()]
    except OSError:
        return False

    return any(infix in name for name in names for infix in TEST_INFIXES)


def detect_ci_provider(path: str | Path) -> Optional[CIProvider]:
    """Return the CI service the repository is configured for, if any."""
    root = Path(path)
    for marker, provider in CI_MARKERS:
        if (root / marker).exists():
            return provider
    return None


def detect_coverage_provider(path: str | Path) -> Optional[CoverageProvider]:
    """Return the coverage service the repository is configured for, if any."""
    root = Path(path)
    for marker, provider in COVERAGE_MARKERS:
        if (root / marker).exists():
            return provider
    return None
