"""
readmegen Badge Composer

Builds the line of shields-style markdown badges shown under the README
title. Every badge is an image wrapped in a link:

    [![alt](image-url)](target-url)

Supported badges (rendered in this order):
    version -> downloads -> license -> CI -> coverage -> quality -> stars

A badge is emitted only when its toggle is on AND the identifying value it
needs (package name, owner/repo slug, license) is available; otherwise it is
skipped silently.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from readmegen.schema import (
    CIProvider,
    CoverageProvider,
    Ecosystem,
    ProjectInfo,
    QualityProvider,
)

PERMISSIVE_LICENSES: frozenset[str] = frozenset(
    {"MIT", "Apache-2.0", "BSD-3-Clause", "BSD-2-Clause", "ISC"}
)
COPYLEFT_LICENSES: frozenset[str] = frozenset(
    {"GPL-3.0", "GPL-2.0", "AGPL-3.0", "LGPL-3.0"}
)

# github.com/owner/repo or github.com:owner/repo, optional .git suffix
REPO_SLUG_PATTERN = re.compile(r"github\.com[:/]([^/]+/[^/]+?)(?:\.git)?/?$")


@dataclass
class BadgeConfig:
    """
    Which badges to render.

    Attributes:
        npm: Shorthand for both npm badges (version and downloads)
        github: GitHub stars badge
        ci: CI provider whose build badge to show
        coverage: Coverage provider whose badge to show
        quality: Code quality provider whose badge to show
        license: License badge
        downloads: npm monthly downloads badge
        version: npm version badge
    """
    npm: bool = False
    github: bool = False
    ci: Optional[CIProvider] = None
    coverage: Optional[CoverageProvider] = None
    quality: Optional[QualityProvider] = None
    license: bool = False
    downloads: bool = False
    version: bool = False


@dataclass
class BadgeOptions:
    """
    Identifying values the badges are built from.

    Attributes:
        package_name: Package name on the npm registry
        github_repo: Repository slug in "owner/repo" form
        license: License identifier (e.g. "MIT")
    """
    package_name: Optional[str] = None
    github_repo: Optional[str] = None
    license: Optional[str] = None


def badge(alt: str, image_url: str, target_url: str) -> str:
    """Format a single linked markdown badge."""
    return f"[![{alt}]({image_url})]({target_url})"


def npm_version_badge(package_name: str) -> str:
    return badge(
        "npm version",
        f"https://img.shields.io/npm/v/{package_name}",
        f"https://www.npmjs.com/package/{package_name}",
    )


def npm_downloads_badge(package_name: str) -> str:
    return badge(
        "npm downloads",
        f"https://img.shields.io/npm/dm/{package_name}",
        f"https://www.npmjs.com/package/{package_name}",
    )


def license_color(license_id: str) -> str:
    """Yellow for permissive licenses, blue for copyleft, green otherwise."""
    if license_id in PERMISSIVE_LICENSES:
        return "yellow"
    if license_id in COPYLEFT_LICENSES:
        return "blue"
    return "green"


def license_badge(license_id: str) -> str:
    quoted = quote(license_id, safe="")
    # shields.io static badges use "-" as a separator; a literal dash is "--"
    label = quoted.replace("-", "--")
    return badge(
        f"License: {license_id}",
        f"https://img.shields.io/badge/License-{label}-{license_color(license_id)}.svg",
        f"https://opensource.org/licenses/{quoted}",
    )


def ci_badge(provider: CIProvider, repo: str) -> str:
    if provider is CIProvider.GITHUB_ACTIONS:
        return badge(
            "CI",
            f"https://github.com/{repo}/actions/workflows/ci.yml/badge.svg",
            f"https://github.com/{repo}/actions",
        )
    if provider is CIProvider.CIRCLECI:
        return badge(
            "CircleCI",
            f"https://circleci.com/gh/{repo}.svg?style=shield",
            f"https://circleci.com/gh/{repo}",
        )
    return badge(
        "Build Status",
        f"https://travis-ci.org/{repo}.svg?branch=main",
        f"https://travis-ci.org/{repo}",
    )


def coverage_badge(provider: CoverageProvider, repo: str) -> str:
    if provider is CoverageProvider.CODECOV:
        return badge(
            "codecov",
            f"https://codecov.io/gh/{repo}/branch/main/graph/badge.svg",
            f"https://codecov.io/gh/{repo}",
        )
    return badge(
        "Coverage Status",
        f"https://coveralls.io/repos/github/{repo}/badge.svg?branch=main",
        f"https://coveralls.io/github/{repo}?branch=main",
    )


def quality_badge(provider: QualityProvider, repo: str) -> str:
    if provider is QualityProvider.CODECLIMATE:
        return badge(
            "Maintainability",
            f"https://api.codeclimate.com/v1/badges/{repo}/maintainability",
            f"https://codeclimate.com/github/{repo}/maintainability",
        )
    return badge(
        "CodeFactor",
        f"https://www.codefactor.io/repository/github/{repo}/badge",
        f"https://www.codefactor.io/repository/github/{repo}",
    )


def github_stars_badge(repo: str) -> str:
    return badge(
        "GitHub stars",
        f"https://img.shields.io/github/stars/{repo}?style=social",
        f"https://github.com/{repo}",
    )


def compose_badges(config: BadgeConfig, options: BadgeOptions) -> str:
    """
    Render all enabled badges as one space-separated markdown line.

    Args:
        config: Which badges are enabled
        options: Values the badges are built from

    Returns:
        The badge line with a trailing newline, or "" when no badge applies.
        Callers should omit the badge section entirely for "".
    """
    badges: list[str] = []
    package = options.package_name
    repo = options.github_repo

    if (config.version or config.npm) and package:
        badges.append(npm_version_badge(package))

    if (config.downloads or config.npm) and package:
        badges.append(npm_downloads_badge(package))

    if config.license and options.license:
        badges.append(license_badge(options.license))

    if config.ci and repo:
        badges.append(ci_badge(config.ci, repo))

    if config.coverage and repo:
        badges.append(coverage_badge(config.coverage, repo))

    if config.quality and repo:
        badges.append(quality_badge(config.quality, repo))

    if config.github and repo:
        badges.append(github_stars_badge(repo))

    return " ".join(badges) + "\n" if badges else ""


def parse_repo_slug(url: Optional[str]) -> Optional[str]:
    """
    Extract "owner/repo" from a GitHub repository URL.

    Accepts https://github.com/owner/repo, git@github.com:owner/repo and the
    "git+https://" form npm manifests use, each with an optional .git suffix.

    Example:
        >>> parse_repo_slug("git@github.com:acme/widget.git")
        'acme/widget'
        >>> parse_repo_slug("https://gitlab.com/acme/widget") is None
        True
    """
    if not url:
        return None
    match = REPO_SLUG_PATTERN.search(url.strip())
    return match.group(1) if match else None


def badge_options_for(info: ProjectInfo) -> BadgeOptions:
    """
    Derive badge options from an analyzed project.

    Only Node.js projects have an npm package name, so npm badges are
    skipped for every other ecosystem.
    """
    return BadgeOptions(
        package_name=info.name if info.ecosystem is Ecosystem.NODE else None,
        github_repo=parse_repo_slug(info.repository_url),
        license=info.license,
    )


def auto_badge_config(info: ProjectInfo) -> BadgeConfig:
    """
    Choose badges from what the analysis detected.

    npm badges are only meaningful for Node.js packages; CI and coverage
    badges follow the providers found in the repository's config files.
    """
    is_npm = info.ecosystem is Ecosystem.NODE
    return BadgeConfig(
        npm=is_npm,
        version=is_npm,
        downloads=is_npm,
        license=True,
        github=True,
        ci=info.ci_provider,
        coverage=info.coverage_provider,
        quality=None,
    )


def all_badges_config(
    ci: Optional[CIProvider] = None,
    coverage: Optional[CoverageProvider] = None,
    quality: Optional[QualityProvider] = None,
) -> BadgeConfig:
    """Enable every badge, using the given providers or the defaults."""
    return BadgeConfig(
        npm=True,
        github=True,
        ci=ci or CIProvider.GITHUB_ACTIONS,
        coverage=coverage or CoverageProvider.CODECOV,
        quality=quality or QualityProvider.CODECLIMATE,
        license=True,
        downloads=True,
        version=True,
    )
