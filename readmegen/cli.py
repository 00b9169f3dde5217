"""
readmegen Command-Line Interface

This module provides the CLI entry point for readmegen. It orchestrates the
full pipeline: analysis -> badge selection -> rendering -> output.

Usage:
    readmegen /path/to/project
    readmegen /path/to/project --output docs/README.md
    readmegen /path/to/project --stdout --template detailed
    readmegen /path/to/project --badges --ci github-actions

Output Conventions:
    - Progress and diagnostics go to stderr, prefixed with [readmegen]
    - stdout carries only the result: the written file's path, or the
      rendered README between horizontal rules when --stdout is given
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from readmegen import __version__
from readmegen.analyzer import analyze_project
from readmegen.badges import BadgeConfig, all_badges_config, auto_badge_config
from readmegen.renderer import compose_readme
from readmegen.schema import (
    CIProvider,
    CoverageProvider,
    ProjectInfo,
    QualityProvider,
    Template,
)
from readmegen.tree import DEFAULT_MAX_DEPTH

RULE = "─" * 50

stdout_console = Console()
stderr_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="readmegen",
        description=(
            "readmegen: Auto-generate a README from your project structure.\n\n"
            "Detects the project's ecosystem (Node.js, Python, Go, Rust), reads "
            "its manifest, and renders a README from a template tier."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  readmegen .                          # Write ./README.md\n"
            "  readmegen ../app -o ../app/README.md # Custom output path\n"
            "  readmegen . --stdout -t minimal      # Preview a minimal README\n"
            "  readmegen . --badges                 # Add auto-detected badges\n"
            "  readmegen . --all-badges --ci travis # Every badge, Travis CI build badge\n"
        ),
    )

    # Positional argument: project path
    parser.add_argument(
        "path",
        type=str,
        nargs="?",
        default=".",
        help="Path to the project directory (default: current directory)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default="README.md",
        help="Output file path (default: README.md)",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the README to stdout instead of writing a file",
    )

    # Content options
    parser.add_argument(
        "-t", "--template",
        choices=[t.value for t in Template],
        default=Template.STANDARD.value,
        help="README template tier (default: standard)",
    )

    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Depth of the project structure tree (default: {DEFAULT_MAX_DEPTH})",
    )

    # Badge options
    badges = parser.add_argument_group("badges")
    badges.add_argument(
        "--badges",
        action="store_true",
        help="Add badges auto-detected from the project",
    )
    badges.add_argument(
        "--npm",
        action="store_true",
        help="Add npm version and downloads badges",
    )
    badges.add_argument(
        "--ci",
        choices=[p.value for p in CIProvider],
        default=None,
        help="Add a CI build badge for this provider",
    )
    badges.add_argument(
        "--coverage",
        choices=[p.value for p in CoverageProvider],
        default=None,
        help="Add a coverage badge for this provider",
    )
    badges.add_argument(
        "--quality",
        choices=[p.value for p in QualityProvider],
        default=None,
        help="Add a code quality badge for this provider",
    )
    badges.add_argument(
        "--github",
        action="store_true",
        help="Add a GitHub stars badge",
    )
    badges.add_argument(
        "--all-badges",
        action="store_true",
        help="Enable every badge at once",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors and the result",
    )

    # Version
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def _print(console: Console, message: str, style: Optional[str] = None) -> None:
    console.print(message, style=style, markup=False, highlight=False, soft_wrap=True)


def log(message: str, quiet: bool = False, style: str = "blue") -> None:
    """
    Print a progress message to stderr.

    Args:
        message: The message to print
        quiet: If True, suppress the message
        style: Rich style for the message
    """
    if quiet:
        return
    _print(stderr_console, f"[readmegen] {message}", style)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        _print(stderr_console, f"  {message}", "dim")


def error(message: str) -> None:
    """Print an error diagnostic to stderr."""
    _print(stderr_console, f"Error: {message}", "bold red")


def build_badge_config(
    args: argparse.Namespace,
    info: ProjectInfo,
) -> Optional[BadgeConfig]:
    """
    Translate badge flags into a BadgeConfig.

    Returns None when no badge flag was given, so no badge line is rendered.
    Explicit provider flags override auto-detected providers.
    """
    ci = CIProvider(args.ci) if args.ci else None
    coverage = CoverageProvider(args.coverage) if args.coverage else None
    quality = QualityProvider(args.quality) if args.quality else None

    if args.all_badges:
        return all_badges_config(ci, coverage, quality)

    if not (args.badges or args.npm or args.github or ci or coverage or quality):
        return None

    config = auto_badge_config(info) if args.badges else BadgeConfig()
    if args.npm:
        config.npm = config.version = config.downloads = True
    if args.github:
        config.github = True
    if ci:
        config.ci = ci
    if coverage:
        config.coverage = coverage
    if quality:
        config.quality = quality
    return config


def run_pipeline(
    project_path: Path,
    output_path: Path,
    args: argparse.Namespace,
) -> int:
    """
    Run the full readmegen pipeline.

    Args:
        project_path: Project directory to analyze
        output_path: Where to write the README (ignored with --stdout)
        args: Parsed command-line arguments

    Returns:
        Exit code (0 = success, 1 = error)
    """
    verbose, quiet = args.verbose, args.quiet

    # Validate project path
    if not project_path.exists():
        error(f"Path does not exist: {project_path}")
        return 1

    if not project_path.is_dir():
        error(f"Path is not a directory: {project_path}")
        return 1

    # Step 1: Analysis
    log("Analyzing project...", quiet=quiet)

    try:
        info = analyze_project(project_path, max_depth=args.depth)
    except Exception as e:
        error(f"Analysis failed: {e}")
        return 1

    log(f"Detected project type: {info.ecosystem}", quiet=quiet, style="green")

    log_verbose(f"Project name: {info.name}", verbose, quiet)
    if info.version:
        log_verbose(f"Version: {info.version}", verbose, quiet)
    if info.license:
        log_verbose(f"License: {info.license}", verbose, quiet)
    log_verbose(f"Dependencies: {len(info.dependencies)}", verbose, quiet)
    log_verbose(f"Dev dependencies: {len(info.dev_dependencies)}", verbose, quiet)
    log_verbose(f"Tests detected: {'yes' if info.has_tests else 'no'}", verbose, quiet)

    for warning in info.warnings:
        log(f"Warning: {warning}", quiet=quiet, style="yellow")

    # Step 2: Render README
    template = Template(args.template)
    log(f"Rendering {template} README...", quiet=quiet)

    try:
        readme = compose_readme(info, template, build_badge_config(args, info))
    except Exception as e:
        error(f"Rendering failed: {e}")
        return 1

    # Step 3: Output
    if args.stdout:
        _print(stdout_console, "")
        _print(stdout_console, RULE, "dim")
        _print(stdout_console, "")
        print(readme)
        _print(stdout_console, RULE, "dim")
        return 0

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(readme)
    except OSError as e:
        error(f"Could not write {output_path}: {e}")
        return 1

    _print(stdout_console, f"README generated: {output_path}", "green")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    project_path = Path(args.path).resolve()
    output_path = Path(args.output).resolve()

    try:
        return run_pipeline(project_path, output_path, args)
    except Exception as e:
        error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
