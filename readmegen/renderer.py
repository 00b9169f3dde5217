"""
readmegen Markdown Renderer

This module generates README.md content from an analyzed ProjectInfo.

Every README section is a small pure function of the project (plus the
badge configuration) registered in SECTIONS under an identifier. A template
tier is nothing more than an ordered tuple of those identifiers in TIERS:

    minimal       title, description, installation, usage, short license
    standard      + badges, scripts, project structure, development
    detailed      + table of contents, features, examples, API docs,
                    dependencies, troubleshooting
    comprehensive + about, prerequisites, deployment, roadmap, changelog,
                    authors, acknowledgments

Each tier's headings are a superset of the previous tier's. A section
function returns None when it does not apply to the project (no scripts, no
license, no author, ...), and that section is dropped without leaving an
empty heading behind. Sections are joined with one blank line.

Ecosystem-specific shell commands come from the lookup tables
INSTALL_COMMANDS, RUN_COMMANDS and TEST_COMMANDS.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from readmegen.badges import BadgeConfig, badge_options_for, compose_badges
from readmegen.schema import Ecosystem, ProjectInfo, Template

INSTALL_COMMANDS: dict[Ecosystem, Optional[str]] = {
    Ecosystem.NODE: "npm install",
    Ecosystem.PYTHON: "pip install -r requirements.txt",
    Ecosystem.GO: "go mod download",
    Ecosystem.RUST: "cargo build",
    Ecosystem.UNKNOWN: None,
}

RUN_COMMANDS: dict[Ecosystem, Optional[str]] = {
    Ecosystem.NODE: "node index.js",
    Ecosystem.PYTHON: "python main.py",
    Ecosystem.GO: "go run main.go",
    Ecosystem.RUST: "cargo run",
    Ecosystem.UNKNOWN: None,
}

TEST_COMMANDS: dict[Ecosystem, Optional[str]] = {
    Ecosystem.NODE: "npm test",
    Ecosystem.PYTHON: "pytest",
    Ecosystem.GO: "go test ./...",
    Ecosystem.RUST: "cargo test",
    Ecosystem.UNKNOWN: None,
}

BUILD_COMMANDS: dict[Ecosystem, Optional[str]] = {
    Ecosystem.NODE: "npm run build",
    Ecosystem.PYTHON: "python -m build",
    Ecosystem.GO: "go build ./...",
    Ecosystem.RUST: "cargo build --release",
    Ecosystem.UNKNOWN: None,
}

PREREQUISITES: dict[Ecosystem, tuple[str, ...]] = {
    Ecosystem.NODE: ("Node.js (LTS recommended)", "npm"),
    Ecosystem.PYTHON: ("Python 3", "pip"),
    Ecosystem.GO: ("Go (see `go.mod` for the required version)",),
    Ecosystem.RUST: ("Rust toolchain", "Cargo"),
    Ecosystem.UNKNOWN: (),
}

INSTALL_PLACEHOLDER = "Installation instructions coming soon."
USAGE_PLACEHOLDER = "Usage instructions coming soon."
TEST_PLACEHOLDER = "Test instructions coming soon."


def code_block(command: str, language: str = "bash") -> str:
    return f"```{language}\n{command}\n```\n"


def install_command(info: ProjectInfo) -> Optional[str]:
    return INSTALL_COMMANDS[info.ecosystem]


def run_command(info: ProjectInfo) -> Optional[str]:
    """The command that starts the project; `npm start` if a start script exists."""
    if info.ecosystem is Ecosystem.NODE and "start" in info.scripts:
        return "npm start"
    return RUN_COMMANDS[info.ecosystem]


def test_command(info: ProjectInfo) -> Optional[str]:
    return TEST_COMMANDS[info.ecosystem]


def build_command(info: ProjectInfo) -> Optional[str]:
    if info.ecosystem is Ecosystem.NODE and "build" not in info.scripts:
        return None
    return BUILD_COMMANDS[info.ecosystem]


def heading_anchor(heading: str) -> str:
    """GitHub-style anchor for a heading ("Running Tests" -> "running-tests")."""
    anchor = re.sub(r"[^\w\s-]", "", heading.strip().lower())
    return re.sub(r"\s", "-", anchor)


@dataclass(frozen=True)
class RenderContext:
    """Inputs available to every section function."""
    info: ProjectInfo
    badges: Optional[BadgeConfig] = None


SectionRenderer = Callable[[RenderContext], Optional[str]]


def _title(ctx: RenderContext) -> Optional[str]:
    return f"# {ctx.info.name}\n"


def _description(ctx: RenderContext) -> Optional[str]:
    if not ctx.info.description:
        return None
    return f"{ctx.info.description}\n"


def _badges(ctx: RenderContext) -> Optional[str]:
    if ctx.badges is None:
        return None
    return compose_badges(ctx.badges, badge_options_for(ctx.info)) or None


def _about(ctx: RenderContext) -> Optional[str]:
    info = ctx.info
    section = "## About\n\n"
    if info.description:
        section += f"{info.description}\n"
    else:
        section += f"{info.name} is a {info.ecosystem_label} project.\n"
    if info.version:
        section += f"\nCurrent version: `{info.version}`\n"
    return section


def _features(ctx: RenderContext) -> Optional[str]:
    info = ctx.info
    features = []

    if info.ecosystem is not Ecosystem.UNKNOWN:
        features.append(f"Built with {info.ecosystem_label}")
    if info.scripts:
        features.append(f"{len(info.scripts)} ready-to-use npm scripts")
    if info.dependencies:
        features.append(f"Relies on {len(info.dependencies)} well-known packages")
    if info.has_tests:
        features.append("Automated test suite")
    if not features:
        features.append("Simple, self-contained project layout")

    return "## Features\n\n" + "".join(f"- {feature}\n" for feature in features)


def _prerequisites(ctx: RenderContext) -> Optional[str]:
    requirements = PREREQUISITES[ctx.info.ecosystem]
    section = "## Prerequisites\n\n"
    if not requirements:
        return section + "No special prerequisites.\n"
    return section + "".join(f"- {requirement}\n" for requirement in requirements)


def _installation(ctx: RenderContext) -> Optional[str]:
    command = install_command(ctx.info)
    section = "## Installation\n\n"
    if command is None:
        return section + f"{INSTALL_PLACEHOLDER}\n"
    return section + code_block(command)


def _usage(ctx: RenderContext) -> Optional[str]:
    command = run_command(ctx.info)
    section = "## Usage\n\n"
    if command is None:
        return section + f"{USAGE_PLACEHOLDER}\n"
    return section + code_block(command)


def _scripts(ctx: RenderContext) -> Optional[str]:
    if not ctx.info.scripts:
        return None
    section = "## Available Scripts\n\n"
    for name, command in ctx.info.scripts.items():
        section += f"- **{name}**: `{command}`\n"
    return section


def _examples(ctx: RenderContext) -> Optional[str]:
    section = "## Examples\n\n"
    command = run_command(ctx.info)
    if command is None:
        return section + "Examples coming soon.\n"
    section += "Run the project from its root directory:\n\n"
    return section + code_block(command)


def _api_documentation(ctx: RenderContext) -> Optional[str]:
    return (
        "## API Documentation\n\n"
        f"Document the public interface of {ctx.info.name} here: "
        "exported functions, their parameters and return values.\n"
    )


def _dependency_table(title: str, dependencies: dict[str, str]) -> str:
    table = f"### {title}\n\n"
    table += "| Package | Version |\n"
    table += "|---------|---------|\n"
    for name, version in dependencies.items():
        table += f"| {name} | {version} |\n"
    return table


def _dependencies(ctx: RenderContext) -> Optional[str]:
    info = ctx.info
    if not info.dependencies and not info.dev_dependencies:
        return None

    tables = []
    if info.dependencies:
        tables.append(_dependency_table("Runtime Dependencies", info.dependencies))
    if info.dev_dependencies:
        tables.append(_dependency_table("Development Dependencies", info.dev_dependencies))
    return "## Dependencies\n\n" + "\n".join(tables)


def _project_structure(ctx: RenderContext) -> Optional[str]:
    return f"## Project Structure\n\n```\n{ctx.info.file_tree}```\n"


def _development(ctx: RenderContext) -> Optional[str]:
    section = "## Development\n\n"

    if ctx.info.has_tests:
        section += "### Running Tests\n\n"
        command = test_command(ctx.info)
        if command is None:
            section += f"{TEST_PLACEHOLDER}\n\n"
        else:
            section += code_block(command) + "\n"

    section += "### Contributing\n\n"
    section += "Contributions are welcome! Please feel free to submit a Pull Request.\n"
    return section


def _troubleshooting(ctx: RenderContext) -> Optional[str]:
    section = "## Troubleshooting\n\n"
    command = install_command(ctx.info)
    if command is not None:
        section += f"- If something fails to start, reinstall dependencies with `{command}`.\n"
    section += "- Make sure you are running commands from the project root.\n"
    section += "- Still stuck? Open an issue with the full error output.\n"
    return section


def _deployment(ctx: RenderContext) -> Optional[str]:
    section = "## Deployment\n\n"
    command = build_command(ctx.info)
    if command is None:
        return section + "Deployment instructions coming soon.\n"
    section += "Build a production artifact with:\n\n"
    return section + code_block(command)


def _roadmap(ctx: RenderContext) -> Optional[str]:
    return (
        "## Roadmap\n\n"
        "- [ ] Expand documentation\n"
        "- [ ] Add more examples\n"
        "- [ ] Improve test coverage\n"
    )


def _changelog(ctx: RenderContext) -> Optional[str]:
    section = "## Changelog\n\n"
    if ctx.info.version:
        return section + f"### {ctx.info.version}\n\n- Current release\n"
    return section + "See the commit history for a list of changes.\n"


def _license(ctx: RenderContext) -> Optional[str]:
    if not ctx.info.license:
        return None
    return f"## License\n\nThis project is licensed under the {ctx.info.license} License.\n"


def _license_short(ctx: RenderContext) -> Optional[str]:
    if not ctx.info.license:
        return None
    return f"## License\n\n{ctx.info.license}\n"


def _authors(ctx: RenderContext) -> Optional[str]:
    if not ctx.info.author:
        return None
    return f"## Authors\n\n- **{ctx.info.author}**\n"


def _acknowledgments(ctx: RenderContext) -> Optional[str]:
    return (
        "## Acknowledgments\n\n"
        "- Thanks to everyone who has contributed to this project\n"
        "- Inspired by the open source community\n"
    )


TOC = "toc"

SECTIONS: dict[str, SectionRenderer] = {
    "title": _title,
    "description": _description,
    "badges": _badges,
    "about": _about,
    "features": _features,
    "prerequisites": _prerequisites,
    "installation": _installation,
    "usage": _usage,
    "scripts": _scripts,
    "examples": _examples,
    "api_documentation": _api_documentation,
    "dependencies": _dependencies,
    "project_structure": _project_structure,
    "development": _development,
    "troubleshooting": _troubleshooting,
    "deployment": _deployment,
    "roadmap": _roadmap,
    "changelog": _changelog,
    "license": _license,
    "license_short": _license_short,
    "authors": _authors,
    "acknowledgments": _acknowledgments,
}

TIERS: dict[Template, tuple[str, ...]] = {
    Template.MINIMAL: (
        "title", "description", "installation", "usage", "license_short",
    ),
    Template.STANDARD: (
        "title", "description", "badges", "installation", "usage", "scripts",
        "project_structure", "development", "license",
    ),
    Template.DETAILED: (
        "title", "description", "badges", TOC, "features", "installation",
        "usage", "scripts", "examples", "api_documentation", "dependencies",
        "project_structure", "development", "troubleshooting", "license",
    ),
    Template.COMPREHENSIVE: (
        "title", "description", "badges", TOC, "about", "features",
        "prerequisites", "installation", "usage", "scripts", "examples",
        "api_documentation", "dependencies", "project_structure",
        "development", "deployment", "roadmap", "changelog", "license",
        "authors", "acknowledgments",
    ),
}


def table_of_contents(sections: list[str]) -> str:
    """
    Build a linked list of the level-2 section headings in `sections`.

    Only a section's first line can be its heading; text inside a section
    (a description, a fenced block) never adds an entry.
    """
    entries = []
    for section in sections:
        first_line = section.split("\n", 1)[0]
        if first_line.startswith("## "):
            title = first_line[3:].strip()
            entries.append(f"- [{title}](#{heading_anchor(title)})\n")
    return "## Table of Contents\n\n" + "".join(entries)


@dataclass
class RenderOptions:
    """
    Configuration options for README rendering.

    Attributes:
        template: Which tier of sections to render
        badges: Badge configuration; None renders no badge line
    """
    template: Template = Template.STANDARD
    badges: Optional[BadgeConfig] = None


class ReadmeRenderer:
    """
    Renders a ProjectInfo into Markdown README content.

    Usage:
        renderer = ReadmeRenderer(info)
        readme_content = renderer.render()

        # With a richer tier and badges
        options = RenderOptions(Template.DETAILED, auto_badge_config(info))
        readme_content = ReadmeRenderer(info, options).render()
    """

    def __init__(
        self,
        info: ProjectInfo,
        options: Optional[RenderOptions] = None,
    ):
        self.info = info
        self.options = options or RenderOptions()

    def section_ids(self) -> tuple[str, ...]:
        return TIERS[self.options.template]

    def render(self) -> str:
        """
        Generate the complete README content.

        Returns:
            The rendered README as a Markdown string
        """
        ctx = RenderContext(info=self.info, badges=self.options.badges)

        rendered: list[tuple[str, str]] = []
        for section_id in self.section_ids():
            if section_id == TOC:
                rendered.append((TOC, ""))
                continue
            content = SECTIONS[section_id](ctx)
            if content:
                rendered.append((section_id, content))

        # The table of contents can only be built once the other sections exist
        bodies = [content for section_id, content in rendered if section_id != TOC]
        sections = [
            table_of_contents(bodies) if section_id == TOC else content
            for section_id, content in rendered
        ]
        return "\n".join(sections)


def compose_readme(
    info: ProjectInfo,
    template: Template = Template.STANDARD,
    badges: Optional[BadgeConfig] = None,
) -> str:
    """
    Convenience function to render a README for a project.

    Args:
        info: The analyzed project
        template: Section tier to render (default: standard)
        badges: Badge configuration; None renders no badge line

    Returns:
        Rendered README as a Markdown string

    Example:
        from readmegen.analyzer import analyze_project
        from readmegen.renderer import compose_readme

        info = analyze_project("/path/to/project")
        print(compose_readme(info, Template.DETAILED))
    """
    return ReadmeRenderer(info, RenderOptions(template=template, badges=badges)).render()
