"""
Tests for readmegen.renderer module.

Tests section rendering, template tiers and the table of contents.
"""

import pytest

from readmegen.badges import BadgeConfig, all_badges_config
from readmegen.renderer import (
    SECTIONS,
    TIERS,
    ReadmeRenderer,
    RenderOptions,
    compose_readme,
    heading_anchor,
    run_command,
)
from readmegen.schema import Ecosystem, ProjectInfo, Template

TIER_ORDER = [
    Template.MINIMAL,
    Template.STANDARD,
    Template.DETAILED,
    Template.COMPREHENSIVE,
]


@pytest.fixture
def node_info():
    """A small Node.js project like the ones the analyzer produces."""
    return ProjectInfo(
        ecosystem=Ecosystem.NODE,
        name="test-project",
        description="A test project",
        version="1.0.0",
        license="MIT",
        author="Test Author",
        repository_url="https://github.com/test/test-project",
        scripts={"start": "node index.js", "test": "jest"},
        dependencies={"express": "^4.18.0"},
        dev_dependencies={"jest": "^29.0.0"},
        file_tree="├── index.js\n└── package.json\n",
        has_tests=True,
    )


@pytest.fixture
def unknown_info():
    return ProjectInfo(ecosystem=Ecosystem.UNKNOWN, name="mystery")


def headings(readme: str) -> list[str]:
    return [line for line in readme.splitlines() if line.startswith("## ")]


class TestStandardTemplate:
    """Tests for the default (standard) tier."""

    def test_node_project(self, node_info):
        readme = compose_readme(node_info)

        assert readme.startswith("# test-project\n")
        assert "A test project" in readme
        assert "## Installation\n\n```bash\nnpm install\n```\n" in readme
        assert "## Usage\n\n```bash\nnpm start\n```\n" in readme
        assert "## Available Scripts" in readme
        assert "- **start**: `node index.js`" in readme
        assert "- **test**: `jest`" in readme
        assert "## Project Structure\n\n```\n├── index.js\n└── package.json\n```\n" in readme
        assert "### Running Tests\n\n```bash\nnpm test\n```\n" in readme
        assert "### Contributing" in readme
        assert "This project is licensed under the MIT License." in readme

    def test_section_order(self, node_info):
        readme = compose_readme(node_info)

        assert headings(readme) == [
            "## Installation",
            "## Usage",
            "## Available Scripts",
            "## Project Structure",
            "## Development",
            "## License",
        ]

    def test_sections_separated_by_blank_line(self, node_info):
        readme = compose_readme(node_info)
        assert "# test-project\n\nA test project\n\n## Installation" in readme

    def test_unknown_ecosystem_placeholders(self, unknown_info):
        readme = compose_readme(unknown_info)

        assert "Installation instructions coming soon." in readme
        assert "Usage instructions coming soon." in readme
        assert "```bash" not in readme

    @pytest.mark.parametrize("template", TIER_ORDER)
    def test_no_tests_no_running_tests(self, template):
        info = ProjectInfo(ecosystem=Ecosystem.NODE, name="untested", has_tests=False)

        readme = compose_readme(info, template)

        assert "Running Tests" not in readme

    def test_contributing_without_tests(self):
        info = ProjectInfo(ecosystem=Ecosystem.NODE, name="untested", has_tests=False)
        assert "### Contributing" in compose_readme(info)

    @pytest.mark.parametrize("template", TIER_ORDER)
    def test_no_license_no_heading(self, unknown_info, template):
        readme = compose_readme(unknown_info, template)
        assert "## License" not in readme

    def test_no_scripts_no_heading(self, unknown_info):
        assert "## Available Scripts" not in compose_readme(unknown_info)

    def test_no_description_no_empty_line(self, unknown_info):
        readme = compose_readme(unknown_info)
        assert readme.startswith("# mystery\n\n## Installation")

    def test_no_badges_by_default(self, node_info):
        assert "img.shields.io" not in compose_readme(node_info)

    def test_badges_under_title(self, node_info):
        readme = compose_readme(node_info, badges=BadgeConfig(license=True))

        assert (
            "A test project\n\n"
            "[![License: MIT](https://img.shields.io/badge/License-MIT-yellow.svg)]"
            "(https://opensource.org/licenses/MIT)\n"
        ) in readme

    def test_badge_config_without_applicable_badges(self, unknown_info):
        """An empty badge line is omitted entirely."""
        readme = compose_readme(unknown_info, badges=BadgeConfig(license=True))
        assert readme == compose_readme(unknown_info)

    def test_all_badges_without_npm_outside_node(self):
        info = ProjectInfo(
            ecosystem=Ecosystem.GO,
            name="github.com/acme/tool",
            repository_url="https://github.com/acme/tool",
        )

        readme = compose_readme(info, Template.STANDARD, all_badges_config())

        assert "npmjs.com" not in readme
        assert "https://github.com/acme/tool/actions" in readme


class TestMinimalTemplate:
    """Tests for the minimal tier."""

    def test_exact_output(self, node_info):
        readme = compose_readme(node_info, Template.MINIMAL)

        assert readme == (
            "# test-project\n"
            "\n"
            "A test project\n"
            "\n"
            "## Installation\n"
            "\n"
            "```bash\n"
            "npm install\n"
            "```\n"
            "\n"
            "## Usage\n"
            "\n"
            "```bash\n"
            "npm start\n"
            "```\n"
            "\n"
            "## License\n"
            "\n"
            "MIT\n"
        )

    def test_omits_structure_and_development(self, node_info):
        readme = compose_readme(node_info, Template.MINIMAL)

        assert "Project Structure" not in readme
        assert "Development" not in readme

    def test_never_renders_badges(self, node_info):
        readme = compose_readme(node_info, Template.MINIMAL, all_badges_config())
        assert "img.shields.io" not in readme


class TestDetailedTemplate:
    """Tests for the detailed tier."""

    def test_extra_sections(self, node_info):
        readme = compose_readme(node_info, Template.DETAILED)

        assert "## Table of Contents" in readme
        assert "## Features" in readme
        assert "## Examples" in readme
        assert "## API Documentation" in readme
        assert "## Dependencies" in readme
        assert "## Troubleshooting" in readme

    def test_dependency_tables(self, node_info):
        readme = compose_readme(node_info, Template.DETAILED)

        assert "### Runtime Dependencies" in readme
        assert "| express | ^4.18.0 |" in readme
        assert "### Development Dependencies" in readme
        assert "| jest | ^29.0.0 |" in readme

    def test_no_dependencies_section_without_dependencies(self, unknown_info):
        readme = compose_readme(unknown_info, Template.DETAILED)
        assert "## Dependencies" not in readme

    def test_table_of_contents_lists_rendered_headings(self, node_info):
        readme = compose_readme(node_info, Template.DETAILED)

        assert "- [Installation](#installation)" in readme
        assert "- [API Documentation](#api-documentation)" in readme
        assert "- [License](#license)" in readme
        assert "- [Table of Contents]" not in readme

    def test_table_of_contents_skips_omitted_sections(self, unknown_info):
        readme = compose_readme(unknown_info, Template.DETAILED)

        assert "- [Installation](#installation)" in readme
        assert "- [License](#license)" not in readme
        assert "- [Dependencies](#dependencies)" not in readme

    def test_table_of_contents_ignores_headings_inside_sections(self):
        """Markdown inside a description does not become a TOC entry."""
        info = ProjectInfo(
            ecosystem=Ecosystem.NODE,
            name="app",
            description="Intro\n\n## Fake",
        )

        readme = compose_readme(info, Template.DETAILED)

        assert "- [Fake](#fake)" not in readme
        assert "- [Installation](#installation)" in readme


class TestComprehensiveTemplate:
    """Tests for the comprehensive tier."""

    def test_extra_sections(self, node_info):
        readme = compose_readme(node_info, Template.COMPREHENSIVE)

        assert "## About" in readme
        assert "## Prerequisites" in readme
        assert "## Deployment" in readme
        assert "## Roadmap" in readme
        assert "## Contributing" not in headings(readme)
        assert "### Contributing" in readme
        assert "## Changelog" in readme
        assert "## Authors" in readme
        assert "Test Author" in readme
        assert "## Acknowledgments" in readme

    def test_no_author_no_heading(self, unknown_info):
        readme = compose_readme(unknown_info, Template.COMPREHENSIVE)
        assert "## Authors" not in readme

    def test_prerequisites_per_ecosystem(self):
        info = ProjectInfo(ecosystem=Ecosystem.RUST, name="crab")
        readme = compose_readme(info, Template.COMPREHENSIVE)
        assert "- Rust toolchain" in readme

    def test_deployment_needs_build_script(self, node_info):
        readme = compose_readme(node_info, Template.COMPREHENSIVE)
        assert "Deployment instructions coming soon." in readme


class TestTiers:
    """Tests for the relationships between tiers."""

    def test_every_section_registered(self):
        for template, section_ids in TIERS.items():
            for section_id in section_ids:
                assert section_id == "toc" or section_id in SECTIONS, (template, section_id)

    @pytest.mark.parametrize("index", range(len(TIER_ORDER) - 1))
    def test_headings_are_supersets(self, node_info, index):
        smaller = set(headings(compose_readme(node_info, TIER_ORDER[index])))
        larger = set(headings(compose_readme(node_info, TIER_ORDER[index + 1])))

        assert smaller <= larger
        assert smaller != larger

    @pytest.mark.parametrize("template", TIER_ORDER)
    def test_title_first(self, node_info, template):
        assert compose_readme(node_info, template).startswith("# test-project\n")

    def test_renderer_class(self, node_info):
        options = RenderOptions(template=Template.DETAILED)
        assert ReadmeRenderer(node_info, options).render() == compose_readme(
            node_info, Template.DETAILED
        )

    def test_renderer_defaults_to_standard(self, node_info):
        assert ReadmeRenderer(node_info).render() == compose_readme(node_info)


class TestHelpers:
    """Tests for command and anchor helpers."""

    def test_run_command_without_start_script(self):
        info = ProjectInfo(ecosystem=Ecosystem.NODE, name="app")
        assert run_command(info) == "node index.js"

    @pytest.mark.parametrize(
        "ecosystem, command",
        [
            (Ecosystem.PYTHON, "python main.py"),
            (Ecosystem.GO, "go run main.go"),
            (Ecosystem.RUST, "cargo run"),
            (Ecosystem.UNKNOWN, None),
        ],
    )
    def test_run_command_per_ecosystem(self, ecosystem, command):
        assert run_command(ProjectInfo(ecosystem=ecosystem, name="x")) == command

    @pytest.mark.parametrize(
        "heading, anchor",
        [
            ("Installation", "installation"),
            ("API Documentation", "api-documentation"),
            ("Table of Contents", "table-of-contents"),
        ],
    )
    def test_heading_anchor(self, heading, anchor):
        assert heading_anchor(heading) == anchor
