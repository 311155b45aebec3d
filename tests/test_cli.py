"""Tests for CLI commands."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from docnav.cli import cli


@pytest.fixture
def config_file(data_dir: Path) -> Path:
    """Config file next to the sidebars and docs files."""
    path = data_dir / "docnav.toml"
    path.write_text('[sidebars]\nversion_name = "1.0.0"\n')
    return path


class TestCheckCommand:
    """Tests for the check command."""

    def test__valid_sidebars__succeeds(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Sidebars OK: 1 sidebars checked" in result.output

    def test__unknown_doc_id__fails(self, data_dir: Path, config_file: Path) -> None:
        (data_dir / "sidebars.json").write_text(
            json.dumps({"main": [{"type": "doc", "id": "ghost"}]}),
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "These sidebar document ids do not exist:\n- ghost" in result.output

    def test__legacy_sidebar_name__fails(self, data_dir: Path, config_file: Path) -> None:
        (data_dir / "sidebars.json").write_text(
            json.dumps({"version-1.0.0/main": [{"type": "doc", "id": "intro"}]}),
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "legacy versioned sidebar names" in result.output

    def test__sidebars_file_override(self, tmp_path: Path, config_file: Path) -> None:
        """Use the sidebars file given on the command line."""
        other = tmp_path / "other.json"
        other.write_text(json.dumps({"a": [], "b": []}))

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["check", "-c", str(config_file), "--sidebars-file", str(other)],
        )

        assert result.exit_code == 0
        assert "2 sidebars checked" in result.output

    def test__invalid_sidebars_file__fails(self, data_dir: Path, config_file: Path) -> None:
        (data_dir / "sidebars.json").write_text("[")

        runner = CliRunner()
        result = runner.invoke(cli, ["check", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestNavCommand:
    """Tests for the nav command."""

    def test__shows_previous_and_next(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["nav", "setup/install", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Sidebar: guides" in result.output
        assert "Previous: Setup (/setup)" in result.output
        assert "Next: Reference (/category/reference)" in result.output

    def test__unlisted_neighbor__skipped(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["nav", "setup/install", "-u", "setup/index", "-c", str(config_file)],
        )

        assert result.exit_code == 0
        assert "Previous: Introduction (/intro)" in result.output

    def test__first_doc__has_no_previous(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["nav", "intro", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "Previous: -" in result.output
        assert "Next: Setup (/setup)" in result.output

    def test__no_sidebar__reports_not_displayed(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["nav", "intro", "--no-sidebar", "-c", str(config_file)],
        )

        assert result.exit_code == 0
        assert "Doc intro is not displayed in any sidebar" in result.output

    def test__missing_sidebar__fails(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["nav", "intro", "--sidebar", "nope", "-c", str(config_file)],
        )

        assert result.exit_code == 1
        assert "wants to display sidebar nope" in result.output


class TestFirstLinkCommand:
    """Tests for the first-link command."""

    def test__shows_first_doc(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["first-link", "guides", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "doc intro (Introduction)" in result.output

    def test__shows_generated_index(self, data_dir: Path, config_file: Path) -> None:
        (data_dir / "sidebars.json").write_text(
            json.dumps(
                {
                    "ref": [
                        {
                            "type": "category",
                            "label": "Reference",
                            "link": {"type": "generated-index", "permalink": "/ref"},
                            "items": [],
                        },
                    ],
                },
            ),
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["first-link", "ref", "-c", str(config_file)])

        assert result.exit_code == 0
        assert "generated-index /ref (Reference)" in result.output

    def test__unknown_sidebar__fails(self, config_file: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["first-link", "nope", "-c", str(config_file)])

        assert result.exit_code == 1
        assert "Sidebar nope has no navigable link" in result.output
