"""Tests for the scriptline command line interface."""

import pytest

from scriptline import __version__
from scriptline.config import get_settings


@pytest.fixture
def empty_script_path(tmp_path):
    """A Fountain file with no content."""
    path = tmp_path / "empty.fountain"
    path.write_text("\n\n", encoding="utf-8")
    return path


class TestVersion:
    """Test the version command."""

    def test_version(self, cli_invoke):
        """Test plain version output."""
        result = cli_invoke("version")
        assert result.exit_code == 0
        assert f"Scriptline v{__version__}" in result.output

    def test_version_json(self, cli_invoke):
        """Test JSON version output."""
        result = cli_invoke("version", "--json")
        assert result.exit_code == 0
        assert result.json()["version"] == __version__


class TestParseCommand:
    """Test the parse command."""

    def test_parse(self, cli_invoke, sample_script_path):
        """Test the lines table."""
        result = cli_invoke("parse", str(sample_script_path))
        assert result.exit_code == 0
        assert "The Coffee Shop" in result.output
        assert "SCENE HEADING" in result.output
        assert "PARENTHETICAL" in result.output

    def test_parse_json(self, cli_invoke, sample_script_path):
        """Test JSON output of metadata and lines."""
        result = cli_invoke("parse", str(sample_script_path), "--json")
        assert result.exit_code == 0
        data = result.json()
        assert data["metadata"]["author"] == "Jane Writer"
        assert data["script"]["title"] == "The Coffee Shop"
        assert data["script"]["lines"][1]["type"] == "scene"
        assert len(data["script"]["lines"]) == 16

    def test_missing_file(self, cli_invoke, tmp_path):
        """Test that a missing path is a usage error."""
        result = cli_invoke("parse", str(tmp_path / "missing.fountain"))
        assert result.exit_code == 2

    def test_undecodable_file(self, cli_invoke, tmp_path):
        """Test that read failures are reported cleanly."""
        path = tmp_path / "binary.fountain"
        path.write_bytes(b"\xff\xfe\xfa")
        result = cli_invoke("parse", str(path))
        assert result.exit_code == 1
        assert "Failed to read" in result.output


class TestStatsCommands:
    """Test the stats and scenes commands."""

    def test_stats(self, cli_invoke, sample_script_path):
        """Test the statistics table."""
        result = cli_invoke("stats", str(sample_script_path))
        assert result.exit_code == 0
        assert "1 page" in result.output
        assert "~1 min" in result.output

    def test_stats_json(self, cli_invoke, sample_script_path):
        """Test JSON statistics."""
        result = cli_invoke("stats", str(sample_script_path), "--json")
        assert result.exit_code == 0
        data = result.json()
        assert data["stats"]["page_count"] == 1.0
        assert data["stats"]["line_count"] == 16
        assert data["formatted_page_count"] == "1 page"
        assert data["navigator_pages"] == 1
        assert data["page_breaks"] == []

    def test_stats_brief(self, cli_invoke, sample_script_path):
        """Test the one-line summary."""
        result = cli_invoke("stats", str(sample_script_path), "--brief")
        assert result.exit_code == 0
        assert result.output.strip() == "1 page, ~1 min, 16 lines, 55 words"

    def test_scenes(self, cli_invoke, sample_script_path):
        """Test the scene table."""
        result = cli_invoke("scenes", str(sample_script_path))
        assert result.exit_code == 0
        assert "EXT. COFFEE SHOP - DAY" in result.output

    def test_scenes_json(self, cli_invoke, sample_script_path):
        """Test JSON scene listing."""
        result = cli_invoke("scenes", str(sample_script_path), "--json")
        assert result.exit_code == 0
        assert result.json() == [
            {"index": 1, "text": "EXT. COFFEE SHOP - DAY", "page": 1},
            {"index": 10, "text": "INT. ALICE'S APARTMENT - NIGHT", "page": 1},
        ]

    def test_no_scenes(self, cli_invoke, tmp_path):
        """Test the message for scripts without headings."""
        path = tmp_path / "action.fountain"
        path.write_text("Just some action.\n", encoding="utf-8")
        result = cli_invoke("scenes", str(path))
        assert result.exit_code == 0
        assert "No scenes yet." in result.output


class TestValidateCommand:
    """Test the validate command."""

    def test_valid(self, cli_invoke, sample_script_path):
        """Test a valid file."""
        result = cli_invoke("validate", str(sample_script_path))
        assert result.exit_code == 0
        assert "is valid" in result.output

    def test_empty(self, cli_invoke, empty_script_path):
        """Test that empty files fail validation."""
        result = cli_invoke("validate", str(empty_script_path))
        assert result.exit_code == 1
        assert "Document is empty" in result.output

    def test_empty_json(self, cli_invoke, empty_script_path):
        """Test JSON validation output."""
        result = cli_invoke("validate", str(empty_script_path), "--json")
        assert result.exit_code == 1
        assert result.json() == {"valid": False, "errors": ["Document is empty"]}


class TestExportCommands:
    """Test the format and pdf commands."""

    def test_format_stdout(self, cli_invoke, sample_script_path):
        """Test re-encoding to stdout."""
        result = cli_invoke("format", str(sample_script_path))
        assert result.exit_code == 0
        assert "Title: The Coffee Shop" in result.output
        assert "Author: Jane Writer" in result.output
        assert "EXT. COFFEE SHOP - DAY" in result.output

    def test_format_to_file(self, cli_invoke, sample_script_path, tmp_path):
        """Test re-encoding to a file."""
        output = tmp_path / "out.fountain"
        result = cli_invoke("format", str(sample_script_path), "-o", str(output))
        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert output.read_text(encoding="utf-8").startswith("Title: The Coffee Shop")

    def test_format_uses_configured_date(
        self, cli_invoke, sample_script_path, tmp_path
    ):
        """Test that the draft date format comes from the config file."""
        config = tmp_path / "scriptline-test.toml"
        config.write_text('draft_date_format = "DRAFT-%Y"\n')
        result = cli_invoke(
            "--config", str(config), "format", str(sample_script_path)
        )
        assert result.exit_code == 0
        assert "Draft date: DRAFT-" in result.output

    def test_pdf(self, cli_invoke, sample_script_path, tmp_path):
        """Test PDF export."""
        output = tmp_path / "out.pdf"
        result = cli_invoke("pdf", str(sample_script_path), "-o", str(output))
        assert result.exit_code == 0
        assert "Wrote" in result.output
        assert output.read_bytes().startswith(b"%PDF")

    def test_pdf_without_title_page(self, cli_invoke, sample_script_path, tmp_path):
        """Test turning the title page off from the command line."""
        output = tmp_path / "body.pdf"
        result = cli_invoke(
            "pdf", str(sample_script_path), "-o", str(output), "--no-title-page"
        )
        assert result.exit_code == 0
        assert output.exists()

    def test_pdf_json(self, cli_invoke, sample_script_path, tmp_path):
        """Test the JSON success envelope."""
        output = tmp_path / "out.pdf"
        result = cli_invoke(
            "pdf", str(sample_script_path), "-o", str(output), "--json"
        )
        assert result.exit_code == 0
        response = result.json()
        assert response["success"] is True
        assert response["data"] == {
            "output": str(output),
            "pages": 2,
            "body_pages": 1,
            "title_page": True,
        }

    def test_pdf_requires_output(self, cli_invoke, sample_script_path):
        """Test that the output option is required."""
        result = cli_invoke("pdf", str(sample_script_path))
        assert result.exit_code == 2


class TestGlobalOptions:
    """Test options handled by the main callback."""

    def test_debug_sets_log_level(self, cli_invoke):
        """Test that --debug switches to DEBUG logging."""
        result = cli_invoke("--debug", "version")
        assert result.exit_code == 0
        assert get_settings().log_level == "DEBUG"
        assert get_settings().debug is True

    def test_verbose_sets_info(self, cli_invoke):
        """Test that --verbose switches to INFO logging."""
        result = cli_invoke("--verbose", "version")
        assert result.exit_code == 0
        assert get_settings().log_level == "INFO"

    def test_missing_config(self, cli_invoke, tmp_path):
        """Test that an explicit missing config file fails."""
        result = cli_invoke("--config", str(tmp_path / "nope.yaml"), "version")
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_invalid_config_key(self, cli_invoke, tmp_path):
        """Test that config mistakes show a hint."""
        config = tmp_path / "bad.yaml"
        config.write_text("loglevel: DEBUG\n")
        result = cli_invoke("--config", str(config), "version")
        assert result.exit_code == 1
        assert "Use 'log_level' instead of 'loglevel'" in result.output
