"""
Tests for the click CLI.
"""

import json
import logging

import pytest
from click.testing import CliRunner

from perfsheet.cli import main


@pytest.fixture
def runner(monkeypatch):
    """CliRunner with perfsheet environment variables cleared."""
    for name in ("PERFSHEET_HAR_DIR", "PERFSHEET_LIGHTHOUSE_DIR", "PERFSHEET_OUTPUT"):
        monkeypatch.delenv(name, raising=False)

    # the CLI reconfigures the root logger; restore it afterwards
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield CliRunner()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_har_command(runner, tmp_path, write_json, har_document):
    """Test converting a HAR directory to a workbook."""
    input_dir = tmp_path / "captures"
    write_json("home.har", har_document, input_dir)
    output = tmp_path / "report.xlsx"

    result = runner.invoke(main, ["har", "--input-dir", str(input_dir), "--output", str(output)])

    assert result.exit_code == 0, result.output
    assert "Converted: 1 file(s)" in result.output
    assert output.exists()


def test_har_command_env_defaults(runner, tmp_path, write_json, har_document):
    """Test that locations are read from environment variables."""
    input_dir = tmp_path / "env-captures"
    write_json("home.har", har_document, input_dir)
    output = tmp_path / "env.xlsx"

    result = runner.invoke(
        main,
        ["har"],
        env={"PERFSHEET_HAR_DIR": str(input_dir), "PERFSHEET_OUTPUT": str(output)},
    )

    assert result.exit_code == 0, result.output
    assert output.exists()


def test_lighthouse_command(runner, tmp_path, write_json, lighthouse_report):
    """Test converting a Lighthouse directory."""
    input_dir = tmp_path / "lighthouseRepo"
    write_json("home.json", lighthouse_report, input_dir)
    output = tmp_path / "lighthouse.xlsx"

    result = runner.invoke(main, ["lighthouse", "-i", str(input_dir), "-o", str(output)])

    assert result.exit_code == 0, result.output
    assert output.exists()


def test_missing_directory_aborts(runner, tmp_path):
    """Test a non-zero exit when the input directory does not exist."""
    result = runner.invoke(main, ["har", "--input-dir", str(tmp_path / "nope"), "-o", str(tmp_path / "x.xlsx")])

    assert result.exit_code != 0
    assert "Input directory not found" in result.output


def test_fail_fast_aborts(runner, tmp_path):
    """Test that --fail-fast stops on an unparseable file."""
    input_dir = tmp_path / "captures"
    input_dir.mkdir()
    (input_dir / "bad.har").write_text("{", encoding="utf-8")

    result = runner.invoke(main, ["har", "-i", str(input_dir), "-o", str(tmp_path / "x.xlsx"), "--fail-fast"])

    assert result.exit_code != 0
    assert "bad.har" in result.output


def test_write_failure_verbose_traceback(runner, tmp_path, write_json, har_document):
    """Test that a workbook write failure aborts with a traceback in verbose mode."""
    input_dir = tmp_path / "captures"
    write_json("home.har", har_document, input_dir)
    output = tmp_path / "taken.xlsx"
    output.mkdir()

    result = runner.invoke(main, ["--verbose", "har", "-i", str(input_dir), "-o", str(output)])

    assert result.exit_code != 0
    assert "Error writing workbook" in result.output
    assert "Traceback" in result.output


def test_summary_text(runner, write_json, har_document):
    """Test the text summary of a HAR file."""
    path = write_json("home.har", har_document)

    result = runner.invoke(main, ["summary", str(path)])

    assert result.exit_code == 0, result.output
    assert "Requests: 3" in result.output
    assert "Response (ms)" in result.output


def test_summary_json(runner, write_json, lighthouse_report):
    """Test the JSON summary of a Lighthouse report."""
    path = write_json("home.json", lighthouse_report)

    result = runner.invoke(main, ["summary", str(path), "--format", "json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output[result.output.index("{"):])
    assert data["kind"] == "audit"
    assert data["row_count"] == 0
    assert data["sections"]["category_scores"][0]["score"] == 90


def test_summary_parse_error(runner, tmp_path):
    """Test that an unrecognized file aborts the summary."""
    path = tmp_path / "random.json"
    path.write_text('{"hello": "world"}', encoding="utf-8")

    result = runner.invoke(main, ["summary", str(path)])

    assert result.exit_code != 0
    assert "random.json" in result.output
