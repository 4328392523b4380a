"""
Tests for BatchConverter.
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from perfsheet.core.config import ConverterSettings
from perfsheet.core.errors import ParseError
from perfsheet.core.models import CaptureKind
from perfsheet.services.assembler import ReportAssembler
from perfsheet.services.converter import BatchConverter


@pytest.fixture
def har_settings(tmp_path):
    """Settings converting tmp_path/harRepo into tmp_path/output.xlsx."""
    return ConverterSettings(
        kind=CaptureKind.NETWORK,
        input_dir=tmp_path / "harRepo",
        output_path=tmp_path / "output.xlsx",
    )


def test_discover_filters_and_sorts(har_settings, write_json, har_document):
    """Test discovery by extension, case-insensitive, sorted by name."""
    input_dir = har_settings.input_dir
    write_json("b.har", har_document, input_dir)
    write_json("A.HAR", har_document, input_dir)
    write_json("notes.json", {}, input_dir)

    paths = BatchConverter(har_settings).discover()

    assert [p.name for p in paths] == ["A.HAR", "b.har"]


def test_discover_missing_directory(har_settings):
    """Test that a missing input directory is reported."""
    with pytest.raises(FileNotFoundError):
        BatchConverter(har_settings).discover()


def test_convert_no_files(har_settings):
    """Test that an empty directory is an error."""
    har_settings.input_dir.mkdir()
    with pytest.raises(FileNotFoundError):
        BatchConverter(har_settings).convert()


def test_convert_counts(har_settings, write_json, har_document):
    """Test converted, empty and failed counts."""
    input_dir = har_settings.input_dir
    write_json("home.har", har_document, input_dir)
    write_json("blank.har", {"log": {"entries": []}}, input_dir)
    (input_dir / "broken.har").write_text("{oops", encoding="utf-8")

    progress = MagicMock()
    stats = BatchConverter(har_settings).convert(progress_callback=progress)

    assert stats == {"converted": 1, "empty": 1, "failed": 1}
    assert progress.call_count == 3
    assert har_settings.output_path.exists()


def test_fail_fast_reraises(har_settings, write_json, har_document):
    """Test that fail-fast stops at the first unparseable file."""
    input_dir = har_settings.input_dir
    write_json("a.har", {"not": "a har"}, input_dir)
    write_json("b.har", har_document, input_dir)
    har_settings.fail_fast = True

    with pytest.raises(ParseError) as exc_info:
        BatchConverter(har_settings).convert()
    assert exc_info.value.source == "a.har"


def test_wrong_kind_counts_as_failed(har_settings, write_json, lighthouse_report, har_document):
    """Test that a Lighthouse report named .har is rejected."""
    input_dir = har_settings.input_dir
    write_json("audit.har", lighthouse_report, input_dir)
    write_json("home.har", har_document, input_dir)

    stats = BatchConverter(har_settings).convert()

    assert stats["failed"] == 1
    assert stats["converted"] == 1


def test_explicit_paths_and_assembler(har_settings, write_json, har_document):
    """Test converting an explicit file list with an injected assembler."""
    path = write_json("one.har", har_document)
    assembler = ReportAssembler()
    assembler.assemble = MagicMock(wraps=assembler.assemble)

    stats = BatchConverter(har_settings, assembler=assembler).convert(paths=[Path(path)])

    assert stats["converted"] == 1
    assembler.assemble.assert_called_once()


def test_strict_entries_setting(har_settings, write_json, har_document):
    """Test that strict_entries makes a file with an invalid entry fail."""
    har_document["log"]["entries"].append({"request": {}})
    write_json("home.har", har_document, har_settings.input_dir)
    har_settings.strict_entries = True

    stats = BatchConverter(har_settings).convert()

    assert stats == {"converted": 0, "empty": 0, "failed": 1}


def test_lighthouse_conversion(tmp_path, write_json, lighthouse_report):
    """Test converting a Lighthouse directory."""
    settings = ConverterSettings(
        kind=CaptureKind.AUDIT,
        input_dir=tmp_path / "lighthouseRepo",
        output_path=tmp_path / "lighthouse-output.xlsx",
    )
    write_json("home.json", lighthouse_report, settings.input_dir)

    stats = BatchConverter(settings).convert()

    assert stats["converted"] == 1
    assert settings.output_path.exists()
