"""
Tests for capture file reading and kind detection.
"""

import json

import pytest
from pydantic import TypeAdapter

from perfsheet.core.errors import ParseError
from perfsheet.core.models import CaptureKind
from perfsheet.core.source_schemas.capture import AuditCapture, CaptureDocument, NetworkCapture
from perfsheet.readers.capture_reader import detect_kind, load_capture, parse_capture


def test_detect_kind(har_document, lighthouse_report):
    """Test kind detection from top-level shape."""
    assert detect_kind(har_document) == CaptureKind.NETWORK
    assert detect_kind(lighthouse_report) == CaptureKind.AUDIT
    assert detect_kind({"log": {}}) is None
    assert detect_kind([1, 2]) is None


def test_parse_network_capture(har_document):
    """Test that a HAR document becomes a NetworkCapture."""
    capture = parse_capture(har_document, "home.har")

    assert isinstance(capture, NetworkCapture)
    assert capture.kind == CaptureKind.NETWORK
    assert capture.source == "home.har"
    assert len(capture.document.log.entries) == 3


def test_parse_audit_capture_from_text(lighthouse_report):
    """Test that JSON text of a Lighthouse report becomes an AuditCapture."""
    capture = parse_capture(json.dumps(lighthouse_report), "home.json")

    assert isinstance(capture, AuditCapture)
    assert capture.document.lighthouseVersion == "12.0.0"


def test_null_optional_sections(har_document, lighthouse_report):
    """Test that null pages and categories parse as empty."""
    har_document["log"]["pages"] = None
    lighthouse_report["categories"] = None

    assert parse_capture(json.dumps(har_document), "nullpages.har").document.log.pages == []
    assert parse_capture(json.dumps(lighthouse_report), "nocats.json").document.categories == {}


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[]",
        '{"log": {"version": "1.2"}}',
        '{"log": {"entries": {}}}',
        '{"audits": []}',
    ],
)
def test_parse_errors(payload):
    """Test that unusable documents raise ParseError naming the source."""
    with pytest.raises(ParseError) as exc_info:
        parse_capture(payload, "bad.har")
    assert exc_info.value.source == "bad.har"
    assert str(exc_info.value).startswith("bad.har: ")


def test_expected_kind_mismatch(lighthouse_report):
    """Test that a Lighthouse report is rejected where a HAR log is expected."""
    with pytest.raises(ParseError, match="expected a network capture"):
        parse_capture(lighthouse_report, "audit.har", expected_kind=CaptureKind.NETWORK)


def test_load_capture_with_bom(tmp_path):
    """Test that a UTF-8 BOM is tolerated."""
    path = tmp_path / "bom.har"
    path.write_bytes(b"\xef\xbb\xbf" + b'{"log": {"entries": []}}')

    capture = load_capture(path)

    assert capture.kind == CaptureKind.NETWORK
    assert capture.source == "bom.har"


def test_load_capture_missing_file(tmp_path):
    """Test that an unreadable file is a ParseError."""
    with pytest.raises(ParseError) as exc_info:
        load_capture(tmp_path / "missing.har")
    assert exc_info.value.source == "missing.har"


def test_load_capture_invalid_utf8(tmp_path):
    """Test that undecodable bytes are a ParseError."""
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00")
    with pytest.raises(ParseError):
        load_capture(path)


def test_tagged_union_dispatch():
    """Test that the capture union selects a member by its kind tag."""
    adapter = TypeAdapter(CaptureDocument)
    capture = adapter.validate_python(
        {"kind": CaptureKind.AUDIT, "source": "a.json", "document": {"audits": {}}}
    )
    assert isinstance(capture, AuditCapture)
