"""
Reader for capture files.

Loads a HAR or Lighthouse JSON file, decides its capture kind once, and
returns the validated document as a NetworkCapture or AuditCapture. Any
failure to read, decode or recognize the document is a ParseError.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from perfsheet.core.errors import ParseError
from perfsheet.core.models import CaptureKind
from perfsheet.core.source_schemas.capture import AuditCapture, CaptureDocument, NetworkCapture
from perfsheet.core.source_schemas.har import HarDocument
from perfsheet.core.source_schemas.lighthouse import LighthouseReport

logger = logging.getLogger(__name__)


def detect_kind(payload: Any) -> Optional[CaptureKind]:
    """
    Detect the capture kind of a parsed JSON document.

    Parameters
    ----
    payload : Any
        Parsed JSON value

    Returns
    ----
    CaptureKind or None
        NETWORK for {log: {entries}}, AUDIT for {audits}, None otherwise
    """
    if not isinstance(payload, dict):
        return None
    log = payload.get("log")
    if isinstance(log, dict) and "entries" in log:
        return CaptureKind.NETWORK
    if "audits" in payload:
        return CaptureKind.AUDIT
    return None


def _validation_summary(error: ValidationError) -> str:
    locations = [".".join(str(p) for p in err["loc"]) or "<root>" for err in error.errors()]
    return ", ".join(locations[:5])


def parse_capture(
    payload: Union[str, bytes, Dict[str, Any]],
    source: str,
    expected_kind: Optional[CaptureKind] = None,
) -> CaptureDocument:
    """
    Validate a capture document and tag it with its kind.

    Parameters
    ----
    payload : str, bytes or dict
        JSON text, or an already parsed document
    source : str
        Filename reported in errors and carried on the capture
    expected_kind : CaptureKind, optional
        Reject documents of any other kind

    Returns
    ----
    NetworkCapture or AuditCapture
        Validated capture document

    Raises
    ----
    ParseError
        If the JSON is invalid, the shape is not recognized, or the kind
        differs from expected_kind
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise ParseError(source, f"invalid JSON: {e}") from e

    kind = detect_kind(payload)
    if kind is None:
        raise ParseError(source, "not a HAR log (log.entries) or Lighthouse report (audits)")

    if expected_kind is not None and kind != expected_kind:
        raise ParseError(source, f"expected a {expected_kind.value} capture, found {kind.value}")

    try:
        if kind == CaptureKind.NETWORK:
            return NetworkCapture(source=source, document=HarDocument.model_validate(payload))
        return AuditCapture(source=source, document=LighthouseReport.model_validate(payload))
    except ValidationError as e:
        raise ParseError(source, f"invalid {kind.value} document: {_validation_summary(e)}") from e


def load_capture(path: Union[str, Path], expected_kind: Optional[CaptureKind] = None) -> CaptureDocument:
    """
    Read and parse a capture file.

    Parameters
    ----
    path : str or Path
        Path to a .har or Lighthouse .json file
    expected_kind : CaptureKind, optional
        Reject documents of any other kind

    Returns
    ----
    NetworkCapture or AuditCapture
        Validated capture document

    Raises
    ----
    ParseError
        If the file cannot be read or parsed
    """
    path = Path(path)
    logger.info("Reading capture file: %s", path)

    try:
        # utf-8-sig: exported HAR files sometimes carry a BOM
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(path.name, f"cannot read file: {e}") from e

    return parse_capture(text, path.name, expected_kind=expected_kind)
