"""
Row extractor for HAR network entries.

Flattens one entry of a HAR log (request, response, timings) into a
NetworkRow with rounded timing and size columns and a URL category.
"""

import logging
from typing import Any, Callable, Dict
from urllib.parse import urlsplit

from pydantic import ValidationError

from perfsheet.core.errors import InvalidEntry
from perfsheet.core.models import CaptureKind, NetworkRow
from perfsheet.core.source_schemas.har import HarContent, HarEntry, HarResponse, HarTimings
from perfsheet.core.utils import bytes_to_kb, measured_or_zero
from perfsheet.extractors.base import BaseRowExtractor
from perfsheet.services.categorizer import categorize

logger = logging.getLogger(__name__)

# Schemes that are meaningless without a host
_HOST_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})


def is_valid_url(url: str) -> bool:
    """
    Check that a request URL is absolute and parseable.

    data:, blob: and similar URLs are accepted without a host.
    """
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError on a malformed port
    except ValueError:
        return False
    if not parts.scheme:
        return False
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return False
    return True


class NetworkRowExtractor(BaseRowExtractor[NetworkRow]):
    """
    Extractor for HAR log entries.

    Unknown timings (-1 or absent) and unknown sizes become 0. The entry is
    rejected only when it is not an object, fails schema validation, or its
    request URL cannot be parsed.

    Parameters
    ----
    categorizer : callable, optional
        URL -> category label function; defaults to categorize()
    """

    def __init__(self, categorizer: Callable[[str], str] = categorize):
        self.categorizer = categorizer

    @property
    def capture_kind(self) -> CaptureKind:
        """
        Capture kind for HAR logs.

        Returns
        ----
        CaptureKind
            CaptureKind.NETWORK
        """
        return CaptureKind.NETWORK

    def _validate(self, raw_entry: Any, index: int) -> HarEntry:
        if not isinstance(raw_entry, dict):
            raise InvalidEntry(index, f"expected an object, got {type(raw_entry).__name__}")
        try:
            return HarEntry.model_validate(raw_entry)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise InvalidEntry(index, f"invalid fields: {fields}") from e

    def extract(self, raw_entry: Dict[str, Any], index: int) -> NetworkRow:
        """
        Transform a raw HAR entry into a NetworkRow.

        Parameters
        ----
        raw_entry : Dict[str, Any]
            Entry from log.entries
        index : int
            1-based position of the entry in log.entries

        Returns
        ----
        NetworkRow
            Flattened row

        Raises
        ----
        InvalidEntry
            If the entry is malformed or its URL cannot be parsed
        """
        entry = self._validate(raw_entry, index)

        url = entry.request.url
        if not is_valid_url(url):
            raise InvalidEntry(index, f"unparseable URL: {url!r}")

        response = entry.response or HarResponse()
        content = response.content or HarContent()
        timings = entry.timings or HarTimings()

        return NetworkRow(
            index=index,
            method=entry.request.method or "",
            url=url,
            category=self.categorizer(url),
            status=response.status or 0,
            response_ms=measured_or_zero(entry.time),
            size_kb=bytes_to_kb(content.size),
            blocked_ms=measured_or_zero(timings.blocked),
            dns_ms=measured_or_zero(timings.dns),
            connect_ms=measured_or_zero(timings.connect),
            ssl_ms=measured_or_zero(timings.ssl),
            send_ms=measured_or_zero(timings.send),
            wait_ms=measured_or_zero(timings.wait),
            receive_ms=measured_or_zero(timings.receive),
        )
