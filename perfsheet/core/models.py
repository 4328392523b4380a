"""
Domain models for capture reports.

These models represent the normalized report produced from a capture file,
independent of the HAR or Lighthouse JSON layout it came from.

All models use Pydantic and are frozen: a report is built once by the
assembler and only read afterwards.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny


class CaptureKind(str, Enum):
    """Kind of capture document."""

    NETWORK = "network"  # HAR network log
    AUDIT = "audit"  # Lighthouse audit report


class ReportStatus(str, Enum):
    """Outcome of assembling a report."""

    OK = "ok"
    EMPTY = "empty"  # No valid rows; statistics were not computed


class Rating(str, Enum):
    """Rating band for a normalized score."""

    GOOD = "Good"
    NEEDS_WORK = "Needs Work"
    POOR = "Poor"
    NOT_AVAILABLE = "N/A"


class NetworkRow(BaseModel):
    """
    One request from a network capture.

    Timing and size fields are already rounded to two decimals; unknown
    values are 0.
    """

    model_config = ConfigDict(frozen=True)

    index: int
    method: str = ""
    url: str
    category: str
    status: int = 0
    response_ms: float = 0.0
    size_kb: float = 0.0
    blocked_ms: float = 0.0
    dns_ms: float = 0.0
    connect_ms: float = 0.0
    ssl_ms: float = 0.0
    send_ms: float = 0.0
    wait_ms: float = 0.0
    receive_ms: float = 0.0


class StatBundle(BaseModel):
    """Aggregate statistics over one numeric column of a report."""

    model_config = ConfigDict(frozen=True)

    column: str
    count: int
    mean: float
    median: float
    min: float
    max: float
    p95: float
    sum: float


class SectionRecord(BaseModel):
    """Base for auxiliary section records. Fields hold primitive values only."""

    model_config = ConfigDict(frozen=True)


class PageTiming(SectionRecord):
    """Page load timings from a network capture ('N/A' when not reported)."""

    title: str = "Unknown"
    content_loaded_ms: Union[float, str]
    load_ms: Union[float, str]


class MetaField(SectionRecord):
    """A property of the audit run (URL, fetch time, tool version, ...)."""

    label: str
    value: Union[float, str]


class CategoryScore(SectionRecord):
    """Score of one audit category, as a 0-100 integer."""

    category_id: str
    category: str
    score: Union[int, str]
    rating: Rating


class PerformanceMetric(SectionRecord):
    """A named performance metric read from a single audit."""

    index: int
    audit_id: str
    metric: str
    value: Union[float, str]
    unit: str = ""
    score: Optional[float] = None
    score_pct: Union[int, str]
    rating: Rating
    display: str


class ServerMetric(SectionRecord):
    """Server and network level metric (byte weights are converted to KB)."""

    audit_id: str
    metric: str
    value: Union[float, str]
    unit: str
    display: str


class MainThreadItem(SectionRecord):
    """Time spent on the main thread by one work category."""

    category: str
    duration_ms: float


class ScriptExecution(SectionRecord):
    """CPU cost of one script."""

    url: str
    total_ms: float
    scripting_ms: float
    parse_compile_ms: float


class ResourceSummaryItem(SectionRecord):
    """Request count and transfer size for one resource type."""

    resource_type: str
    requests: int
    transfer_kb: float


class Diagnostic(SectionRecord):
    """An audit flagged as an optimization opportunity (score below 1)."""

    audit_id: str
    audit: str
    score: float
    rating: Rating
    label: str
    display: str
    savings: str


class ExtractionError(BaseModel):
    """An entry skipped while building the report."""

    model_config = ConfigDict(frozen=True)

    index: Optional[int] = None
    source_id: str = ""
    reason: str


class ReportModel(BaseModel):
    """
    Normalized report for one capture file.

    This is the only artifact handed to renderers. It holds primitive data
    only, so a renderer can iterate it without knowing the source format.

    Attributes
    ----------
    name : str
        Sheet identifier derived from the input filename
    source : str
        Input filename
    kind : CaptureKind
        Capture kind the report was built from
    status : ReportStatus
        EMPTY when no valid rows were extracted
    rows : list of NetworkRow
        Request rows in document order
    stats : dict of str to StatBundle
        Baseline statistics keyed by column name
    sections : dict of str to list of SectionRecord
        Auxiliary sections keyed by section name
    totals : dict of str to float
        Scalar totals reported by the source
    errors : list of ExtractionError
        Entries that were skipped
    """

    model_config = ConfigDict(frozen=True)

    name: str
    source: str = ""
    kind: CaptureKind
    status: ReportStatus = ReportStatus.OK
    rows: List[NetworkRow] = Field(default_factory=list)
    stats: Dict[str, StatBundle] = Field(default_factory=dict)
    sections: Dict[str, List[SerializeAsAny[SectionRecord]]] = Field(default_factory=dict)
    totals: Dict[str, float] = Field(default_factory=dict)
    errors: List[ExtractionError] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether the report has no valid rows to summarize."""
        return self.status == ReportStatus.EMPTY

    def section(self, name: str) -> List[SectionRecord]:
        """Return a section by name, or an empty list if absent."""
        return self.sections.get(name, [])

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-ready dictionary.

        Use model_dump() directly for Python-native values.
        """
        return self.model_dump(mode="json")
