"""
Row extractors for Lighthouse audits.

Each function here flattens one audit, or one item of an audit's details
table, into a section record. Numeric values are rounded to two decimals;
display strings are passed through from the report unchanged.
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from perfsheet.core.constants import BYTES_PER_KB, NOT_AVAILABLE, PERFORMANCE_METRICS
from perfsheet.core.errors import InvalidEntry
from perfsheet.core.models import (
    CaptureKind,
    Diagnostic,
    MainThreadItem,
    PerformanceMetric,
    ResourceSummaryItem,
    ScriptExecution,
    ServerMetric,
)
from perfsheet.core.source_schemas.lighthouse import LighthouseAudit
from perfsheet.core.utils import (
    bytes_to_kb,
    measured,
    measured_or_na,
    measured_or_zero,
    rate_score,
    round2,
    score_label,
    score_to_percent,
)
from perfsheet.extractors.base import BaseRowExtractor

logger = logging.getLogger(__name__)


def parse_audit(raw_audit: Any, audit_id: str, index: Optional[int] = None) -> LighthouseAudit:
    """
    Validate a raw audit dict.

    Parameters
    ----
    raw_audit : Any
        Audit as found under report['audits'][audit_id]
    audit_id : str
        Audit identifier, used when the audit does not carry its own id
    index : int, optional
        Ordinal reported with InvalidEntry

    Returns
    ----
    LighthouseAudit
        Validated audit

    Raises
    ----
    InvalidEntry
        If the audit is not an object or has wrongly typed fields
    """
    if not isinstance(raw_audit, dict):
        raise InvalidEntry(index, f"audit '{audit_id}' is not an object")
    try:
        audit = LighthouseAudit.model_validate(raw_audit)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise InvalidEntry(index, f"audit '{audit_id}' has invalid fields: {fields}") from e
    if audit.id is None:
        audit = audit.model_copy(update={"id": audit_id})
    return audit


def _item_number(item: Dict[str, Any], key: str) -> float:
    return measured_or_zero(item.get(key))


def _item_text(item: Dict[str, Any], *keys: str) -> str:
    for key in keys:
        value = item.get(key)
        if value:
            return str(value)
    return NOT_AVAILABLE


class AuditMetricExtractor(BaseRowExtractor[PerformanceMetric]):
    """
    Extractor for named performance metric audits.

    Raw entries are audit dicts carrying their 'id'. The metric label and
    unit come from the metric table; an audit missing from the report is
    passed as {'id': audit_id} and yields 'N/A' values.

    Parameters
    ----
    metrics : tuple, optional
        (audit id, label, unit) definitions; defaults to PERFORMANCE_METRICS
    """

    def __init__(self, metrics=PERFORMANCE_METRICS):
        self.metrics = {audit_id: (label, unit) for audit_id, label, unit in metrics}

    @property
    def capture_kind(self) -> CaptureKind:
        """
        Capture kind for Lighthouse reports.

        Returns
        ----
        CaptureKind
            CaptureKind.AUDIT
        """
        return CaptureKind.AUDIT

    def extract(self, raw_entry: Dict[str, Any], index: int) -> PerformanceMetric:
        """
        Transform a raw metric audit into a PerformanceMetric.

        Parameters
        ----
        raw_entry : Dict[str, Any]
            Audit dict with at least an 'id'
        index : int
            1-based position in the metric table

        Returns
        ----
        PerformanceMetric
            Flattened metric row

        Raises
        ----
        InvalidEntry
            If the audit is malformed
        """
        audit_id = raw_entry.get("id", "") if isinstance(raw_entry, dict) else ""
        audit = parse_audit(raw_entry, audit_id, index)
        label, unit = self.metrics.get(audit.id, (audit.title or audit.id, audit.numericUnit or ""))

        return PerformanceMetric(
            index=index,
            audit_id=audit.id,
            metric=label,
            value=measured_or_na(audit.numericValue),
            unit=unit,
            score=audit.score,
            score_pct=score_to_percent(audit.score),
            rating=rate_score(audit.score),
            display=audit.displayValue if audit.displayValue is not None else NOT_AVAILABLE,
        )


def server_metric(audit: Optional[LighthouseAudit], audit_id: str, label: str, unit: str) -> ServerMetric:
    """
    Build a server/network metric record.

    Byte weights are reported in KB; other units are kept as-is.
    """
    numeric = measured(audit.numericValue) if audit else None
    display = audit.displayValue if audit and audit.displayValue is not None else NOT_AVAILABLE

    if unit == "bytes":
        value = round2(numeric / BYTES_PER_KB) if numeric is not None else NOT_AVAILABLE
        unit = "KB"
    else:
        value = round2(numeric) if numeric is not None else NOT_AVAILABLE

    return ServerMetric(audit_id=audit_id, metric=label, value=value, unit=unit, display=display)


def main_thread_item(item: Dict[str, Any]) -> MainThreadItem:
    """Flatten one mainthread-work-breakdown item."""
    return MainThreadItem(
        category=_item_text(item, "groupLabel", "group"),
        duration_ms=_item_number(item, "duration"),
    )


def script_execution(item: Dict[str, Any]) -> ScriptExecution:
    """Flatten one bootup-time item."""
    return ScriptExecution(
        url=_item_text(item, "url"),
        total_ms=_item_number(item, "total"),
        scripting_ms=_item_number(item, "scripting"),
        parse_compile_ms=_item_number(item, "scriptParseCompile"),
    )


def resource_summary_item(item: Dict[str, Any]) -> ResourceSummaryItem:
    """Flatten one resource-summary item; transfer size in KB."""
    requests = measured(item.get("requestCount"))
    return ResourceSummaryItem(
        resource_type=_item_text(item, "label", "resourceType"),
        requests=int(requests) if requests is not None else 0,
        transfer_kb=bytes_to_kb(item.get("transferSize")),
    )


def diagnostic(audit: LighthouseAudit) -> Optional[Diagnostic]:
    """
    Build a diagnostic record for an audit with a known score below 1.

    Returns None for unscored and perfect-score audits.
    """
    if audit.score is None or audit.score >= 1:
        return None

    savings = NOT_AVAILABLE
    if audit.metricSavings is not None:
        savings = json.dumps(audit.metricSavings, separators=(",", ":"), ensure_ascii=False)

    return Diagnostic(
        audit_id=audit.id,
        audit=audit.title or audit.id,
        score=audit.score,
        rating=rate_score(audit.score),
        label=score_label(audit.score),
        display=audit.displayValue or NOT_AVAILABLE,
        savings=savings,
    )
