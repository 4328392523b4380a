"""
Report assembler.

Orchestrates row extraction, categorization and statistics over one parsed
capture document and produces its ReportModel.

Handles:
- HAR network logs: request rows, observed baseline statistics and page
  load timings
- Lighthouse reports: run metadata, category scores, performance and server
  metrics, main-thread and script breakdowns, resource summary and
  diagnostics

Invalid entries are skipped and recorded on the report. Only ParseError
leaves the assembler: in strict mode, or when a column total exceeds the
float range.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from perfsheet.core.constants import (
    AUDIT_CATEGORY_ORDER,
    BASELINE_COLUMNS,
    BOOTUP_TIME_AUDIT,
    DIAGNOSTIC_AUDITS,
    MAIN_THREAD_AUDIT,
    NOT_AVAILABLE,
    PERFORMANCE_METRICS,
    RESOURCE_SUMMARY_AUDIT,
    SECTION_CATEGORY_SCORES,
    SECTION_DIAGNOSTICS,
    SECTION_JS_EXECUTION,
    SECTION_MAIN_THREAD,
    SECTION_META,
    SECTION_PAGE_TIMINGS,
    SECTION_PERFORMANCE_METRICS,
    SECTION_RESOURCE_SUMMARY,
    SECTION_SERVER_METRICS,
    SERVER_METRICS,
    TOP_SCRIPTS_LIMIT,
    TOTAL_JS_EXECUTION_MS,
    TOTAL_MAIN_THREAD_MS,
)
from perfsheet.core.errors import InvalidEntry, ParseError
from perfsheet.core.models import (
    CaptureKind,
    CategoryScore,
    ExtractionError,
    MetaField,
    PageTiming,
    Rating,
    ReportModel,
    ReportStatus,
    SectionRecord,
)
from perfsheet.core.source_schemas.capture import AuditCapture, CaptureDocument, NetworkCapture
from perfsheet.core.source_schemas.har import HarPage, HarPageTimings
from perfsheet.core.source_schemas.lighthouse import LighthouseAudit, LighthouseCategory, LighthouseReport
from perfsheet.core.utils import (
    measured,
    measured_or_na,
    measured_or_zero,
    rate_score,
    round2,
    score_to_percent,
    sheet_name_from_path,
)
from perfsheet.extractors.har import NetworkRowExtractor
from perfsheet.extractors.lighthouse import (
    AuditMetricExtractor,
    diagnostic,
    main_thread_item,
    parse_audit,
    resource_summary_item,
    script_execution,
    server_metric,
)
from perfsheet.services.statistics import summarize

logger = logging.getLogger(__name__)


class ReportAssembler:
    """
    Builds ReportModels from parsed capture documents.

    The assembler holds no per-file state, so one instance can be reused
    across files (or shared between threads).

    Attributes
    ----------
    network_extractor : NetworkRowExtractor
        Extractor for HAR entries
    metric_extractor : AuditMetricExtractor
        Extractor for performance metric audits
    strict_entries : bool
        If True, the first invalid entry makes the whole file a ParseError
        instead of being skipped
    """

    def __init__(
        self,
        network_extractor: Optional[NetworkRowExtractor] = None,
        metric_extractor: Optional[AuditMetricExtractor] = None,
        strict_entries: bool = False,
    ):
        """
        Initialize assembler.

        Parameters
        ----------
        network_extractor : NetworkRowExtractor, optional
            Extractor for HAR entries; a default one is created if None
        metric_extractor : AuditMetricExtractor, optional
            Extractor for metric audits; a default one is created if None
        strict_entries : bool
            Escalate invalid entries to ParseError
        """
        self.network_extractor = network_extractor or NetworkRowExtractor()
        self.metric_extractor = metric_extractor or AuditMetricExtractor()
        self.strict_entries = strict_entries

    def assemble(self, capture: CaptureDocument, name: Optional[str] = None) -> ReportModel:
        """
        Build the report for one capture document.

        Parameters
        ----------
        capture : NetworkCapture or AuditCapture
            Parsed capture document
        name : str, optional
            Report identifier; derived from the capture source filename
            when omitted

        Returns
        -------
        ReportModel
            Assembled report

        Raises
        ------
        ParseError
            In strict mode, if any entry is invalid, or if the baseline
            statistics overflow
        ValueError
            If the capture kind is not supported
        """
        if name is None:
            name = sheet_name_from_path(capture.source)

        if capture.kind == CaptureKind.NETWORK:
            report = self._assemble_network(capture, name)
        elif capture.kind == CaptureKind.AUDIT:
            report = self._assemble_audit(capture, name)
        else:
            raise ValueError(f"Unsupported capture kind: {capture.kind}")

        if report.errors and self.strict_entries:
            first = report.errors[0]
            raise ParseError(capture.source, f"invalid entry {first.index or first.source_id}: {first.reason}")

        logger.info(
            "Assembled %s report '%s': %d rows, %d sections, %d skipped",
            report.kind.value,
            report.name,
            len(report.rows),
            len(report.sections),
            len(report.errors),
        )
        return report

    # ------------------------------------------------------------
    # Network captures
    # ------------------------------------------------------------

    def _assemble_network(self, capture: NetworkCapture, name: str) -> ReportModel:
        log = capture.document.log
        logger.info("Parsed %d entries from %s", len(log.entries), capture.source)

        rows, errors = self.network_extractor.extract_all(log.entries)
        page_timings = self._page_timings(log.pages, errors)

        sections: Dict[str, List[SectionRecord]] = {}
        if page_timings:
            sections[SECTION_PAGE_TIMINGS] = page_timings

        if not rows:
            logger.warning("No valid entries in %s; report is empty", capture.source)
            return ReportModel(
                name=name,
                source=capture.source,
                kind=CaptureKind.NETWORK,
                status=ReportStatus.EMPTY,
                sections=sections,
                errors=errors,
            )

        try:
            stats = {column: summarize(column, [getattr(row, column) for row in rows]) for column in BASELINE_COLUMNS}
        except ValueError as e:
            # a column total beyond float range
            raise ParseError(capture.source, f"cannot summarize entries: {e}") from e

        return ReportModel(
            name=name,
            source=capture.source,
            kind=CaptureKind.NETWORK,
            status=ReportStatus.OK,
            rows=rows,
            stats=stats,
            sections=sections,
            errors=errors,
        )

    def _page_timings(self, raw_pages: List[Any], errors: List[ExtractionError]) -> List[PageTiming]:
        """
        Extract load timings per declared page.

        A missing or negative timing is 'N/A', never 0: 0 is a real
        measurement.
        """
        timings = []
        for idx, raw_page in enumerate(raw_pages, 1):
            try:
                page = HarPage.model_validate(raw_page)
            except ValidationError as e:
                logger.warning("Skipping page %d: %d invalid field(s)", idx, e.error_count())
                errors.append(ExtractionError(source_id=f"page {idx}", reason="invalid page timings"))
                continue

            page_timings = page.pageTimings or HarPageTimings()
            timings.append(
                PageTiming(
                    title=page.title or "Unknown",
                    content_loaded_ms=measured_or_na(page_timings.onContentLoad),
                    load_ms=measured_or_na(page_timings.onLoad),
                )
            )
        return timings

    # ------------------------------------------------------------
    # Audit captures
    # ------------------------------------------------------------

    def _assemble_audit(self, capture: AuditCapture, name: str) -> ReportModel:
        report = capture.document
        errors: List[ExtractionError] = []

        def lookup(audit_id: str) -> Optional[LighthouseAudit]:
            raw_audit = report.audits.get(audit_id)
            if raw_audit is None:
                return None
            try:
                return parse_audit(raw_audit, audit_id)
            except InvalidEntry as e:
                logger.warning("Skipping audit %s: %s", audit_id, e.reason)
                errors.append(ExtractionError(source_id=audit_id, reason=e.reason))
                return None

        metric_entries = [self._metric_entry(report.audits.get(audit_id), audit_id) for audit_id, _, _ in PERFORMANCE_METRICS]
        metrics, metric_errors = self.metric_extractor.extract_all(metric_entries)
        errors.extend(
            error.model_copy(update={"source_id": PERFORMANCE_METRICS[error.index - 1][0]}) for error in metric_errors
        )

        main_thread = lookup(MAIN_THREAD_AUDIT)
        bootup = lookup(BOOTUP_TIME_AUDIT)
        resources = lookup(RESOURCE_SUMMARY_AUDIT)

        sections: Dict[str, List[SectionRecord]] = {
            SECTION_META: self._meta(report),
            SECTION_CATEGORY_SCORES: self._category_scores(report.categories, errors),
            SECTION_PERFORMANCE_METRICS: metrics,
            SECTION_SERVER_METRICS: [
                server_metric(lookup(audit_id), audit_id, label, unit) for audit_id, label, unit in SERVER_METRICS
            ],
            SECTION_MAIN_THREAD: [main_thread_item(item) for item in main_thread.items] if main_thread else [],
            # first N in source order; the report already ranks them
            SECTION_JS_EXECUTION: [script_execution(item) for item in bootup.items[:TOP_SCRIPTS_LIMIT]]
            if bootup
            else [],
            SECTION_RESOURCE_SUMMARY: [resource_summary_item(item) for item in resources.items] if resources else [],
        }

        diagnostics = []
        for audit_id in DIAGNOSTIC_AUDITS:
            audit = lookup(audit_id)
            finding = diagnostic(audit) if audit else None
            if finding:
                diagnostics.append(finding)
        sections[SECTION_DIAGNOSTICS] = diagnostics

        totals = {
            TOTAL_MAIN_THREAD_MS: measured_or_zero(main_thread.numericValue) if main_thread else 0.0,
            TOTAL_JS_EXECUTION_MS: measured_or_zero(bootup.numericValue) if bootup else 0.0,
        }

        logger.info("Parsed metrics for: %s", sections[SECTION_META][0].value)

        return ReportModel(
            name=name,
            source=capture.source,
            kind=CaptureKind.AUDIT,
            status=ReportStatus.OK,
            sections=sections,
            totals=totals,
            errors=errors,
        )

    @staticmethod
    def _metric_entry(raw_audit: Any, audit_id: str) -> Any:
        """Raw audit for the metric extractor, tagged with its id."""
        if raw_audit is None:
            return {"id": audit_id}
        if isinstance(raw_audit, dict) and raw_audit.get("id") is None:
            return {**raw_audit, "id": audit_id}
        return raw_audit

    @staticmethod
    def _meta(report: LighthouseReport) -> List[MetaField]:
        """Run metadata with 'N/A' for anything not reported."""
        benchmark = measured(report.environment.benchmarkIndex) if report.environment else None
        return [
            MetaField(label="URL", value=report.finalDisplayedUrl or report.requestedUrl or NOT_AVAILABLE),
            MetaField(label="Fetch Time", value=report.fetchTime or NOT_AVAILABLE),
            MetaField(label="Lighthouse Version", value=report.lighthouseVersion or NOT_AVAILABLE),
            MetaField(label="User Agent", value=report.userAgent or NOT_AVAILABLE),
            MetaField(label="Gather Mode", value=report.gatherMode or NOT_AVAILABLE),
            MetaField(label="Benchmark Index", value=round2(benchmark) if benchmark else NOT_AVAILABLE),
        ]

    @staticmethod
    def _category_scores(categories: Dict[str, Any], errors: List[ExtractionError]) -> List[CategoryScore]:
        """
        Scores for the fixed category list, skipping absent categories.

        The rating is taken from the rounded percentage, so a raw 0.895
        (shown as 90) rates Good.
        """
        scores = []
        for category_id in AUDIT_CATEGORY_ORDER:
            raw_category = categories.get(category_id)
            if raw_category is None:
                continue
            try:
                category = LighthouseCategory.model_validate(raw_category)
            except ValidationError:
                logger.warning("Skipping category %s: invalid fields", category_id)
                errors.append(ExtractionError(source_id=category_id, reason="invalid category"))
                continue

            score = score_to_percent(category.score)
            rating = rate_score(score / 100) if isinstance(score, int) else Rating.NOT_AVAILABLE
            scores.append(
                CategoryScore(
                    category_id=category_id,
                    category=category.title or category_id,
                    score=score,
                    rating=rating,
                )
            )
        return scores
