"""
Unit tests for Lighthouse audit extraction.
"""

import pytest

from perfsheet.core.errors import InvalidEntry
from perfsheet.core.models import CaptureKind, Rating
from perfsheet.core.source_schemas.lighthouse import LighthouseAudit
from perfsheet.extractors.lighthouse import (
    AuditMetricExtractor,
    diagnostic,
    main_thread_item,
    parse_audit,
    resource_summary_item,
    script_execution,
    server_metric,
)


class TestParseAudit:
    """Tests for parse_audit()."""

    def test_fills_missing_id(self):
        """Test that the lookup key becomes the id when absent."""
        audit = parse_audit({"score": 0.5}, "speed-index")
        assert audit.id == "speed-index"
        assert audit.score == 0.5

    def test_non_object_rejected(self):
        """Test that a non-object audit is rejected."""
        with pytest.raises(InvalidEntry):
            parse_audit(["not", "an", "audit"], "speed-index")

    def test_invalid_score_rejected(self):
        """Test that non-numeric and non-finite scores are rejected."""
        with pytest.raises(InvalidEntry):
            parse_audit({"score": "high"}, "speed-index", index=3)
        with pytest.raises(InvalidEntry):
            parse_audit({"score": float("nan")}, "speed-index")


class TestAuditMetricExtractor:
    """Tests for AuditMetricExtractor."""

    @pytest.fixture
    def extractor(self):
        return AuditMetricExtractor()

    def test_capture_kind(self, extractor):
        """Test that capture_kind is AUDIT."""
        assert extractor.capture_kind == CaptureKind.AUDIT

    def test_extract_metric(self, extractor, audit_factory):
        """Test a fully reported metric."""
        raw = audit_factory("first-contentful-paint", 0.95, 1234.567, "1.2 s")
        metric = extractor.extract(raw, 1)

        assert metric.index == 1
        assert metric.metric == "First Contentful Paint (FCP)"
        assert metric.value == 1234.57
        assert metric.unit == "ms"
        assert metric.display == "1.2 s"
        assert metric.score == 0.95
        assert metric.score_pct == 95
        assert metric.rating == Rating.GOOD

    def test_absent_metric_is_not_available(self, extractor):
        """Test that an audit missing from the report yields N/A values."""
        metric = extractor.extract({"id": "max-potential-fid"}, 7)

        assert metric.metric == "Max Potential FID"
        assert metric.value == "N/A"
        assert metric.display == "N/A"
        assert metric.score_pct == "N/A"
        assert metric.rating == Rating.NOT_AVAILABLE

    def test_display_passed_through(self, extractor, audit_factory):
        """Test that display strings are not reformatted."""
        raw = audit_factory("cumulative-layout-shift", 1, 0.0123, "0.012")
        metric = extractor.extract(raw, 4)
        assert metric.display == "0.012"
        assert metric.value == 0.01


def test_server_metric_converts_bytes(audit_factory):
    """Test that byte weights are reported in KB."""
    audit = LighthouseAudit.model_validate(audit_factory("total-byte-weight", 1, 2048000, "2,000 KiB"))
    metric = server_metric(audit, "total-byte-weight", "Total Byte Weight", "bytes")

    assert metric.value == 2000.0
    assert metric.unit == "KB"
    assert metric.display == "2,000 KiB"


def test_server_metric_missing_audit():
    """Test that a missing server audit yields N/A."""
    metric = server_metric(None, "server-response-time", "Server Response Time (TTFB)", "ms")
    assert metric.value == "N/A"
    assert metric.unit == "ms"
    assert metric.display == "N/A"


def test_detail_items():
    """Test flattening of breakdown detail items."""
    assert main_thread_item({"group": "other", "duration": 600.377}).model_dump() == {
        "category": "other",
        "duration_ms": 600.38,
    }
    assert main_thread_item({}).category == "N/A"

    script = script_execution({"url": "https://x/a.js", "total": 10.556, "scripting": 5})
    assert (script.total_ms, script.scripting_ms, script.parse_compile_ms) == (10.56, 5.0, 0.0)

    resource = resource_summary_item({"resourceType": "font", "requestCount": 3, "transferSize": 3072})
    assert (resource.resource_type, resource.requests, resource.transfer_kb) == ("font", 3, 3.0)


@pytest.mark.parametrize("count", [float("inf"), float("nan"), -2, True, "7"])
def test_resource_request_count_unknown(count):
    """Test that unusable request counts become 0."""
    assert resource_summary_item({"label": "Script", "requestCount": count}).requests == 0


class TestDiagnostic:
    """Tests for diagnostic()."""

    def test_perfect_and_unscored_audits_skipped(self, audit_factory):
        """Test that score 1 and null scores are not diagnostics."""
        assert diagnostic(LighthouseAudit.model_validate(audit_factory("unused-css-rules", 1))) is None
        assert diagnostic(LighthouseAudit.model_validate(audit_factory("unused-css-rules", None))) is None

    def test_diagnostic_fields(self, audit_factory):
        """Test label, display and compact savings JSON."""
        audit = LighthouseAudit.model_validate(
            audit_factory(
                "unused-javascript",
                0.45,
                display="Potential savings of 120 KiB",
                title="Reduce unused JavaScript",
                metricSavings={"LCP": 150, "FCP": 0},
            )
        )
        finding = diagnostic(audit)

        assert finding.audit == "Reduce unused JavaScript"
        assert finding.label == "45 (Poor)"
        assert finding.rating == Rating.POOR
        assert finding.display == "Potential savings of 120 KiB"
        assert finding.savings == '{"LCP":150,"FCP":0}'

    def test_missing_savings_and_display(self, audit_factory):
        """Test N/A defaults and empty savings."""
        finding = diagnostic(LighthouseAudit.model_validate(audit_factory("legacy-javascript", 0.6)))
        assert finding.display == "N/A"
        assert finding.savings == "N/A"

        finding = diagnostic(
            LighthouseAudit.model_validate(audit_factory("legacy-javascript", 0.6, metricSavings={}))
        )
        assert finding.savings == "{}"
