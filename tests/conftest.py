"""
Shared fixtures: in-memory HAR and Lighthouse documents.
"""

import json

import pytest


def make_entry(
    url="https://example.com/api/v2/billing/invoice",
    method="GET",
    status=200,
    time=123.456,
    size=2048,
    timings=None,
):
    """Build a raw HAR entry."""
    if timings is None:
        timings = {
            "blocked": 1.5,
            "dns": -1,
            "connect": -1,
            "ssl": -1,
            "send": 0.25,
            "wait": 100.126,
            "receive": 21.58,
        }
    return {
        "startedDateTime": "2024-01-01T00:00:00.000Z",
        "time": time,
        "request": {"method": method, "url": url, "headers": []},
        "response": {"status": status, "content": {"size": size, "mimeType": "application/json"}},
        "timings": timings,
    }


@pytest.fixture
def har_document():
    """HAR log with three entries and one page."""
    return {
        "log": {
            "version": "1.2",
            "pages": [
                {
                    "id": "page_1",
                    "title": "https://example.com/",
                    "pageTimings": {"onContentLoad": 812.346, "onLoad": 1500},
                }
            ],
            "entries": [
                make_entry(),
                make_entry(url="https://example.com/static/app.css", time=20, size=1024),
                make_entry(url="https://example.com/api/v1/user_profile", method="POST", time=300, size=512),
            ],
        }
    }


def make_audit(audit_id, score=None, numeric=None, display=None, title=None, **extra):
    """Build a raw Lighthouse audit."""
    audit = {"id": audit_id, "title": title or audit_id, "score": score}
    if numeric is not None:
        audit["numericValue"] = numeric
    if display is not None:
        audit["displayValue"] = display
    audit.update(extra)
    return audit


@pytest.fixture
def lighthouse_report():
    """Lighthouse report covering every section."""
    audits = {
        "first-contentful-paint": make_audit("first-contentful-paint", 0.95, 1234.567, "1.2 s"),
        "largest-contentful-paint": make_audit("largest-contentful-paint", 0.6, 3000, "3.0 s"),
        "total-blocking-time": make_audit("total-blocking-time", 0.2, 800, "800 ms"),
        "cumulative-layout-shift": make_audit("cumulative-layout-shift", 1, 0.01, "0.01"),
        "speed-index": make_audit("speed-index", 0.9, 2000, "2.0 s"),
        "interactive": make_audit("interactive", 0.5, 4000, "4.0 s"),
        # max-potential-fid intentionally absent
        "server-response-time": make_audit("server-response-time", 1, 120.333, "Root document took 120 ms"),
        "total-byte-weight": make_audit("total-byte-weight", 1, 2048000, "Total size was 2,000 KiB"),
        "mainthread-work-breakdown": make_audit(
            "mainthread-work-breakdown",
            0.5,
            1500.5,
            "1.5 s",
            details={
                "type": "table",
                "items": [
                    {"group": "scriptEvaluation", "groupLabel": "Script Evaluation", "duration": 900.123},
                    {"group": "other", "duration": 600.377},
                ],
            },
        ),
        "bootup-time": make_audit(
            "bootup-time",
            0.7,
            700.25,
            "0.7 s",
            details={
                "type": "table",
                "items": [
                    {"url": f"https://example.com/js/{i}.js", "total": 40 + i, "scripting": 20, "scriptParseCompile": 5}
                    for i in range(12)
                ],
            },
        ),
        "resource-summary": make_audit(
            "resource-summary",
            None,
            details={
                "type": "table",
                "items": [
                    {"resourceType": "script", "label": "Script", "requestCount": 10, "transferSize": 10240},
                    {"resourceType": "total", "label": "Total", "requestCount": 20, "transferSize": 20480},
                ],
            },
        ),
        "unused-javascript": make_audit(
            "unused-javascript", 0.45, display="Potential savings of 120 KiB", metricSavings={"LCP": 150, "FCP": 0}
        ),
        "unused-css-rules": make_audit("unused-css-rules", 1),
        "render-blocking-resources": make_audit("render-blocking-resources", 0.75, metricSavings={}),
        "uses-text-compression": make_audit("uses-text-compression", None),
    }
    return {
        "lighthouseVersion": "12.0.0",
        "requestedUrl": "https://example.com/",
        "finalDisplayedUrl": "https://example.com/",
        "fetchTime": "2024-01-01T00:00:00.000Z",
        "userAgent": "Mozilla/5.0",
        "gatherMode": "navigation",
        "environment": {"benchmarkIndex": 1500.456},
        "categories": {
            "performance": {"id": "performance", "title": "Performance", "score": 0.896},
            "accessibility": {"id": "accessibility", "title": "Accessibility", "score": 0.5},
            "best-practices": {"id": "best-practices", "title": "Best Practices", "score": None},
            "pwa": {"id": "pwa", "title": "PWA", "score": 1},
        },
        "audits": audits,
    }


@pytest.fixture
def write_json(tmp_path):
    """Write a document to a file under tmp_path and return its path."""

    def _write(name, document, directory=None):
        target_dir = directory or tmp_path
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / name
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def entry_factory():
    """Factory for raw HAR entries."""
    return make_entry


@pytest.fixture
def audit_factory():
    """Factory for raw Lighthouse audits."""
    return make_audit
