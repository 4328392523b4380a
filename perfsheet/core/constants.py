"""
Engine constants for capture extraction and report assembly.

These tables drive URL categorization, audit metric selection, diagnostic
filtering and score rating. They are read-only; nothing in the engine
mutates them.
"""

# File extensions that mark a request as a static asset
STATIC_ASSET_EXTENSIONS = frozenset(
    {"js", "css", "png", "jpg", "jpeg", "gif", "svg", "ico", "woff", "woff2", "ttf", "eot", "map"}
)

# Version prefixes and generic wrappers skipped when picking a category seed
WRAPPER_SEGMENTS = frozenset(
    {"api", "v1", "v2", "v3", "v4", "rest", "web", "app", "public", "private", "internal", "external"}
)

STATIC_ASSET_CATEGORY = "Static Asset"
GENERAL_CATEGORY = "General"

# Marker for values the source did not report
NOT_AVAILABLE = "N/A"

# Spreadsheet tab names are limited to 31 characters
SHEET_NAME_MAX_LENGTH = 31

# Fixed-point display precision applied at extraction time
DISPLAY_DECIMALS = 2

BYTES_PER_KB = 1024

# Score rating thresholds (scores are normalized to [0, 1])
RATING_GOOD_THRESHOLD = 0.9
RATING_NEEDS_WORK_THRESHOLD = 0.5

# Network capture: columns summarized into the observed baseline
BASELINE_COLUMNS = ("response_ms", "size_kb", "wait_ms")

# Network capture: HAR timing phases, in display order
TIMING_PHASES = ("blocked", "dns", "connect", "ssl", "send", "wait", "receive")

# Audit capture: category ids reported, in display order
AUDIT_CATEGORY_ORDER = ("performance", "accessibility", "best-practices", "seo")

# Audit capture: (audit id, display label, unit)
PERFORMANCE_METRICS = (
    ("first-contentful-paint", "First Contentful Paint (FCP)", "ms"),
    ("largest-contentful-paint", "Largest Contentful Paint (LCP)", "ms"),
    ("total-blocking-time", "Total Blocking Time (TBT)", "ms"),
    ("cumulative-layout-shift", "Cumulative Layout Shift (CLS)", ""),
    ("speed-index", "Speed Index (SI)", "ms"),
    ("interactive", "Time to Interactive (TTI)", "ms"),
    ("max-potential-fid", "Max Potential FID", "ms"),
)

SERVER_METRICS = (
    ("server-response-time", "Server Response Time (TTFB)", "ms"),
    ("total-byte-weight", "Total Byte Weight", "bytes"),
)

MAIN_THREAD_AUDIT = "mainthread-work-breakdown"
BOOTUP_TIME_AUDIT = "bootup-time"
RESOURCE_SUMMARY_AUDIT = "resource-summary"

# Number of scripts kept from the bootup-time audit (source order)
TOP_SCRIPTS_LIMIT = 10

# Audits surfaced as diagnostics when their score is below 1
DIAGNOSTIC_AUDITS = (
    "unused-javascript",
    "unused-css-rules",
    "render-blocking-resources",
    "uses-text-compression",
    "uses-optimized-images",
    "uses-responsive-images",
    "modern-image-formats",
    "efficient-animated-content",
    "duplicated-javascript",
    "legacy-javascript",
    "unminified-css",
    "unminified-javascript",
)

# Section names used in ReportModel.sections
SECTION_PAGE_TIMINGS = "page_timings"
SECTION_META = "meta"
SECTION_CATEGORY_SCORES = "category_scores"
SECTION_PERFORMANCE_METRICS = "performance_metrics"
SECTION_SERVER_METRICS = "server_metrics"
SECTION_MAIN_THREAD = "main_thread"
SECTION_JS_EXECUTION = "js_execution"
SECTION_RESOURCE_SUMMARY = "resource_summary"
SECTION_DIAGNOSTICS = "diagnostics"

# Totals reported alongside breakdown sections
TOTAL_MAIN_THREAD_MS = "main_thread_ms"
TOTAL_JS_EXECUTION_MS = "js_execution_ms"
