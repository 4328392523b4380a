"""
Column and metric descriptions written to the workbook's Helper sheet.

Each entry is (label, description). An entry with an empty label and an
upper-case description is a section heading; ("", "") is a blank separator.
"""

from perfsheet.core.models import CaptureKind

NETWORK_HELP = (
    ("", "DATA COLUMNS"),
    ("#", "Sequential row number for each network request captured in the HAR file."),
    ("Method", "HTTP method used (GET, POST, PUT, DELETE, PATCH, OPTIONS, etc.)."),
    ("Endpoint URL", "The full URL of the network request including protocol, domain, path and query parameters."),
    ("Category", "Auto-derived category based on the first meaningful path segment of the URL."),
    ("Status", "HTTP response status code (e.g. 200 OK, 304 Not Modified, 404 Not Found, 500 Server Error)."),
    ("Response (ms)", "Total round-trip time for the request in milliseconds (ms). Includes all timing phases combined."),
    ("Size (KB)", "Response body size in kilobytes (KB). Represents the uncompressed content size."),
    ("", ""),
    ("", "TIMING BREAKDOWN"),
    ("Blocked (ms)", "Time (ms) the request spent queued in the browser, waiting for a network connection to become available."),
    ("DNS (ms)", "Time (ms) spent resolving the domain name to an IP address. 0 if cached or connection reused."),
    ("Connect (ms)", "Time (ms) to establish a TCP connection to the server. 0 if connection was reused."),
    ("SSL (ms)", "Time (ms) for the TLS/SSL handshake. 0 if HTTP or connection was reused."),
    ("Send (ms)", "Time (ms) to send the HTTP request (headers + body) to the server."),
    (
        "Wait/TTFB (ms)",
        "Time to First Byte (ms). Time waiting for the server to process and begin sending the response. "
        "This is the primary indicator of server-side processing time.",
    ),
    ("Receive (ms)", "Time (ms) to download the full response body from the server."),
    ("", ""),
    ("", "OBSERVED BASELINE METRICS"),
    ("Total Requests", "Total number of HTTP requests captured in the HAR file for this page."),
    ("Average", "Arithmetic mean of all values. Useful as a general indicator but can be skewed by outliers."),
    ("Median", "The middle value (50th percentile) when sorted. More representative of typical performance than average."),
    ("Min", "The fastest/smallest observed value. Represents best-case performance."),
    ("Max", "The slowest/largest observed value. Represents worst-case performance."),
    (
        "95th Percentile (P95)",
        "Value below which 95% of requests fall. Indicates the performance experienced by most users, "
        "excluding extreme outliers.",
    ),
    ("Total Transfer Size (KB)", "Sum of all response sizes in kilobytes (KB). Represents total data downloaded for the page."),
    ("", ""),
    ("", "PAGE LOAD TIMINGS"),
    (
        "DOMContentLoaded (ms)",
        "Time (ms) from navigation start until the HTML document is fully parsed and the DOM is ready. "
        'Scripts marked "defer" have finished. Stylesheets, images, and subframes may still be loading.',
    ),
    (
        "Page Load (ms)",
        "Time (ms) from navigation start until the entire page is fully loaded, including all stylesheets, "
        'images, scripts, and subframes. This is the "onLoad" event.',
    ),
)

AUDIT_HELP = (
    ("", "CATEGORY SCORES"),
    (
        "Performance",
        "Overall performance score (0-100) computed from weighted Core Web Vitals. "
        "Scores 90+ are Good, 50-89 Needs Work, below 50 is Poor.",
    ),
    (
        "Accessibility",
        "Score (0-100) measuring how accessible the page is to users with disabilities. "
        "Based on automated axe-core checks for ARIA, contrast, labels, etc.",
    ),
    (
        "Best Practices",
        "Score (0-100) for general web development best practices including HTTPS, console errors, "
        "deprecated APIs, and image aspect ratios.",
    ),
    ("SEO", "Score (0-100) for basic search engine optimization checks including meta tags, crawlability, and structured data."),
    ("", ""),
    ("", "CORE WEB VITALS & PERFORMANCE METRICS"),
    (
        "First Contentful Paint (FCP)",
        "Time (ms) from navigation start to when the browser renders the first piece of DOM content "
        "(text, image, SVG, or canvas). Good: < 1.8s, Poor: > 3.0s.",
    ),
    (
        "Largest Contentful Paint (LCP)",
        "Time (ms) until the largest content element in the viewport is fully rendered. "
        "Primary metric for perceived load speed. Good: < 2.5s, Poor: > 4.0s.",
    ),
    (
        "Total Blocking Time (TBT)",
        "Total time (ms) between FCP and TTI where the main thread was blocked for more than 50ms. "
        "Good: < 200ms, Poor: > 600ms.",
    ),
    (
        "Cumulative Layout Shift (CLS)",
        "Unitless score measuring unexpected visual movement of page elements during load. Good: < 0.1, Poor: > 0.25.",
    ),
    (
        "Speed Index (SI)",
        "Time (ms) measuring how quickly content is visually displayed during page load. Good: < 3.4s, Poor: > 5.8s.",
    ),
    (
        "Time to Interactive (TTI)",
        "Time (ms) from navigation start until the page is fully interactive: the main thread has been idle "
        "for at least 5 seconds with no long tasks.",
    ),
    (
        "Max Potential FID",
        "Maximum duration (ms) of the longest task on the main thread. The worst-case First Input Delay "
        "a user could experience.",
    ),
    ("", ""),
    ("", "SERVER & NETWORK"),
    (
        "Server Response Time (TTFB)",
        "Time (ms) for the server to respond to the initial document request. Good: < 200ms, Poor: > 600ms.",
    ),
    (
        "Total Byte Weight",
        "Total transfer size (KB) of all resources loaded by the page. Lighthouse flags pages exceeding 5,000 KB.",
    ),
    ("", ""),
    ("", "MAIN THREAD BREAKDOWN"),
    ("Script Evaluation", "Time (ms) spent executing JavaScript code on the main thread. The largest contributor to TBT and TTI."),
    ("Script Parsing & Compilation", "Time (ms) spent parsing and compiling JavaScript before execution."),
    ("Style & Layout", "Time (ms) spent recalculating CSS styles and computing element layout (reflow)."),
    ("Parse HTML & CSS", "Time (ms) spent parsing the HTML document and CSS stylesheets into DOM and CSSOM trees."),
    ("Rendering", "Time (ms) spent compositing layers and painting pixels to the screen."),
    ("Garbage Collection", "Time (ms) spent by the JavaScript engine reclaiming unused memory."),
    ("Other", "Time (ms) spent on other main thread activities not categorized above."),
    ("", ""),
    ("", "JAVASCRIPT EXECUTION"),
    (
        "Total CPU Time",
        "Total time (ms) a script spent on the main thread across all activities (evaluation, parsing, compilation).",
    ),
    ("Scripting", "Time (ms) spent evaluating and executing the JavaScript code within this script file."),
    ("Parse/Compile", "Time (ms) spent parsing the source code and compiling it to bytecode for this script file."),
    ("", ""),
    ("", "RESOURCE SUMMARY"),
    ("Resource Type", "Category of network resource: Script, Stylesheet, Image, Font, Document, Media, or Other."),
    ("Requests", "Number of HTTP requests made for this resource type."),
    ("Transfer Size (KB)", "Total compressed transfer size in kilobytes for this resource type."),
    ("", ""),
    ("", "DIAGNOSTICS & OPPORTUNITIES"),
    ("Unused JavaScript", "JavaScript code that was downloaded but not executed during page load."),
    ("Unused CSS", "CSS rules that were downloaded but not applied to any visible elements."),
    ("Render-Blocking Resources", "Scripts and stylesheets in the document head that block the first paint."),
    ("Text Compression", "Resources served without gzip/brotli compression."),
    (
        "Potential Savings",
        "Estimated improvement in metric values (FCP, LCP, TBT) if the diagnostic issue is resolved. "
        "Shown as JSON with metric abbreviations and millisecond savings.",
    ),
    ("", ""),
    ("", "SCORE INTERPRETATION"),
    ("Good (90-100)", "The metric or category is performing well. Shown with green highlighting."),
    ("Needs Work (50-89)", "The metric or category has room for improvement. Shown with amber highlighting."),
    ("Poor (0-49)", "The metric or category is significantly below recommended thresholds. Shown with red highlighting."),
)

HELP_ENTRIES = {
    CaptureKind.NETWORK: NETWORK_HELP,
    CaptureKind.AUDIT: AUDIT_HELP,
}

# (label column width, description column width)
HELP_COLUMN_WIDTHS = {
    CaptureKind.NETWORK: (30, 90),
    CaptureKind.AUDIT: (40, 100),
}


def is_section_heading(label: str, description: str) -> bool:
    """Whether a help entry is a section heading."""
    return not label and bool(description) and description == description.upper()
