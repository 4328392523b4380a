"""
Workbook renderer.

Writes ReportModels into an .xlsx workbook with XlsxWriter: one sheet per
report, laid out by capture kind, plus a Helper sheet describing the
columns. The renderer only reads the report; every number it writes was
computed and rounded upstream.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import xlsxwriter

from perfsheet.core.config import DEFAULT_STYLE, FontStyle, RenderStyle
from perfsheet.core.constants import (
    SECTION_CATEGORY_SCORES,
    SECTION_DIAGNOSTICS,
    SECTION_JS_EXECUTION,
    SECTION_MAIN_THREAD,
    SECTION_META,
    SECTION_PAGE_TIMINGS,
    SECTION_PERFORMANCE_METRICS,
    SECTION_RESOURCE_SUMMARY,
    SECTION_SERVER_METRICS,
    SHEET_NAME_MAX_LENGTH,
    TOTAL_JS_EXECUTION_MS,
    TOTAL_MAIN_THREAD_MS,
)
from perfsheet.core.models import CaptureKind, Rating, ReportModel
from perfsheet.core.utils import score_label
from perfsheet.services.helper_text import HELP_COLUMN_WIDTHS, HELP_ENTRIES, is_section_heading

logger = logging.getLogger(__name__)

HELPER_SHEET_NAME = "Helper"

# (header, width) for the network request table
NETWORK_COLUMNS = (
    ("#", 5),
    ("Method", 8),
    ("Endpoint URL", 120),
    ("Category", 20),
    ("Status", 8),
    ("Response (ms)", 15),
    ("Size (KB)", 12),
    ("Blocked (ms)", 13),
    ("DNS (ms)", 10),
    ("Connect (ms)", 13),
    ("SSL (ms)", 10),
    ("Send (ms)", 10),
    ("Wait/TTFB (ms)", 15),
    ("Receive (ms)", 13),
)

AUDIT_COLUMN_WIDTHS = (38, 22, 18, 18, 18, 30)

# Baseline table columns, aligned under the request table
_RESPONSE_COL = 5
_SIZE_COL = 6
_WAIT_COL = 12

# Characters Excel rejects in sheet names
_INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

Cell = Union[str, int, float]


def safe_sheet_name(name: str, taken: Sequence[str]) -> str:
    """
    Make a sheet name valid and unique within a workbook.

    Invalid characters become '_', the name is cut to 31 characters and a
    numeric suffix is added if the name (case-insensitively) is taken.

    Parameters
    ----
    name : str
        Proposed sheet name
    taken : Sequence[str]
        Names already used in the workbook

    Returns
    ----
    str
        Usable sheet name
    """
    base = _INVALID_SHEET_CHARS.sub("_", name).strip("'")[:SHEET_NAME_MAX_LENGTH] or "Sheet"
    used = {t.lower() for t in taken}

    candidate = base
    counter = 2
    while candidate.lower() in used:
        suffix = f"_{counter}"
        candidate = base[: SHEET_NAME_MAX_LENGTH - len(suffix)] + suffix
        counter += 1
    return candidate


class WorkbookRenderer:
    """
    Renders reports into one workbook.

    Use as a context manager, or call close() to write the file.

    Parameters
    ----------
    output_path : Path or str
        Destination .xlsx path; parent directories are created
    style : RenderStyle
        Fonts and colours used for every sheet
    """

    def __init__(self, output_path: Union[str, Path], style: RenderStyle = DEFAULT_STYLE):
        self.output_path = Path(output_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.style = style

        # Cell text is data: never turn it into links, formulas or numbers
        self.workbook = xlsxwriter.Workbook(
            str(self.output_path),
            {
                "strings_to_urls": False,
                "strings_to_formulas": False,
                "strings_to_numbers": False,
            },
        )
        self.formats = self._create_formats()
        self.sheet_names: List[str] = []

    def __enter__(self) -> "WorkbookRenderer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.close()
            return False

        # keep the error that ended the batch; a failed write is only logged
        try:
            self.close()
        except Exception as close_error:
            logger.error("Could not write %s: %s", self.output_path, close_error)
        return False

    # ------------------------------------------------------------
    # Formats
    # ------------------------------------------------------------

    def _font_props(self, font: FontStyle) -> Dict[str, Any]:
        props = {"font_name": font.name, "font_size": font.size, "bold": font.bold}
        if font.color:
            props["font_color"] = font.color
        return props

    def _add_format(self, font: FontStyle, fill: Optional[str] = None, **extra) -> Any:
        props = self._font_props(font)
        props.update({"border": 1, "border_color": self.style.border_color, "valign": "top"})
        if fill:
            props["bg_color"] = fill
        props.update(extra)
        return self.workbook.add_format(props)

    def _create_formats(self) -> Dict[str, Any]:
        """Create cell formats from the render style."""
        style = self.style
        formats = {
            "header": self._add_format(style.font_header, style.header_fill),
            "section_title": self._add_format(style.font_section_title, style.section_title_fill),
        }

        # Body formats come in plain and zebra-striped variants
        body_fonts = {
            "default": style.font_default,
            "bold": style.font_bold,
            "endpoint": style.font_endpoint,
            "metric": style.font_metric_name,
        }
        for key, font in body_fonts.items():
            formats[key] = self._add_format(font)
            formats[f"{key}_even"] = self._add_format(font, style.even_row_fill)

        formats["help_label"] = self._add_format(style.font_bold)
        formats["help_label_even"] = self._add_format(style.font_bold, style.even_row_fill)
        formats["help_desc"] = self._add_format(style.font_default, text_wrap=True)
        formats["help_desc_even"] = self._add_format(style.font_default, style.even_row_fill, text_wrap=True)

        for rating, fill in style.rating_fills.items():
            font = FontStyle(
                name=style.font_default.name,
                size=style.font_default.size,
                bold=True,
                color=style.rating_font_colors.get(rating),
            )
            formats[f"rating_{rating}"] = self._add_format(font, fill)

        return formats

    def _body(self, key: str, index: Optional[int]) -> Any:
        """Body format for the index-th (0-based) data row; None means unstriped."""
        striped = index is not None and index % 2 == 0
        return self.formats[f"{key}_even" if striped else key]

    def _rating(self, rating: Rating) -> Optional[Any]:
        return self.formats.get(f"rating_{rating.value}")

    # ------------------------------------------------------------
    # Sheet primitives
    # ------------------------------------------------------------

    def _add_sheet(self, name: str) -> Any:
        sheet_name = safe_sheet_name(name, self.sheet_names)
        if sheet_name != name:
            logger.debug("Sheet name '%s' stored as '%s'", name, sheet_name)
        self.sheet_names.append(sheet_name)
        return self.workbook.add_worksheet(sheet_name)

    def _section_title(self, sheet, row: int, title: str, total_cols: int) -> int:
        sheet.merge_range(row, 0, row, total_cols - 1, title, self.formats["section_title"])
        return row + 1

    def _sub_header(self, sheet, row: int, headers: Sequence[str]) -> int:
        sheet.write_row(row, 0, headers, self.formats["header"])
        return row + 1

    def _write_cells(self, sheet, row: int, cells: Sequence[Cell], formats: Sequence[Any]) -> int:
        for col, (value, fmt) in enumerate(zip(cells, formats)):
            sheet.write(row, col, value, fmt)
        return row + 1

    def _gap(self, row: int) -> int:
        return row + self.style.section_gap

    # ------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------

    def add_report(self, report: ReportModel) -> Optional[str]:
        """
        Add one sheet for a report.

        Parameters
        ----------
        report : ReportModel
            Assembled report

        Returns
        -------
        str or None
            Name of the sheet written, or None if the report is empty
        """
        if report.is_empty:
            logger.warning("Report '%s' has no valid rows; no sheet written", report.name)
            return None

        sheet = self._add_sheet(report.name)
        if report.kind == CaptureKind.NETWORK:
            self._write_network(sheet, report)
        else:
            self._write_audit(sheet, report)

        logger.info("Added sheet: '%s' with %d rows", sheet.name, len(report.rows))
        return sheet.name

    def _write_network(self, sheet, report: ReportModel) -> None:
        total_cols = len(NETWORK_COLUMNS)
        for col, (_, width) in enumerate(NETWORK_COLUMNS):
            sheet.set_column(col, col, width)

        row = self._sub_header(sheet, 0, [header for header, _ in NETWORK_COLUMNS])

        default = self.formats["default"]
        row_formats = [default, default, self.formats["endpoint"]] + [default] * (total_cols - 3)
        for r in report.rows:
            cells = [
                r.index,
                r.method,
                r.url,
                r.category,
                r.status,
                r.response_ms,
                r.size_kb,
                r.blocked_ms,
                r.dns_ms,
                r.connect_ms,
                r.ssl_ms,
                r.send_ms,
                r.wait_ms,
                r.receive_ms,
            ]
            row = self._write_cells(sheet, row, cells, row_formats)

        # Observed baseline
        response = report.stats["response_ms"]
        size = report.stats["size_kb"]
        wait = report.stats["wait_ms"]

        row = self._gap(row)
        row = self._section_title(sheet, row, "OBSERVED BASELINE", total_cols)
        baseline_header = [""] * (_WAIT_COL + 1)
        baseline_header[0] = "Metric"
        baseline_header[_RESPONSE_COL] = "Response (ms)"
        baseline_header[_SIZE_COL] = "Size (KB)"
        baseline_header[_WAIT_COL] = "Wait/TTFB (ms)"
        row = self._sub_header(sheet, row, baseline_header)

        baseline = [
            ("Total Requests", response.count, None, None),
            ("Average", response.mean, size.mean, wait.mean),
            ("Median", response.median, None, None),
            ("Min", response.min, None, None),
            ("Max", response.max, None, None),
            ("95th Percentile", response.p95, None, wait.p95),
            ("Total Transfer Size", None, size.sum, None),
        ]
        for i, (label, response_value, size_value, wait_value) in enumerate(baseline):
            fmt = self._body("default", i)
            cells: List[Cell] = [""] * (_WAIT_COL + 1)
            cells[0] = label
            for col, value in ((_RESPONSE_COL, response_value), (_SIZE_COL, size_value), (_WAIT_COL, wait_value)):
                if value is not None:
                    cells[col] = value
            row = self._write_cells(sheet, row, cells, [fmt] * len(cells))

        page_timings = report.section(SECTION_PAGE_TIMINGS)
        if page_timings:
            row = self._gap(row)
            row = self._section_title(sheet, row, "PAGE LOAD TIMINGS", total_cols)
            row = self._sub_header(sheet, row, ["Page", "", "", "", "", "DOMContentLoaded (ms)", "Page Load (ms)"])
            for i, page in enumerate(page_timings):
                fmt = self._body("default", i)
                cells = [page.title, "", "", "", "", page.content_loaded_ms, page.load_ms]
                row = self._write_cells(sheet, row, cells, [fmt] * len(cells))

    def _write_audit(self, sheet, report: ReportModel) -> None:
        total_cols = len(AUDIT_COLUMN_WIDTHS)
        for col, width in enumerate(AUDIT_COLUMN_WIDTHS):
            sheet.set_column(col, col, width)

        row = self._section_title(sheet, 0, "AUDIT INFORMATION", total_cols)
        row = self._sub_header(sheet, row, ["Property", "Value", "", "", "", ""])
        for i, field in enumerate(report.section(SECTION_META)):
            row = self._write_cells(
                sheet, row, [field.label, field.value], [self._body("bold", i), self._body("default", i)]
            )

        row = self._gap(row)
        row = self._section_title(sheet, row, "CATEGORY SCORES", total_cols)
        row = self._sub_header(sheet, row, ["Category", "Score", "Rating", "", "", ""])
        for i, category in enumerate(report.section(SECTION_CATEGORY_SCORES)):
            rated = self._rating(category.rating)
            stripe = i if rated is None else None
            label_fmt = self._body("bold", stripe)
            score_fmt = rated or self._body("default", stripe)
            row = self._write_cells(
                sheet,
                row,
                [category.category, category.score, category.rating.value],
                [label_fmt, score_fmt, score_fmt],
            )

        row = self._gap(row)
        row = self._section_title(sheet, row, "PERFORMANCE METRICS", total_cols)
        row = self._sub_header(sheet, row, ["Metric", "Raw Value", "Unit", "Display", "Score", "Rating"])
        for i, metric in enumerate(report.section(SECTION_PERFORMANCE_METRICS)):
            rated = self._rating(metric.rating)
            stripe = i if rated is None else None
            plain = self._body("default", stripe)
            row = self._write_cells(
                sheet,
                row,
                [metric.metric, metric.value, metric.unit, metric.display, metric.score_pct, score_label(metric.score)],
                [self._body("metric", stripe), plain, plain, plain, rated or plain, rated or plain],
            )

        row = self._gap(row)
        row = self._section_title(sheet, row, "SERVER & NETWORK", total_cols)
        row = self._sub_header(sheet, row, ["Metric", "Raw Value", "Unit", "Display", "", ""])
        for i, metric in enumerate(report.section(SECTION_SERVER_METRICS)):
            plain = self._body("default", i)
            row = self._write_cells(
                sheet,
                row,
                [metric.metric, metric.value, metric.unit, metric.display],
                [self._body("metric", i), plain, plain, plain],
            )

        row = self._gap(row)
        row = self._section_title(sheet, row, "MAIN THREAD BREAKDOWN", total_cols)
        row = self._sub_header(sheet, row, ["Category", "Duration (ms)", "", "", "", ""])
        for i, item in enumerate(report.section(SECTION_MAIN_THREAD)):
            row = self._write_cells(
                sheet, row, [item.category, item.duration_ms], [self._body("bold", i), self._body("default", i)]
            )
        row = self._sub_header(
            sheet, row, ["Total Main Thread Time", report.totals.get(TOTAL_MAIN_THREAD_MS, 0.0)]
        )

        row = self._gap(row)
        row = self._section_title(sheet, row, "JAVASCRIPT EXECUTION (TOP 10 SCRIPTS)", total_cols)
        row = self._sub_header(sheet, row, ["Script URL", "Total CPU (ms)", "Scripting (ms)", "Parse/Compile (ms)", "", ""])
        for i, script in enumerate(report.section(SECTION_JS_EXECUTION)):
            plain = self._body("default", i)
            row = self._write_cells(
                sheet,
                row,
                [script.url, script.total_ms, script.scripting_ms, script.parse_compile_ms],
                [self._body("metric", i), plain, plain, plain],
            )
        row = self._sub_header(
            sheet, row, ["Total JS Execution Time", report.totals.get(TOTAL_JS_EXECUTION_MS, 0.0)]
        )

        row = self._gap(row)
        row = self._section_title(sheet, row, "RESOURCE SUMMARY", total_cols)
        row = self._sub_header(sheet, row, ["Resource Type", "Requests", "Transfer Size (KB)", "", "", ""])
        for i, resource in enumerate(report.section(SECTION_RESOURCE_SUMMARY)):
            plain = self._body("default", i)
            row = self._write_cells(
                sheet,
                row,
                [resource.resource_type, resource.requests, resource.transfer_kb],
                [self._body("bold", i), plain, plain],
            )

        diagnostics = report.section(SECTION_DIAGNOSTICS)
        if diagnostics:
            row = self._gap(row)
            row = self._section_title(sheet, row, "DIAGNOSTICS & OPPORTUNITIES", total_cols)
            row = self._sub_header(sheet, row, ["Audit", "Score", "Details", "Potential Savings", "", ""])
            for i, finding in enumerate(diagnostics):
                rated = self._rating(finding.rating)
                stripe = i if rated is None else None
                plain = self._body("default", stripe)
                row = self._write_cells(
                    sheet,
                    row,
                    [finding.audit, finding.label, finding.display, finding.savings],
                    [self._body("bold", stripe), rated or plain, plain, plain],
                )

    # ------------------------------------------------------------
    # Helper sheet
    # ------------------------------------------------------------

    def add_helper_sheet(self, kind: CaptureKind) -> str:
        """
        Add the Helper sheet describing columns and metrics of a capture kind.

        Returns
        -------
        str
            Name of the sheet written
        """
        sheet = self._add_sheet(HELPER_SHEET_NAME)
        label_width, desc_width = HELP_COLUMN_WIDTHS[kind]
        sheet.set_column(0, 0, label_width)
        sheet.set_column(1, 1, desc_width)

        row = self._sub_header(sheet, 0, ["Metric / Header", "Description"])
        for i, (label, description) in enumerate(HELP_ENTRIES[kind]):
            if is_section_heading(label, description):
                sheet.write_row(row, 0, [label, description], self.formats["section_title"])
            elif label or description:
                self._write_cells(
                    sheet,
                    row,
                    [label, description],
                    [self._body("help_label", i), self._body("help_desc", i)],
                )
            row += 1

        logger.info("Added sheet: '%s'", sheet.name)
        return sheet.name

    def close(self) -> None:
        """Write the workbook to output_path."""
        self.workbook.close()
        logger.info("Excel file saved: %s", self.output_path)
