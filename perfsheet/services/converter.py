"""
Batch conversion of a capture directory into one workbook.

Each file is read, assembled and rendered in turn; one unreadable file is
logged and skipped unless fail-fast is requested. The Helper sheet is
added after the last report and the workbook saved once.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence

from perfsheet.core.config import DEFAULT_STYLE, ConverterSettings, RenderStyle
from perfsheet.core.errors import ParseError
from perfsheet.readers.capture_reader import load_capture
from perfsheet.services.assembler import ReportAssembler
from perfsheet.services.renderer import WorkbookRenderer

logger = logging.getLogger(__name__)


class BatchConverter:
    """
    Converts every capture of one kind in a directory into a workbook.

    Attributes
    ----------
    settings : ConverterSettings
        Capture kind, input directory, output path and failure policy
    assembler : ReportAssembler
        Report assembler shared by all files
    style : RenderStyle
        Workbook styling
    """

    def __init__(
        self,
        settings: ConverterSettings,
        assembler: Optional[ReportAssembler] = None,
        style: RenderStyle = DEFAULT_STYLE,
    ):
        self.settings = settings
        self.assembler = assembler or ReportAssembler(strict_entries=settings.strict_entries)
        self.style = style

    def discover(self) -> List[Path]:
        """
        Find capture files in the input directory.

        Returns
        -------
        List[Path]
            Files with the kind's extension (case-insensitive), sorted by name

        Raises
        ------
        FileNotFoundError
            If the input directory does not exist
        """
        input_dir = Path(self.settings.input_dir)
        if not input_dir.is_dir():
            raise FileNotFoundError(f"Input directory not found: {input_dir}")

        extension = self.settings.extension
        return sorted(
            (p for p in input_dir.iterdir() if p.is_file() and p.suffix.lower() == extension),
            key=lambda p: p.name,
        )

    def convert(
        self,
        paths: Optional[Sequence[Path]] = None,
        progress_callback: Optional[Callable[[Path, int, int], None]] = None,
    ) -> Dict[str, int]:
        """
        Convert capture files and save the workbook.

        Parameters
        ----------
        paths : Sequence[Path], optional
            Files to convert; discovered from the input directory if None
        progress_callback : callable, optional
            Callback(path, total, current) invoked before each file

        Returns
        -------
        Dict[str, int]
            Counts: 'converted' (sheet written), 'empty' (no valid rows),
            'failed' (ParseError)

        Raises
        ------
        FileNotFoundError
            If there are no files to convert
        ParseError
            On the first unparseable file when fail_fast is set
        """
        if paths is None:
            paths = self.discover()
        if not paths:
            raise FileNotFoundError(
                f"No {self.settings.extension} files found in {self.settings.input_dir}"
            )

        total = len(paths)
        logger.info("Found %d %s file(s) in %s", total, self.settings.extension, self.settings.input_dir)
        stats = {"converted": 0, "empty": 0, "failed": 0}

        with WorkbookRenderer(self.settings.output_path, style=self.style) as renderer:
            for idx, path in enumerate(paths, 1):
                if progress_callback:
                    progress_callback(path, total, idx)

                try:
                    capture = load_capture(path, expected_kind=self.settings.kind)
                    report = self.assembler.assemble(capture)
                except ParseError as e:
                    if self.settings.fail_fast:
                        raise
                    logger.warning("Skipping %s: %s", e.source, e.message)
                    stats["failed"] += 1
                    continue

                if renderer.add_report(report) is None:
                    stats["empty"] += 1
                else:
                    stats["converted"] += 1

            renderer.add_helper_sheet(self.settings.kind)

        logger.info(
            "Conversion complete: %d converted, %d empty, %d failed",
            stats["converted"],
            stats["empty"],
            stats["failed"],
        )
        return stats
