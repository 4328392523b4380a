"""
Base row extractor interface.

Row extractors turn one raw capture entry into one flat, typed row. They are
pure: no I/O, no shared state. An entry that cannot be normalized raises
InvalidEntry; missing optional fields are never an error.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Iterable, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

from perfsheet.core.errors import InvalidEntry
from perfsheet.core.models import CaptureKind, ExtractionError

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT", bound=BaseModel)


class BaseRowExtractor(ABC, Generic[RowT]):
    """
    Abstract base class for row extractors.

    Attributes
    ----------
    capture_kind : CaptureKind
        Kind of capture document this extractor reads

    Methods
    -------
    extract(raw_entry, index)
        Convert a single raw entry into a row
    extract_all(raw_entries)
        Convert entries in order, collecting failures instead of raising
    """

    @property
    @abstractmethod
    def capture_kind(self) -> CaptureKind:
        """
        Capture kind handled by this extractor.

        Returns
        -------
        CaptureKind
            NETWORK or AUDIT
        """

    @abstractmethod
    def extract(self, raw_entry: Any, index: int) -> RowT:
        """
        Convert one raw entry into a row.

        Parameters
        ----------
        raw_entry : Any
            Entry as found in the parsed capture document
        index : int
            1-based position of the entry in its document

        Returns
        -------
        row
            Normalized, immutable row

        Raises
        ------
        InvalidEntry
            If the entry cannot be normalized
        """

    def extract_all(
        self,
        raw_entries: Iterable[Any],
        progress_callback: Optional[callable] = None,
    ) -> Tuple[List[RowT], List[ExtractionError]]:
        """
        Convert entries in document order.

        Invalid entries are skipped and reported; the remaining rows keep
        the ordinal of their source entry, so skipped entries leave gaps.

        Parameters
        ----------
        raw_entries : Iterable
            Raw entries in document order
        progress_callback : callable, optional
            Callback(index) invoked before each entry

        Returns
        -------
        Tuple[List[row], List[ExtractionError]]
            Extracted rows and the entries that were skipped
        """
        rows: List[RowT] = []
        errors: List[ExtractionError] = []

        for index, raw_entry in enumerate(raw_entries, 1):
            if progress_callback:
                progress_callback(index)

            try:
                rows.append(self.extract(raw_entry, index))
            except InvalidEntry as e:
                logger.warning("Skipping %s entry %d: %s", self.capture_kind.value, index, e.reason)
                errors.append(ExtractionError(index=index, reason=e.reason))

        logger.debug(
            "%s extraction: %d rows, %d skipped",
            self.capture_kind.value,
            len(rows),
            len(errors),
        )
        return rows, errors
