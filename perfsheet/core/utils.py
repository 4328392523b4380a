"""
Utility functions for capture normalization.

Rounding here follows fixed-point display semantics: values are rounded
half away from zero on the exact binary value of the float, so every
consumer of a row sees the same two-decimal number.
"""
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from pathlib import Path
from typing import Any, Optional, Union

from perfsheet.core.constants import (
    BYTES_PER_KB,
    DISPLAY_DECIMALS,
    NOT_AVAILABLE,
    RATING_GOOD_THRESHOLD,
    RATING_NEEDS_WORK_THRESHOLD,
    SHEET_NAME_MAX_LENGTH,
)
from perfsheet.core.models import Rating

_QUANTUM = Decimal(1).scaleb(-DISPLAY_DECIMALS)

# Enough digits for any finite float quantized to two decimals
_CONTEXT = Context(prec=400)


def round2(value: float) -> float:
    """
    Round to two decimals, half away from zero.

    Parameters
    ----
    value : float
        Finite number to round

    Returns
    ----
    float
        Rounded value
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot round non-finite value: {value}")
    return float(Decimal(value).quantize(_QUANTUM, rounding=ROUND_HALF_UP, context=_CONTEXT))


def measured(value: Any) -> Optional[float]:
    """
    Return a measurement as float, or None when it is unknown.

    Absent, negative, non-numeric and non-finite values are all unknown.
    HAR uses -1 for phases that did not apply.

    Parameters
    ----
    value : Any
        Raw numeric field from a capture document

    Returns
    ----
    float or None
        The measurement, or None if unknown
    """
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def measured_or_zero(value: Any) -> float:
    """Rounded measurement, with 0 standing in for unknown."""
    known = measured(value)
    return round2(known) if known is not None else 0.0


def measured_or_na(value: Any) -> Union[float, str]:
    """Rounded measurement, with 'N/A' standing in for unknown."""
    known = measured(value)
    return round2(known) if known is not None else NOT_AVAILABLE


def bytes_to_kb(size: Any) -> float:
    """
    Convert a byte count to kilobytes rounded to two decimals.

    Unknown sizes count as 0 KB.
    """
    known = measured(size)
    if known is None:
        return 0.0
    return round2(known / BYTES_PER_KB)


def score_to_percent(score: Optional[float]) -> Union[int, str]:
    """
    Scale a [0, 1] score to an integer percentage.

    Parameters
    ----
    score : float, optional
        Normalized score

    Returns
    ----
    int or str
        Rounded percentage, or 'N/A' when no score is reported or
        the score is out of range
    """
    if score is None:
        return NOT_AVAILABLE
    scaled = score * 100
    if not math.isfinite(scaled):
        return NOT_AVAILABLE
    return int(Decimal(scaled).quantize(Decimal(1), rounding=ROUND_HALF_UP, context=_CONTEXT))


def rate_score(score: Optional[float]) -> Rating:
    """
    Map a normalized score to its rating band.

    - score >= 0.9: Good
    - 0.5 <= score < 0.9: Needs Work
    - score < 0.5: Poor
    - no score: N/A

    Parameters
    ----
    score : float, optional
        Normalized score in [0, 1]

    Returns
    ----
    Rating
        Rating band
    """
    if score is None:
        return Rating.NOT_AVAILABLE
    if score >= RATING_GOOD_THRESHOLD:
        return Rating.GOOD
    if score >= RATING_NEEDS_WORK_THRESHOLD:
        return Rating.NEEDS_WORK
    return Rating.POOR


def score_label(score: Optional[float]) -> str:
    """
    Format a score as e.g. '87 (Needs Work)'.

    Returns 'N/A' when no score is reported.
    """
    if score is None:
        return NOT_AVAILABLE
    return f"{score_to_percent(score)} ({rate_score(score).value})"


def sheet_name_from_path(path: Union[str, Path]) -> str:
    """
    Derive a report identifier from an input filename.

    The extension is dropped and the result truncated to the 31-character
    spreadsheet tab limit.

    Parameters
    ----
    path : str or Path
        Input file path

    Returns
    ----
    str
        Sheet name
    """
    return Path(path).stem[:SHEET_NAME_MAX_LENGTH]
