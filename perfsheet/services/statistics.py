"""
Statistics over numeric report columns.

Order statistics use numpy. Totals and means accumulate left to right in
input order, so they agree bit for bit with a sequential reduce. An empty
sequence is a ValueError: callers check for empty reports before
summarizing.
"""
from typing import Sequence

import numpy as np

from perfsheet.core.models import StatBundle
from perfsheet.core.utils import round2


def _require_values(values: Sequence[float]) -> None:
    if len(values) == 0:
        raise ValueError("Cannot compute statistics over an empty sequence")


def total(values: Sequence[float]) -> float:
    """Sum of values, accumulated left to right."""
    _require_values(values)
    # np.sum and built-in sum() both reorder or compensate float error
    result = 0.0
    for value in values:
        result += value
    return result


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean (sum / count)."""
    return total(values) / len(values)


def median(values: Sequence[float]) -> float:
    """
    Median of values.

    For an even count this is the mean of the two central values.
    """
    _require_values(values)
    return float(np.median(values))


def percentile(values: Sequence[float], p: float) -> float:
    """
    Nearest-rank percentile.

    The value at index ceil(p/100 * count) - 1 of the sorted values, clamped
    into range. No interpolation.

    Parameters
    ----
    values : Sequence[float]
        Values to rank
    p : float
        Percentile in [0, 100]

    Returns
    ----
    float
        Selected value
    """
    _require_values(values)
    if not 0 <= p <= 100:
        raise ValueError(f"Percentile must be within [0, 100], got {p}")
    return float(np.percentile(values, p, method="inverted_cdf"))


def minimum(values: Sequence[float]) -> float:
    """Smallest value."""
    _require_values(values)
    return float(np.min(values))


def maximum(values: Sequence[float]) -> float:
    """Largest value."""
    _require_values(values)
    return float(np.max(values))


def summarize(column: str, values: Sequence[float]) -> StatBundle:
    """
    Build the statistics bundle for one column.

    Results are rounded to two decimals, matching the precision of the
    row values they are computed from.

    Parameters
    ----
    column : str
        Column name the values were taken from
    values : Sequence[float]
        Column values, non-empty

    Returns
    ----
    StatBundle
        count, mean, median, min, max, p95 and sum
    """
    _require_values(values)
    return StatBundle(
        column=column,
        count=len(values),
        mean=round2(mean(values)),
        median=round2(median(values)),
        min=round2(minimum(values)),
        max=round2(maximum(values)),
        p95=round2(percentile(values, 95)),
        sum=round2(total(values)),
    )
