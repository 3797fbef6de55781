"""
Windowed Pearson Correlation

Splits series A into consecutive, non-overlapping windows of a fixed size and
computes the Pearson coefficient of each window against series B (matched by
exact date). The trailing remainder shorter than the window is discarded, and
windows with zero variance on either side are dropped.

Callers must not ask for the correlation of an asset with itself.
"""

import logging
from typing import Mapping, Sequence

import numpy as np

from core.aligner import check_series
from utils.utils import as_number

logger = logging.getLogger(__name__)

MISSING_POLICIES = ('zero', 'skip')


def pearson(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Pearson correlation of two equal-length arrays.

    Uses the unnormalized form sum(da * db) / sqrt(sum(da^2) * sum(db^2)).
    Returns NaN when either side is constant; otherwise the result is clipped
    to [-1, 1] against rounding error.
    """
    x = np.asarray(a, dtype="float64")
    y = np.asarray(b, dtype="float64")
    if x.shape != y.shape:
        raise ValueError("pearson inputs must have the same length")
    # constant on raw values; centering a constant like 0.1 leaves rounding noise
    if x.size == 0 or np.ptp(x) == 0 or np.ptp(y) == 0:
        return float("nan")
    dx = x - x.mean()
    dy = y - y.mean()
    ss_x = float(np.sum(dx * dx))
    ss_y = float(np.sum(dy * dy))
    if ss_x == 0.0 or ss_y == 0.0:
        return float("nan")
    r = float(np.sum(dx * dy)) / (np.sqrt(ss_x) * np.sqrt(ss_y))
    return float(np.clip(r, -1.0, 1.0))


def correlate(series_a: Sequence[Mapping], series_b: Sequence[Mapping],
              window_size: int, missing: str = 'zero') -> list[dict]:
    """
    Correlation time series of A against B over fixed-size windows of A.

    Args:
        series_a: date-sorted [{"date", "value"}] driving the windows
        series_b: date-sorted [{"date", "value"}] looked up by date
        window_size: points per window (> 0)
        missing: 'zero' pairs a date absent from B with 0;
                 'skip' drops such dates from the window instead

    Returns:
        [{"date": last date of the window, "correlation": r}, ...]
    """
    if int(window_size) != window_size or window_size < 1:
        raise ValueError("window_size must be a positive integer")
    if missing not in MISSING_POLICIES:
        raise ValueError(f"missing must be one of {list(MISSING_POLICIES)}")
    window_size = int(window_size)

    check_series("A", series_a)
    check_series("B", series_b)

    lookup = {p["date"]: as_number(p.get("value")) for p in series_b}

    points = []
    n_windows = len(series_a) // window_size
    for w in range(n_windows):
        window = series_a[w * window_size:(w + 1) * window_size]
        a_vals, b_vals = [], []
        for p in window:
            a = as_number(p.get("value"))
            b = lookup.get(p["date"])
            if missing == 'skip' and (a is None or b is None):
                continue
            a_vals.append(0.0 if a is None else a)
            b_vals.append(0.0 if b is None else b)
        if len(a_vals) < 2:
            continue
        r = pearson(a_vals, b_vals)
        if np.isnan(r):
            continue
        points.append({"date": window[-1]["date"], "correlation": r})

    logger.debug(f"Correlated {n_windows} windows of {window_size}, kept {len(points)}")
    return points


def to_series(rows: Sequence[Mapping], asset: str) -> list[dict]:
    """Extract one asset from aligned rows as a {"date", "value"} series."""
    return [
        {"date": r["date"], "value": r[asset]}
        for r in rows
        if as_number(r.get(asset)) is not None
    ]
