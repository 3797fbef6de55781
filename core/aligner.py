import logging
from typing import Mapping, Sequence

import pandas as pd

from utils.utils import as_number

logger = logging.getLogger(__name__)


def check_series(name: str, points: Sequence[Mapping]) -> None:
    """Debug-mode check that a series is date-sorted with unique dates."""
    dates = [p["date"] for p in points]
    assert all(a < b for a, b in zip(dates, dates[1:])), (
        f"Series {name!r} must have strictly increasing, unique dates"
    )


def align(series: Mapping[str, Sequence[Mapping]]) -> list[dict]:
    """
    Merge named series onto the sorted union of their dates.

    Each output row holds, per asset, the value observed on that date or the
    most recent earlier observation (forward fill). Assets with no observation
    yet are left out of the row rather than set to zero.

    Args:
        series: asset name -> list of {"date": "YYYY-MM-DD", "value": number}

    Returns:
        List of rows {"date": ..., asset: value, ...} in increasing date order
    """
    if not series:
        return []

    all_dates = set()
    columns = {}
    for name, points in series.items():
        check_series(name, points)
        observed = {}
        for p in points:
            all_dates.add(p["date"])
            value = as_number(p.get("value"))
            if value is not None:
                observed[p["date"]] = value
        columns[name] = pd.Series(observed, dtype="float64")

    if not all_dates:
        return []

    # ISO date strings sort in calendar order
    index = sorted(all_dates)
    frame = pd.DataFrame(columns, index=index).ffill()

    rows = []
    for date, values in frame.to_dict(orient="index").items():
        row = {"date": date}
        for name, value in values.items():
            if pd.notna(value):
                row[name] = float(value)
        rows.append(row)
    return rows
