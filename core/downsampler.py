import datetime as dt
import logging
from typing import Sequence

import pandas as pd

from utils.utils import as_number

logger = logging.getLogger(__name__)

GRANULARITIES = ('daily', 'weekly', 'monthly')


def week_key(date: str) -> str:
    """Coarse year-week bucket key: floor((day_of_month + day_of_week) / 7).

    day_of_week counts Sunday as 0. This is not ISO week numbering.
    """
    d = dt.date.fromisoformat(date[:10])
    day_of_week = d.isoweekday() % 7
    return f"{d.year}-w{(d.day + day_of_week) // 7}"


def month_key(date: str) -> str:
    return date[:7]


def downsample(rows: Sequence[dict], granularity: str) -> list[dict]:
    """
    Reduce date-sorted aligned rows to weekly or monthly buckets.

    Buckets are runs of consecutive rows sharing a period key. Each bucket
    becomes one row dated at its last row, with every field averaged over the
    rows that hold a numeric value for it. A field present in the bucket but
    never numeric averages to 0.

    Args:
        rows: aligned rows, already sorted by date
        granularity: 'daily', 'weekly' or 'monthly'

    Returns:
        Downsampled rows ('daily' returns the input unchanged)
    """
    if granularity not in GRANULARITIES:
        raise ValueError(f"granularity must be one of {list(GRANULARITIES)}")
    if granularity == 'daily' or not rows:
        return list(rows)

    key_fn = week_key if granularity == 'weekly' else month_key
    dates = pd.Series([r["date"] for r in rows])
    keys = dates.map(key_fn)
    # New bucket wherever the key differs from the previous row's key
    bucket = (keys != keys.shift()).cumsum()
    last_dates = dates.groupby(bucket).last()

    fields = [{k: v for k, v in r.items() if k != "date"} for r in rows]
    values = pd.DataFrame(fields, index=dates.index)
    if len(values.columns) == 0:
        return [{"date": d} for d in last_dates]

    present = pd.DataFrame([dict.fromkeys(f, True) for f in fields], index=dates.index)
    defined = present.notna().groupby(bucket).any()
    means = values.apply(_numeric_column).groupby(bucket).mean().fillna(0.0)

    out = []
    for b, date in last_dates.items():
        row = {"date": date}
        for col in values.columns:
            if defined.at[b, col]:
                row[col] = float(means.at[b, col])
        out.append(row)
    return out


def _numeric_column(col: pd.Series) -> pd.Series:
    # Booleans and strings do not count as numeric values
    def to_float(v):
        number = as_number(v)
        return float("nan") if number is None else number
    return col.map(to_float).astype("float64")
