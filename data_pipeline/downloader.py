import datetime as dt
import logging
from typing import Iterable, Mapping, Optional

import pandas as pd
import yfinance as yf

from utils.constants import ASSET_SYMBOLS, HISTORY_YEARS
from utils.utils import as_number

logger = logging.getLogger(__name__)


def resolve_symbol(asset: str) -> str:
    symbol = ASSET_SYMBOLS.get(asset)
    if symbol is None:
        raise ValueError(f"Unknown asset: {asset}")
    return symbol


def _download_yf(symbol: str, start: dt.date, end: dt.date) -> pd.DataFrame:
    # yfinance 'end' is exclusive, so pass end + 1 day to include the requested end date
    yf_end = end + dt.timedelta(days=1)
    df = yf.download(symbol, start=start, end=yf_end, interval="1d", progress=False, auto_adjust=False)
    if df is None or df.empty:
        return pd.DataFrame()
    if isinstance(df.columns, pd.MultiIndex):
        df.columns = df.columns.droplevel(1)
    if "Close" not in df.columns:
        return pd.DataFrame()
    return df[["Close"]]


def sanitize_series(points: Iterable[Mapping]) -> list[dict]:
    """
    Make provider output satisfy the series precondition.

    Drops points without a numeric value, sorts by date and keeps the last
    point for a duplicated date.
    """
    by_date = {}
    dropped = 0
    for p in points:
        value = as_number(p.get("value"))
        date = p.get("date")
        if value is None or not date:
            dropped += 1
            continue
        by_date[str(date)[:10]] = value
    if dropped:
        logger.info(f"Dropped {dropped} blank points")
    return [{"date": d, "value": by_date[d]} for d in sorted(by_date)]


def fetch_history(asset: str, start: Optional[dt.date] = None, end: Optional[dt.date] = None) -> list[dict]:
    """
    Download daily closes for a dashboard asset as a sanitized series.

    The end date is inclusive; start defaults to HISTORY_YEARS before end.
    Returns [] when the provider has no data.
    """
    symbol = resolve_symbol(asset)
    end = end or dt.date.today()
    start = start or (end - dt.timedelta(days=365 * HISTORY_YEARS))

    df = _download_yf(symbol, start, end)
    if df.empty:
        logger.warning(f"No data downloaded for {asset} ({symbol}) between {start} and {end}")
        return []

    df = df.copy()
    df.index = pd.DatetimeIndex(df.index).tz_localize(None)
    points = [
        {"date": d.date().isoformat(), "value": None if pd.isna(close) else float(close)}
        for d, close in df["Close"].items()
    ]
    series = sanitize_series(points)
    logger.info(f"Downloaded {len(series)} points for {asset} ({symbol})")
    return series
