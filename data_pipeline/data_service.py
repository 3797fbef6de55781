import datetime as dt
import logging
from typing import Callable, Hashable, Iterable, Optional

from core.aligner import align
from core.correlation import correlate, to_series
from core.downsampler import downsample
from core.normalizer import normalize, relative_change
from core.window import Window
from utils.constants import CHART_VIEW_SIZE, CORRELATION_VIEW_SIZE, CORRELATION_WINDOW

from .cache import SelectionTracker, SeriesCache
from .downloader import fetch_history
from .export import export_csv

logger = logging.getLogger(__name__)


class DataService:
    """
    Facade for data operations.
    - get_series: cached raw series for one asset (read-through)
    - chart_rows: align -> downsample -> viewport -> normalize
    - correlation: per-asset align -> downsample -> windowed correlation -> viewport
    - export: CSV of cached raw series
    - run_selection: discard results superseded by a newer selection
    """

    def __init__(self, loader: Optional[Callable] = None, cache: Optional[SeriesCache] = None,
                 tracker: Optional[SelectionTracker] = None):
        self.cache = cache or SeriesCache(loader or fetch_history)
        self.tracker = tracker or SelectionTracker()

    def get_series(self, asset: str, start: Optional[dt.date] = None, end: Optional[dt.date] = None) -> list[dict]:
        """Return the cached series for asset, limited to [start, end] (inclusive)."""
        series = self.cache.get(asset)
        if start is None and end is None:
            return list(series)
        lo = start.isoformat() if start else ""
        hi = end.isoformat() if end else "9999-12-31"
        return [p for p in series if lo <= p["date"] <= hi]

    def get_many(self, assets: Iterable[str], start: Optional[dt.date] = None,
                 end: Optional[dt.date] = None) -> dict[str, list[dict]]:
        return {asset: self.get_series(asset, start, end) for asset in assets}

    def chart_rows(self, assets: list[str], scale: str = "monthly", mode: str = "range",
                   window: Optional[Window] = None, start: Optional[dt.date] = None,
                   end: Optional[dt.date] = None) -> dict:
        """
        Chart-ready rows for the selected assets.

        The viewport defaults to the first CHART_VIEW_SIZE[scale] rows and is
        applied before normalization, so min/max follow the visible window.
        """
        rows = downsample(align(self.get_many(assets, start, end)), scale)
        total = len(rows)
        if total == 0:
            logger.info(f"No chart data for {assets}")
            return {"rows": [], "total": 0, "window": None}

        view = window or Window.initial(total, CHART_VIEW_SIZE[scale])
        view.validate(total)
        visible = view.slice(rows)
        if mode == "relative":
            data = relative_change(visible, assets)
        else:
            data = normalize(visible, assets)
        return {"rows": data, "total": total, "window": view.to_dict()}

    def correlation(self, asset_a: str, asset_b: str, scale: str = "monthly",
                    window_size: Optional[int] = None, window: Optional[Window] = None,
                    missing: str = "zero", start: Optional[dt.date] = None,
                    end: Optional[dt.date] = None) -> dict:
        """Correlation series of asset_a against asset_b on raw (not normalized) values."""
        if asset_a == asset_b:
            raise ValueError("assets_must_differ")
        window_size = window_size or CORRELATION_WINDOW[scale]

        series_a = self._scaled_series(asset_a, scale, start, end)
        series_b = self._scaled_series(asset_b, scale, start, end)
        points = correlate(series_a, series_b, window_size, missing=missing)
        total = len(points)
        if total == 0:
            logger.info(f"No correlation windows for {asset_a} vs {asset_b} ({scale}, {window_size})")
            return {"points": [], "total": 0, "window": None, "window_size": window_size}

        view = window or Window.initial(total, CORRELATION_VIEW_SIZE[scale])
        view.validate(total)
        return {
            "points": view.slice(points),
            "total": total,
            "window": view.to_dict(),
            "window_size": window_size,
        }

    def _scaled_series(self, asset: str, scale: str, start, end) -> list[dict]:
        rows = downsample(align({asset: self.get_series(asset, start, end)}), scale)
        return to_series(rows, asset)

    def export(self, assets: Iterable[str]) -> str:
        return export_csv({asset: self.cache.get(asset) for asset in assets})

    def run_selection(self, channel: Optional[Hashable], fn: Callable[[], dict]) -> Optional[dict]:
        """Run fn for a selection; return None if a newer selection on channel started meanwhile."""
        if channel is None:
            return fn()
        token = self.tracker.begin(channel)
        try:
            result = fn()
        finally:
            current = self.tracker.finish(channel, token)
        if not current:
            logger.info(f"Discarding superseded result for {channel}")
            return None
        return result
