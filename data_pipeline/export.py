import logging
from typing import Mapping, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["asset", "date", "value"]


def export_frame(series_by_asset: Mapping[str, Sequence[Mapping]]) -> pd.DataFrame:
    """Stack raw per-asset series into a long asset/date/value frame."""
    frames = []
    for asset, points in series_by_asset.items():
        if not points:
            continue
        df = pd.DataFrame(points, columns=["date", "value"])
        df.insert(0, "asset", asset)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.concat(frames, ignore_index=True)[EXPORT_COLUMNS]


def export_csv(series_by_asset: Mapping[str, Sequence[Mapping]], sep: str = ",") -> str:
    df = export_frame(series_by_asset)
    logger.info(f"Exporting {len(df)} rows for {df['asset'].nunique()} assets")
    return df.to_csv(index=False, sep=sep)
