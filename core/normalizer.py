"""
Normalization of aligned rows onto a common percentage scale.

Two treatments:
1. Generic assets: min-max over the rows passed in (the visible window), 0..100
2. Rate-like assets: fixed linear remap from a configured domain to a range, so
   their scale does not move with the window

Every normalized value keeps its raw value under "{asset}_original".
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from utils.constants import RATE_DOMAIN, RATE_LIKE_ASSETS, RATE_RANGE
from utils.utils import as_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateRemap:
    """Linear map from [domain_min, domain_max] to [range_min, range_max]."""
    domain_min: float = RATE_DOMAIN[0]
    domain_max: float = RATE_DOMAIN[1]
    range_min: float = RATE_RANGE[0]
    range_max: float = RATE_RANGE[1]

    def __post_init__(self):
        if self.domain_max == self.domain_min:
            raise ValueError("domain_max must differ from domain_min")

    def __call__(self, value: float) -> float:
        span = self.domain_max - self.domain_min
        return ((value - self.domain_min) / span) * (self.range_max - self.range_min) + self.range_min


DEFAULT_RATE_REMAP = RateRemap()


def value_range(rows: Sequence[dict], asset: str) -> tuple[float, float] | None:
    """Return (min, max) of the numeric values of one asset, or None if it has none."""
    values = [v for v in (as_number(r.get(asset)) for r in rows) if v is not None]
    if not values:
        return None
    return min(values), max(values)


def normalize(rows: Sequence[dict], assets: Iterable[str],
              rate_assets: Iterable[str] = RATE_LIKE_ASSETS,
              remap: RateRemap = DEFAULT_RATE_REMAP) -> list[dict]:
    """
    Rescale each requested asset for charting.

    Args:
        rows: aligned (and possibly downsampled) rows of the current window
        assets: asset names to normalize
        rate_assets: names that use the fixed `remap` instead of min-max
        remap: fixed domain/range mapping for rate-like assets

    Returns:
        One row per input row carrying "date", each normalized asset and its
        "{asset}_original" raw value. Non-numeric cells are skipped.
    """
    assets = list(assets)
    rate_assets = set(rate_assets)

    scalers = {}
    for asset in assets:
        if asset in rate_assets:
            scalers[asset] = remap
            continue
        bounds = value_range(rows, asset)
        if bounds is None:
            continue
        lo, hi = bounds
        if hi == lo:
            # Constant series over the window
            scalers[asset] = lambda v: 0.0
        else:
            scalers[asset] = lambda v, lo=lo, hi=hi: ((v - lo) / (hi - lo)) * 100

    out = []
    for row in rows:
        new_row = {"date": row["date"]}
        for asset in assets:
            value = as_number(row.get(asset))
            if value is None or asset not in scalers:
                continue
            new_row[asset] = scalers[asset](value)
            new_row[f"{asset}_original"] = value
        out.append(new_row)
    return out


def relative_change(rows: Sequence[dict], assets: Iterable[str]) -> list[dict]:
    """
    Rebase each asset to its first numeric value in the window, in percent.

    Assets whose base is missing or zero are skipped.
    """
    assets = list(assets)
    bases = {}
    for asset in assets:
        for row in rows:
            value = as_number(row.get(asset))
            if value is not None:
                if value != 0:
                    bases[asset] = value
                break

    out = []
    for row in rows:
        new_row = {"date": row["date"]}
        for asset, base in bases.items():
            value = as_number(row.get(asset))
            if value is None:
                continue
            new_row[asset] = ((value - base) / base) * 100
            new_row[f"{asset}_original"] = value
        out.append(new_row)
    return out
