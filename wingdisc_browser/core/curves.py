from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

CURVE_COLUMNS = ["disc", "condition", "distance", "value"]


def normalize_intensity(values: Sequence[float]) -> list[float]:
    """
    Scale a curve so its maximum sample equals 1.0.

    normalize_intensity([2, 4, 8, 4]) -> [0.25, 0.5, 1.0, 0.5]
    An all-zero or non-finite curve cannot be normalised and yields [].
    """
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return []
    max_val = np.nanmax(arr) if not np.all(np.isnan(arr)) else np.nan
    if not np.isfinite(max_val) or max_val == 0:
        return []
    return list(arr / max_val)


def build_curves(profiles: pd.DataFrame | None) -> pd.DataFrame:
    """
    Turn long-form profile rows into normalised per-disc curves.

    Per disc:
    - rows with non-numeric distance or value are dropped
    - intensity is divided by the disc's maximum value
    - points are sorted by distance ascending
    - discs with a zero / non-finite maximum or fewer than two points are dropped

    Returns one row per curve point with columns disc, condition, distance, value.
    """
    if profiles is None or profiles.empty:
        return pd.DataFrame(columns=CURVE_COLUMNS)

    df = profiles[CURVE_COLUMNS].copy()
    df["distance"] = pd.to_numeric(df["distance"], errors="coerce")
    df["value"] = pd.to_numeric(df["value"], errors="coerce")
    df = df.dropna(subset=["distance", "value"])

    parts = []
    for disc, rows in df.groupby("disc", sort=False):
        max_val = rows["value"].max()
        if not np.isfinite(max_val) or max_val == 0:
            continue
        if len(rows) < 2:
            continue

        curve = rows.sort_values("distance", kind="mergesort").copy()
        curve["value"] = curve["value"] / max_val
        # Condition is constant per disc; take the first row's label
        curve["condition"] = rows["condition"].iloc[0]
        parts.append(curve)

    if not parts:
        return pd.DataFrame(columns=CURVE_COLUMNS)

    return pd.concat(parts, ignore_index=True)
