from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
import pandas as pd

from wingdisc_browser.config.model import GlobalConfig
from wingdisc_browser.core.conditions import N_LANDMARKS, canonical_condition, landmark_letter
from wingdisc_browser.core.dataset import WingDataset
from wingdisc_browser.core.exceptions import DataSourceError

logger = logging.getLogger(__name__)

MORPHOMETRIC_COLUMNS = ["disc", "area", "A", "B", "C", "D", "condition"]
PROFILE_COLUMNS = ["disc", "distance", "value", "condition"]
LANDMARK_META_COLUMNS = ["Id", "Condition", "Sex", "Centroid Size", "Log Centroid Size"]


def _read_csv(path: Path, required: List[str]) -> pd.DataFrame:
    """
    Read a CSV and check that the required columns are present.
    """
    if not path.is_file():
        raise DataSourceError(f"CSV file not found at {path}.")

    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
        raise DataSourceError(f"Could not read {path}: {e}") from e

    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataSourceError(f"{path.name} is missing required columns: {missing}")
    return df


def load_morphometrics(path: Path) -> pd.DataFrame:
    """
    One row per disc: id, log area, shape coefficients A-D (D is lambda) and condition.

    Rows whose area or lambda is missing or non-finite are dropped.
    """
    df = _read_csv(path, MORPHOMETRIC_COLUMNS)
    out = pd.DataFrame({"disc": df["disc"].astype(str)})
    for col in ["area", "A", "B", "C", "D"]:
        out[col] = pd.to_numeric(df[col], errors="coerce")
    out["condition"] = df["condition"].map(canonical_condition)

    finite = np.isfinite(out["area"]) & np.isfinite(out["D"])
    dropped = int((~finite).sum())
    if dropped:
        logger.warning(
            "Dropped morphometric rows without finite area/lambda",
            extra={"path": str(path), "n_dropped": dropped},
        )
    return out[finite].reset_index(drop=True)


def load_profiles(path: Path) -> pd.DataFrame:
    """Long-form raw gradient samples: disc, distance, value, condition (+ area if present)."""
    df = _read_csv(path, PROFILE_COLUMNS)
    out = pd.DataFrame(
        {
            "disc": df["disc"].astype(str),
            "distance": pd.to_numeric(df["distance"], errors="coerce"),
            "value": pd.to_numeric(df["value"], errors="coerce"),
            "condition": df["condition"].map(canonical_condition),
        }
    )
    if "area" in df.columns:
        out["area"] = pd.to_numeric(df["area"], errors="coerce")
    return out


def load_landmarks(path: Path) -> pd.DataFrame:
    """
    Reshape wide landmark coordinates (X1..X15, Y1..Y15 per specimen) into one row
    per (specimen, landmark) with specimen metadata repeated on every row.
    """
    coord_columns = [f"{axis}{i}" for i in range(1, N_LANDMARKS + 1) for axis in ("X", "Y")]
    df = _read_csv(path, LANDMARK_META_COLUMNS + coord_columns)

    parts = []
    for i in range(1, N_LANDMARKS + 1):
        parts.append(
            pd.DataFrame(
                {
                    "id": df["Id"].astype(str),
                    "point_id": i,
                    "letter": landmark_letter(i),
                    "x": pd.to_numeric(df[f"X{i}"], errors="coerce"),
                    "y": pd.to_numeric(df[f"Y{i}"], errors="coerce"),
                    "condition": df["Condition"].map(canonical_condition),
                    "sex": df["Sex"].astype(str),
                    "centroid_size": pd.to_numeric(df["Centroid Size"], errors="coerce"),
                    "log_centroid_size": pd.to_numeric(df["Log Centroid Size"], errors="coerce"),
                }
            )
        )

    out = pd.concat(parts, ignore_index=True)
    return out.sort_values(["id", "point_id"], kind="mergesort").reset_index(drop=True)


def _load_or_none(label: str, loader: Callable[[Path], pd.DataFrame], path: Path) -> Optional[pd.DataFrame]:
    try:
        df = loader(path)
    except DataSourceError as e:
        logger.error(
            "Error loading data source",
            extra={"source": label, "path": str(path), "error": str(e)},
        )
        return None
    except Exception:
        logger.exception(
            "Unexpected error while loading data source",
            extra={"source": label, "path": str(path)},
        )
        return None

    logger.info(
        "Data source loaded",
        extra={"source": label, "path": str(path), "n_rows": len(df)},
    )
    return df


def load_dataset(cfg: GlobalConfig) -> WingDataset:
    """
    Load all three sources named by the config.

    A source that fails is logged and left as None; the views bound to it stay in
    their loading state. There is no retry.
    """
    return WingDataset(
        name=cfg.ui_title,
        morphometrics=_load_or_none("morphometrics", load_morphometrics, cfg.source_path("morphometrics")),
        profiles=_load_or_none("profiles", load_profiles, cfg.source_path("profiles")),
        landmarks=_load_or_none("landmarks", load_landmarks, cfg.source_path("landmarks")),
    )
