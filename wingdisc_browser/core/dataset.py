from __future__ import annotations

from typing import List, Optional

import pandas as pd

from .conditions import CONDITIONS
from .curves import build_curves


class WingDataset:
    """
    In-memory record tables behind every view.

    Includes:
    - morphometrics: one row per disc (disc, area, A, B, C, D, condition)
    - profiles: long-form raw gradient samples (disc, distance, value, condition)
    - landmarks: one row per (specimen, landmark) point
    - curves: normalised per-disc curves derived from profiles

    A table is None when its source failed to load; views treat that as
    "still loading". Tables are never mutated after construction.
    """

    def __init__(
            self,
            name: str,
            morphometrics: Optional[pd.DataFrame] = None,
            profiles: Optional[pd.DataFrame] = None,
            landmarks: Optional[pd.DataFrame] = None,
    ) -> None:
        self.name = name
        self.morphometrics = morphometrics
        self.profiles = profiles
        self.landmarks = landmarks

        self._curves: Optional[pd.DataFrame] = None

    @property
    def curves(self) -> Optional[pd.DataFrame]:
        if self.profiles is None:
            return None
        if self._curves is None:
            self._curves = build_curves(self.profiles)
        return self._curves

    @property
    def is_loaded(self) -> bool:
        return all(t is not None for t in (self.morphometrics, self.profiles, self.landmarks))

    @property
    def n_discs(self) -> int:
        return 0 if self.morphometrics is None else int(self.morphometrics["disc"].nunique())

    @property
    def n_specimens(self) -> int:
        return 0 if self.landmarks is None else int(self.landmarks["id"].nunique())

    def conditions(self) -> List[str]:
        """Conditions present in the loaded tables, in legend order."""
        present = set()
        for table in (self.morphometrics, self.profiles, self.landmarks):
            if table is not None and "condition" in table.columns:
                present.update(table["condition"].unique())
        return [c for c in CONDITIONS if c in present]

    def disc_info(self, disc_id: Optional[str]) -> Optional[pd.Series]:
        """Morphometric row for one disc, or None if unknown."""
        if disc_id is None or self.morphometrics is None:
            return None
        rows = self.morphometrics[self.morphometrics["disc"] == disc_id]
        if rows.empty:
            return None
        return rows.iloc[0]

    def disc_profile(self, disc_id: Optional[str]) -> pd.DataFrame:
        """Raw profile rows for one disc, sorted by distance."""
        if disc_id is None or self.profiles is None:
            return pd.DataFrame(columns=["disc", "distance", "value", "condition"])
        rows = self.profiles[self.profiles["disc"] == disc_id]
        return rows.sort_values("distance", kind="mergesort")
