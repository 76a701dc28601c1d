from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest


def write_wing_csvs(root: Path) -> Path:
    """
    Write tiny versions of the three source tables into root:
    - 3 discs (areas 90 / 120 / 180), one per condition
    - raw profiles for d1 and d2 only
    - 2 landmark specimens
    """
    root.mkdir(parents=True, exist_ok=True)

    pd.DataFrame(
        {
            "disc": ["d1", "d2", "d3", "d4"],
            "area": [90.0, 120.0, 180.0, "bad"],
            "A": [1, 2, 3, 4],
            "B": [1, 2, 3, 4],
            "C": [1, 2, 3, 4],
            "D": [0.1, 0.2, 0.3, 0.4],
            "condition": ["standard", "Hypoxia", "cold_17C", "standard"],
        }
    ).to_csv(root / "mergedNormalizedGrad.csv", index=False)

    pd.DataFrame(
        {
            "disc": ["d1", "d1", "d1", "d2", "d2", "d2"],
            "distance": [0.0, 0.5, 1.0, 1.0, 0.0, 0.5],
            "value": [2.0, 8.0, 4.0, 3.0, 1.0, 6.0],
            "condition": ["standard"] * 3 + ["Hypoxia"] * 3,
            "area": [90.0] * 3 + [120.0] * 3,
        }
    ).to_csv(root / "mergedRawGrad.csv", index=False)

    wide = {
        "Id": ["w1", "w2"],
        "Condition": ["standard", "low temp"],
        "Sex": ["F", "M"],
        "Centroid Size": [1.01, 0.98],
        "Log Centroid Size": [0.00995, -0.0202],
    }
    for i in range(1, 16):
        wide[f"X{i}"] = [float(i), float(i) + 0.1]
        wide[f"Y{i}"] = [float(i) * 2, float(i) * 2 + 0.1]
    pd.DataFrame(wide).to_csv(root / "mergedWingCoords.csv", index=False)

    return root


@pytest.fixture
def wing_csv_dir(tmp_path) -> Path:
    return write_wing_csvs(tmp_path / "data")
