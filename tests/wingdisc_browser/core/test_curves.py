from __future__ import annotations

import numpy as np
import pandas as pd

from wingdisc_browser.core.curves import build_curves, normalize_intensity


def _make_profiles() -> pd.DataFrame:
    """
    Long-form profile rows, deliberately out of distance order:
    - d1: raw [2, 4, 8, 4] at distances 0..3
    - d2: all zeros (cannot be normalised)
    - d3: a single usable point
    """
    return pd.DataFrame(
        {
            "disc": ["d1", "d1", "d1", "d1", "d2", "d2", "d3", "d3"],
            "distance": [3.0, 0.0, 2.0, 1.0, 0.0, 1.0, 0.0, np.nan],
            "value": [4.0, 2.0, 8.0, 4.0, 0.0, 0.0, 5.0, 1.0],
            "condition": ["standard"] * 4 + ["hypoxia"] * 2 + ["cold"] * 2,
        }
    )


def test_normalize_intensity_divides_by_max():
    assert normalize_intensity([2, 4, 8, 4]) == [0.25, 0.5, 1.0, 0.5]


def test_normalize_intensity_zero_curve_is_empty():
    assert normalize_intensity([0, 0, 0]) == []
    assert normalize_intensity([]) == []


def test_build_curves_sorts_and_normalises():
    curves = build_curves(_make_profiles())
    d1 = curves[curves["disc"] == "d1"]

    assert list(d1["distance"]) == [0.0, 1.0, 2.0, 3.0]
    assert list(d1["value"]) == [0.25, 0.5, 1.0, 0.5]
    assert d1["value"].max() == 1.0
    assert d1["distance"].is_monotonic_increasing


def test_build_curves_drops_unusable_discs():
    curves = build_curves(_make_profiles())
    # d2 has zero maximum, d3 has only one valid point
    assert set(curves["disc"]) == {"d1"}


def test_build_curves_empty_input():
    assert build_curves(None).empty
    assert build_curves(pd.DataFrame(columns=["disc", "distance", "value", "condition"])).empty
