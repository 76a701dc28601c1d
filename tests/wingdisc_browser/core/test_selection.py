from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from wingdisc_browser.core.exceptions import UnknownGestureError
from wingdisc_browser.core.selection import (
    BASELINE_EMPHASIS,
    HIGH_EMPHASIS,
    LOW_EMPHASIS,
    SPACE_DISC,
    SPACE_SPECIMEN,
    GestureEvent,
    SelectionState,
    derive_emphasis,
    dispatch,
    selection_ids,
    specimen_selection_ids,
    set_range_selection,
    toggle_focus,
    toggle_visibility,
)


def _make_records() -> pd.DataFrame:
    """
    Three discs with areas 90, 120, 180 across all conditions.
    """
    return pd.DataFrame(
        {
            "disc": ["d1", "d2", "d3"],
            "area": [90.0, 120.0, 180.0],
            "D": [0.1, 0.2, 0.3],
            "condition": ["standard", "hypoxia", "cold"],
        }
    )


# ---------------------------------------------------------------------------
# set_range_selection
# ---------------------------------------------------------------------------
def test_range_selection_picks_records_inside_interval():
    assert set_range_selection(100, 150, _make_records()) == {"d2"}


def test_range_selection_bounds_are_inclusive():
    records = _make_records()
    assert set_range_selection(90, 120, records) == {"d1", "d2"}
    assert set_range_selection(120, 180, records) == {"d2", "d3"}


def test_range_selection_reversed_bounds_are_swapped():
    assert set_range_selection(150, 100, _make_records()) == {"d2"}


@pytest.mark.parametrize("lo, hi", [(None, None), (None, 150), (100, None), (120, 120)])
def test_range_selection_empty_interval_clears(lo, hi):
    assert set_range_selection(lo, hi, _make_records()) == frozenset()


def test_range_selection_missing_records_is_no_match():
    assert set_range_selection(0, 1000, None) == frozenset()
    assert set_range_selection(0, 1000, pd.DataFrame()) == frozenset()


def test_range_selection_missing_axis_column_is_no_match():
    assert set_range_selection(0, 1000, _make_records(), axis="volume") == frozenset()


def test_range_selection_skips_missing_measurements():
    records = _make_records()
    records.loc[1, "area"] = np.nan
    assert set_range_selection(0, 1000, records) == {"d1", "d3"}


def test_range_selection_on_other_axis():
    assert set_range_selection(0.15, 0.3, _make_records(), axis="D") == {"d2", "d3"}


# ---------------------------------------------------------------------------
# toggle_focus
# ---------------------------------------------------------------------------
def test_toggle_focus_same_id_deselects():
    assert toggle_focus("d1", "d1") is None


def test_toggle_focus_other_id_replaces():
    assert toggle_focus("d2", "d1") == "d2"
    assert toggle_focus("d2", None) == "d2"


def test_toggle_focus_twice_returns_to_none():
    focus = toggle_focus("d1", None)
    focus = toggle_focus("d1", focus)
    assert focus is None


def test_toggle_focus_without_click_target_keeps_focus():
    assert toggle_focus(None, "d1") == "d1"


# ---------------------------------------------------------------------------
# derive_emphasis
# ---------------------------------------------------------------------------
def test_emphasis_baseline_when_selection_empty():
    for disc in ["d1", "d2", "unknown"]:
        assert derive_emphasis(disc, frozenset()) == BASELINE_EMPHASIS


def test_emphasis_members_higher_than_non_members():
    selection = {"d2"}
    member = derive_emphasis("d2", selection)
    other = derive_emphasis("d1", selection)

    assert member == HIGH_EMPHASIS
    assert other == LOW_EMPHASIS
    assert member.opacity > other.opacity


def test_emphasis_is_pure():
    selection = ["d1", "d3"]
    assert derive_emphasis("d3", selection) == derive_emphasis("d3", selection)
    assert selection == ["d1", "d3"]


def test_clear_then_emphasis_is_baseline():
    records = _make_records()
    cleared = set_range_selection(None, None, records)
    assert all(derive_emphasis(d, cleared) == BASELINE_EMPHASIS for d in records["disc"])


# ---------------------------------------------------------------------------
# toggle_visibility
# ---------------------------------------------------------------------------
def test_toggle_visibility_flips_one_category():
    toggles = {"standard": True, "hypoxia": True, "cold": True}

    once = toggle_visibility("cold", toggles)
    assert once == {"standard": True, "hypoxia": True, "cold": False}
    # input is not mutated
    assert toggles["cold"] is True

    twice = toggle_visibility("cold", once)
    assert twice == toggles


def test_toggle_visibility_unknown_category_starts_visible():
    assert toggle_visibility("heat", {"standard": True}) == {"standard": True, "heat": False}


# ---------------------------------------------------------------------------
# SelectionState + reducers
# ---------------------------------------------------------------------------
def test_selection_state_to_from_dict_roundtrip():
    st = SelectionState(
        range_ids=["d1", "d2"],
        range_bounds=[80.0, 130.0],
        focus_id="d2",
        specimen_focus_id="w1",
        visible={"standard": True, "hypoxia": False, "cold": True},
        revision=2,
    )
    assert SelectionState.from_dict(st.to_dict()) == st


def test_selection_state_from_empty_is_fresh():
    st = SelectionState.from_dict(None)
    assert st.range_ids == []
    assert st.range_bounds is None
    assert st.focus_id is None
    assert st.visible == {"standard": True, "hypoxia": True, "cold": True}


def test_selection_ids_union_of_range_and_focus():
    st = SelectionState(range_ids=["d1"], focus_id="d3")
    assert selection_ids(st) == {"d1", "d3"}


def test_dispatch_range_then_clear():
    records = _make_records()
    st = dispatch(SelectionState(), GestureEvent("range", {"min": 100, "max": 150}), records)
    assert st.range_ids == ["d2"]
    assert st.range_bounds == [100.0, 150.0]

    st = dispatch(st, GestureEvent("range_clear"), records)
    assert st.range_ids == []
    assert st.range_bounds is None


def test_dispatch_zero_width_range_clears():
    records = _make_records()
    st = SelectionState(range_ids=["d2"], range_bounds=[100.0, 150.0])
    st = dispatch(st, GestureEvent("range", {"min": 120, "max": 120}), records)
    assert st.range_ids == []
    assert st.range_bounds is None


def test_dispatch_range_only_considers_visible_conditions():
    records = _make_records()
    st = SelectionState(visible={"standard": True, "hypoxia": False, "cold": True})
    st = dispatch(st, GestureEvent("range", {"min": 0, "max": 1000}), records)
    assert st.range_ids == ["d1", "d3"]


def test_dispatch_click_toggles_focus_independently_of_range():
    records = _make_records()
    st = SelectionState(range_ids=["d2"], range_bounds=[100.0, 150.0])

    st = dispatch(st, GestureEvent("click", {"id": "d1"}), records)
    assert st.focus_id == "d1"
    assert st.range_ids == ["d2"]

    st = dispatch(st, GestureEvent("click", {"id": "d1"}), records)
    assert st.focus_id is None
    assert st.range_ids == ["d2"]


def test_dispatch_legend_does_not_touch_selection():
    st = SelectionState(range_ids=["d2"], focus_id="d1")
    new = dispatch(st, GestureEvent("legend", {"condition": "cold"}))
    assert new.visible["cold"] is False
    assert new.range_ids == ["d2"]
    assert new.focus_id == "d1"
    # reducers never mutate their input
    assert st.visible["cold"] is True


def test_dispatch_reset_returns_fresh_state():
    st = SelectionState(
        range_ids=["d2"],
        focus_id="d1",
        specimen_focus_id="w1",
        visible={"standard": False},
        revision=3,
    )
    new = dispatch(st, GestureEvent("reset"))

    assert new == SelectionState(revision=4)
    assert new.range_ids == []
    assert new.focus_id is None
    assert new.specimen_focus_id is None
    assert all(new.visible.values())


def test_dispatch_reset_bumps_revision_every_time():
    st = dispatch(SelectionState(), GestureEvent("reset"))
    st = dispatch(st, GestureEvent("reset"))
    assert st.revision == 2
    # other gestures keep the revision
    st = dispatch(st, GestureEvent("click", {"id": "d1"}))
    assert st.revision == 2


def test_dispatch_unknown_gesture_raises():
    with pytest.raises(UnknownGestureError):
        dispatch(SelectionState(), GestureEvent("hover"))


# ---------------------------------------------------------------------------
# Disc vs landmark specimen identifier spaces
# ---------------------------------------------------------------------------
def test_dispatch_specimen_click_sets_specimen_focus_only():
    st = dispatch(SelectionState(), GestureEvent("click", {"id": "w1", "space": SPACE_SPECIMEN}))
    assert st.specimen_focus_id == "w1"
    assert st.focus_id is None
    # disc selection stays empty, so disc views keep their baseline
    assert selection_ids(st) == frozenset()
    assert specimen_selection_ids(st) == {"w1"}

    st = dispatch(st, GestureEvent("click", {"id": "w1", "space": SPACE_SPECIMEN}))
    assert st.specimen_focus_id is None


def test_dispatch_disc_click_and_range_leave_specimen_selection_empty():
    records = _make_records()
    st = dispatch(SelectionState(), GestureEvent("click", {"id": "d1", "space": SPACE_DISC}), records)
    st = dispatch(st, GestureEvent("range", {"min": 100, "max": 150}), records)

    assert selection_ids(st) == {"d1", "d2"}
    assert specimen_selection_ids(st) == frozenset()


def test_disc_and_specimen_focus_are_independent():
    st = SelectionState(focus_id="d1", specimen_focus_id="w1")
    st = dispatch(st, GestureEvent("click", {"id": "d1"}))
    assert st.focus_id is None
    assert st.specimen_focus_id == "w1"
