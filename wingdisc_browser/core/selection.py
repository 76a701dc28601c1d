from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Mapping, Optional

import pandas as pd

from .conditions import CONDITIONS
from .exceptions import UnknownGestureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Emphasis:
    """
    Visual weight a renderer applies to one record.

    - opacity: marker / line opacity in [0, 1]
    - stroke_width: outline width for markers, line width for curves
    """
    opacity: float
    stroke_width: float


# Identifier spaces a click can target
SPACE_DISC = "disc"
SPACE_SPECIMEN = "specimen"

BASELINE_EMPHASIS = Emphasis(opacity=0.7, stroke_width=1.0)
HIGH_EMPHASIS = Emphasis(opacity=1.0, stroke_width=2.5)
LOW_EMPHASIS = Emphasis(opacity=0.12, stroke_width=1.0)


def default_visibility() -> Dict[str, bool]:
    return {c: True for c in CONDITIONS}


@dataclass
class SelectionState:
    """
    Current linked-selection state shared by every view.

    Fields:

    - range_ids: identifiers picked by the last range (brush) gesture
    - range_bounds: the [min, max] interval that produced range_ids, or None when cleared
    - focus_id: the clicked disc identifier, or None
    - specimen_focus_id: the clicked landmark specimen identifier, or None
    - visible: per-condition visibility toggles
    - revision: bumped on every reset so graphs drop stale UI state (brush boxes)

    Discs and landmark specimens are separate identifier spaces. range_ids and
    focus_id only apply to disc views (selection_ids); specimen_focus_id only
    applies to the landmark view (specimen_selection_ids).
    """

    range_ids: List[str] = field(default_factory=list)
    range_bounds: Optional[List[float]] = None
    focus_id: Optional[str] = None
    specimen_focus_id: Optional[str] = None
    visible: Dict[str, bool] = field(default_factory=default_visibility)
    revision: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "range_ids": list(self.range_ids),
            "range_bounds": list(self.range_bounds) if self.range_bounds is not None else None,
            "focus_id": self.focus_id,
            "specimen_focus_id": self.specimen_focus_id,
            "visible": dict(self.visible),
            "revision": self.revision,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> SelectionState:
        if not data:
            return cls()
        bounds = data.get("range_bounds")
        visible = default_visibility()
        visible.update({str(k): bool(v) for k, v in (data.get("visible") or {}).items()})
        focus = data.get("focus_id")
        specimen_focus = data.get("specimen_focus_id")
        return cls(
            range_ids=[str(i) for i in data.get("range_ids") or []],
            range_bounds=[float(bounds[0]), float(bounds[1])] if bounds else None,
            focus_id=str(focus) if focus is not None else None,
            specimen_focus_id=str(specimen_focus) if specimen_focus is not None else None,
            visible=visible,
            revision=int(data.get("revision") or 0),
        )

    def visible_conditions(self) -> List[str]:
        return [c for c, on in self.visible.items() if on]


# ---------------------------------------------------------------------------
# Pure selection operations
# ---------------------------------------------------------------------------
def _is_number(value: Any) -> bool:
    if value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def set_range_selection(
        axis_min: Optional[float],
        axis_max: Optional[float],
        records: Optional[pd.DataFrame],
        axis: str = "area",
        id_column: str = "disc",
) -> FrozenSet[str]:
    """
    Return the ids of records whose `axis` value lies in [axis_min, axis_max].

    Both bounds are inclusive. A missing or zero-width interval clears the
    selection (empty set), as do missing records or a missing axis column.
    Records without a numeric measurement never match.
    """
    if not _is_number(axis_min) or not _is_number(axis_max):
        return frozenset()

    lo, hi = float(axis_min), float(axis_max)
    if lo == hi:
        return frozenset()
    if lo > hi:
        lo, hi = hi, lo

    if records is None or records.empty:
        return frozenset()
    if axis not in records.columns or id_column not in records.columns:
        return frozenset()

    values = pd.to_numeric(records[axis], errors="coerce")
    mask = values.between(lo, hi, inclusive="both")
    return frozenset(records.loc[mask, id_column].astype(str))


def toggle_focus(clicked_id: Optional[str], current_focus: Optional[str]) -> Optional[str]:
    """
    Click-to-select / click-again-to-deselect.

    Returns None when the clicked id is already focused, otherwise the clicked id.
    A click that resolved to no id leaves the focus unchanged.
    """
    if clicked_id is None:
        return current_focus
    clicked_id = str(clicked_id)
    if clicked_id == current_focus:
        return None
    return clicked_id


def derive_emphasis(record_id: Optional[str], selection: Iterable[str]) -> Emphasis:
    """
    Emphasis for one record given the current selection.

    Every view goes through this function so linked views stay visually consistent:
    an empty selection gives the baseline, members are emphasised, everything else
    is faded.
    """
    selected = selection if isinstance(selection, (set, frozenset)) else set(selection)
    if not selected:
        return BASELINE_EMPHASIS
    if record_id is not None and str(record_id) in selected:
        return HIGH_EMPHASIS
    return LOW_EMPHASIS


def toggle_visibility(category: str, toggles: Mapping[str, bool]) -> Dict[str, bool]:
    """Return a copy of toggles with the flag for `category` flipped."""
    new_toggles = dict(toggles)
    new_toggles[category] = not toggles.get(category, True)
    return new_toggles


def selection_ids(state: SelectionState) -> FrozenSet[str]:
    """Disc selection: union of the range selection and the focused disc."""
    ids = set(state.range_ids)
    if state.focus_id is not None:
        ids.add(state.focus_id)
    return frozenset(ids)


def specimen_selection_ids(state: SelectionState) -> FrozenSet[str]:
    """Landmark specimen selection: the focused specimen, if any."""
    if state.specimen_focus_id is None:
        return frozenset()
    return frozenset([state.specimen_focus_id])


def visible_records(records: Optional[pd.DataFrame], state: SelectionState) -> pd.DataFrame:
    """Rows of `records` whose condition is currently toggled on."""
    if records is None or records.empty:
        return pd.DataFrame()
    if "condition" not in records.columns:
        return records
    return records[records["condition"].map(lambda c: state.visible.get(c, True))]


# ---------------------------------------------------------------------------
# Reducers (state, event) -> state
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GestureEvent:
    """
    A user gesture translated out of the UI layer.

    kind is one of the keys of REDUCERS; payload carries kind-specific values:
    - range: {"min": float, "max": float}
    - click: {"id": str, "space": "disc" | "specimen"} (space defaults to "disc")
    - legend: {"condition": str}
    """
    kind: str
    payload: Dict[str, Any] = field(default_factory=dict)


Reducer = Callable[[SelectionState, GestureEvent, Optional[pd.DataFrame]], SelectionState]


def _reduce_range(state: SelectionState, event: GestureEvent, records: Optional[pd.DataFrame]) -> SelectionState:
    axis_min = event.payload.get("min")
    axis_max = event.payload.get("max")
    # Zero-width and cancelled ranges both clear
    if not _is_number(axis_min) or not _is_number(axis_max) or float(axis_min) == float(axis_max):
        return _reduce_range_clear(state, event, records)

    ids = set_range_selection(axis_min, axis_max, visible_records(records, state))
    lo, hi = sorted((float(axis_min), float(axis_max)))
    return replace(state, range_ids=sorted(ids), range_bounds=[lo, hi])


def _reduce_range_clear(state: SelectionState, event: GestureEvent, records: Optional[pd.DataFrame]) -> SelectionState:
    return replace(state, range_ids=[], range_bounds=None)


def _reduce_click(state: SelectionState, event: GestureEvent, records: Optional[pd.DataFrame]) -> SelectionState:
    clicked = event.payload.get("id")
    if event.payload.get("space", SPACE_DISC) == SPACE_SPECIMEN:
        return replace(state, specimen_focus_id=toggle_focus(clicked, state.specimen_focus_id))
    return replace(state, focus_id=toggle_focus(clicked, state.focus_id))


def _reduce_legend(state: SelectionState, event: GestureEvent, records: Optional[pd.DataFrame]) -> SelectionState:
    condition = event.payload.get("condition")
    if condition is None:
        return state
    return replace(state, visible=toggle_visibility(str(condition), state.visible))


def _reduce_reset(state: SelectionState, event: GestureEvent, records: Optional[pd.DataFrame]) -> SelectionState:
    return SelectionState(revision=state.revision + 1)


REDUCERS: Dict[str, Reducer] = {
    "range": _reduce_range,
    "range_clear": _reduce_range_clear,
    "click": _reduce_click,
    "legend": _reduce_legend,
    "reset": _reduce_reset,
}


def dispatch(
        state: SelectionState,
        event: GestureEvent,
        records: Optional[pd.DataFrame] = None,
) -> SelectionState:
    """
    Apply one gesture to the selection state.

    :param state: the current state (not mutated)
    :param event: the translated gesture
    :param records: morphometric records used to resolve range gestures
    :return: the new state
    :raises UnknownGestureError: if no reducer handles event.kind
    """
    try:
        reducer = REDUCERS[event.kind]
    except KeyError:
        raise UnknownGestureError(f"No reducer registered for gesture '{event.kind}'")

    new_state = reducer(state, event, records)
    logger.debug(
        "gesture_dispatched",
        extra={
            "kind": event.kind,
            "n_range_ids": len(new_state.range_ids),
            "focus_id": new_state.focus_id,
            "specimen_focus_id": new_state.specimen_focus_id,
        },
    )
    return new_state
