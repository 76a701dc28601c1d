from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Sequence, Tuple, Union

import dash
from dash import ALL, Input, Output, State, exceptions, html

from wingdisc_browser.core.conditions import condition_colour
from wingdisc_browser.core.exceptions import UnknownGestureError
from wingdisc_browser.core.selection import (
    SPACE_DISC,
    SPACE_SPECIMEN,
    GestureEvent,
    SelectionState,
    dispatch,
)
from wingdisc_browser.ui.ids import IDs, graph_id
from wingdisc_browser.views import DiscScatterView, LandmarkView

if TYPE_CHECKING:
    from wingdisc_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)

# Graphs whose clicks toggle focus, and the identifier space each one targets
CLICK_SOURCES = {
    graph_id(DiscScatterView.id): SPACE_DISC,
    graph_id(LandmarkView.id): SPACE_SPECIMEN,
}
RANGE_SOURCE = graph_id(DiscScatterView.id)


def clicked_id(payload: Optional[dict]) -> Optional[str]:
    """Identifier of the first clicked point; marks without customdata give None."""
    if not payload or not payload.get("points"):
        return None
    cid = payload["points"][0].get("customdata")
    if isinstance(cid, (list, tuple)):
        cid = cid[0] if cid else None
    return str(cid) if cid is not None else None


def selected_range(payload: Optional[dict], axes: Union[str, Sequence[str]]) -> Optional[Tuple[float, float]]:
    """
    Extract the brushed interval from a Plotly selectedData payload.

    Box selections carry the interval directly under payload["range"][axis];
    the first of `axes` present wins. Lasso selections fall back to the extent
    of the selected points.
    """
    if not payload:
        return None
    if isinstance(axes, str):
        axes = (axes,)

    ranges = payload.get("range") or {}
    for axis in axes:
        bounds = ranges.get(axis)
        if bounds and len(bounds) == 2:
            return float(min(bounds)), float(max(bounds))

    xs = [p["x"] for p in payload.get("points", []) if p.get("customdata") is not None and "x" in p]
    if xs:
        return float(min(xs)), float(max(xs))
    return None


def event_from_trigger(triggered_id: Any, prop: str, value: Any) -> Optional[GestureEvent]:
    """
    Translate one Dash trigger into a gesture event.

    Returns None when the trigger carries no gesture (e.g. initial n_clicks,
    a click on a mark without an identifier, a brush on the lambda marginal).
    """
    if triggered_id == IDs.Control.CLEAR_SELECTION_BTN:
        return GestureEvent("reset") if value else None

    if isinstance(triggered_id, dict) and triggered_id.get("type") == IDs.Pattern.LEGEND_TOGGLE:
        if not value:
            return None
        return GestureEvent("legend", {"condition": triggered_id.get("index")})

    if triggered_id == RANGE_SOURCE and prop == "selectedData":
        # Deselect / double click
        if not value:
            return GestureEvent("range_clear")
        bounds = selected_range(value, DiscScatterView.range_axes)
        if bounds is None:
            return None
        return GestureEvent("range", {"min": bounds[0], "max": bounds[1]})

    if isinstance(triggered_id, str) and triggered_id in CLICK_SOURCES and prop == "clickData":
        cid = clicked_id(value)
        if cid is None:
            return None
        return GestureEvent("click", {"id": cid, "space": CLICK_SOURCES[triggered_id]})

    return None


def status_text(state: SelectionState) -> list:
    if state.range_bounds is not None:
        lo, hi = state.range_bounds
        range_label = f"{len(state.range_ids)} discs in [{lo:.2f}, {hi:.2f}]"
    else:
        range_label = "None"

    hidden = [c for c, on in state.visible.items() if not on]

    return [
        html.Strong("Area range: "), range_label, " • ",
        html.Strong("Disc: "), state.focus_id or "None", " • ",
        html.Strong("Specimen: "), state.specimen_focus_id or "None", " • ",
        html.Strong("Hidden: "), ", ".join(hidden) if hidden else "None",
    ]


def legend_style(condition: str, visible: bool) -> dict:
    colour = condition_colour(condition)
    return {
        "backgroundColor": colour if visible else "white",
        "color": "white" if visible else colour,
        "borderColor": colour,
        "opacity": 1 if visible else 0.6,
    }


def register_selection_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # ---------------------------------------------------------
    # Gestures -> SelectionState (canonical)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.SELECTION_STATE, "data"),
        Input(graph_id(DiscScatterView.id), "selectedData"),
        Input(graph_id(DiscScatterView.id), "clickData"),
        Input(graph_id(LandmarkView.id), "clickData"),
        Input({"type": IDs.Pattern.LEGEND_TOGGLE, "index": ALL}, "n_clicks"),
        Input(IDs.Control.CLEAR_SELECTION_BTN, "n_clicks"),
        State(IDs.Store.SELECTION_STATE, "data"),
        prevent_initial_call=True,
    )
    def update_selection_state(_sel, _click, _lm_click, _legend, _clear, state_data):
        if not dash.ctx.triggered:
            raise exceptions.PreventUpdate

        trigger = dash.ctx.triggered[0]
        prop = trigger["prop_id"].rsplit(".", 1)[-1]
        event = event_from_trigger(dash.ctx.triggered_id, prop, trigger.get("value"))
        if event is None:
            raise exceptions.PreventUpdate

        state = SelectionState.from_dict(state_data)
        try:
            new_state = dispatch(state, event, ctx.dataset.morphometrics)
        except UnknownGestureError:
            logger.exception("Unhandled gesture", extra={"kind": event.kind})
            raise exceptions.PreventUpdate

        logger.info(
            "selection_updated",
            extra={
                "gesture": event.kind,
                "n_range_ids": len(new_state.range_ids),
                "focus_id": new_state.focus_id,
                "specimen_focus_id": new_state.specimen_focus_id,
            },
        )
        return new_state.to_dict()

    # ---------------------------------------------------------
    # Status Bar (Pure UI reflection of State)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.STATUS_BAR, "children"),
        Input(IDs.Store.SELECTION_STATE, "data"),
    )
    def update_status_bar(state_data):
        return html.Span(status_text(SelectionState.from_dict(state_data)))

    # ---------------------------------------------------------
    # Legend swatches reflect visibility toggles
    # ---------------------------------------------------------
    @app.callback(
        Output({"type": IDs.Pattern.LEGEND_TOGGLE, "index": ALL}, "style"),
        Input(IDs.Store.SELECTION_STATE, "data"),
    )
    def update_legend_styles(state_data):
        state = SelectionState.from_dict(state_data)
        return [
            legend_style(out["id"]["index"], state.visible.get(out["id"]["index"], True))
            for out in dash.ctx.outputs_list
        ]
