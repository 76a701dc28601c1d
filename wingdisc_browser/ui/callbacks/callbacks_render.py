from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional, Type

import dash
import plotly.graph_objs as go
from dash import Input, Output

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.core.selection import SelectionState
from wingdisc_browser.ui.ids import IDs, graph_id

if TYPE_CHECKING:
    from wingdisc_browser.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _error_figure(details: str) -> go.Figure:
    return BaseView.message_figure("Something went wrong while rendering this view.", details)


def render_view(ctx: AppConfig, view_id: str, state_data: Optional[dict[str, Any]]) -> go.Figure:
    """
    SelectionState -> figure for one view. Never raises; failures become an error figure.
    """
    try:
        state = SelectionState.from_dict(state_data)
    except Exception:
        logger.exception("Invalid selection state in render callback: %r", state_data)
        return _error_figure("Internal error: invalid selection state.")

    try:
        view = ctx.registry.create(view_id, ctx.dataset)
        data = view.timed_compute(state)
        return view.render_figure(data, state)
    except Exception:
        logger.exception(
            "Error rendering view",
            extra={"view_id": view_id, "selection_state": state_data},
        )
        return _error_figure(
            "The app hit an unexpected error. "
            "If this keeps happening, grab the logs and open an issue."
        )


def _register_view_callback(app: dash.Dash, ctx: AppConfig, view_cls: Type[BaseView]) -> None:
    view_id = view_cls.id

    @app.callback(
        Output(graph_id(view_id), "figure"),
        Input(IDs.Store.SELECTION_STATE, "data"),
    )
    def update_view_figure(state_data: dict[str, Any] | None):
        return render_view(ctx, view_id, state_data)


def register_render_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    # One SelectionState -> figure callback per registered view
    for view_cls in ctx.registry.all_classes():
        _register_view_callback(app, ctx, view_cls)
