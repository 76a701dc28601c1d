from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import html

from wingdisc_browser.core.conditions import CONDITION_COLOURS
from wingdisc_browser.ui.callbacks.callbacks_selection import legend_style
from wingdisc_browser.ui.ids import IDs, legend_toggle_id


def build_legend_panel(conditions: List[str]) -> dbc.Card:
    # Fall back to every known condition while data is still loading
    conditions = conditions or list(CONDITION_COLOURS)

    toggles = [
        html.Button(
            condition,
            id=legend_toggle_id(condition),
            n_clicks=0,
            style=legend_style(condition, True),
            className="btn btn-sm wdb-legend-toggle mb-2 w-100",
        )
        for condition in conditions
    ]

    return dbc.Card(
        [
            dbc.CardHeader("Condition", className="fw-semibold"),
            dbc.CardBody(
                [
                    html.Div(toggles, id=IDs.Control.LEGEND_CONTAINER),
                    html.Small(
                        "Click a condition to show or hide it in every plot.",
                        className="text-muted d-block mb-3",
                    ),
                    html.Hr(),
                    dbc.Button(
                        "Clear selection",
                        id=IDs.Control.CLEAR_SELECTION_BTN,
                        n_clicks=0,
                        color="secondary",
                        outline=True,
                        size="sm",
                    ),
                ]
            ),
        ],
        className="wdb-sidebar",
    )
