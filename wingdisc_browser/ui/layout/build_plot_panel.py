from __future__ import annotations

from typing import Type

import dash_bootstrap_components as dbc
from dash import dcc, html

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.ui.ids import graph_id

# Hint shown under each graph, keyed by view id
INSTRUCTIONS = {
    "disc_scatter": "Drag horizontally to select an area range · click a disc to show its profile",
    "profile_detail": "Click a point again to hide the profile, or click another point to see its profile",
    "gradient_profiles": "Curves of selected discs are highlighted",
    "landmarks": "Click a landmark to show its specimen's connections",
}


def build_plot_panel(view_cls: Type[BaseView]) -> dbc.Card:
    hint = INSTRUCTIONS.get(view_cls.id)
    return dbc.Card(
        [
            dbc.CardHeader(
                html.Div(
                    [
                        html.Strong(view_cls.label),
                    ],
                    className="d-flex align-items-center",
                ),
                className="p-2",
            ),
            dbc.CardBody(
                [
                    dcc.Loading(
                        id=f"{graph_id(view_cls.id)}-loading",
                        type="default",
                        children=dcc.Graph(
                            id=graph_id(view_cls.id),
                            config={"responsive": True, "displaylogo": False},
                        ),
                    ),
                    html.Small(hint, className="text-muted") if hint else None,
                ],
                className="wdb-main-body",
            ),
        ],
        className="wdb-maincard mb-3",
    )
