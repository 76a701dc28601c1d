from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from wingdisc_browser.core.selection import SelectionState
from wingdisc_browser.ui.ids import IDs
from wingdisc_browser.ui.layout.build_legend_panel import build_legend_panel
from wingdisc_browser.ui.layout.build_navbar import build_navbar
from wingdisc_browser.ui.layout.build_plot_panel import build_plot_panel

if TYPE_CHECKING:
    from wingdisc_browser.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    navbar = build_navbar(ctx.global_config, ctx.dataset)
    legend_panel = build_legend_panel(ctx.dataset.conditions())
    plot_panels = [build_plot_panel(view_cls) for view_cls in ctx.registry.all_classes()]

    return dbc.Container(
        fluid=True,
        className="wdb-root",
        children=[
            navbar,

            # Selection state lives only for the page; a reload starts fresh
            dcc.Store(
                id=IDs.Store.SELECTION_STATE,
                storage_type="memory",
                data=SelectionState().to_dict(),
            ),

            html.Div(id=IDs.Control.STATUS_BAR, className="wdb-status-bar mt-2"),

            dbc.Row(
                [
                    dbc.Col(
                        legend_panel,
                        md=2,
                        className="mt-3",
                    ),
                    dbc.Col(
                        plot_panels,
                        md=10,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
        ],
    )
