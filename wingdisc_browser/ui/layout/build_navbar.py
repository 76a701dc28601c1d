from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from wingdisc_browser.config.model import GlobalConfig
from wingdisc_browser.core.dataset import WingDataset
from wingdisc_browser.ui.ids import IDs


def dataset_meta_text(dataset: WingDataset) -> str:
    if not dataset.is_loaded:
        return "Loading data..."
    return f"{dataset.n_discs} discs · {dataset.n_specimens} landmark specimens"


def build_navbar(global_config: GlobalConfig, dataset: WingDataset) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                html.Div(
                    [
                        html.H2(global_config.ui_title, className="mb-0"),
                        html.Small(
                            global_config.subtitle,
                            className="text-muted",
                            id=IDs.Control.NAVBAR_SUBTITLE,
                        ),
                    ],
                    className="d-flex flex-column justify-content-center",
                ),
                html.Div(
                    dataset_meta_text(dataset),
                    id=IDs.Control.NAVBAR_DATASET_META,
                    className="ms-auto text-muted wdb-navbar-meta",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm wdb-navbar",
    )
