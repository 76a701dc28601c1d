from __future__ import annotations

import logging
from pathlib import Path

import dash_bootstrap_components as dbc
from dash import Dash

from .config import AppConfig
from wingdisc_browser.config.loader import load_global_config
from wingdisc_browser.core.dataset_loader import load_dataset
from wingdisc_browser.core.view_registry import ViewRegistry
from wingdisc_browser.ui.layout.build_layout import build_layout
from wingdisc_browser.ui.callbacks.callbacks_selection import register_selection_callbacks
from wingdisc_browser.ui.callbacks.callbacks_render import register_render_callbacks

logger = logging.getLogger(__name__)


def build_view_registry() -> ViewRegistry:
    from wingdisc_browser.views import (
        DiscScatterView,
        ProfileDetailView,
        GradientProfilesView,
        LandmarkView,
    )

    registry = ViewRegistry()
    registry.register(DiscScatterView)
    registry.register(ProfileDetailView)
    registry.register(GradientProfilesView)
    registry.register(LandmarkView)
    return registry


def create_dash_app(config_root: Path | str = Path("config")) -> Dash:
    config_root = Path(config_root)

    # 1) Load Config
    global_config = load_global_config(config_root)

    # 2) Load tables once; failed sources stay None and their views keep showing "loading"
    dataset = load_dataset(global_config)
    if not dataset.is_loaded:
        logger.warning(
            "Some data sources failed to load",
            extra={
                "morphometrics": dataset.morphometrics is not None,
                "profiles": dataset.profiles is not None,
                "landmarks": dataset.landmarks is not None,
            },
        )

    # 3) App Context
    ctx = AppConfig(
        config_root=config_root,
        global_config=global_config,
        dataset=dataset,
        registry=build_view_registry(),
    )
    ctx.validate()

    assets_path = Path(__file__).parent / "assets"

    app = Dash(
        __name__,
        external_stylesheets=[dbc.themes.FLATLY],
        assets_folder=str(assets_path),
    )
    app.title = global_config.ui_title

    app.layout = build_layout(ctx)

    # Register callbacks
    register_selection_callbacks(app, ctx)
    register_render_callbacks(app, ctx)

    return app
