from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import plotly.graph_objs as go

from .dataset import WingDataset
from .selection import SelectionState

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Loading data..."


class BaseView(ABC):
    """
    Abstract base class for all plot views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally and for the graph component id
    - expose a 'label' - used for UI/human-readable applications
    - implement 'compute_data' - used to compute the data given the current SelectionState
    - implement 'render_figure' - used to render the figure using Plotly

    Views never decide emphasis themselves; they read it from
    core.selection.derive_emphasis.
    """

    id: str = None
    label: str = None

    def __init__(self, dataset: WingDataset):
        self.dataset = dataset

    @abstractmethod
    def compute_data(self, state: SelectionState) -> Any:
        """
        Compute the data given the current SelectionState
        :param state: the current {@link SelectionState} - range selection, focus and visible conditions
        :return: data: the plotting records for this view, or None while the source is not loaded
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any, state: SelectionState) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :param state: the current {@link SelectionState}
        :return: the Plotly figure for these parameters
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self, state: SelectionState) -> Any:
        """compute_data with a debug timing log."""
        start = time.perf_counter()
        data = self.compute_data(state)
        logger.debug(
            "compute_data finished",
            extra={
                "view_id": self.id,
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return data

    @staticmethod
    def message_figure(title: str, details: Optional[str] = None) -> go.Figure:
        """
        Standardised placeholder figure (loading / nothing selected / no data).
        """
        fig = go.Figure()
        text = title if details is None else f"{title}<br><br>{details}"
        fig.add_annotation(
            text=text,
            showarrow=False,
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
            font=dict(color="#666666", size=14),
        )
        fig.update_xaxes(visible=False)
        fig.update_yaxes(visible=False)
        fig.update_layout(
            template="plotly_white",
            margin=dict(l=40, r=40, t=40, b=40),
        )
        return fig

    @classmethod
    def loading_figure(cls) -> go.Figure:
        return cls.message_figure(LOADING_MESSAGE)
