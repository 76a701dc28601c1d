from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.core.conditions import CONDITIONS, CONDITION_SYMBOLS, condition_colour
from wingdisc_browser.core.selection import (
    SelectionState,
    derive_emphasis,
    selection_ids,
    visible_records,
)


class DiscScatterView(BaseView):
    """
    Wing disc area vs lambda (shape parameter D), one marker shape per condition.

    - top / right marginal histograms of area and lambda per visible condition
    - horizontal box selection over the area axis drives the range selection
    - clicking a disc toggles focus (drives the profile detail view)
    """

    id = "disc_scatter"
    label = "Wing Disc Area vs Lambda"

    # The scatter lives in the bottom-left cell of a 2x2 grid, so its axes are x3/y3.
    # Range payloads from box selection are keyed by this axis name.
    range_axis = "x3"
    # The top marginal histogram sits on x, which matches x3
    range_axes = ("x3", "x")

    TOP_HIST_BINS = 20
    RIGHT_HIST_BINS = 15

    def compute_data(self, state: SelectionState) -> Optional[pd.DataFrame]:
        records = self.dataset.morphometrics
        if records is None:
            return None

        df = visible_records(records, state).copy()
        if df.empty:
            return df

        selected = selection_ids(state)
        emphasis = [derive_emphasis(disc, selected) for disc in df["disc"]]
        df["opacity"] = [e.opacity for e in emphasis]
        df["stroke_width"] = [e.stroke_width for e in emphasis]
        df["outline"] = ["#000000" if disc == state.focus_id else "#ffffff" for disc in df["disc"]]
        return df

    def render_figure(self, data: Optional[pd.DataFrame], state: SelectionState) -> go.Figure:
        if data is None:
            return self.loading_figure()
        if data.empty:
            return self.message_figure(
                "No discs to display.",
                "All conditions are hidden; toggle one on in the legend.",
            )

        fig = make_subplots(
            rows=2,
            cols=2,
            shared_xaxes=True,
            shared_yaxes=True,
            column_widths=[0.85, 0.15],
            row_heights=[0.15, 0.85],
            horizontal_spacing=0.01,
            vertical_spacing=0.01,
        )

        for condition in CONDITIONS:
            sub = data[data["condition"] == condition]
            if sub.empty:
                continue
            colour = condition_colour(condition)

            fig.add_trace(
                go.Scatter(
                    x=sub["area"],
                    y=sub["D"],
                    mode="markers",
                    name=condition,
                    legendgroup=condition,
                    customdata=sub[["disc", "condition"]].to_numpy(),
                    marker=dict(
                        symbol=CONDITION_SYMBOLS.get(condition, "circle"),
                        size=9,
                        color=colour,
                        opacity=sub["opacity"].tolist(),
                        line=dict(
                            color=sub["outline"].tolist(),
                            width=sub["stroke_width"].tolist(),
                        ),
                    ),
                    hovertemplate=(
                        "Disc: %{customdata[0]}<br>"
                        "Area: %{x:.2f}<br>"
                        "Lambda: %{y:.2f}<br>"
                        "Condition: %{customdata[1]}<extra></extra>"
                    ),
                ),
                row=2,
                col=1,
            )

            # Marginals
            fig.add_trace(
                go.Histogram(
                    x=sub["area"],
                    nbinsx=self.TOP_HIST_BINS,
                    marker_color=colour,
                    opacity=0.5,
                    legendgroup=condition,
                    showlegend=False,
                    hoverinfo="skip",
                ),
                row=1,
                col=1,
            )
            fig.add_trace(
                go.Histogram(
                    y=sub["D"],
                    nbinsy=self.RIGHT_HIST_BINS,
                    marker_color=colour,
                    opacity=0.5,
                    legendgroup=condition,
                    showlegend=False,
                    hoverinfo="skip",
                ),
                row=2,
                col=2,
            )

        if state.range_bounds is not None:
            lo, hi = state.range_bounds
            fig.add_vrect(
                x0=lo,
                x1=hi,
                fillcolor="#888888",
                opacity=0.12,
                line_width=0,
                row=2,
                col=1,
            )

        fig.update_xaxes(title_text="Area", row=2, col=1)
        fig.update_yaxes(title_text="Lambda", row=2, col=1)
        fig.update_xaxes(visible=False, row=1, col=2)
        fig.update_yaxes(visible=False, row=1, col=2)
        fig.update_yaxes(showticklabels=False, row=1, col=1)
        fig.update_xaxes(showticklabels=False, row=2, col=2)

        fig.update_layout(
            title="Wing Disc Area vs Lambda",
            template="plotly_white",
            height=650,
            barmode="overlay",
            showlegend=False,
            dragmode="select",
            selectdirection="h",
            clickmode="event",
            uirevision=f"{self.id}-{state.revision}",
            margin=dict(l=60, r=40, t=60, b=50),
        )
        return fig
