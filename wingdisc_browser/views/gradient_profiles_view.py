from __future__ import annotations

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.core.conditions import condition_colour
from wingdisc_browser.core.selection import (
    SelectionState,
    derive_emphasis,
    selection_ids,
    visible_records,
)


class GradientProfilesView(BaseView):
    """
    Normalised gradient intensity curves along the proximal-distal axis,
    one line per disc, coloured by condition.

    Curves of selected discs (range selection or focus) are drawn on top and
    emphasised; the rest fade.
    """

    id = "gradient_profiles"
    label = "Gradient Profiles"

    def compute_data(self, state: SelectionState) -> Optional[pd.DataFrame]:
        curves = self.dataset.curves
        if curves is None:
            return None

        df = visible_records(curves, state).copy()
        if df.empty:
            return df

        selected = selection_ids(state)
        emphasis = {disc: derive_emphasis(disc, selected) for disc in df["disc"].unique()}
        df["opacity"] = df["disc"].map(lambda d: emphasis[d].opacity)
        df["stroke_width"] = df["disc"].map(lambda d: emphasis[d].stroke_width)
        return df

    def render_figure(self, data: Optional[pd.DataFrame], state: SelectionState) -> go.Figure:
        if data is None:
            return self.loading_figure()
        if data.empty:
            return self.message_figure(
                "No gradient profiles to display.",
                "All conditions are hidden; toggle one on in the legend.",
            )

        fig = go.Figure()

        # Faded curves first so emphasised ones end up on top
        order = (
            data.groupby("disc", sort=False)["opacity"].first()
            .sort_values(kind="mergesort")
            .index
        )
        for disc in order:
            curve = data[data["disc"] == disc]
            condition = curve["condition"].iloc[0]
            fig.add_trace(
                go.Scatter(
                    x=curve["distance"],
                    y=curve["value"],
                    mode="lines",
                    name=disc,
                    legendgroup=condition,
                    showlegend=False,
                    opacity=float(curve["opacity"].iloc[0]),
                    line=dict(
                        color=condition_colour(condition),
                        width=float(curve["stroke_width"].iloc[0]),
                        shape="spline",
                    ),
                    customdata=[[disc, condition]] * len(curve),
                    hovertemplate=(
                        "Disc: %{customdata[0]}<br>"
                        "Condition: %{customdata[1]}<br>"
                        "Distance: %{x:.3f}<br>"
                        "Relative intensity: %{y:.2f}<extra></extra>"
                    ),
                )
            )

        fig.update_layout(
            title="Raw Gradient Profiles",
            template="plotly_white",
            height=550,
            plot_bgcolor="#f0f0f5",
            xaxis_title="Distance along wing",
            yaxis_title="Relative intensity",
            yaxis_range=[0, 1],
            uirevision=f"{self.id}-{state.revision}",
            margin=dict(l=60, r=40, t=60, b=50),
        )
        return fig
