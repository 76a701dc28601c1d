from __future__ import annotations

from typing import Any, Dict, Optional

import plotly.graph_objects as go

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.core.conditions import condition_colour
from wingdisc_browser.core.selection import SelectionState


class ProfileDetailView(BaseView):
    """
    Raw gradient profile of the focused disc.
    """

    id = "profile_detail"
    label = "Disc Profile"

    def compute_data(self, state: SelectionState) -> Optional[Dict[str, Any]]:
        if self.dataset.profiles is None:
            return None
        if state.focus_id is None:
            return {}

        profile = self.dataset.disc_profile(state.focus_id)
        profile = profile.dropna(subset=["distance", "value"])
        if profile.empty:
            return {"disc": state.focus_id, "profile": profile}

        info = self.dataset.disc_info(state.focus_id)
        condition = info["condition"] if info is not None else profile["condition"].iloc[0]
        return {"disc": state.focus_id, "condition": condition, "profile": profile}

    def render_figure(self, data: Optional[Dict[str, Any]], state: SelectionState) -> go.Figure:
        if data is None:
            return self.loading_figure()
        if not data:
            return self.message_figure(
                "No disc selected.",
                "Click a point in the scatter plot to see its profile.",
            )

        profile = data["profile"]
        if profile.empty:
            return self.message_figure(f"No profile data found for disc {data['disc']}.")

        max_val = float(profile["value"].max())
        y_max = max_val * 1.1 if max_val > 0 else 1.0

        fig = go.Figure(
            go.Scatter(
                x=profile["distance"],
                y=profile["value"],
                mode="lines",
                line=dict(color=condition_colour(data["condition"]), width=2, shape="spline"),
                name=data["disc"],
                hovertemplate="Distance: %{x:.3f}<br>Intensity: %{y:.2f}<extra></extra>",
            )
        )
        fig.update_layout(
            title=f"Profile for {data['disc']} ({data['condition']})",
            template="plotly_white",
            height=320,
            showlegend=False,
            xaxis_title="Relative Distance",
            yaxis_title="Intensity Value",
            yaxis_range=[0, y_max],
            margin=dict(l=60, r=40, t=50, b=50),
        )
        return fig
