from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd
import plotly.graph_objects as go

from wingdisc_browser.core.base_view import BaseView
from wingdisc_browser.core.conditions import CONDITIONS, LANDMARK_CONNECTIONS, condition_colour
from wingdisc_browser.core.selection import (
    SelectionState,
    derive_emphasis,
    specimen_selection_ids,
    visible_records,
)


def connection_segments(points: pd.DataFrame, specimen_id: str) -> List[Dict[str, float]]:
    """
    Line segments joining one specimen's landmarks along LANDMARK_CONNECTIONS.

    Connections with a missing endpoint are skipped.
    """
    specimen = points[points["id"] == specimen_id].dropna(subset=["x", "y"])
    by_point = {int(row.point_id): row for row in specimen.itertuples(index=False)}

    segments = []
    for p1, p2 in LANDMARK_CONNECTIONS:
        a = by_point.get(p1)
        b = by_point.get(p2)
        if a is None or b is None:
            continue
        segments.append({"x0": a.x, "y0": a.y, "x1": b.x, "y1": b.y})
    return segments


class LandmarkView(BaseView):
    """
    Wing landmark coordinates (A..O) for every specimen.

    Clicking a landmark toggles focus on its specimen and overlays the
    anatomical connections for that specimen. Specimen focus is independent
    of the disc selection driving the other views.
    """

    id = "landmarks"
    label = "Wing Coordinate Landmarks"

    def compute_data(self, state: SelectionState) -> Optional[Dict[str, Any]]:
        landmarks = self.dataset.landmarks
        if landmarks is None:
            return None

        points = visible_records(landmarks, state).copy()
        if points.empty:
            return {"points": points, "segments": [], "focus_condition": None}

        selected = specimen_selection_ids(state)
        emphasis = {sid: derive_emphasis(sid, selected) for sid in points["id"].unique()}
        points["opacity"] = points["id"].map(lambda s: emphasis[s].opacity)

        segments: List[Dict[str, float]] = []
        focus_condition = None
        if state.specimen_focus_id is not None and state.specimen_focus_id in emphasis:
            segments = connection_segments(points, state.specimen_focus_id)
            focus_condition = points.loc[points["id"] == state.specimen_focus_id, "condition"].iloc[0]

        return {"points": points, "segments": segments, "focus_condition": focus_condition}

    def render_figure(self, data: Optional[Dict[str, Any]], state: SelectionState) -> go.Figure:
        if data is None:
            return self.loading_figure()

        points: pd.DataFrame = data["points"]
        if points.empty:
            return self.message_figure(
                "No landmarks to display.",
                "All conditions are hidden; toggle one on in the legend.",
            )

        fig = go.Figure()

        segments = data["segments"]
        if segments:
            xs: List[Optional[float]] = []
            ys: List[Optional[float]] = []
            for seg in segments:
                xs += [seg["x0"], seg["x1"], None]
                ys += [seg["y0"], seg["y1"], None]
            fig.add_trace(
                go.Scatter(
                    x=xs,
                    y=ys,
                    mode="lines",
                    line=dict(color=condition_colour(data["focus_condition"]), width=2),
                    opacity=0.6,
                    hoverinfo="skip",
                    showlegend=False,
                    name="connections",
                )
            )

        for condition in CONDITIONS:
            sub = points[points["condition"] == condition]
            if sub.empty:
                continue
            fig.add_trace(
                go.Scatter(
                    x=sub["x"],
                    y=sub["y"],
                    mode="markers+text",
                    name=condition,
                    text=sub["letter"],
                    textposition="middle center",
                    textfont=dict(color="white", size=9),
                    customdata=sub[
                        ["id", "letter", "point_id", "condition", "sex", "centroid_size"]
                    ].to_numpy(),
                    marker=dict(
                        size=14,
                        color=condition_colour(condition),
                        opacity=sub["opacity"].tolist(),
                    ),
                    hovertemplate=(
                        "<b>ID:</b> %{customdata[0]}<br>"
                        "<b>Point:</b> %{customdata[1]} (%{customdata[2]})<br>"
                        "<b>Condition:</b> %{customdata[3]}<br>"
                        "<b>Sex:</b> %{customdata[4]}<br>"
                        "<b>Coordinates:</b> (%{x:.2f}, %{y:.2f})<br>"
                        "<b>Centroid Size:</b> %{customdata[5]:.4f}<extra></extra>"
                    ),
                )
            )

        fig.update_layout(
            title="Wing Coordinate Landmarks",
            template="plotly_white",
            height=650,
            showlegend=False,
            clickmode="event",
            xaxis_title="X Coordinate",
            yaxis_title="Y Coordinate",
            yaxis_scaleanchor="x",
            uirevision=f"{self.id}-{state.revision}",
            margin=dict(l=60, r=40, t=60, b=50),
        )
        return fig
