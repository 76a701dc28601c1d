from __future__ import annotations

__all__ = ["IDs", "graph_id", "legend_toggle_id"]


class IDs:
    class Store:
        SELECTION_STATE = "selection-state"

    class Control:
        CLEAR_SELECTION_BTN = "clear-selection-btn"
        LEGEND_CONTAINER = "legend-container"

        # Navbar summary
        NAVBAR_SUBTITLE = "navbar-subtitle"
        NAVBAR_DATASET_META = "navbar-dataset-meta"

        # Status bar
        STATUS_BAR = "status-bar"

    class Pattern:
        # pattern-matching "type" strings
        LEGEND_TOGGLE = "legend-toggle"


def graph_id(view_id: str) -> str:
    return f"{view_id.replace('_', '-')}-graph"


def legend_toggle_id(condition: str) -> dict:
    return {"type": IDs.Pattern.LEGEND_TOGGLE, "index": condition}
