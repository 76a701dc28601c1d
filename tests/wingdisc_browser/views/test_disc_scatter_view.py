import pandas as pd
import plotly.graph_objs as go

from wingdisc_browser.core.base_view import LOADING_MESSAGE
from wingdisc_browser.core.dataset import WingDataset
from wingdisc_browser.core.selection import (
    BASELINE_EMPHASIS,
    HIGH_EMPHASIS,
    LOW_EMPHASIS,
    SPACE_SPECIMEN,
    GestureEvent,
    SelectionState,
    dispatch,
)
from wingdisc_browser.views.disc_scatter_view import DiscScatterView


def _make_dataset() -> WingDataset:
    """
    Tiny morphometrics table:
    - 3 discs, areas 90 / 120 / 180
    - conditions standard / hypoxia / cold
    """
    morph = pd.DataFrame(
        {
            "disc": ["d1", "d2", "d3"],
            "area": [90.0, 120.0, 180.0],
            "A": [0.0, 0.0, 0.0],
            "B": [0.0, 0.0, 0.0],
            "C": [0.0, 0.0, 0.0],
            "D": [0.1, 0.2, 0.3],
            "condition": ["standard", "hypoxia", "cold"],
        }
    )
    return WingDataset(name="TestWings", morphometrics=morph)


def test_compute_data_baseline_without_selection():
    view = DiscScatterView(dataset=_make_dataset())
    df = view.compute_data(SelectionState())

    assert list(df["disc"]) == ["d1", "d2", "d3"]
    assert set(df["opacity"]) == {BASELINE_EMPHASIS.opacity}
    assert set(df["outline"]) == {"#ffffff"}


def test_compute_data_emphasis_follows_selection():
    view = DiscScatterView(dataset=_make_dataset())
    state = SelectionState(range_ids=["d2"], focus_id="d3")
    df = view.compute_data(state).set_index("disc")

    assert df.loc["d2", "opacity"] == HIGH_EMPHASIS.opacity
    assert df.loc["d3", "opacity"] == HIGH_EMPHASIS.opacity
    assert df.loc["d1", "opacity"] == LOW_EMPHASIS.opacity
    # focused disc gets the dark outline
    assert df.loc["d3", "outline"] == "#000000"
    assert df.loc["d2", "outline"] == "#ffffff"


def test_compute_data_hides_toggled_conditions():
    view = DiscScatterView(dataset=_make_dataset())
    state = SelectionState(visible={"standard": True, "hypoxia": False, "cold": True})

    df = view.compute_data(state)
    assert list(df["disc"]) == ["d1", "d3"]


def test_render_figure_scatter_and_marginals():
    view = DiscScatterView(dataset=_make_dataset())
    state = SelectionState(range_ids=["d2"], range_bounds=[100.0, 150.0])

    fig = view.render_figure(view.compute_data(state), state)

    assert isinstance(fig, go.Figure)
    scatters = [t for t in fig.data if t.type == "scatter"]
    histograms = [t for t in fig.data if t.type == "histogram"]

    # one scatter + two marginals per condition
    assert len(scatters) == 3
    assert len(histograms) == 6

    # box selection payloads are keyed by the scatter's x axis
    assert all(t.xaxis == view.range_axis for t in scatters)
    assert fig.layout.dragmode == "select"
    assert fig.layout.selectdirection == "h"

    # ids ride along as customdata for click / selection callbacks
    ids = sorted(str(row[0]) for t in scatters for row in t.customdata)
    assert ids == ["d1", "d2", "d3"]


def test_render_figure_loading_when_source_missing():
    view = DiscScatterView(dataset=WingDataset(name="empty"))
    state = SelectionState()

    data = view.compute_data(state)
    assert data is None

    fig = view.render_figure(data, state)
    assert fig.layout.annotations[0].text == LOADING_MESSAGE


def test_render_figure_all_hidden():
    view = DiscScatterView(dataset=_make_dataset())
    state = SelectionState(visible={"standard": False, "hypoxia": False, "cold": False})

    data = view.compute_data(state)
    assert data.empty

    fig = view.render_figure(data, state)
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 0


def test_landmark_click_leaves_disc_emphasis_at_baseline():
    view = DiscScatterView(dataset=_make_dataset())
    state = dispatch(SelectionState(), GestureEvent("click", {"id": "w1", "space": SPACE_SPECIMEN}))

    df = view.compute_data(state)
    assert set(df["opacity"]) == {BASELINE_EMPHASIS.opacity}
    assert set(df["outline"]) == {"#ffffff"}


def test_uirevision_changes_after_reset():
    view = DiscScatterView(dataset=_make_dataset())
    brushed = SelectionState(range_ids=["d2"], range_bounds=[100.0, 150.0])
    reset = dispatch(brushed, GestureEvent("reset"))

    before = view.render_figure(view.compute_data(brushed), brushed)
    after = view.render_figure(view.compute_data(reset), reset)

    assert before.layout.uirevision != after.layout.uirevision
    # selection gestures alone keep the brush / zoom state
    refocused = dispatch(brushed, GestureEvent("click", {"id": "d1"}))
    again = view.render_figure(view.compute_data(refocused), refocused)
    assert again.layout.uirevision == before.layout.uirevision
