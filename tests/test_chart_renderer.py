import matplotlib.pyplot as plt
import pytest
from matplotlib.backend_bases import MouseEvent
from matplotlib.colors import same_color, to_rgba

from wildfire_radar import chart_renderer
from wildfire_radar.chart_renderer import (
    COLOR_LABEL,
    COLOR_LABEL_NULL,
    COLOR_NULL_BASELINE,
    ZONE_LABELS,
    build_footer_note,
    extract_datetime,
    render,
)
from wildfire_radar.radar_plot import DATASET_ZORDER


@pytest.fixture
def payload():
    return {
        "title": "123 Ridge Fire: Perimeter",
        "subtitle": "Risk profile",
        "data": {
            "Fuel": 62.3,
            "Population": None,
            "Critical Infrastructure": 40,
            "Roads": 0,
            "Slope": 85,
        },
        "raw": {
            "Fuel": {"value": 26400, "metric": "acres burned"},
            "Population": {"value": 1200, "metric": "residents"},
        },
    }


@pytest.fixture
def fig():
    figure = plt.figure(figsize=(6, 6), dpi=100)
    yield figure
    plt.close(figure)


def _display_xy(plot, index):
    theta = plot.point_position(index, plot.distance_for_value(plot.config.dataset.data[index]))
    return plot.ax.transData.transform(theta)


def test_public_surface():
    assert set(chart_renderer.__all__) == {"render", "build_footer_note", "extract_datetime", "ZONE_LABELS"}


def test_axis_order_matches_payload(fig, payload):
    plot = render(fig, payload)
    assert plot.config.labels == list(payload["data"].keys())
    assert plot.config.dataset.data == [62.3, 0, 40, 0, 85]


def test_null_axis_has_no_point_and_zero_axis_does(fig, payload):
    plot = render(fig, payload)
    ds = plot.config.dataset
    population, roads = 1, 3

    assert ds.point_radius[population] == 0
    assert ds.point_hover_radius[population] == 0
    assert ds.point_hit_radius[population] == 0
    assert ds.point_background_color[population] == "none"

    assert ds.point_radius[roads] == 4
    assert ds.point_hover_radius[roads] == 6
    assert ds.point_hit_radius[roads] == 8


def test_scale_is_fixed_and_negative_ticks_are_blank(fig, payload):
    plot = render(fig, payload)
    scale = plot.config.scale
    assert (scale.min, scale.max, scale.step) == (-25, 100, 20)
    assert plot.ax.get_ylim() == (-25, 100)

    ticks = scale.ticks()
    assert ticks == [-25, -20, 0, 20, 40, 60, 80, 100]
    assert [scale.tick_callback(t) for t in ticks] == ["", "", "0", "20", "40", "60", "80", "100"]
    assert scale.grid_color_for(-20) == "none"


def test_grid_rings_are_coloured_by_tick_value(fig, payload):
    plot = render(fig, payload)
    fig.canvas.draw()

    alpha = {
        float(loc): to_rgba(tick.gridline.get_color())[3]
        for loc, tick in zip(plot.ax.yaxis.get_majorticklocs(), plot.ax.yaxis.get_major_ticks())
    }
    assert alpha[-20.0] == 0
    assert alpha[0.0] > 0
    assert all(alpha[v] > 0 for v in (20.0, 40.0, 60.0, 80.0, 100.0))


def test_point_labels_are_wrapped_and_null_labels_muted(fig, payload):
    plot = render(fig, payload)
    labels = plot.ax.get_xticklabels()

    assert labels[2].get_text() == "Critical\nInfrastructure"
    assert labels[0].get_text() == "Fuel"
    assert same_color(labels[1].get_color(), COLOR_LABEL_NULL)
    assert same_color(labels[3].get_color(), COLOR_LABEL)


def test_null_baseline_is_drawn_under_the_dataset(fig, payload):
    plot = render(fig, payload)
    baseline = [p for p in plot.ax.patches if same_color(p.get_facecolor(), COLOR_NULL_BASELINE)]
    assert len(baseline) == 1
    assert baseline[0].get_zorder() < DATASET_ZORDER

    radii = baseline[0].get_xy()[:, 1]
    assert radii == pytest.approx([0.0] * len(radii))


def test_tooltip_callbacks(fig, payload):
    plot = render(fig, payload)
    assert plot.tooltip(0) == ("Fuel", ["• 26,400 acres burned", "• Score: 62.3 / 100"])
    assert plot.tooltip(1) == ("Population", ["No data available"])
    assert plot.tooltip(3) == ("Roads", ["• Score: 0.0 / 100"])


def test_hover_targets_real_points_only(fig, payload):
    plot = render(fig, payload)
    fig.canvas.draw()

    x, y = _display_xy(plot, 3)
    assert plot.hit_test(x, y) == 3

    x, y = _display_xy(plot, 1)
    assert plot.hit_test(x, y) is None


def test_hover_event_shows_tooltip(fig, payload):
    plot = render(fig, payload)
    fig.canvas.draw()

    x, y = _display_xy(plot, 0)
    event = MouseEvent("motion_notify_event", fig.canvas, x, y)
    fig.canvas.callbacks.process("motion_notify_event", event)
    assert plot.hover_index == 0

    event = MouseEvent("motion_notify_event", fig.canvas, 1, 1)
    fig.canvas.callbacks.process("motion_notify_event", event)
    assert plot.hover_index is None


def test_maintain_aspect_ratio(payload):
    square = plt.figure(figsize=(8, 5))
    fill = plt.figure(figsize=(8, 5))
    try:
        render(square, payload)
        render(fill, payload, maintain_aspect_ratio=False)
        assert tuple(square.get_size_inches()) == (8, 8)
        assert tuple(fill.get_size_inches()) == (8, 5)
    finally:
        plt.close(square)
        plt.close(fill)


def test_destroy_restores_squared_figure_size(payload):
    figure = plt.figure(figsize=(8, 5))
    try:
        plot = render(figure, payload)
        assert tuple(figure.get_size_inches()) == (8, 8)
        plot.destroy()
        assert tuple(figure.get_size_inches()) == (8, 5)
    finally:
        plt.close(figure)


def test_destroy_leaves_sibling_charts_alone(payload):
    figure = plt.figure(figsize=(10, 5), dpi=100)
    try:
        left, right = figure.subfigures(1, 2)
        a = render(left, payload, maintain_aspect_ratio=False)
        b = render(right, payload, maintain_aspect_ratio=False)
        figure.canvas.draw()

        a.destroy()
        a.destroy()
        assert a.destroyed
        assert a.ax not in figure.axes
        assert b.ax in figure.axes

        x, y = _display_xy(b, 0)
        figure.canvas.callbacks.process("motion_notify_event", MouseEvent("motion_notify_event", figure.canvas, x, y))
        assert b.hover_index == 0
        assert a.hover_index is None
    finally:
        plt.close(figure)


def test_render_does_not_mutate_payload(fig, payload):
    before = repr(payload)
    render(fig, payload)
    assert repr(payload) == before


def test_reexported_helpers():
    assert ZONE_LABELS["0_mile_buffer"] == "Perimeter or Reported Location"
    assert "3 Mile Buffer zone" in build_footer_note("3_mile_buffer")
    assert extract_datetime({"updated_at": "2024-01-01"}) == "2024-01-01"
