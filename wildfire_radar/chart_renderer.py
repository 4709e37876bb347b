# wildfire_radar/chart_renderer.py
"""
Radar chart factory for incident zone payloads.

Null value handling
-------------------
A null score means the metric was not assessed (information gap), which is
not the same thing as a score of 0:
  - 0    renders at the zero ring with a visible dot and a normal label
  - null renders at the zero ring with NO dot (and no hover target) and a
         muted label; its tooltip reads "No data available"

Raw value display
-----------------
When the payload carries a "raw" mapping, tooltips show the pre-normalization
value and its metric description above the log-normalized score. Composite
axes use a list of {value, metric} entries. Metric descriptions come from the
data producer; nothing here knows about units.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import List

from wildfire_radar.data_loader import extract_datetime
from wildfire_radar.label_format import wrap_label
from wildfire_radar.normalizer import AxisView, classify, tooltip_text
from wildfire_radar.radar_plot import (
    Plugin,
    PointLabels,
    RadarConfig,
    RadarDataset,
    RadarPlot,
    RadialScale,
    TooltipCallbacks,
)
from wildfire_radar.zones import ZONE_LABELS, build_footer_note

__all__ = ["render", "build_footer_note", "extract_datetime", "ZONE_LABELS"]

# The -25..0 band keeps the zero ring off the centre; it is never labelled.
SCALE_MIN = -25
SCALE_MAX = 100
SCALE_STEP = 20

POINT_RADIUS = 4
POINT_HOVER_RADIUS = 6
POINT_HIT_RADIUS = 8

COLOR_DATA_FILL = "#3b82f638"
COLOR_DATA_BORDER = "#3b82f6d9"
COLOR_DATA_POINT = "#3b82f6"
COLOR_TRANSPARENT = "none"
COLOR_GRID = "#2d3748bf"
COLOR_ANGLE_LINE = "#2d3748e6"
COLOR_TICK = "#64748b"
COLOR_LABEL = "#cbd5e1"
COLOR_LABEL_NULL = "#3d4a5c"       # muted: metric not assessed
COLOR_NULL_BASELINE = "#334155cc"  # zero-ring polygon under the data


# -----------------------------
# Plugins
# -----------------------------
def _draw_null_baseline(plot: RadarPlot) -> None:
    # Filled polygon at the value-0 ring, painted before the dataset.
    n = plot.n_points
    if n == 0:
        return
    inner = plot.distance_for_value(0)
    positions = [plot.point_position(i, inner) for i in range(n)]
    positions.append(positions[0])
    thetas, radii = zip(*positions)
    plot.ax.fill(thetas, radii, color=COLOR_NULL_BASELINE, linewidth=0, zorder=1)


null_baseline_plugin = Plugin(id="null_baseline", before_datasets_draw=_draw_null_baseline)


# -----------------------------
# Config building
# -----------------------------
def _tick_text(value: float) -> str:
    return "" if value < 0 else f"{value:g}"


def _grid_color(tick: float) -> str:
    return COLOR_TRANSPARENT if tick < 0 else COLOR_GRID


def build_config(views: List[AxisView], maintain_aspect_ratio: bool = True) -> RadarConfig:
    """RadarConfig for a classified payload (one dataset, fixed scale)."""
    labels = [v.label for v in views]
    null_flags = [v.is_null for v in views]

    point_colors = [COLOR_TRANSPARENT if is_null else COLOR_DATA_POINT for is_null in null_flags]

    dataset = RadarDataset(
        data=[v.display_value for v in views],
        fill_value=0,
        background_color=COLOR_DATA_FILL,
        border_color=COLOR_DATA_BORDER,
        border_width=1.5,
        point_background_color=point_colors,
        point_border_color=point_colors,
        point_radius=[0 if is_null else POINT_RADIUS for is_null in null_flags],
        point_hover_radius=[0 if is_null else POINT_HOVER_RADIUS for is_null in null_flags],
        point_hit_radius=[0 if is_null else POINT_HIT_RADIUS for is_null in null_flags],
    )

    scale = RadialScale(
        min=SCALE_MIN,
        max=SCALE_MAX,
        step=SCALE_STEP,
        tick_color=COLOR_TICK,
        tick_font_size=9,
        tick_callback=_tick_text,
        grid_color=_grid_color,
        angle_line_color=COLOR_ANGLE_LINE,
    )

    point_labels = PointLabels(
        color=lambda i: COLOR_LABEL_NULL if null_flags[i] else COLOR_LABEL,
        font_size=10,
        callback=wrap_label,
    )

    tooltip = TooltipCallbacks(
        title=lambda i: labels[i],
        label=lambda i: tooltip_text(views[i]),
    )

    return RadarConfig(
        labels=labels,
        dataset=dataset,
        scale=scale,
        point_labels=point_labels,
        tooltip=tooltip,
        plugins=[null_baseline_plugin],
        maintain_aspect_ratio=maintain_aspect_ratio,
    )


# -----------------------------
# Main API
# -----------------------------
def render(surface, payload: Mapping, maintain_aspect_ratio: bool = True) -> RadarPlot:
    """
    Draw a radar chart for `payload` on `surface` (a matplotlib Figure or
    SubFigure) and return the plot handle.

    The caller disposes the handle with `destroy()` before drawing another
    chart on the same surface. With maintain_aspect_ratio a top-level Figure
    is resized to a square (its width kept) until the handle is destroyed.
    """
    views = classify(payload)
    return RadarPlot(surface, build_config(views, maintain_aspect_ratio=maintain_aspect_ratio))
