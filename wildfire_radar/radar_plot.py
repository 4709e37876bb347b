# wildfire_radar/radar_plot.py
"""
Radial (radar) plot on a matplotlib surface.

The plot is driven by a RadarConfig: one dataset, a linear radial scale,
point labels, tooltip callbacks and plugins. Plugins get a
`before_datasets_draw(plot)` hook that runs after the scale and labels are
in place and before the dataset artists are added.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple, Union

import numpy as np

DATASET_ZORDER = 3

COLOR_TOOLTIP_BG = "#0f172ae6"
COLOR_TOOLTIP_BORDER = "#334155"
COLOR_TOOLTIP_TEXT = "#f1f5f9"

PerPoint = Union[float, str, Sequence[Any]]
LabelText = Union[str, List[str]]


def _radar_angles(n: int):
    angles = np.linspace(0, 2*np.pi, n, endpoint=False).tolist()
    angles += angles[:1]
    return angles


def _per_point(value: PerPoint, n: int) -> list:
    if isinstance(value, (str, int, float)):
        return [value] * n
    values = list(value)
    if len(values) != n:
        raise ValueError(f"Expected {n} per-point values, got {len(values)}.")
    return values


def _marker_area(radii: Sequence[float]) -> np.ndarray:
    # scatter sizes are areas in points^2; radius -> (2r)^2
    return (2.0 * np.asarray(radii, dtype=float)) ** 2


def _label_text(text: LabelText) -> str:
    return text if isinstance(text, str) else "\n".join(text)


def _resolve(option: Union[str, Callable[[Any], str]], arg: Any) -> str:
    return option(arg) if callable(option) else option


# -----------------------------
# Config
# -----------------------------
@dataclass
class RadialScale:
    min: float = 0.0
    max: float = 100.0
    step: float = 20.0
    tick_color: str = "#64748b"
    tick_font_size: float = 9
    tick_callback: Callable[[float], str] = lambda v: f"{v:g}"
    grid_color: Union[str, Callable[[float], str]] = "#cbd5e1"    # str or tick value -> colour
    angle_line_color: str = "#cbd5e1"

    def ticks(self) -> List[float]:
        """
        min, then every multiple of step in (min, max], then max.
        """
        start = np.ceil(self.min / self.step) * self.step
        ticks = [] if start == self.min else [float(self.min)]
        ticks += [float(v) for v in np.arange(start, self.max + self.step / 2, self.step) if v <= self.max]
        if not ticks or ticks[-1] != self.max:
            ticks.append(float(self.max))
        return ticks

    def grid_color_for(self, tick: float) -> str:
        return _resolve(self.grid_color, tick)


@dataclass
class PointLabels:
    color: Union[str, Callable[[int], str]] = "#cbd5e1"        # str or axis index -> colour
    font_size: float = 10
    callback: Callable[[str], LabelText] = lambda text: text

    def color_for(self, index: int) -> str:
        return _resolve(self.color, index)


@dataclass
class RadarDataset:
    data: List[float]
    fill_value: Optional[float] = 0.0       # fill down to this ring; None -> no fill
    background_color: str = "#3b82f638"
    border_color: str = "#3b82f6d9"
    border_width: float = 1.5
    point_background_color: PerPoint = "#3b82f6"
    point_border_color: PerPoint = "#3b82f6"
    point_radius: PerPoint = 4
    point_hover_radius: PerPoint = 6
    point_hit_radius: PerPoint = 8


@dataclass
class TooltipCallbacks:
    title: Callable[[int], str]
    label: Callable[[int], LabelText]


@dataclass
class Plugin:
    id: str
    before_datasets_draw: Optional[Callable[["RadarPlot"], None]] = None


@dataclass
class RadarConfig:
    labels: List[str]
    dataset: RadarDataset
    scale: RadialScale = field(default_factory=RadialScale)
    point_labels: PointLabels = field(default_factory=PointLabels)
    tooltip: Optional[TooltipCallbacks] = None
    plugins: List[Plugin] = field(default_factory=list)
    maintain_aspect_ratio: bool = True


# -----------------------------
# Plot
# -----------------------------
class RadarPlot:
    """
    A radar chart attached to a Figure or SubFigure.

    The caller owns the handle and must call destroy() when the chart goes
    away. Several plots may share one canvas (one SubFigure each); each one
    only ever touches its own axes and its own event connection.
    """

    def __init__(self, surface, config: RadarConfig):
        self.surface = surface
        self.config = config
        self.ax = None
        self._angles = _radar_angles(len(config.labels))
        self._points = None
        self._tooltip_artist = None
        self._hover_index: Optional[int] = None
        self._hover_cid: Optional[int] = None
        self._destroyed = False
        self._original_size: Optional[Tuple[float, float]] = None

        self._draw()
        if config.tooltip is not None:
            self._hover_cid = surface.canvas.mpl_connect("motion_notify_event", self._on_hover)

    # -------- scale helpers (for plugins) --------
    def distance_for_value(self, value: float) -> float:
        """Radial distance of `value`: 0 at the centre, 1 on the outer ring."""
        scale = self.config.scale
        return (float(value) - scale.min) / (scale.max - scale.min)

    def point_position(self, index: int, distance: float) -> Tuple[float, float]:
        """(theta, r) in data coordinates of axis `index` at radial `distance`."""
        scale = self.config.scale
        return self._angles[index], scale.min + distance * (scale.max - scale.min)

    @property
    def n_points(self) -> int:
        return len(self.config.labels)

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def hover_index(self) -> Optional[int]:
        return self._hover_index

    # -------- drawing --------
    def _draw(self) -> None:
        self._apply_layout()

        ax = self.surface.add_subplot(111, polar=True)
        self.ax = ax
        ax.set_theta_offset(np.pi / 2)
        ax.set_theta_direction(-1)
        ax.set_facecolor("none")

        self._apply_scale()
        self._apply_point_labels()

        for plugin in self.config.plugins:
            if plugin.before_datasets_draw is not None:
                plugin.before_datasets_draw(self)

        self._draw_dataset()
        self._tooltip_artist = ax.annotate(
            "",
            xy=(0, 0),
            xytext=(12, 12),
            textcoords="offset points",
            color=COLOR_TOOLTIP_TEXT,
            fontsize=9,
            bbox=dict(boxstyle="round,pad=0.5", fc=COLOR_TOOLTIP_BG, ec=COLOR_TOOLTIP_BORDER),
            zorder=DATASET_ZORDER + 10,
            annotation_clip=False,
        )
        self._tooltip_artist.set_visible(False)

    def _apply_layout(self) -> None:
        # SubFigures take their size from the parent grid
        if self.config.maintain_aspect_ratio and hasattr(self.surface, "set_size_inches"):
            width, height = self.surface.get_size_inches()
            self._original_size = (width, height)
            self.surface.set_size_inches(width, width)

    def _apply_scale(self) -> None:
        ax = self.ax
        scale = self.config.scale
        ticks = scale.ticks()

        ax.set_ylim(scale.min, scale.max)
        ax.set_rlabel_position(0)
        ax.set_yticks(ticks)
        ax.set_yticklabels(
            [scale.tick_callback(t) for t in ticks],
            color=scale.tick_color,
            fontsize=scale.tick_font_size,
        )
        ax.yaxis.grid(True)
        # the polar locator drops a tick at rmin, so pair rings by value
        for loc, tick in zip(ax.yaxis.get_majorticklocs(), ax.yaxis.get_major_ticks()):
            tick.gridline.set_color(scale.grid_color_for(loc))
        ax.xaxis.grid(True, color=scale.angle_line_color)
        ax.spines["polar"].set_color(scale.grid_color_for(scale.max))

    def _apply_point_labels(self) -> None:
        point_labels = self.config.point_labels
        texts = [_label_text(point_labels.callback(label)) for label in self.config.labels]
        _, tick_labels = self.ax.set_thetagrids(
            np.degrees(self._angles[:-1]),
            texts,
            fontsize=point_labels.font_size,
        )
        for i, tick_label in enumerate(tick_labels):
            tick_label.set_color(point_labels.color_for(i))

    def _draw_dataset(self) -> None:
        ax = self.ax
        ds = self.config.dataset
        n = self.n_points

        values = [float(v) for v in ds.data]
        if len(values) != n:
            raise ValueError(f"Dataset has {len(values)} values for {n} labels.")
        theta = np.asarray(self._angles, dtype=float)
        closed = np.asarray(values + values[:1], dtype=float)

        if ds.fill_value is not None and n:
            # ring between the data polygon and the fill_value polygon
            base = np.full(n + 1, float(ds.fill_value))
            ax.fill(
                np.concatenate([theta, theta[::-1]]),
                np.concatenate([closed, base[::-1]]),
                color=ds.background_color,
                linewidth=0,
                zorder=DATASET_ZORDER,
            )

        ax.plot(theta, closed, color=ds.border_color, linewidth=ds.border_width, zorder=DATASET_ZORDER + 0.1)
        self._points = ax.scatter(
            theta[:-1],
            values,
            s=_marker_area(_per_point(ds.point_radius, n)),
            facecolors=_per_point(ds.point_background_color, n),
            edgecolors=_per_point(ds.point_border_color, n),
            zorder=DATASET_ZORDER + 0.2,
        )

    # -------- tooltips --------
    def tooltip(self, index: int) -> Tuple[str, List[str]]:
        """Tooltip (title, body lines) for axis `index`, from the callbacks."""
        callbacks = self.config.tooltip
        if callbacks is None:
            return "", []
        body = callbacks.label(index)
        lines = [body] if isinstance(body, str) else list(body)
        return callbacks.title(index), lines

    def hit_test(self, x: float, y: float) -> Optional[int]:
        """
        Index of the point nearest to display position (x, y) within its hit
        radius, or None. Points with a zero hit radius are never hit.
        """
        n = self.n_points
        if self._destroyed or n == 0:
            return None
        ds = self.config.dataset
        xy = self.ax.transData.transform(np.column_stack([self._angles[:-1], np.asarray(ds.data, dtype=float)]))
        dist = np.hypot(xy[:, 0] - x, xy[:, 1] - y)
        hit = np.asarray(_per_point(ds.point_hit_radius, n), dtype=float) * self.surface.figure.dpi / 72.0
        candidates = np.flatnonzero((hit > 0) & (dist <= hit))
        if candidates.size == 0:
            return None
        return int(candidates[np.argmin(dist[candidates])])

    def show_tooltip(self, index: Optional[int]) -> None:
        """Show the tooltip for `index` (None hides it) and resize the hovered point."""
        if self._destroyed:
            return
        self._hover_index = index
        ds = self.config.dataset
        n = self.n_points

        radii = list(_per_point(ds.point_radius, n))
        if index is not None:
            radii[index] = _per_point(ds.point_hover_radius, n)[index]
        self._points.set_sizes(_marker_area(radii))

        if index is None:
            self._tooltip_artist.set_visible(False)
        else:
            title, lines = self.tooltip(index)
            self._tooltip_artist.xy = (self._angles[index], float(ds.data[index]))
            self._tooltip_artist.set_text("\n".join([title] + lines))
            self._tooltip_artist.set_visible(True)
        self.surface.canvas.draw_idle()

    def _on_hover(self, event) -> None:
        index = self.hit_test(event.x, event.y) if event.inaxes is self.ax else None
        if index != self._hover_index:
            self.show_tooltip(index)

    # -------- lifecycle --------
    def destroy(self) -> None:
        """
        Disconnect events, remove this plot's axes and give a squared Figure
        its original size back. Safe to call twice.
        """
        if self._destroyed:
            return
        self._destroyed = True
        if self._hover_cid is not None:
            self.surface.canvas.mpl_disconnect(self._hover_cid)
            self._hover_cid = None
        self.ax.remove()
        if self._original_size is not None:
            self.surface.set_size_inches(*self._original_size)
            self._original_size = None
        self.surface.canvas.draw_idle()
