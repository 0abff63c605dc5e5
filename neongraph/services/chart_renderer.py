import io
import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import patheffects
from matplotlib.axes import Axes
from matplotlib.container import BarContainer
from matplotlib.patches import FancyBboxPatch
from matplotlib.patches import Patch

from neongraph.services.aggregation import ChartSeries
from neongraph.services.colors import gradient_colormap
from neongraph.settings import ChartMode


logger = logging.getLogger(__name__)

DPI = 100
GLOW_COLOR = "#ff50c8"
GLOW_ALPHA = 0.45
MAX_X_LABELS = 20


@dataclass(frozen=True)
class RenderOptions:
    """Static canvas and style options for one chart.

    Sizes given in pixels (bar thickness, corner radius) are converted to data
    units once the figure layout is final.
    """

    width: int
    height: int
    background: str = "#07121a"
    title_color: str = "#d7b0e6"
    title_size: int = 20
    show_title: bool = True
    tick_color: str = "#c9c9d0"
    grid_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 0.04)
    show_x_axis: bool = False
    legend_label: str | None = None
    glow: bool = True
    bar_thickness: float | None = 18.0
    bar_radius: float = 6.0
    line_tension: float = 0.4


CANVAS_SIZES = {
    "weekly": (1400, 420),
    "daily": (800, 400),
}


def options_for(series: ChartSeries) -> RenderOptions:
    width, height = CANVAS_SIZES[series.granularity]
    if series.granularity == "daily":
        return RenderOptions(
            width=width,
            height=height,
            background="none",
            show_title=False,
            tick_color="#00ffff",
            show_x_axis=True,
            legend_label="GitHub Contributions",
            glow=False,
            bar_thickness=None,
            bar_radius=5.0,
        )
    return RenderOptions(width=width, height=height)


def smooth_curve(
    xs: Sequence[float],
    ys: Sequence[float],
    tension: float = 0.4,
    samples: int = 12,
) -> tuple[np.ndarray, np.ndarray]:
    """Sample a cubic Bezier spline through every point.

    Control points sit along the line joining each point's neighbours,
    ``tension`` times half their distance away. The curve is floored at 0
    so it never dips under the baseline between points.
    """

    points = np.column_stack([xs, ys]).astype(float)
    if len(points) < 3 or tension <= 0:
        return points[:, 0], points[:, 1]

    previous = np.vstack([points[:1], points[:-1]])
    following = np.vstack([points[1:], points[-1:]])
    offsets = (following - previous) * tension / 2

    t = np.linspace(0.0, 1.0, samples, endpoint=False)[:, None]
    segments = []
    for index in range(len(points) - 1):
        start, end = points[index], points[index + 1]
        first = start + offsets[index]
        second = end - offsets[index + 1]
        segments.append(
            (1 - t) ** 3 * start
            + 3 * (1 - t) ** 2 * t * first
            + 3 * (1 - t) * t**2 * second
            + t**3 * end
        )
    segments.append(points[-1:])

    curve = np.vstack(segments)
    return curve[:, 0], np.maximum(curve[:, 1], 0.0)


def _glow_effects(linewidth: float) -> list[patheffects.AbstractPathEffect]:
    return [
        patheffects.Stroke(linewidth=linewidth, foreground=GLOW_COLOR, alpha=GLOW_ALPHA),
        patheffects.Normal(),
    ]


def _fill_with_gradient(ax: Axes, clip_targets: list) -> None:
    """Paint the static gradient over the plot area, clipped to each target.

    The gradient spans the whole plot area top to bottom, so every bar shows
    the slice of the gradient it reaches.
    """

    x0, x1 = ax.get_xlim()
    y0, y1 = ax.get_ylim()
    gradient = np.linspace(0.0, 1.0, 256).reshape(-1, 1)
    colormap = gradient_colormap()

    for target, transform in clip_targets:
        image = ax.imshow(
            gradient,
            cmap=colormap,
            aspect="auto",
            extent=(x0, x1, y0, y1),
            origin="upper",
            interpolation="bicubic",
            zorder=2.5,
        )
        image.set_clip_path(target, transform)

    # imshow resets the limits to the image extent.
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)


def _draw_bars(ax: Axes, positions: np.ndarray, series: ChartSeries) -> BarContainer:
    colors = [color.rgba() for color in series.colors]
    bars = ax.bar(
        positions,
        series.values,
        width=0.7,
        color=colors,
        edgecolor=colors,
        linewidth=1,
        zorder=2,
    )
    ax.set_ylim(bottom=0)
    return bars


def _round_bars(ax: Axes, bars: BarContainer, options: RenderOptions) -> list[FancyBboxPatch]:
    """Replace plain bars with rounded ones of the configured pixel thickness."""

    x0, x1 = ax.get_xlim()
    y0, y1 = ax.get_ylim()
    ax.set_xlim(x0, x1)
    ax.set_ylim(y0, y1)
    x_pixels = ax.bbox.width / (x1 - x0)
    y_pixels = ax.bbox.height / (y1 - y0)
    aspect = x_pixels / y_pixels

    rounded: list[FancyBboxPatch] = []
    for bar in list(bars):
        center = bar.get_x() + bar.get_width() / 2
        width = bar.get_width()
        if options.bar_thickness is not None:
            width = min(width, options.bar_thickness / x_pixels)
        height = bar.get_height()
        facecolor = bar.get_facecolor()
        edgecolor = bar.get_edgecolor()
        bar.remove()
        if height <= 0:
            continue

        radius = min(options.bar_radius / x_pixels, width / 2, height / aspect / 2)
        patch = FancyBboxPatch(
            (center - width / 2, 0.0),
            width,
            height,
            boxstyle=f"round,pad=0,rounding_size={radius}",
            mutation_aspect=aspect,
            facecolor=facecolor,
            edgecolor=edgecolor,
            linewidth=1,
            zorder=2,
        )
        if options.glow:
            patch.set_path_effects(_glow_effects(4))
        ax.add_patch(patch)
        rounded.append(patch)

    return rounded


def _draw_line(ax: Axes, positions: np.ndarray, series: ChartSeries, options: RenderOptions) -> list:
    if not series.values:
        ax.set_ylim(bottom=0)
        return []

    peak = int(np.argmax(series.values))
    line_color = series.colors[peak].rgba()
    curve_x, curve_y = smooth_curve(positions, series.values, tension=options.line_tension)

    fill = ax.fill_between(
        curve_x,
        curve_y,
        0,
        color=line_color,
        alpha=0.18,
        linewidth=0,
        zorder=1,
    )
    (line,) = ax.plot(curve_x, curve_y, color=line_color, linewidth=2, zorder=3)
    if options.glow:
        line.set_path_effects(_glow_effects(6))

    ax.scatter(
        positions,
        series.values,
        s=36,
        c=[color.rgba() for color in series.colors],
        zorder=4,
    )

    ax.set_ylim(bottom=0)
    paths = fill.get_paths()
    if series.style == "gradient" and paths:
        fill.set_alpha(0.0)
        return [(paths[0], ax.transData)]
    return []


def _style_axes(ax: Axes, positions: np.ndarray, series: ChartSeries, options: RenderOptions) -> None:
    ax.set_facecolor(options.background)
    if options.show_title:
        ax.set_title(series.title, color=options.title_color, fontsize=options.title_size)

    step = max(1, math.ceil(len(series.labels) / MAX_X_LABELS))
    ax.set_xticks(positions[::step], labels=series.labels[::step])
    ax.tick_params(axis="x", colors=options.tick_color, labelrotation=90, labelsize=7)
    ax.xaxis.set_visible(options.show_x_axis)

    ax.tick_params(axis="y", colors=options.tick_color)
    ax.grid(axis="y", color=options.grid_color)
    ax.set_axisbelow(True)

    for spine in ax.spines.values():
        spine.set_visible(False)

    if options.legend_label:
        swatch = series.colors[0].rgba() if series.colors else options.tick_color
        ax.legend(
            handles=[Patch(facecolor=swatch, label=options.legend_label)],
            labelcolor=options.tick_color,
            frameon=False,
            loc="upper left",
        )


def render_chart(
    series: ChartSeries,
    mode: ChartMode = "bar",
    options: RenderOptions | None = None,
) -> bytes:
    """Render a series as a PNG bar or line chart and return the image bytes."""

    options = options or options_for(series)
    logger.debug(
        "Rendering %s chart of %d values at %dx%d",
        mode,
        len(series.values),
        options.width,
        options.height,
    )

    fig, ax = plt.subplots(figsize=(options.width / DPI, options.height / DPI), dpi=DPI)
    try:
        fig.patch.set_facecolor(options.background)
        positions = np.arange(len(series.values))

        if mode == "line":
            clip_targets = _draw_line(ax, positions, series, options)
            _style_axes(ax, positions, series, options)
            fig.tight_layout()
        else:
            bars = _draw_bars(ax, positions, series)
            _style_axes(ax, positions, series, options)
            fig.tight_layout()
            clip_targets = [(patch, None) for patch in _round_bars(ax, bars, options)]

        if series.style == "gradient" and clip_targets:
            _fill_with_gradient(ax, clip_targets)

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=DPI, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)

    return buffer.getvalue()
