from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np

from luvatrix_graphs.bands import BandShapes
from luvatrix_graphs.colors import ColorValue, color_kind, color_names, color_numbers, visible_color_mask
from luvatrix_graphs.configuration import (
    DEFAULT_COLOR_PALETTE,
    AxisConfiguration,
    FigureConfiguration,
    PointsConfiguration,
)
from luvatrix_graphs.figure import AxisLayout, ColorAxisLayout, Figure, Layout, Trace
from luvatrix_graphs.scales import color_scale_values, log_axis_ticks, log_ticks, normalize_color_palette


DEFAULT_BAND_COLOR = "grey"
PRIMARY_COLOR_AXIS = "coloraxis"
BORDERS_COLOR_AXIS = "coloraxis2"


def shift(values: np.ndarray, axis: AxisConfiguration) -> np.ndarray:
    """Plotted coordinates: values move by the log regularization on a log axis."""
    values = np.asarray(values, dtype=np.float64)
    if not axis.is_log:
        return values
    return values + axis.log_regularization


def plotted_bounds(values: Iterable[np.ndarray], axis: AxisConfiguration) -> tuple[float, float]:
    """The plotted range of an axis: its configured bounds, or else those of the (shifted) data."""
    shifted = [shift(vector, axis) for vector in values]
    joined = np.concatenate(shifted) if shifted else np.zeros(0)
    regularization = axis.log_regularization or 0.0
    if axis.minimum is not None:
        minimum = axis.minimum + regularization
    else:
        minimum = float(np.min(joined)) if joined.size else 0.0
    if axis.maximum is not None:
        maximum = axis.maximum + regularization
    else:
        maximum = float(np.max(joined)) if joined.size else 1.0
    return minimum, maximum


def axis_layout(
    title: str | None,
    axis: AxisConfiguration,
    figure: FigureConfiguration,
    bounds: tuple[float, float],
) -> AxisLayout:
    regularization = axis.log_regularization or 0.0
    axis_range = None
    if axis.minimum is not None and axis.maximum is not None:
        axis_range = (axis.minimum + regularization, axis.maximum + regularization)
    tick_values = tick_labels = None
    minimum, maximum = bounds
    if axis.is_log and 0 < minimum < maximum:
        ticks = log_axis_ticks(minimum, maximum)
        if ticks.positions:
            tick_values, tick_labels = ticks.positions, ticks.labels
    return AxisLayout(
        title=title,
        is_log=axis.is_log,
        range=axis_range,
        tick_values=tick_values,
        tick_labels=tick_labels,
        show_grid=figure.show_grid,
        show_ticks=figure.show_ticks,
    )


def figure_layout(figure: FigureConfiguration, **kwargs) -> Layout:
    return Layout(width=figure.width, height=figure.height, template=figure.template, **kwargs)


def make_figure(traces: Sequence[Trace], layout: Layout, figure: FigureConfiguration) -> Figure:
    return Figure(
        traces=tuple(traces),
        layout=layout,
        output_file=figure.output_file,
        show_interactive=figure.show_interactive,
    )


def band_traces(shapes: Iterable[BandShapes]) -> tuple[list[Trace], list[Trace]]:
    """Fill traces (to draw under the data) and line traces (to draw over it)."""
    fills: list[Trace] = []
    lines: list[Trace] = []
    for shape in shapes:
        for polygon in shape.fills:
            fills.append(
                Trace(
                    kind="fill",
                    x=polygon.xs,
                    y=polygon.ys,
                    name=f"{polygon.band} band",
                    color=polygon.color or DEFAULT_BAND_COLOR,
                    fill="toself",
                )
            )
        for line in shape.lines:
            lines.append(
                Trace(
                    kind="line",
                    x=line.xs,
                    y=line.ys,
                    name=f"{line.band} band",
                    color=line.color or DEFAULT_BAND_COLOR,
                    width=line.width,
                    is_dashed=line.is_dashed,
                )
            )
    return fills, lines


def visibility_mask(sizes: np.ndarray, colors: Sequence[ColorValue] | None) -> np.ndarray:
    """Elements to draw: a zero size or an empty color hides an element."""
    mask = np.asarray(sizes) > 0
    if colors is not None:
        mask &= visible_color_mask(colors)
    return mask


@dataclass(frozen=True)
class MarkersLayer:
    """One layer of markers (the points or their borders), resolved to pixels."""

    group: str
    xs: np.ndarray
    ys: np.ndarray
    sizes: np.ndarray
    colors: tuple[ColorValue, ...] | None
    hovers: tuple[str, ...] | None
    style: PointsConfiguration
    default_color: str
    coloraxis: str
    colors_title: str | None = None


def markers_traces(layer: MarkersLayer, visible: np.ndarray) -> tuple[list[Trace], ColorAxisLayout | None]:
    """Split a layer into traces.

    With a categorical palette there is one trace per category that has a color and at
    least one visible element, so each category gets its own legend entry. Otherwise one
    trace holds every visible element, colored explicitly or through the layer's color axis.
    """
    style = layer.style
    hovers = None if layer.hovers is None else np.asarray(layer.hovers, dtype=object)

    def trace(mask: np.ndarray, **kwargs) -> Trace:
        return Trace(
            kind="markers",
            x=layer.xs[mask],
            y=layer.ys[mask],
            sizes=layer.sizes[mask],
            hovers=None if hovers is None else tuple(hovers[mask].tolist()),
            **kwargs,
        )

    kind = color_kind(layer.colors)
    if kind is not None and style.palette_kind == "categorical":
        names = color_names(layer.colors)
        traces: list[Trace] = []
        for label, color in style.color_palette:  # type: ignore[union-attr]
            if color == "":
                continue
            mask = visible & (names == label)
            if not np.any(mask):
                continue
            traces.append(
                trace(
                    mask,
                    name=label,
                    color=color,
                    legend_group=layer.group,
                    legend_group_title=layer.colors_title if not traces else None,
                    show_legend=style.color_scale.show_scale,
                )
            )
        return traces, None

    if not np.any(visible):
        return [], None

    if kind == "numeric":
        numbers = color_numbers(layer.colors)
        palette = style.color_palette if style.color_palette is not None else DEFAULT_COLOR_PALETTE
        scale = normalize_color_palette(
            palette,
            style.color_scale,
            data_minimum=float(np.nanmin(numbers)),
            data_maximum=float(np.nanmax(numbers)),
        )
        tick_values = tick_labels = None
        if style.color_scale.is_log and style.color_scale.show_scale:
            ticks = log_ticks(numbers, style.color_scale)
            if ticks.positions:
                tick_values, tick_labels = ticks.positions, ticks.labels
        color_axis = ColorAxisLayout(
            name=layer.coloraxis,
            stops=scale.stops,
            cmin=scale.cmin,
            cmax=scale.cmax,
            show_scale=style.color_scale.show_scale,
            title=layer.colors_title,
            tick_values=tick_values,
            tick_labels=tick_labels,
        )
        values = color_scale_values(numbers, style.color_scale)
        return [trace(visible, name=layer.group, colors=values[visible], coloraxis=layer.coloraxis)], color_axis

    if kind == "named":
        return [trace(visible, name=layer.group, colors=color_names(layer.colors)[visible])], None
    return [trace(visible, name=layer.group, color=style.color or layer.default_color)], None
