from __future__ import annotations

import numpy as np

from luvatrix_graphs.bands import LINEAR_OPERATIONS, LOG_OPERATIONS, BandShapes, axis_band_shapes, diagonal_band_shapes
from luvatrix_graphs.colors import NamedColor, color_kind
from luvatrix_graphs.configuration import (
    DEFAULT_BORDER_SIZE,
    DEFAULT_EDGE_WIDTH,
    DEFAULT_POINT_SIZE,
    GridGraphConfiguration,
    PointsConfiguration,
    PointsGraphConfiguration,
)
from luvatrix_graphs.data import GridGraphData, PointsGraphData
from luvatrix_graphs.figure import AxisLayout, ColorAxisLayout, Figure, Trace
from luvatrix_graphs.render.common import (
    BORDERS_COLOR_AXIS,
    PRIMARY_COLOR_AXIS,
    MarkersLayer,
    axis_layout,
    band_traces,
    figure_layout,
    make_figure,
    markers_traces,
    plotted_bounds,
    shift,
    visibility_mask,
)
from luvatrix_graphs.scales import normalize_sizes


DEFAULT_POINT_COLOR = "#1f77b4"
DEFAULT_BORDER_COLOR = "black"
DEFAULT_EDGE_COLOR = "darkgrey"


def _layer_sizes(sizes: np.ndarray | None, style: PointsConfiguration, count: int, default: float) -> np.ndarray:
    if sizes is None:
        return np.full(count, style.size if style.size is not None else default, dtype=np.float64)
    return normalize_sizes(sizes, style.size_scale, style.size_range)


def _has_borders(border_colors: object, border_sizes: object, style: PointsConfiguration) -> bool:
    return border_colors is not None or border_sizes is not None or style.color is not None or style.size is not None


def _markers_layers(
    *,
    xs: np.ndarray,
    ys: np.ndarray,
    colors,
    sizes: np.ndarray | None,
    hovers,
    border_colors,
    border_sizes: np.ndarray | None,
    points: PointsConfiguration,
    borders: PointsConfiguration,
    points_colors_title: str | None,
    borders_colors_title: str | None,
) -> tuple[list[Trace], list[Trace], list[ColorAxisLayout]]:
    """Traces of the borders (drawn first) and of the points, and their color axes."""
    count = xs.size
    point_sizes = _layer_sizes(sizes, points, count, DEFAULT_POINT_SIZE)
    visible = visibility_mask(point_sizes, colors)
    color_axes: list[ColorAxisLayout] = []

    points_traces, points_axis = markers_traces(
        MarkersLayer(
            group="points",
            xs=xs,
            ys=ys,
            sizes=point_sizes,
            colors=colors,
            hovers=hovers,
            style=points,
            default_color=DEFAULT_POINT_COLOR,
            coloraxis=PRIMARY_COLOR_AXIS,
            colors_title=points_colors_title,
        ),
        visible,
    )
    if points_axis is not None:
        color_axes.append(points_axis)

    borders_traces: list[Trace] = []
    if _has_borders(border_colors, border_sizes, borders):
        widths = _layer_sizes(border_sizes, borders, count, DEFAULT_BORDER_SIZE)
        border_visible = visible & visibility_mask(widths, border_colors)
        borders_traces, borders_axis = markers_traces(
            MarkersLayer(
                group="borders",
                xs=xs,
                ys=ys,
                sizes=point_sizes + 2.0 * widths,
                colors=border_colors,
                hovers=hovers,
                style=borders,
                default_color=DEFAULT_BORDER_COLOR,
                coloraxis=BORDERS_COLOR_AXIS,
                colors_title=borders_colors_title,
            ),
            border_visible,
        )
        if borders_axis is not None:
            color_axes.append(borders_axis)
    return borders_traces, points_traces, color_axes


def edges_traces(
    xs: np.ndarray,
    ys: np.ndarray,
    edges: tuple[tuple[int, int], ...],
    colors,
    sizes: np.ndarray | None,
    style: PointsConfiguration,
    colors_title: str | None = None,
) -> list[Trace]:
    """One line trace per (color, width) group of edges, segments separated by NaN.

    With a categorical palette edges are grouped by category (in palette order) and each
    category gets one legend entry.
    """
    count = len(edges)
    widths = _layer_sizes(sizes, style, count, DEFAULT_EDGE_WIDTH)
    categorical = color_kind(colors) is not None and style.palette_kind == "categorical"
    palette = dict(style.color_palette) if categorical else {}  # type: ignore[arg-type]
    order = {label: index for index, (label, _color) in enumerate(style.color_palette or ())} if categorical else {}

    groups: dict[tuple[str | None, str, float], list[int]] = {}
    for index in range(count):
        label: str | None = None
        value = colors[index] if colors is not None else None
        if categorical:
            if not isinstance(value, NamedColor):
                continue
            label = value.name
            color = palette[label]
        elif isinstance(value, NamedColor):
            color = value.name
        elif colors is not None and value is not None:
            continue
        else:
            color = style.color or DEFAULT_EDGE_COLOR
        width = float(widths[index])
        if color == "" or not width > 0:
            continue
        groups.setdefault((label, color, width), []).append(index)

    keys = sorted(groups, key=lambda key: order.get(key[0], 0)) if categorical else list(groups)
    traces: list[Trace] = []
    labeled: set[str] = set()
    for label, color, width in keys:
        segment_xs: list[float] = []
        segment_ys: list[float] = []
        for index in groups[(label, color, width)]:
            source, target = edges[index]
            if segment_xs:
                segment_xs.append(np.nan)
                segment_ys.append(np.nan)
            segment_xs.extend((float(xs[source]), float(xs[target])))
            segment_ys.extend((float(ys[source]), float(ys[target])))
        first_of_label = label is not None and label not in labeled
        if label is not None:
            labeled.add(label)
        traces.append(
            Trace(
                kind="line",
                x=np.asarray(segment_xs),
                y=np.asarray(segment_ys),
                name=label if label is not None else "edges",
                color=color,
                width=width,
                legend_group=None if label is None else f"edges:{label}",
                legend_group_title=colors_title if first_of_label and len(labeled) == 1 else None,
                show_legend=first_of_label and style.color_scale.show_scale,
            )
        )
    return traces


def render_points(data: PointsGraphData, configuration: PointsGraphConfiguration) -> Figure:
    xs = shift(data.xs, configuration.x_axis)
    ys = shift(data.ys, configuration.y_axis)

    borders, points, color_axes = _markers_layers(
        xs=xs,
        ys=ys,
        colors=data.colors,
        sizes=data.sizes,
        hovers=data.hovers,
        border_colors=data.border_colors,
        border_sizes=data.border_sizes,
        points=configuration.points,
        borders=configuration.borders,
        points_colors_title=data.points_colors_title,
        borders_colors_title=data.borders_colors_title,
    )
    edges: list[Trace] = []
    if data.edges is not None:
        edges = edges_traces(
            xs, ys, data.edges, data.edges_colors, data.edges_sizes, configuration.edges, data.edges_colors_title
        )

    x_bounds = plotted_bounds((data.xs,), configuration.x_axis)
    y_bounds = plotted_bounds((data.ys,), configuration.y_axis)
    shapes: list[BandShapes] = [
        axis_band_shapes(
            configuration.vertical_bands,
            vertical=True,
            minimum=x_bounds[0],
            maximum=x_bounds[1],
            cross_minimum=y_bounds[0],
            cross_maximum=y_bounds[1],
            shift=configuration.x_axis.log_regularization or 0.0,
        ),
        axis_band_shapes(
            configuration.horizontal_bands,
            vertical=False,
            minimum=y_bounds[0],
            maximum=y_bounds[1],
            cross_minimum=x_bounds[0],
            cross_maximum=x_bounds[1],
            shift=configuration.y_axis.log_regularization or 0.0,
        ),
    ]
    if configuration.diagonal_bands.has_bands:
        low = min(x_bounds[0], y_bounds[0])
        high = max(x_bounds[1], y_bounds[1])
        if high > low:
            operations = LOG_OPERATIONS if configuration.x_axis.is_log else LINEAR_OPERATIONS
            shapes.append(diagonal_band_shapes(configuration.diagonal_bands, minimum=low, maximum=high, operations=operations))
    fills, lines = band_traces(shapes)

    data_traces = [*borders, *points, *edges] if configuration.edges_over_points else [*edges, *borders, *points]
    traces = [*fills, *data_traces, *lines]
    layout = figure_layout(
        configuration.figure,
        title=data.graph_title,
        x_axis=axis_layout(data.x_axis_title, configuration.x_axis, configuration.figure, x_bounds),
        y_axis=axis_layout(data.y_axis_title, configuration.y_axis, configuration.figure, y_bounds),
        show_legend=any(trace.show_legend for trace in traces),
        color_axes=tuple(color_axes),
    )
    return make_figure(traces, layout, configuration.figure)


def render_grid(data: GridGraphData, configuration: GridGraphConfiguration) -> Figure:
    """Cells are drawn at (column, row), with row 0 at the top."""
    rows, columns = data.shape
    xs = np.tile(np.arange(columns, dtype=np.float64), rows)
    ys = np.repeat(np.arange(rows, dtype=np.float64), columns)

    borders, points, color_axes = _markers_layers(
        xs=xs,
        ys=ys,
        colors=data.flat_colors,
        sizes=data.flat_sizes,
        hovers=data.flat_hovers,
        border_colors=data.flat_border_colors,
        border_sizes=data.flat_border_sizes,
        points=configuration.points,
        borders=configuration.borders,
        points_colors_title=data.points_colors_title,
        borders_colors_title=data.borders_colors_title,
    )
    traces = [*borders, *points]
    figure = configuration.figure
    layout = figure_layout(
        figure,
        title=data.graph_title,
        x_axis=AxisLayout(
            title=data.x_axis_title,
            range=(-0.5, columns - 0.5),
            tick_values=tuple(range(columns)) if data.columns_names is not None else None,
            tick_labels=data.columns_names,
            show_grid=False,
            show_ticks=figure.show_ticks,
        ),
        y_axis=AxisLayout(
            title=data.y_axis_title,
            range=(-0.5, rows - 0.5),
            tick_values=tuple(range(rows)) if data.rows_names is not None else None,
            tick_labels=data.rows_names,
            show_grid=False,
            show_ticks=figure.show_ticks,
            is_reversed=True,
        ),
        show_legend=any(trace.show_legend for trace in traces),
        color_axes=tuple(color_axes),
    )
    return make_figure(traces, layout, figure)
