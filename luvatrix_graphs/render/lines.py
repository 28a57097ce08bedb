from __future__ import annotations

import numpy as np

from luvatrix_graphs.bands import axis_band_shapes
from luvatrix_graphs.configuration import (
    CdfGraphConfiguration,
    CdfsGraphConfiguration,
    LineGraphConfiguration,
    LinesGraphConfiguration,
    ValuesOrientation,
)
from luvatrix_graphs.data import CdfGraphData, CdfsGraphData, LineGraphData, LinesGraphData
from luvatrix_graphs.figure import AxisLayout, Figure, Layout, Trace
from luvatrix_graphs.render.common import axis_layout, band_traces, figure_layout, make_figure, plotted_bounds, shift
from luvatrix_graphs.series import cdf_fractions, stack_series, unify


def _lines_bands(
    configuration: LineGraphConfiguration, xs: list[np.ndarray], ys: list[np.ndarray]
) -> tuple[list[Trace], list[Trace], tuple[float, float], tuple[float, float]]:
    x_bounds = plotted_bounds(xs, configuration.x_axis)
    y_bounds = plotted_bounds(ys, configuration.y_axis)
    fills, lines = band_traces(
        (
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
        )
    )
    return fills, lines, x_bounds, y_bounds


def render_line(data: LineGraphData, configuration: LineGraphConfiguration) -> Figure:
    line = configuration.line
    trace = Trace(
        kind="line",
        x=shift(data.xs, configuration.x_axis),
        y=shift(data.ys, configuration.y_axis),
        color=line.color,
        width=line.width,
        is_dashed=line.is_dashed,
        fill="tozeroy" if line.is_filled else None,
    )
    fills, lines, x_bounds, y_bounds = _lines_bands(configuration, [data.xs], [data.ys])
    layout = figure_layout(
        configuration.figure,
        title=data.graph_title,
        x_axis=axis_layout(data.x_axis_title, configuration.x_axis, configuration.figure, x_bounds),
        y_axis=axis_layout(data.y_axis_title, configuration.y_axis, configuration.figure, y_bounds),
    )
    return make_figure([*fills, trace, *lines], layout, configuration.figure)


def render_lines(data: LinesGraphData, configuration: LinesGraphConfiguration) -> Figure:
    """Draw several lines; with stacking, each line sits on top of the previous visible one."""
    style = configuration.line
    shown = [index for index in range(data.lines_count) if data.colors is None or data.colors[index] != ""]
    xs = [data.xs[index] for index in shown]
    ys = [data.ys[index] for index in shown]
    if configuration.stacking is not None and shown:
        unified_xs, unified_ys = unify(xs, ys)
        xs = [unified_xs] * len(shown)
        ys = list(stack_series(unified_ys, configuration.stacking))

    traces: list[Trace] = []
    for position, index in enumerate(shown):
        width = style.width if data.widths is None else float(data.widths[index])
        is_filled = style.is_filled if data.fill_belows is None else data.fill_belows[index]
        fill = None
        if is_filled:
            fill = "tonexty" if configuration.stacking is not None and position > 0 else "tozeroy"
        traces.append(
            Trace(
                kind="line",
                x=shift(xs[position], configuration.x_axis),
                y=shift(ys[position], configuration.y_axis),
                name=None if data.names is None else data.names[index],
                color=(data.colors[index] if data.colors is not None else None) or style.color,
                width=width,
                is_dashed=style.is_dashed if data.are_dashed is None else data.are_dashed[index],
                fill=fill,
                show_legend=configuration.show_legend,
            )
        )

    fills, lines, x_bounds, y_bounds = _lines_bands(configuration, xs or list(data.xs), ys or list(data.ys))
    layout = figure_layout(
        configuration.figure,
        title=data.graph_title,
        x_axis=axis_layout(data.x_axis_title, configuration.x_axis, configuration.figure, x_bounds),
        y_axis=axis_layout(data.y_axis_title, configuration.y_axis, configuration.figure, y_bounds),
        show_legend=configuration.show_legend,
        legend_title=data.legend_title,
    )
    return make_figure([*fills, *traces, *lines], layout, configuration.figure)


def _cdf_trace(
    values: np.ndarray,
    configuration: CdfGraphConfiguration,
    *,
    name: str | None = None,
    color: str | None = None,
    show_legend: bool = False,
) -> Trace:
    ordered, fractions = cdf_fractions(values, configuration.direction)
    if configuration.show_percent:
        fractions = fractions * 100.0
    ordered = shift(ordered, configuration.value_axis)
    line = configuration.line
    horizontal = configuration.orientation == ValuesOrientation.HORIZONTAL
    return Trace(
        kind="line",
        x=ordered if horizontal else fractions,
        y=fractions if horizontal else ordered,
        name=name,
        color=color or line.color,
        width=line.width,
        is_dashed=line.is_dashed,
        fill=("tozeroy" if horizontal else "tozerox") if line.is_filled else None,
        show_legend=show_legend,
    )


def _cdf_layout(
    configuration: CdfGraphConfiguration,
    values: list[np.ndarray],
    *,
    graph_title: str | None,
    value_axis_title: str | None,
    fraction_axis_title: str | None,
    **kwargs,
) -> Layout:
    figure = configuration.figure
    value_axis = axis_layout(
        value_axis_title,
        configuration.value_axis,
        figure,
        plotted_bounds(values, configuration.value_axis),
    )
    fraction_axis = AxisLayout(
        title=fraction_axis_title,
        range=(0.0, 100.0 if configuration.show_percent else 1.0),
        show_grid=figure.show_grid,
        show_ticks=figure.show_ticks,
    )
    horizontal = configuration.orientation == ValuesOrientation.HORIZONTAL
    return figure_layout(
        figure,
        title=graph_title,
        x_axis=value_axis if horizontal else fraction_axis,
        y_axis=fraction_axis if horizontal else value_axis,
        **kwargs,
    )


def render_cdf(data: CdfGraphData, configuration: CdfGraphConfiguration) -> Figure:
    layout = _cdf_layout(
        configuration,
        [data.values],
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        fraction_axis_title=data.fraction_axis_title,
    )
    return make_figure([_cdf_trace(data.values, configuration)], layout, configuration.figure)


def render_cdfs(data: CdfsGraphData, configuration: CdfsGraphConfiguration) -> Figure:
    traces = [
        _cdf_trace(
            values,
            configuration,
            name=None if data.names is None else data.names[index],
            color=None if data.colors is None else data.colors[index],
            show_legend=configuration.show_legend,
        )
        for index, values in enumerate(data.values)
        if data.colors is None or data.colors[index] != ""
    ]
    layout = _cdf_layout(
        configuration,
        list(data.values),
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        fraction_axis_title=data.fraction_axis_title,
        show_legend=configuration.show_legend,
        legend_title=data.legend_title,
    )
    return make_figure(traces, layout, configuration.figure)


