from __future__ import annotations

import numpy as np

from luvatrix_graphs.configuration import BarGraphConfiguration, BarsGraphConfiguration, ValuesOrientation
from luvatrix_graphs.data import BarGraphData, BarsGraphData
from luvatrix_graphs.figure import AxisLayout, Figure, Layout, Trace
from luvatrix_graphs.render.common import axis_layout, figure_layout, make_figure, plotted_bounds, shift
from luvatrix_graphs.series import normalize_stacked


def _bar_positions(names: tuple[str, ...] | None, count: int) -> np.ndarray:
    if names is not None:
        return np.asarray(names, dtype=object)
    return np.arange(count, dtype=np.float64)


def _bar_trace(
    positions: np.ndarray,
    values: np.ndarray,
    configuration: BarGraphConfiguration,
    **kwargs,
) -> Trace:
    vertical = configuration.orientation == ValuesOrientation.VERTICAL
    return Trace(
        kind="bar",
        x=positions if vertical else values,
        y=values if vertical else positions,
        orientation="v" if vertical else "h",
        **kwargs,
    )


def _bars_layout(
    configuration: BarGraphConfiguration,
    values: list[np.ndarray],
    *,
    graph_title: str | None,
    value_axis_title: str | None,
    bar_axis_title: str | None,
    **kwargs,
) -> Layout:
    figure = configuration.figure
    value_axis = axis_layout(
        value_axis_title,
        configuration.value_axis,
        figure,
        plotted_bounds(values, configuration.value_axis),
    )
    bar_axis = AxisLayout(title=bar_axis_title, show_grid=False, show_ticks=figure.show_ticks)
    vertical = configuration.orientation == ValuesOrientation.VERTICAL
    return figure_layout(
        figure,
        title=graph_title,
        x_axis=bar_axis if vertical else value_axis,
        y_axis=value_axis if vertical else bar_axis,
        bar_gap=configuration.bar_gap,
        **kwargs,
    )


def render_bar(data: BarGraphData, configuration: BarGraphConfiguration) -> Figure:
    """One bar per value; bars whose color is empty are left out."""
    count = int(data.values.size)
    mask = np.ones(count, dtype=bool)
    if data.colors is not None:
        mask = np.asarray([color != "" for color in data.colors], dtype=bool)
    colors = None if data.colors is None else tuple(np.asarray(data.colors, dtype=object)[mask].tolist())
    hovers = None if data.hovers is None else tuple(np.asarray(data.hovers, dtype=object)[mask].tolist())
    trace = _bar_trace(
        _bar_positions(data.names, count)[mask],
        shift(data.values, configuration.value_axis)[mask],
        configuration,
        color=configuration.color,
        colors=colors,
        hovers=hovers,
    )
    layout = _bars_layout(
        configuration,
        [data.values],
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        bar_axis_title=data.bar_axis_title,
    )
    return make_figure([trace], layout, configuration.figure)


def render_bars(data: BarsGraphData, configuration: BarsGraphConfiguration) -> Figure:
    """One trace per shown series, grouped side by side, or stacked when `stacking` is set.

    Series with an empty color are hidden and take no share of a stack.
    """
    shown = [index for index in range(len(data.values)) if data.colors is None or data.colors[index] != ""]
    values = [data.values[index] for index in shown]
    if configuration.stacking is not None and values:
        values = list(normalize_stacked(values, configuration.stacking))
    positions = _bar_positions(data.bar_names, data.bars_count)

    traces: list[Trace] = []
    for index, series in zip(shown, values):
        color = None if data.colors is None else data.colors[index]
        traces.append(
            _bar_trace(
                positions,
                shift(series, configuration.value_axis),
                configuration,
                name=None if data.names is None else data.names[index],
                color=color or configuration.color,
                hovers=None if data.hovers is None else (data.hovers[index],) * series.size,
                show_legend=configuration.show_legend,
            )
        )

    stacked = values or [np.zeros(data.bars_count)]
    if configuration.stacking is not None and values:
        stacked = [np.sum(np.vstack(values), axis=0), np.zeros(data.bars_count)]
    layout = _bars_layout(
        configuration,
        stacked,
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        bar_axis_title=data.bar_axis_title,
        bar_mode="stack" if configuration.stacking is not None else "group",
        show_legend=configuration.show_legend,
        legend_title=data.legend_title,
    )
    return make_figure(traces, layout, configuration.figure)
