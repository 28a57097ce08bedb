from __future__ import annotations

import numpy as np

from luvatrix_graphs.configuration import (
    DistributionGraphConfiguration,
    DistributionsGraphConfiguration,
    ValuesOrientation,
)
from luvatrix_graphs.data import DistributionGraphData, DistributionsGraphData
from luvatrix_graphs.figure import AxisLayout, Figure, Layout, Trace
from luvatrix_graphs.render.common import axis_layout, figure_layout, make_figure, plotted_bounds, shift


def _distribution_trace(
    values: np.ndarray,
    configuration: DistributionGraphConfiguration,
    *,
    name: str | None,
    color: str | None,
    show_legend: bool = False,
) -> Trace:
    """A box, or a violin (a curve is its positive half) with an optional box inside."""
    distribution = configuration.distribution
    values = shift(values, configuration.value_axis)
    vertical = configuration.orientation == ValuesOrientation.VERTICAL
    common = dict(
        x=None if vertical else values,
        y=values if vertical else None,
        name=name,
        color=color or distribution.color,
        orientation="v" if vertical else "h",
        show_outliers=distribution.show_outliers,
        show_legend=show_legend,
    )
    if distribution.show_violin or distribution.show_curve:
        return Trace(
            kind="violin",
            side="positive" if distribution.show_curve else "both",
            show_box=distribution.show_box,
            **common,
        )
    return Trace(kind="box", **common)


def _distributions_layout(
    configuration: DistributionGraphConfiguration,
    values: list[np.ndarray],
    *,
    graph_title: str | None,
    value_axis_title: str | None,
    trace_axis_title: str | None,
    **kwargs,
) -> Layout:
    figure = configuration.figure
    value_axis = axis_layout(value_axis_title, configuration.value_axis, figure, plotted_bounds(values, configuration.value_axis))
    trace_axis = AxisLayout(title=trace_axis_title, show_grid=False, show_ticks=figure.show_ticks)
    vertical = configuration.orientation == ValuesOrientation.VERTICAL
    return figure_layout(
        figure,
        title=graph_title,
        x_axis=trace_axis if vertical else value_axis,
        y_axis=value_axis if vertical else trace_axis,
        **kwargs,
    )


def render_distribution(data: DistributionGraphData, configuration: DistributionGraphConfiguration) -> Figure:
    trace = _distribution_trace(data.values, configuration, name=data.name, color=None)
    layout = _distributions_layout(
        configuration,
        [data.values],
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        trace_axis_title=data.trace_axis_title,
    )
    return make_figure([trace], layout, configuration.figure)


def render_distributions(data: DistributionsGraphData, configuration: DistributionsGraphConfiguration) -> Figure:
    traces = [
        _distribution_trace(
            values,
            configuration,
            name=None if data.names is None else data.names[index],
            color=None if data.colors is None else data.colors[index],
            show_legend=configuration.show_legend,
        )
        for index, values in enumerate(data.values)
        if data.colors is None or data.colors[index] != ""
    ]
    mode = "overlay" if configuration.overlay else "group"
    layout = _distributions_layout(
        configuration,
        list(data.values),
        graph_title=data.graph_title,
        value_axis_title=data.value_axis_title,
        trace_axis_title=data.trace_axis_title,
        show_legend=configuration.show_legend,
        legend_title=data.legend_title,
        box_mode=mode,
        violin_mode=mode,
    )
    return make_figure(traces, layout, configuration.figure)
