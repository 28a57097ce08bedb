from __future__ import annotations

import logging
from collections.abc import Callable

from luvatrix_graphs.figure import Figure
from luvatrix_graphs.graph import Graph, GraphKind
from luvatrix_graphs.render.bars import render_bar, render_bars
from luvatrix_graphs.render.distributions import render_distribution, render_distributions
from luvatrix_graphs.render.lines import render_cdf, render_cdfs, render_line, render_lines
from luvatrix_graphs.render.points import render_grid, render_points

LOGGER = logging.getLogger(__name__)

_RENDERERS: dict[GraphKind, Callable[..., Figure]] = {
    GraphKind.POINTS: render_points,
    GraphKind.GRID: render_grid,
    GraphKind.LINE: render_line,
    GraphKind.LINES: render_lines,
    GraphKind.CDF: render_cdf,
    GraphKind.CDFS: render_cdfs,
    GraphKind.BAR: render_bar,
    GraphKind.BARS: render_bars,
    GraphKind.DISTRIBUTION: render_distribution,
    GraphKind.DISTRIBUTIONS: render_distributions,
}


def render_graph(graph: Graph) -> Figure:
    """Build the traces and layout of an already validated graph."""
    kind = graph.kind
    figure = _RENDERERS[kind](graph.data, graph.configuration)
    LOGGER.debug("rendered %s graph: %d traces", kind.value, len(figure.traces))
    return figure


__all__ = ["render_graph"]
