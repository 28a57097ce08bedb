"""Draw-ready output of a render call.

A `Figure` is a list of `Trace`s, in drawing order, plus a `Layout`. Neither knows about
the configuration that produced it. `Figure.to_plotly` builds them into plotly graph
objects, which check every property, and `Figure.to_dict` returns the resulting
`{"data": [...], "layout": {...}}` pair.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Literal

import numpy as np
import plotly.graph_objects as go


TraceKind = Literal["fill", "line", "markers", "bar", "box", "violin"]
Orientation = Literal["v", "h"]

_PLOTLY_TRACES = {"scatter": go.Scatter, "bar": go.Bar, "box": go.Box, "violin": go.Violin}


def _values(values: Any) -> Any:
    """Plain JSON-friendly values; NaN (used to break lines) becomes `None`."""
    if values is None:
        return None
    if isinstance(values, np.ndarray):
        values = values.tolist()
    if isinstance(values, (list, tuple)):
        return [None if isinstance(value, float) and math.isnan(value) else value for value in values]
    return values


def _prune(mapping: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in mapping.items() if value is not None}


@dataclass(frozen=True)
class Trace:
    """One drawable primitive.

    `color` is a single color for the whole trace; `colors` are per-element, either color
    names or numbers placed on the color axis `coloraxis`. `sizes` are marker diameters in
    pixels, `width` is a line width.
    """

    kind: TraceKind
    x: Any = None
    y: Any = None
    name: str | None = None
    color: str | None = None
    colors: Any = None
    sizes: Any = None
    width: float | None = None
    is_dashed: bool = False
    fill: str | None = None
    hovers: tuple[str, ...] | None = None
    coloraxis: str | None = None
    legend_group: str | None = None
    legend_group_title: str | None = None
    show_legend: bool = False
    orientation: Orientation | None = None
    side: Literal["both", "positive"] | None = None
    show_box: bool = False
    show_outliers: bool = False

    @property
    def size(self) -> int:
        return 0 if self.x is None else len(self.x)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = _prune(
            {
                "name": self.name,
                "x": _values(self.x),
                "y": _values(self.y),
                "legendgroup": self.legend_group,
                "orientation": self.orientation,
            }
        )
        out["showlegend"] = self.show_legend
        if self.legend_group_title is not None:
            out["legendgrouptitle"] = {"text": self.legend_group_title}
        if self.hovers is not None:
            out["text"] = list(self.hovers)
            out["hoverinfo"] = "text"

        if self.kind == "fill":
            out.update(type="scatter", mode="none", fill=self.fill or "toself", fillcolor=self.color)
        elif self.kind == "line":
            line = _prune({"color": self.color, "width": self.width if self.width is not None else 0})
            if self.is_dashed:
                line["dash"] = "dash"
            out.update(_prune({"type": "scatter", "mode": "lines", "line": line, "fill": self.fill}))
            if self.fill is not None and self.color is not None:
                out["fillcolor"] = self.color
        elif self.kind == "markers":
            marker = _prune(
                {
                    "color": _values(self.colors) if self.colors is not None else self.color,
                    "size": _values(self.sizes),
                    "coloraxis": self.coloraxis,
                }
            )
            out.update(type="scatter", mode="markers", marker=marker)
        elif self.kind == "bar":
            out.update(type="bar", marker=_prune({"color": _values(self.colors) if self.colors is not None else self.color}))
        elif self.kind == "box":
            out.update(
                _prune(
                    {
                        "type": "box",
                        "marker": _prune({"color": self.color}),
                        "boxpoints": "outliers" if self.show_outliers else False,
                    }
                )
            )
        else:
            out.update(
                type="violin",
                side=self.side or "both",
                box={"visible": self.show_box},
                points="outliers" if self.show_outliers else False,
                marker=_prune({"color": self.color}),
            )
            if self.color is not None:
                out["line"] = {"color": self.color}
        return out


@dataclass(frozen=True)
class AxisLayout:
    """One x or y axis. `range` is in data coordinates even on a log axis."""

    title: str | None = None
    is_log: bool = False
    range: tuple[float, float] | None = None
    tick_values: tuple[Any, ...] | None = None
    tick_labels: tuple[str, ...] | None = None
    show_grid: bool = True
    show_ticks: bool = True
    is_reversed: bool = False

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": "log" if self.is_log else "linear",
            "showgrid": self.show_grid,
            "showticklabels": self.show_ticks,
            "ticks": "outside" if self.show_ticks else "",
        }
        if self.title is not None:
            out["title"] = {"text": self.title}
        if self.range is not None:
            low, high = self.range
            if self.is_log:
                low, high = math.log10(low), math.log10(high)
            out["range"] = [high, low] if self.is_reversed else [low, high]
        elif self.is_reversed:
            out["autorange"] = "reversed"
        if self.tick_values is not None:
            out["tickmode"] = "array"
            out["tickvals"] = list(self.tick_values)
            if self.tick_labels is not None:
                out["ticktext"] = list(self.tick_labels)
        return out


@dataclass(frozen=True)
class ColorAxisLayout:
    """A color bar: the gradient of numeric colors on one color axis."""

    name: str
    stops: tuple[tuple[float, str], ...]
    cmin: float
    cmax: float
    show_scale: bool = False
    title: str | None = None
    tick_values: tuple[float, ...] | None = None
    tick_labels: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        colorbar: dict[str, Any] = {}
        if self.title is not None:
            colorbar["title"] = {"text": self.title}
        if self.tick_values is not None:
            colorbar.update(tickmode="array", tickvals=list(self.tick_values), ticktext=list(self.tick_labels or ()))
        out: dict[str, Any] = {
            "colorscale": [[position, color] for position, color in self.stops],
            "cmin": self.cmin,
            "cmax": self.cmax,
            "showscale": self.show_scale,
        }
        if colorbar:
            out["colorbar"] = colorbar
        return out


@dataclass(frozen=True)
class Layout:
    title: str | None = None
    x_axis: AxisLayout = field(default_factory=AxisLayout)
    y_axis: AxisLayout = field(default_factory=AxisLayout)
    show_legend: bool = False
    legend_title: str | None = None
    color_axes: tuple[ColorAxisLayout, ...] = ()
    width: int | None = None
    height: int | None = None
    template: str | None = None
    bar_mode: str | None = None
    bar_gap: float | None = None
    box_mode: str | None = None
    violin_mode: str | None = None

    def color_axis(self, name: str) -> ColorAxisLayout | None:
        for axis in self.color_axes:
            if axis.name == name:
                return axis
        return None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = _prune(
            {
                "width": self.width,
                "height": self.height,
                "template": self.template,
                "barmode": self.bar_mode,
                "bargap": self.bar_gap,
                "boxmode": self.box_mode,
                "violinmode": self.violin_mode,
            }
        )
        if self.title is not None:
            out["title"] = {"text": self.title}
        out["xaxis"] = self.x_axis.to_dict()
        out["yaxis"] = self.y_axis.to_dict()
        out["showlegend"] = self.show_legend
        if self.legend_title is not None:
            out["legend"] = {"title": {"text": self.legend_title}}
        for axis in self.color_axes:
            out[axis.name] = axis.to_dict()
        return out


@dataclass(frozen=True)
class Figure:
    """Traces in drawing order and their layout.

    `output_file` and `show_interactive` are carried through from the configuration for
    the backend that actually draws the figure.
    """

    traces: tuple[Trace, ...]
    layout: Layout
    output_file: str | None = None
    show_interactive: bool = False

    def traces_of(self, kind: TraceKind) -> tuple[Trace, ...]:
        return tuple(trace for trace in self.traces if trace.kind == kind)

    def to_dict(self) -> dict[str, Any]:
        return self.to_plotly().to_plotly_json()

    def to_plotly(self) -> go.Figure:
        """Build plotly graph objects; plotly raises `ValueError` on any property it does not know."""
        data = []
        for trace in self.traces:
            properties = trace.to_dict()
            data.append(_PLOTLY_TRACES[properties.pop("type")](**properties))
        return go.Figure(data=data, layout=self.layout.to_dict())
