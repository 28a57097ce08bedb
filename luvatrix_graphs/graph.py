from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np

from luvatrix_graphs.colors import ColorValue, NamedColor, NumericColor, color_kind, is_valid_color
from luvatrix_graphs.configuration import (
    AxisConfiguration,
    BarGraphConfiguration,
    BarsGraphConfiguration,
    CdfGraphConfiguration,
    CdfsGraphConfiguration,
    DistributionGraphConfiguration,
    DistributionsGraphConfiguration,
    GraphConfiguration,
    GridGraphConfiguration,
    LineGraphConfiguration,
    LinesGraphConfiguration,
    PointsConfiguration,
    PointsGraphConfiguration,
    Stacking,
)
from luvatrix_graphs.data import (
    BarGraphData,
    BarsGraphData,
    CdfGraphData,
    CdfsGraphData,
    DistributionGraphData,
    DistributionsGraphData,
    GraphData,
    GridGraphData,
    LineGraphData,
    LinesGraphData,
    PointsGraphData,
)
from luvatrix_graphs.validation import (
    ObjectWithValidation,
    field_path,
    first_message,
    validate_children,
    validate_open_bounds,
)


class GraphKind(str, Enum):
    POINTS = "points"
    GRID = "grid"
    LINE = "line"
    LINES = "lines"
    CDF = "cdf"
    CDFS = "cdfs"
    BAR = "bar"
    BARS = "bars"
    DISTRIBUTION = "distribution"
    DISTRIBUTIONS = "distributions"


_KIND_TYPES: dict[GraphKind, tuple[type[GraphData], type[GraphConfiguration]]] = {
    GraphKind.POINTS: (PointsGraphData, PointsGraphConfiguration),
    GraphKind.GRID: (GridGraphData, GridGraphConfiguration),
    GraphKind.LINE: (LineGraphData, LineGraphConfiguration),
    GraphKind.LINES: (LinesGraphData, LinesGraphConfiguration),
    GraphKind.CDF: (CdfGraphData, CdfGraphConfiguration),
    GraphKind.CDFS: (CdfsGraphData, CdfsGraphConfiguration),
    GraphKind.BAR: (BarGraphData, BarGraphConfiguration),
    GraphKind.BARS: (BarsGraphData, BarsGraphConfiguration),
    GraphKind.DISTRIBUTION: (DistributionGraphData, DistributionGraphConfiguration),
    GraphKind.DISTRIBUTIONS: (DistributionsGraphData, DistributionsGraphConfiguration),
}


def graph_kind(data: GraphData) -> GraphKind:
    for kind, (data_type, _configuration_type) in _KIND_TYPES.items():
        if type(data) is data_type:
            return kind
    raise TypeError(f"unsupported graph data type: {type(data).__name__}")


def default_configuration(kind: GraphKind) -> GraphConfiguration:
    return _KIND_TYPES[kind][1]()


def _validate_log_values(
    path: str, name: str, values: np.ndarray, axis_path: str, axis: AxisConfiguration
) -> str | None:
    if not axis.is_log:
        return None
    regularization = axis.log_regularization
    bad = np.flatnonzero(~(values + regularization > 0))
    if bad.size:
        index = int(bad[0])
        return (
            f"non-positive log {field_path(path, name)}[{index}]: {values[index]} "
            f"+ {field_path(axis_path, 'log_regularization')}: {regularization}"
        )
    return None


def _validate_log_vectors(
    path: str, name: str, vectors: Sequence[np.ndarray], axis_path: str, axis: AxisConfiguration
) -> str | None:
    return first_message(
        _validate_log_values(path, f"{name}[{index}]", vector, axis_path, axis) for index, vector in enumerate(vectors)
    )


def validate_layer_colors(
    colors: Sequence[ColorValue] | None, colors_path: str, layer: PointsConfiguration, layer_path: str
) -> str | None:
    """Rules tying per-element data colors to the style of their layer."""
    show_scale_path = field_path(layer_path, "color_scale.show_scale")
    palette_path = field_path(layer_path, "color_palette")
    kind = color_kind(colors)
    if kind is None:
        if layer.color_scale.show_scale:
            return f"no {colors_path} specified for {show_scale_path}"
        return None
    assert colors is not None
    palette_kind = layer.palette_kind
    if kind == "numeric":
        if palette_kind == "categorical":
            return f"numeric {colors_path} specified for categorical {palette_path}"
        if layer.color_scale.is_log:
            regularization = layer.color_scale.log_regularization
            for index, value in enumerate(colors):
                if isinstance(value, NumericColor) and not value.value + regularization > 0:
                    return (
                        f"non-positive log {colors_path}[{index}]: {value.value} "
                        f"+ {field_path(layer_path, 'color_scale.log_regularization')}: {regularization}"
                    )
        if palette_kind == "continuous":
            return None
        # Named palettes take the missing bound from the data.
        numbers = [value.value for value in colors if isinstance(value, NumericColor)]
        return validate_open_bounds(
            field_path(layer_path, "color_scale"),
            layer.color_scale.minimum,
            layer.color_scale.maximum,
            f"numeric {colors_path} value",
            min(numbers),
            max(numbers),
        )
    if palette_kind == "categorical":
        labels = {label for label, _color in layer.color_palette}  # type: ignore[union-attr]
        for index, value in enumerate(colors):
            if isinstance(value, NamedColor) and value.name not in labels:
                return f"{colors_path}[{index}]: {value.name} is not a category of {palette_path}"
        return None
    if palette_kind is not None:
        return f"string {colors_path} specified for continuous {palette_path}"
    if layer.color_scale.show_scale:
        return f"explicit {colors_path} specified for {show_scale_path}"
    for index, value in enumerate(colors):
        if isinstance(value, NamedColor) and not is_valid_color(value.name):
            return f"invalid {colors_path}[{index}]: {value.name}"
    return None


def validate_layer_sizes(sizes: np.ndarray | None, sizes_path: str, layer: PointsConfiguration, layer_path: str) -> str | None:
    if sizes is None or not layer.size_scale.is_log:
        return None
    regularization = layer.size_scale.log_regularization
    for index, size in enumerate(sizes.tolist()):
        if size != 0 and not size + regularization > 0:
            return (
                f"non-positive log {sizes_path}[{index}]: {size} "
                f"+ {field_path(layer_path, 'size_scale.log_regularization')}: {regularization}"
            )
    return None


def _validate_stacked_values(
    path: str, name: str, vectors: Sequence[np.ndarray], stacking: Stacking | None, stacking_path: str
) -> str | None:
    if stacking not in (Stacking.PERCENTS, Stacking.FRACTIONS):
        return None
    for series, vector in enumerate(vectors):
        bad = np.flatnonzero(vector < 0)
        if bad.size:
            index = int(bad[0])
            return f"negative {field_path(path, name)}[{series}][{index}]: {vector[index]} for {stacking_path}: {stacking.value}"
    return None


def _points_rules(data: PointsGraphData, configuration: PointsGraphConfiguration, data_path: str, path: str) -> str | None:
    return first_message(
        (
            _validate_log_values(data_path, "xs", data.xs, field_path(path, "x_axis"), configuration.x_axis),
            _validate_log_values(data_path, "ys", data.ys, field_path(path, "y_axis"), configuration.y_axis),
            validate_layer_colors(data.colors, field_path(data_path, "colors"), configuration.points, field_path(path, "points")),
            validate_layer_sizes(data.sizes, field_path(data_path, "sizes"), configuration.points, field_path(path, "points")),
            validate_layer_colors(
                data.border_colors, field_path(data_path, "border_colors"), configuration.borders, field_path(path, "borders")
            ),
            validate_layer_sizes(
                data.border_sizes, field_path(data_path, "border_sizes"), configuration.borders, field_path(path, "borders")
            ),
            validate_layer_colors(
                data.edges_colors, field_path(data_path, "edges_colors"), configuration.edges, field_path(path, "edges")
            ),
            validate_layer_sizes(
                data.edges_sizes, field_path(data_path, "edges_sizes"), configuration.edges, field_path(path, "edges")
            ),
        )
    )


def _grid_rules(data: GridGraphData, configuration: GridGraphConfiguration, data_path: str, path: str) -> str | None:
    return first_message(
        (
            validate_layer_colors(data.flat_colors, field_path(data_path, "colors"), configuration.points, field_path(path, "points")),
            validate_layer_sizes(data.flat_sizes, field_path(data_path, "sizes"), configuration.points, field_path(path, "points")),
            validate_layer_colors(
                data.flat_border_colors, field_path(data_path, "border_colors"), configuration.borders, field_path(path, "borders")
            ),
            validate_layer_sizes(
                data.flat_border_sizes, field_path(data_path, "border_sizes"), configuration.borders, field_path(path, "borders")
            ),
        )
    )


def _line_rules(data: LineGraphData, configuration: LineGraphConfiguration, data_path: str, path: str) -> str | None:
    return first_message(
        (
            _validate_log_values(data_path, "xs", data.xs, field_path(path, "x_axis"), configuration.x_axis),
            _validate_log_values(data_path, "ys", data.ys, field_path(path, "y_axis"), configuration.y_axis),
        )
    )


def _lines_rules(data: LinesGraphData, configuration: LinesGraphConfiguration, data_path: str, path: str) -> str | None:
    message = first_message(
        (
            _validate_log_vectors(data_path, "xs", data.xs, field_path(path, "x_axis"), configuration.x_axis),
            _validate_log_vectors(data_path, "ys", data.ys, field_path(path, "y_axis"), configuration.y_axis),
            _validate_stacked_values(data_path, "ys", data.ys, configuration.stacking, field_path(path, "stacking")),
        )
    )
    if message is not None:
        return message
    if configuration.stacking is not None:
        for index, xs in enumerate(data.xs):
            if np.any(np.diff(xs) < 0):
                return f"unsorted {field_path(data_path, 'xs')}[{index}] for {field_path(path, 'stacking')}"
    if configuration.line.width is None and data.widths is None and data.fill_belows is not None:
        for index, fill_below in enumerate(data.fill_belows):
            if not fill_below:
                return (
                    f"either {field_path(path, 'line.width')} or {field_path(data_path, 'fill_belows')}[{index}] "
                    "must be specified"
                )
    return None


def _cdf_rules(data: CdfGraphData, configuration: CdfGraphConfiguration, data_path: str, path: str) -> str | None:
    return _validate_log_values(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis)


def _cdfs_rules(data: CdfsGraphData, configuration: CdfsGraphConfiguration, data_path: str, path: str) -> str | None:
    return _validate_log_vectors(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis)


def _bar_rules(data: BarGraphData, configuration: BarGraphConfiguration, data_path: str, path: str) -> str | None:
    return _validate_log_values(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis)


def _bars_rules(data: BarsGraphData, configuration: BarsGraphConfiguration, data_path: str, path: str) -> str | None:
    return first_message(
        (
            _validate_log_vectors(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis),
            _validate_stacked_values(data_path, "values", data.values, configuration.stacking, field_path(path, "stacking")),
        )
    )


def _distribution_rules(
    data: DistributionGraphData, configuration: DistributionGraphConfiguration, data_path: str, path: str
) -> str | None:
    return _validate_log_values(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis)


def _distributions_rules(
    data: DistributionsGraphData, configuration: DistributionsGraphConfiguration, data_path: str, path: str
) -> str | None:
    return _validate_log_vectors(data_path, "values", data.values, field_path(path, "value_axis"), configuration.value_axis)


_CROSS_RULES: dict[GraphKind, Callable[..., str | None]] = {
    GraphKind.POINTS: _points_rules,
    GraphKind.GRID: _grid_rules,
    GraphKind.LINE: _line_rules,
    GraphKind.LINES: _lines_rules,
    GraphKind.CDF: _cdf_rules,
    GraphKind.CDFS: _cdfs_rules,
    GraphKind.BAR: _bar_rules,
    GraphKind.BARS: _bars_rules,
    GraphKind.DISTRIBUTION: _distribution_rules,
    GraphKind.DISTRIBUTIONS: _distributions_rules,
}


@dataclass(frozen=True)
class Graph(ObjectWithValidation):
    """A graph to render: its data and a configuration of the matching kind.

    Validating a graph validates both halves (as `data` and `configuration`), then the
    rules that need both, such as log axes over non-positive data or data colors that are
    not in a categorical palette.
    """

    data: GraphData
    configuration: GraphConfiguration

    validation_root = ""

    @property
    def kind(self) -> GraphKind:
        return graph_kind(self.data)

    def validate(self, path: str) -> str | None:
        data_path = field_path(path, "data")
        configuration_path = field_path(path, "configuration")
        message = validate_children(path, (("data", self.data), ("configuration", self.configuration)))
        if message is not None:
            return message
        kind = self.kind
        expected = _KIND_TYPES[kind][1]
        if type(self.configuration) is not expected:
            return (
                f"{configuration_path}: {type(self.configuration).__name__} "
                f"does not match {data_path}: {type(self.data).__name__}"
            )
        return _CROSS_RULES[kind](self.data, self.configuration, data_path, configuration_path)
