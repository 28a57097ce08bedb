"""Data objects for every graph kind.

Arrays are coerced on construction (lists, tuples, numpy arrays, pandas series and torch
tensors are accepted); numeric arrays become float64 numpy arrays and per-element colors
become `ColorValue`s. Ill-typed input raises `PlotDataError` right away; everything else is
left to `validate`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np

from luvatrix_graphs.adapters import (
    coerce_edges,
    coerce_matrix,
    coerce_numeric,
    coerce_numeric_vectors,
    coerce_optional_numeric,
    coerce_strings,
)
from luvatrix_graphs.colors import ColorValue, NumericColor, color_kind, color_values, is_valid_color
from luvatrix_graphs.errors import PlotDataError
from luvatrix_graphs.validation import ObjectWithValidation, field_path, first_message, validate_length


class GraphData(ObjectWithValidation):
    validation_root = "data"

    graph_title: str | None


def _set(obj: Any, name: str, value: Any) -> None:
    object.__setattr__(obj, name, value)


def _bools(value: Any, *, label: str) -> tuple[bool, ...] | None:
    if value is None:
        return None
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if not isinstance(value, Sequence):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
    return tuple(bool(item) for item in value)


def _validate_finite(path: str, name: str, values: np.ndarray | None) -> str | None:
    if values is None:
        return None
    bad = np.flatnonzero(~np.isfinite(values))
    if bad.size:
        index = int(bad[0])
        return f"non-finite {field_path(path, name)}[{index}]: {values[index]}"
    return None


def _validate_sizes(path: str, name: str, values: np.ndarray | None) -> str | None:
    """Sizes are non-negative; zero means the element is not drawn."""
    message = _validate_finite(path, name, values)
    if message is not None or values is None:
        return message
    bad = np.flatnonzero(values < 0)
    if bad.size:
        index = int(bad[0])
        return f"negative {field_path(path, name)}[{index}]: {values[index]}"
    return None


def _validate_widths(path: str, name: str, values: np.ndarray | None) -> str | None:
    message = _validate_finite(path, name, values)
    if message is not None or values is None:
        return message
    bad = np.flatnonzero(values <= 0)
    if bad.size:
        index = int(bad[0])
        return f"non-positive {field_path(path, name)}[{index}]: {values[index]}"
    return None


def _validate_color_names(path: str, name: str, colors: Sequence[str] | None) -> str | None:
    if colors is None:
        return None
    for index, color in enumerate(colors):
        if color != "" and not is_valid_color(color):
            return f"invalid {field_path(path, name)}[{index}]: {color}"
    return None


def _validate_color_values(path: str, name: str, colors: Sequence[ColorValue] | None) -> str | None:
    """Per-element color arrays must be all numeric or all strings (ignoring empty entries)."""
    kind = color_kind(colors)
    if kind == "mixed":
        return f"mixed numeric and string {field_path(path, name)}"
    if kind == "numeric":
        for index, value in enumerate(colors or ()):
            if isinstance(value, NumericColor) and not np.isfinite(value.value):
                return f"non-finite {field_path(path, name)}[{index}]: {value.value}"
    return None


def _validate_vectors(path: str, name: str, vectors: tuple[np.ndarray, ...], *, minimum: int) -> str | None:
    if not vectors:
        return f"empty {field_path(path, name)}"
    for index, vector in enumerate(vectors):
        if vector.size < minimum:
            if minimum == 1:
                return f"empty {field_path(path, name)}[{index}]"
            return f"too few points in {field_path(path, name)}[{index}]: {vector.size}"
        message = _validate_finite(path, f"{name}[{index}]", vector)
        if message is not None:
            return message
    return None


@dataclass(frozen=True)
class PointsGraphData(GraphData):
    """The data for a scatter graph of points.

    `xs` and `ys` are mandatory and of the same length; every other per-point array is
    optional and, when given, of that length too. `colors` are either color names (or
    category labels when the configured palette is categorical) or numbers mapped through
    the palette. `sizes` are diameters in pixels unless a size scale is configured. An
    empty color or a zero size hides the point. Border sizes are added to the point size.

    `edges` connect pairs of points, by zero-based index; `edges_colors` and `edges_sizes`
    (line widths) are per edge.
    """

    xs: Any
    ys: Any
    colors: Any = None
    sizes: Any = None
    hovers: Any = None
    border_colors: Any = None
    border_sizes: Any = None
    edges: Any = None
    edges_colors: Any = None
    edges_sizes: Any = None
    graph_title: str | None = None
    x_axis_title: str | None = None
    y_axis_title: str | None = None
    points_colors_title: str | None = None
    borders_colors_title: str | None = None
    edges_colors_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "xs", coerce_numeric(self.xs, label="xs"))
        _set(self, "ys", coerce_numeric(self.ys, label="ys"))
        _set(self, "colors", color_values(self.colors, label="colors"))
        _set(self, "sizes", coerce_optional_numeric(self.sizes, label="sizes"))
        _set(self, "hovers", coerce_strings(self.hovers, label="hovers"))
        _set(self, "border_colors", color_values(self.border_colors, label="border_colors"))
        _set(self, "border_sizes", coerce_optional_numeric(self.border_sizes, label="border_sizes"))
        _set(self, "edges", coerce_edges(self.edges, label="edges"))
        _set(self, "edges_colors", color_values(self.edges_colors, label="edges_colors"))
        _set(self, "edges_sizes", coerce_optional_numeric(self.edges_sizes, label="edges_sizes"))

    @property
    def points_count(self) -> int:
        return int(self.xs.size)

    def validate(self, path: str) -> str | None:
        count = self.points_count
        message = first_message(
            (
                f"empty {field_path(path, 'xs')}" if count == 0 else None,
                validate_length(path, "ys", self.ys, "xs", count),
                _validate_finite(path, "xs", self.xs),
                _validate_finite(path, "ys", self.ys),
                validate_length(path, "colors", self.colors, "xs", count),
                validate_length(path, "sizes", self.sizes, "xs", count),
                validate_length(path, "hovers", self.hovers, "xs", count),
                validate_length(path, "border_colors", self.border_colors, "xs", count),
                validate_length(path, "border_sizes", self.border_sizes, "xs", count),
            )
        )
        if message is not None:
            return message
        message = first_message(
            (
                _validate_color_values(path, "colors", self.colors),
                _validate_sizes(path, "sizes", self.sizes),
                _validate_color_values(path, "border_colors", self.border_colors),
                _validate_sizes(path, "border_sizes", self.border_sizes),
            )
        )
        if message is not None:
            return message
        return self._validate_edges(path, count)

    def _validate_edges(self, path: str, count: int) -> str | None:
        if self.edges is None:
            if self.edges_colors is not None:
                return f"{field_path(path, 'edges_colors')} specified without {field_path(path, 'edges')}"
            if self.edges_sizes is not None:
                return f"{field_path(path, 'edges_sizes')} specified without {field_path(path, 'edges')}"
            return None
        for index, (source, target) in enumerate(self.edges):
            if not 0 <= source < count:
                return f"{field_path(path, 'edges')}[{index}] from invalid point: {source}"
            if not 0 <= target < count:
                return f"{field_path(path, 'edges')}[{index}] to invalid point: {target}"
            if source == target:
                return f"{field_path(path, 'edges')}[{index}] from point to itself: {source}"
        edges_count = len(self.edges)
        message = first_message(
            (
                validate_length(path, "edges_colors", self.edges_colors, "edges", edges_count),
                validate_length(path, "edges_sizes", self.edges_sizes, "edges", edges_count),
                _validate_sizes(path, "edges_sizes", self.edges_sizes),
            )
        )
        if message is not None:
            return message
        if color_kind(self.edges_colors) in ("numeric", "mixed"):
            return f"numeric {field_path(path, 'edges_colors')} are not supported"
        return None


def _color_matrix(raw: Any, *, label: str) -> tuple[tuple[ColorValue, ...], ...] | None:
    if raw is None:
        return None
    if isinstance(raw, np.ndarray):
        if raw.ndim != 2:
            raise PlotDataError(f"{label} must be 2-D")
        rows = raw.tolist()
    elif isinstance(raw, Sequence) and not isinstance(raw, (str, bytes)):
        rows = [row.tolist() if isinstance(row, np.ndarray) else row for row in raw]
    else:
        raise PlotDataError(f"unsupported {label} input type: {type(raw)!r}")
    if len({len(row) for row in rows}) > 1:
        raise PlotDataError(f"{label} rows differ in length")
    return tuple(color_values(list(row), label=label) or () for row in rows)


def _string_matrix(raw: Any, *, label: str) -> tuple[tuple[str, ...], ...] | None:
    if raw is None:
        return None
    arr = np.asarray(raw, dtype=object)
    if arr.ndim != 2:
        raise PlotDataError(f"{label} must be 2-D")
    return tuple(coerce_strings(row, label=label) or () for row in arr.tolist())


def _matrix_shape(matrix: Any) -> tuple[int, int] | None:
    if matrix is None:
        return None
    if isinstance(matrix, np.ndarray):
        return (int(matrix.shape[0]), int(matrix.shape[1]))
    return (len(matrix), len(matrix[0]) if matrix else 0)


def _flatten(matrix: tuple[tuple[Any, ...], ...] | None) -> tuple[Any, ...] | None:
    if matrix is None:
        return None
    return tuple(item for row in matrix for item in row)


@dataclass(frozen=True)
class GridGraphData(GraphData):
    """The data for a grid of points, one per (row, column) cell.

    Matrices are indexed `[row][column]`; every given matrix must have the same shape, and
    at least one of `colors` or `sizes` is required.
    """

    colors: Any = None
    sizes: Any = None
    hovers: Any = None
    border_colors: Any = None
    border_sizes: Any = None
    rows_names: Any = None
    columns_names: Any = None
    graph_title: str | None = None
    x_axis_title: str | None = None
    y_axis_title: str | None = None
    points_colors_title: str | None = None
    borders_colors_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "colors", _color_matrix(self.colors, label="colors"))
        _set(self, "border_colors", _color_matrix(self.border_colors, label="border_colors"))
        _set(self, "hovers", _string_matrix(self.hovers, label="hovers"))
        if self.sizes is not None:
            _set(self, "sizes", coerce_matrix(self.sizes, label="sizes"))
        if self.border_sizes is not None:
            _set(self, "border_sizes", coerce_matrix(self.border_sizes, label="border_sizes"))
        _set(self, "rows_names", coerce_strings(self.rows_names, label="rows_names"))
        _set(self, "columns_names", coerce_strings(self.columns_names, label="columns_names"))

    @property
    def shape(self) -> tuple[int, int]:
        return _matrix_shape(self.colors) or _matrix_shape(self.sizes) or (0, 0)

    # Row-major flattening, matching `np.ndarray.reshape(-1)` of the numeric matrices.

    @property
    def flat_colors(self) -> tuple[ColorValue, ...] | None:
        return _flatten(self.colors)

    @property
    def flat_border_colors(self) -> tuple[ColorValue, ...] | None:
        return _flatten(self.border_colors)

    @property
    def flat_hovers(self) -> tuple[str, ...] | None:
        return _flatten(self.hovers)

    @property
    def flat_sizes(self) -> np.ndarray | None:
        return None if self.sizes is None else self.sizes.reshape(-1)

    @property
    def flat_border_sizes(self) -> np.ndarray | None:
        return None if self.border_sizes is None else self.border_sizes.reshape(-1)

    def validate(self, path: str) -> str | None:
        if self.colors is None and self.sizes is None:
            return f"neither {field_path(path, 'colors')} nor {field_path(path, 'sizes')} specified"
        rows, columns = self.shape
        if rows == 0 or columns == 0:
            return f"empty {field_path(path, 'colors' if self.colors is not None else 'sizes')}"
        for name in ("colors", "sizes", "hovers", "border_colors", "border_sizes"):
            shape = _matrix_shape(getattr(self, name))
            if shape is not None and tuple(shape) != (rows, columns):
                return (
                    f"the shape of {field_path(path, name)}: {shape[0]}x{shape[1]} "
                    f"is different from the grid shape: {rows}x{columns}"
                )
        return first_message(
            (
                validate_length(path, "rows_names", self.rows_names, "rows", rows),
                validate_length(path, "columns_names", self.columns_names, "columns", columns),
                _validate_color_values(path, "colors", self.flat_colors),
                _validate_sizes(path, "sizes", self.flat_sizes),
                _validate_color_values(path, "border_colors", self.flat_border_colors),
                _validate_sizes(path, "border_sizes", self.flat_border_sizes),
            )
        )


@dataclass(frozen=True)
class LineGraphData(GraphData):
    xs: Any
    ys: Any
    graph_title: str | None = None
    x_axis_title: str | None = None
    y_axis_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "xs", coerce_numeric(self.xs, label="xs"))
        _set(self, "ys", coerce_numeric(self.ys, label="ys"))

    def validate(self, path: str) -> str | None:
        return first_message(
            (
                validate_length(path, "ys", self.ys, "xs", self.xs.size),
                f"too few points in {field_path(path, 'xs')}: {self.xs.size}" if self.xs.size < 2 else None,
                _validate_finite(path, "xs", self.xs),
                _validate_finite(path, "ys", self.ys),
            )
        )


@dataclass(frozen=True)
class LinesGraphData(GraphData):
    """The data for a graph of several lines.

    Each line has its own `xs` and `ys`; the optional per-line arrays (`names`, `colors`,
    `widths`, `fill_belows`, `are_dashed`) override the configured line style. An empty
    color hides the line.
    """

    xs: Any
    ys: Any
    names: Any = None
    colors: Any = None
    widths: Any = None
    fill_belows: Any = None
    are_dashed: Any = None
    graph_title: str | None = None
    x_axis_title: str | None = None
    y_axis_title: str | None = None
    legend_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "xs", coerce_numeric_vectors(self.xs, label="xs"))
        _set(self, "ys", coerce_numeric_vectors(self.ys, label="ys"))
        _set(self, "names", coerce_strings(self.names, label="names"))
        _set(self, "colors", coerce_strings(self.colors, label="colors"))
        _set(self, "widths", coerce_optional_numeric(self.widths, label="widths"))
        _set(self, "fill_belows", _bools(self.fill_belows, label="fill_belows"))
        _set(self, "are_dashed", _bools(self.are_dashed, label="are_dashed"))

    @property
    def lines_count(self) -> int:
        return len(self.xs)

    def validate(self, path: str) -> str | None:
        count = self.lines_count
        message = first_message(
            (
                validate_length(path, "ys", self.ys, "xs", count),
                _validate_vectors(path, "xs", self.xs, minimum=2),
            )
        )
        if message is not None:
            return message
        for index, (xs, ys) in enumerate(zip(self.xs, self.ys)):
            message = first_message(
                (
                    validate_length(path, f"ys[{index}]", ys, f"xs[{index}]", xs.size),
                    _validate_finite(path, f"ys[{index}]", ys),
                )
            )
            if message is not None:
                return message
        return first_message(
            (
                validate_length(path, "names", self.names, "xs", count),
                validate_length(path, "colors", self.colors, "xs", count),
                validate_length(path, "widths", self.widths, "xs", count),
                validate_length(path, "fill_belows", self.fill_belows, "xs", count),
                validate_length(path, "are_dashed", self.are_dashed, "xs", count),
                _validate_color_names(path, "colors", self.colors),
                _validate_widths(path, "widths", self.widths),
            )
        )


@dataclass(frozen=True)
class CdfGraphData(GraphData):
    values: Any
    graph_title: str | None = None
    value_axis_title: str | None = None
    fraction_axis_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric(self.values, label="values"))

    def validate(self, path: str) -> str | None:
        if self.values.size == 0:
            return f"empty {field_path(path, 'values')}"
        return _validate_finite(path, "values", self.values)


@dataclass(frozen=True)
class CdfsGraphData(GraphData):
    values: Any
    names: Any = None
    colors: Any = None
    graph_title: str | None = None
    value_axis_title: str | None = None
    fraction_axis_title: str | None = None
    legend_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric_vectors(self.values, label="values"))
        _set(self, "names", coerce_strings(self.names, label="names"))
        _set(self, "colors", coerce_strings(self.colors, label="colors"))

    def validate(self, path: str) -> str | None:
        count = len(self.values)
        return first_message(
            (
                _validate_vectors(path, "values", self.values, minimum=1),
                validate_length(path, "names", self.names, "values", count),
                validate_length(path, "colors", self.colors, "values", count),
                _validate_color_names(path, "colors", self.colors),
            )
        )


@dataclass(frozen=True)
class BarGraphData(GraphData):
    """The data for a bar graph: one value per bar, with optional per-bar names, hovers and
    colors. An empty color hides the bar."""

    values: Any
    names: Any = None
    hovers: Any = None
    colors: Any = None
    graph_title: str | None = None
    value_axis_title: str | None = None
    bar_axis_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric(self.values, label="values"))
        _set(self, "names", coerce_strings(self.names, label="names"))
        _set(self, "hovers", coerce_strings(self.hovers, label="hovers"))
        _set(self, "colors", coerce_strings(self.colors, label="colors"))

    def validate(self, path: str) -> str | None:
        count = int(self.values.size)
        return first_message(
            (
                f"empty {field_path(path, 'values')}" if count == 0 else None,
                _validate_finite(path, "values", self.values),
                validate_length(path, "names", self.names, "values", count),
                validate_length(path, "hovers", self.hovers, "values", count),
                validate_length(path, "colors", self.colors, "values", count),
                _validate_color_names(path, "colors", self.colors),
            )
        )


@dataclass(frozen=True)
class BarsGraphData(GraphData):
    """The data for several series of bars.

    All series have the same number of bars. `bar_names` label the bars; `names`, `hovers`
    and `colors` are per series.
    """

    values: Any
    bar_names: Any = None
    names: Any = None
    hovers: Any = None
    colors: Any = None
    graph_title: str | None = None
    value_axis_title: str | None = None
    bar_axis_title: str | None = None
    legend_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric_vectors(self.values, label="values"))
        _set(self, "bar_names", coerce_strings(self.bar_names, label="bar_names"))
        _set(self, "names", coerce_strings(self.names, label="names"))
        _set(self, "hovers", coerce_strings(self.hovers, label="hovers"))
        _set(self, "colors", coerce_strings(self.colors, label="colors"))

    @property
    def bars_count(self) -> int:
        return int(self.values[0].size) if self.values else 0

    def validate(self, path: str) -> str | None:
        message = _validate_vectors(path, "values", self.values, minimum=1)
        if message is not None:
            return message
        bars = self.bars_count
        for index, series in enumerate(self.values[1:], start=1):
            message = validate_length(path, f"values[{index}]", series, "values[0]", bars)
            if message is not None:
                return message
        series_count = len(self.values)
        return first_message(
            (
                validate_length(path, "bar_names", self.bar_names, "values[0]", bars),
                validate_length(path, "names", self.names, "values", series_count),
                validate_length(path, "hovers", self.hovers, "values", series_count),
                validate_length(path, "colors", self.colors, "values", series_count),
                _validate_color_names(path, "colors", self.colors),
            )
        )


@dataclass(frozen=True)
class DistributionGraphData(GraphData):
    values: Any
    name: str | None = None
    graph_title: str | None = None
    value_axis_title: str | None = None
    trace_axis_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric(self.values, label="values"))

    def validate(self, path: str) -> str | None:
        if self.values.size == 0:
            return f"empty {field_path(path, 'values')}"
        return _validate_finite(path, "values", self.values)


@dataclass(frozen=True)
class DistributionsGraphData(GraphData):
    values: Any
    names: Any = None
    colors: Any = None
    graph_title: str | None = None
    value_axis_title: str | None = None
    trace_axis_title: str | None = None
    legend_title: str | None = None

    def __post_init__(self) -> None:
        _set(self, "values", coerce_numeric_vectors(self.values, label="values"))
        _set(self, "names", coerce_strings(self.names, label="names"))
        _set(self, "colors", coerce_strings(self.colors, label="colors"))

    def validate(self, path: str) -> str | None:
        count = len(self.values)
        return first_message(
            (
                _validate_vectors(path, "values", self.values, minimum=1),
                validate_length(path, "names", self.names, "values", count),
                validate_length(path, "colors", self.colors, "values", count),
                _validate_color_names(path, "colors", self.colors),
            )
        )
