"""Configuration objects for every graph kind.

All objects are frozen; use `luvatrix_graphs.api.with_overrides` to derive a modified copy.
An axis (or a scale) is logarithmic exactly when its `log_regularization` is set; the
plotted domain is then `value + log_regularization`, which must be positive.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from numbers import Real
from typing import Union

from luvatrix_graphs.colors import is_named_palette, is_valid_color
from luvatrix_graphs.validation import (
    ObjectWithValidation,
    field_path,
    first_message,
    validate_bounds,
    validate_children,
    validate_open_bounds,
)


ContinuousPalette = tuple[tuple[float, str], ...]
CategoricalPalette = tuple[tuple[str, str], ...]
ColorPalette = Union[str, ContinuousPalette, CategoricalPalette]

DEFAULT_TEMPLATE = "simple_white"
DEFAULT_POINT_SIZE = 6.0
DEFAULT_BORDER_SIZE = 1.0
DEFAULT_EDGE_WIDTH = 1.0
DEFAULT_LINE_WIDTH = 1.5
DEFAULT_BAND_WIDTH = 1.0
DEFAULT_SIZE_RANGE = (2.0, 10.0)
DEFAULT_COLOR_PALETTE = "Viridis"


class ValuesOrientation(str, Enum):
    """Which axis carries the values of a distribution, CDF or bars graph."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class Stacking(str, Enum):
    VALUES = "values"
    PERCENTS = "percents"
    FRACTIONS = "fractions"


class CdfDirection(str, Enum):
    UP_TO_VALUE = "up_to_value"
    DOWN_TO_VALUE = "down_to_value"


def palette_kind(palette: ColorPalette | None) -> str | None:
    """Classify a palette as `"named"`, `"continuous"`, `"categorical"` or `"invalid"`."""
    if palette is None:
        return None
    if isinstance(palette, str):
        return "named"
    try:
        entries = list(palette)
    except TypeError:
        return "invalid"
    if not entries:
        return "invalid"
    kinds = set()
    for entry in entries:
        if not isinstance(entry, (tuple, list)) or len(entry) != 2 or not isinstance(entry[1], str):
            return "invalid"
        value = entry[0]
        if isinstance(value, str):
            kinds.add("categorical")
        elif isinstance(value, Real) and not isinstance(value, bool):
            kinds.add("continuous")
        else:
            return "invalid"
    if len(kinds) != 1:
        return "invalid"
    return kinds.pop()


def validate_palette(path: str, palette: ColorPalette | None) -> str | None:
    if palette is None:
        return None
    if isinstance(palette, str):
        if not is_named_palette(palette):
            return f"unknown {path}: {palette}"
        return None
    try:
        entries = list(palette)
    except TypeError:
        return f"invalid {path}: {palette!r}"
    if not entries:
        return f"empty {path}"
    kind = palette_kind(palette)
    if kind == "invalid":
        return f"invalid {path}: {palette!r}"
    if kind == "continuous":
        values = set()
        for index, (value, color) in enumerate(entries):
            if not math.isfinite(value):
                return f"non-finite {path}[{index}] value: {value}"
            if not is_valid_color(color):
                return f"invalid {path}[{index}] color: {color}"
            values.add(float(value))
        if len(values) < 2:
            return f"single {path} value: {entries[0][0]}"
        return None
    labels: set[str] = set()
    for index, (label, color) in enumerate(entries):
        if label in labels:
            return f"duplicate {path} value: {label}"
        labels.add(label)
        if color != "" and not is_valid_color(color):
            return f"invalid {path}[{index}] color: {color}"
    return None


def _validate_color(path: str, color: str | None) -> str | None:
    if color is not None and not is_valid_color(color):
        return f"invalid {path}: {color}"
    return None


def _validate_positive(path: str, value: float | None) -> str | None:
    if value is not None and not value > 0:
        return f"non-positive {path}: {value}"
    return None


def _validate_non_negative(path: str, value: float | None) -> str | None:
    if value is not None and not value >= 0:
        return f"negative {path}: {value}"
    return None


@dataclass(frozen=True)
class FigureConfiguration(ObjectWithValidation):
    """Generic configuration that applies to any graph.

    `output_file`, `show_interactive`, `width` and `height` are handed to the plotting
    backend untouched. Sizes are in pixels (1/96 of an inch).
    """

    output_file: str | None = None
    show_interactive: bool = False
    width: int | None = None
    height: int | None = None
    template: str = DEFAULT_TEMPLATE
    show_grid: bool = True
    show_ticks: bool = True

    def validate(self, path: str) -> str | None:
        return first_message(
            (
                _validate_positive(field_path(path, "width"), self.width),
                _validate_positive(field_path(path, "height"), self.height),
            )
        )


@dataclass(frozen=True)
class AxisConfiguration(ObjectWithValidation):
    minimum: float | None = None
    maximum: float | None = None
    log_regularization: float | None = None

    @property
    def is_log(self) -> bool:
        return self.log_regularization is not None

    def validate(self, path: str) -> str | None:
        return validate_bounds(path, self.minimum, self.maximum, self.log_regularization)


@dataclass(frozen=True)
class ScaleConfiguration(ObjectWithValidation):
    """How numeric values map onto colors or sizes."""

    minimum: float | None = None
    maximum: float | None = None
    log_regularization: float | None = None
    reverse_scale: bool = False
    show_scale: bool = False

    @property
    def is_log(self) -> bool:
        return self.log_regularization is not None

    def validate(self, path: str) -> str | None:
        return validate_bounds(path, self.minimum, self.maximum, self.log_regularization)


@dataclass(frozen=True)
class SizeRangeConfiguration(ObjectWithValidation):
    smallest: float | None = None
    largest: float | None = None

    def validate(self, path: str) -> str | None:
        message = first_message(
            (
                _validate_non_negative(field_path(path, "smallest"), self.smallest),
                _validate_non_negative(field_path(path, "largest"), self.largest),
            )
        )
        if message is not None:
            return message
        if self.smallest is not None and self.largest is not None and not self.largest > self.smallest:
            return (
                f"{field_path(path, 'largest')}: {self.largest} "
                f"is not larger than {field_path(path, 'smallest')}: {self.smallest}"
            )
        return None

    @property
    def is_set(self) -> bool:
        return self.smallest is not None or self.largest is not None


@dataclass(frozen=True)
class PointsConfiguration(ObjectWithValidation):
    """Style of one layer of a points graph (the points, their borders, or the edges).

    `color` and `size` apply when the data has no per-element values. Numeric data colors
    use `color_palette` (a named palette, or `(value, color)` stops); string data colors
    are explicit colors unless `color_palette` is categorical, in which case they are
    category labels. For edges, `size` is the line width.
    """

    color: str | None = None
    size: float | None = None
    color_palette: ColorPalette | None = None
    color_scale: ScaleConfiguration = field(default_factory=ScaleConfiguration)
    size_scale: ScaleConfiguration = field(default_factory=ScaleConfiguration)
    size_range: SizeRangeConfiguration = field(default_factory=SizeRangeConfiguration)

    @property
    def palette_kind(self) -> str | None:
        return palette_kind(self.color_palette)

    def validate(self, path: str) -> str | None:
        message = first_message(
            (
                _validate_color(field_path(path, "color"), self.color),
                _validate_positive(field_path(path, "size"), self.size),
                validate_palette(field_path(path, "color_palette"), self.color_palette),
            )
        )
        if message is not None:
            return message
        message = validate_children(
            path,
            (("color_scale", self.color_scale), ("size_scale", self.size_scale), ("size_range", self.size_range)),
        )
        if message is not None:
            return message
        if self.size_scale.reverse_scale:
            return f"unsupported {field_path(path, 'size_scale.reverse_scale')}"
        if self.size_scale.show_scale:
            return f"unsupported {field_path(path, 'size_scale.show_scale')}"
        if self.color_scale.reverse_scale and self.palette_kind == "categorical":
            return f"reversed categorical {field_path(path, 'color_palette')}"
        if self.palette_kind == "categorical" and (
            self.color_scale.is_log or self.color_scale.minimum is not None or self.color_scale.maximum is not None
        ):
            return f"numeric {field_path(path, 'color_scale')} specified for categorical {field_path(path, 'color_palette')}"
        if self.palette_kind == "continuous" and self.color_scale.is_log:
            regularization = self.color_scale.log_regularization
            for index, (value, _color) in enumerate(self.color_palette):  # type: ignore[union-attr]
                if not value + regularization > 0:
                    return (
                        f"non-positive log {field_path(path, 'color_palette')}[{index}] value: {value} "
                        f"+ {field_path(path, 'color_scale.log_regularization')}: {regularization}"
                    )
        if self.palette_kind == "continuous":
            values = [value for value, _color in self.color_palette]  # type: ignore[union-attr]
            return validate_open_bounds(
                field_path(path, "color_scale"),
                self.color_scale.minimum,
                self.color_scale.maximum,
                f"{field_path(path, 'color_palette')} value",
                min(values),
                max(values),
            )
        return None


@dataclass(frozen=True)
class BandConfiguration(ObjectWithValidation):
    """One reference line of a graph, with an optional filled region.

    The band exists only if `offset` is set. A line is drawn when `width` is positive; the
    region is filled when `is_filled`.
    """

    offset: float | None = None
    color: str | None = None
    width: float | None = DEFAULT_BAND_WIDTH
    is_dashed: bool = False
    is_filled: bool = False

    def validate(self, path: str) -> str | None:
        if self.offset is not None and not math.isfinite(self.offset):
            return f"non-finite {field_path(path, 'offset')}: {self.offset}"
        return first_message(
            (
                _validate_non_negative(field_path(path, "width"), self.width),
                _validate_color(field_path(path, "color"), self.color),
            )
        )

    @property
    def has_line(self) -> bool:
        return self.offset is not None and self.width is not None and self.width > 0


def _dashed_band() -> BandConfiguration:
    return BandConfiguration(is_dashed=True)


@dataclass(frozen=True)
class BandsConfiguration(ObjectWithValidation):
    low: BandConfiguration = field(default_factory=_dashed_band)
    middle: BandConfiguration = field(default_factory=BandConfiguration)
    high: BandConfiguration = field(default_factory=_dashed_band)

    @property
    def has_bands(self) -> bool:
        return any(band.offset is not None for band in (self.low, self.middle, self.high))

    def validate(self, path: str) -> str | None:
        message = validate_children(path, (("low", self.low), ("middle", self.middle), ("high", self.high)))
        if message is not None:
            return message
        low, middle, high = self.low.offset, self.middle.offset, self.high.offset
        if low is not None and middle is not None and not low < middle:
            return (
                f"{field_path(path, 'low.offset')}: {low} "
                f"is not less than {field_path(path, 'middle.offset')}: {middle}"
            )
        if middle is not None and high is not None and not high > middle:
            return (
                f"{field_path(path, 'high.offset')}: {high} "
                f"is not greater than {field_path(path, 'middle.offset')}: {middle}"
            )
        if low is not None and high is not None and not low < high:
            return (
                f"{field_path(path, 'low.offset')}: {low} "
                f"is not less than {field_path(path, 'high.offset')}: {high}"
            )
        return None

    def validate_log(self, path: str) -> str | None:
        for name, band in (("low", self.low), ("middle", self.middle), ("high", self.high)):
            if band.offset is not None and not band.offset > 0:
                return f"non-positive log {field_path(path, name + '.offset')}: {band.offset}"
        return None


@dataclass(frozen=True)
class LineConfiguration(ObjectWithValidation):
    color: str | None = None
    width: float | None = DEFAULT_LINE_WIDTH
    is_dashed: bool = False
    is_filled: bool = False

    def validate(self, path: str) -> str | None:
        if self.width is None and not self.is_filled:
            return f"either {field_path(path, 'width')} or {field_path(path, 'is_filled')} must be specified"
        return first_message(
            (
                _validate_positive(field_path(path, "width"), self.width),
                _validate_color(field_path(path, "color"), self.color),
            )
        )


@dataclass(frozen=True)
class DistributionConfiguration(ObjectWithValidation):
    """How to draw a distribution.

    A curve is the positive half of a violin, so the two can't be combined. Any other
    combination of box, violin and curve works, as long as one is set.
    """

    show_box: bool = True
    show_violin: bool = False
    show_curve: bool = False
    show_outliers: bool = False
    color: str | None = None

    def validate(self, path: str) -> str | None:
        if not self.show_box and not self.show_violin and not self.show_curve:
            return (
                "must specify at least one of: "
                f"{field_path(path, 'show_box')}, {field_path(path, 'show_violin')}, {field_path(path, 'show_curve')}"
            )
        if self.show_violin and self.show_curve:
            return f"can't specify both of: {field_path(path, 'show_violin')}, {field_path(path, 'show_curve')}"
        return _validate_color(field_path(path, "color"), self.color)


class GraphConfiguration(ObjectWithValidation):
    """Common base of the per-kind graph configurations."""

    figure: FigureConfiguration


@dataclass(frozen=True)
class PointsGraphConfiguration(GraphConfiguration):
    """Configure a scatter graph of points.

    Points may carry a border (drawn as a larger marker beneath each point) and be
    connected by edges; the three layers have independent styles, so points and borders
    can encode two unrelated attributes, each with its own legend or color bar. Diagonal
    bands are relative to `y = x` and need both axes linear or both logarithmic.
    """

    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    x_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    y_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    points: PointsConfiguration = field(default_factory=PointsConfiguration)
    borders: PointsConfiguration = field(default_factory=PointsConfiguration)
    edges: PointsConfiguration = field(default_factory=PointsConfiguration)
    vertical_bands: BandsConfiguration = field(default_factory=BandsConfiguration)
    horizontal_bands: BandsConfiguration = field(default_factory=BandsConfiguration)
    diagonal_bands: BandsConfiguration = field(default_factory=BandsConfiguration)
    edges_over_points: bool = True

    def validate(self, path: str) -> str | None:
        message = validate_children(
            path,
            (
                ("figure", self.figure),
                ("x_axis", self.x_axis),
                ("y_axis", self.y_axis),
                ("points", self.points),
                ("borders", self.borders),
                ("edges", self.edges),
                ("vertical_bands", self.vertical_bands),
                ("horizontal_bands", self.horizontal_bands),
                ("diagonal_bands", self.diagonal_bands),
            ),
        )
        if message is not None:
            return message
        if self.edges.palette_kind in ("named", "continuous"):
            return f"continuous {field_path(path, 'edges.color_palette')} is not supported for edges"
        if self.edges.color_scale.show_scale and self.edges.palette_kind != "categorical":
            return f"{field_path(path, 'edges.color_scale.show_scale')} requires a categorical {field_path(path, 'edges.color_palette')}"
        if self.diagonal_bands.has_bands:
            if self.x_axis.is_log != self.y_axis.is_log:
                return f"{field_path(path, 'diagonal_bands')} specified for a combination of linear and log scale axes"
            if self.x_axis.is_log:
                message = self.diagonal_bands.validate_log(field_path(path, "diagonal_bands"))
                if message is not None:
                    return message
        if self.x_axis.is_log:
            message = self.vertical_bands.validate_log(field_path(path, "vertical_bands"))
            if message is not None:
                return message
        if self.y_axis.is_log:
            return self.horizontal_bands.validate_log(field_path(path, "horizontal_bands"))
        return None


@dataclass(frozen=True)
class GridGraphConfiguration(GraphConfiguration):
    """Configure a grid of points, one per (row, column) cell."""

    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    points: PointsConfiguration = field(default_factory=PointsConfiguration)
    borders: PointsConfiguration = field(default_factory=PointsConfiguration)

    def validate(self, path: str) -> str | None:
        return validate_children(path, (("figure", self.figure), ("points", self.points), ("borders", self.borders)))


@dataclass(frozen=True)
class LineGraphConfiguration(GraphConfiguration):
    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    x_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    y_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    line: LineConfiguration = field(default_factory=LineConfiguration)
    vertical_bands: BandsConfiguration = field(default_factory=BandsConfiguration)
    horizontal_bands: BandsConfiguration = field(default_factory=BandsConfiguration)

    def validate(self, path: str) -> str | None:
        message = validate_children(
            path,
            (
                ("figure", self.figure),
                ("x_axis", self.x_axis),
                ("y_axis", self.y_axis),
                ("line", self.line),
                ("vertical_bands", self.vertical_bands),
                ("horizontal_bands", self.horizontal_bands),
            ),
        )
        if message is not None:
            return message
        if self.x_axis.is_log:
            message = self.vertical_bands.validate_log(field_path(path, "vertical_bands"))
            if message is not None:
                return message
        if self.y_axis.is_log:
            return self.horizontal_bands.validate_log(field_path(path, "horizontal_bands"))
        return None


@dataclass(frozen=True)
class LinesGraphConfiguration(LineGraphConfiguration):
    """Configure a graph of several lines.

    With `stacking`, lines are first unified onto a shared x grid and then accumulated;
    `PERCENTS` and `FRACTIONS` normalize the total at each x to 100 or 1.
    """

    stacking: Stacking | None = None
    show_legend: bool = False

    def validate(self, path: str) -> str | None:
        message = super().validate(path)
        if message is not None:
            return message
        if self.stacking is not None and self.stacking != Stacking.VALUES and self.y_axis.is_log:
            return f"{field_path(path, 'stacking')}: {self.stacking.value} specified for a log {field_path(path, 'y_axis')}"
        return None


@dataclass(frozen=True)
class CdfGraphConfiguration(GraphConfiguration):
    """Configure a cumulative distribution graph.

    By default values are on the X axis and fractions (of the values up to and including
    each value) on the Y axis.
    """

    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    value_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    line: LineConfiguration = field(default_factory=LineConfiguration)
    orientation: ValuesOrientation = ValuesOrientation.HORIZONTAL
    show_percent: bool = False
    direction: CdfDirection = CdfDirection.UP_TO_VALUE

    def validate(self, path: str) -> str | None:
        return validate_children(
            path, (("figure", self.figure), ("value_axis", self.value_axis), ("line", self.line))
        )


@dataclass(frozen=True)
class CdfsGraphConfiguration(CdfGraphConfiguration):
    show_legend: bool = False


@dataclass(frozen=True)
class BarGraphConfiguration(GraphConfiguration):
    """Configure a bar graph.

    `bar_gap` is the fraction of each bar's slot left empty, in `[0, 1)`.
    """

    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    value_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    orientation: ValuesOrientation = ValuesOrientation.VERTICAL
    color: str | None = None
    bar_gap: float | None = None

    def validate(self, path: str) -> str | None:
        message = validate_children(path, (("figure", self.figure), ("value_axis", self.value_axis)))
        if message is not None:
            return message
        if self.bar_gap is not None:
            if not self.bar_gap >= 0:
                return f"negative {field_path(path, 'bar_gap')}: {self.bar_gap}"
            if not self.bar_gap < 1:
                return f"too-large {field_path(path, 'bar_gap')}: {self.bar_gap}"
        return _validate_color(field_path(path, "color"), self.color)


@dataclass(frozen=True)
class BarsGraphConfiguration(BarGraphConfiguration):
    stacking: Stacking | None = None
    show_legend: bool = False

    def validate(self, path: str) -> str | None:
        message = super().validate(path)
        if message is not None:
            return message
        if self.stacking is not None and self.value_axis.is_log:
            return f"{field_path(path, 'stacking')}: {self.stacking.value} specified for a log {field_path(path, 'value_axis')}"
        return None


@dataclass(frozen=True)
class DistributionGraphConfiguration(GraphConfiguration):
    figure: FigureConfiguration = field(default_factory=FigureConfiguration)
    value_axis: AxisConfiguration = field(default_factory=AxisConfiguration)
    distribution: DistributionConfiguration = field(default_factory=DistributionConfiguration)
    orientation: ValuesOrientation = ValuesOrientation.VERTICAL

    def validate(self, path: str) -> str | None:
        return validate_children(
            path,
            (("figure", self.figure), ("value_axis", self.value_axis), ("distribution", self.distribution)),
        )


@dataclass(frozen=True)
class DistributionsGraphConfiguration(DistributionGraphConfiguration):
    """Several distributions side by side, or on top of each other when `overlay`.

    A legend makes little sense unless `overlay` is also set, so it is off by default.
    """

    show_legend: bool = False
    overlay: bool = False
