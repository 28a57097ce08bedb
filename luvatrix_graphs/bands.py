"""Geometry of the reference bands drawn behind (fills) and over (lines) the data.

Vertical and horizontal bands are lines at fixed coordinates, splitting the plotted range
into low, middle and high rectangles. Diagonal bands are lines parallel to `y = x`: shifted
by adding the offset on linear axes, or by multiplying by it on log axes (so they stay
straight once plotted). Both cases share the same code through `BandOperations`.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from luvatrix_graphs.configuration import BandConfiguration, BandsConfiguration


BandName = Literal["low", "middle", "high"]
Point = tuple[float, float]


@dataclass(frozen=True)
class BandOperations:
    threshold: float
    increase: Callable[[float, float], float]
    decrease: Callable[[float, float], float]


LINEAR_OPERATIONS = BandOperations(threshold=0.0, increase=operator.add, decrease=operator.sub)
LOG_OPERATIONS = BandOperations(threshold=1.0, increase=operator.mul, decrease=operator.truediv)


@dataclass(frozen=True)
class BandPolygon:
    band: BandName
    xs: tuple[float, ...]
    ys: tuple[float, ...]
    color: str | None


@dataclass(frozen=True)
class BandLine:
    band: BandName
    xs: tuple[float, float]
    ys: tuple[float, float]
    color: str | None
    width: float
    is_dashed: bool


@dataclass(frozen=True)
class BandShapes:
    fills: tuple[BandPolygon, ...] = ()
    lines: tuple[BandLine, ...] = ()


def _bands(bands: BandsConfiguration) -> tuple[tuple[BandName, BandConfiguration], ...]:
    return (("low", bands.low), ("middle", bands.middle), ("high", bands.high))


def axis_band_shapes(
    bands: BandsConfiguration,
    *,
    vertical: bool,
    minimum: float,
    maximum: float,
    cross_minimum: float,
    cross_maximum: float,
    shift: float = 0.0,
) -> BandShapes:
    """Shapes of vertical (`x = offset`) or horizontal (`y = offset`) bands.

    `minimum`/`maximum` bound the banded axis and `cross_minimum`/`cross_maximum` the other
    one, all in plotted coordinates; offsets are moved by `shift` (the log regularization)
    to get there.
    """

    def place(first: tuple[float, float], second: tuple[float, float]) -> tuple[tuple[float, ...], tuple[float, ...]]:
        return (first, second) if vertical else (second, first)

    offsets = {
        name: None if band.offset is None else band.offset + shift for name, band in _bands(bands)
    }
    regions: dict[BandName, tuple[float | None, float | None]] = {
        "low": (minimum, offsets["low"]),
        "middle": (offsets["low"], offsets["high"]),
        "high": (offsets["high"], maximum),
    }

    fills: list[BandPolygon] = []
    for name, band in _bands(bands):
        start, end = regions[name]
        if not band.is_filled or start is None or end is None:
            continue
        start, end = max(start, minimum), min(end, maximum)
        if not start < end:
            continue
        xs, ys = place(
            (start, end, end, start),
            (cross_minimum, cross_minimum, cross_maximum, cross_maximum),
        )
        fills.append(BandPolygon(band=name, xs=tuple(xs), ys=tuple(ys), color=band.color))

    lines: list[BandLine] = []
    for name, band in _bands(bands):
        offset = offsets[name]
        if not band.has_line or offset is None or not minimum <= offset <= maximum:
            continue
        xs, ys = place((offset, offset), (cross_minimum, cross_maximum))
        lines.append(
            BandLine(band=name, xs=tuple(xs), ys=tuple(ys), color=band.color, width=band.width, is_dashed=band.is_dashed)
        )
    return BandShapes(fills=tuple(fills), lines=tuple(lines))


@dataclass(frozen=True)
class _DiagonalLine:
    position: Literal["above", "inside", "below"]
    start: Point
    end: Point


def _diagonal_line(offset: float, low: float, high: float, operations: BandOperations) -> _DiagonalLine:
    """Clip the shifted diagonal to the `[low, high]` square.

    At or above the threshold, the line enters through the left edge and leaves through the
    top; below it, it enters through the bottom and leaves through the right edge.
    """
    increase, decrease = operations.increase, operations.decrease
    if offset >= operations.threshold:
        start = (low, increase(low, offset))
        end = (decrease(high, offset), high)
        position = "above" if start[1] >= high else "inside"
    else:
        start = (decrease(low, offset), low)
        end = (high, increase(high, offset))
        position = "below" if start[0] >= high else "inside"
    return _DiagonalLine(position=position, start=start, end=end)


def _diagonal_region(
    lower: _DiagonalLine | None, upper: _DiagonalLine | None, low: float, high: float
) -> list[Point] | None:
    if lower is not None:
        if lower.position == "above":
            return None
        if lower.position == "below":
            lower = None
    if upper is not None:
        if upper.position == "below":
            return None
        if upper.position == "above":
            upper = None

    if lower is not None:
        lower_chain = [lower.start, lower.end]
    elif upper is not None and upper.start[1] <= low and upper.start[0] > low:
        lower_chain = [(high, low)]
    else:
        lower_chain = [(low, low), (high, low)]
    if upper is not None:
        upper_chain = [upper.end, upper.start]
    elif lower is not None and lower.end[1] >= high and lower.end[0] < high:
        upper_chain = [(low, high)]
    else:
        upper_chain = [(high, high), (low, high)]

    points = list(lower_chain)
    if lower_chain[-1][1] < high and upper_chain[0][0] < high:
        points.append((high, high))
    points.extend(upper_chain)
    if upper_chain[-1][1] > low and lower_chain[0][0] > low:
        points.append((low, low))
    return points


def diagonal_band_shapes(
    bands: BandsConfiguration, *, minimum: float, maximum: float, operations: BandOperations
) -> BandShapes:
    """Shapes of bands around `y = x`, clipped to the square spanned by both axes' bounds."""
    assert maximum > minimum, "empty diagonal bands square"
    diagonals = {
        name: None if band.offset is None else _diagonal_line(band.offset, minimum, maximum, operations)
        for name, band in _bands(bands)
    }

    fills: list[BandPolygon] = []
    for name, band in _bands(bands):
        if not band.is_filled:
            continue
        if name == "low":
            if diagonals["low"] is None:
                continue
            region = _diagonal_region(None, diagonals["low"], minimum, maximum)
        elif name == "middle":
            if diagonals["low"] is None or diagonals["high"] is None:
                continue
            region = _diagonal_region(diagonals["low"], diagonals["high"], minimum, maximum)
        else:
            if diagonals["high"] is None:
                continue
            region = _diagonal_region(diagonals["high"], None, minimum, maximum)
        if region is None:
            continue
        fills.append(
            BandPolygon(
                band=name,
                xs=tuple(x for x, _y in region),
                ys=tuple(y for _x, y in region),
                color=band.color,
            )
        )

    lines: list[BandLine] = []
    for name, band in _bands(bands):
        diagonal = diagonals[name]
        if not band.has_line or diagonal is None or diagonal.position != "inside":
            continue
        lines.append(
            BandLine(
                band=name,
                xs=(diagonal.start[0], diagonal.end[0]),
                ys=(diagonal.start[1], diagonal.end[1]),
                color=band.color,
                width=band.width,
                is_dashed=band.is_dashed,
            )
        )
    return BandShapes(fills=tuple(fills), lines=tuple(lines))
