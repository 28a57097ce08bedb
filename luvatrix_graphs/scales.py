from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from luvatrix_graphs.colors import named_palette_stops
from luvatrix_graphs.configuration import DEFAULT_SIZE_RANGE, ColorPalette, ScaleConfiguration, SizeRangeConfiguration


# Ticks inside each decade, as (log10 offset, leading digit).
_DECADE_STEPS = ((0.0, "1"), (math.log10(2.0), "2"), (math.log10(5.0), "5"))
_MAX_LABELED_TICKS = 7
_EPSILON = 1e-9


@dataclass(frozen=True)
class NormalizedColorScale:
    """Gradient stops in `[0, 1]`, and the (possibly log10) values mapped to 0 and 1."""

    stops: tuple[tuple[float, str], ...]
    cmin: float
    cmax: float


@dataclass(frozen=True)
class LogTicks:
    positions: tuple[float, ...]
    labels: tuple[str, ...]


def size_range_bounds(size_range: SizeRangeConfiguration) -> tuple[float, float]:
    default_smallest, default_largest = DEFAULT_SIZE_RANGE
    smallest, largest = size_range.smallest, size_range.largest
    if smallest is None and largest is None:
        return default_smallest, default_largest
    span = default_largest - default_smallest
    if smallest is None:
        smallest = max(0.0, largest - span)
    if largest is None:
        largest = smallest + span
    return float(smallest), float(largest)


def normalize_sizes(values: np.ndarray, scale: ScaleConfiguration, size_range: SizeRangeConfiguration) -> np.ndarray:
    """Map raw sizes to pixel diameters.

    Without a size range, log regularization or bounds, sizes are already pixels. Otherwise
    the (optionally log10) values are rescaled linearly from their bounds into the size
    range. A zero size means "hidden" and stays zero.
    """
    out = np.asarray(values, dtype=np.float64).copy()
    if not (size_range.is_set or scale.is_log or scale.minimum is not None or scale.maximum is not None):
        return out

    visible = out > 0
    if not np.any(visible):
        return out
    smallest, largest = size_range_bounds(size_range)

    minimum = scale.minimum if scale.minimum is not None else float(np.min(out[visible]))
    maximum = scale.maximum if scale.maximum is not None else float(np.max(out[visible]))
    scaled = out[visible]
    if scale.is_log:
        regularization = scale.log_regularization
        scaled = np.log10(scaled + regularization)
        minimum = math.log10(minimum + regularization)
        maximum = math.log10(maximum + regularization)

    if maximum == minimum:
        out[visible] = (smallest + largest) / 2.0
    else:
        rescaled = smallest + (scaled - minimum) * (largest - smallest) / (maximum - minimum)
        out[visible] = np.clip(rescaled, smallest, largest)
    return out


def color_scale_values(values: np.ndarray, scale: ScaleConfiguration) -> np.ndarray:
    """Values as placed on the color axis: `log10(value + regularization)` in log mode."""
    values = np.asarray(values, dtype=np.float64)
    if not scale.is_log:
        return values.copy()
    return np.log10(values + scale.log_regularization)


def normalize_color_palette(
    palette: ColorPalette,
    scale: ScaleConfiguration,
    *,
    minimum: float | None = None,
    maximum: float | None = None,
    data_minimum: float | None = None,
    data_maximum: float | None = None,
) -> NormalizedColorScale:
    """Remap a continuous (or named) palette into `[0, 1]` gradient stops.

    The bounds come from the explicit `minimum`/`maximum`, then the scale configuration,
    then the palette's own values; a named palette has no values of its own, so the data
    bounds are used instead. In log mode stops and bounds go through
    `log10(value + regularization)` first.
    """
    if isinstance(palette, str):
        raw_stops = named_palette_stops(palette)
        own_minimum, own_maximum = data_minimum, data_maximum
    else:
        raw_stops = tuple((float(value), color) for value, color in palette)
        own_minimum = min(value for value, _color in raw_stops)
        own_maximum = max(value for value, _color in raw_stops)

    cmin = _first_set(minimum, scale.minimum, own_minimum, 0.0)
    cmax = _first_set(maximum, scale.maximum, own_maximum, 1.0)
    if scale.is_log:
        regularization = scale.log_regularization
        cmin = math.log10(cmin + regularization)
        cmax = math.log10(cmax + regularization)

    if isinstance(palette, str):
        stops = raw_stops
    else:
        assert cmax > cmin, "degenerate color palette range"
        stops = tuple((_unit(_log_value(value, scale), cmin, cmax), color) for value, color in raw_stops)

    if scale.reverse_scale:
        stops = tuple((1.0 - position, color) for position, color in reversed(stops))
    return NormalizedColorScale(stops=stops, cmin=cmin, cmax=cmax)


def log_ticks(values: Sequence[float] | np.ndarray, scale: ScaleConfiguration) -> LogTicks:
    """Color bar ticks for a log color scale, in log10 space."""
    assert scale.is_log, "log ticks of a linear scale"
    regularization = scale.log_regularization
    finite = np.asarray(values, dtype=np.float64)
    finite = finite[np.isfinite(finite)]
    minimum = scale.minimum if scale.minimum is not None else (float(np.min(finite)) if finite.size else None)
    maximum = scale.maximum if scale.maximum is not None else (float(np.max(finite)) if finite.size else None)
    if minimum is None or maximum is None:
        return LogTicks(positions=(), labels=())
    return _decade_ticks(math.log10(minimum + regularization), math.log10(maximum + regularization))


def log_axis_ticks(minimum: float, maximum: float) -> LogTicks:
    """Ticks for a log x/y axis; `minimum` and `maximum` are already-shifted positive values."""
    ticks = _decade_ticks(math.log10(minimum), math.log10(maximum))
    return LogTicks(positions=tuple(10.0**position for position in ticks.positions), labels=ticks.labels)


def _decade_ticks(cmin: float, cmax: float) -> LogTicks:
    int_min = math.floor(cmin)
    int_max = math.ceil(cmax)
    if int_min == int_max:
        return LogTicks(positions=(), labels=())

    candidates: list[tuple[float, str, bool]] = []
    for decade in range(int_min, int_max):
        for step, digit in _DECADE_STEPS:
            candidates.append((decade + step, f"{digit}e{decade}", step == 0.0))
    candidates.append((float(int_max), f"1e{int_max}", True))

    kept = [
        candidate for candidate in candidates if cmin - _EPSILON <= candidate[0] <= cmax + _EPSILON
    ]
    label_all = len(kept) <= _MAX_LABELED_TICKS
    return LogTicks(
        positions=tuple(position for position, _label, _is_decade in kept),
        labels=tuple(label if is_decade or label_all else "" for _position, label, is_decade in kept),
    )


def _first_set(*values: float | None) -> float:
    for value in values:
        if value is not None:
            return float(value)
    raise AssertionError("no value set")


def _log_value(value: float, scale: ScaleConfiguration) -> float:
    if not scale.is_log:
        return value
    return math.log10(value + scale.log_regularization)


def _unit(value: float, cmin: float, cmax: float) -> float:
    return min(1.0, max(0.0, (value - cmin) / (cmax - cmin)))
