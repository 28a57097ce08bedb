from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache
from numbers import Real
from typing import Any, Union

import matplotlib
from matplotlib.colors import CSS4_COLORS, to_hex
import numpy as np

from luvatrix_graphs.errors import PlotDataError


_HEX_COLOR = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_NUMBER = r"\s*[-+]?(\d+(\.\d*)?|\.\d+)\s*"
_PERCENT = r"\s*[-+]?(\d+(\.\d*)?|\.\d+)%?\s*"
_RGB_COLOR = re.compile(rf"^rgb\(({_PERCENT}),({_PERCENT}),({_PERCENT})\)$")
_RGBA_COLOR = re.compile(rf"^rgba\(({_PERCENT}),({_PERCENT}),({_PERCENT}),({_NUMBER})\)$")
_HSL_COLOR = re.compile(rf"^hs[lv]\(({_NUMBER}),({_PERCENT}),({_PERCENT})\)$")
_HSLA_COLOR = re.compile(rf"^hs[lv]a\(({_NUMBER}),({_PERCENT}),({_PERCENT}),({_NUMBER})\)$")

_CSS_NAMES = frozenset(name.lower() for name in CSS4_COLORS) | {"transparent"}

NAMED_PALETTE_STOPS = 11


def is_valid_color(text: str) -> bool:
    """Whether `text` names a color a declarative charting backend understands.

    Accepts CSS color names (any case), hex notation with 3/4/6/8 digits, and the
    functional `rgb`/`rgba`/`hsl`/`hsla` forms. The empty string is not a color.
    """
    if not isinstance(text, str):
        return False
    value = text.strip()
    if not value:
        return False
    if value.lower() in _CSS_NAMES:
        return True
    if value.startswith("#"):
        return _HEX_COLOR.match(value) is not None
    lowered = value.lower()
    return any(
        pattern.match(lowered) is not None for pattern in (_RGB_COLOR, _RGBA_COLOR, _HSL_COLOR, _HSLA_COLOR)
    )


@lru_cache(maxsize=1)
def _palette_names() -> dict[str, str]:
    names: dict[str, str] = {}
    for name in sorted(matplotlib.colormaps):
        names.setdefault(name.lower(), name)
    return names


def is_named_palette(name: str) -> bool:
    return isinstance(name, str) and name.lower() in _palette_names()


@lru_cache(maxsize=64)
def named_palette_stops(name: str) -> tuple[tuple[float, str], ...]:
    """Expand a named continuous palette into evenly spaced `(position, hex)` stops in `[0, 1]`."""
    resolved = _palette_names().get(name.lower())
    if resolved is None:
        raise KeyError(f"unknown color palette: {name}")
    cmap = matplotlib.colormaps[resolved]
    positions = np.linspace(0.0, 1.0, NAMED_PALETTE_STOPS)
    return tuple((float(p), to_hex(cmap(float(p)), keep_alpha=False)) for p in positions)


@dataclass(frozen=True)
class NamedColor:
    """An explicit color name, or a category label when the palette is categorical."""

    name: str


@dataclass(frozen=True)
class NumericColor:
    value: float


@dataclass(frozen=True)
class EmptyColor:
    """Do not draw the element."""


EMPTY_COLOR = EmptyColor()

ColorValue = Union[NamedColor, NumericColor, EmptyColor]


def color_value(raw: Any) -> ColorValue:
    if isinstance(raw, (NamedColor, NumericColor, EmptyColor)):
        return raw
    if raw is None:
        return EMPTY_COLOR
    if isinstance(raw, str):
        return NamedColor(raw) if raw != "" else EMPTY_COLOR
    if isinstance(raw, (Real, np.number)) and not isinstance(raw, (bool, np.bool_)):
        return NumericColor(float(raw))
    raise PlotDataError(f"unsupported color value: {raw!r}")


def color_values(raw: Any, *, label: str = "colors") -> tuple[ColorValue, ...] | None:
    """Resolve a per-element color array into `ColorValue`s, once, at construction time."""
    if raw is None:
        return None
    if isinstance(raw, np.ndarray):
        if raw.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        raw = raw.tolist()
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise PlotDataError(f"unsupported {label} input type: {type(raw)!r}")
    try:
        return tuple(color_value(value) for value in raw)
    except PlotDataError as exc:
        raise PlotDataError(f"{label}: {exc}") from exc


def color_kind(values: Sequence[ColorValue] | None) -> str | None:
    """`"named"`, `"numeric"`, `"mixed"` or `None` (absent or all empty)."""
    if values is None:
        return None
    kinds = {type(value) for value in values if not isinstance(value, EmptyColor)}
    if not kinds:
        return None
    if kinds == {NamedColor}:
        return "named"
    if kinds == {NumericColor}:
        return "numeric"
    return "mixed"


def visible_color_mask(values: Sequence[ColorValue]) -> np.ndarray:
    return np.asarray([not isinstance(value, EmptyColor) for value in values], dtype=bool)


def color_names(values: Sequence[ColorValue]) -> np.ndarray:
    return np.asarray([value.name if isinstance(value, NamedColor) else "" for value in values], dtype=object)


def color_numbers(values: Sequence[ColorValue]) -> np.ndarray:
    return np.asarray(
        [value.value if isinstance(value, NumericColor) else np.nan for value in values], dtype=np.float64
    )
