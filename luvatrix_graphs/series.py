from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from luvatrix_graphs.configuration import CdfDirection, Stacking


def unify(
    xs: Sequence[np.ndarray], ys: Sequence[np.ndarray]
) -> tuple[np.ndarray, tuple[np.ndarray, ...]]:
    """Resample lines onto the union of their x coordinates so they can be stacked.

    Each line's x coordinates must be sorted. The result has one shared x array; at each x a
    line takes its own value where it has a sample, the linear interpolation between its
    neighbouring samples inside its range, and zero outside of it.
    """
    assert len(xs) == len(ys), "unify needs one ys per xs"
    cursors = [0] * len(xs)
    unified_xs: list[float] = []
    unified_ys: list[list[float]] = [[] for _ in xs]

    while True:
        pending = [float(line_xs[cursor]) for line_xs, cursor in zip(xs, cursors) if cursor < line_xs.size]
        if not pending:
            break
        x = min(pending)
        unified_xs.append(x)
        for index, (line_xs, line_ys) in enumerate(zip(xs, ys)):
            cursor = cursors[index]
            if cursor < line_xs.size and line_xs[cursor] == x:
                unified_ys[index].append(float(line_ys[cursor]))
                cursors[index] = cursor + 1
            elif cursor == 0 or cursor >= line_xs.size:
                unified_ys[index].append(0.0)
            else:
                x0, x1 = float(line_xs[cursor - 1]), float(line_xs[cursor])
                y0, y1 = float(line_ys[cursor - 1]), float(line_ys[cursor])
                unified_ys[index].append(y0 + (y1 - y0) * (x - x0) / (x1 - x0))

    return (
        np.asarray(unified_xs, dtype=np.float64),
        tuple(np.asarray(line_ys, dtype=np.float64) for line_ys in unified_ys),
    )


def normalize_stacked(values: Sequence[np.ndarray], stacking: Stacking) -> tuple[np.ndarray, ...]:
    """Scale same-length series so that at each position their total is 100 (percents) or 1 (fractions).

    Positions whose total is zero stay zero.
    """
    if stacking == Stacking.VALUES:
        return tuple(np.asarray(series, dtype=np.float64) for series in values)
    matrix = np.vstack([np.asarray(series, dtype=np.float64) for series in values])
    totals = matrix.sum(axis=0)
    scale = 100.0 if stacking == Stacking.PERCENTS else 1.0
    with np.errstate(divide="ignore", invalid="ignore"):
        normalized = np.where(totals > 0, matrix * scale / totals, 0.0)
    return tuple(normalized)


def stack_series(values: Sequence[np.ndarray], stacking: Stacking) -> tuple[np.ndarray, ...]:
    """The cumulative top of each series when stacked in order."""
    normalized = normalize_stacked(values, stacking)
    return tuple(np.cumsum(np.vstack(normalized), axis=0))


def cdf_fractions(values: np.ndarray, direction: CdfDirection) -> tuple[np.ndarray, np.ndarray]:
    """Sorted values and, for each, the fraction of values up to (or down to) it, inclusive.

    Both directions stay within `(0, 1]`: up-to fractions grow from `1/n` to 1, down-to
    fractions shrink from 1 to `1/n`.
    """
    ordered = np.sort(np.asarray(values, dtype=np.float64))
    count = ordered.size
    if direction == CdfDirection.UP_TO_VALUE:
        fractions = np.arange(1, count + 1, dtype=np.float64) / count
    else:
        fractions = np.arange(count, 0, -1, dtype=np.float64) / count
    return ordered, fractions
