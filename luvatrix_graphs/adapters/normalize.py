from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from numbers import Integral
from typing import Any

import numpy as np

from luvatrix_graphs.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def coerce_numeric(value: Any, *, label: str) -> np.ndarray:
    """Coerce a 1-D caller array (list, tuple, numpy, pandas, torch) into float64."""
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def coerce_optional_numeric(value: Any, *, label: str) -> np.ndarray | None:
    if value is None:
        return None
    return coerce_numeric(value, label=label)


def coerce_numeric_vectors(value: Any, *, label: str) -> tuple[np.ndarray, ...]:
    """Coerce a sequence of 1-D arrays; the arrays may differ in length."""
    if pd is not None and isinstance(value, pd.DataFrame):
        return tuple(_coerce_ndarray(value[column].to_numpy(), label=f"{label}[{column}]") for column in value.columns)
    if isinstance(value, np.ndarray) and value.ndim == 2:
        return tuple(_coerce_ndarray(row, label=f"{label}[{index}]") for index, row in enumerate(value))
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return tuple(coerce_numeric(item, label=f"{label}[{index}]") for index, item in enumerate(value))
    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def coerce_matrix(value: Any, *, label: str) -> np.ndarray:
    """Coerce a rows x columns matrix of numbers into a 2-D float64 array."""
    if torch is not None and isinstance(value, torch.Tensor):
        value = value.detach().cpu().to(torch.float64).numpy()
    if pd is not None and isinstance(value, pd.DataFrame):
        value = value.to_numpy()
    arr = np.asarray(value, dtype=object)
    if arr.ndim != 2:
        raise PlotDataError(f"{label} must be 2-D")
    return _coerce_ndarray(arr.reshape(-1), label=label).reshape(arr.shape)


def coerce_strings(value: Any, *, label: str) -> tuple[str, ...] | None:
    if value is None:
        return None
    if pd is not None and isinstance(value, pd.Series):
        value = value.tolist()
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
    out: list[str] = []
    for i, raw in enumerate(value):
        if not isinstance(raw, str):
            raise PlotDataError(f"{label} contains non-string value at index {i}: {raw!r}")
        out.append(raw)
    return tuple(out)


def coerce_edges(value: Any, *, label: str) -> tuple[tuple[int, int], ...] | None:
    if value is None:
        return None
    if isinstance(value, np.ndarray):
        value = value.tolist()
    if not isinstance(value, Sequence):
        raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")
    out: list[tuple[int, int]] = []
    for i, raw in enumerate(value):
        if not isinstance(raw, Sequence) or len(raw) != 2:
            raise PlotDataError(f"{label} entry at index {i} is not a (from, to) pair: {raw!r}")
        first, second = raw
        if not isinstance(first, Integral) or not isinstance(second, Integral):
            raise PlotDataError(f"{label} entry at index {i} contains non-integer indices: {raw!r}")
        out.append((int(first), int(second)))
    return tuple(out)


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)):
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
