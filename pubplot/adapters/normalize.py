from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from pubplot.errors import InvalidSeriesData, MismatchedSeriesLength


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(
    y: Any = None,
    *,
    x: Any = None,
    data: Any = None,
) -> tuple[np.ndarray, np.ndarray]:
    """Coerce user input into a pair of equal-length float64 arrays.

    ``y`` and ``x`` may be sequences, numpy arrays, pandas Series, torch
    tensors, or column names of the ``data`` DataFrame. Omitting ``x`` uses the
    sample index. Non-finite entries are kept; renderers skip them.
    """
    if y is None:
        raise InvalidSeriesData("y input is required")
    y_arr = coerce_values(y, label="y", data=data)
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = coerce_values(x, label="x", data=data)
    if x_arr.shape != y_arr.shape:
        raise MismatchedSeriesLength(x_arr.size, y_arr.size)
    return x_arr, y_arr


def coerce_values(value: Any, *, label: str, data: Any = None) -> np.ndarray:
    """Return an owned, read-only 1-D float64 copy of ``value``."""
    if isinstance(value, str):
        value = _column(data, value)
    arr = np.array(_as_float_array(value, label=label), dtype=np.float64, copy=True)
    arr.flags.writeable = False
    return arr


def _column(data: Any, name: str) -> Any:
    if data is None:
        raise InvalidSeriesData(f"column name {name!r} given without `data=`")
    if pd is None:
        raise InvalidSeriesData("pandas is required when using `data=`")
    if not isinstance(data, pd.DataFrame):
        raise InvalidSeriesData("`data` must be a pandas DataFrame")
    if name not in data.columns:
        raise InvalidSeriesData(f"column not found: {name}")
    return data[name]


def _as_float_array(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        if value.ndim != 1:
            raise InvalidSeriesData(f"{label} must be 1-D")
        return value.detach().cpu().to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        value = value.to_numpy()
    elif isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        value = np.asarray(value, dtype=object)
    elif not isinstance(value, np.ndarray):
        raise InvalidSeriesData(f"unsupported {label} input type: {type(value)!r}")

    if value.ndim != 1:
        raise InvalidSeriesData(f"{label} must be 1-D")
    if value.dtype.kind in "iufb":
        return value.astype(np.float64, copy=False)

    # Object arrays: None marks a gap, anything float() accepts is a value.
    out = np.empty(value.shape[0], dtype=np.float64)
    for i, raw in enumerate(value.tolist()):
        try:
            out[i] = np.nan if raw is None else float(raw)
        except (TypeError, ValueError) as exc:
            raise InvalidSeriesData(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
