from __future__ import annotations

from typing import Any

from .hasher import hash_key


def hash_pandas_series(series: Any, seed: int = 0):
    """
    Hash a pandas Series into a uint64 Series.
    """
    try:
        import pandas as pd  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pandas to use hash_pandas_series: pip install pandas"
        ) from exc

    hashes = [hash_key(val, seed=seed) for val in series]
    return pd.Series(
        hashes,
        index=getattr(series, "index", None),
        name=getattr(series, "name", None),
        dtype="uint64",
    )


def hash_arrow_array(array: Any, seed: int = 0):
    """
    Hash a pyarrow Array (or values coercible to one) into a uint64 Array.
    """
    try:
        import pyarrow as pa  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install pyarrow to use hash_arrow_array: pip install pyarrow"
        ) from exc

    arr = array if hasattr(array, "to_pylist") else pa.array(array)
    return pa.array([hash_key(val, seed=seed) for val in arr.to_pylist()], type=pa.uint64())


def hash_polars_series(series: Any, seed: int = 0):
    """
    Hash a polars Series into a UInt64 Series.
    """
    try:
        import polars as pl  # type: ignore
    except ModuleNotFoundError as exc:  # pragma: no cover - optional dependency
        raise ImportError(
            "Install polars to use hash_polars_series: pip install polars"
        ) from exc

    ser = series if isinstance(series, pl.Series) else pl.Series(series)
    hashes = [hash_key(val, seed=seed) for val in ser.to_list()]
    return pl.Series(name=ser.name or "hash", values=hashes, dtype=pl.UInt64)


__all__ = ["hash_arrow_array", "hash_pandas_series", "hash_polars_series"]
