"""
Pure-Python XXH64 hashing: one-shot and streaming.
"""

from .xxhash64 import (
    Xxh64,
    xxh64,
    xxh64_digest,
    xxh64_hexdigest,
    xxh64_intdigest,
    xxh64_str,
)
from .hasher import BuildXxh64, Xxh64Digest, hash_key, stable_hash
from .vectorized import (
    hash_arrow_array,
    hash_pandas_series,
    hash_polars_series,
)

__all__ = [
    "Xxh64",
    "xxh64",
    "xxh64_digest",
    "xxh64_hexdigest",
    "xxh64_intdigest",
    "xxh64_str",
    "BuildXxh64",
    "Xxh64Digest",
    "hash_key",
    "stable_hash",
    "hash_arrow_array",
    "hash_pandas_series",
    "hash_polars_series",
]
