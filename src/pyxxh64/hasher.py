from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any

from .canonical import feed_key
from .xxhash64 import Xxh64, _check_seed


@dataclass(frozen=True)
class Xxh64Digest:
    _value: int

    def intdigest(self) -> int:
        return self._value

    def digest(self) -> bytes:
        return struct.pack(">Q", self._value)

    def hexdigest(self) -> str:
        return self.digest().hex()

    def __int__(self) -> int:
        return self._value


@dataclass(frozen=True)
class BuildXxh64:
    """
    Factory of fresh hashers for hash-table style consumers.

    ``build_hasher`` always returns a hasher seeded with 0; the builder's own
    ``seed`` is not propagated. Use :func:`hash_key` for seeded key hashing.
    """

    seed: int = 0

    def __post_init__(self):
        _check_seed(self.seed)

    def build_hasher(self) -> Xxh64:
        return Xxh64.with_seed(0)

    def hash_one(self, value: Any) -> int:
        hasher = self.build_hasher()
        feed_key(value, hasher.write)
        return hasher.finish()


def hash_key(value: Any, seed: int = 0) -> int:
    """
    Hash a hashable Python value with XXH64.

    Args:
        value: None, bool, int, float, complex, str, bytes-like, tuple or (frozen)set
        seed: unsigned 64-bit seed (default: 0)

    Returns:
        The 64-bit digest as an int. Values equal under ``==`` hash alike.

    Raises:
        TypeError: If value contains an unsupported type
        ValueError: If seed does not fit in 64 unsigned bits
    """
    hasher = Xxh64(seed)
    feed_key(value, hasher.write)
    return hasher.finish()


def stable_hash(value: Any, seed: int = 0) -> Xxh64Digest:
    return Xxh64Digest(hash_key(value, seed))


__all__ = ["BuildXxh64", "Xxh64Digest", "hash_key", "stable_hash"]
