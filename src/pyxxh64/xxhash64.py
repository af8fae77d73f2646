from __future__ import annotations

import struct
from typing import Optional

from .mixing import STRIPE_LEN, finalize, init_accumulators, process_stripes

_MAX_SEED = 0xFFFFFFFFFFFFFFFF


def _check_seed(seed: int) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise TypeError("seed must be an int")
    if not 0 <= seed <= _MAX_SEED:
        raise ValueError("seed must be an unsigned 64-bit integer")
    return seed


def _as_bytes(data) -> bytes:
    if isinstance(data, bytes):
        return data
    if not isinstance(data, (bytearray, memoryview)):
        raise TypeError("data must be bytes-like")
    return bytes(data)


def xxh64_intdigest(data: bytes, seed: int = 0) -> int:
    """
    Hash a complete buffer with XXH64 and return the digest as an int.

    Args:
        data: bytes, bytearray or memoryview to hash
        seed: unsigned 64-bit seed (default: 0)

    Returns:
        The 64-bit digest in ``range(2**64)``.

    Raises:
        TypeError: If data is not bytes-like or seed is not an int
        ValueError: If seed does not fit in 64 unsigned bits
    """
    seed = _check_seed(seed)
    raw = _as_bytes(data)
    accs, offset = init_accumulators(seed), 0
    if len(raw) >= STRIPE_LEN:
        accs, offset = process_stripes(accs, raw, 0, len(raw))
    return finalize(accs, seed, len(raw), raw, offset)


def xxh64_digest(data: bytes, seed: int = 0) -> bytes:
    """Big-endian 8-byte form of :func:`xxh64_intdigest`."""
    return struct.pack(">Q", xxh64_intdigest(data, seed))


def xxh64_hexdigest(data: bytes, seed: int = 0) -> str:
    return xxh64_digest(data, seed).hex()


def xxh64_str(text: str, seed: int = 0) -> int:
    """Hash the UTF-8 encoding of ``text``."""
    if not isinstance(text, str):
        raise TypeError("text must be a str")
    return xxh64_intdigest(text.encode("utf-8"), seed)


class Xxh64:
    """
    Streaming XXH64 hasher.

    Input may be split across any number of ``write`` calls; the digest only
    depends on the concatenated bytes and the seed. ``finish`` does not
    consume the state, so writing may continue afterwards.

    ``update``/``digest``/``hexdigest``/``intdigest``/``copy`` mirror
    hashlib-style objects.
    """

    name = "xxh64"
    digest_size = 8
    block_size = STRIPE_LEN

    def __init__(self, seed: int = 0):
        self._seed = _check_seed(seed)
        self._accs = init_accumulators(self._seed)
        self._buffer = b""
        self._total_len = 0

    @classmethod
    def with_seed(cls, seed: int) -> "Xxh64":
        return cls(seed)

    @classmethod
    def default(cls) -> "Xxh64":
        return cls(0)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def total_len(self) -> int:
        return self._total_len

    def copy(self) -> "Xxh64":
        dup = self.__class__.__new__(self.__class__)
        dup._seed = self._seed
        dup._accs = self._accs
        dup._buffer = self._buffer
        dup._total_len = self._total_len
        return dup

    def write(self, data: bytes) -> None:
        raw = _as_bytes(data)
        size = len(raw)
        self._total_len += size

        if len(self._buffer) + size < STRIPE_LEN:
            self._buffer += raw
            return

        fill = STRIPE_LEN - len(self._buffer)
        accs, _ = process_stripes(self._accs, self._buffer + raw[:fill], 0, STRIPE_LEN)
        accs, offset = process_stripes(accs, raw, fill, size)
        self._accs = accs
        self._buffer = raw[offset:]

    def finish(self) -> int:
        return finalize(self._accs, self._seed, self._total_len, self._buffer)

    def update(self, data: bytes) -> "Xxh64":
        self.write(data)
        return self

    def intdigest(self) -> int:
        return self.finish()

    def digest(self) -> bytes:
        return struct.pack(">Q", self.finish())

    def hexdigest(self) -> str:
        return self.digest().hex()

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} seed={self._seed} total_len={self._total_len}>"


def xxh64(data: Optional[bytes] = None, seed: int = 0) -> Xxh64:
    """Convenience constructor matching hashlib-style usage."""
    hasher = Xxh64(seed)
    if data is not None:
        hasher.write(data)
    return hasher


__all__ = [
    "Xxh64",
    "xxh64",
    "xxh64_intdigest",
    "xxh64_digest",
    "xxh64_hexdigest",
    "xxh64_str",
]
