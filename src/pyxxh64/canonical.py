from __future__ import annotations

import math
import struct
from typing import Any, Callable

try:
    import numpy as _np  # type: ignore

    _NUMPY_GENERIC = _np.generic  # type: ignore[attr-defined]
except Exception:  # pragma: no cover - numpy is optional
    _NUMPY_GENERIC = ()  # type: ignore[assignment]

Write = Callable[[bytes], None]

_LENGTH = struct.Struct("<Q")
_DOUBLE = struct.Struct("<d")
_CANONICAL_NAN = _DOUBLE.pack(float("nan"))

# utf-8 never produces this byte, so it cleanly terminates a string.
_STR_TERMINATOR = b"\xff"


def _length(value: int) -> bytes:
    return _LENGTH.pack(value)


def _double(value: float) -> bytes:
    if math.isnan(value):
        return _CANONICAL_NAN
    if value == 0.0:
        value = 0.0
    return _DOUBLE.pack(value)


def _write_int(value: int, write: Write) -> None:
    size = max(1, (value.bit_length() + 8) // 8)
    write(b"I")
    write(_length(size))
    write(int(value).to_bytes(size, byteorder="little", signed=True))


def _write_float(value: float, write: Write) -> None:
    # 2.0 == 2, so integral floats share the int encoding.
    if math.isfinite(value) and value.is_integer():
        _write_int(int(value), write)
        return
    write(b"F")
    write(_double(value))


def _write_complex(value: complex, write: Write) -> None:
    if value.imag == 0:
        _write_float(value.real, write)
        return
    write(b"C")
    write(_double(value.real))
    write(_double(value.imag))


def _write_str(value: str, write: Write) -> None:
    write(b"S")
    write(value.encode("utf-8"))
    write(_STR_TERMINATOR)


def _write_bytes(value, write: Write) -> None:
    data = bytes(value)
    write(b"Y")
    write(_length(len(data)))
    write(data)


def _write_tuple(value: tuple, write: Write) -> None:
    write(b"T")
    write(_length(len(value)))
    for item in value:
        feed_key(item, write)


def _write_set(value, write: Write) -> None:
    members = sorted(encode_key(item) for item in value)
    write(b"E")
    write(_length(len(members)))
    for member in members:
        write(_length(len(member)))
        write(member)


# bool is an int subclass, so True and 1 encode alike.
_WRITERS = (
    (int, _write_int),
    (float, _write_float),
    (complex, _write_complex),
    (str, _write_str),
    ((bytes, bytearray, memoryview), _write_bytes),
    (tuple, _write_tuple),
    ((frozenset, set), _write_set),
)


def feed_key(value: Any, write: Write) -> None:
    """
    Feed the key encoding of ``value`` to ``write``.

    Values that compare equal encode to the same bytes, so the resulting
    hash can back a dict or set:

    - bool, int and integral floats share one signed-integer encoding
    - other floats are IEEE-754 doubles, with a single NaN form
    - complex numbers with a zero imaginary part encode as their real part
    - str is utf-8 followed by a 0xFF terminator
    - bytes-like values and tuples are length-prefixed
    - set/frozenset members are sorted by their encoded bytes
    - numpy scalars are converted to Python scalars

    Raises:
        TypeError: If value (or a nested item) has no key encoding
    """
    if _NUMPY_GENERIC and isinstance(value, _NUMPY_GENERIC):
        value = value.item()

    if value is None:
        write(b"N")
        return
    for types, writer in _WRITERS:
        if isinstance(value, types):
            writer(value, write)
            return
    raise TypeError(f"Unsupported type for key hashing: {type(value)!r}")


def encode_key(value: Any) -> bytes:
    buf = bytearray()
    feed_key(value, buf.extend)
    return bytes(buf)


__all__ = ["feed_key", "encode_key"]
