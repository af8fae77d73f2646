from __future__ import annotations

import struct
from typing import Tuple

_MASK_64 = 0xFFFFFFFFFFFFFFFF

PRIME64_1 = 0x9E3779B185EBCA87
PRIME64_2 = 0xC2B2AE3D27D4EB4F
PRIME64_3 = 0x165667B19E3779F9
PRIME64_4 = 0x85EBCA77C2B2AE63
PRIME64_5 = 0x27D4EB2F165667C5

STRIPE_LEN = 32

_STRIPE = struct.Struct("<QQQQ")
_U64 = struct.Struct("<Q")
_U32 = struct.Struct("<I")

Accumulators = Tuple[int, int, int, int]


def _rotl(x: int, b: int) -> int:
    """Rotate left for 64-bit values."""
    return ((x << b) | (x >> (64 - b))) & _MASK_64


def xxh_round(acc: int, lane: int) -> int:
    """Fold one 64-bit word into an accumulator lane."""
    acc = (acc + lane * PRIME64_2) & _MASK_64
    acc = _rotl(acc, 31)
    return (acc * PRIME64_1) & _MASK_64


def merge_accumulator(acc: int, lane: int) -> int:
    acc ^= xxh_round(0, lane)
    return (acc * PRIME64_1 + PRIME64_4) & _MASK_64


def init_accumulators(seed: int) -> Accumulators:
    return (
        (seed + PRIME64_1 + PRIME64_2) & _MASK_64,
        (seed + PRIME64_2) & _MASK_64,
        seed,
        (seed - PRIME64_1) & _MASK_64,
    )


def process_stripes(accs: Accumulators, data, offset: int, end: int) -> Tuple[Accumulators, int]:
    """
    Fold every complete 32-byte stripe of ``data[offset:end]`` into the lanes.

    Returns the updated lanes and the offset just past the last stripe consumed.
    Trailing bytes that do not fill a stripe are left untouched.
    """
    acc1, acc2, acc3, acc4 = accs
    unpack = _STRIPE.unpack_from
    while end - offset >= STRIPE_LEN:
        w1, w2, w3, w4 = unpack(data, offset)
        acc1 = xxh_round(acc1, w1)
        acc2 = xxh_round(acc2, w2)
        acc3 = xxh_round(acc3, w3)
        acc4 = xxh_round(acc4, w4)
        offset += STRIPE_LEN
    return (acc1, acc2, acc3, acc4), offset


def converge(accs: Accumulators) -> int:
    # Lane order matters for the merge passes.
    acc1, acc2, acc3, acc4 = accs
    acc = (_rotl(acc1, 1) + _rotl(acc2, 7) + _rotl(acc3, 12) + _rotl(acc4, 18)) & _MASK_64
    acc = merge_accumulator(acc, acc1)
    acc = merge_accumulator(acc, acc2)
    acc = merge_accumulator(acc, acc3)
    return merge_accumulator(acc, acc4)


def consume_tail(acc: int, data, offset: int, end: int) -> int:
    """
    Fold the final (< 32 byte) remainder into ``acc``.

    Eight-byte words are consumed first, then at most one four-byte word,
    then single bytes.
    """
    while end - offset >= 8:
        lane = _U64.unpack_from(data, offset)[0]
        acc ^= xxh_round(0, lane)
        acc = (_rotl(acc, 27) * PRIME64_1 + PRIME64_4) & _MASK_64
        offset += 8

    if end - offset >= 4:
        lane = _U32.unpack_from(data, offset)[0]
        acc ^= (lane * PRIME64_1) & _MASK_64
        acc = (_rotl(acc, 23) * PRIME64_2 + PRIME64_3) & _MASK_64
        offset += 4

    while offset < end:
        acc ^= (data[offset] * PRIME64_5) & _MASK_64
        acc = (_rotl(acc, 11) * PRIME64_1) & _MASK_64
        offset += 1

    return acc


def avalanche(acc: int) -> int:
    acc ^= acc >> 33
    acc = (acc * PRIME64_2) & _MASK_64
    acc ^= acc >> 29
    acc = (acc * PRIME64_3) & _MASK_64
    acc ^= acc >> 32
    return acc


def finalize(accs: Accumulators, seed: int, total_len: int, tail, tail_offset: int = 0) -> int:
    """
    Produce the digest from lane state, total length and the unconsumed tail.

    ``accs`` is only read when ``total_len`` reached a full stripe; shorter
    inputs start from ``seed + PRIME64_5`` instead.
    """
    if total_len >= STRIPE_LEN:
        acc = converge(accs)
    else:
        acc = (seed + PRIME64_5) & _MASK_64
    acc = (acc + total_len) & _MASK_64
    acc = consume_tail(acc, tail, tail_offset, len(tail))
    return avalanche(acc)


__all__ = [
    "PRIME64_1",
    "PRIME64_2",
    "PRIME64_3",
    "PRIME64_4",
    "PRIME64_5",
    "STRIPE_LEN",
    "xxh_round",
    "merge_accumulator",
    "init_accumulators",
    "process_stripes",
    "converge",
    "consume_tail",
    "avalanche",
    "finalize",
]
