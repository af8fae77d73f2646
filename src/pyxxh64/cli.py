from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import BinaryIO, Optional, Sequence

from .xxhash64 import Xxh64

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 256 * 1024


def hash_stream(stream: BinaryIO, seed: int = 0, chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """Feed ``stream`` to a streaming hasher chunk by chunk and return the digest."""
    hasher = Xxh64.with_seed(seed)
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        hasher.write(chunk)
    logger.debug("hashed %d bytes in chunks of %d", hasher.total_len, chunk_size)
    return hasher.finish()


def _seed(text: str) -> int:
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}")
    if not 0 <= value < 2**64:
        raise argparse.ArgumentTypeError("seed must be an unsigned 64-bit integer")
    return value


def _chunk_size(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid chunk size: {text!r}")
    if value <= 0:
        raise argparse.ArgumentTypeError("chunk size must be positive")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pyxxh64",
        description="Compute the XXH64 digest of a file.",
    )
    ap.add_argument("path", help="file to hash")
    ap.add_argument("--seed", type=_seed, default=0, help="64-bit seed, decimal or 0x-prefixed (default: 0)")
    ap.add_argument(
        "--chunk-size",
        type=_chunk_size,
        default=DEFAULT_CHUNK_SIZE,
        help=f"read size in bytes (default: {DEFAULT_CHUNK_SIZE})",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    start = time.perf_counter()
    try:
        with open(args.path, "rb") as fh:
            result = hash_stream(fh, seed=args.seed, chunk_size=args.chunk_size)
    except OSError as exc:
        logger.error("cannot read %s: %s", args.path, exc)
        return 1
    elapsed = time.perf_counter() - start

    sys.stdout.write(
        f"Finished `{args.path}` in {elapsed:.6f}s\n"
        f"DEC: {result}\n"
        f"HEX: {result:x}\n"
    )
    return 0


__all__ = ["hash_stream", "build_parser", "main"]
