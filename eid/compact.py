"""Compact (bit) mode error patterns.

Only hard bits are stored, eight events per byte.  Within a byte the LSB
is the event that occurs first in time; bits fill upward before moving to
the next byte.  A '1' means the bit is in error or the frame is erased.

When the event count is not a multiple of 8, the final byte is padded
with zeros on write and its trailing bits are ignored on read.  The
caller's event count is authoritative: the file size never is.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, Sequence

import numpy as np

from .errors import PatternResourceError
from .g192 import as_words
from .stream import read_bytes, scratch, write_bytes
from .structs import DisturbanceClass, check_count, class_of_sentinel, one_value
from .translate import hard_to_soft

logger = logging.getLogger(__name__)


def compact_size(n: int) -> int:
    """Bytes needed to hold `n` hard bits."""

    return (check_count(n) + 7) // 8


def pack_hard_bits(bits: Sequence[int] | np.ndarray, n: int | None = None) -> bytes:
    """Pack hard bits LSB-first, zero padding the last byte."""

    arr = np.asarray(bits).reshape(-1)
    n = check_count(len(arr) if n is None else n, len(arr))
    nbytes = compact_size(n)
    staged = scratch(nbytes * 8, np.uint8, "save compact binary bitstream")
    staged[:n] = arr[:n] != 0
    try:
        return np.packbits(staged, bitorder="little").tobytes()
    except MemoryError as err:
        raise PatternResourceError(
            "Cannot allocate memory to save compact binary bitstream"
        ) from err


def unpack_hard_bits(data: bytes | np.ndarray, n: int) -> np.ndarray:
    """Expand packed bytes into at most `n` hard bits, earliest first."""

    n = check_count(n)
    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    bits = np.unpackbits(raw, bitorder="little")
    return bits[:n].copy()


def _warn_unaligned(n: int, action: str) -> None:
    if n % 8:
        logger.warning(
            "The number of errors (%d) is not byte-aligned; %s", n, action
        )


def read_compact(stream: BinaryIO, n: int, disturbance: DisturbanceClass) -> np.ndarray:
    """Read `n` hard bits and return them as softbits of `disturbance`.

    The class cannot be inferred from a compact file, so the caller must
    supply it.  A short read yields only the bits of the bytes actually
    read, never more than `n`.
    """
    n = check_count(n)
    if not isinstance(disturbance, DisturbanceClass):
        raise ValueError(
            f"compact patterns need an explicit disturbance class, got {disturbance!r}"
        )
    if n == 0:
        return np.zeros(0, dtype=np.uint16)

    _warn_unaligned(n, "zero insertion is assumed in the last byte")
    nbytes = compact_size(n)
    data = read_bytes(stream, nbytes)
    if len(data) < nbytes:
        logger.debug("compact read short: %d of %d bytes", len(data), nbytes)
    try:
        return hard_to_soft(unpack_hard_bits(data, n), disturbance)
    except MemoryError as err:
        raise PatternResourceError(
            "Cannot allocate memory to read compact binary bitstream"
        ) from err


def read_compact_ber(stream: BinaryIO, n: int) -> np.ndarray:
    return read_compact(stream, n, DisturbanceClass.BER)


def read_compact_fer(stream: BinaryIO, n: int) -> np.ndarray:
    return read_compact(stream, n, DisturbanceClass.FER)


def write_compact(
    stream: BinaryIO,
    pattern: Sequence[int] | np.ndarray,
    n: int | None = None,
    disturbance: DisturbanceClass | None = None,
) -> int:
    """Save softbits as hard bits, one per event.

    Only words equal to the class's "one" value (0x0081 or 0x6B20) pack
    as 1; everything else, canonical or not, packs as 0.  Without an
    explicit `disturbance` the class is taken from the first word, which
    must then be one of the four canonical softbits.
    """
    words = as_words(pattern)
    n = check_count(len(words) if n is None else n, len(words))
    if n == 0:
        return 0

    if disturbance is None:
        disturbance = class_of_sentinel(int(words[0]))
        if disturbance is None:
            raise ValueError(
                f"cannot infer disturbance class from first softbit 0x{int(words[0]):04X}"
            )
    one = one_value(disturbance)

    _warn_unaligned(
        n,
        "zero insertion will be used and needs to be accounted for "
        "by the error-insertion program",
    )
    data = pack_hard_bits(words[:n] == one)
    write_bytes(stream, data, len(data), "bytes")
    return n
