"""Byte-oriented G.192 error patterns.

Only the low byte of each softbit word is stored:

  0x007F <-> 0x7F  ('0' softbit)
  0x0081 <-> 0x81  ('1' softbit)
  0x6B21 <-> 0x21  (frame OK)
  0x6B20 <-> 0x20  (frame erasure)

Neither direction checks that the values belong to this set.
"""

from __future__ import annotations

from typing import BinaryIO, Sequence

import numpy as np

from .g192 import as_words
from .stream import read_bytes, scratch, write_bytes
from .structs import BYTE_FER, BYTE_SYNC, BYTE_SYNC_HIGH, check_count


def widen_bytes(data: bytes | np.ndarray) -> np.ndarray:
    """Map byte-mode values to 16-bit softbit words."""

    raw = np.frombuffer(bytes(data), dtype=np.uint8)
    words = scratch(len(raw), np.uint16, "read data as byte bitstream")
    words[:] = raw
    sync = (raw == BYTE_SYNC) | (raw == BYTE_FER)
    words[sync] |= BYTE_SYNC_HIGH
    return words


def narrow_words(words: Sequence[int] | np.ndarray) -> bytes:
    """Keep the low byte of every softbit word."""

    arr = as_words(words)
    out = scratch(len(arr), np.uint8, "save data as byte bitstream")
    out[:] = arr & 0x00FF
    return out.tobytes()


def read_byte(stream: BinaryIO, n: int) -> np.ndarray:
    """Read up to `n` byte-mode events as softbit words.

    A short read yields a shorter pattern; an empty read an empty one.
    """

    n = check_count(n)
    if n == 0:
        return np.zeros(0, dtype=np.uint16)
    data = read_bytes(stream, n)
    return widen_bytes(data)


def write_byte(
    stream: BinaryIO, pattern: Sequence[int] | np.ndarray, n: int | None = None
) -> int:
    words = as_words(pattern)
    n = check_count(len(words) if n is None else n, len(words))
    if n == 0:
        return 0
    return write_bytes(stream, narrow_words(words[:n]), n, "bytes")
