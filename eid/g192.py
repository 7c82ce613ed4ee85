"""G.192 16-bit softbit error patterns, read and written verbatim."""

from __future__ import annotations

from typing import BinaryIO, Sequence

import numpy as np

from .stream import read_bytes, write_bytes
from .structs import HOST_BYTEORDER, check_count, word_dtype


def as_words(pattern: Sequence[int] | np.ndarray) -> np.ndarray:
    """Coerce a softbit sequence to native ``uint16`` (wrapping signed shorts)."""

    arr = np.asarray(pattern)
    if arr.dtype == np.uint16:
        return arr.reshape(-1)
    return (arr.astype(np.int64) & 0xFFFF).astype(np.uint16).reshape(-1)


def read_g192(stream: BinaryIO, n: int, byteorder: str = HOST_BYTEORDER) -> np.ndarray:
    """Read up to `n` softbit words; the result's length is the count read."""

    n = check_count(n)
    dtype = word_dtype(byteorder)
    if n == 0:
        return np.zeros(0, dtype=np.uint16)

    data = read_bytes(stream, n * 2)
    nwords = len(data) // 2  # a dangling half word is not a sample
    return np.frombuffer(data[: nwords * 2], dtype=dtype).astype(np.uint16)


def write_g192(
    stream: BinaryIO,
    pattern: Sequence[int] | np.ndarray,
    n: int | None = None,
    byteorder: str = HOST_BYTEORDER,
) -> int:
    """Write exactly `n` softbit words (default: the whole pattern)."""

    words = as_words(pattern)
    n = check_count(len(words) if n is None else n, len(words))
    dtype = word_dtype(byteorder)
    if n == 0:
        return 0
    return write_bytes(stream, words[:n].astype(dtype).tobytes(), n, "words")
