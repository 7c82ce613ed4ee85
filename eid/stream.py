"""Blocking byte I/O shared by the pattern codecs.

Reads behave like ``fread``: they keep pulling from the stream until the
requested size or end of stream, so a short result always means EOF.
"""

from __future__ import annotations

import logging
from typing import BinaryIO

import numpy as np

from .errors import PatternIOError, PatternResourceError

logger = logging.getLogger(__name__)


def stream_name(stream: BinaryIO, name: str | None = None) -> str:
    if name is not None:
        return str(name)
    return str(getattr(stream, "name", "<stream>"))


def read_bytes(stream: BinaryIO, nbytes: int) -> bytes:
    """Read up to `nbytes`; fewer are returned only at end of stream."""

    chunks = []
    remaining = nbytes
    while remaining > 0:
        try:
            chunk = stream.read(remaining)
        except OSError as err:
            raise PatternIOError(f"read from {stream_name(stream)} failed: {err}") from err
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    logger.debug("read %d/%d bytes from %s", len(data), nbytes, stream_name(stream))
    return data


def write_bytes(stream: BinaryIO, data: bytes, count: int, unit: str) -> int:
    """Write `data` holding `count` items of `unit`; all of it or fail."""

    try:
        written = stream.write(data)
    except OSError as err:
        raise PatternIOError(f"write to {stream_name(stream)} failed: {err}") from err
    if written is not None and written < len(data):
        raise PatternIOError(
            f"short write to {stream_name(stream)}: {written} of {len(data)} bytes "
            f"({count} {unit})"
        )
    logger.debug("wrote %d %s to %s", count, unit, stream_name(stream))
    return count


def scratch(size: int, dtype, what: str) -> np.ndarray:
    """Zeroed staging buffer for one codec call."""

    try:
        return np.zeros(size, dtype=dtype)
    except MemoryError as err:
        raise PatternResourceError(f"Cannot allocate memory to {what}") from err
