"""Format dispatch and whole-file helpers for error patterns."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

import numpy as np

from .byte_format import read_byte, write_byte
from .compact import read_compact, write_compact
from .detect import detect_format
from .errors import PatternIOError
from .g192 import read_g192, write_g192
from .labels import class_label, format_label
from .stream import stream_name
from .structs import HOST_BYTEORDER, DisturbanceClass, Format, class_of_sentinel
from .translate import Translation, hard_to_soft, soft_to_hard

logger = logging.getLogger(__name__)


def read_pattern(
    stream: BinaryIO,
    fmt: Format,
    n: int,
    disturbance: DisturbanceClass | None = None,
    byteorder: str = HOST_BYTEORDER,
) -> np.ndarray:
    """Read up to `n` events in layout `fmt` as softbit words."""

    if fmt is Format.G192:
        return read_g192(stream, n, byteorder)
    if fmt is Format.BYTE:
        return read_byte(stream, n)
    if fmt is Format.COMPACT:
        return read_compact(stream, n, disturbance)
    raise ValueError(f"unknown pattern format {fmt!r}")


def write_pattern(
    stream: BinaryIO,
    pattern: Sequence[int] | np.ndarray,
    fmt: Format,
    n: int | None = None,
    disturbance: DisturbanceClass | None = None,
    byteorder: str = HOST_BYTEORDER,
) -> int:
    """Write softbit words in layout `fmt`; returns the events written."""

    if fmt is Format.G192:
        return write_g192(stream, pattern, n, byteorder)
    if fmt is Format.BYTE:
        return write_byte(stream, pattern, n)
    if fmt is Format.COMPACT:
        return write_compact(stream, pattern, n, disturbance)
    raise ValueError(f"unknown pattern format {fmt!r}")


def event_capacity(fmt: Format, nbytes: int) -> int:
    """Number of events a file of `nbytes` bytes holds in layout `fmt`."""

    if fmt is Format.G192:
        return nbytes // 2
    if fmt is Format.BYTE:
        return nbytes
    if fmt is Format.COMPACT:
        return nbytes * 8
    raise ValueError(f"unknown pattern format {fmt!r}")


def _remaining_bytes(stream: BinaryIO) -> int:
    try:
        start = stream.tell()
        end = stream.seek(0, io.SEEK_END)
        stream.seek(start)
    except OSError as err:
        raise PatternIOError(f"cannot size {stream_name(stream)}: {err}") from err
    return end - start


@dataclass(frozen=True, eq=False)
class ErrorPattern:
    """A softbit error pattern plus the layout it was read from."""

    words: np.ndarray  # uint16 softbits, earliest first
    format: Format
    disturbance: DisturbanceClass | None

    def __len__(self) -> int:
        return len(self.words)

    @classmethod
    def from_hard_bits(
        cls,
        bits: Sequence[int] | np.ndarray,
        disturbance: DisturbanceClass,
        fmt: Format = Format.G192,
    ) -> "ErrorPattern":
        return cls(
            words=hard_to_soft(bits, disturbance), format=fmt, disturbance=disturbance
        )

    @classmethod
    def read(
        cls,
        stream: BinaryIO,
        n: int | None = None,
        fmt: Format | None = None,
        disturbance: DisturbanceClass | None = None,
        byteorder: str = HOST_BYTEORDER,
        name: str | None = None,
    ) -> "ErrorPattern":
        """Detect (unless `fmt` is given) and read a pattern from `stream`.

        Without `n` the whole remainder of the stream is read.  An explicit
        `disturbance` overrides the detected one.
        """
        if fmt is None:
            detection = detect_format(stream, name, byteorder)
            fmt = detection.format
            if disturbance is None:
                disturbance = detection.disturbance
        if n is None:
            n = event_capacity(fmt, _remaining_bytes(stream))
        words = read_pattern(stream, fmt, n, disturbance, byteorder)
        logger.info(
            "read %d events from %s (%s/%s)",
            len(words),
            stream_name(stream, name),
            format_label(fmt),
            class_label(disturbance) or "?",
        )
        return cls(words=words, format=fmt, disturbance=disturbance)

    def write(
        self,
        stream: BinaryIO,
        fmt: Format | None = None,
        byteorder: str = HOST_BYTEORDER,
    ) -> int:
        fmt = self.format if fmt is None else fmt
        return write_pattern(
            stream, self.words, fmt, len(self.words), self.resolved_class(), byteorder
        )

    def save(
        self, path: Path | str, fmt: Format | None = None, byteorder: str = HOST_BYTEORDER
    ) -> int:
        with open(path, "wb") as fh:
            return self.write(fh, fmt, byteorder)

    def resolved_class(self) -> DisturbanceClass | None:
        """The known class, else the one implied by the first softbit."""

        if self.disturbance is not None or len(self.words) == 0:
            return self.disturbance
        return class_of_sentinel(int(self.words[0]))

    def hard_bits(self) -> np.ndarray:
        return self.translate().hard

    def translate(self) -> Translation:
        disturbance = self.resolved_class()
        if disturbance is None:
            raise ValueError("disturbance class of pattern is unknown")
        return soft_to_hard(self.words, disturbance)

    def disturbance_count(self) -> int:
        return int(np.count_nonzero(self.hard_bits()))

    def disturbance_rate(self) -> float:
        if len(self.words) == 0:
            return 0.0
        return self.disturbance_count() / len(self.words)


def load_pattern(
    path: Path | str,
    n: int | None = None,
    fmt: Format | None = None,
    disturbance: DisturbanceClass | None = None,
    byteorder: str = HOST_BYTEORDER,
) -> ErrorPattern:
    with open(path, "rb") as fh:
        return ErrorPattern.read(fh, n, fmt, disturbance, byteorder, name=str(path))
