"""Guess the layout and disturbance class of an error-pattern stream.

The first 16-bit word is peeked in the expected byte order and looked up
in a fixed table:

  7F7F 7F81 8181 817F   byte-oriented softbits      BER
  2020 2021 2120 2121   byte-oriented frame syncs   FER
  007F 0081             G.192 softbits              BER
  6B21 6B20             G.192 frame syncs           FER
  7F00 8100 216B 206B   G.192 in the other byte order (fatal)
  anything else         compact bits                class unknown

A compact guess is then re-checked: if the first byte in the stream is
0x2n it is taken as a byte-oriented sync header whose second byte (the
frame length) matched nothing in the table.
"""

from __future__ import annotations

from typing import BinaryIO, NamedTuple

from .errors import ByteSwappedStreamError, PatternIOError
from .stream import read_bytes, stream_name
from .structs import (
    BYTE_ONE,
    BYTE_ZERO,
    HOST_BYTEORDER,
    DisturbanceClass,
    Format,
    check_byteorder,
    swap_u16,
)

BYTE_BER_WORDS = frozenset({0x7F7F, 0x7F81, 0x8181, 0x817F})
BYTE_FER_WORDS = frozenset({0x2020, 0x2021, 0x2120, 0x2121})
G192_BER_WORDS = frozenset({0x007F, 0x0081})
G192_FER_WORDS = frozenset({0x6B21, 0x6B20})
SWAPPED_WORDS = frozenset({0x7F00, 0x8100, 0x216B, 0x206B})

SYNC_NIBBLE = 0x20


class Detection(NamedTuple):
    format: Format
    disturbance: DisturbanceClass | None  # None only for Format.COMPACT


def classify_word(
    word: int, byteorder: str = HOST_BYTEORDER, name: str = "<stream>"
) -> Detection:
    """Classify the first word of a stream, as read in `byteorder`."""

    check_byteorder(byteorder)
    word &= 0xFFFF
    if word in BYTE_BER_WORDS:
        detection = Detection(Format.BYTE, DisturbanceClass.BER)
    elif word in BYTE_FER_WORDS:
        detection = Detection(Format.BYTE, DisturbanceClass.FER)
    elif word in G192_BER_WORDS:
        detection = Detection(Format.G192, DisturbanceClass.BER)
    elif word in G192_FER_WORDS:
        detection = Detection(Format.G192, DisturbanceClass.FER)
    elif word in SWAPPED_WORDS:
        raise ByteSwappedStreamError(name, word)
    else:
        detection = Detection(Format.COMPACT, None)

    if detection.disturbance is None:
        # Put the stream's first byte in the high half.
        if byteorder == "little":
            word = swap_u16(word)
        if ((word >> 8) & 0xF0) == SYNC_NIBBLE:
            detection = Detection(Format.BYTE, DisturbanceClass.FER)
    return detection


def classify_byte(value: int) -> Detection:
    """Classify a stream holding a single byte."""

    if value in (BYTE_ZERO, BYTE_ONE):
        return Detection(Format.BYTE, DisturbanceClass.BER)
    if (value & 0xF0) == SYNC_NIBBLE:
        return Detection(Format.BYTE, DisturbanceClass.FER)
    return Detection(Format.COMPACT, None)


def detect_format(
    stream: BinaryIO, name: str | None = None, byteorder: str = HOST_BYTEORDER
) -> Detection:
    """Peek at `stream` and return its layout and (if known) class.

    The stream must be seekable; its position is restored before
    returning, on the fatal byte-swapped path as well.
    """
    check_byteorder(byteorder)
    name = stream_name(stream, name)
    try:
        start = stream.tell()
    except OSError as err:
        raise PatternIOError(f"cannot tell position of {name}: {err}") from err

    try:
        head = read_bytes(stream, 2)
    finally:
        try:
            stream.seek(start)
        except OSError as err:
            raise PatternIOError(f"cannot rewind {name}: {err}") from err

    if len(head) < 2:
        if not head:
            return Detection(Format.COMPACT, None)
        return classify_byte(head[0])
    return classify_word(int.from_bytes(head, byteorder), byteorder, name)
