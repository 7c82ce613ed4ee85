from __future__ import annotations

import sys
from enum import Enum, auto

import numpy as np


# G.192 softbit sentinels, as values (host byte order never alters them).
G192_ZERO = 0x007F
G192_ONE = 0x0081
G192_SYNC = 0x6B21  # frame OK
G192_FER = 0x6B20  # frame erased

# Top 12 bits shared by every G.192 frame-sync word (0x6B20..0x6B2F).
G192_SYNC_PREFIX = 0x06B2

# Byte-oriented images of the sentinels (low byte of the word).
BYTE_ZERO = G192_ZERO & 0xFF
BYTE_ONE = G192_ONE & 0xFF
BYTE_SYNC = G192_SYNC & 0xFF
BYTE_FER = G192_FER & 0xFF
BYTE_SYNC_HIGH = G192_SYNC & 0xFF00

HOST_BYTEORDER = sys.byteorder


class Format(Enum):
    """On-disk density of an error pattern."""

    G192 = auto()  # 16-bit softbit words
    BYTE = auto()  # low byte of each softbit word
    COMPACT = auto()  # one hard bit per event, LSB first


class DisturbanceClass(Enum):
    """What a pattern disturbs.  Burst frame erasure (BFER) serializes as FER."""

    BER = auto()
    FER = auto()


_SOFTBIT_PAIRS = {
    DisturbanceClass.BER: (G192_ZERO, G192_ONE),
    DisturbanceClass.FER: (G192_SYNC, G192_FER),
}


def softbit_pair(disturbance: DisturbanceClass) -> tuple[int, int]:
    """Return the (no disturbance, disturbance) softbits of a class."""

    if not isinstance(disturbance, DisturbanceClass):
        raise ValueError(f"unknown disturbance class {disturbance!r}")
    return _SOFTBIT_PAIRS[disturbance]


def zero_value(disturbance: DisturbanceClass) -> int:
    return softbit_pair(disturbance)[0]


def one_value(disturbance: DisturbanceClass) -> int:
    return softbit_pair(disturbance)[1]


def class_of_sentinel(word: int) -> DisturbanceClass | None:
    """Return the class whose canonical pair contains `word`, if any."""

    for disturbance, pair in _SOFTBIT_PAIRS.items():
        if word in pair:
            return disturbance
    return None


def swap_u16(value: int) -> int:
    """Return `value` with its two bytes exchanged."""

    return ((value & 0xFF) << 8) | ((value >> 8) & 0xFF)


def check_byteorder(byteorder: str) -> str:
    if byteorder not in ("little", "big"):
        raise ValueError(f"byteorder must be 'little' or 'big', got {byteorder!r}")
    return byteorder


def word_dtype(byteorder: str = HOST_BYTEORDER) -> np.dtype:
    """NumPy dtype for G.192 words stored in `byteorder`."""

    prefix = "<" if check_byteorder(byteorder) == "little" else ">"
    return np.dtype(prefix + "u2")


def check_count(n: int, available: int | None = None) -> int:
    """Validate a caller-supplied event count."""

    n = int(n)
    if n < 0:
        raise ValueError(f"event count must be >= 0, got {n}")
    if available is not None and n > available:
        raise ValueError(f"event count {n} exceeds pattern length {available}")
    return n
