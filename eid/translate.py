"""Soft (16-bit sentinel) <-> hard (0/1) conversion for error patterns."""

from __future__ import annotations

import logging
from typing import NamedTuple, Sequence

import numpy as np

from .g192 import as_words
from .stream import scratch
from .structs import (
    G192_FER,
    G192_ONE,
    G192_SYNC_PREFIX,
    G192_ZERO,
    DisturbanceClass,
    check_count,
    one_value,
    zero_value,
)

logger = logging.getLogger(__name__)


class Translation(NamedTuple):
    hard: np.ndarray  # uint8 0/1; slots of unexpected words are 0
    unexpected: int


def soft_to_hard(
    soft: Sequence[int] | np.ndarray,
    disturbance: DisturbanceClass,
    n: int | None = None,
) -> Translation:
    """Convert softbits or frame sync words to hard bits.

    Parameters
    ----------
    soft : sequence of int
        Softbit words, earliest first.
    disturbance : DisturbanceClass
        BER reads 0x0081/0x007F as 1/0.  FER reads 0x6B20 as 1 and any
        other 0x6B2x sync word as 0.
    n : int, optional
        Number of leading words to convert (default: all of them).

    Returns
    -------
    Translation
        The hard bits and the number of words that matched neither value.
        A nonzero count is not an error here; the caller decides.
    """
    words = as_words(soft)
    n = check_count(len(words) if n is None else n, len(words))
    words = words[:n]

    if disturbance is DisturbanceClass.BER:
        ones = words == G192_ONE
        zeros = words == G192_ZERO
    elif disturbance is DisturbanceClass.FER:
        ones = words == G192_FER
        zeros = ~ones & ((words >> 4) == G192_SYNC_PREFIX)
    else:
        raise ValueError(f"unknown disturbance class {disturbance!r}")

    hard = scratch(n, np.uint8, "convert soft bits to hard bits")
    hard[ones] = 1
    unexpected = int(n - np.count_nonzero(ones) - np.count_nonzero(zeros))
    if unexpected:
        logger.debug("%d of %d softbits unexpected for %s", unexpected, n, disturbance.name)
    return Translation(hard=hard, unexpected=unexpected)


def hard_to_soft(
    hard: Sequence[int] | np.ndarray, disturbance: DisturbanceClass
) -> np.ndarray:
    """Map hard bits (nonzero = disturbed) to the class's softbit pair."""

    zero, one = zero_value(disturbance), one_value(disturbance)
    bits = np.asarray(hard).reshape(-1).astype(bool)
    soft = scratch(len(bits), np.uint16, "convert hard bits to soft bits")
    soft[:] = zero
    soft[bits] = one
    return soft
