"""Tests for the compact (one bit per event) codec."""

import io
import logging

import numpy as np
import pytest

from eid.compact import (
    compact_size,
    pack_hard_bits,
    read_compact,
    read_compact_ber,
    read_compact_fer,
    unpack_hard_bits,
    write_compact,
)
from eid.errors import EIDFatalError, PatternIOError, PatternResourceError
from eid.structs import DisturbanceClass
from eid.translate import hard_to_soft

ZERO, ONE = 0x007F, 0x0081
SYNC, ERASED = 0x6B21, 0x6B20


def test_lsb_is_earliest_event() -> None:
    words = read_compact(io.BytesIO(b"\x05"), 8, DisturbanceClass.BER)
    assert words.tolist() == [ONE, ZERO, ONE, ZERO, ZERO, ZERO, ZERO, ZERO]


def test_fer_mapping() -> None:
    words = read_compact(io.BytesIO(b"\x02"), 3, DisturbanceClass.FER)
    assert words.tolist() == [SYNC, ERASED, SYNC]


def test_front_ends_choose_class() -> None:
    assert read_compact_ber(io.BytesIO(b"\x01"), 1).tolist() == [ONE]
    assert read_compact_fer(io.BytesIO(b"\x01"), 1).tolist() == [ERASED]


def test_ten_events_need_two_bytes() -> None:
    out = io.BytesIO()
    pattern = [ONE] * 9 + [ZERO]
    assert write_compact(out, pattern, 10) == 10
    # Event 8 lands in bit 0 of the second byte; bits 1-7 are padding.
    assert out.getvalue() == bytes([0xFF, 0x01])


def test_trailing_bits_beyond_n_ignored_on_read() -> None:
    words = read_compact(io.BytesIO(b"\xFF"), 5, DisturbanceClass.BER)
    assert words.tolist() == [ONE] * 5


def test_short_read_expands_only_bytes_read() -> None:
    stream = io.BytesIO(b"\x0F")
    words = read_compact(stream, 24, DisturbanceClass.BER)
    assert len(words) == 8
    assert words.tolist() == [ONE] * 4 + [ZERO] * 4


def test_empty_stream_reads_nothing() -> None:
    assert len(read_compact(io.BytesIO(), 8, DisturbanceClass.FER)) == 0


def test_zero_events_perform_no_io(failing_stream) -> None:
    assert len(read_compact(failing_stream, 0, DisturbanceClass.BER)) == 0
    assert write_compact(failing_stream, [ONE], 0) == 0


def test_read_failure_raises(failing_stream) -> None:
    with pytest.raises(PatternIOError):
        read_compact(failing_stream, 8, DisturbanceClass.BER)


def test_short_write_raises(short_writer) -> None:
    with pytest.raises(PatternIOError):
        write_compact(short_writer, [ONE] * 16)


def test_read_requires_class() -> None:
    with pytest.raises(ValueError):
        read_compact(io.BytesIO(b"\x00"), 8, None)


def test_write_infers_class_from_first_word() -> None:
    out = io.BytesIO()
    write_compact(out, [SYNC, ERASED, ERASED, SYNC, ERASED, SYNC, SYNC, SYNC])
    assert out.getvalue() == bytes([0b00010110])


def test_write_packs_only_one_value_as_set_bit() -> None:
    out = io.BytesIO()
    # 0x0081 is not the FER "one" value, so it packs as 0.
    write_compact(out, [SYNC, ERASED, ONE, 0xFFFF, ERASED])
    assert out.getvalue() == bytes([0b00010010])


def test_write_rejects_unclassifiable_first_word() -> None:
    with pytest.raises(ValueError):
        write_compact(io.BytesIO(), [0x1234, ONE])


def test_explicit_class_overrides_inference() -> None:
    out = io.BytesIO()
    write_compact(out, [0x1234, ERASED, ONE], disturbance=DisturbanceClass.FER)
    assert out.getvalue() == bytes([0b010])


def test_unaligned_count_warns(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="eid.compact"):
        write_compact(io.BytesIO(), [ONE] * 10)
        read_compact(io.BytesIO(b"\xFF\x03"), 10, DisturbanceClass.BER)
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 2
    assert all("not byte-aligned" in r.getMessage() for r in warnings)


def test_aligned_count_is_quiet(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="eid.compact"):
        write_compact(io.BytesIO(), [ONE] * 16)
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_compact_size() -> None:
    assert compact_size(0) == 0
    assert compact_size(1) == 1
    assert compact_size(8) == 1
    assert compact_size(9) == 2


@pytest.mark.parametrize("n", [1, 7, 8, 13, 64, 1001])
def test_pack_unpack_recovers_hard_bits(n: int) -> None:
    rng = np.random.default_rng(n)
    bits = rng.integers(0, 2, size=n, dtype=np.uint8)
    packed = pack_hard_bits(bits)
    assert len(packed) == compact_size(n)
    assert unpack_hard_bits(packed, n).tolist() == bits.tolist()


@pytest.mark.parametrize("disturbance", list(DisturbanceClass))
def test_stream_round_trip_per_class(disturbance) -> None:
    bits = [1, 0, 0, 1, 1, 1, 0, 1, 0, 1, 1]
    words = hard_to_soft(bits, disturbance)
    buf = io.BytesIO()
    write_compact(buf, words)
    buf.seek(0)
    assert read_compact(buf, len(bits), disturbance).tolist() == words.tolist()


def test_padding_bits_are_zero() -> None:
    packed = pack_hard_bits([1, 1, 1])
    assert packed == b"\x07"


def _no_memory(*args, **kwargs):
    raise MemoryError


def test_read_allocation_failure_is_fatal(monkeypatch) -> None:
    monkeypatch.setattr(np, "unpackbits", _no_memory)
    with pytest.raises(PatternResourceError) as excinfo:
        read_compact(io.BytesIO(b"\x05"), 8, DisturbanceClass.BER)
    assert isinstance(excinfo.value, EIDFatalError)
    assert str(excinfo.value) == "Cannot allocate memory to read compact binary bitstream"
    assert isinstance(excinfo.value.__cause__, MemoryError)


def test_write_allocation_failure_is_fatal(monkeypatch) -> None:
    words = np.array([ONE, ZERO, ONE], dtype=np.uint16)
    out = io.BytesIO()
    monkeypatch.setattr(np, "zeros", _no_memory)
    with pytest.raises(PatternResourceError) as excinfo:
        write_compact(out, words)
    assert isinstance(excinfo.value, EIDFatalError)
    assert str(excinfo.value) == "Cannot allocate memory to save compact binary bitstream"
    assert out.getvalue() == b""
