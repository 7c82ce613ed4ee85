import io

import pytest


class FailingStream(io.BytesIO):
    """In-memory stream whose reads and writes raise like a broken disk."""

    def read(self, size=-1):
        raise OSError("simulated read failure")

    def write(self, data):
        raise OSError("simulated write failure")


class ShortWriter(io.BytesIO):
    """Accepts only the first byte of every write."""

    def write(self, data):
        return super().write(bytes(data)[:1])


@pytest.fixture
def failing_stream() -> FailingStream:
    return FailingStream(b"\x7F\x00\x81\x00")


@pytest.fixture
def short_writer() -> ShortWriter:
    return ShortWriter()
