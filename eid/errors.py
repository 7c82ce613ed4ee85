"""
Error-pattern exception hierarchy.

All exceptions inherit from EIDError for unified handling.  Short reads
are never errors; codecs return whatever count they obtained.
"""

from typing import Optional


class EIDError(Exception):
    """Base exception for all error-pattern codec errors."""
    pass


class PatternIOError(EIDError):
    """Raised when the underlying stream fails a read or a write."""
    pass


class EIDFatalError(EIDError):
    """Raised when the current operation cannot continue at all."""
    pass


class PatternResourceError(EIDFatalError):
    """Raised when scratch space for a conversion cannot be allocated."""
    pass


class ByteSwappedStreamError(EIDFatalError):
    """Raised when a G.192 stream is stored in the opposite byte order."""

    def __init__(self, name: str, word: Optional[int] = None):
        super().__init__(f"File {name} needs to be byte-swapped! Aborted.")
        self.name = name
        self.word = word

    def __reduce__(self):
        return (self.__class__, (self.name, self.word))
