"""Typed failures raised while reading or writing .gol files."""

from __future__ import annotations


class GolFileError(Exception):
    """Base class for every codec and storage failure."""


class NotValidFileError(GolFileError, ValueError):
    def __init__(self, reason: str) -> None:
        super().__init__(f"not a valid .gol file: {reason}")
        self.reason = reason


class UnexpectedEndOfBytesError(GolFileError, ValueError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"unexpected end of bytes: expected at least {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class GolFileIOError(GolFileError, OSError):
    """Storage layer failure; the original OSError is chained as __cause__."""
