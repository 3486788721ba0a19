"""aes_table_errors.py

Error kinds raised (or returned) while building, persisting and checking the
AES substitution / round-constant tables.

Verification problems (`BijectionViolation`, `RoundTripMismatch`) are
returned by the verifier rather than raised, so the caller decides whether a
failed check should stop the run.
"""
from __future__ import annotations

from pathlib import Path

__all__ = [
    "TableError",
    "FileOpenFailure",
    "DirectoryCreateFailure",
    "TruncatedInput",
    "FieldValueOutOfRange",
    "BijectionViolation",
    "RoundTripMismatch",
    "RconDerivationViolation",
    "ReferenceMismatch",
]


class TableError(Exception):
    """Base class for every table related failure."""


class FileOpenFailure(TableError):
    def __init__(self, path: Path | str, mode: str, reason: str = "") -> None:
        self.path = Path(path)
        self.mode = mode
        self.reason = reason
        msg = f"Could not open file for {mode}: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class DirectoryCreateFailure(TableError):
    def __init__(self, path: Path | str, reason: str = "") -> None:
        self.path = Path(path)
        self.reason = reason
        msg = f"Failed to create directory: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class TruncatedInput(TableError):
    """Blob is shorter than the fixed serialized size."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Serialized tables need {expected} bytes, got {actual}"
        )


class FieldValueOutOfRange(TableError):
    """A table entry is not an integer that fits in one byte."""

    def __init__(self, table: str, index: int, value: object) -> None:
        self.table = table
        self.index = index
        self.value = value
        super().__init__(
            f"{table}[{index}] = {value!r} is not a byte value (0..255)"
        )


class BijectionViolation(TableError):
    """``inverse_sbox[sbox[index]] != index``."""

    def __init__(self, index: int, sbox_value: int, inverse_value: int) -> None:
        self.index = index
        self.sbox_value = sbox_value
        self.inverse_value = inverse_value
        super().__init__(
            f"Bijection broken at index {index}: S-box value 0x{sbox_value:02X} "
            f"maps back to 0x{inverse_value:02X}"
        )


class RoundTripMismatch(TableError):
    def __init__(self, table: str, index: int, expected: int, actual: int) -> None:
        self.table = table
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Mismatch in {table} at index {index}. "
            f"Original: 0x{expected:02X}, Read: 0x{actual:02X}"
        )


class RconDerivationViolation(TableError):
    """``rcon[index]`` is not the field double of ``rcon[index - 1]``."""

    def __init__(self, index: int, previous: int, expected: int, actual: int) -> None:
        self.index = index
        self.previous = previous
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Rcon[{index}] = 0x{actual:02X}, expected xtime(0x{previous:02X}) = 0x{expected:02X}"
        )


class ReferenceMismatch(TableError):
    """Generated S-box differs from the published FIPS-197 table."""

    def __init__(self, index: int, expected: int, actual: int) -> None:
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"SBOX[0x{index:02X}] = 0x{actual:02X}, expected 0x{expected:02X} (FIPS-197)"
        )
