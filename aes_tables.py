"""aes_tables.py

Container for the three generated tables.

`AESTables` is the only way tables travel between generator, codec and
verifier.  The arrays are uint8 and write-protected, so the S-box and its
inverse can never be edited independently of each other.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np

from aes_table_errors import FieldValueOutOfRange

__all__ = [
    "SBOX_SIZE",
    "RCON_SIZE",
    "BLOB_SIZE",
    "TABLE_NAMES",
    "AESTables",
    "as_table",
]

SBOX_SIZE = 256
RCON_SIZE = 10
BLOB_SIZE = SBOX_SIZE + SBOX_SIZE + RCON_SIZE  # 522

TABLE_NAMES: Tuple[str, str, str] = ("S-box", "Inverse S-box", "Rcon")


def as_table(values: Sequence[int] | np.ndarray, name: str, size: int) -> np.ndarray:
    """Return a read-only uint8 copy of *values* after range / length checks.

    Raises
    ------
    ValueError
        If the table does not hold exactly *size* entries.
    FieldValueOutOfRange
        If an entry is not an integer in 0..255.  Values are never clamped
        or truncated.
    """
    raw = np.asarray(values)
    if raw.ndim != 1 or raw.size != size:
        raise ValueError(
            f"{name} data is incomplete! Expected size: {size}, Actual size: {raw.size}"
        )
    if raw.dtype != np.uint8:
        # checked as Python objects so no cast can wrap or truncate first
        for idx, value in enumerate(raw.tolist()):
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
                raise FieldValueOutOfRange(name, idx, value)
    table = np.array(raw, dtype=np.uint8)
    table.setflags(write=False)
    return table


@dataclass(frozen=True, eq=False)
class AESTables:
    """S-box, inverse S-box and Rcon, generated and persisted together."""

    sbox: np.ndarray
    inverse_sbox: np.ndarray
    rcon: np.ndarray

    def __post_init__(self) -> None:
        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "sbox", as_table(self.sbox, TABLE_NAMES[0], SBOX_SIZE))
        object.__setattr__(
            self, "inverse_sbox", as_table(self.inverse_sbox, TABLE_NAMES[1], SBOX_SIZE)
        )
        object.__setattr__(self, "rcon", as_table(self.rcon, TABLE_NAMES[2], RCON_SIZE))

    @classmethod
    def from_sequences(
        cls,
        sbox: Sequence[int],
        inverse_sbox: Sequence[int],
        rcon: Sequence[int],
    ) -> "AESTables":
        return cls(np.asarray(sbox), np.asarray(inverse_sbox), np.asarray(rcon))

    def named(self) -> Iterator[Tuple[str, np.ndarray]]:
        """Yield ``(name, table)`` in serialization order."""
        yield TABLE_NAMES[0], self.sbox
        yield TABLE_NAMES[1], self.inverse_sbox
        yield TABLE_NAMES[2], self.rcon

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AESTables):
            return NotImplemented
        return all(
            np.array_equal(a, b)
            for (_, a), (_, b) in zip(self.named(), other.named())
        )
