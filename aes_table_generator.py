"""aes_table_generator.py

Build the AES S-box, inverse S-box and round constants from field arithmetic.

    sbox[0]     = 0x63                              (0 has no inverse)
    sbox[i]     = affine(inverse(i))                 i = 1..255
    inv[sbox[i]] = i                                 i = 0..255

    rcon[0]     = 0x8D
    rcon[i]     = xtime(rcon[i-1])                   i = 1..9

Seeding Rcon with 0x8D (= x^-1) puts 0x01 at index 1, so the round-key
schedule can index the table by round number directly.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from aes_gf_mult import AFFINE_CONSTANT, affine_transform, gf_inverse, xtime
from aes_table_errors import FieldValueOutOfRange
from aes_tables import RCON_SIZE, SBOX_SIZE, TABLE_NAMES, AESTables

__all__ = [
    "RCON_SEED",
    "SBoxResult",
    "generate_sbox",
    "generate_rcon",
    "generate_tables",
]

logger = logging.getLogger("aes_tables.generator")

RCON_SEED = 0x8D


@dataclass(frozen=True)
class SBoxResult:
    """Outcome of `generate_sbox`.

    Exactly one of (``sbox``, ``inverse_sbox``) / ``error`` is populated.
    """

    sbox: Optional[np.ndarray] = None
    inverse_sbox: Optional[np.ndarray] = None
    error: Optional[FieldValueOutOfRange] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(sbox, inverse_sbox)`` or raise the recorded error."""
        if self.error is not None:
            raise self.error
        return self.sbox, self.inverse_sbox


def generate_sbox() -> SBoxResult:
    """Compute the forward and inverse S-box in lockstep."""
    sbox = [0] * SBOX_SIZE
    inverse_sbox = [0] * SBOX_SIZE

    sbox[0] = AFFINE_CONSTANT
    for i in range(1, SBOX_SIZE):
        sbox[i] = affine_transform(gf_inverse(i))

    for i, value in enumerate(sbox):
        if not 0 <= value <= 0xFF:
            logger.error("S-box entry %d out of range: %d", i, value)
            return SBoxResult(error=FieldValueOutOfRange(TABLE_NAMES[0], i, value))
        inverse_sbox[value] = i

    sbox_arr = np.array(sbox, dtype=np.uint8)
    inv_arr = np.array(inverse_sbox, dtype=np.uint8)
    sbox_arr.setflags(write=False)
    inv_arr.setflags(write=False)
    logger.debug("S-box generated: sbox[0x00]=0x%02X sbox[0xFF]=0x%02X", sbox[0], sbox[255])
    return SBoxResult(sbox=sbox_arr, inverse_sbox=inv_arr)


def generate_rcon(seed: int = RCON_SEED) -> np.ndarray:
    """Return the 10-entry Rcon sequence starting at *seed*."""
    if not 0 <= seed <= 0xFF:
        raise FieldValueOutOfRange(TABLE_NAMES[2], 0, seed)
    rcon = [seed]
    for i in range(1, RCON_SIZE):
        value = xtime(rcon[i - 1])
        if not 0 <= value <= 0xFF:
            raise FieldValueOutOfRange(TABLE_NAMES[2], i, value)
        rcon.append(value)
    arr = np.array(rcon, dtype=np.uint8)
    arr.setflags(write=False)
    return arr


def generate_tables() -> AESTables:
    """Generate all three tables; raises `FieldValueOutOfRange` on failure."""
    sbox, inverse_sbox = generate_sbox().unwrap()
    tables = AESTables(sbox, inverse_sbox, generate_rcon())
    logger.info("Generated S-box, Inverse S-box and Rcon")
    return tables
