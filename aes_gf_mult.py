"""aes_gf_mult.py

GF(2^8) primitives used to build the AES tables.

Bytes are read as polynomials of degree < 8 over GF(2).  Addition is XOR and
multiplication is reduced modulo the AES polynomial

    m(x) = x^8 + x^4 + x^3 + x + 1        (0x11B)

Note
----
Ordinary integer multiplication / modulo is *not* field multiplication.
Everything here goes through `xtime` (multiply by x) so the reduction is
applied at every doubling step.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "REDUCTION_POLY",
    "AFFINE_CONSTANT",
    "xtime",
    "gf_mult",
    "gf_inverse",
    "rotl8",
    "affine_transform",
    "gf_mult_lookup",
]

REDUCTION_POLY = 0x11B
AFFINE_CONSTANT = 0x63


def _check_byte(value: int, name: str = "value") -> int:
    value = int(value)
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be a byte (0..255), got {value}")
    return value


def xtime(a: int) -> int:
    """Multiply *a* by x, folding bit 8 back with the reduction polynomial."""
    a = _check_byte(a, "a")
    a <<= 1
    if a & 0x100:
        a ^= REDUCTION_POLY
    return a


def gf_mult(a: int, b: int) -> int:
    """Return a·b in GF(2^8).

    Shift-and-add: for every set bit of *b* the current multiple of *a* is
    XOR-ed into the product, and *a* is doubled with `xtime` between bits.
    """
    a = _check_byte(a, "a")
    b = _check_byte(b, "b")
    result = 0
    while b:
        if b & 1:
            result ^= a
        a = xtime(a)
        b >>= 1
    return result


def gf_inverse(a: int) -> int:
    """Return the unique x with ``gf_mult(a, x) == 1``.

    Zero has no multiplicative inverse; AES maps it to itself before the
    affine step, so the caller has to handle it.
    """
    a = _check_byte(a, "a")
    if a == 0:
        raise ZeroDivisionError("0 has no multiplicative inverse in GF(2^8)")
    for candidate in range(1, 256):
        if gf_mult(a, candidate) == 1:
            return candidate
    # Unreachable for an irreducible modulus.
    raise ArithmeticError(f"no inverse found for 0x{a:02X}")


def rotl8(x: int, shift: int) -> int:
    """Circular left rotation of *x* within 8 bits."""
    x = _check_byte(x, "x")
    if not 0 <= shift <= 7:
        raise ValueError(f"shift must be in 0..7, got {shift}")
    return ((x << shift) | (x >> (8 - shift))) & 0xFF


def affine_transform(x: int) -> int:
    """AES affine map: x ⊕ rotl(x,1) ⊕ rotl(x,2) ⊕ rotl(x,3) ⊕ rotl(x,4) ⊕ 0x63."""
    x = _check_byte(x, "x")
    return (
        x
        ^ rotl8(x, 1)
        ^ rotl8(x, 2)
        ^ rotl8(x, 3)
        ^ rotl8(x, 4)
        ^ AFFINE_CONSTANT
    )


# -----------------------------------------------------------------------------
# Vectorised helper
# -----------------------------------------------------------------------------

_LOOKUP_CACHE: dict[int, np.ndarray] = {}


def gf_mult_lookup(values: np.ndarray, const: int) -> np.ndarray:
    """Multiply every byte of *values* by *const* in GF(2^8).

    The 256-entry table for *const* is built once with `gf_mult` and reused.
    """
    const = _check_byte(const, "const")
    table = _LOOKUP_CACHE.get(const)
    if table is None:
        table = np.array([gf_mult(v, const) for v in range(256)], dtype=np.uint8)
        table.setflags(write=False)
        _LOOKUP_CACHE[const] = table
    arr = np.asarray(values, dtype=np.uint8)
    return table[arr]
