"""aes_table_verifier.py

Correctness checks for generated and re-read tables.

The ``check_*`` functions return a bool and log the first problem found;
the ``find_*`` functions return the structured error (or None) so callers can
surface it.  Nothing here raises on a failed check.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from aes_ground_truth import SBOX_SPOT_CHECKS, reference_sbox
from aes_gf_mult import gf_mult_lookup
from aes_table_errors import (
    BijectionViolation,
    RconDerivationViolation,
    ReferenceMismatch,
    RoundTripMismatch,
    TableError,
)
from aes_tables import SBOX_SIZE, TABLE_NAMES, AESTables

__all__ = [
    "find_bijection_violation",
    "check_bijection",
    "find_round_trip_mismatch",
    "check_round_trip",
    "find_rcon_violation",
    "check_rcon_derivation",
    "find_reference_mismatch",
    "check_reference",
    "VerificationReport",
    "verify_all",
]

logger = logging.getLogger("aes_tables.verifier")


# -----------------------------------------------------------------------------
# Bijection
# -----------------------------------------------------------------------------


def find_bijection_violation(
    sbox: np.ndarray, inverse_sbox: np.ndarray
) -> Optional[BijectionViolation]:
    """Return the first index where the pair fails to invert, else None.

    Checks ``inverse[sbox[i]] == i`` for every i.  When that holds, sbox is
    injective on 256 values, so ``sbox[inverse[i]] == i`` follows.
    """
    s = np.asarray(sbox, dtype=np.uint8)
    inv = np.asarray(inverse_sbox, dtype=np.uint8)
    if s.size != SBOX_SIZE or inv.size != SBOX_SIZE:
        raise ValueError("S-box and inverse S-box must both hold 256 entries")

    identity = np.arange(SBOX_SIZE)
    bad = np.flatnonzero(inv[s] != identity)
    if bad.size:
        i = int(bad[0])
        return BijectionViolation(i, int(s[i]), int(inv[s[i]]))
    return None


def check_bijection(sbox: np.ndarray, inverse_sbox: np.ndarray) -> bool:
    violation = find_bijection_violation(sbox, inverse_sbox)
    if violation is not None:
        logger.error("Error: %s", violation)
        return False
    logger.info("S-box and Inverse S-box are correct!")
    return True


# -----------------------------------------------------------------------------
# Round trip
# -----------------------------------------------------------------------------


def find_round_trip_mismatch(
    original: AESTables, decoded: AESTables
) -> Optional[RoundTripMismatch]:
    """First element-wise difference, scanning S-box, inverse, then Rcon."""
    for (name, expected), (_, actual) in zip(original.named(), decoded.named()):
        if expected.size != actual.size:
            index = min(expected.size, actual.size)
            exp_val = int(expected[index]) if index < expected.size else -1
            act_val = int(actual[index]) if index < actual.size else -1
            return RoundTripMismatch(name, index, exp_val, act_val)
        diff = np.flatnonzero(expected != actual)
        if diff.size:
            i = int(diff[0])
            return RoundTripMismatch(name, i, int(expected[i]), int(actual[i]))
    return None


def check_round_trip(original: AESTables, decoded: AESTables) -> bool:
    mismatch = find_round_trip_mismatch(original, decoded)
    if mismatch is not None:
        logger.error("Error: %s", mismatch)
        return False
    for name in TABLE_NAMES:
        logger.info("%s matches perfectly!", name)
    return True


# -----------------------------------------------------------------------------
# Rcon / reference
# -----------------------------------------------------------------------------


def find_rcon_violation(rcon: np.ndarray) -> Optional[RconDerivationViolation]:
    """First Rcon entry that is not ``2 · previous`` in GF(2^8), else None."""
    arr = np.asarray(rcon, dtype=np.uint8)
    if arr.size < 2:
        return None
    doubled = gf_mult_lookup(arr[:-1], 2)
    bad = np.flatnonzero(doubled != arr[1:])
    if bad.size:
        i = int(bad[0]) + 1
        return RconDerivationViolation(i, int(arr[i - 1]), int(doubled[i - 1]), int(arr[i]))
    return None


def check_rcon_derivation(rcon: np.ndarray) -> bool:
    """Every Rcon entry must be the field double of its predecessor."""
    violation = find_rcon_violation(rcon)
    if violation is not None:
        logger.error("Error: %s", violation)
        return False
    return True


def find_reference_mismatch(tables: AESTables) -> Optional[ReferenceMismatch]:
    """Spot values first, then the whole published S-box."""
    for index, expected in SBOX_SPOT_CHECKS.items():
        actual = int(tables.sbox[index])
        if actual != expected:
            return ReferenceMismatch(index, expected, actual)
    reference = reference_sbox()
    diff = np.flatnonzero(tables.sbox != reference)
    if diff.size:
        i = int(diff[0])
        return ReferenceMismatch(i, int(reference[i]), int(tables.sbox[i]))
    return None


def check_reference(tables: AESTables) -> bool:
    """Compare the S-box with the published FIPS-197 table."""
    mismatch = find_reference_mismatch(tables)
    if mismatch is not None:
        logger.error("Error: %s", mismatch)
        return False
    return True


# -----------------------------------------------------------------------------
# Aggregate
# -----------------------------------------------------------------------------


@dataclass
class VerificationReport:
    bijection: bool = False
    round_trip: bool = False
    rcon_derivation: bool = False
    reference: bool = False
    violations: List[TableError] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all((self.bijection, self.round_trip, self.rcon_derivation, self.reference))


def verify_all(original: AESTables, decoded: AESTables) -> VerificationReport:
    """Run every check on the decoded tables against the originals."""
    report = VerificationReport()

    report.bijection = check_bijection(decoded.sbox, decoded.inverse_sbox)
    if not report.bijection:
        report.violations.append(
            find_bijection_violation(decoded.sbox, decoded.inverse_sbox)
        )

    report.round_trip = check_round_trip(original, decoded)
    if not report.round_trip:
        report.violations.append(find_round_trip_mismatch(original, decoded))

    report.rcon_derivation = check_rcon_derivation(decoded.rcon)
    if not report.rcon_derivation:
        report.violations.append(find_rcon_violation(decoded.rcon))

    report.reference = check_reference(decoded)
    if not report.reference:
        report.violations.append(find_reference_mismatch(decoded))

    if report.passed:
        logger.info("All table checks passed")
    else:
        logger.warning("Table verification failed: %d violation(s)", len(report.violations))
    return report
