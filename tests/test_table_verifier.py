import unittest

from aes_table_codec import decode, encode
from aes_table_errors import (
    BijectionViolation,
    RconDerivationViolation,
    ReferenceMismatch,
    RoundTripMismatch,
)
from aes_table_generator import generate_tables
from aes_table_verifier import (
    check_bijection,
    check_rcon_derivation,
    check_reference,
    check_round_trip,
    find_bijection_violation,
    find_rcon_violation,
    find_reference_mismatch,
    find_round_trip_mismatch,
    verify_all,
)
from aes_tables import AESTables


def _tamper(tables, sbox=None, inverse_sbox=None, rcon=None):
    return AESTables.from_sequences(
        sbox if sbox is not None else tables.sbox.tolist(),
        inverse_sbox if inverse_sbox is not None else tables.inverse_sbox.tolist(),
        rcon if rcon is not None else tables.rcon.tolist(),
    )


def _swapped_pair(tables, a, b):
    """Swap two S-box outputs and keep the inverse consistent."""
    sbox = tables.sbox.tolist()
    sbox[a], sbox[b] = sbox[b], sbox[a]
    inverse = [0] * 256
    for i, v in enumerate(sbox):
        inverse[v] = i
    return _tamper(tables, sbox=sbox, inverse_sbox=inverse)


class TestBijection(unittest.TestCase):
    def setUp(self):
        self.tables = generate_tables()

    def test_generated_pair_passes(self):
        self.assertIsNone(find_bijection_violation(self.tables.sbox, self.tables.inverse_sbox))
        self.assertTrue(check_bijection(self.tables.sbox, self.tables.inverse_sbox))

    def test_swapped_sbox_entries_detected(self):
        sbox = self.tables.sbox.tolist()
        sbox[4], sbox[5] = sbox[5], sbox[4]
        with self.assertLogs("aes_tables.verifier", level="ERROR") as logs:
            self.assertFalse(check_bijection(sbox, self.tables.inverse_sbox))
        self.assertIn("index 4", logs.output[0])

        violation = find_bijection_violation(sbox, self.tables.inverse_sbox)
        self.assertIsInstance(violation, BijectionViolation)
        self.assertEqual(violation.index, 4)
        self.assertEqual(violation.sbox_value, sbox[4])
        self.assertEqual(violation.inverse_value, 5)

    def test_identity_pair_is_a_bijection(self):
        ident = list(range(256))
        self.assertTrue(check_bijection(ident, ident))

    def test_wrong_size_rejected(self):
        with self.assertRaises(ValueError):
            find_bijection_violation(list(range(10)), list(range(256)))


class TestRoundTrip(unittest.TestCase):
    def setUp(self):
        self.tables = generate_tables()

    def test_decoded_matches(self):
        decoded = decode(encode(self.tables))
        self.assertTrue(check_round_trip(self.tables, decoded))

    def test_mismatch_reports_table_index_values(self):
        rcon = self.tables.rcon.tolist()
        rcon[7] = 0x00
        decoded = _tamper(self.tables, rcon=rcon)

        mismatch = find_round_trip_mismatch(self.tables, decoded)
        self.assertIsInstance(mismatch, RoundTripMismatch)
        self.assertEqual(mismatch.table, "Rcon")
        self.assertEqual(mismatch.index, 7)
        self.assertEqual(mismatch.expected, 0x40)
        self.assertEqual(mismatch.actual, 0x00)

        with self.assertLogs("aes_tables.verifier", level="ERROR") as logs:
            self.assertFalse(check_round_trip(self.tables, decoded))
        self.assertIn("Rcon", logs.output[0])

    def test_first_mismatch_wins(self):
        inverse = self.tables.inverse_sbox.tolist()
        inverse[200] ^= 0x01
        sbox = self.tables.sbox.tolist()
        sbox[250] ^= 0x01
        mismatch = find_round_trip_mismatch(
            self.tables, _tamper(self.tables, sbox=sbox, inverse_sbox=inverse)
        )
        self.assertEqual(mismatch.table, "S-box")
        self.assertEqual(mismatch.index, 250)


class TestRconAndReference(unittest.TestCase):
    def test_rcon_derivation(self):
        tables = generate_tables()
        self.assertTrue(check_rcon_derivation(tables.rcon))
        with self.assertLogs("aes_tables.verifier", level="ERROR"):
            self.assertFalse(check_rcon_derivation([0x01, 0x02, 0x03]))

    def test_reference(self):
        tables = generate_tables()
        self.assertTrue(check_reference(tables))
        ident = list(range(256))
        with self.assertLogs("aes_tables.verifier", level="ERROR"):
            self.assertFalse(
                check_reference(AESTables.from_sequences(ident, ident, tables.rcon.tolist()))
            )

    def test_find_rcon_violation(self):
        tables = generate_tables()
        self.assertIsNone(find_rcon_violation(tables.rcon))
        rcon = tables.rcon.tolist()
        rcon[3] = 0x05
        violation = find_rcon_violation(rcon)
        self.assertIsInstance(violation, RconDerivationViolation)
        self.assertEqual(violation.index, 3)
        self.assertEqual(violation.previous, 0x02)
        self.assertEqual(violation.expected, 0x04)
        self.assertEqual(violation.actual, 0x05)

    def test_find_reference_mismatch(self):
        tables = generate_tables()
        self.assertIsNone(find_reference_mismatch(tables))
        mismatch = find_reference_mismatch(_swapped_pair(tables, 0x10, 0x11))
        self.assertIsInstance(mismatch, ReferenceMismatch)
        self.assertEqual(mismatch.index, 0x10)
        self.assertEqual(mismatch.expected, 0xCA)
        self.assertEqual(mismatch.actual, 0x82)


class TestVerifyAll(unittest.TestCase):
    def test_clean_run(self):
        tables = generate_tables()
        report = verify_all(tables, decode(encode(tables)))
        self.assertTrue(report.passed)
        self.assertEqual(report.violations, [])

    def test_collects_violations(self):
        tables = generate_tables()
        sbox = tables.sbox.tolist()
        sbox[0], sbox[1] = sbox[1], sbox[0]
        with self.assertLogs("aes_tables.verifier", level="ERROR"):
            report = verify_all(tables, _tamper(tables, sbox=sbox))
        self.assertFalse(report.passed)
        self.assertFalse(report.bijection)
        self.assertFalse(report.round_trip)
        self.assertFalse(report.reference)
        self.assertTrue(report.rcon_derivation)
        kinds = [type(v) for v in report.violations]
        self.assertEqual(kinds, [BijectionViolation, RoundTripMismatch, ReferenceMismatch])

    def test_rcon_only_failure_is_reported(self):
        tables = generate_tables()
        rcon = tables.rcon.tolist()
        rcon[3] = 0x05
        bad = _tamper(tables, rcon=rcon)
        with self.assertLogs("aes_tables.verifier", level="ERROR"):
            report = verify_all(bad, bad)
        self.assertFalse(report.passed)
        self.assertFalse(report.rcon_derivation)
        self.assertTrue(report.bijection)
        self.assertTrue(report.round_trip)
        self.assertTrue(report.reference)
        self.assertEqual(len(report.violations), 1)
        self.assertIsInstance(report.violations[0], RconDerivationViolation)
        self.assertEqual(report.violations[0].index, 3)

    def test_reference_only_failure_is_reported(self):
        bad = _swapped_pair(generate_tables(), 0x10, 0x11)
        with self.assertLogs("aes_tables.verifier", level="ERROR"):
            report = verify_all(bad, bad)
        self.assertFalse(report.passed)
        self.assertTrue(report.bijection)
        self.assertTrue(report.rcon_derivation)
        self.assertFalse(report.reference)
        self.assertEqual(len(report.violations), 1)
        self.assertIsInstance(report.violations[0], ReferenceMismatch)
        self.assertEqual(report.violations[0].index, 0x10)


if __name__ == "__main__":
    unittest.main()
