from __future__ import annotations

import dataclasses
import unittest

from rollcrc.constants import CRC32_POLY
from rollcrc.params import ROLLING, ZIP, CRCParams
from rollcrc.table import (
    build_fast_table,
    build_reference_table,
    check_doubling,
    crc_bit_step,
    diff_tables,
    doubling_build,
    doubling_violations,
)

CRC32C_POLY = 0x82F63B78


class ReferenceTableTests(unittest.TestCase):
    def test_known_entries(self):
        t = build_reference_table(CRC32_POLY)
        self.assertEqual(len(t), 256)
        self.assertEqual(t[0], 0)
        self.assertEqual(t[1], 0x77073096)
        self.assertEqual(t[128], CRC32_POLY)
        self.assertEqual(t[255], 0x2D02EF8D)

    def test_entries_fit_in_32_bits(self):
        for v in build_reference_table(CRC32_POLY):
            self.assertGreaterEqual(v, 0)
            self.assertLessEqual(v, 0xFFFFFFFF)


class FastTableTests(unittest.TestCase):
    def test_matches_reference(self):
        ref = build_reference_table(CRC32_POLY)
        fast = build_fast_table(CRC32_POLY)
        self.assertEqual(fast[1], 0x77073096)
        self.assertEqual(diff_tables(ref, fast), [])
        self.assertEqual(ref, fast)

    def test_matches_reference_for_other_polynomial(self):
        self.assertEqual(
            build_reference_table(CRC32C_POLY),
            build_fast_table(CRC32C_POLY, CRC32C_POLY),
        )

    def test_doubling_build_powers_of_two(self):
        step = crc_bit_step(CRC32_POLY)
        t = doubling_build(CRC32_POLY, step)
        i = 64
        while i:
            self.assertEqual(t[i], step(t[2 * i]))
            i //= 2

    def test_doubling_build_zero_seed(self):
        self.assertEqual(doubling_build(0, crc_bit_step()), (0,) * 256)


class DoublingInvariantTests(unittest.TestCase):
    def test_base_table_is_linear(self):
        t = build_reference_table(CRC32_POLY)
        self.assertTrue(check_doubling(t))
        i = 1
        while i < 256:
            for j in range(i):
                self.assertEqual(t[i + j], t[i] ^ t[j])
            i *= 2

    def test_violations_reported(self):
        t = list(build_reference_table(CRC32_POLY))
        t[77] ^= 1
        bad = doubling_violations(t)
        self.assertTrue(bad)
        self.assertIn((64, 13), bad)
        self.assertFalse(check_doubling(t))

    def test_nonzero_first_entry_breaks_invariant(self):
        t = list(build_reference_table(CRC32_POLY))
        t[0] = 1
        self.assertIn((1, 0), doubling_violations(t))

    def test_wrong_size_rejected(self):
        with self.assertRaises(ValueError):
            doubling_violations([0] * 255)
        with self.assertRaises(ValueError):
            diff_tables([0] * 256, [0] * 257)


class ParamsTests(unittest.TestCase):
    def test_defaults(self):
        self.assertEqual(ROLLING.poly, CRC32_POLY)
        self.assertEqual(ROLLING.window_size, 100)
        self.assertEqual(ROLLING.init_value, 0)
        self.assertTrue(ROLLING.linear)
        self.assertFalse(ZIP.linear)

    def test_presets(self):
        self.assertIs(CRCParams.from_preset("rolling"), ROLLING)
        self.assertIs(CRCParams.from_preset("zip"), ZIP)
        with self.assertRaises(ValueError):
            CRCParams.from_preset("crc64")

    def test_validation(self):
        with self.assertRaises(ValueError):
            CRCParams(window_size=0)
        with self.assertRaises(ValueError):
            CRCParams(poly=-1)
        with self.assertRaises(ValueError):
            CRCParams(init_value=1 << 32)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            ROLLING.window_size = 5  # type: ignore[misc]
        self.assertEqual(dataclasses.replace(ROLLING, window_size=5).window_size, 5)


if __name__ == "__main__":
    unittest.main()
