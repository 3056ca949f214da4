from __future__ import annotations

import os
import unittest
import zlib

from rollcrc.constants import CRC32_POLY
from rollcrc.engine import checksum, finish, init, unfinish, update, update_bytes
from rollcrc.params import ROLLING, ZIP
from rollcrc.table import build_reference_table


TABLE = build_reference_table(CRC32_POLY)


class EngineTests(unittest.TestCase):
    def test_init_and_finish(self):
        self.assertEqual(init(ROLLING), 0)
        self.assertEqual(init(ZIP), 0xFFFFFFFF)
        self.assertEqual(finish(0x1234, ROLLING), 0x1234)
        self.assertEqual(finish(0x1234, ZIP), 0x1234 ^ 0xFFFFFFFF)
        self.assertEqual(unfinish(finish(0xDEADBEEF, ZIP), ZIP), 0xDEADBEEF)

    def test_single_update(self):
        self.assertEqual(update(0, TABLE, 1), 0x77073096)
        self.assertEqual(update(0, TABLE, 0), 0)

    def test_empty_buffer(self):
        self.assertEqual(checksum(b"", TABLE, ROLLING), finish(init(ROLLING), ROLLING))
        self.assertEqual(checksum(b"", TABLE, ZIP), 0)

    def test_zip_check_value(self):
        self.assertEqual(checksum(b"123456789", TABLE, ZIP), 0xCBF43926)

    def test_zip_matches_zlib(self):
        for size in (1, 7, 100, 1000):
            data = os.urandom(size)
            self.assertEqual(checksum(data, TABLE, ZIP), zlib.crc32(data))

    def test_deterministic(self):
        data = os.urandom(512)
        self.assertEqual(checksum(data, TABLE), checksum(data, TABLE))

    def test_accepts_iterables(self):
        data = bytes(range(50))
        expected = checksum(data, TABLE)
        self.assertEqual(checksum(list(data), TABLE), expected)
        self.assertEqual(checksum(bytearray(data), TABLE), expected)
        self.assertEqual(checksum(memoryview(data), TABLE), expected)

    def test_update_bytes_is_incremental(self):
        data = os.urandom(300)
        state = update_bytes(init(ZIP), TABLE, data[:123])
        state = update_bytes(state, TABLE, data[123:])
        self.assertEqual(finish(state, ZIP), zlib.crc32(data))

    def test_linear_over_xor(self):
        # With a zero initial value the checksum is linear in the input.
        a = os.urandom(64)
        b = os.urandom(64)
        ab = bytes(x ^ y for x, y in zip(a, b))
        self.assertEqual(checksum(ab, TABLE), checksum(a, TABLE) ^ checksum(b, TABLE))


if __name__ == "__main__":
    unittest.main()
