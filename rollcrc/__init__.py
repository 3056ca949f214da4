"""
rollcrc: reflected CRC-32 lookup tables and rolling window checksums.

Features:

- Base 256-entry table built two ways: bitwise reference and the O(256)
  doubling construction, which must agree entry for entry.
- Table-driven checksum engine with an explicit init/update/finish contract.
- Rolling table for a fixed window of W bytes, built by brute force and by
  re-seeding the doubling construction, so a window checksum slides one byte
  at a time in O(1).
- ``RollingCRC`` sliding-window object and a ``rollcrc`` CLI with a self-test
  that cross-checks every construction.

The polynomial, window size and initial value are fixed per ``CRCParams``
value; the defaults use 0xEDB88320, a 100-byte window and a zero initial value.
"""

from .engine import checksum, finish, init, unfinish, update, update_bytes
from .errors import ChecksumMismatch, DoublingInvariantError, RollCRCError, TableMismatch
from .params import DEFAULT_PARAMS, ROLLING, ZIP, CRCParams
from .rolling import (
    RollingCRC,
    build_rolling_table_checksum,
    build_rolling_table_fast,
    build_rolling_table_slow,
    iter_window_checksums,
    roll,
)
from .table import build_fast_table, build_reference_table, check_doubling, doubling_build
from .verify import check_tables, run_selftest, verify_rolling

__version__ = "0.1"

__all__ = [
    "CRCParams",
    "DEFAULT_PARAMS",
    "ROLLING",
    "ZIP",
    "build_reference_table",
    "build_fast_table",
    "doubling_build",
    "check_doubling",
    "init",
    "update",
    "update_bytes",
    "finish",
    "unfinish",
    "checksum",
    "build_rolling_table_slow",
    "build_rolling_table_fast",
    "build_rolling_table_checksum",
    "roll",
    "RollingCRC",
    "iter_window_checksums",
    "check_tables",
    "verify_rolling",
    "run_selftest",
    "RollCRCError",
    "TableMismatch",
    "DoublingInvariantError",
    "ChecksumMismatch",
]
