"""Cross-checks between independently built tables and checksums."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from .constants import DEFAULT_TEST_EXTRA
from .engine import BytesLike, checksum, finish, unfinish, update
from .errors import ChecksumMismatch, DoublingInvariantError, TableMismatch
from .params import DEFAULT_PARAMS, CRCParams
from .rolling import build_rolling_table_checksum, build_rolling_table_fast, build_rolling_table_slow, roll
from .table import Table, build_fast_table, build_reference_table, diff_tables, doubling_violations


def demo_buffer(length: int) -> bytes:
    return bytes((11 + 31 * i + i // 17) & 0xFF for i in range(length))


def _require_equal(name: str, expected: Sequence[int], actual: Sequence[int]) -> None:
    bad = diff_tables(expected, actual)
    if bad:
        raise TableMismatch(name, bad)


def _require_doubling(name: str, table: Sequence[int]) -> None:
    bad = doubling_violations(table)
    if bad:
        raise DoublingInvariantError(name, [(i + j, table[i] ^ table[j], table[i + j]) for i, j in bad])


def check_tables(params: CRCParams = DEFAULT_PARAMS) -> Tuple[Table, Table]:
    """Build every table two ways and require agreement.

    Returns:
        ``(base_table, rolling_table)``.

    Raises:
        TableMismatch: two constructions of the same table disagree.
        DoublingInvariantError: a linear table breaks the doubling invariant.
    """
    base = build_reference_table(params.poly)
    _require_equal("c-crc", base, build_fast_table(params.poly, params.poly))
    _require_doubling("c-crc", base)

    slow = build_rolling_table_slow(base, params=params)
    fast = build_rolling_table_fast(base, params)
    _require_equal("fr-crc", slow, fast)
    if params.linear:
        _require_equal("sr-crc", build_rolling_table_checksum(base, params), slow)
        _require_doubling("fr-crc", fast)
    return base, fast


def verify_rolling(
    buffer: BytesLike,
    base_table: Sequence[int],
    rolling_table: Sequence[int],
    params: CRCParams = DEFAULT_PARAMS,
) -> List[int]:
    """Checksum every window of ``buffer`` directly and by rolling.

    Returns:
        The ``len(buffer) - W + 1`` window checksums, in offset order.

    Raises:
        ChecksumMismatch: at the first offset where the two disagree.
    """
    buf = bytes(buffer)
    w = params.window_size
    if len(buf) < w:
        raise ValueError(f"buffer shorter than window ({len(buf)} < {w})")

    crc = checksum(buf[:w], base_table, params)
    results = [crc]
    state = unfinish(crc, params)
    for k in range(len(buf) - w):
        state = update(state, base_table, buf[w + k]) ^ rolling_table[buf[k]]
        rolled = finish(state, params)
        direct = checksum(buf[k + 1 : k + 1 + w], base_table, params)
        if rolled != direct:
            raise ChecksumMismatch(k + 1, direct, rolled)
        results.append(rolled)
    return results


@dataclass
class SelfTestReport:
    params: CRCParams
    direct: int
    rolled: int
    window_checksums: List[int] = field(default_factory=list)


def run_selftest(params: CRCParams = DEFAULT_PARAMS, extra: int = DEFAULT_TEST_EXTRA) -> SelfTestReport:
    """Check all tables, then roll the demo buffer one window at a time.

    ``direct`` is the checksum of the last window, ``rolled`` the checksum of
    the first window slid ``extra`` bytes to the right.

    Raises:
        TableMismatch: see ``check_tables``.
        ChecksumMismatch: the rolled and direct checksums differ.
    """
    if extra < 0:
        raise ValueError("extra must be non-negative")
    base, rolling = check_tables(params)
    w = params.window_size
    buf = demo_buffer(w + extra)
    direct = checksum(buf[extra : extra + w], base, params)
    rolled = roll(checksum(buf[:w], base, params), base, rolling, buf[:extra], buf[w:], params)
    if rolled != direct:
        raise ChecksumMismatch(extra, direct, rolled)
    return SelfTestReport(params, direct, rolled, verify_rolling(buf, base, rolling, params))
