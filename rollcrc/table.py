"""
CRC-32 lookup tables.

Two independent ways of building the same 256-entry table:

- ``build_reference_table``: eight shift/XOR rounds per entry.
- ``build_fast_table``: the doubling construction. Only the entry at 128 is
  given; each lower power of two is one bit round beyond the one above it,
  and every other entry is an XOR of power-of-two entries. This works for
  any table whose generating function is linear over GF(2), which is why
  ``doubling_build`` is also used for rolling tables.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

from .constants import CRC32_POLY, MASK32, SEED_INDEX, TABLE_SIZE

Table = Tuple[int, ...]


def crc_bit_step(poly: int = CRC32_POLY) -> Callable[[int], int]:
    """Return one reflected CRC bit round for ``poly``."""

    def step(r: int) -> int:
        if r & 1:
            return (r >> 1) ^ poly
        return r >> 1

    return step


def build_reference_table(poly: int = CRC32_POLY) -> Table:
    step = crc_bit_step(poly)
    tbl = []
    for n in range(TABLE_SIZE):
        c = n
        for _ in range(8):
            c = step(c)
        tbl.append(c & MASK32)
    return tuple(tbl)


def doubling_build(seed: int, step: Callable[[int], int]) -> Table:
    """Build a linear table from its entry at index 128.

    Args:
        seed: Value of ``table[128]``.
        step: Maps ``table[2*i]`` to ``table[i]`` for powers of two.

    Returns:
        A 256-entry tuple with ``table[0] == 0``.
    """
    tbl = [0] * TABLE_SIZE
    r = seed & MASK32
    tbl[SEED_INDEX] = r
    i = SEED_INDEX // 2
    while i:
        r = step(r) & MASK32
        tbl[i] = r
        i //= 2

    i = 2
    while i < TABLE_SIZE:
        for j in range(1, i):
            tbl[i + j] = tbl[i] ^ tbl[j]
        i *= 2
    return tuple(tbl)


def build_fast_table(seed: int = CRC32_POLY, poly: int = CRC32_POLY) -> Table:
    return doubling_build(seed, crc_bit_step(poly))


def check_table(table: Sequence[int]) -> None:
    if len(table) != TABLE_SIZE:
        raise ValueError(f"table must have {TABLE_SIZE} entries, got {len(table)}")


def doubling_violations(table: Sequence[int]) -> List[Tuple[int, int]]:
    """List ``(i, j)`` pairs where ``table[i+j] != table[i] ^ table[j]``.

    ``i`` runs over powers of two and ``j`` over ``0..i-1``; the ``j == 0``
    case covers ``table[0] == 0``.
    """
    check_table(table)
    bad: List[Tuple[int, int]] = []
    i = 1
    while i < TABLE_SIZE:
        for j in range(i):
            if table[i + j] != table[i] ^ table[j]:
                bad.append((i, j))
        i *= 2
    return bad


def check_doubling(table: Sequence[int]) -> bool:
    return not doubling_violations(table)


def diff_tables(expected: Sequence[int], actual: Sequence[int]) -> List[Tuple[int, int, int]]:
    check_table(expected)
    check_table(actual)
    return [(i, a, b) for i, (a, b) in enumerate(zip(expected, actual)) if a != b]
