from __future__ import annotations

from typing import List, Tuple


class RollCRCError(Exception):
    """Base class for rollcrc-specific errors."""


# Cross-check failures. These subclass AssertionError: a mismatch means a
# broken table or engine, never a condition to recover from.
class TableMismatch(RollCRCError, AssertionError):
    def __init__(self, name: str, mismatches: List[Tuple[int, int, int]]):
        self.name = name
        self.mismatches = mismatches
        shown = ", ".join(f"{i:02x}: {a:08x} != {b:08x}" for i, a, b in mismatches[:4])
        more = f" (+{len(mismatches) - 4} more)" if len(mismatches) > 4 else ""
        super().__init__(f"{name}: {len(mismatches)} entries differ [{shown}]{more}")


class DoublingInvariantError(TableMismatch):
    pass


class ChecksumMismatch(RollCRCError, AssertionError):
    def __init__(self, offset: int, direct: int, rolled: int):
        self.offset = offset
        self.direct = direct
        self.rolled = rolled
        super().__init__(f"window at offset {offset}: {direct:08x} ARE NOT EQUAL {rolled:08x}")
