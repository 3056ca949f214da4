"""
Rolling CRC over a fixed-size window.

``rolling_table[c]`` is what a byte ``c`` contributes to the state once it
sits ``W`` bytes before the trailing edge of the window. Feeding a new byte
with ``update`` and XOR-ing out ``rolling_table[oldest]`` moves the window one
byte to the right.
"""

from __future__ import annotations

from collections import deque
from functools import lru_cache
from typing import Iterator, Optional, Sequence, Tuple

from .constants import SEED_INDEX, TABLE_SIZE
from .engine import BytesLike, checksum, finish, init, unfinish, update
from .params import DEFAULT_PARAMS, CRCParams
from .table import Table, build_reference_table, check_table, crc_bit_step, doubling_build


def rolling_entry(
    base_table: Sequence[int],
    c: int,
    window_size: Optional[int] = None,
    params: CRCParams = DEFAULT_PARAMS,
) -> int:
    """Brute-force rolling contribution of byte ``c``.

    ``x`` is the state after ``c`` followed by ``W`` zero bytes, ``y`` the
    state after the ``W`` zero bytes alone. The extra update on the ``x`` side
    is the byte itself leaving the window.
    """
    w = params.window_size if window_size is None else window_size
    if w <= 0:
        raise ValueError("window_size must be positive")
    x = update(init(params), base_table, c)
    y = init(params)
    for _ in range(w):
        x = update(x, base_table, 0)
        y = update(y, base_table, 0)
    return x ^ y


def build_rolling_table_slow(
    base_table: Sequence[int],
    window_size: Optional[int] = None,
    params: CRCParams = DEFAULT_PARAMS,
) -> Table:
    check_table(base_table)
    return tuple(rolling_entry(base_table, c, window_size, params) for c in range(TABLE_SIZE))


def build_rolling_table_checksum(base_table: Sequence[int], params: CRCParams = DEFAULT_PARAMS) -> Table:
    """Rolling table as ``checksum(bytes([c]) + W zero bytes)``.

    Only valid with a zero initial value, where the zero-window term vanishes.
    """
    check_table(base_table)
    if not params.linear:
        raise ValueError("checksum-derived rolling table requires init_value == 0")
    zeros = bytes(params.window_size)
    return tuple(checksum(bytes([c]) + zeros, base_table, params) for c in range(TABLE_SIZE))


def build_rolling_table_fast(
    base_table: Sequence[int],
    params: CRCParams = DEFAULT_PARAMS,
    window_size: Optional[int] = None,
) -> Table:
    """Rolling table from a single brute-force entry via ``doubling_build``.

    With a non-zero initial value every entry carries the same constant
    (``rolling_entry(0)``); it is removed from the seed and added back to
    each doubled entry.
    """
    check_table(base_table)
    step = crc_bit_step(params.poly)
    seed = rolling_entry(base_table, SEED_INDEX, window_size, params)
    if params.linear:
        return doubling_build(seed, step)
    offset = rolling_entry(base_table, 0, window_size, params)
    return tuple(v ^ offset for v in doubling_build(seed ^ offset, step))


def roll(
    crc: int,
    base_table: Sequence[int],
    rolling_table: Sequence[int],
    leaving: BytesLike,
    entering: BytesLike,
    params: CRCParams = DEFAULT_PARAMS,
) -> int:
    """Slide a finished window checksum right by ``len(entering)`` bytes.

    ``leaving[k]`` is the byte dropped when ``entering[k]`` comes in.
    """
    leaving = bytes(leaving)
    entering = bytes(entering)
    if len(leaving) != len(entering):
        raise ValueError("leaving and entering must have the same length")
    state = unfinish(crc, params)
    for out_b, in_b in zip(leaving, entering):
        state = update(state, base_table, in_b) ^ rolling_table[out_b]
    return finish(state, params)


@lru_cache(maxsize=8)
def default_tables(params: CRCParams = DEFAULT_PARAMS) -> Tuple[Table, Table]:
    base = build_reference_table(params.poly)
    return base, build_rolling_table_fast(base, params)


class RollingCRC:
    """CRC of the last ``window_size`` bytes fed, updated in O(1) per byte."""

    def __init__(
        self,
        params: CRCParams = DEFAULT_PARAMS,
        base_table: Optional[Sequence[int]] = None,
        rolling_table: Optional[Sequence[int]] = None,
    ) -> None:
        if base_table is None:
            base_table, default_rolling = default_tables(params)
            if rolling_table is None:
                rolling_table = default_rolling
        elif rolling_table is None:
            # The doubling step assumes params.poly; a caller table may not match it
            rolling_table = build_rolling_table_slow(base_table, params=params)
        check_table(base_table)
        check_table(rolling_table)
        self.params = params
        self.base_table = base_table
        self.rolling_table = rolling_table
        self._window: deque = deque(maxlen=params.window_size)
        self.state = init(params)

    @property
    def window_size(self) -> int:
        return self.params.window_size

    @property
    def full(self) -> bool:
        return len(self._window) == self.params.window_size

    def __len__(self) -> int:
        return len(self._window)

    def reset(self) -> None:
        self._window.clear()
        self.state = init(self.params)

    def update(self, byte: int) -> None:
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")
        state = update(self.state, self.base_table, byte)
        if self.full:
            # deque(maxlen) drops the oldest byte on append
            state ^= self.rolling_table[self._window[0]]
        self._window.append(byte)
        self.state = state

    def feed(self, data: BytesLike) -> None:
        for b in data:
            self.update(b)

    def digest(self) -> int:
        return finish(self.state, self.params)

    def window(self) -> bytes:
        return bytes(self._window)


def iter_window_checksums(
    data: BytesLike,
    params: CRCParams = DEFAULT_PARAMS,
    base_table: Optional[Sequence[int]] = None,
    rolling_table: Optional[Sequence[int]] = None,
) -> Iterator[Tuple[int, int]]:
    """Yield ``(offset, crc)`` for every complete window in ``data``."""
    roller = RollingCRC(params, base_table, rolling_table)
    w = params.window_size
    for pos, b in enumerate(data):
        roller.update(b)
        if pos + 1 >= w:
            yield pos + 1 - w, roller.digest()
