from __future__ import annotations

from typing import Iterable, Sequence, Union

from .params import DEFAULT_PARAMS, CRCParams

BytesLike = Union[bytes, bytearray, memoryview, Iterable[int]]


def init(params: CRCParams = DEFAULT_PARAMS) -> int:
    return params.init_value


def update(state: int, table: Sequence[int], byte: int) -> int:
    return table[(state ^ byte) & 0xFF] ^ (state >> 8)


def update_bytes(state: int, table: Sequence[int], data: BytesLike) -> int:
    for b in data:
        state = table[(state ^ b) & 0xFF] ^ (state >> 8)
    return state


def finish(state: int, params: CRCParams = DEFAULT_PARAMS) -> int:
    return state ^ params.init_value


def unfinish(crc: int, params: CRCParams = DEFAULT_PARAMS) -> int:
    """Recover the running state from a finished checksum."""
    return crc ^ params.init_value


def checksum(buffer: BytesLike, table: Sequence[int], params: CRCParams = DEFAULT_PARAMS) -> int:
    """Checksum ``buffer`` with ``table``.

    An empty buffer yields ``finish(init())``.
    """
    return finish(update_bytes(init(params), table, buffer), params)
