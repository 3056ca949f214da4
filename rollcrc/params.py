from __future__ import annotations

from dataclasses import dataclass

from .constants import (
    CRC32_POLY,
    DEFAULT_WINDOW_SIZE,
    INIT_ONES,
    INIT_ZERO,
    MASK32,
    PRESET_ROLLING,
    PRESET_ZIP,
)


@dataclass(frozen=True)
class CRCParams:
    """Fixed configuration of the checksum and its rolling window.

    Attributes:
        poly: Reflected 32-bit generator polynomial.
        window_size: Number of bytes in the rolling window.
        init_value: Initial state; ``finish`` XORs it back out.
    """

    poly: int = CRC32_POLY
    window_size: int = DEFAULT_WINDOW_SIZE
    init_value: int = INIT_ZERO

    def __post_init__(self) -> None:
        for name in ("poly", "init_value"):
            v = getattr(self, name)
            if not isinstance(v, int) or v < 0 or v > MASK32:
                raise ValueError(f"{name} must be a 32-bit unsigned integer")
        if not isinstance(self.window_size, int) or self.window_size <= 0:
            raise ValueError("window_size must be a positive integer")

    @property
    def linear(self) -> bool:
        # Rolling tables only satisfy the doubling invariant without an offset
        return self.init_value == 0

    @classmethod
    def from_preset(cls, name: str) -> "CRCParams":
        try:
            return PRESETS[name]
        except KeyError:
            raise ValueError(f"unknown preset: {name}") from None


ROLLING = CRCParams()
ZIP = CRCParams(init_value=INIT_ONES)

PRESETS = {
    PRESET_ROLLING: ROLLING,
    PRESET_ZIP: ZIP,
}

DEFAULT_PARAMS = ROLLING
