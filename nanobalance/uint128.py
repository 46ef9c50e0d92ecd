"""
Unsigned 128-bit integer substrate.

Python integers are unbounded, so the fixed-width behaviour Balance relies on
lives here: values are stored as two 64-bit halves, arithmetic wraps modulo
2**128, and the byte form is always exactly 16 bytes, big-endian.
"""

from __future__ import annotations
from dataclasses import dataclass


UINT64_MAX = (1 << 64) - 1
UINT128_MAX = (1 << 128) - 1
UINT128_SIZE = 16


def reverse_bytes(data: bytes) -> bytes:
    """Return a byte-reversed copy of data."""
    return bytes(reversed(data))


@dataclass(frozen=True, slots=True)
class Uint128:
    """
    Immutable unsigned 128-bit integer.

    Attributes:
        hi: Most significant 64 bits.
        lo: Least significant 64 bits.
    """
    hi: int = 0
    lo: int = 0

    def __post_init__(self):
        for name in ("hi", "lo"):
            half = getattr(self, name)
            if not isinstance(half, int) or isinstance(half, bool):
                raise ValueError(f"{name} must be an int, got {type(half)}")
            if not 0 <= half <= UINT64_MAX:
                raise ValueError(f"{name} must fit in 64 bits, got {half}")

    @classmethod
    def from_ints(cls, hi: int, lo: int) -> Uint128:
        """Build a value from its high and low 64-bit halves."""
        return cls(hi, lo)

    @classmethod
    def from_int(cls, value: int) -> Uint128:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"value must be an int, got {type(value)}")
        if not 0 <= value <= UINT128_MAX:
            raise ValueError(f"value out of uint128 range: {value}")
        return cls(value >> 64, value & UINT64_MAX)

    @classmethod
    def from_bytes(cls, data: bytes) -> Uint128:
        """Build a value from exactly 16 big-endian bytes."""
        if len(data) != UINT128_SIZE:
            raise ValueError(f"uint128 requires {UINT128_SIZE} bytes, got {len(data)}")
        return cls(
            int.from_bytes(data[:8], "big"),
            int.from_bytes(data[8:], "big"),
        )

    def get_bytes(self) -> bytes:
        return self.hi.to_bytes(8, "big") + self.lo.to_bytes(8, "big")

    def to_int(self) -> int:
        return (self.hi << 64) | self.lo

    def is_zero(self) -> bool:
        return self.hi == 0 and self.lo == 0

    def add(self, other: Uint128) -> Uint128:
        return Uint128.from_int((self.to_int() + other.to_int()) & UINT128_MAX)

    def sub(self, other: Uint128) -> Uint128:
        return Uint128.from_int((self.to_int() - other.to_int()) & UINT128_MAX)

    def equal(self, other: Uint128) -> bool:
        return self.hi == other.hi and self.lo == other.lo

    def compare(self, other: Uint128) -> int:
        """Three-way comparison: 1 if bigger, -1 if smaller, 0 if equal."""
        if self.hi != other.hi:
            return 1 if self.hi > other.hi else -1
        if self.lo != other.lo:
            return 1 if self.lo > other.lo else -1
        return 0

    def __repr__(self) -> str:
        return f"Uint128(hi={self.hi:#x}, lo={self.lo:#x})"
