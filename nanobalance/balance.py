"""
Balance - a 128-bit unsigned amount of raw currency units.

A Balance only ever stores raw. Decimal strings in other units are derived
views: parse_balance() converts text to raw exactly and refuses anything it
cannot represent, and Balance.unit_string() converts raw back to text.

Usage:
    from nanobalance import parse_balance, ByteOrder

    b = parse_balance("1.5", "xrb")
    b.to_int()                    # 1500000000000000000000000
    b.unit_string("Mxrb", 7)      # "0.0000015"
    b.to_bytes(ByteOrder.BIG)     # 16 bytes, most significant first
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, DecimalException, ROUND_DOWN, localcontext
import logging
import re
from typing import Union

from .core import (
    BALANCE_MAX_PRECISION,
    BALANCE_SIZE,
    DEFAULT_UNIT,
    FORMAT_CONTEXT,
    MAX_BALANCE_DIGITS,
    PARSE_CONTEXT,
    BadBalanceSize,
    BalanceComp,
    BalanceError,
    BalanceOverflow,
    BalanceUnderflow,
    ByteOrder,
    InvalidDecimal,
    InvariantViolation,
    NegativeAmount,
    PrecisionLoss,
    unit_exponent,
    unit_scale,
)
from .uint128 import UINT128_MAX, Uint128, reverse_bytes


logger = logging.getLogger(__name__)

# Optional sign, integer and/or fractional digits, optional exponent.
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_MAX_PRECISION_QUANTUM = Decimal(1).scaleb(-BALANCE_MAX_PRECISION)


@dataclass(frozen=True, slots=True, repr=False)
class Balance:
    """
    Immutable amount of raw units held in an unsigned 128-bit integer.

    Equality and hashing follow the raw value. Arithmetic returns new
    balances; add() and sub() wrap modulo 2**128 while checked_add() and
    checked_sub() raise instead.
    """
    value: Uint128 = Uint128()

    def __post_init__(self):
        if not isinstance(self.value, Uint128):
            raise ValueError(f"Balance value must be Uint128, got {type(self.value)}")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_int(cls, raw: int) -> Balance:
        """Build a balance from a raw integer."""
        if raw < 0:
            raise NegativeAmount(f"raw amount cannot be negative: {raw}")
        if raw > UINT128_MAX:
            raise BalanceOverflow(f"raw amount does not fit in 128 bits: {raw}")
        return cls(Uint128.from_int(raw))

    @classmethod
    def from_bytes(cls, data: bytes, order: ByteOrder) -> Balance:
        """
        Build a balance from its 16-byte representation.

        Raises:
            BadBalanceSize: If data is not exactly BALANCE_SIZE bytes.
        """
        if len(data) != BALANCE_SIZE:
            raise BadBalanceSize(
                f"balances should be {BALANCE_SIZE} bytes in size, got {len(data)}"
            )
        if order is ByteOrder.BIG:
            return cls(Uint128.from_bytes(bytes(data)))
        if order is ByteOrder.LITTLE:
            return cls(Uint128.from_bytes(reverse_bytes(data)))
        raise InvariantViolation(f"unsupported byte order: {order!r}")

    # ------------------------------------------------------------------
    # Conversion
    # ------------------------------------------------------------------

    def to_bytes(self, order: ByteOrder) -> bytes:
        """Return the 16-byte representation in the given byte order."""
        data = self.value.get_bytes()
        if order is ByteOrder.BIG:
            return data
        if order is ByteOrder.LITTLE:
            return reverse_bytes(data)
        raise InvariantViolation(f"unsupported byte order: {order!r}")

    def to_int(self) -> int:
        return int.from_bytes(self.to_bytes(ByteOrder.BIG), "big")

    def __int__(self) -> int:
        return self.to_int()

    def is_zero(self) -> bool:
        return self.value.is_zero()

    def unit_string(self, unit: str, precision: int) -> str:
        """
        Render this balance as a decimal string in the given unit.

        The raw value is divided by the unit scale and rounded to
        BALANCE_MAX_PRECISION fractional digits, then truncated (never
        rounded) to `precision` digits. Trailing fractional zeros are dropped.

        Args:
            unit: Unit name, e.g. "Mxrb".
            precision: Maximum number of fractional digits, >= 0.

        Raises:
            UnknownUnit: If unit is not in the unit table.
            ValueError: If precision is negative.
        """
        if precision < 0:
            raise ValueError(f"precision must be >= 0, got {precision}")

        scale = unit_scale(unit)
        with localcontext(FORMAT_CONTEXT):
            quotient = (Decimal(self.to_int()) / scale).quantize(_MAX_PRECISION_QUANTUM)
            if precision < BALANCE_MAX_PRECISION:
                quotient = quotient.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_DOWN)
        return _plain_string(quotient)

    def __str__(self) -> str:
        return self.unit_string(DEFAULT_UNIT, BALANCE_MAX_PRECISION)

    def __repr__(self) -> str:
        return f"Balance(raw={self.to_int()})"

    # ------------------------------------------------------------------
    # Comparison and arithmetic
    # ------------------------------------------------------------------

    def equal(self, other: Balance) -> bool:
        return self.value.equal(other.value)

    def compare(self, other: Balance) -> BalanceComp:
        result = self.value.compare(other.value)
        if result == 1:
            return BalanceComp.BIGGER
        if result == -1:
            return BalanceComp.SMALLER
        if result == 0:
            return BalanceComp.EQUAL
        raise InvariantViolation(f"unexpected comparison result: {result!r}")

    def add(self, other: Balance) -> Balance:
        return Balance(self.value.add(other.value))

    def sub(self, other: Balance) -> Balance:
        return Balance(self.value.sub(other.value))

    def checked_add(self, other: Balance) -> Balance:
        """Add without wrapping. Raises BalanceOverflow past 2**128 - 1."""
        result = self.add(other)
        if result.compare(self) is BalanceComp.SMALLER:
            raise BalanceOverflow(f"{self!r} + {other!r} overflows 128 bits")
        return result

    def checked_sub(self, other: Balance) -> Balance:
        """Subtract without wrapping. Raises BalanceUnderflow below zero."""
        result = self.sub(other)
        if result.compare(self) is BalanceComp.BIGGER:
            raise BalanceUnderflow(f"{self!r} - {other!r} is negative")
        return result

    def __add__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.sub(other)

    def __lt__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.compare(other) is BalanceComp.SMALLER

    def __le__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.compare(other) is not BalanceComp.BIGGER

    def __gt__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.compare(other) is BalanceComp.BIGGER

    def __ge__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return self.compare(other) is not BalanceComp.SMALLER

    # ------------------------------------------------------------------
    # Codec
    # ------------------------------------------------------------------
    #
    # The binary wire format is little-endian in both directions, so
    # unmarshal_binary(marshal_binary()) is the identity.

    def marshal_binary(self) -> bytes:
        return self.to_bytes(ByteOrder.LITTLE)

    @classmethod
    def unmarshal_binary(cls, data: bytes) -> Balance:
        return cls.from_bytes(data, ByteOrder.LITTLE)

    def marshal_text(self) -> bytes:
        return str(self).encode("utf-8")

    @classmethod
    def unmarshal_text(cls, text: Union[bytes, str]) -> Balance:
        """Parse text produced by marshal_text(), i.e. an amount in Mxrb."""
        if isinstance(text, (bytes, bytearray)):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise InvalidDecimal(f"balance text is not valid UTF-8: {text!r}") from exc
        return parse_balance(text, DEFAULT_UNIT)


ZERO_BALANCE = Balance()


def parse_balance_ints(hi: int, lo: int) -> Balance:
    """Build a balance from its high and low 64-bit halves."""
    return Balance(Uint128.from_ints(hi, lo))


def parse_balance(text: str, unit: str) -> Balance:
    """
    Parse a decimal amount expressed in `unit` into an exact raw balance.

    Any spelling of zero ("0", "0.000", "-0") yields ZERO_BALANCE.

    Raises:
        InvalidDecimal: text is not a plain decimal number.
        UnknownUnit: unit is not in the unit table.
        NegativeAmount: the amount is below zero.
        PrecisionLoss: the amount is not a whole number of raw.
        BalanceOverflow: the amount does not fit in 128 bits.
    """
    try:
        return _parse_balance(text, unit)
    except BalanceError as exc:
        logger.debug("rejected balance %r in unit %r: %s", text, unit, exc)
        raise


def _parse_balance(text: str, unit: str) -> Balance:
    amount = _parse_decimal(text)

    # zero is a special case
    if amount.is_zero():
        return ZERO_BALANCE

    scale = unit_scale(unit)
    if amount.is_signed():
        raise NegativeAmount(f"balance cannot be negative: {text!r}")

    # Reject by magnitude before building powers of ten, so inputs such as
    # "1e999999999" fail fast.
    leading = amount.adjusted() + unit_exponent(unit)
    if leading >= MAX_BALANCE_DIGITS:
        raise BalanceOverflow(f"{text} {unit} does not fit in 128 bits")
    if leading < 0:
        raise PrecisionLoss(f"{text} {unit} is less than one raw")

    # normalize() folds trailing zeros into the exponent, so a negative
    # exponent afterwards means a non-zero digit below one raw.
    with localcontext(PARSE_CONTEXT):
        scaled = (amount * scale).normalize()

    if scaled.as_tuple().exponent < 0:
        raise PrecisionLoss(f"{text} {unit} has digits below one raw")
    raw = int(scaled)

    data = raw.to_bytes((raw.bit_length() + 7) // 8, "big")
    if len(data) > BALANCE_SIZE:
        raise BalanceOverflow(f"{text} {unit} does not fit in 128 bits")

    return Balance.from_bytes(data.rjust(BALANCE_SIZE, b"\x00"), ByteOrder.BIG)


def _parse_decimal(text: str) -> Decimal:
    if not isinstance(text, str) or _DECIMAL_PATTERN.fullmatch(text) is None:
        raise InvalidDecimal(f"can't convert {text!r} to decimal")
    try:
        with localcontext(PARSE_CONTEXT):
            return Decimal(text)
    except DecimalException as exc:
        raise InvalidDecimal(f"can't convert {text!r} to decimal") from exc


def _plain_string(value: Decimal) -> str:
    """Fixed-point text without trailing fractional zeros."""
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
