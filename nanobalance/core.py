"""
Core constants, types and the unit table for raw-unit balances.

This module provides the foundations the Balance type is built on:
1. Constants: storage size, maximum formatting precision, default unit
2. Decimal contexts: an exact context for parsing and a wide one for formatting
3. Enums: BalanceComp (comparison outcome) and ByteOrder
4. Exceptions: BalanceError and the specific input errors
5. Unit table: immutable mapping from unit name to its Decimal scale

Nothing here holds mutable state. The unit table is built once at import time
and is safe to read from any thread.
"""

from __future__ import annotations
from decimal import (
    Context, Decimal, DivisionByZero, Inexact, InvalidOperation, Overflow, Rounded,
    ROUND_HALF_EVEN, ROUND_HALF_UP, MAX_EMAX, MAX_PREC, MIN_EMIN,
)
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


# ============================================================================
# CONSTANTS
# ============================================================================

# Size of a serialized balance in bytes.
BALANCE_SIZE = 16

# Fractional digits kept when dividing raw by a unit scale. The largest unit
# (Gxrb) is 10^33 raw, so 33 digits resolve a single raw at every unit.
BALANCE_MAX_PRECISION = 33

# Unit used by str(), marshal_text() and unmarshal_text().
DEFAULT_UNIT = "Mxrb"

# 2^128 - 1 has 39 decimal digits; anything with a higher leading exponent overflows.
MAX_BALANCE_DIGITS = 39


# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Contexts are applied with decimal.localcontext() so the process-wide
# context is never touched.
#
# PARSE_CONTEXT is exact: unbounded precision and exponents, and any signal
# that would mean a digit was dropped is trapped.
#
# FORMAT_CONTEXT only needs to hold 39 integer digits plus 33 fractional
# digits. ROUND_HALF_UP rounds half away from zero for positive values.
#
PARSE_CONTEXT = Context(
    prec=MAX_PREC,
    rounding=ROUND_HALF_EVEN,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[InvalidOperation, DivisionByZero, Overflow, Inexact, Rounded],
)

FORMAT_CONTEXT = Context(
    prec=80,
    rounding=ROUND_HALF_UP,
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


# ============================================================================
# ENUMS
# ============================================================================

class BalanceComp(Enum):
    """
    Outcome of comparing two balances.

    EQUAL: both raw values are identical.
    BIGGER: the left-hand balance holds more raw.
    SMALLER: the left-hand balance holds less raw.
    """
    EQUAL = "equal"
    BIGGER = "bigger"
    SMALLER = "smaller"


class ByteOrder(Enum):
    """Byte order of a 16-byte balance. Values match int.to_bytes() names."""
    BIG = "big"
    LITTLE = "little"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class BalanceError(Exception):
    """Base exception for all recoverable balance errors."""
    pass


class InvalidDecimal(BalanceError, ValueError):
    """Raised when text is not a decimal number in ordinary notation."""
    pass


class UnknownUnit(BalanceError, LookupError):
    """Raised when a unit name is not in the unit table."""
    pass


class PrecisionLoss(BalanceError, ValueError):
    """Raised when an amount has more fractional digits than one raw can represent."""
    pass


class NegativeAmount(BalanceError, ValueError):
    """Raised when parsing a negative amount; raw balances are unsigned."""
    pass


class BalanceOverflow(BalanceError, OverflowError):
    """Raised when an amount does not fit in 128 bits."""
    pass


class BalanceUnderflow(BalanceError, OverflowError):
    """Raised when a checked subtraction would go below zero."""
    pass


class BadBalanceSize(BalanceError, ValueError):
    """Raised when binary input is not exactly BALANCE_SIZE bytes."""
    pass


class InvariantViolation(AssertionError):
    """
    A broken internal precondition, such as an out-of-range comparator
    result or an unsupported byte order.

    Deliberately not a BalanceError: callers handling bad input must not
    catch it by accident.
    """
    pass


# ============================================================================
# UNIT TABLE
# ============================================================================

# Scale of each unit as a power of ten relative to raw.
UNIT_EXPONENTS: Mapping[str, int] = MappingProxyType({
    "raw": 0,
    "uxrb": 18,
    "mxrb": 21,
    "xrb": 24,
    "kxrb": 27,
    "Mxrb": 30,
    "Gxrb": 33,
})

UNITS: Mapping[str, Decimal] = MappingProxyType({
    name: Decimal(1).scaleb(exponent) for name, exponent in UNIT_EXPONENTS.items()
})


def unit_exponent(unit: str) -> int:
    """
    Return the power of ten a unit is worth in raw.

    Raises:
        UnknownUnit: If unit is not in the table.
    """
    try:
        return UNIT_EXPONENTS[unit]
    except KeyError:
        raise UnknownUnit(f"unknown unit: {unit!r}") from None


def unit_scale(unit: str) -> Decimal:
    """
    Return the Decimal scale of a unit (e.g. Decimal('1E+30') for Mxrb).

    Raises:
        UnknownUnit: If unit is not in the table. There is no default scale.
    """
    try:
        return UNITS[unit]
    except KeyError:
        raise UnknownUnit(f"unknown unit: {unit!r}") from None


def known_units() -> Tuple[str, ...]:
    """Return unit names ordered from smallest to largest scale."""
    return tuple(sorted(UNIT_EXPONENTS, key=UNIT_EXPONENTS.__getitem__))
