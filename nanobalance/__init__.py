"""
nanobalance - 128-bit raw-unit balances with exact decimal conversion

Balances are stored as unsigned 128-bit integers of raw, the smallest
indivisible unit. Decimal text in any named unit converts to and from raw
without losing or inventing precision.

Usage:
    from nanobalance import parse_balance, Balance, BalanceComp, ByteOrder

    price = parse_balance("1", "Mxrb")
    fee = parse_balance("0.25", "xrb")

    price.unit_string("raw", 0)          # "1000000000000000000000000000000"
    (price - fee).unit_string("Mxrb", 8) # "0.99999975"
    price.compare(fee)                   # BalanceComp.BIGGER

    wire = price.marshal_binary()        # 16 bytes, little-endian
    Balance.unmarshal_binary(wire) == price
"""

# Core types
from .core import (
    BALANCE_SIZE,
    BALANCE_MAX_PRECISION,
    DEFAULT_UNIT,
    UNITS,
    UNIT_EXPONENTS,
    BalanceComp,
    ByteOrder,
    BalanceError,
    InvalidDecimal,
    UnknownUnit,
    PrecisionLoss,
    NegativeAmount,
    BalanceOverflow,
    BalanceUnderflow,
    BadBalanceSize,
    InvariantViolation,
    unit_scale,
    unit_exponent,
    known_units,
)

# 128-bit substrate
from .uint128 import Uint128, UINT128_MAX

# Balance
from .balance import (
    Balance,
    ZERO_BALANCE,
    parse_balance,
    parse_balance_ints,
)

__all__ = [
    # Core
    'BALANCE_SIZE', 'BALANCE_MAX_PRECISION', 'DEFAULT_UNIT', 'UNITS', 'UNIT_EXPONENTS',
    'BalanceComp', 'ByteOrder',
    'BalanceError', 'InvalidDecimal', 'UnknownUnit', 'PrecisionLoss', 'NegativeAmount',
    'BalanceOverflow', 'BalanceUnderflow', 'BadBalanceSize', 'InvariantViolation',
    'unit_scale', 'unit_exponent', 'known_units',
    # Substrate
    'Uint128', 'UINT128_MAX',
    # Balance
    'Balance', 'ZERO_BALANCE', 'parse_balance', 'parse_balance_ints',
]

__version__ = '1.0.0'
