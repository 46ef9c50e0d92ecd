"""
conftest.py - Shared pytest fixtures for nanobalance tests

Provides common fixtures used across unit and conformance tests:
- Reference balances (zero, one raw, one Mxrb, maximum)
"""

import pytest

from nanobalance import (
    Balance,
    ZERO_BALANCE,
    UINT128_MAX,
    parse_balance,
)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def zero():
    """The canonical zero balance."""
    return ZERO_BALANCE


@pytest.fixture
def one_raw():
    """A balance of exactly one raw."""
    return Balance.from_int(1)


@pytest.fixture
def one_mxrb():
    """One Mxrb, i.e. 10^30 raw."""
    return parse_balance("1", "Mxrb")


@pytest.fixture
def max_balance():
    """The largest representable balance, 2^128 - 1 raw."""
    return Balance.from_int(UINT128_MAX)
