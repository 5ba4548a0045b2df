"""
conftest.py - Shared pytest fixtures for investsim tests

Provides common fixtures used across unit and functional tests:
- Instruments (stock, bond) with seeded noise
- Funded wallets and fake accounts
- Ready-to-trade InvestmentSystems
"""

import pytest
from decimal import Decimal

from investsim import InvestmentSystem, Wallet, Category, RiskTier

from tests.builders import make_instrument
from tests.fake_account import FakeAccount


# =============================================================================
# INSTRUMENT FIXTURES
# =============================================================================

@pytest.fixture
def stock():
    """Medium-risk stock, 10% a year, base price 100."""
    return make_instrument(RiskTier.MEDIUM, 0.10, 100.0, symbol="ACME")


@pytest.fixture
def bond():
    return make_instrument(RiskTier.LOW, 0.05, 100.0, Category.BOND, symbol="BND")


# =============================================================================
# ACCOUNT FIXTURES
# =============================================================================

@pytest.fixture
def wallet():
    return Wallet(Decimal("10000"))


@pytest.fixture
def fake_account():
    return FakeAccount(Decimal("10000"))


# =============================================================================
# SYSTEM FIXTURES
# =============================================================================

@pytest.fixture
def system(wallet, stock):
    """InvestmentSystem with $10,000 and one stock."""
    return InvestmentSystem(wallet, [stock])


@pytest.fixture
def two_asset_system(wallet, stock, bond):
    return InvestmentSystem(wallet, [stock, bond])
