"""
Core types, constants and helpers for the investment simulation.

This module provides the foundational pieces shared by every other module:
1. Constants: calendar, history caps, price-model defaults
2. Enums: RiskTier, Category, TradeResult
3. Return model variant: FixedReturn | VariableReturn(risk)
4. Exceptions: InvestmentError and domain-specific error types
5. Decimal conversion for money crossing from the float price model

Nothing in this module holds mutable state.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Union


# ============================================================================
# CONSTANTS
# ============================================================================

# One tick is one simulated day.
TICKS_PER_YEAR = 365

# Rolling price history kept per instrument (oldest evicted first).
HISTORY_CAP = 200

# Default chart window and number of synthetic days seeded at game start.
DEFAULT_WINDOW = 30
DEFAULT_BACKFILL_DAYS = 30

# Hard minimum price as a fraction of base price, for every risk tier.
ABSOLUTE_FLOOR_FRACTION = 0.2

# Portfolio wealth snapshots: every N ticks, at most M points kept.
SNAPSHOT_INTERVAL = 5
MAX_SNAPSHOTS = 500

# Default compounding frequency for UI projections (monthly).
DEFAULT_COMPOUNDS_PER_YEAR = 12


# ============================================================================
# ENUMS
# ============================================================================

class RiskTier(Enum):
    """
    Declared risk of an instrument.

    Drives both the daily noise of the random walk and the width of the
    clamp band around the expected price.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def score(self) -> int:
        """Numeric weight used for portfolio risk labels (1..3)."""
        return _RISK_SCORES[self]


_RISK_SCORES = {
    RiskTier.LOW: 1,
    RiskTier.MEDIUM: 2,
    RiskTier.HIGH: 3,
}


class Category(Enum):
    """Instrument category. Bonds and T-Bills pay a fixed return."""
    STOCK = "stock"
    ETF = "etf"
    BOND = "bond"
    TBILL = "tbill"

    @property
    def has_fixed_return(self) -> bool:
        return self in (Category.BOND, Category.TBILL)


class TradeResult(Enum):
    """
    Outcome of a buy or sell request.

    APPLIED: The trade went through and cash moved.
    INSUFFICIENT_FUNDS: The cash account could not cover the cost.
    INSUFFICIENT_SHARES: More shares requested than the position holds.
    INVALID_QUANTITY: Quantity was not a positive integer.
    UNKNOWN_INSTRUMENT: The instrument is not registered with the system.
    POSITION_CLOSED: The position has no shares left (or was reset away).
    """
    APPLIED = "applied"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SHARES = "insufficient_shares"
    INVALID_QUANTITY = "invalid_quantity"
    UNKNOWN_INSTRUMENT = "unknown_instrument"
    POSITION_CLOSED = "position_closed"


# Default half-widths of the clamp band, as a fraction of the expected price.
DEFAULT_CLAMP_BANDS: Dict[RiskTier, float] = {
    RiskTier.LOW: 0.30,
    RiskTier.MEDIUM: 0.80,
    RiskTier.HIGH: 1.50,
}

# Default standard deviation of the daily return noise.
DEFAULT_DAILY_VOLATILITY: Dict[RiskTier, float] = {
    RiskTier.LOW: 0.005,
    RiskTier.MEDIUM: 0.015,
    RiskTier.HIGH: 0.03,
}


# ============================================================================
# RETURN MODEL
# ============================================================================

@dataclass(frozen=True, slots=True)
class FixedReturn:
    """Deterministic compounding curve (Bonds, T-Bills). No noise, no clamp."""

    def __repr__(self) -> str:
        return "FixedReturn()"


@dataclass(frozen=True, slots=True)
class VariableReturn:
    """Clamped multiplicative random walk (Stocks, ETFs)."""
    risk: RiskTier

    def __repr__(self) -> str:
        return f"VariableReturn({self.risk.name})"


ReturnModel = Union[FixedReturn, VariableReturn]


def return_model_for(category: Category, risk: RiskTier) -> ReturnModel:
    """Pick the price model variant for a category/risk pair."""
    if category.has_fixed_return:
        return FixedReturn()
    return VariableReturn(risk)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class InvestmentError(Exception):
    """Base exception for all investment-simulation errors."""
    pass


class InstrumentNotRegistered(InvestmentError):
    """Raised when looking up an instrument symbol the system does not know."""
    pass


# ============================================================================
# DECIMAL HELPERS
# ============================================================================

ZERO = Decimal("0")


def to_decimal(value: Union[Decimal, float, int, str]) -> Decimal:
    """
    Convert a price or amount to Decimal.

    Floats go through str() so 110.0 becomes Decimal("110.0") rather than
    its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
