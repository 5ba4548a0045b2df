"""
pricing.py - Daily price model for tradable instruments

Two regimes, selected by the instrument's return model:

    FixedReturn       price(d) = base * (1 + daily_rate) ** d
    VariableReturn    price'   = price * (1 + drift + noise),  noise ~ N(0, sigma_risk)
                      then clamped to expected(d) * (1 -/+ band_risk)

expected(d) = base * (1 + annual_rate) ** (d / 365) is the analytic trend.
Every price is finally floored at floor_fraction * base, whatever the tier.

All functions here are pure. Randomness comes only from the numpy Generator
passed in by the caller; project_prices() builds its own from a seed.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
from typing import Dict, Optional

import numpy as np

from .core import (
    RiskTier, ReturnModel, FixedReturn, VariableReturn,
    TICKS_PER_YEAR, ABSOLUTE_FLOOR_FRACTION,
    DEFAULT_CLAMP_BANDS, DEFAULT_DAILY_VOLATILITY,
)


_TIER_ORDER = (RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH)


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True, slots=True)
class PriceModelConfig:
    """
    Tunable parameters of the price model.

    Attributes:
        clamp_bands: Half-width of the band around the expected price, per tier
                     (0.30 means the price stays within 70%..130% of expected).
        daily_volatility: Standard deviation of the daily return noise, per tier.
        floor_fraction: Absolute price floor as a fraction of base price, in (0, 1).
        ticks_per_year: Ticks in one year of the annual rate.

    Both per-tier tables must be strictly increasing LOW < MEDIUM < HIGH.
    """
    clamp_bands: Dict[RiskTier, float] = field(default_factory=lambda: dict(DEFAULT_CLAMP_BANDS))
    daily_volatility: Dict[RiskTier, float] = field(default_factory=lambda: dict(DEFAULT_DAILY_VOLATILITY))
    floor_fraction: float = ABSOLUTE_FLOOR_FRACTION
    ticks_per_year: int = TICKS_PER_YEAR

    def __post_init__(self):
        for label, table in (("clamp_bands", self.clamp_bands), ("daily_volatility", self.daily_volatility)):
            missing = [tier.name for tier in _TIER_ORDER if tier not in table]
            if missing:
                raise ValueError(f"{label} missing tiers: {missing}")
            values = [table[tier] for tier in _TIER_ORDER]
            if any(not math.isfinite(v) or v < 0 for v in values):
                raise ValueError(f"{label} must be finite and non-negative, got {values}")
            if not values[0] < values[1] < values[2]:
                raise ValueError(f"{label} must increase LOW < MEDIUM < HIGH, got {values}")
        if not 0 < self.floor_fraction < 1:
            raise ValueError(f"floor_fraction must be in (0, 1), got {self.floor_fraction}")
        if self.ticks_per_year <= 0:
            raise ValueError(f"ticks_per_year must be positive, got {self.ticks_per_year}")

    def band(self, risk: RiskTier) -> float:
        return self.clamp_bands[risk]

    def volatility(self, risk: RiskTier) -> float:
        return self.daily_volatility[risk]


DEFAULT_PRICE_MODEL = PriceModelConfig()


# =============================================================================
# PURE FUNCTIONS
# =============================================================================

def daily_rate(annual_rate: float, ticks_per_year: int = TICKS_PER_YEAR) -> float:
    """Per-tick rate that compounds to annual_rate over one year."""
    return (1.0 + annual_rate) ** (1.0 / ticks_per_year) - 1.0


def expected_price(base_price: float, annual_rate: float, days: int,
                   ticks_per_year: int = TICKS_PER_YEAR) -> float:
    """Analytic trend price after `days` ticks."""
    return base_price * (1.0 + annual_rate) ** (days / ticks_per_year)


def fixed_return_price(base_price: float, annual_rate: float, days: int,
                       ticks_per_year: int = TICKS_PER_YEAR) -> float:
    """Exact compound curve followed by fixed-return instruments."""
    return base_price * (1.0 + daily_rate(annual_rate, ticks_per_year)) ** days


def price_floor(base_price: float, config: PriceModelConfig = DEFAULT_PRICE_MODEL) -> float:
    return base_price * config.floor_fraction


def clamp_price(
    price: float,
    expected: float,
    base_price: float,
    risk: RiskTier,
    config: PriceModelConfig = DEFAULT_PRICE_MODEL,
) -> float:
    """
    Force a post-noise price into the risk band around `expected`, then apply
    the absolute floor. The floor wins when the band's lower edge is below it.
    """
    band = config.band(risk)
    lower = expected * (1.0 - band)
    upper = expected * (1.0 + band)
    clamped = min(max(price, lower), upper)
    return max(clamped, price_floor(base_price, config))


def step_price(
    model: ReturnModel,
    price: float,
    base_price: float,
    annual_rate: float,
    days: int,
    rng: np.random.Generator,
    config: PriceModelConfig = DEFAULT_PRICE_MODEL,
) -> float:
    """
    Advance one tick.

    Args:
        model: FixedReturn() or VariableReturn(risk)
        price: Price before this tick
        base_price: Price at day 0
        annual_rate: Nominal annual return
        days: Days elapsed AFTER this tick (1 for the first update)
        rng: Noise source (unused by FixedReturn)
        config: Model parameters

    Returns:
        The new price, always finite and >= the absolute floor.
    """
    if isinstance(model, FixedReturn):
        curve = fixed_return_price(base_price, annual_rate, days, config.ticks_per_year)
        return max(curve, price_floor(base_price, config))

    if isinstance(model, VariableReturn):
        drift = daily_rate(annual_rate, config.ticks_per_year)
        noise = float(rng.normal(0.0, config.volatility(model.risk)))
        walked = price * (1.0 + drift + noise)
        expected = expected_price(base_price, annual_rate, days, config.ticks_per_year)
        return clamp_price(walked, expected, base_price, model.risk, config)

    raise TypeError(f"Unknown return model: {model!r}")


def project_prices(
    model: ReturnModel,
    base_price: float,
    annual_rate: float,
    length: int,
    seed: Optional[int],
    config: PriceModelConfig = DEFAULT_PRICE_MODEL,
) -> np.ndarray:
    """
    Generate `length` consecutive daily prices starting from base_price.

    Same arguments always give the same array. Nothing outside the returned
    array is touched.
    """
    if length < 0:
        raise ValueError(f"length must be non-negative, got {length}")

    rng = np.random.default_rng(seed)
    prices = np.empty(length, dtype=np.float64)
    price = base_price
    for day in range(1, length + 1):
        price = step_price(model, price, base_price, annual_rate, day, rng, config)
        prices[day - 1] = price
    return prices
