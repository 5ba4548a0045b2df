"""
builders.py - Test helpers for building instruments and running prices
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from investsim import Instrument, InstrumentTerms, Category, RiskTier


def make_instrument(
    risk: RiskTier = RiskTier.MEDIUM,
    annual_rate: float = 0.10,
    base_price: float = 100.0,
    category: Category = Category.STOCK,
    symbol: Optional[str] = None,
    seed: Optional[int] = 0,
    test_mode: bool = True,
) -> Instrument:
    """Create an instrument for testing, with a seeded noise source."""
    symbol = symbol or f"T_{category.name}_{risk.name}"
    terms = InstrumentTerms(
        symbol=symbol,
        name=f"Test {symbol}",
        category=category,
        risk=risk,
        annual_rate=annual_rate,
        base_price=base_price,
    )
    return Instrument(terms, rng=np.random.default_rng(seed), test_mode=test_mode)


def run_days(instrument: Instrument, days: int) -> float:
    for _ in range(days):
        instrument.update_price()
    return instrument.current_price


def std_dev(values) -> float:
    return float(np.asarray(values, dtype=float).std())
