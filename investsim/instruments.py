"""
instruments.py - Instrument definitions and their live price state

An instrument is split in two:

    InstrumentTerms   frozen configuration (symbol, category, risk, rate, base price)
    Instrument        live state: current_price and days_elapsed, advanced once per tick

update_price() is the only path that mutates the live price. simulate_history()
reads the frozen terms only, so it can never disturb the live walk.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Any, Mapping, Optional

import numpy as np

from .core import (
    Category, RiskTier, ReturnModel, InvestmentError,
    DEFAULT_COMPOUNDS_PER_YEAR, return_model_for,
)
from .compound import future_value, ticks_to_years
from .pricing import (
    PriceModelConfig, DEFAULT_PRICE_MODEL,
    step_price, project_prices, expected_price,
)


# =============================================================================
# TERMS
# =============================================================================

@dataclass(frozen=True, slots=True)
class InstrumentTerms:
    """
    Immutable configuration of a tradable instrument.

    Attributes:
        symbol: Unique identifier (e.g. "ACME")
        name: Display name
        category: STOCK, ETF, BOND or TBILL
        risk: LOW, MEDIUM or HIGH
        annual_rate: Nominal annual return (0.05 = 5%)
        base_price: Price per share at day 0
        description: Short text for players
        compounds_per_year: Compounding frequency used for value projections
    """
    symbol: str
    name: str
    category: Category
    risk: RiskTier
    annual_rate: float
    base_price: float
    description: str = ""
    compounds_per_year: int = DEFAULT_COMPOUNDS_PER_YEAR

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Instrument symbol cannot be empty")
        if not isinstance(self.category, Category):
            raise ValueError(f"category must be a Category, got {self.category!r}")
        if not isinstance(self.risk, RiskTier):
            raise ValueError(f"risk must be a RiskTier, got {self.risk!r}")
        if not math.isfinite(self.base_price) or self.base_price <= 0:
            raise ValueError(f"base_price must be positive and finite, got {self.base_price}")
        if not math.isfinite(self.annual_rate) or self.annual_rate <= -1:
            raise ValueError(f"annual_rate must be finite and > -1, got {self.annual_rate}")
        if self.compounds_per_year <= 0:
            raise ValueError(f"compounds_per_year must be positive, got {self.compounds_per_year}")

    @property
    def has_fixed_return(self) -> bool:
        return self.category.has_fixed_return

    @property
    def return_model(self) -> ReturnModel:
        return return_model_for(self.category, self.risk)


def _parse_enum(enum_cls, value: Any, field_name: str):
    if isinstance(value, enum_cls):
        return value
    text = str(value).strip()
    for member in enum_cls:
        if text.lower() in (member.value, member.name.lower()):
            return member
    raise ValueError(f"Unknown {field_name}: {value!r}")


def terms_from_mapping(data: Mapping[str, Any]) -> InstrumentTerms:
    """
    Build InstrumentTerms from a plain mapping (e.g. a decoded JSON object).

    Example:
        terms_from_mapping({
            "symbol": "TBL", "name": "Treasury Bill", "category": "TBill",
            "risk": "low", "annual_rate": 0.03, "base_price": 50,
        })
    """
    try:
        return InstrumentTerms(
            symbol=str(data["symbol"]),
            name=str(data.get("name", data["symbol"])),
            category=_parse_enum(Category, data["category"], "category"),
            risk=_parse_enum(RiskTier, data["risk"], "risk"),
            annual_rate=float(data["annual_rate"]),
            base_price=float(data["base_price"]),
            description=str(data.get("description", "")),
            compounds_per_year=int(data.get("compounds_per_year", DEFAULT_COMPOUNDS_PER_YEAR)),
        )
    except KeyError as exc:
        raise ValueError(f"Instrument definition missing field {exc.args[0]!r}") from exc


# =============================================================================
# LIVE INSTRUMENT
# =============================================================================

_RISK_DESCRIPTIONS = {
    RiskTier.LOW: "very safe but grows slowly",
    RiskTier.MEDIUM: "moderately risky with better potential returns",
    RiskTier.HIGH: "risky - could gain a lot or lose money",
}


class Instrument:
    """
    A tradable instrument with a live daily price.

    Args:
        terms: Frozen configuration
        config: Price model parameters (default: DEFAULT_PRICE_MODEL)
        rng: Noise source for the live walk. Pass a seeded
             np.random.default_rng(seed) for reproducible runs.
        test_mode: Allow set_price() for scenario setup

    Example:
        acme = Instrument(InstrumentTerms("ACME", "Acme Corp", Category.STOCK,
                                          RiskTier.MEDIUM, 0.10, 100.0))
        acme.update_price()
    """

    def __init__(
        self,
        terms: InstrumentTerms,
        config: Optional[PriceModelConfig] = None,
        rng: Optional[np.random.Generator] = None,
        test_mode: bool = False,
    ):
        self.terms = terms
        self.config = config or DEFAULT_PRICE_MODEL
        self._rng = rng if rng is not None else np.random.default_rng()
        self._test_mode = test_mode
        self._current_price: float = terms.base_price
        self._days_elapsed: int = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def symbol(self) -> str:
        return self.terms.symbol

    @property
    def name(self) -> str:
        return self.terms.name

    @property
    def category(self) -> Category:
        return self.terms.category

    @property
    def risk(self) -> RiskTier:
        return self.terms.risk

    @property
    def has_fixed_return(self) -> bool:
        return self.terms.has_fixed_return

    @property
    def current_price(self) -> float:
        return self._current_price

    @property
    def days_elapsed(self) -> int:
        return self._days_elapsed

    def expected_price(self, days: Optional[int] = None) -> float:
        """Trend price at `days` (default: now)."""
        if days is None:
            days = self._days_elapsed
        return expected_price(self.terms.base_price, self.terms.annual_rate, days,
                              self.config.ticks_per_year)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def initialize_price(self) -> None:
        """Put the live walk back at day 0 / base price."""
        self._current_price = self.terms.base_price
        self._days_elapsed = 0

    def update_price(self) -> float:
        """Advance the live price by one day. Returns the new price."""
        self._days_elapsed += 1
        self._current_price = step_price(
            self.terms.return_model,
            self._current_price,
            self.terms.base_price,
            self.terms.annual_rate,
            self._days_elapsed,
            self._rng,
            self.config,
        )
        return self._current_price

    def set_price(self, price: float) -> None:
        """
        Overwrite the live price directly.

        Raises:
            InvestmentError: If called when test_mode is False
        """
        if not self._test_mode:
            raise InvestmentError(
                "set_price() is disabled outside test mode. "
                "Prices move only through update_price()."
            )
        if not math.isfinite(price) or price <= 0:
            raise ValueError(f"price must be positive and finite, got {price}")
        self._current_price = float(price)

    # ------------------------------------------------------------------
    # Pure projections
    # ------------------------------------------------------------------

    def simulate_history(self, length: int, seed: Optional[int]) -> np.ndarray:
        """Synthetic price path from base price. Does not touch the live price."""
        terms = self.terms
        return project_prices(terms.return_model, terms.base_price, terms.annual_rate,
                              length, seed, self.config)

    def project_value(self, principal: float, ticks: int) -> float:
        """Theoretical value of `principal` after `ticks` days at the nominal rate."""
        years = ticks_to_years(ticks, self.config.ticks_per_year)
        return future_value(principal, self.terms.annual_rate, self.terms.compounds_per_year, years)

    def explanation(self) -> str:
        head = f"{self.name}: {self.terms.description}" if self.terms.description else self.name
        return (
            f"{head}\n"
            f"This investment is {_RISK_DESCRIPTIONS[self.risk]}.\n"
            f"Expected return: ~{self.terms.annual_rate * 100:.1f}% per year."
        )

    def __repr__(self) -> str:
        return (f"Instrument({self.symbol}, {self.category.name}, {self.risk.name}, "
                f"price={self._current_price:.2f}, day={self._days_elapsed})")
