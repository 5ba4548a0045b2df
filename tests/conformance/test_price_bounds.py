"""
Price Bounds Conformance Tests

INVARIANT: For every instrument and every day d >= 1:
    price(d) >= floor_fraction * base_price

and for variable-return instruments:
    price(d) <= max(expected(d) * (1 + band), floor)
    price(d) >= max(expected(d) * (1 - band), floor)

Fixed-return instruments sit exactly on max(base * (1 + daily_rate) ** d, floor).
"""

import math
from hypothesis import given, settings
from hypothesis import strategies as st

from investsim import (
    RiskTier, FixedReturn, VariableReturn, DEFAULT_PRICE_MODEL,
    expected_price, fixed_return_price, project_prices,
)


TOL = 1e-9

risks = st.sampled_from(list(RiskTier))
rates = st.floats(min_value=-0.5, max_value=0.5, allow_nan=False, allow_infinity=False)
base_prices = st.floats(min_value=0.01, max_value=10_000, allow_nan=False, allow_infinity=False)
seeds = st.integers(min_value=0, max_value=2 ** 32 - 1)
lengths = st.integers(min_value=1, max_value=400)


class TestVariableReturnBounds:

    @given(risks, rates, base_prices, seeds, lengths)
    @settings(max_examples=60, deadline=None)
    def test_every_price_inside_band_or_at_floor(self, risk, rate, base, seed, length):
        prices = project_prices(VariableReturn(risk), base, rate, length, seed)
        band = DEFAULT_PRICE_MODEL.band(risk)
        floor = base * DEFAULT_PRICE_MODEL.floor_fraction

        for day, price in enumerate(prices, start=1):
            expected = expected_price(base, rate, day)
            lower = max(expected * (1 - band), floor)
            upper = max(expected * (1 + band), floor)
            assert math.isfinite(price)
            assert price >= floor * (1 - TOL)
            assert lower * (1 - TOL) <= price <= upper * (1 + TOL)


class TestFixedReturnCurve:

    @given(rates, base_prices, seeds, lengths)
    @settings(max_examples=40, deadline=None)
    def test_price_is_curve_or_floor(self, rate, base, seed, length):
        prices = project_prices(FixedReturn(), base, rate, length, seed)
        floor = base * DEFAULT_PRICE_MODEL.floor_fraction

        for day, price in enumerate(prices, start=1):
            assert price == max(fixed_return_price(base, rate, day), floor)

    @given(st.floats(min_value=0.0, max_value=0.5), base_prices, lengths)
    @settings(max_examples=30, deadline=None)
    def test_non_negative_rate_never_falls(self, rate, base, length):
        prices = project_prices(FixedReturn(), base, rate, length, None)
        assert all(b >= a for a, b in zip(prices, prices[1:]))
