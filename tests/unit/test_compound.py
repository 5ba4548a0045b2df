"""
test_compound.py - Unit tests for compound.py

Tests:
- future_value: reference values, zero principal, zero rate
- years_to_double: log formula vs Rule of 72, non-positive rates
- total_interest_earned / compounding_advantage
- ticks_to_years conversion
"""

import math
import pytest

from investsim import (
    future_value, years_to_double, total_interest_earned,
    compounding_advantage, ticks_to_years, explain_compound_interest,
)


class TestFutureValue:

    def test_monthly_compounding_reference(self):
        assert future_value(1000, 0.05, 12, 1) == pytest.approx(1051.16, abs=0.1)

    def test_annual_compounding_is_simple_power(self):
        assert future_value(100, 0.10, 1, 2) == pytest.approx(121.0)

    def test_zero_principal_is_zero(self):
        assert future_value(0, 0.08, 12, 10) == 0.0

    def test_zero_rate_returns_principal(self):
        assert future_value(2500, 0.0, 12, 30) == 2500

    def test_fractional_years(self):
        assert future_value(1000, 0.12, 12, 0.5) == pytest.approx(1000 * 1.01 ** 6)

    def test_invalid_compounds_per_year(self):
        with pytest.raises(ValueError):
            future_value(1000, 0.05, 0, 1)


class TestYearsToDouble:

    def test_ten_percent(self):
        assert years_to_double(0.10) == pytest.approx(7.2, abs=0.1)

    def test_zero_rate_is_infinite(self):
        assert years_to_double(0.0) == math.inf

    def test_negative_rate_is_infinite(self):
        assert years_to_double(-0.02) == math.inf

    @pytest.mark.parametrize("rate", [0.02, 0.04, 0.06, 0.08])
    def test_close_to_rule_of_72(self, rate):
        assert years_to_double(rate) == pytest.approx(72 / (rate * 100), rel=0.05)

    def test_actually_doubles(self):
        years = years_to_double(0.07)
        assert future_value(1, 0.07, 1, years) == pytest.approx(2.0)


class TestInterestDecomposition:

    def test_total_interest_earned(self):
        fv = future_value(1000, 0.05, 12, 3)
        assert total_interest_earned(1000, 0.05, 12, 3) == pytest.approx(fv - 1000)

    def test_compounding_advantage_non_negative(self):
        for years in (0, 0.5, 1, 5, 20):
            assert compounding_advantage(1000, 0.05, 12, years) >= -1e-9

    def test_compounding_advantage_increases_with_years(self):
        values = [compounding_advantage(1000, 0.06, 4, y) for y in range(1, 21)]
        assert all(later > earlier for earlier, later in zip(values, values[1:]))

    def test_zero_rate_has_no_advantage(self):
        assert compounding_advantage(1000, 0.0, 12, 10) == 0


class TestTicksToYears:

    def test_one_year_of_days(self):
        assert ticks_to_years(365) == 1.0

    def test_custom_ticks_per_year(self):
        assert ticks_to_years(126, 252) == 0.5

    def test_invalid_ticks_per_year(self):
        with pytest.raises(ValueError):
            ticks_to_years(10, 0)


class TestExplanation:

    def test_mentions_future_value_and_doubling(self):
        text = explain_compound_interest(1000, 0.10, 12, 5)
        assert "$1,645.31" in text
        assert "~7.3 years" in text

    def test_zero_rate_never_doubles(self):
        assert "never" in explain_compound_interest(1000, 0.0, 12, 5)
