"""
compound.py - Closed-form compound interest math

    FV = P * (1 + r/n) ** (n*t)

P = principal, r = annual rate, n = compounds per year, t = years.
All functions are pure. Game ticks convert to years via ticks_to_years().
"""
from __future__ import annotations
import math

from .core import TICKS_PER_YEAR


def future_value(principal: float, annual_rate: float, compounds_per_year: int, years: float) -> float:
    """
    Future value with periodic compounding.

    Zero principal returns 0 and zero rate returns the principal untouched.
    """
    if compounds_per_year <= 0:
        raise ValueError(f"compounds_per_year must be positive, got {compounds_per_year}")
    if principal == 0:
        return 0.0
    if annual_rate == 0:
        return principal
    rate_per_period = annual_rate / compounds_per_year
    periods = compounds_per_year * years
    return principal * (1.0 + rate_per_period) ** periods


def years_to_double(annual_rate: float) -> float:
    """
    Years until money doubles at annual_rate, compounded yearly.

    ln(2) / ln(1 + r). Close to the Rule of 72 (72 / (100 r)) for small rates.
    Non-positive rates never double: returns +inf.
    """
    if annual_rate <= 0:
        return math.inf
    return math.log(2.0) / math.log1p(annual_rate)


def total_interest_earned(principal: float, annual_rate: float, compounds_per_year: int, years: float) -> float:
    return future_value(principal, annual_rate, compounds_per_year, years) - principal


def compounding_advantage(principal: float, annual_rate: float, compounds_per_year: int, years: float) -> float:
    """
    Extra money from compounding over simple interest P * (1 + r*t).

    Non-negative for positive rates and growing with years.
    """
    simple_total = principal * (1.0 + annual_rate * years)
    return future_value(principal, annual_rate, compounds_per_year, years) - simple_total


def ticks_to_years(ticks: int, ticks_per_year: int = TICKS_PER_YEAR) -> float:
    if ticks_per_year <= 0:
        raise ValueError(f"ticks_per_year must be positive, got {ticks_per_year}")
    return ticks / ticks_per_year


def explain_compound_interest(principal: float, annual_rate: float, compounds_per_year: int, years: int) -> str:
    """Plain-language summary of how a deposit grows."""
    fv = future_value(principal, annual_rate, compounds_per_year, years)
    gain = fv - principal
    advantage = compounding_advantage(principal, annual_rate, compounds_per_year, years)
    doubling = years_to_double(annual_rate)
    doubling_text = "never" if math.isinf(doubling) else f"in ~{doubling:.1f} years"

    return (
        f"Starting with ${principal:,.0f} at {annual_rate * 100:.1f}% annual interest:\n\n"
        f"After {years} year(s), you'll have: ${fv:,.2f}\n"
        f"Total earned: ${gain:,.2f}\n\n"
        f"Compounding {compounds_per_year}x per year earns you ${advantage:,.2f} more\n"
        f"than simple interest would.\n\n"
        f"At this rate, your money doubles {doubling_text}."
    )
