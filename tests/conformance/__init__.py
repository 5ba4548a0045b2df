"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of the investment simulation.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. price_bounds.py - Floor, clamp band and fixed-return curve
2. simulation_determinism.py - Same seed, same prices
3. gain_reconciliation.py - Cash, holdings and gains always add up

These tests use hypothesis for property-based testing.
"""
