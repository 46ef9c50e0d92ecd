"""
Conformance Test Suite

This suite defines the NORMATIVE behavior of raw-unit balances.
Any compliant implementation MUST pass these tests.

The tests are organized by invariant:
1. test_round_trip.py - Text and binary representations convert back exactly
2. test_scaling.py - Unit scaling, truncation and canonical zero
3. test_ordering.py - Comparison totality and fixed-width arithmetic
4. test_rejection.py - Overflow, precision loss and unknown units fail loudly

These tests use hypothesis for property-based testing.
"""
