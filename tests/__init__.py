"""
Test suite for break-infinity Decimal

Contains:
- tests/unit/          : Unit tests for individual modules
"""
