"""
Test suite for noarb

Contains:
- tests/unit/          : Unit and property tests for calculator, enforcer, contracts
"""
