"""
Test suite for intercon-fx

Contains:
- tests/unit/          : Unit tests for individual modules
"""
