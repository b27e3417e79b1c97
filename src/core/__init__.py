"""
Core domain models, decimal primitives, and cross-rate computation.

This module contains the foundational building blocks that are independent
of external systems (quote feeds, account stores, etc.).
"""
