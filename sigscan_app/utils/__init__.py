"""
Utility functions module.

Shared helpers for rounding and time handling.

Rounding Semantics:
- Every percentage leaves the engine rounded to two decimals
- Ties round half away from zero, identically in every component
- Rounding goes through Decimal so binary float noise never flips a tie
"""
