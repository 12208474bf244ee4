"""Diagnostics package.

- new_years_table: always available, plain text
- leap_months: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["new_years_table", "leap_months"]
