"""Clubhouse payroll: shift clipping, meal-break splits and position credits."""

__version__ = "0.1.0"
