"""Payroll and position credit calculators."""

from clubhouse_payroll.calculators.credits import CreditCalculator, credits_from_rates
from clubhouse_payroll.calculators.intervals import (
    MealBreakError,
    overlap_minutes,
    split_at_meal_break,
)
from clubhouse_payroll.calculators.payroll_report import (
    InvalidReportInputError,
    PayrollReportBuilder,
    ensure_naive,
)
from clubhouse_payroll.calculators.rate_cache import RateCache
from clubhouse_payroll.calculators.rate_resolver import CreditRateResolver

__all__ = [
    "CreditCalculator",
    "CreditRateResolver",
    "InvalidReportInputError",
    "MealBreakError",
    "PayrollReportBuilder",
    "RateCache",
    "credits_from_rates",
    "ensure_naive",
    "overlap_minutes",
    "split_at_meal_break",
]
