"""Position credit computation."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from clubhouse_payroll.calculators.intervals import overlap_minutes, to_epoch
from clubhouse_payroll.calculators.payroll_report import ensure_naive
from clubhouse_payroll.calculators.rate_resolver import CreditRateResolver
from clubhouse_payroll.calculators.types import CreditRate


def credits_from_rates(rates: Iterable[CreditRate], start: int, end: int) -> float:
    """Sum the credits earned over ``[start, end)`` (epoch seconds).

    Every rate window contributes its overlap with the span. Overlapping
    windows for the same position are all counted.
    """
    total = 0.0
    for rate in rates:
        minutes = overlap_minutes(start, end, rate.start_timestamp, rate.end_timestamp)
        if minutes > 0:
            total += minutes * rate.credits_per_hour / 60.0
    return total


class CreditCalculator:
    """Computes credits earned for time worked in a position."""

    def __init__(self, resolver: CreditRateResolver):
        self.resolver = resolver

    async def compute_credits(
        self,
        position_id: int,
        start: int,
        end: int,
        year: int,
    ) -> float:
        """Credits for a span in epoch seconds against ``year``'s rates.

        A position with no rates for the year earns 0.0.
        """
        rates = await self.resolver.rates_for(year, position_id)
        if not rates:
            return 0.0
        return credits_from_rates(rates, start, end)

    async def credits_for_shift(
        self,
        position_id: int,
        on_duty: datetime,
        off_duty: datetime,
    ) -> float:
        """Credits for a shift, using the rates of the year it started in."""
        ensure_naive("on_duty", on_duty)
        ensure_naive("off_duty", off_duty)
        return await self.compute_credits(
            position_id,
            to_epoch(on_duty),
            to_epoch(off_duty),
            on_duty.year,
        )
