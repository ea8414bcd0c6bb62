"""Storage collaborators for shifts and credit rates."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from datetime import datetime
from typing import Protocol

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from clubhouse_payroll.calculators.types import (
    CreditRate,
    PersonSummary,
    PositionSummary,
    ShiftRecord,
)
from clubhouse_payroll.models import PositionCredit, Timesheet


class ShiftStore(Protocol):
    """Source of shifts for a payroll report."""

    async def fetch_shifts_for_period(
        self,
        position_ids: Collection[int],
        start: datetime,
        end: datetime,
    ) -> Sequence[ShiftRecord]:
        """Shifts touching ``[start, end]``, ordered by on duty time."""
        ...


class CreditRateStore(Protocol):
    """Source of position credit rates."""

    async def fetch_credit_rates(
        self,
        year: int,
        position_ids: Collection[int] | None = None,
    ) -> Sequence[CreditRate]:
        """Rates starting and ending within ``year``, ordered by start time.

        ``position_ids=None`` fetches every position.
        """
        ...


def year_bounds(year: int) -> tuple[datetime, datetime]:
    """``[Jan 1 of year, Jan 1 of next year)``."""
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


class SqlShiftStore:
    """Reads shifts from the ``timesheet`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_shifts_for_period(
        self,
        position_ids: Collection[int],
        start: datetime,
        end: datetime,
    ) -> list[ShiftRecord]:
        if not position_ids:
            return []

        on_duty = Timesheet.on_duty
        off_duty = Timesheet.off_duty
        # Four inclusive boundary cases; a single overlap test would drop
        # shifts that exactly touch the period edges. A NULL off duty only
        # matches the last case.
        in_period = or_(
            # Shift spans the whole period
            and_(on_duty <= start, off_duty >= end),
            # Shift happens within the period
            and_(on_duty >= start, off_duty <= end),
            # Shift ends within the period
            and_(off_duty > start, off_duty <= end),
            # Shift begins within the period
            and_(on_duty >= start, on_duty < end),
        )

        result = await self.session.execute(
            select(Timesheet)
            .options(joinedload(Timesheet.person), joinedload(Timesheet.position))
            .where(Timesheet.position_id.in_(list(position_ids)), in_period)
            .order_by(on_duty, Timesheet.id)
        )
        return [_to_shift_record(row) for row in result.scalars().all()]


class SqlCreditRateStore:
    """Reads credit rates from the ``position_credit`` table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def fetch_credit_rates(
        self,
        year: int,
        position_ids: Collection[int] | None = None,
    ) -> list[CreditRate]:
        year_start, next_year = year_bounds(year)
        query = select(PositionCredit).where(
            PositionCredit.start_time >= year_start,
            PositionCredit.start_time < next_year,
            PositionCredit.end_time >= year_start,
            PositionCredit.end_time < next_year,
        )
        if position_ids is not None:
            if not position_ids:
                return []
            query = query.where(PositionCredit.position_id.in_(list(position_ids)))

        result = await self.session.execute(
            query.order_by(PositionCredit.start_time, PositionCredit.id)
        )
        return [CreditRate.from_model(row) for row in result.scalars().all()]


def _to_shift_record(row: Timesheet) -> ShiftRecord:
    person = row.person
    position = row.position
    return ShiftRecord(
        id=row.id,
        person=PersonSummary(
            id=person.id,
            callsign=person.callsign,
            first_name=person.first_name,
            last_name=person.last_name,
            email=person.email,
            employee_id=person.employee_id,
        ),
        position=PositionSummary(
            id=position.id,
            title=position.title,
            paycode=position.paycode,
            no_payroll_hours_adjustment=bool(position.no_payroll_hours_adjustment),
        ),
        on_duty=row.on_duty,
        off_duty=row.off_duty,
        review_status=row.review_status,
    )
