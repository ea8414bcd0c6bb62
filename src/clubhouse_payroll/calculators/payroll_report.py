"""Payroll report: shifts clipped to a pay period, grouped by person."""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from clubhouse_payroll.calculators.intervals import (
    format_dt,
    format_full_dt,
    meal_break_fits,
    split_at_meal_break,
)
from clubhouse_payroll.calculators.types import (
    PayrollPerson,
    PayrollReport,
    PayrollShift,
    ShiftRecord,
)

if TYPE_CHECKING:
    from clubhouse_payroll.stores import ShiftStore

logger = logging.getLogger(__name__)

NOTE_STILL_ON_DUTY = "Still on duty"
NOTE_NO_ADJUSTMENT = "Position set to not adjust hours."


class InvalidReportInputError(ValueError):
    """Raised when report parameters are out of range."""


def ensure_naive(name: str, value: datetime) -> None:
    """Reject datetimes carrying a UTC offset.

    Shift and credit times are stored as local wall-clock values, so an
    offset could not be applied consistently.
    """
    if value.tzinfo is not None and value.utcoffset() is not None:
        raise InvalidReportInputError(
            f"{name} must be a local time without a UTC offset, got {value.isoformat()}"
        )


def _seconds_between(a: datetime, b: datetime) -> int:
    return int(abs((b - a).total_seconds()))


class PayrollReportBuilder:
    """Builds the payroll report for a pay period.

    Pipeline per shift (in on duty order):
    1) Substitute "now" for a missing off duty time
    2) Record the original times and duration
    3) Clip on duty / off duty to the period, noting each truncation
    4) Recompute the duration
    5) Attach a meal-break split for long shifts, unless the position
       opts out of hours adjustment
    """

    def __init__(
        self,
        store: ShiftStore,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.clock = clock

    async def build(
        self,
        start: datetime,
        end: datetime,
        break_after_hours: int,
        break_duration_minutes: int,
        position_ids: Collection[int],
    ) -> PayrollReport:
        """Build the report for shifts in ``position_ids`` touching ``[start, end]``.

        Args:
            start: Pay period start
            end: Pay period end
            break_after_hours: Hours worked before a meal break; 0 disables splitting
            break_duration_minutes: Length of the unpaid meal break
            position_ids: Positions to include

        Raises:
            InvalidReportInputError: If the period or break settings are invalid
        """
        ensure_naive("start", start)
        ensure_naive("end", end)
        if end <= start:
            raise InvalidReportInputError(f"Period end {end} must be after start {start}")
        if break_after_hours < 0:
            raise InvalidReportInputError("break_after_hours cannot be negative")
        if break_duration_minutes < 0:
            raise InvalidReportInputError("break_duration_minutes cannot be negative")

        if not position_ids:
            return PayrollReport()

        records = await self.store.fetch_shifts_for_period(position_ids, start, end)
        report = self.assemble(records, start, end, break_after_hours, break_duration_minutes)

        logger.info(
            "Payroll report %s - %s: %d shifts, %d people, %d without employee ids",
            format_dt(start),
            format_dt(end),
            len(records),
            len(report.people) + len(report.people_without_ids),
            len(report.people_without_ids),
        )
        return report

    def assemble(
        self,
        records: Iterable[ShiftRecord],
        start: datetime,
        end: datetime,
        break_after_hours: int,
        break_duration_minutes: int,
    ) -> PayrollReport:
        """Group already-fetched shifts by person and sort the result."""
        now = self.clock()
        by_person: dict[int, PayrollPerson] = {}

        for record in records:
            person = by_person.get(record.person.id)
            if person is None:
                person = by_person[record.person.id] = PayrollPerson.from_summary(record.person)
            person.shifts.append(
                self.build_shift(record, start, end, now, break_after_hours, break_duration_minutes)
            )

        report = PayrollReport()
        for person in by_person.values():
            if person.employee_id:
                report.people.append(person)
            else:
                report.people_without_ids.append(person)

        report.people.sort(key=lambda p: p.sort_key)
        report.people_without_ids.sort(key=lambda p: p.sort_key)
        return report

    def build_shift(
        self,
        record: ShiftRecord,
        start: datetime,
        end: datetime,
        now: datetime,
        break_after_hours: int,
        break_duration_minutes: int,
    ) -> PayrollShift:
        """Clip a single shift to ``[start, end]``."""
        notes: list[str] = []
        on_duty = record.on_duty
        off_duty = record.off_duty if record.off_duty is not None else now

        shift = PayrollShift(
            id=record.id,
            position_id=record.position.id,
            position_title=record.position.title,
            paycode=record.position.paycode,
            verified=record.verified,
            orig_on_duty=format_full_dt(on_duty),
            orig_off_duty=format_full_dt(off_duty),
            orig_duration=_seconds_between(on_duty, off_duty),
        )

        if record.off_duty is None:
            shift.still_on_duty = True
            notes.append(NOTE_STILL_ON_DUTY)

        if start > on_duty:
            notes.append(f"Truncated start time - orig. {format_dt(on_duty)}")
            on_duty = start

        if off_duty > end:
            notes.append(f"Truncated end time - orig. {format_dt(off_duty)}")
            off_duty = end

        duration = _seconds_between(on_duty, off_duty)
        shift.duration = duration
        shift.on_duty = format_dt(on_duty)
        shift.off_duty = format_dt(off_duty)

        if record.position.no_payroll_hours_adjustment:
            notes.insert(0, NOTE_NO_ADJUSTMENT)
        elif break_after_hours and duration // 3600 > break_after_hours:
            if meal_break_fits(duration, break_after_hours, break_duration_minutes):
                shift.meal_adjusted = split_at_meal_break(
                    on_duty, duration, break_after_hours, break_duration_minutes
                )
            else:
                logger.debug(
                    "Shift %s ends inside its %d minute meal break; not split",
                    record.id,
                    break_duration_minutes,
                )

        shift.notes = notes
        return shift
