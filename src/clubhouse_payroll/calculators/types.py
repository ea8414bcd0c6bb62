"""Type definitions for the payroll and credit pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from clubhouse_payroll.calculators.intervals import Interval, MealBreakSplit, to_epoch

VERIFIED_STATUSES = frozenset({"verified", "approved"})


@dataclass(frozen=True)
class CreditRate:
    """A position's credits-per-hour over ``[start_time, end_time)``.

    The epoch conversions are derived once at construction so cached rates
    never need to be mutated.
    """

    position_id: int
    credits_per_hour: float
    start_time: datetime
    end_time: datetime
    description: str = ""
    id: int | None = None

    start_timestamp: int = field(init=False, repr=False)
    end_timestamp: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise ValueError(
                f"Credit rate end time {self.end_time} must be after "
                f"start time {self.start_time}"
            )
        object.__setattr__(self, "start_timestamp", to_epoch(self.start_time))
        object.__setattr__(self, "end_timestamp", to_epoch(self.end_time))

    @classmethod
    def from_model(cls, row: Any) -> CreditRate:
        """Build from a ``PositionCredit`` row (or anything shaped like one)."""
        return cls(
            id=row.id,
            position_id=row.position_id,
            credits_per_hour=float(row.credits_per_hour),
            start_time=row.start_time,
            end_time=row.end_time,
            description=row.description or "",
        )


@dataclass(frozen=True)
class PersonSummary:
    """Person fields joined onto a shift."""

    id: int
    callsign: str
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    employee_id: str | None = None


@dataclass(frozen=True)
class PositionSummary:
    """Position fields joined onto a shift."""

    id: int
    title: str
    paycode: str | None = None
    no_payroll_hours_adjustment: bool = False


@dataclass(frozen=True)
class ShiftRecord:
    """A timesheet entry as read from storage."""

    id: int
    person: PersonSummary
    position: PositionSummary
    on_duty: datetime
    off_duty: datetime | None  # None = still on duty
    review_status: str = "pending"

    @property
    def verified(self) -> bool:
        return self.review_status in VERIFIED_STATUSES


@dataclass
class PayrollShift:
    """A shift after clipping to the pay period."""

    id: int
    position_id: int
    position_title: str
    paycode: str | None
    verified: bool
    orig_on_duty: str
    orig_off_duty: str
    orig_duration: int
    on_duty: str = ""
    off_duty: str = ""
    duration: int = 0
    still_on_duty: bool = False
    meal_adjusted: MealBreakSplit | None = None
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the report row; optional keys appear only when set."""
        data: dict[str, Any] = {
            "id": self.id,
            "position_id": self.position_id,
            "position_title": self.position_title,
            "paycode": self.paycode,
            "verified": self.verified,
            "orig_on_duty": self.orig_on_duty,
            "orig_off_duty": self.orig_off_duty,
            "orig_duration": self.orig_duration,
            "on_duty": self.on_duty,
            "off_duty": self.off_duty,
            "duration": self.duration,
        }
        if self.still_on_duty:
            data["still_on_duty"] = True
        if self.meal_adjusted is not None:
            data["meal_adjusted"] = self.meal_adjusted.to_dict()
        data["notes"] = "\n".join(self.notes)
        return data


@dataclass
class PayrollPerson:
    """A person and their clipped shifts for the period."""

    id: int
    callsign: str
    first_name: str
    last_name: str
    email: str | None
    employee_id: str | None
    shifts: list[PayrollShift] = field(default_factory=list)

    @classmethod
    def from_summary(cls, person: PersonSummary) -> PayrollPerson:
        return cls(
            id=person.id,
            callsign=person.callsign,
            first_name=person.first_name,
            last_name=person.last_name,
            email=person.email,
            employee_id=person.employee_id,
        )

    @property
    def sort_key(self) -> str:
        return (self.callsign or "").casefold()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "callsign": self.callsign,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "employee_id": self.employee_id,
            "shifts": [shift.to_dict() for shift in self.shifts],
        }


@dataclass
class PayrollReport:
    """Payroll report split by whether a person has an employee id."""

    people: list[PayrollPerson] = field(default_factory=list)
    people_without_ids: list[PayrollPerson] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "people": [p.to_dict() for p in self.people],
            "people_without_ids": [p.to_dict() for p in self.people_without_ids],
        }


__all__ = [
    "CreditRate",
    "Interval",
    "MealBreakSplit",
    "PayrollPerson",
    "PayrollReport",
    "PayrollShift",
    "PersonSummary",
    "PositionSummary",
    "ShiftRecord",
    "VERIFIED_STATUSES",
]
