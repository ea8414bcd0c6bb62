"""ORM models."""

from clubhouse_payroll.models.base import Base, TimestampMixin
from clubhouse_payroll.models.person import Person
from clubhouse_payroll.models.position import Position, PositionCredit
from clubhouse_payroll.models.timesheet import Timesheet

__all__ = [
    "Base",
    "TimestampMixin",
    "Person",
    "Position",
    "PositionCredit",
    "Timesheet",
]
