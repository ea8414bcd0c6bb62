"""Person model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clubhouse_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from clubhouse_payroll.models.timesheet import Timesheet


class Person(Base, TimestampMixin):
    """A volunteer or paid staff member."""

    __tablename__ = "person"

    id: Mapped[int] = mapped_column(primary_key=True)
    callsign: Mapped[str] = mapped_column(String, nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    last_name: Mapped[str] = mapped_column(String, nullable=False, default="")
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    # External payroll system id; people without one cannot be paid yet.
    employee_id: Mapped[str | None] = mapped_column(String, nullable=True)

    # Relationships
    timesheets: Mapped[list[Timesheet]] = relationship(back_populates="person")
