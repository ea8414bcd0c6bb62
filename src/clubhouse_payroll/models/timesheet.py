"""Timesheet (shift) model."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clubhouse_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from clubhouse_payroll.models.person import Person
    from clubhouse_payroll.models.position import Position


class Timesheet(Base, TimestampMixin):
    """A single on duty / off duty interval worked in one position."""

    __tablename__ = "timesheet"

    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    STATUS_VERIFIED = "verified"
    STATUS_UNVERIFIED = "unverified"

    id: Mapped[int] = mapped_column(primary_key=True)
    person_id: Mapped[int] = mapped_column(
        ForeignKey("person.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position_id: Mapped[int] = mapped_column(
        ForeignKey("position.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    on_duty: Mapped[datetime] = mapped_column(nullable=False, index=True)
    # NULL while the person is still on shift
    off_duty: Mapped[datetime | None] = mapped_column(nullable=True)
    review_status: Mapped[str] = mapped_column(String, nullable=False, default=STATUS_PENDING)

    __table_args__ = (
        CheckConstraint(
            "review_status IN ('pending', 'approved', 'rejected', 'verified', 'unverified')",
            name="timesheet_review_status_check",
        ),
    )

    # Relationships
    person: Mapped[Person] = relationship(back_populates="timesheets")
    position: Mapped[Position] = relationship(back_populates="timesheets")
