"""Position and position credit models."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, CheckConstraint, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from clubhouse_payroll.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from clubhouse_payroll.models.timesheet import Timesheet


class Position(Base, TimestampMixin):
    """A position a person can work a shift in."""

    __tablename__ = "position"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    paycode: Mapped[str | None] = mapped_column(String, nullable=True)
    no_payroll_hours_adjustment: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )

    # Relationships
    credits: Mapped[list[PositionCredit]] = relationship(
        back_populates="position",
        order_by="PositionCredit.start_time",
    )
    timesheets: Mapped[list[Timesheet]] = relationship(back_populates="position")


class PositionCredit(Base, TimestampMixin):
    """Credits earned per hour worked in a position over a time window."""

    __tablename__ = "position_credit"

    id: Mapped[int] = mapped_column(primary_key=True)
    position_id: Mapped[int] = mapped_column(
        ForeignKey("position.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    credits_per_hour: Mapped[float] = mapped_column(Float, nullable=False)
    start_time: Mapped[datetime] = mapped_column(nullable=False, index=True)
    end_time: Mapped[datetime] = mapped_column(nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="position_credit_times_check"),
    )

    # Relationships
    position: Mapped[Position] = relationship(back_populates="credits")
