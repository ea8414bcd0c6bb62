"""Interval arithmetic for shifts: overlap, meal-break splitting, formatting."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal


class MealBreakError(ValueError):
    """Raised when a shift is too short to be split around a meal break."""

    def __init__(self, total_duration_seconds: int, break_after_hours: int, break_duration_minutes: int):
        self.total_duration_seconds = total_duration_seconds
        self.break_after_hours = break_after_hours
        self.break_duration_minutes = break_duration_minutes
        super().__init__(
            f"Shift of {total_duration_seconds}s cannot hold a {break_duration_minutes} minute "
            f"meal break after {break_after_hours} hours"
        )


@dataclass(frozen=True)
class Interval:
    """A half-open ``[on_duty, off_duty)`` span."""

    on_duty: datetime
    off_duty: datetime

    @property
    def duration_seconds(self) -> int:
        return int((self.off_duty - self.on_duty).total_seconds())

    def to_dict(self) -> dict[str, str]:
        return {
            "on_duty": format_dt(self.on_duty),
            "off_duty": format_dt(self.off_duty),
        }


@dataclass(frozen=True)
class MealBreakSplit:
    """A shift divided into two paid halves around an unpaid meal break."""

    first_half: Interval
    second_half: Interval

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {
            "first_half": self.first_half.to_dict(),
            "second_half": self.second_half.to_dict(),
        }


def to_epoch(dt: datetime) -> int:
    """Seconds since the epoch. Naive datetimes are read as UTC wall-clock."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp())


def format_dt(dt: datetime) -> str:
    """Format as ``YYYY-MM-DD H:MM`` (24-hour, hour not zero padded)."""
    return f"{dt:%Y-%m-%d} {dt.hour}:{dt:%M}"


def format_full_dt(dt: datetime) -> str:
    return f"{dt:%Y-%m-%d %H:%M:%S}"


def overlap_minutes(start_a: int, end_a: int, start_b: int, end_b: int) -> float:
    """Minutes shared by ``[start_a, end_a)`` and ``[start_b, end_b)``.

    All arguments are epoch seconds. The result is rounded to the nearest
    whole minute, halves away from zero. Disjoint or touching intervals give 0.
    """
    start = max(start_a, start_b)
    ending = min(end_a, end_b)

    if start >= ending:
        return 0.0

    minutes = (Decimal(ending) - Decimal(start)) / Decimal(60)
    return float(minutes.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def split_at_meal_break(
    on_duty: datetime,
    total_duration_seconds: int,
    break_after_hours: int,
    break_duration_minutes: int,
) -> MealBreakSplit:
    """Split a shift into the hours before and after a meal break.

    The first half runs for ``break_after_hours`` from ``on_duty``. The break
    itself is excluded from both halves, and the second half gets whatever
    time remains of ``total_duration_seconds``.

    Raises:
        MealBreakError: If the shift ends before the break does.
    """
    break_start = on_duty + timedelta(hours=break_after_hours)
    after_break = break_start + timedelta(minutes=break_duration_minutes)
    remaining_seconds = total_duration_seconds - (
        break_after_hours * 3600 + break_duration_minutes * 60
    )

    if remaining_seconds < 0:
        raise MealBreakError(total_duration_seconds, break_after_hours, break_duration_minutes)

    return MealBreakSplit(
        first_half=Interval(on_duty, break_start),
        second_half=Interval(after_break, after_break + timedelta(seconds=remaining_seconds)),
    )


def meal_break_fits(duration_seconds: int, break_after_hours: int, break_duration_minutes: int) -> bool:
    """Whether a shift is long enough to be split around a meal break.

    The shift must run more whole hours than ``break_after_hours`` and must
    not end inside the break window.
    """
    if break_after_hours <= 0:
        return False
    if duration_seconds // 3600 <= break_after_hours:
        return False
    return duration_seconds >= break_after_hours * 3600 + break_duration_minutes * 60
