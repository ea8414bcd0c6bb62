"""Pytest fixtures for clubhouse payroll tests."""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from clubhouse_payroll.calculators import RateCache
from clubhouse_payroll.calculators.types import (
    CreditRate,
    PersonSummary,
    PositionSummary,
    ShiftRecord,
)
from clubhouse_payroll.models import Base, Person, Position, PositionCredit, Timesheet

# In-memory SQLite shared across connections for the lifetime of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# In-memory stores
# =============================================================================


class FakeCreditRateStore:
    """Credit rate store backed by a list, recording every query."""

    def __init__(self, rates: list[CreditRate] | None = None):
        self.rates = list(rates or [])
        self.calls: list[tuple[int, list[int] | None]] = []

    async def fetch_credit_rates(
        self, year: int, position_ids: Collection[int] | None = None
    ) -> list[CreditRate]:
        ids = None if position_ids is None else sorted(position_ids)
        self.calls.append((year, ids))
        found = [
            rate
            for rate in self.rates
            if rate.start_time.year == year
            and rate.end_time.year == year
            and (ids is None or rate.position_id in ids)
        ]
        return sorted(found, key=lambda rate: rate.start_time)


class FakeShiftStore:
    """Shift store returning a fixed list of shifts."""

    def __init__(self, shifts: list[ShiftRecord] | None = None):
        self.shifts = list(shifts or [])
        self.calls: list[tuple[list[int], datetime, datetime]] = []

    async def fetch_shifts_for_period(
        self, position_ids: Collection[int], start: datetime, end: datetime
    ) -> list[ShiftRecord]:
        self.calls.append((sorted(position_ids), start, end))
        return [s for s in self.shifts if s.position.id in position_ids]


def make_person(
    person_id: int = 1,
    callsign: str = "Hubcap",
    employee_id: str | None = "E100",
) -> PersonSummary:
    return PersonSummary(
        id=person_id,
        callsign=callsign,
        first_name="Test",
        last_name=callsign,
        email=f"{callsign.lower()}@example.com",
        employee_id=employee_id,
    )


def make_position(
    position_id: int = 10,
    title: str = "Dirt",
    no_adjustment: bool = False,
) -> PositionSummary:
    return PositionSummary(
        id=position_id,
        title=title,
        paycode=f"PC{position_id}",
        no_payroll_hours_adjustment=no_adjustment,
    )


def make_shift(
    shift_id: int,
    on_duty: datetime,
    off_duty: datetime | None,
    person: PersonSummary | None = None,
    position: PositionSummary | None = None,
    review_status: str = "verified",
) -> ShiftRecord:
    return ShiftRecord(
        id=shift_id,
        person=person or make_person(),
        position=position or make_position(),
        on_duty=on_duty,
        off_duty=off_duty,
        review_status=review_status,
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def rate_cache() -> RateCache:
    """A fresh cache per test."""
    return RateCache()


@pytest_asyncio.fixture
async def engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def seeded(session: AsyncSession) -> dict:
    """People, positions, shifts and credits for August 2024.

    Period under test is 2024-08-01 00:00 to 2024-08-10 00:00.
    """
    zebra = Person(id=1, callsign="zebra", first_name="Zed", last_name="Bra", employee_id="E1")
    alpha = Person(id=2, callsign="Alpha", first_name="Al", last_name="Pha", employee_id="E2")
    nobody = Person(id=3, callsign="Nomad", first_name="No", last_name="Mad", employee_id=None)

    dirt = Position(id=10, title="Dirt", paycode="D100")
    hq = Position(id=20, title="HQ Window", paycode="H200", no_payroll_hours_adjustment=True)
    other = Position(id=30, title="Other", paycode="O300")

    session.add_all([zebra, alpha, nobody, dirt, hq, other])
    await session.flush()

    shifts = [
        # Starts before the period, ends inside it
        Timesheet(id=100, person_id=1, position_id=10,
                  on_duty=datetime(2024, 7, 30, 18, 0), off_duty=datetime(2024, 8, 2, 2, 0),
                  review_status="verified"),
        # Wholly inside
        Timesheet(id=101, person_id=2, position_id=10,
                  on_duty=datetime(2024, 8, 3, 8, 0), off_duty=datetime(2024, 8, 3, 20, 0),
                  review_status="approved"),
        # Starts inside, runs past the end
        Timesheet(id=102, person_id=3, position_id=20,
                  on_duty=datetime(2024, 8, 9, 20, 0), off_duty=datetime(2024, 8, 10, 4, 0),
                  review_status="pending"),
        # Ends exactly at the period start: excluded
        Timesheet(id=103, person_id=1, position_id=10,
                  on_duty=datetime(2024, 7, 31, 16, 0), off_duty=datetime(2024, 8, 1, 0, 0)),
        # Starts exactly at the period end: excluded
        Timesheet(id=104, person_id=2, position_id=10,
                  on_duty=datetime(2024, 8, 10, 0, 0), off_duty=datetime(2024, 8, 10, 6, 0)),
        # Position not requested
        Timesheet(id=105, person_id=2, position_id=30,
                  on_duty=datetime(2024, 8, 4, 8, 0), off_duty=datetime(2024, 8, 4, 12, 0)),
        # Still on duty
        Timesheet(id=106, person_id=3, position_id=10,
                  on_duty=datetime(2024, 8, 9, 22, 0), off_duty=None),
        # Spans the whole period
        Timesheet(id=107, person_id=2, position_id=20,
                  on_duty=datetime(2024, 7, 31, 0, 0), off_duty=datetime(2024, 8, 11, 0, 0)),
    ]
    credits = [
        PositionCredit(id=1, position_id=10, credits_per_hour=1.0,
                       start_time=datetime(2024, 8, 1, 0, 0), end_time=datetime(2024, 8, 31, 0, 0),
                       description="Event week"),
        PositionCredit(id=2, position_id=10, credits_per_hour=2.0,
                       start_time=datetime(2024, 8, 3, 12, 0), end_time=datetime(2024, 8, 3, 18, 0),
                       description="Burn night bonus"),
        PositionCredit(id=3, position_id=20, credits_per_hour=0.5,
                       start_time=datetime(2024, 1, 1, 0, 0), end_time=datetime(2024, 12, 31, 0, 0),
                       description="All year"),
        # Crosses into the next year: never returned for either year
        PositionCredit(id=4, position_id=10, credits_per_hour=9.0,
                       start_time=datetime(2024, 12, 31, 0, 0), end_time=datetime(2025, 1, 2, 0, 0),
                       description="New year"),
        PositionCredit(id=5, position_id=30, credits_per_hour=3.0,
                       start_time=datetime(2023, 8, 1, 0, 0), end_time=datetime(2023, 9, 1, 0, 0),
                       description="Last year"),
    ]
    session.add_all(shifts + credits)
    await session.flush()

    return {
        "start": datetime(2024, 8, 1, 0, 0),
        "end": datetime(2024, 8, 10, 0, 0),
    }
