"""Tests for the SQLAlchemy-backed stores."""

from datetime import datetime

import pytest

from clubhouse_payroll.calculators import (
    CreditCalculator,
    CreditRateResolver,
    PayrollReportBuilder,
)
from clubhouse_payroll.stores import SqlCreditRateStore, SqlShiftStore, year_bounds


class TestSqlShiftStore:
    """Test the four-way period boundary query."""

    @pytest.mark.asyncio
    async def test_boundary_cases(self, session, seeded):
        store = SqlShiftStore(session)

        shifts = await store.fetch_shifts_for_period([10, 20], seeded["start"], seeded["end"])

        # 103 ends exactly at the start, 104 starts exactly at the end,
        # 105 is for a position that was not requested
        assert [s.id for s in shifts] == [100, 107, 101, 102, 106]

    @pytest.mark.asyncio
    async def test_joined_fields(self, session, seeded):
        store = SqlShiftStore(session)

        shifts = await store.fetch_shifts_for_period([20], seeded["start"], seeded["end"])
        by_id = {s.id: s for s in shifts}

        assert set(by_id) == {102, 107}
        assert by_id[102].person.callsign == "Nomad"
        assert by_id[102].person.employee_id is None
        assert by_id[102].position.title == "HQ Window"
        assert by_id[102].position.no_payroll_hours_adjustment is True
        assert by_id[107].verified is False

    @pytest.mark.asyncio
    async def test_still_on_duty_shift_included(self, session, seeded):
        store = SqlShiftStore(session)

        shifts = await store.fetch_shifts_for_period([10], seeded["start"], seeded["end"])
        still_on = [s for s in shifts if s.off_duty is None]

        assert [s.id for s in still_on] == [106]

    @pytest.mark.asyncio
    async def test_no_positions(self, session, seeded):
        store = SqlShiftStore(session)

        assert await store.fetch_shifts_for_period([], seeded["start"], seeded["end"]) == []


class TestSqlCreditRateStore:
    """Test credit rate queries."""

    @pytest.mark.asyncio
    async def test_rates_for_positions(self, session, seeded):
        store = SqlCreditRateStore(session)

        rates = await store.fetch_credit_rates(2024, [10])

        # Rate 4 ends in 2025 and is excluded
        assert [r.id for r in rates] == [1, 2]
        assert rates[0].description == "Event week"

    @pytest.mark.asyncio
    async def test_all_positions(self, session, seeded):
        store = SqlCreditRateStore(session)

        rates = await store.fetch_credit_rates(2024)

        assert [r.id for r in rates] == [3, 1, 2]

    @pytest.mark.asyncio
    async def test_other_year(self, session, seeded):
        store = SqlCreditRateStore(session)

        rates = await store.fetch_credit_rates(2023, None)

        assert [r.position_id for r in rates] == [30]

    @pytest.mark.asyncio
    async def test_empty_id_list(self, session, seeded):
        store = SqlCreditRateStore(session)

        assert await store.fetch_credit_rates(2024, []) == []

    def test_year_bounds(self):
        assert year_bounds(2024) == (datetime(2024, 1, 1), datetime(2025, 1, 1))


class TestEndToEnd:
    """Report and credits against the database."""

    @pytest.mark.asyncio
    async def test_report_from_database(self, session, seeded):
        builder = PayrollReportBuilder(
            SqlShiftStore(session), clock=lambda: datetime(2024, 8, 12, 9, 0)
        )

        report = await builder.build(seeded["start"], seeded["end"], 8, 30, [10, 20])

        assert [p.callsign for p in report.people] == ["Alpha", "zebra"]
        assert [p.callsign for p in report.people_without_ids] == ["Nomad"]

        alpha = report.people[0]
        assert [s.id for s in alpha.shifts] == [107, 101]
        # 12 hour shift in a regular position gets a meal split
        assert alpha.shifts[1].meal_adjusted is not None
        # Whole-period shift in a no-adjustment position does not
        assert alpha.shifts[0].meal_adjusted is None
        assert alpha.shifts[0].notes[0] == "Position set to not adjust hours."

        nomad = report.people_without_ids[0]
        assert nomad.shifts[1].still_on_duty is True

    @pytest.mark.asyncio
    async def test_credits_from_database(self, session, seeded, rate_cache):
        resolver = CreditRateResolver(SqlCreditRateStore(session), rate_cache)
        calculator = CreditCalculator(resolver)
        await resolver.warm_bulk({2024: [10, 20]})

        # 08:00-20:00 on Aug 3: 12h at 1.0 plus 6h bonus at 2.0
        credits = await calculator.credits_for_shift(
            10, datetime(2024, 8, 3, 8, 0), datetime(2024, 8, 3, 20, 0)
        )

        assert credits == pytest.approx(12 * 1.0 + 6 * 2.0)
