"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clubhouse_payroll.calculators import (
    CreditCalculator,
    CreditRateResolver,
    PayrollReportBuilder,
    RateCache,
)
from clubhouse_payroll.database import init_db
from clubhouse_payroll.stores import SqlCreditRateStore, SqlShiftStore


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    _, factory = init_db()
    async with factory() as session:
        try:
            yield session
        finally:
            await session.close()


def get_rate_cache(request: Request) -> RateCache:
    """The process-wide credit rate cache created at startup."""
    return request.app.state.rate_cache


DbSession = Annotated[AsyncSession, Depends(get_db_session)]
SharedRateCache = Annotated[RateCache, Depends(get_rate_cache)]


def get_resolver(db: DbSession, cache: SharedRateCache) -> CreditRateResolver:
    return CreditRateResolver(SqlCreditRateStore(db), cache)


def get_credit_calculator(
    resolver: Annotated[CreditRateResolver, Depends(get_resolver)],
) -> CreditCalculator:
    return CreditCalculator(resolver)


def get_report_builder(db: DbSession) -> PayrollReportBuilder:
    return PayrollReportBuilder(SqlShiftStore(db))


# Type aliases for cleaner dependency injection
Resolver = Annotated[CreditRateResolver, Depends(get_resolver)]
Calculator = Annotated[CreditCalculator, Depends(get_credit_calculator)]
ReportBuilder = Annotated[PayrollReportBuilder, Depends(get_report_builder)]
