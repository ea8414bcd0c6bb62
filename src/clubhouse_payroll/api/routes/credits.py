"""Position credit endpoints."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Path, Query

from clubhouse_payroll.api.dependencies import Calculator, Resolver
from clubhouse_payroll.api.schemas import (
    CreditComputationResponse,
    ErrorResponse,
    PositionCreditListResponse,
    PositionCreditResponse,
)
from clubhouse_payroll.calculators import InvalidReportInputError, ensure_naive

router = APIRouter(tags=["position-credits"])


@router.get(
    "/position-credits",
    response_model=PositionCreditListResponse,
)
async def list_position_credits(
    resolver: Resolver,
    year: Annotated[int, Query(ge=1970, le=9998)],
) -> PositionCreditListResponse:
    """All credit rates for a year, ordered by start time."""
    rates = await resolver.rates_for_year(year)
    return PositionCreditListResponse(
        year=year,
        items=[PositionCreditResponse.model_validate(rate) for rate in rates],
        total=len(rates),
    )


@router.get(
    "/positions/{position_id}/credits",
    response_model=CreditComputationResponse,
    responses={422: {"model": ErrorResponse}},
)
async def compute_position_credits(
    calculator: Calculator,
    position_id: Annotated[int, Path()],
    on_duty: datetime,
    off_duty: datetime,
) -> CreditComputationResponse:
    """Credits earned working ``position_id`` from ``on_duty`` to ``off_duty``."""
    ensure_naive("on_duty", on_duty)
    ensure_naive("off_duty", off_duty)
    if off_duty <= on_duty:
        raise InvalidReportInputError(f"off_duty {off_duty} must be after on_duty {on_duty}")

    credits = await calculator.credits_for_shift(position_id, on_duty, off_duty)
    return CreditComputationResponse(
        position_id=position_id,
        on_duty=on_duty,
        off_duty=off_duty,
        year=on_duty.year,
        credits=credits,
    )
