"""Payroll report endpoint."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Query

from clubhouse_payroll.api.dependencies import ReportBuilder
from clubhouse_payroll.api.schemas import ErrorResponse, PayrollReportResponse
from clubhouse_payroll.config import get_settings

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.get(
    "",
    response_model=PayrollReportResponse,
    response_model_exclude_unset=True,
    responses={422: {"model": ErrorResponse}},
)
async def payroll_report(
    builder: ReportBuilder,
    start: datetime,
    end: datetime,
    position_ids: Annotated[list[int], Query()],
    break_after_hours: Annotated[int | None, Query(ge=0)] = None,
    break_duration: Annotated[int | None, Query(ge=0)] = None,
) -> dict:
    """Shifts for the given positions clipped to ``[start, end]``.

    Break settings default to the configured payroll break when omitted.
    """
    settings = get_settings()
    report = await builder.build(
        start=start,
        end=end,
        break_after_hours=(
            settings.break_after_hours if break_after_hours is None else break_after_hours
        ),
        break_duration_minutes=(
            settings.break_duration_minutes if break_duration is None else break_duration
        ),
        position_ids=position_ids,
    )
    return report.to_dict()
