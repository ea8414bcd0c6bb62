"""Service status endpoints."""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from clubhouse_payroll.api.dependencies import DbSession, SharedRateCache
from clubhouse_payroll.config import get_settings

router = APIRouter(tags=["health"])


class MealBreakDefaults(BaseModel):
    """Meal-break settings applied when a report request omits them."""

    break_after_hours: int
    break_duration_minutes: int


class HealthResponse(BaseModel):
    """Database reachability plus what the credit rate cache holds."""

    status: str
    checked_at: datetime
    database: str
    cached_rate_years: dict[int, int]
    meal_break: MealBreakDefaults


@router.get("/health", response_model=HealthResponse)
async def health_check(db: DbSession, cache: SharedRateCache) -> HealthResponse:
    """Report database status and the positions cached per credit year."""
    try:
        await db.execute(text("SELECT 1"))
        database = "ok"
    except (SQLAlchemyError, OSError):
        database = "unreachable"

    settings = get_settings()
    return HealthResponse(
        status="ok" if database == "ok" else "degraded",
        checked_at=datetime.now(),
        database=database,
        cached_rate_years=cache.years(),
        meal_break=MealBreakDefaults(
            break_after_hours=settings.break_after_hours,
            break_duration_minutes=settings.break_duration_minutes,
        ),
    )


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
