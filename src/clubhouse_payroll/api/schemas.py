"""Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


# ============================================================================
# Payroll report schemas
# ============================================================================


class ShiftSpan(BaseModel):
    """An on duty / off duty pair, formatted for display."""

    on_duty: str
    off_duty: str


class MealAdjustment(BaseModel):
    """A shift split around an unpaid meal break."""

    first_half: ShiftSpan
    second_half: ShiftSpan


class PayrollShiftResponse(BaseModel):
    """A single shift clipped to the pay period."""

    id: int
    position_id: int
    position_title: str
    paycode: str | None = None
    verified: bool
    orig_on_duty: str
    orig_off_duty: str
    orig_duration: int
    on_duty: str
    off_duty: str
    duration: int
    still_on_duty: bool | None = None
    meal_adjusted: MealAdjustment | None = None
    notes: str


class PayrollPersonResponse(BaseModel):
    """A person and their shifts for the period."""

    id: int
    callsign: str
    first_name: str
    last_name: str
    email: str | None = None
    employee_id: str | None = None
    shifts: list[PayrollShiftResponse]


class PayrollReportResponse(BaseModel):
    """Payroll report split by employee id presence."""

    people: list[PayrollPersonResponse]
    people_without_ids: list[PayrollPersonResponse]


# ============================================================================
# Position credit schemas
# ============================================================================


class PositionCreditResponse(BaseModel):
    """A credit rate window for a position."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    position_id: int
    credits_per_hour: float
    start_time: datetime
    end_time: datetime
    description: str


class PositionCreditListResponse(BaseModel):
    """Credit rates for a year."""

    year: int
    items: list[PositionCreditResponse]
    total: int


class CreditComputationResponse(BaseModel):
    """Credits earned by a span of work in a position."""

    position_id: int
    on_duty: datetime
    off_duty: datetime
    year: int
    credits: float


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error response."""

    detail: str
    code: str | None = None
