"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Shared schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Error body returned for domain failures."""

    detail: str
    code: str


class LeaveAccrualSchema(BaseModel):
    """Leave hours by category."""

    model_config = ConfigDict(from_attributes=True)

    annual: Decimal = Decimal("0")
    sick: Decimal = Decimal("0")
    personal: Decimal = Decimal("0")
    long_service: Decimal = Decimal("0")


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollCalculateRequest(BaseModel):
    """Schema for calculating one employee's pay period."""

    user_id: UUID
    gross_pay: Decimal
    as_of: date | None = None


class PayrollCalculationResponse(BaseModel):
    """Schema for a payroll calculation result."""

    model_config = ConfigDict(from_attributes=True)

    gross_pay: Decimal
    tax_withheld: Decimal
    medicare_levy: Decimal
    super_contribution: Decimal
    net_pay: Decimal
    leave_accrued: LeaveAccrualSchema
    hours_worked: Decimal
    year_to_date_gross: Decimal
    annualized_income: Decimal
    hourly_rate: Decimal
    rate_source: str
    employment_type: str
    ruleset_version: str


class LeaveBalanceUpdateRequest(BaseModel):
    """Schema for committing accrued leave."""

    user_id: UUID
    leave_accrued: LeaveAccrualSchema


class LeaveBalanceResponse(BaseModel):
    """Schema for a stored leave balance."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID
    tenant_id: UUID
    annual_leave: Decimal
    sick_leave: Decimal
    personal_leave: Decimal
    long_service_leave: Decimal
    last_updated: datetime | None = None


# ============================================================================
# Shift schemas
# ============================================================================


class ShiftRequest(BaseModel):
    """Schema for a shift to price."""

    start_time: datetime
    end_time: datetime
    base_rate: Decimal
    is_public_holiday: bool = False
    is_weekend: bool = False
    is_sleepover: bool = False
    unpaid_break_hours: Decimal = Decimal("0")


class AllowanceResponse(BaseModel):
    """Schema for one allowance line."""

    type: str
    amount: Decimal
    description: str


class ShiftAllowanceResponse(BaseModel):
    """Schema for a priced shift."""

    shift_type: str
    hours: Decimal
    span_hours: Decimal
    base_payment: Decimal
    allowances: list[AllowanceResponse]
    total_payment: Decimal


class ShiftTotalsRequest(BaseModel):
    """Schema for pricing every shift in a pay period."""

    shifts: list[ShiftRequest] = Field(default_factory=list)


class ShiftTotalsResponse(BaseModel):
    """Schema for pay period shift totals."""

    model_config = ConfigDict(from_attributes=True)

    shift_count: int
    total_hours: Decimal
    total_base: Decimal
    total_allowances: Decimal
    total_earnings: Decimal


# ============================================================================
# Pay period schemas
# ============================================================================


class PayPeriodResponse(BaseModel):
    """Schema for a fortnightly pay period."""

    model_config = ConfigDict(from_attributes=True)

    start: datetime
    end: datetime
