"""Shift pricing endpoints."""

from fastapi import APIRouter

from award_payroll.api.dependencies import Ruleset
from award_payroll.api.schemas import (
    AllowanceResponse,
    ErrorResponse,
    ShiftAllowanceResponse,
    ShiftRequest,
    ShiftTotalsRequest,
    ShiftTotalsResponse,
)
from award_payroll.calculators.shift_allowances import ShiftAllowanceCalculator, classify_shift
from award_payroll.calculators.types import Shift

router = APIRouter(prefix="/shifts", tags=["shifts"])


def _to_shift(payload: ShiftRequest) -> Shift:
    return Shift(
        start_time=payload.start_time,
        end_time=payload.end_time,
        base_rate=payload.base_rate,
        is_public_holiday=payload.is_public_holiday,
        is_weekend=payload.is_weekend,
        is_sleepover=payload.is_sleepover,
        unpaid_break_hours=payload.unpaid_break_hours,
    )


@router.post(
    "/allowances",
    response_model=ShiftAllowanceResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_shift_allowances(
    ruleset: Ruleset,
    payload: ShiftRequest,
) -> ShiftAllowanceResponse:
    """Price a single shift under the award."""
    shift = _to_shift(payload)
    result = ShiftAllowanceCalculator(ruleset).allowances(shift)
    return ShiftAllowanceResponse(
        shift_type=classify_shift(shift.start_time, shift.end_time).value,
        hours=result.hours,
        span_hours=result.span_hours,
        base_payment=result.base_payment,
        allowances=[
            AllowanceResponse(type=a.type.value, amount=a.amount, description=a.description)
            for a in result.allowances
        ],
        total_payment=result.total_payment,
    )


@router.post(
    "/totals",
    response_model=ShiftTotalsResponse,
    responses={422: {"model": ErrorResponse}},
)
async def calculate_shift_totals(
    ruleset: Ruleset,
    payload: ShiftTotalsRequest,
) -> ShiftTotalsResponse:
    """Total hours and earnings for a pay period's shifts."""
    totals = ShiftAllowanceCalculator(ruleset).period_totals(
        _to_shift(s) for s in payload.shifts
    )
    return ShiftTotalsResponse.model_validate(totals)
