"""Payroll calculation and leave balance endpoints."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from award_payroll.api.dependencies import DbSession, Ruleset, Store, TenantId
from award_payroll.api.schemas import (
    ErrorResponse,
    LeaveAccrualSchema,
    LeaveBalanceResponse,
    LeaveBalanceUpdateRequest,
    PayrollCalculateRequest,
    PayrollCalculationResponse,
)
from award_payroll.calculators.engine import PayrollCalculator
from award_payroll.calculators.types import LeaveAccrual, PayrollCalculation
from award_payroll.services.leave_service import LeaveBalanceService

router = APIRouter(prefix="/payroll", tags=["payroll"])


def _to_response(result: PayrollCalculation) -> PayrollCalculationResponse:
    return PayrollCalculationResponse(
        gross_pay=result.gross_pay,
        tax_withheld=result.tax_withheld,
        medicare_levy=result.medicare_levy,
        super_contribution=result.super_contribution,
        net_pay=result.net_pay,
        leave_accrued=LeaveAccrualSchema.model_validate(result.leave_accrued),
        hours_worked=result.hours_worked,
        year_to_date_gross=result.year_to_date_gross,
        annualized_income=result.annualized_income,
        hourly_rate=result.hourly_rate,
        rate_source=result.rate_source.value,
        employment_type=result.employment_type.value,
        ruleset_version=result.ruleset_version,
    )


@router.post(
    "/calculate",
    response_model=PayrollCalculationResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def calculate_payroll(
    db: DbSession,
    store: Store,
    tenant_id: TenantId,
    ruleset: Ruleset,
    payload: PayrollCalculateRequest,
) -> PayrollCalculationResponse:
    """Calculate an employee's pay for one period.

    Leave is not committed; POST the returned accrual to
    ``/payroll/leave-balances`` once the run is finalized.
    """
    calculator = PayrollCalculator(store, ruleset)
    result = await calculator.calculate(
        payload.user_id, tenant_id, payload.gross_pay, as_of=payload.as_of
    )
    # Bracket seeding may have written rows
    await db.commit()
    return _to_response(result)


@router.post(
    "/leave-balances",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={422: {"model": ErrorResponse}},
)
async def update_leave_balances(
    db: DbSession,
    store: Store,
    tenant_id: TenantId,
    payload: LeaveBalanceUpdateRequest,
) -> None:
    """Add accrued leave to an employee's balance."""
    accrued = payload.leave_accrued
    await LeaveBalanceService(store).update_leave_balances(
        payload.user_id,
        tenant_id,
        LeaveAccrual(
            annual=accrued.annual,
            sick=accrued.sick,
            personal=accrued.personal,
            long_service=accrued.long_service,
        ),
    )
    await db.commit()


@router.get(
    "/leave-balances/{user_id}",
    response_model=LeaveBalanceResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_leave_balance(
    store: Store,
    tenant_id: TenantId,
    user_id: UUID,
) -> LeaveBalanceResponse:
    """Get an employee's accumulated leave."""
    balance = await LeaveBalanceService(store).get_balance(user_id, tenant_id)
    if balance is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No leave balance for employee {user_id}",
        )
    return LeaveBalanceResponse.model_validate(balance)
