"""Pay period endpoints."""

from datetime import date, datetime
from typing import Annotated

from fastapi import APIRouter, Query

from award_payroll.api.schemas import PayPeriodResponse
from award_payroll.calculators.pay_periods import current_period, next_period

router = APIRouter(prefix="/pay-periods", tags=["pay-periods"])


@router.get("/current", response_model=PayPeriodResponse)
async def get_current_pay_period(
    reference: Annotated[date | None, Query(alias="date")] = None,
) -> PayPeriodResponse:
    """Fortnightly pay period containing a date (default today)."""
    return PayPeriodResponse.model_validate(current_period(reference or date.today()))


@router.get("/next", response_model=PayPeriodResponse)
async def get_next_pay_period(
    current_end: Annotated[datetime, Query()],
) -> PayPeriodResponse:
    """Pay period following one that ends at ``current_end``."""
    return PayPeriodResponse.model_validate(next_period(current_end))
