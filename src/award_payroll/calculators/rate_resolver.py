"""Hourly rate resolution from award pay scales."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.types import RateSource, ResolvedRate
from award_payroll.exceptions import ValidationError
from award_payroll.money import to_decimal

if TYPE_CHECKING:
    from award_payroll.models import Employee
    from award_payroll.services.payroll_store import PayrollStore

logger = logging.getLogger(__name__)

DEFAULT_LEVEL = 1
DEFAULT_PAY_POINT = 1


class RateResolver:
    """Resolves an employee's hourly rate.

    Rate selection:
    1. Pay scale row for (tenant, level, pay point); a missing level or
       point is treated as 1
    2. Otherwise the ruleset's statutory minimum hourly wage
    """

    def __init__(self, store: PayrollStore, ruleset: AwardRuleset):
        self.store = store
        self.ruleset = ruleset

    async def resolve(self, employee: Employee) -> ResolvedRate:
        """Resolve the hourly rate for an employee.

        Raises:
            ValidationError: If the matched pay scale has a non-positive rate
        """
        level = employee.pay_level or DEFAULT_LEVEL
        pay_point = employee.pay_point or DEFAULT_PAY_POINT

        scale = await self.store.get_pay_scale(employee.tenant_id, level, pay_point)
        if scale is None:
            logger.warning(
                "No pay scale for tenant %s level %s point %s; using minimum wage %s",
                employee.tenant_id,
                level,
                pay_point,
                self.ruleset.minimum_hourly_wage,
            )
            return ResolvedRate(
                hourly_rate=self.ruleset.minimum_hourly_wage,
                source=RateSource.MINIMUM_WAGE_FALLBACK,
                level=level,
                pay_point=pay_point,
            )

        rate = to_decimal(scale.hourly_rate, "hourly_rate")
        if rate <= 0:
            raise ValidationError("hourly_rate", scale.hourly_rate, "must be positive")
        return ResolvedRate(
            hourly_rate=rate,
            source=RateSource.PAY_SCALE,
            level=level,
            pay_point=pay_point,
        )
