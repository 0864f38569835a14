"""Leave accrual from hours worked."""

from __future__ import annotations

import logging
from decimal import Decimal

from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.types import EmploymentType, LeaveAccrual
from award_payroll.money import require_non_negative

logger = logging.getLogger(__name__)


class LeaveAccrualCalculator:
    """Accrues annual, sick, personal and long-service leave per hour worked."""

    def __init__(self, ruleset: AwardRuleset):
        self.ruleset = ruleset

    def resolve_employment_type(self, raw: str | EmploymentType | None) -> EmploymentType:
        """Map a stored employment type to a known one.

        Missing or unrecognized values take the casual (zero accrual) row.
        """
        if isinstance(raw, EmploymentType):
            return raw
        resolved = EmploymentType.from_raw(raw)
        if not EmploymentType.is_valid(raw):
            logger.warning(
                "Unrecognized employment type %r, accruing leave as %s",
                raw,
                resolved.value,
            )
        return resolved

    def accrual(
        self, employment_type: str | EmploymentType | None, hours_worked: Decimal
    ) -> LeaveAccrual:
        """Leave hours accrued for ``hours_worked``.

        Amounts are exact products, so accrual is linear in hours.
        """
        hours = require_non_negative(hours_worked, "hours_worked")
        rates = self.ruleset.leave_rates_for(self.resolve_employment_type(employment_type))
        return LeaveAccrual(
            annual=hours * rates.annual,
            sick=hours * rates.sick,
            personal=hours * rates.personal,
            long_service=hours * rates.long_service,
        )
