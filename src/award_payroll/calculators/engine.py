"""Payroll calculation engine - main orchestrator."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from award_payroll.calculators.leave_accrual import LeaveAccrualCalculator
from award_payroll.calculators.rate_resolver import RateResolver
from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.tax_brackets import TaxBracketTable
from award_payroll.calculators.tax_calculator import TaxWithholdingCalculator
from award_payroll.calculators.types import PayrollCalculation
from award_payroll.calculators.ytd import YTDAggregator
from award_payroll.exceptions import ConfigurationError, NotFoundError
from award_payroll.money import money_mul, require_non_negative, round_money, to_money

if TYPE_CHECKING:
    from award_payroll.services.payroll_store import PayrollStore

logger = logging.getLogger(__name__)

HOURS_QUANTUM = Decimal("0.01")


class PayrollCalculator:
    """Calculates one employee's pay for one pay period.

    Calculation pipeline:
    1) Load employee (NotFoundError if absent in the tenant)
    2) Recompute live YTD gross from paid timesheets
    3) Withhold tax on annualized income: YTD including this period,
       multiplied by the pay periods in a year
    4) Medicare levy on gross
    5) Superannuation on ordinary time earnings (all of gross)
    6) Net = gross - tax - levy
    7) Hours worked = gross / resolved hourly rate
    8) Leave accrued for those hours

    Leave balances are not written here; callers commit the accrual with
    ``LeaveBalanceService.update_leave_balances`` when they finalize the run.
    """

    def __init__(self, store: PayrollStore, ruleset: AwardRuleset):
        self.store = store
        self.ruleset = ruleset
        self.ytd = YTDAggregator(store)
        self.bracket_table = TaxBracketTable(store, ruleset)
        self.tax_calculator = TaxWithholdingCalculator(self.bracket_table, ruleset)
        self.rate_resolver = RateResolver(store, ruleset)
        self.leave_calculator = LeaveAccrualCalculator(ruleset)

    async def calculate(
        self,
        user_id: UUID,
        tenant_id: UUID,
        gross_pay: Decimal,
        as_of: date | datetime | None = None,
    ) -> PayrollCalculation:
        """Calculate pay for an employee.

        Args:
            user_id: Employee ID
            tenant_id: Tenant the employee belongs to
            gross_pay: Gross pay for the period
            as_of: Date the YTD window ends; defaults to today

        Raises:
            NotFoundError: If the employee does not exist in the tenant
            ValidationError: If gross pay or a resolved rate is unusable
            ConfigurationError: If the tax bracket table is unusable
        """
        gross = to_money(require_non_negative(gross_pay, "gross_pay"), "gross_pay")
        as_of = as_of or date.today()

        # 1) Employee
        employee = await self.store.get_employee(user_id, tenant_id)
        if employee is None:
            raise NotFoundError(user_id, tenant_id)

        # 2) Live YTD from the paid-timesheet ledger
        live_ytd = await self.ytd.live_year_to_date_gross(user_id, tenant_id, as_of)

        # 3) Tax on annualized YTD
        total_ytd = round_money(live_ytd + gross)
        annualized = self.annualized_income(total_ytd)
        tax_withheld = await self.tax_calculator.withholding(annualized, gross)

        # 4-6) Levy, super, net
        medicare_levy = money_mul(gross, self.ruleset.medicare_levy_rate)
        ordinary_time_earnings = gross
        super_contribution = money_mul(ordinary_time_earnings, self.ruleset.super_guarantee_rate)
        net_pay = round_money(gross - tax_withheld - medicare_levy)

        # 7) Hours from the resolved rate
        rate = await self.rate_resolver.resolve(employee)
        if rate.hourly_rate <= 0:
            raise ConfigurationError(
                f"Hourly rate {rate.hourly_rate} from {rate.source.value} must be positive"
            )
        hours_worked = (gross / rate.hourly_rate).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)

        # 8) Leave
        employment_type = self.leave_calculator.resolve_employment_type(employee.employment_type)
        leave_accrued = self.leave_calculator.accrual(employment_type, hours_worked)

        logger.info(
            "Calculated payroll for user %s tenant %s: gross %s tax %s levy %s net %s",
            user_id,
            tenant_id,
            gross,
            tax_withheld,
            medicare_levy,
            net_pay,
        )

        return PayrollCalculation(
            gross_pay=gross,
            tax_withheld=tax_withheld,
            medicare_levy=medicare_levy,
            super_contribution=super_contribution,
            net_pay=net_pay,
            leave_accrued=leave_accrued,
            hours_worked=hours_worked,
            year_to_date_gross=live_ytd,
            annualized_income=annualized,
            hourly_rate=rate.hourly_rate,
            rate_source=rate.source,
            employment_type=employment_type,
            ruleset_version=self.ruleset.version,
        )

    def annualized_income(self, total_ytd: Decimal) -> Decimal:
        """Annual income implied by YTD gross including the current period."""
        periods = self.ruleset.pay_periods_per_year
        if periods <= 0:
            raise ConfigurationError(f"pay_periods_per_year must be positive, got {periods}")
        return round_money(total_ytd * periods)
