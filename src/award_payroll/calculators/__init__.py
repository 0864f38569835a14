"""Payroll and award calculation engine."""

from award_payroll.calculators.engine import PayrollCalculator
from award_payroll.calculators.leave_accrual import LeaveAccrualCalculator
from award_payroll.calculators.pay_periods import current_period, next_period
from award_payroll.calculators.rate_resolver import RateResolver
from award_payroll.calculators.rulesets import AwardRuleset, SCHADS_2024_25, active_ruleset
from award_payroll.calculators.shift_allowances import ShiftAllowanceCalculator
from award_payroll.calculators.tax_brackets import TaxBracketTable
from award_payroll.calculators.tax_calculator import TaxWithholdingCalculator
from award_payroll.calculators.ytd import YTDAggregator

__all__ = [
    "AwardRuleset",
    "LeaveAccrualCalculator",
    "PayrollCalculator",
    "RateResolver",
    "SCHADS_2024_25",
    "ShiftAllowanceCalculator",
    "TaxBracketTable",
    "TaxWithholdingCalculator",
    "YTDAggregator",
    "active_ruleset",
    "current_period",
    "next_period",
]
