"""PAYG-style income tax withholding."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Sequence

from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.tax_brackets import TaxBracketTable
from award_payroll.calculators.types import TaxBracket
from award_payroll.exceptions import ConfigurationError
from award_payroll.money import ZERO, require_non_negative, round_money

logger = logging.getLogger(__name__)


def annual_tax(annual_income: Decimal, brackets: Sequence[TaxBracket]) -> Decimal:
    """Annual tax on ``annual_income`` from a cumulative bracket table.

    Only the highest bracket whose minimum is below the income contributes:
    its ``base_tax`` already covers everything beneath it.
    """
    if annual_income <= 0:
        return ZERO

    selected: TaxBracket | None = None
    for bracket in sorted(brackets, key=lambda b: b.min_income):
        if annual_income > bracket.min_income:
            selected = bracket

    if selected is None:
        return ZERO

    upper = annual_income if selected.max_income is None else min(annual_income, selected.max_income)
    tax = selected.base_tax + (upper - selected.min_income) * selected.tax_rate
    return round_money(tax)


class TaxWithholdingCalculator:
    """Converts annualized income into a per-pay-period withholding.

    Withholding is estimated from annualized income, in the manner of
    simplified PAYG withholding tables, rather than reconciled marginally
    each period.
    """

    def __init__(self, bracket_table: TaxBracketTable, ruleset: AwardRuleset):
        self.bracket_table = bracket_table
        self.ruleset = ruleset

    async def withholding(
        self,
        annual_income: Decimal,
        pay_period_gross: Decimal,
        tax_year: int | None = None,
    ) -> Decimal:
        """Tax to withhold from one pay period.

        Args:
            annual_income: Annualized income the period's rate implies
            pay_period_gross: Gross pay for the period being taxed
            tax_year: Bracket year; defaults to the ruleset's

        Returns:
            Withholding rounded to the cent

        Raises:
            ValidationError: If either amount is negative or not finite
            ConfigurationError: If no usable bracket table exists
        """
        annual_income = require_non_negative(annual_income, "annual_income")
        pay_period_gross = require_non_negative(pay_period_gross, "pay_period_gross")

        if annual_income <= self.ruleset.tax_free_threshold:
            return ZERO

        brackets = await self.bracket_table.brackets_for(tax_year)
        yearly = annual_tax(annual_income, brackets)

        periods = self.ruleset.pay_periods_per_year
        if periods <= 0:
            raise ConfigurationError(
                f"Ruleset {self.ruleset.version} has {periods} pay periods per year"
            )
        per_period = round_money(yearly / Decimal(periods))

        logger.debug(
            "Withholding %s on period gross %s (annual income %s, annual tax %s)",
            per_period,
            pay_period_gross,
            annual_income,
            yearly,
        )
        return per_period
