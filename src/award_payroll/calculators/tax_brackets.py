"""Progressive tax bracket table with lazy seeding."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.types import TaxBracket
from award_payroll.exceptions import ConfigurationError

if TYPE_CHECKING:
    from award_payroll.services.payroll_store import PayrollStore

logger = logging.getLogger(__name__)


def validate_brackets(tax_year: int, brackets: Sequence[TaxBracket]) -> None:
    """Check the brackets cover [0, infinity) with no gaps or overlaps.

    Raises:
        ConfigurationError: If the table is empty, does not start at zero,
            has a gap or overlap, or does not end in exactly one unbounded
            bracket.
    """
    if not brackets:
        raise ConfigurationError(f"No tax brackets configured for tax year {tax_year}")

    if brackets[0].min_income != 0:
        raise ConfigurationError(
            f"Tax year {tax_year}: first bracket starts at {brackets[0].min_income}, not 0"
        )

    for i, bracket in enumerate(brackets):
        if bracket.tax_rate < 0 or bracket.tax_rate > 1:
            raise ConfigurationError(
                f"Tax year {tax_year}: rate {bracket.tax_rate} outside [0, 1]"
            )
        if bracket.base_tax < 0:
            raise ConfigurationError(
                f"Tax year {tax_year}: negative base tax {bracket.base_tax}"
            )

        is_last = i == len(brackets) - 1
        if bracket.max_income is None:
            if not is_last:
                raise ConfigurationError(
                    f"Tax year {tax_year}: unbounded bracket at {bracket.min_income} "
                    "is not the top bracket"
                )
            continue

        if bracket.max_income <= bracket.min_income:
            raise ConfigurationError(
                f"Tax year {tax_year}: empty bracket {bracket.min_income}-{bracket.max_income}"
            )
        if is_last:
            raise ConfigurationError(
                f"Tax year {tax_year}: top bracket ends at {bracket.max_income}; "
                "income above it would be untaxed"
            )
        following = brackets[i + 1]
        if following.min_income != bracket.max_income:
            raise ConfigurationError(
                f"Tax year {tax_year}: bracket ending {bracket.max_income} is followed "
                f"by one starting {following.min_income}"
            )


class TaxBracketTable:
    """Loads the bracket table for a tax year, seeding defaults on first use."""

    def __init__(self, store: PayrollStore, ruleset: AwardRuleset):
        self.store = store
        self.ruleset = ruleset
        self._cache: dict[int, list[TaxBracket]] = {}

    async def brackets_for(self, tax_year: int | None = None) -> list[TaxBracket]:
        """Get validated brackets for a tax year, ordered by min income.

        Raises:
            ConfigurationError: If seeding yields no rows or the stored
                table is incomplete.
        """
        year = tax_year if tax_year is not None else self.ruleset.tax_year
        if year in self._cache:
            return self._cache[year]

        brackets = await self.store.get_tax_brackets(year)
        if not brackets:
            await self.seed_defaults(year)
            brackets = await self.store.get_tax_brackets(year)
            if not brackets:
                raise ConfigurationError(
                    f"Tax brackets for tax year {year} could not be seeded"
                )

        brackets = sorted(brackets, key=lambda b: b.min_income)
        validate_brackets(year, brackets)
        self._cache[year] = brackets
        return brackets

    async def seed_defaults(self, tax_year: int) -> int:
        """Insert the ruleset's default brackets if the year has none.

        Safe under concurrent first access: rows another caller already
        inserted are skipped.
        """
        if tax_year != self.ruleset.tax_year:
            logger.warning(
                "No default brackets for tax year %s; ruleset %s covers %s",
                tax_year,
                self.ruleset.version,
                self.ruleset.tax_year,
            )
            return 0

        defaults = list(self.ruleset.tax_brackets)
        validate_brackets(tax_year, defaults)
        inserted = await self.store.insert_tax_brackets(tax_year, defaults)
        if inserted:
            logger.info(
                "Seeded %d tax brackets for tax year %s from ruleset %s",
                inserted,
                tax_year,
                self.ruleset.version,
            )
        else:
            logger.info("Tax brackets for tax year %s already seeded", tax_year)
        return inserted
