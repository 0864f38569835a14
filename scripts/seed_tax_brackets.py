"""Seed script for income tax brackets.

Run with:
    python scripts/seed_tax_brackets.py [tax_year]

Creates the tables if needed and inserts the active ruleset's brackets for
the tax year. Rows that already exist are left alone, so the script can be
re-run safely.
"""

from __future__ import annotations

import asyncio
import sys

from award_payroll.calculators.rulesets import active_ruleset
from award_payroll.calculators.tax_brackets import TaxBracketTable
from award_payroll.config import configure_logging
from award_payroll.database import create_all, get_session
from award_payroll.services.payroll_store import SqlPayrollStore


async def main(tax_year: int | None = None) -> None:
    """Run all seed functions."""
    ruleset = active_ruleset()
    year = tax_year or ruleset.tax_year

    print("Creating tables...")
    await create_all()

    print(f"Seeding tax brackets for {year} from ruleset {ruleset.version}...")
    async with get_session() as session:
        table = TaxBracketTable(SqlPayrollStore(session), ruleset)
        inserted = await table.seed_defaults(year)
        brackets = await table.brackets_for(year)

    print(f"Inserted {inserted} rows; {len(brackets)} brackets now configured:")
    for b in brackets:
        upper = b.max_income if b.max_income is not None else "and over"
        print(f"  {b.min_income} - {upper}: {b.tax_rate} (base {b.base_tax})")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else None))
