"""Award payroll command line interface.

Provides operational tools for:
- Pay period boundaries
- Pricing a single shift
- Estimating withholding for an annual income
- Seeding the tax bracket table

Usage:
    python -m award_payroll.cli pay-period --date 2025-07-09
    python -m award_payroll.cli next-period --current-end 2025-07-20T23:59:59
    python -m award_payroll.cli shift --start 2025-07-12T09:00 --end 2025-07-12T17:00 --rate 35 --weekend
    python -m award_payroll.cli withholding --annual-income 41600
    python -m award_payroll.cli seed-brackets --tax-year 2025
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable

from award_payroll.calculators.pay_periods import current_period, next_period
from award_payroll.calculators.rulesets import AwardRuleset, active_ruleset, load_ruleset
from award_payroll.calculators.shift_allowances import ShiftAllowanceCalculator, classify_shift
from award_payroll.calculators.tax_brackets import TaxBracketTable, validate_brackets
from award_payroll.calculators.tax_calculator import annual_tax
from award_payroll.calculators.types import PayPeriod, Shift
from award_payroll.config import configure_logging
from award_payroll.exceptions import PayrollError
from award_payroll.money import ZERO, require_non_negative, round_money


def parse_datetime(s: str) -> datetime:
    """Parse ISO datetime string."""
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def parse_date(s: str) -> date:
    """Parse ISO date string."""
    return date.fromisoformat(s)


def parse_decimal(s: str) -> Decimal:
    """Parse a non-negative decimal argument."""
    try:
        return require_non_negative(s)
    except PayrollError as e:
        raise argparse.ArgumentTypeError(str(e))


def _json_default(value: Any) -> Any:
    if isinstance(value, (Decimal, datetime, date)):
        return str(value)
    raise TypeError(f"Cannot serialize {type(value).__name__}")


class PayrollCli:
    """Award payroll command line interface."""

    def __init__(self) -> None:
        self.parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        """Build argument parser."""
        parser = argparse.ArgumentParser(
            prog="python -m award_payroll.cli",
            description="Award payroll operational tools",
        )
        parser.add_argument(
            "--ruleset",
            type=str,
            help="Path to a JSON ruleset (defaults to the configured ruleset)",
        )
        parser.add_argument("--log-level", type=str, default="WARNING")
        subparsers = parser.add_subparsers(dest="command", help="Commands")

        # pay-period command
        period = subparsers.add_parser(
            "pay-period",
            help="Show the fortnightly pay period containing a date",
        )
        period.add_argument(
            "--date",
            type=parse_date,
            default=None,
            help="Reference date (ISO format, default today)",
        )

        # next-period command
        following = subparsers.add_parser(
            "next-period",
            help="Show the pay period after one ending at a timestamp",
        )
        following.add_argument(
            "--current-end",
            type=parse_datetime,
            required=True,
            help="End of the current pay period (ISO format)",
        )

        # shift command
        shift = subparsers.add_parser(
            "shift",
            help="Price a shift with award penalties and allowances",
        )
        shift.add_argument("--start", type=parse_datetime, required=True)
        shift.add_argument("--end", type=parse_datetime, required=True)
        shift.add_argument("--rate", type=parse_decimal, required=True, help="Base hourly rate")
        shift.add_argument("--public-holiday", action="store_true")
        shift.add_argument("--weekend", action="store_true")
        shift.add_argument("--sleepover", action="store_true")
        shift.add_argument(
            "--unpaid-break",
            type=parse_decimal,
            default=ZERO,
            help="Unpaid break hours inside the shift",
        )

        # withholding command
        withholding = subparsers.add_parser(
            "withholding",
            help="Estimate per-period withholding from the ruleset's default brackets",
        )
        withholding.add_argument("--annual-income", type=parse_decimal, required=True)

        # seed-brackets command
        seed = subparsers.add_parser(
            "seed-brackets",
            help="Insert the ruleset's default tax brackets if absent",
        )
        seed.add_argument("--tax-year", type=int, default=None)

        return parser

    def run(self, args: list[str] | None = None) -> int:
        """Run the CLI with given arguments."""
        parsed = self.parser.parse_args(args)
        configure_logging(parsed.log_level.upper())

        if not parsed.command:
            self.parser.print_help()
            return 1

        handlers: dict[str, Callable[..., int]] = {
            "pay-period": self._cmd_pay_period,
            "next-period": self._cmd_next_period,
            "shift": self._cmd_shift,
            "withholding": self._cmd_withholding,
            "seed-brackets": self._cmd_seed_brackets,
        }

        handler = handlers.get(parsed.command)
        if handler is None:
            print(f"Unknown command: {parsed.command}", file=sys.stderr)
            return 1

        try:
            return handler(parsed)
        except PayrollError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    def _ruleset(self, args: argparse.Namespace) -> AwardRuleset:
        if args.ruleset:
            return load_ruleset(args.ruleset)
        return active_ruleset()

    def _print(self, payload: dict[str, Any]) -> None:
        print(json.dumps(payload, indent=2, default=_json_default))

    def _print_period(self, period: PayPeriod) -> None:
        self._print({"start": period.start.isoformat(), "end": period.end.isoformat()})

    def _cmd_pay_period(self, args: argparse.Namespace) -> int:
        """Show the current pay period."""
        self._print_period(current_period(args.date or date.today()))
        return 0

    def _cmd_next_period(self, args: argparse.Namespace) -> int:
        """Show the following pay period."""
        self._print_period(next_period(args.current_end))
        return 0

    def _cmd_shift(self, args: argparse.Namespace) -> int:
        """Price one shift."""
        shift = Shift(
            start_time=args.start,
            end_time=args.end,
            base_rate=args.rate,
            is_public_holiday=args.public_holiday,
            is_weekend=args.weekend,
            is_sleepover=args.sleepover,
            unpaid_break_hours=args.unpaid_break,
        )
        result = ShiftAllowanceCalculator(self._ruleset(args)).allowances(shift)
        self._print({
            "shift_type": classify_shift(shift.start_time, shift.end_time).value,
            "hours": result.hours,
            "base_payment": result.base_payment,
            "allowances": [
                {"type": a.type.value, "amount": a.amount, "description": a.description}
                for a in result.allowances
            ],
            "total_payment": result.total_payment,
        })
        return 0

    def _cmd_withholding(self, args: argparse.Namespace) -> int:
        """Estimate withholding without a database."""
        ruleset = self._ruleset(args)
        brackets = list(ruleset.tax_brackets)
        validate_brackets(ruleset.tax_year, brackets)

        income = args.annual_income
        if income <= ruleset.tax_free_threshold:
            yearly = ZERO
        else:
            yearly = annual_tax(income, brackets)
        self._print({
            "tax_year": ruleset.tax_year,
            "annual_income": income,
            "annual_tax": yearly,
            "per_period": round_money(yearly / Decimal(ruleset.pay_periods_per_year)),
        })
        return 0

    def _cmd_seed_brackets(self, args: argparse.Namespace) -> int:
        """Seed the bracket table in the configured database."""
        ruleset = self._ruleset(args)
        inserted = asyncio.run(_seed_brackets(ruleset, args.tax_year or ruleset.tax_year))
        print(f"Inserted {inserted} brackets for tax year {args.tax_year or ruleset.tax_year}")
        return 0


async def _seed_brackets(ruleset: AwardRuleset, tax_year: int) -> int:
    from award_payroll.database import get_session
    from award_payroll.services.payroll_store import SqlPayrollStore

    async with get_session() as session:
        table = TaxBracketTable(SqlPayrollStore(session), ruleset)
        return await table.seed_defaults(tax_year)


def main() -> int:
    """CLI entry point."""
    cli = PayrollCli()
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
