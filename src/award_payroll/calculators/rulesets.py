"""Versioned award and tax rulesets.

Every rate, threshold and flat allowance used by the calculators lives on an
``AwardRuleset``. Award and tax updates ship as a new ruleset (built in or
loaded from JSON) rather than as code changes.

JSON layout accepted by :func:`load_ruleset`::

    {
        "version": "schads-2025-26",
        "tax_year": 2026,
        "tax_free_threshold": "18200",
        "pay_periods_per_year": 26,
        "medicare_levy_rate": "0.02",
        "super_guarantee_rate": "0.115",
        "minimum_hourly_wage": "24.10",
        "public_holiday_loading": "1.5",
        "saturday_loading": "0.25",
        "sunday_loading": "0.5",
        "sleepover_allowance": "62.42",
        "broken_shift_allowance": "21.65",
        "broken_shift_min_span_hours": "10",
        "broken_shift_max_paid_hours": "9",
        "leave_accrual_rates": {
            "full-time": {"annual": "0.0769", "sick": "0.0384", ...},
            ...
        },
        "tax_brackets": [
            {"min": 0, "max": 18200, "rate": 0, "base": 0},
            ...
        ]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from pathlib import Path
from typing import Any, Mapping

from award_payroll.calculators.types import EmploymentType, LeaveAccrualRates, TaxBracket
from award_payroll.config import get_settings
from award_payroll.exceptions import ConfigurationError, ValidationError
from award_payroll.money import require_non_negative

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AwardRuleset:
    """Immutable set of award, tax and leave constants."""

    version: str
    tax_year: int
    tax_free_threshold: Decimal
    pay_periods_per_year: int
    medicare_levy_rate: Decimal
    super_guarantee_rate: Decimal
    minimum_hourly_wage: Decimal

    # Penalty loadings are the additional fraction of base pay
    public_holiday_loading: Decimal
    saturday_loading: Decimal
    sunday_loading: Decimal

    sleepover_allowance: Decimal
    broken_shift_allowance: Decimal
    broken_shift_min_span_hours: Decimal
    broken_shift_max_paid_hours: Decimal

    leave_accrual_rates: Mapping[EmploymentType, LeaveAccrualRates] = field(
        default_factory=dict
    )
    tax_brackets: tuple[TaxBracket, ...] = ()

    def leave_rates_for(self, employment_type: EmploymentType) -> LeaveAccrualRates:
        """Accrual rates for a type; CASUAL's row when the type has none."""
        rates = self.leave_accrual_rates.get(employment_type)
        if rates is None:
            return self.leave_accrual_rates.get(EmploymentType.CASUAL, LeaveAccrualRates())
        return rates

    def with_overrides(self, **changes: Any) -> AwardRuleset:
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> AwardRuleset:
        """Build a ruleset from a JSON-style mapping."""
        try:
            leave_rates = {
                EmploymentType(kind): LeaveAccrualRates(
                    annual=_rate(rates, "annual"),
                    sick=_rate(rates, "sick"),
                    personal=_rate(rates, "personal"),
                    long_service=_rate(rates, "long_service"),
                )
                for kind, rates in payload.get("leave_accrual_rates", {}).items()
            }
            brackets = tuple(
                TaxBracket(
                    min_income=require_non_negative(b["min"], "min"),
                    max_income=(
                        require_non_negative(b["max"], "max")
                        if b.get("max") is not None
                        else None
                    ),
                    tax_rate=require_non_negative(b["rate"], "rate"),
                    base_tax=require_non_negative(b.get("base", 0), "base"),
                )
                for b in payload.get("tax_brackets", [])
            )
            return cls(
                version=str(payload["version"]),
                tax_year=int(payload["tax_year"]),
                tax_free_threshold=_amount(payload, "tax_free_threshold"),
                pay_periods_per_year=_positive_int(payload, "pay_periods_per_year", 26),
                medicare_levy_rate=_amount(payload, "medicare_levy_rate"),
                super_guarantee_rate=_amount(payload, "super_guarantee_rate"),
                minimum_hourly_wage=_positive(payload, "minimum_hourly_wage"),
                public_holiday_loading=_amount(payload, "public_holiday_loading"),
                saturday_loading=_amount(payload, "saturday_loading"),
                sunday_loading=_amount(payload, "sunday_loading"),
                sleepover_allowance=_amount(payload, "sleepover_allowance"),
                broken_shift_allowance=_amount(payload, "broken_shift_allowance"),
                broken_shift_min_span_hours=_amount(payload, "broken_shift_min_span_hours"),
                broken_shift_max_paid_hours=_amount(payload, "broken_shift_max_paid_hours"),
                leave_accrual_rates=leave_rates,
                tax_brackets=brackets,
            )
        except (KeyError, ValueError, TypeError, ValidationError) as e:
            raise ConfigurationError(f"Malformed ruleset: {e}") from e


def _amount(payload: Mapping[str, Any], key: str) -> Decimal:
    return require_non_negative(payload[key], key)


def _rate(rates: Mapping[str, Any], key: str) -> Decimal:
    return require_non_negative(rates.get(key, 0), key)


def _positive(payload: Mapping[str, Any], key: str) -> Decimal:
    value = _amount(payload, key)
    if value <= 0:
        raise ValidationError(key, payload[key], "must be positive")
    return value


def _positive_int(payload: Mapping[str, Any], key: str, default: int) -> int:
    value = int(payload.get(key, default))
    if value <= 0:
        raise ValidationError(key, payload.get(key), "must be positive")
    return value


# Australian resident rates 2024-25, ScHADS award allowances.
# Brackets are contiguous: each max equals the next min.
_STANDARD_LEAVE = LeaveAccrualRates(
    annual=Decimal("0.0769"),  # 4 weeks per year (160 / 2080 hours)
    sick=Decimal("0.0384"),  # 2 weeks per year
    personal=Decimal("0.0192"),  # 1 week per year
    long_service=Decimal("0.0065"),
)

SCHADS_2024_25 = AwardRuleset(
    version="schads-2024-25",
    tax_year=2025,
    tax_free_threshold=Decimal("18200"),
    pay_periods_per_year=26,
    medicare_levy_rate=Decimal("0.02"),
    super_guarantee_rate=Decimal("0.11"),
    minimum_hourly_wage=Decimal("23.23"),
    public_holiday_loading=Decimal("1.5"),
    saturday_loading=Decimal("0.25"),
    sunday_loading=Decimal("0.5"),
    sleepover_allowance=Decimal("60.02"),
    broken_shift_allowance=Decimal("20.82"),
    broken_shift_min_span_hours=Decimal("10"),
    broken_shift_max_paid_hours=Decimal("9"),
    leave_accrual_rates={
        EmploymentType.FULL_TIME: _STANDARD_LEAVE,
        EmploymentType.PART_TIME: _STANDARD_LEAVE,
        EmploymentType.CASUAL: LeaveAccrualRates(),
    },
    tax_brackets=(
        TaxBracket(Decimal("0"), Decimal("18200"), Decimal("0"), Decimal("0")),
        TaxBracket(Decimal("18200"), Decimal("45000"), Decimal("0.19"), Decimal("0")),
        TaxBracket(Decimal("45000"), Decimal("120000"), Decimal("0.325"), Decimal("5092")),
        TaxBracket(Decimal("120000"), Decimal("180000"), Decimal("0.37"), Decimal("29467")),
        TaxBracket(Decimal("180000"), None, Decimal("0.45"), Decimal("51667")),
    ),
)

BUILTIN_RULESETS: dict[str, AwardRuleset] = {
    SCHADS_2024_25.version: SCHADS_2024_25,
}


def get_ruleset(version: str) -> AwardRuleset:
    """Look up a built-in ruleset by version."""
    try:
        return BUILTIN_RULESETS[version]
    except KeyError:
        raise ConfigurationError(
            f"Unknown ruleset version '{version}'. "
            f"Available: {', '.join(sorted(BUILTIN_RULESETS))}"
        )


def load_ruleset(path: str | Path) -> AwardRuleset:
    """Load a ruleset from a JSON file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read ruleset file {path}: {e}") from e
    ruleset = AwardRuleset.from_dict(payload)
    logger.info("Loaded ruleset %s from %s", ruleset.version, path)
    return ruleset


def active_ruleset() -> AwardRuleset:
    """Ruleset selected by settings: a file if configured, else built in."""
    settings = get_settings()
    if settings.ruleset_path:
        return load_ruleset(settings.ruleset_path)
    return get_ruleset(settings.ruleset_version)
