"""Type definitions for the calculation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from award_payroll.money import ZERO


class EmploymentType(str, Enum):
    """Employment types with distinct leave entitlements."""

    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CASUAL = "casual"

    @classmethod
    def from_raw(cls, value: str | None) -> EmploymentType:
        """Resolve a stored value, falling back to CASUAL when unrecognized."""
        if value is None:
            return cls.CASUAL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.CASUAL

    @classmethod
    def is_valid(cls, value: str | None) -> bool:
        if value is None:
            return False
        return value.strip().lower() in {member.value for member in cls}


class RateSource(str, Enum):
    """Where an employee's hourly rate came from."""

    PAY_SCALE = "pay_scale"
    MINIMUM_WAGE_FALLBACK = "minimum_wage_fallback"


class AllowanceType(str, Enum):
    """Award allowance and penalty labels."""

    PUBLIC_HOLIDAY = "public_holiday"
    SATURDAY_PENALTY = "saturday_penalty"
    SUNDAY_PENALTY = "sunday_penalty"
    SLEEPOVER = "sleepover"
    BROKEN_SHIFT = "broken_shift"


class ShiftType(str, Enum):
    """Rostering classification of a shift by its start time."""

    AM = "AM"
    PM = "PM"
    ACTIVE_NIGHT = "ActiveNight"
    SLEEPOVER = "Sleepover"


@dataclass(frozen=True)
class TaxBracket:
    """Tax bracket for progressive taxation.

    ``base_tax`` is the cumulative tax payable on all income below
    ``min_income``; only one bracket contributes to a given income.
    """

    min_income: Decimal
    max_income: Decimal | None  # None = no upper limit
    tax_rate: Decimal  # As fraction, e.g. 0.19 for 19%
    base_tax: Decimal = ZERO


@dataclass(frozen=True)
class LeaveAccrualRates:
    """Leave hours accrued per hour worked."""

    annual: Decimal = ZERO
    sick: Decimal = ZERO
    personal: Decimal = ZERO
    long_service: Decimal = ZERO


@dataclass(frozen=True)
class LeaveAccrual:
    """Leave hours accrued in one pay period."""

    annual: Decimal = ZERO
    sick: Decimal = ZERO
    personal: Decimal = ZERO
    long_service: Decimal = ZERO

    def __add__(self, other: LeaveAccrual) -> LeaveAccrual:
        return LeaveAccrual(
            annual=self.annual + other.annual,
            sick=self.sick + other.sick,
            personal=self.personal + other.personal,
            long_service=self.long_service + other.long_service,
        )


@dataclass(frozen=True)
class Shift:
    """A single worked shift.

    ``unpaid_break_hours`` is the unpaid gap inside a broken shift; the
    shift's paid hours are its wall-clock span minus that gap.
    """

    start_time: datetime
    end_time: datetime
    base_rate: Decimal
    is_public_holiday: bool = False
    is_weekend: bool = False
    is_sleepover: bool = False
    unpaid_break_hours: Decimal = ZERO


@dataclass(frozen=True)
class Allowance:
    """One penalty or allowance line for a shift."""

    type: AllowanceType
    amount: Decimal
    description: str


@dataclass
class ShiftAllowanceResult:
    """Priced shift: base pay plus allowances."""

    base_payment: Decimal
    allowances: list[Allowance] = field(default_factory=list)
    total_payment: Decimal = ZERO
    hours: Decimal = ZERO
    span_hours: Decimal = ZERO

    @property
    def allowance_total(self) -> Decimal:
        return sum((a.amount for a in self.allowances), ZERO)

    def has(self, allowance_type: AllowanceType) -> bool:
        return any(a.type == allowance_type for a in self.allowances)


@dataclass
class ShiftPeriodTotals:
    """Totals across all shifts of a pay period."""

    shift_count: int = 0
    total_hours: Decimal = ZERO
    total_base: Decimal = ZERO
    total_allowances: Decimal = ZERO
    total_earnings: Decimal = ZERO


@dataclass(frozen=True)
class ResolvedRate:
    """Hourly rate with the branch that produced it."""

    hourly_rate: Decimal
    source: RateSource
    level: int
    pay_point: int


@dataclass(frozen=True)
class PayPeriod:
    """A fortnightly pay period window (inclusive)."""

    start: datetime
    end: datetime


@dataclass
class PayrollCalculation:
    """Result of calculating one employee's pay for one period."""

    gross_pay: Decimal
    tax_withheld: Decimal
    medicare_levy: Decimal
    super_contribution: Decimal
    net_pay: Decimal
    leave_accrued: LeaveAccrual

    # Traceability
    hours_worked: Decimal = ZERO
    year_to_date_gross: Decimal = ZERO
    annualized_income: Decimal = ZERO
    hourly_rate: Decimal = ZERO
    rate_source: RateSource = RateSource.PAY_SCALE
    employment_type: EmploymentType = EmploymentType.CASUAL
    ruleset_version: str = ""
