"""Award penalty rates and allowances for individual shifts."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable

from award_payroll.calculators.rulesets import AwardRuleset
from award_payroll.calculators.types import (
    Allowance,
    AllowanceType,
    Shift,
    ShiftAllowanceResult,
    ShiftPeriodTotals,
    ShiftType,
)
from award_payroll.exceptions import ValidationError
from award_payroll.money import ZERO, money_mul, require_non_negative, round_money, sum_money

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = Decimal(3600)
HOURS_QUANTUM = Decimal("0.01")

SATURDAY = 5
SUNDAY = 6

# Rostering bands by start hour
DAY_START_HOUR = 6
EVENING_START_HOUR = 20
SLEEPOVER_MIN_HOURS = Decimal("8")
SLEEPOVER_LATEST_MORNING_START = 10
SLEEPOVER_EARLIEST_EVENING_START = 18


def _span_hours(start: datetime, end: datetime) -> Decimal:
    return Decimal(int((end - start).total_seconds())) / SECONDS_PER_HOUR


def shift_hours(start: datetime, end: datetime) -> Decimal:
    """Wall-clock hours between start and end, two places, never negative."""
    hours = _span_hours(start, end)
    if hours < 0:
        return ZERO
    return hours.quantize(HOURS_QUANTUM)


def classify_shift(start: datetime, end: datetime) -> ShiftType:
    """Classify a shift for rostering.

    Shifts of eight hours or more that start in the evening or early morning
    are sleepovers; otherwise AM is 06:00-20:00, PM is 20:00-24:00 and
    ActiveNight is 00:00-06:00.
    """
    hour = start.hour
    if _span_hours(start, end) >= SLEEPOVER_MIN_HOURS and (
        hour >= SLEEPOVER_EARLIEST_EVENING_START or hour <= SLEEPOVER_LATEST_MORNING_START
    ):
        return ShiftType.SLEEPOVER
    if DAY_START_HOUR <= hour < EVENING_START_HOUR:
        return ShiftType.AM
    if hour >= EVENING_START_HOUR:
        return ShiftType.PM
    return ShiftType.ACTIVE_NIGHT


class ShiftAllowanceCalculator:
    """Prices a shift under the award.

    Rule order (penalties 1-3 are mutually exclusive):
    1. Public holiday loading
    2. Saturday penalty, for weekend shifts starting on a Saturday
    3. Sunday penalty, for weekend shifts starting on a Sunday
    4. Sleepover allowance, independent of 1-3
    5. Broken shift allowance when the span exceeds the minimum span but
       paid hours fall short of the paid-hours ceiling, independent of 1-4
    """

    def __init__(self, ruleset: AwardRuleset):
        self.ruleset = ruleset

    def allowances(self, shift: Shift) -> ShiftAllowanceResult:
        """Calculate base pay, allowances and total for one shift.

        Raises:
            ValidationError: If the shift ends before it starts, or the rate
                or break is negative or not finite, or only one end carries
                a timezone
        """
        if (shift.start_time.tzinfo is None) != (shift.end_time.tzinfo is None):
            raise ValidationError("end_time", shift.end_time, "timezone must match start_time")
        if shift.end_time <= shift.start_time:
            raise ValidationError(
                "end_time", shift.end_time, f"must be after start_time {shift.start_time}"
            )
        rate = require_non_negative(shift.base_rate, "base_rate")
        unpaid = require_non_negative(shift.unpaid_break_hours, "unpaid_break_hours")

        span = _span_hours(shift.start_time, shift.end_time)
        if unpaid >= span:
            raise ValidationError(
                "unpaid_break_hours", shift.unpaid_break_hours, "must be shorter than the shift"
            )
        paid_hours = span - unpaid

        base_payment = money_mul(paid_hours, rate)
        lines: list[Allowance] = []

        penalty = self._penalty(shift, base_payment)
        if penalty is not None:
            lines.append(penalty)

        if shift.is_sleepover:
            lines.append(
                Allowance(
                    type=AllowanceType.SLEEPOVER,
                    amount=round_money(self.ruleset.sleepover_allowance),
                    description="Sleepover allowance",
                )
            )

        if self._is_broken_shift(span, paid_hours):
            lines.append(
                Allowance(
                    type=AllowanceType.BROKEN_SHIFT,
                    amount=round_money(self.ruleset.broken_shift_allowance),
                    description=(
                        f"Broken shift allowance ({span.quantize(HOURS_QUANTUM)}h span, "
                        f"{paid_hours.quantize(HOURS_QUANTUM)}h paid)"
                    ),
                )
            )

        total = sum_money([base_payment, *(a.amount for a in lines)])
        logger.debug(
            "Shift %s-%s: base %s, allowances %s, total %s",
            shift.start_time,
            shift.end_time,
            base_payment,
            [a.type.value for a in lines],
            total,
        )
        return ShiftAllowanceResult(
            base_payment=base_payment,
            allowances=lines,
            total_payment=total,
            hours=paid_hours.quantize(HOURS_QUANTUM),
            span_hours=span.quantize(HOURS_QUANTUM),
        )

    def period_totals(self, shifts: Iterable[Shift]) -> ShiftPeriodTotals:
        """Total hours and earnings across a pay period's shifts."""
        totals = ShiftPeriodTotals()
        for shift in shifts:
            result = self.allowances(shift)
            totals.shift_count += 1
            totals.total_hours += result.hours
            totals.total_base = round_money(totals.total_base + result.base_payment)
            totals.total_allowances = round_money(
                totals.total_allowances + result.allowance_total
            )
            totals.total_earnings = round_money(totals.total_earnings + result.total_payment)
        return totals

    def _penalty(self, shift: Shift, base_payment: Decimal) -> Allowance | None:
        if shift.is_public_holiday:
            loading = self.ruleset.public_holiday_loading
            return Allowance(
                type=AllowanceType.PUBLIC_HOLIDAY,
                amount=money_mul(base_payment, loading),
                description=f"Public holiday loading ({_percent(loading)} of base)",
            )

        if not shift.is_weekend:
            return None

        weekday = shift.start_time.weekday()
        if weekday == SATURDAY:
            loading = self.ruleset.saturday_loading
            return Allowance(
                type=AllowanceType.SATURDAY_PENALTY,
                amount=money_mul(base_payment, loading),
                description=f"Saturday penalty ({_percent(loading)} of base)",
            )
        if weekday == SUNDAY:
            loading = self.ruleset.sunday_loading
            return Allowance(
                type=AllowanceType.SUNDAY_PENALTY,
                amount=money_mul(base_payment, loading),
                description=f"Sunday penalty ({_percent(loading)} of base)",
            )

        logger.warning(
            "Shift starting %s flagged weekend but falls on a weekday; no penalty applied",
            shift.start_time,
        )
        return None

    def _is_broken_shift(self, span: Decimal, paid_hours: Decimal) -> bool:
        return (
            span > self.ruleset.broken_shift_min_span_hours
            and paid_hours < self.ruleset.broken_shift_max_paid_hours
        )


def _percent(fraction: Decimal) -> str:
    return f"{(fraction * 100).normalize():f}%"
