"""Fortnightly pay period boundaries, anchored to Monday."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from award_payroll.calculators.types import PayPeriod

PERIOD_DAYS = 14
END_OF_DAY = time(23, 59, 59, 999000)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _period_from(start: datetime) -> PayPeriod:
    start = start.replace(hour=0, minute=0, second=0, microsecond=0)
    last_day = start + timedelta(days=PERIOD_DAYS - 1)
    end = last_day.replace(
        hour=END_OF_DAY.hour,
        minute=END_OF_DAY.minute,
        second=END_OF_DAY.second,
        microsecond=END_OF_DAY.microsecond,
    )
    return PayPeriod(start=start, end=end)


def current_period(reference: date | datetime) -> PayPeriod:
    """Pay period starting on the most recent Monday at or before ``reference``."""
    ref = _as_datetime(reference)
    monday = ref - timedelta(days=ref.weekday())
    return _period_from(monday)


def next_period(current_end: date | datetime) -> PayPeriod:
    """Pay period starting the day after ``current_end``."""
    return _period_from(_as_datetime(current_end) + timedelta(days=1))
