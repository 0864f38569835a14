"""Tests for fortnightly pay period boundaries."""

from datetime import date, datetime, timedelta

import pytest

from award_payroll.calculators.pay_periods import current_period, next_period

MONDAY = datetime(2024, 7, 1)
END = datetime(2024, 7, 14, 23, 59, 59, 999000)


class TestCurrentPeriod:
    """Period containing a reference date."""

    @pytest.mark.parametrize(
        "reference",
        [
            date(2024, 7, 1),
            date(2024, 7, 3),
            date(2024, 7, 7),
            datetime(2024, 7, 5, 15, 30),
        ],
    )
    def test_starts_on_monday(self, reference):
        """Any day of the week maps to the Monday on or before it."""
        period = current_period(reference)

        assert period.start == MONDAY
        assert period.end == END

    def test_every_weekday(self):
        """The period always starts on a Monday and spans 14 days."""
        for offset in range(21):
            period = current_period(date(2024, 9, 2) + timedelta(days=offset))
            assert period.start.weekday() == 0
            assert period.start.time() == datetime.min.time()
            assert period.end.date() - period.start.date() == timedelta(days=13)


class TestNextPeriod:
    """Period following a given end."""

    def test_follows_end(self):
        """The next period starts the day after the current end."""
        period = next_period(END)

        assert period.start == datetime(2024, 7, 15)
        assert period.end == datetime(2024, 7, 28, 23, 59, 59, 999000)

    def test_accepts_date(self):
        """A plain date end works the same way."""
        assert next_period(date(2024, 7, 14)).start == datetime(2024, 7, 15)
