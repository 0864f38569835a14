"""Year-to-date gross from the paid-timesheet ledger."""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from award_payroll.services.payroll_store import PayrollStore

logger = logging.getLogger(__name__)

FINANCIAL_YEAR_START_MONTH = 7


def financial_year_start(as_of: date | datetime) -> date:
    """July 1 on or before ``as_of``."""
    if isinstance(as_of, datetime):
        as_of = as_of.date()
    year = as_of.year if as_of.month >= FINANCIAL_YEAR_START_MONTH else as_of.year - 1
    return date(year, FINANCIAL_YEAR_START_MONTH, 1)


class YTDAggregator:
    """Recomputes year-to-date gross earnings.

    The figure is always rebuilt from paid timesheets, never taken from the
    caller, so re-running payroll against an unchanged ledger gives the same
    YTD and therefore the same withholding.
    """

    def __init__(self, store: PayrollStore):
        self.store = store

    async def live_year_to_date_gross(
        self, user_id: UUID, tenant_id: UUID, as_of: date | datetime
    ) -> Decimal:
        """Sum of paid timesheet earnings from July 1 through ``as_of``."""
        end = as_of.date() if isinstance(as_of, datetime) else as_of
        start = financial_year_start(end)
        total = await self.store.get_paid_earnings_total(user_id, tenant_id, start, end)
        logger.debug(
            "YTD gross for user %s in tenant %s, %s to %s: %s",
            user_id,
            tenant_id,
            start,
            end,
            total,
        )
        return total
