"""Leave balance persistence."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from award_payroll.calculators.types import LeaveAccrual
from award_payroll.money import require_non_negative

if TYPE_CHECKING:
    from award_payroll.models import LeaveBalance
    from award_payroll.services.payroll_store import PayrollStore

logger = logging.getLogger(__name__)


class LeaveBalanceService:
    """Commits accrued leave to an employee's running balance.

    Balances only ever grow here: each call adds the accrual atomically in
    the store, creating the balance row on an employee's first run.
    """

    def __init__(self, store: PayrollStore):
        self.store = store

    async def update_leave_balances(
        self, user_id: UUID, tenant_id: UUID, leave_accrued: LeaveAccrual
    ) -> None:
        """Add accrued leave to the stored balance.

        Raises:
            ValidationError: If any accrued amount is negative or not finite
        """
        accrual = LeaveAccrual(
            annual=require_non_negative(leave_accrued.annual, "annual"),
            sick=require_non_negative(leave_accrued.sick, "sick"),
            personal=require_non_negative(leave_accrued.personal, "personal"),
            long_service=require_non_negative(leave_accrued.long_service, "long_service"),
        )
        await self.store.increment_leave_balance(user_id, tenant_id, accrual)
        logger.info(
            "Accrued leave for user %s tenant %s: annual %s sick %s personal %s long service %s",
            user_id,
            tenant_id,
            accrual.annual,
            accrual.sick,
            accrual.personal,
            accrual.long_service,
        )

    async def get_balance(self, user_id: UUID, tenant_id: UUID) -> LeaveBalance | None:
        return await self.store.get_leave_balance(user_id, tenant_id)
