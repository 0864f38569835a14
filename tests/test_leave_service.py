"""Tests for committing accrued leave."""

from decimal import Decimal
from uuid import uuid4

import pytest

from award_payroll.calculators.types import LeaveAccrual
from award_payroll.exceptions import ValidationError
from award_payroll.services.leave_service import LeaveBalanceService
from award_payroll.services.payroll_store import SqlPayrollStore

FORTNIGHT = LeaveAccrual(
    annual=Decimal("3.076"),
    sick=Decimal("1.536"),
    personal=Decimal("0.768"),
    long_service=Decimal("0.26"),
)


class TestUpdateLeaveBalances:
    """Atomic increments against SQLite."""

    async def test_first_update_creates_balance(self, store, make_employee):
        """The first run opens the balance at the accrued amounts."""
        employee = await make_employee()
        service = LeaveBalanceService(store)

        await service.update_leave_balances(employee.employee_id, employee.tenant_id, FORTNIGHT)
        balance = await service.get_balance(employee.employee_id, employee.tenant_id)

        assert balance is not None
        assert balance.annual_leave == Decimal("3.076")
        assert balance.long_service_leave == Decimal("0.26")
        assert balance.last_updated is not None

    async def test_updates_accumulate(self, store, make_employee):
        """Each run adds to the existing balance."""
        employee = await make_employee()
        service = LeaveBalanceService(store)

        for _ in range(3):
            await service.update_leave_balances(
                employee.employee_id, employee.tenant_id, FORTNIGHT
            )
        balance = await service.get_balance(employee.employee_id, employee.tenant_id)

        assert balance.annual_leave == Decimal("9.228")
        assert balance.sick_leave == Decimal("4.608")
        assert balance.personal_leave == Decimal("2.304")
        assert balance.long_service_leave == Decimal("0.78")

    async def test_balances_are_per_tenant(self, store, make_employee):
        """The same employee id in another tenant has its own balance."""
        employee = await make_employee()
        other_tenant = uuid4()
        service = LeaveBalanceService(store)

        await service.update_leave_balances(employee.employee_id, employee.tenant_id, FORTNIGHT)
        await service.update_leave_balances(employee.employee_id, other_tenant, FORTNIGHT)

        balance = await service.get_balance(employee.employee_id, employee.tenant_id)
        assert balance.annual_leave == Decimal("3.076")

    async def test_negative_accrual_rejected(self, store, make_employee):
        """Negative accruals are rejected and nothing is written."""
        employee = await make_employee()
        service = LeaveBalanceService(store)

        with pytest.raises(ValidationError):
            await service.update_leave_balances(
                employee.employee_id,
                employee.tenant_id,
                LeaveAccrual(annual=Decimal("-1")),
            )

        assert await service.get_balance(employee.employee_id, employee.tenant_id) is None

    async def test_no_balance(self, store):
        """An employee without runs has no balance row."""
        assert await LeaveBalanceService(store).get_balance(uuid4(), uuid4()) is None


class TestInMemoryStore:
    """The service only depends on the store protocol."""

    async def test_memory_store(self, memory_store):
        """Increments work against any PayrollStore."""
        user_id, tenant_id = uuid4(), uuid4()
        service = LeaveBalanceService(memory_store)

        await service.update_leave_balances(user_id, tenant_id, FORTNIGHT)
        await service.update_leave_balances(user_id, tenant_id, FORTNIGHT)

        assert memory_store.leave[(user_id, tenant_id)] == FORTNIGHT + FORTNIGHT


class TestSeparateSessions:
    """Increments committed from independent sessions."""

    async def test_increments_from_two_sessions_sum(self, session_factory):
        """Two runs committing through separate sessions both land in the balance."""
        user_id, tenant_id = uuid4(), uuid4()

        async with session_factory() as first, session_factory() as second:
            await LeaveBalanceService(SqlPayrollStore(first)).update_leave_balances(
                user_id, tenant_id, FORTNIGHT
            )
            await first.commit()
            await LeaveBalanceService(SqlPayrollStore(second)).update_leave_balances(
                user_id, tenant_id, FORTNIGHT
            )
            await second.commit()

        async with session_factory() as reader:
            balance = await SqlPayrollStore(reader).get_leave_balance(user_id, tenant_id)

        assert balance is not None
        assert balance.annual_leave == Decimal("6.152")
        assert balance.sick_leave == Decimal("3.072")
        assert balance.personal_leave == Decimal("1.536")
        assert balance.long_service_leave == Decimal("0.52")
