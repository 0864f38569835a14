"""Storage interface consumed by the calculators, and its SQLAlchemy implementation."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Protocol, Sequence
from uuid import UUID, uuid4

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from award_payroll.calculators.types import LeaveAccrual, TaxBracket
from award_payroll.exceptions import ConfigurationError
from award_payroll.models import Employee, IncomeTaxBracket, LeaveBalance, PayScale, Timesheet
from award_payroll.money import to_money

logger = logging.getLogger(__name__)

PAID_STATUS = "paid"


class PayrollStore(Protocol):
    """Data access the payroll engine depends on."""

    async def get_employee(self, user_id: UUID, tenant_id: UUID) -> Employee | None: ...

    async def get_pay_scale(
        self, tenant_id: UUID, level: int, pay_point: int
    ) -> PayScale | None: ...

    async def get_paid_timesheets(
        self, user_id: UUID, tenant_id: UUID, start: date, end: date
    ) -> list[Timesheet]: ...

    async def get_paid_earnings_total(
        self, user_id: UUID, tenant_id: UUID, start: date, end: date
    ) -> Decimal: ...

    async def get_tax_brackets(self, tax_year: int) -> list[TaxBracket]: ...

    async def insert_tax_brackets(
        self, tax_year: int, brackets: Sequence[TaxBracket]
    ) -> int: ...

    async def get_leave_balance(self, user_id: UUID, tenant_id: UUID) -> LeaveBalance | None: ...

    async def increment_leave_balance(
        self, user_id: UUID, tenant_id: UUID, accrual: LeaveAccrual
    ) -> None: ...


class SqlPayrollStore:
    """PayrollStore backed by an AsyncSession (PostgreSQL or SQLite).

    Writes use ``INSERT ... ON CONFLICT`` so that concurrent payroll runs can
    neither double-seed a tax year nor lose a leave-balance increment.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_employee(self, user_id: UUID, tenant_id: UUID) -> Employee | None:
        result = await self.session.execute(
            select(Employee).where(
                Employee.employee_id == user_id,
                Employee.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_pay_scale(
        self, tenant_id: UUID, level: int, pay_point: int
    ) -> PayScale | None:
        result = await self.session.execute(
            select(PayScale).where(
                PayScale.tenant_id == tenant_id,
                PayScale.level == level,
                PayScale.pay_point == pay_point,
            )
        )
        return result.scalar_one_or_none()

    async def get_paid_timesheets(
        self, user_id: UUID, tenant_id: UUID, start: date, end: date
    ) -> list[Timesheet]:
        """Paid timesheets whose period starts within [start, end]."""
        result = await self.session.execute(
            select(Timesheet)
            .where(*self._paid_window(user_id, tenant_id, start, end))
            .order_by(Timesheet.pay_period_start)
        )
        return list(result.scalars().all())

    async def get_paid_earnings_total(
        self, user_id: UUID, tenant_id: UUID, start: date, end: date
    ) -> Decimal:
        total = await self.session.scalar(
            select(func.coalesce(func.sum(Timesheet.total_earnings), 0)).where(
                *self._paid_window(user_id, tenant_id, start, end)
            )
        )
        return to_money(total or 0, "total_earnings")

    async def get_tax_brackets(self, tax_year: int) -> list[TaxBracket]:
        result = await self.session.execute(
            select(IncomeTaxBracket)
            .where(IncomeTaxBracket.tax_year == tax_year)
            .order_by(IncomeTaxBracket.min_income)
        )
        return [
            TaxBracket(
                min_income=Decimal(row.min_income),
                max_income=Decimal(row.max_income) if row.max_income is not None else None,
                tax_rate=Decimal(row.tax_rate),
                base_tax=Decimal(row.base_tax),
            )
            for row in result.scalars().all()
        ]

    async def insert_tax_brackets(
        self, tax_year: int, brackets: Sequence[TaxBracket]
    ) -> int:
        """Insert brackets, skipping any that already exist.

        Returns the number of rows inserted; 0 means another caller seeded
        the year first.
        """
        if not brackets:
            return 0
        insert = self._insert()
        stmt = (
            insert(IncomeTaxBracket)
            .values(
                [
                    {
                        "income_tax_bracket_id": uuid4(),
                        "tax_year": tax_year,
                        "min_income": b.min_income,
                        "max_income": b.max_income,
                        "tax_rate": b.tax_rate,
                        "base_tax": b.base_tax,
                    }
                    for b in brackets
                ]
            )
            .on_conflict_do_nothing(index_elements=["tax_year", "min_income"])
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return max(result.rowcount or 0, 0)

    async def get_leave_balance(self, user_id: UUID, tenant_id: UUID) -> LeaveBalance | None:
        result = await self.session.execute(
            select(LeaveBalance)
            .where(
                LeaveBalance.user_id == user_id,
                LeaveBalance.tenant_id == tenant_id,
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def increment_leave_balance(
        self, user_id: UUID, tenant_id: UUID, accrual: LeaveAccrual
    ) -> None:
        """Add ``accrual`` to the stored balance in a single statement.

        Creates the row with ``accrual`` as its opening balance when none
        exists.
        """
        insert = self._insert()
        stmt = insert(LeaveBalance).values(
            leave_balance_id=uuid4(),
            user_id=user_id,
            tenant_id=tenant_id,
            annual_leave=accrual.annual,
            sick_leave=accrual.sick,
            personal_leave=accrual.personal,
            long_service_leave=accrual.long_service,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "tenant_id"],
            set_={
                "annual_leave": LeaveBalance.annual_leave + stmt.excluded.annual_leave,
                "sick_leave": LeaveBalance.sick_leave + stmt.excluded.sick_leave,
                "personal_leave": LeaveBalance.personal_leave + stmt.excluded.personal_leave,
                "long_service_leave": (
                    LeaveBalance.long_service_leave + stmt.excluded.long_service_leave
                ),
                "last_updated": func.now(),
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()

    @staticmethod
    def _paid_window(
        user_id: UUID, tenant_id: UUID, start: date, end: date
    ) -> tuple[Any, ...]:
        return (
            Timesheet.user_id == user_id,
            Timesheet.tenant_id == tenant_id,
            Timesheet.status == PAID_STATUS,
            Timesheet.pay_period_start >= start,
            Timesheet.pay_period_start <= end,
        )

    def _insert(self) -> Any:
        """Dialect-specific insert construct supporting ON CONFLICT."""
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            return pg_insert
        if dialect == "sqlite":
            return sqlite_insert
        raise ConfigurationError(f"Unsupported database dialect '{dialect}'")
