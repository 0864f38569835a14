"""Pytest fixtures for award payroll tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Sequence
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from award_payroll.calculators.rulesets import SCHADS_2024_25, AwardRuleset
from award_payroll.calculators.types import LeaveAccrual, TaxBracket
from award_payroll.database import create_all
from award_payroll.models import Employee, PayScale, Timesheet
from award_payroll.services.payroll_store import SqlPayrollStore

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh test database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def store(session: AsyncSession) -> SqlPayrollStore:
    return SqlPayrollStore(session)


@pytest.fixture
def ruleset() -> AwardRuleset:
    return SCHADS_2024_25


@pytest.fixture
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture
def make_employee(session: AsyncSession, tenant_id: UUID):
    """Factory for employees in the test tenant."""

    async def _make(
        employment_type: str | None = "full-time",
        pay_level: int | None = 1,
        pay_point: int | None = 1,
        tenant: UUID | None = None,
    ) -> Employee:
        employee = Employee(
            employee_id=uuid4(),
            tenant_id=tenant or tenant_id,
            first_name="Alex",
            last_name="Nguyen",
            email="alex@example.com",
            employment_type=employment_type,
            pay_level=pay_level,
            pay_point=pay_point,
        )
        session.add(employee)
        await session.flush()
        return employee

    return _make


@pytest.fixture
def make_pay_scale(session: AsyncSession, tenant_id: UUID):
    """Factory for award pay scale rows."""

    async def _make(
        hourly_rate: str = "40.00",
        level: int = 1,
        pay_point: int = 1,
        tenant: UUID | None = None,
    ) -> PayScale:
        scale = PayScale(
            pay_scale_id=uuid4(),
            tenant_id=tenant or tenant_id,
            level=level,
            pay_point=pay_point,
            hourly_rate=Decimal(hourly_rate),
        )
        session.add(scale)
        await session.flush()
        return scale

    return _make


@pytest.fixture
def make_timesheet(session: AsyncSession):
    """Factory for fortnightly timesheets."""

    async def _make(
        employee: Employee,
        period_start: date,
        total_earnings: str,
        status: str = "paid",
        tenant: UUID | None = None,
    ) -> Timesheet:
        timesheet = Timesheet(
            timesheet_id=uuid4(),
            user_id=employee.employee_id,
            tenant_id=tenant or employee.tenant_id,
            pay_period_start=period_start,
            pay_period_end=period_start + timedelta(days=13),
            total_hours=Decimal("0"),
            total_earnings=Decimal(total_earnings),
            status=status,
        )
        session.add(timesheet)
        await session.flush()
        return timesheet

    return _make


class MemoryPayrollStore:
    """Bracket and leave storage held in dicts, for calculator tests."""

    def __init__(self, brackets: dict[int, list[TaxBracket]] | None = None):
        self.brackets: dict[int, list[TaxBracket]] = brackets or {}
        self.bracket_reads = 0
        self.bracket_inserts = 0
        self.leave: dict[tuple[UUID, UUID], LeaveAccrual] = {}

    async def get_tax_brackets(self, tax_year: int) -> list[TaxBracket]:
        self.bracket_reads += 1
        return list(self.brackets.get(tax_year, []))

    async def insert_tax_brackets(self, tax_year: int, brackets: Sequence[TaxBracket]) -> int:
        if self.brackets.get(tax_year):
            return 0
        self.bracket_inserts += 1
        self.brackets[tax_year] = list(brackets)
        return len(brackets)

    async def get_leave_balance(self, user_id: UUID, tenant_id: UUID) -> Any:
        return self.leave.get((user_id, tenant_id))

    async def increment_leave_balance(
        self, user_id: UUID, tenant_id: UUID, accrual: LeaveAccrual
    ) -> None:
        key = (user_id, tenant_id)
        self.leave[key] = self.leave.get(key, LeaveAccrual()) + accrual


@pytest.fixture
def memory_store() -> MemoryPayrollStore:
    return MemoryPayrollStore()
