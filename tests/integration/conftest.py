"""Integration test fixtures: the API over an in-memory database."""

from collections.abc import AsyncGenerator
from decimal import Decimal
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from award_payroll.api.app import create_app
from award_payroll.api.dependencies import get_db_session, get_ruleset
from award_payroll.calculators.rulesets import SCHADS_2024_25
from award_payroll.models import Employee, PayScale

DEMO_TENANT_ID = UUID("00000000-0000-0000-0000-000000000001")


@pytest.fixture
def tenant_headers() -> dict[str, str]:
    return {"X-Tenant-ID": str(DEMO_TENANT_ID)}


@pytest_asyncio.fixture
async def seeded_employee(session_factory: async_sessionmaker[AsyncSession]) -> Employee:
    """Full-time employee at level 1 point 1 paid $40/h."""
    async with session_factory() as session:
        employee = Employee(
            employee_id=uuid4(),
            tenant_id=DEMO_TENANT_ID,
            first_name="Sam",
            last_name="Taylor",
            employment_type="full-time",
            pay_level=1,
            pay_point=1,
        )
        session.add_all(
            [
                employee,
                PayScale(
                    pay_scale_id=uuid4(),
                    tenant_id=DEMO_TENANT_ID,
                    level=1,
                    pay_point=1,
                    hourly_rate=Decimal("40.00"),
                ),
            ]
        )
        await session.commit()
        return employee


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client wired to the test database and the built-in ruleset."""
    app = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_ruleset] = lambda: SCHADS_2024_25

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
