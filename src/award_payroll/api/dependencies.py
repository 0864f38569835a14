"""FastAPI dependencies for dependency injection."""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from award_payroll.calculators.rulesets import AwardRuleset, active_ruleset
from award_payroll.database import get_session_factory
from award_payroll.services.payroll_store import SqlPayrollStore


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_tenant_id(
    x_tenant_id: Annotated[str | None, Header()] = None
) -> UUID:
    """Extract tenant ID from header."""
    if not x_tenant_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-Tenant-ID header is required",
        )
    try:
        return UUID(x_tenant_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-Tenant-ID format",
        )


@lru_cache(maxsize=1)
def get_ruleset() -> AwardRuleset:
    """Ruleset selected by settings, loaded once per process."""
    return active_ruleset()


async def get_store(
    session: Annotated[AsyncSession, Depends(get_db_session)]
) -> SqlPayrollStore:
    return SqlPayrollStore(session)


# Type aliases for cleaner dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
TenantId = Annotated[UUID, Depends(get_tenant_id)]
Ruleset = Annotated[AwardRuleset, Depends(get_ruleset)]
Store = Annotated[SqlPayrollStore, Depends(get_store)]
