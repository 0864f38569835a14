"""API routes."""

from award_payroll.api.routes.health import router as health_router
from award_payroll.api.routes.pay_periods import router as pay_periods_router
from award_payroll.api.routes.payroll import router as payroll_router
from award_payroll.api.routes.shifts import router as shifts_router

__all__ = ["health_router", "pay_periods_router", "payroll_router", "shifts_router"]
