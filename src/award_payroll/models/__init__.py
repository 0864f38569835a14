"""SQLAlchemy models."""

from award_payroll.models.base import Base, TimestampMixin
from award_payroll.models.employee import Employee
from award_payroll.models.payroll import (
    TIMESHEET_STATUSES,
    IncomeTaxBracket,
    LeaveBalance,
    PayScale,
    Timesheet,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "Employee",
    "IncomeTaxBracket",
    "LeaveBalance",
    "PayScale",
    "Timesheet",
    "TIMESHEET_STATUSES",
]
