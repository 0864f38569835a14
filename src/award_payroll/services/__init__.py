"""Award payroll services."""

from award_payroll.services.leave_service import LeaveBalanceService
from award_payroll.services.payroll_store import PayrollStore, SqlPayrollStore

__all__ = [
    "LeaveBalanceService",
    "PayrollStore",
    "SqlPayrollStore",
]
