"""Domain exceptions raised by the payroll engine."""

from __future__ import annotations

from typing import Any
from uuid import UUID


class PayrollError(Exception):
    """Base class for payroll engine errors."""

    code = "PAYROLL_ERROR"


class NotFoundError(PayrollError):
    """Raised when an employee does not exist for the given tenant."""

    code = "NOT_FOUND"

    def __init__(self, user_id: UUID, tenant_id: UUID):
        self.user_id = user_id
        self.tenant_id = tenant_id
        super().__init__(f"Employee {user_id} not found in tenant {tenant_id}")


class ConfigurationError(PayrollError):
    """Raised when tax brackets or a ruleset cannot be used safely."""

    code = "CONFIGURATION_ERROR"


class ValidationError(PayrollError):
    """Raised when a rate, amount or hours value is unusable."""

    code = "VALIDATION_ERROR"

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field} {value!r}: {reason}")
