"""API endpoint integration tests.

Tests the FastAPI endpoints for payroll, shifts and pay periods.
"""

from decimal import Decimal
from uuid import uuid4

import pytest
from httpx import AsyncClient

from award_payroll.models import Employee

pytestmark = pytest.mark.asyncio


class TestHealthEndpoints:
    """Test health check endpoints."""

    async def test_health_check(self, client: AsyncClient):
        """Health reports the database and the active ruleset."""
        response = await client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "healthy"
        assert data["ruleset_version"] == "schads-2024-25"
        assert data["tax_year"] == 2025
        assert data["engine_version"]

    async def test_readiness_check(self, client: AsyncClient):
        """Readiness endpoint should return 200."""
        response = await client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"

    async def test_liveness_check(self, client: AsyncClient):
        """Liveness endpoint should return 200."""
        response = await client.get("/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"


class TestPayrollCalculation:
    """POST /api/v1/payroll/calculate."""

    async def test_calculate(
        self, client: AsyncClient, seeded_employee: Employee, tenant_headers
    ):
        """Reference fortnight for a full-time employee."""
        response = await client.post(
            "/api/v1/payroll/calculate",
            headers=tenant_headers,
            json={
                "user_id": str(seeded_employee.employee_id),
                "gross_pay": "1600",
                "as_of": "2024-07-01",
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert Decimal(data["tax_withheld"]) == Decimal("171.00")
        assert Decimal(data["medicare_levy"]) == Decimal("32.00")
        assert Decimal(data["super_contribution"]) == Decimal("176.00")
        assert Decimal(data["net_pay"]) == Decimal("1397.00")
        assert Decimal(data["hours_worked"]) == Decimal("40")
        assert Decimal(data["leave_accrued"]["annual"]) == Decimal("3.076")
        assert data["rate_source"] == "pay_scale"
        assert data["employment_type"] == "full-time"

    async def test_missing_tenant_header(self, client: AsyncClient, seeded_employee: Employee):
        """Requests without X-Tenant-ID are rejected."""
        response = await client.post(
            "/api/v1/payroll/calculate",
            json={"user_id": str(seeded_employee.employee_id), "gross_pay": "1600"},
        )
        assert response.status_code == 400

    async def test_invalid_tenant_header(self, client: AsyncClient):
        """Malformed tenant IDs are rejected."""
        response = await client.post(
            "/api/v1/payroll/calculate",
            headers={"X-Tenant-ID": "not-a-uuid"},
            json={"user_id": str(uuid4()), "gross_pay": "1600"},
        )
        assert response.status_code == 400

    async def test_unknown_employee(self, client: AsyncClient, tenant_headers):
        """Unknown employees return 404 with the domain code."""
        response = await client.post(
            "/api/v1/payroll/calculate",
            headers=tenant_headers,
            json={"user_id": str(uuid4()), "gross_pay": "1600"},
        )
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    async def test_negative_gross(
        self, client: AsyncClient, seeded_employee: Employee, tenant_headers
    ):
        """Negative gross returns 422 with the domain code."""
        response = await client.post(
            "/api/v1/payroll/calculate",
            headers=tenant_headers,
            json={"user_id": str(seeded_employee.employee_id), "gross_pay": "-5"},
        )
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestLeaveBalances:
    """Leave balance endpoints."""

    async def test_update_then_read(
        self, client: AsyncClient, seeded_employee: Employee, tenant_headers
    ):
        """Posted accruals add up in the stored balance."""
        payload = {
            "user_id": str(seeded_employee.employee_id),
            "leave_accrued": {
                "annual": "3.076",
                "sick": "1.536",
                "personal": "0.768",
                "long_service": "0.26",
            },
        }
        for _ in range(2):
            response = await client.post(
                "/api/v1/payroll/leave-balances", headers=tenant_headers, json=payload
            )
            assert response.status_code == 204

        response = await client.get(
            f"/api/v1/payroll/leave-balances/{seeded_employee.employee_id}",
            headers=tenant_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["annual_leave"]) == Decimal("6.152")
        assert Decimal(data["long_service_leave"]) == Decimal("0.52")

    async def test_negative_accrual(
        self, client: AsyncClient, seeded_employee: Employee, tenant_headers
    ):
        """Negative accruals are rejected."""
        response = await client.post(
            "/api/v1/payroll/leave-balances",
            headers=tenant_headers,
            json={
                "user_id": str(seeded_employee.employee_id),
                "leave_accrued": {"annual": "-1"},
            },
        )
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_no_balance(self, client: AsyncClient, tenant_headers):
        """Employees without a balance return 404."""
        response = await client.get(
            f"/api/v1/payroll/leave-balances/{uuid4()}", headers=tenant_headers
        )
        assert response.status_code == 404


class TestShifts:
    """Shift pricing endpoints."""

    async def test_public_holiday_shift(self, client: AsyncClient):
        """Public holiday shift is base plus 150%."""
        response = await client.post(
            "/api/v1/shifts/allowances",
            json={
                "start_time": "2024-07-03T09:00:00",
                "end_time": "2024-07-03T17:00:00",
                "base_rate": "35",
                "is_public_holiday": True,
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["shift_type"] == "Sleepover"
        assert Decimal(data["base_payment"]) == Decimal("280.00")
        assert [a["type"] for a in data["allowances"]] == ["public_holiday"]
        assert Decimal(data["total_payment"]) == Decimal("700.00")

    async def test_end_before_start(self, client: AsyncClient):
        """Reversed shifts return 422."""
        response = await client.post(
            "/api/v1/shifts/allowances",
            json={
                "start_time": "2024-07-03T17:00:00",
                "end_time": "2024-07-03T09:00:00",
                "base_rate": "35",
            },
        )
        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_totals(self, client: AsyncClient):
        """Totals across a period's shifts."""
        response = await client.post(
            "/api/v1/shifts/totals",
            json={
                "shifts": [
                    {
                        "start_time": "2024-07-06T09:00:00",
                        "end_time": "2024-07-06T17:00:00",
                        "base_rate": "35",
                        "is_weekend": True,
                    },
                    {
                        "start_time": "2024-07-07T22:00:00",
                        "end_time": "2024-07-08T06:00:00",
                        "base_rate": "30",
                        "is_weekend": True,
                        "is_sleepover": True,
                    },
                ]
            },
        )
        assert response.status_code == 200

        data = response.json()
        assert data["shift_count"] == 2
        assert Decimal(data["total_earnings"]) == Decimal("770.02")


class TestPayPeriods:
    """Pay period endpoints."""

    async def test_current(self, client: AsyncClient):
        """A Sunday belongs to the fortnight starting the Monday before."""
        response = await client.get("/api/v1/pay-periods/current", params={"date": "2024-07-07"})
        assert response.status_code == 200
        assert response.json()["start"] == "2024-07-01T00:00:00"

    async def test_next(self, client: AsyncClient):
        """The next period starts the day after the current end."""
        response = await client.get(
            "/api/v1/pay-periods/next", params={"current_end": "2024-07-14T23:59:59.999"}
        )
        assert response.status_code == 200
        assert response.json()["start"] == "2024-07-15T00:00:00"
