"""Employee model (read-only to the payroll engine)."""

from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from award_payroll.models.base import Base, TimestampMixin


class Employee(Base, TimestampMixin):
    """Employee record owned by the wider platform.

    ``employment_type`` is stored as free text; the engine resolves it with
    ``EmploymentType.from_raw`` so unknown values fall back to casual.
    """

    __tablename__ = "employee"

    employee_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    employment_type: Mapped[str | None] = mapped_column(String, nullable=True)
    pay_level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pay_point: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @property
    def full_name(self) -> str:
        """Get full name."""
        return f"{self.first_name} {self.last_name}"
