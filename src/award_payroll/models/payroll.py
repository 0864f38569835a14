"""Payroll models: pay scales, tax brackets, timesheets and leave balances."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from award_payroll.models.base import Base, TimestampMixin

TIMESHEET_STATUSES = ("draft", "submitted", "approved", "rejected", "paid")


class PayScale(Base, TimestampMixin):
    """Award hourly rate for a tenant's (level, pay point)."""

    __tablename__ = "pay_scale"

    pay_scale_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False)
    pay_point: Mapped[int] = mapped_column(Integer, nullable=False)
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(12, 4), nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "level", "pay_point", name="pay_scale_level_point_uq"),
        CheckConstraint("hourly_rate > 0", name="pay_scale_rate_positive"),
    )


class IncomeTaxBracket(Base, TimestampMixin):
    """One progressive income tax bracket for a tax year."""

    __tablename__ = "income_tax_bracket"

    income_tax_bracket_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    tax_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    min_income: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    max_income: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    tax_rate: Mapped[Decimal] = mapped_column(Numeric(7, 5), nullable=False)
    base_tax: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=Decimal("0"))

    __table_args__ = (
        UniqueConstraint("tax_year", "min_income", name="income_tax_bracket_year_min_uq"),
        CheckConstraint(
            "max_income IS NULL OR max_income > min_income",
            name="income_tax_bracket_range_check",
        ),
    )


class Timesheet(Base, TimestampMixin):
    """An employee's timesheet for one pay period."""

    __tablename__ = "timesheet"

    timesheet_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    pay_period_start: Mapped[date] = mapped_column(Date, nullable=False)
    pay_period_end: Mapped[date] = mapped_column(Date, nullable=False)
    total_hours: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    total_earnings: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, default=Decimal("0")
    )
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")

    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", "pay_period_start", name="timesheet_period_uq"),
        CheckConstraint(
            "status IN ('draft', 'submitted', 'approved', 'rejected', 'paid')",
            name="timesheet_status_check",
        ),
        CheckConstraint("pay_period_end >= pay_period_start", name="timesheet_dates_check"),
    )


class LeaveBalance(Base):
    """Accumulated leave hours for an employee in a tenant."""

    __tablename__ = "leave_balance"

    leave_balance_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("employee.employee_id", ondelete="CASCADE"),
        nullable=False,
    )
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    annual_leave: Mapped[Decimal] = mapped_column(Numeric(14, 6), nullable=False, default=Decimal("0"))
    sick_leave: Mapped[Decimal] = mapped_column(Numeric(14, 6), nullable=False, default=Decimal("0"))
    personal_leave: Mapped[Decimal] = mapped_column(
        Numeric(14, 6), nullable=False, default=Decimal("0")
    )
    long_service_leave: Mapped[Decimal] = mapped_column(
        Numeric(14, 6), nullable=False, default=Decimal("0")
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "tenant_id", name="leave_balance_user_tenant_uq"),
    )
