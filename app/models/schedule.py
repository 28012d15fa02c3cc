"""스케줄 관련 SQLAlchemy ORM 모델 정의.

Schedule-related SQLAlchemy ORM model definitions.
Employees belong to a business; each employee shift is one naive local
wall-clock interval on a single calendar day.

Tables:
    - employees: 직원 명부 (Employee roster)
    - employee_shifts: 직원 근무 일정 (Scheduled employee shifts)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import CheckConstraint, String, DateTime, Text, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Employee(Base):
    """직원 모델 — 스케줄 그리드에 드래그할 수 있는 근무자.

    Employee model — Roster entry. Only active employees can be dragged
    onto the schedule grid.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        business_id: 소속 사업장 FK (Parent business foreign key)
        name: 직원 이름 (Display name)
        status: 상태 (Status: "active" / "inactive")
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "employees"

    # 직원 고유 식별자 — Employee unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 사업장 FK — Parent business (CASCADE: 사업장 삭제 시 직원도 삭제)
    business_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    # 직원 이름 — Employee display name
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # 상태 — "active" | "inactive"
    status: Mapped[str] = mapped_column(String(20), default="active")
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (Index("ix_employees_business", "business_id"),)

    # 관계 — Relationships
    business = relationship("Business", back_populates="employees")
    shifts = relationship("EmployeeShift", back_populates="employee", cascade="all, delete-orphan")


class EmployeeShift(Base):
    """직원 근무 모델 — 한 직원의 하루 근무 구간 [start_time, end_time).

    Employee shift model — One scheduled work interval for one employee.
    Times are naive local wall-clock values on 30-minute boundaries.

    Attributes:
        id: 고유 식별자 UUID, 저장소가 발급 (Unique identifier, assigned by the store)
        business_id: 소속 사업장 FK (Parent business)
        employee_id: 근무 직원 FK (Assigned employee)
        start_time: 시작 일시 (Start, naive local datetime)
        end_time: 종료 일시 (End, naive local datetime)
        notes: 메모, 선택 (Optional free text)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "employee_shifts"

    # 근무 고유 식별자 — Shift unique identifier
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소속 사업장 FK — Parent business
    business_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    # 근무 직원 FK — Assigned employee (CASCADE: 직원 삭제 시 근무도 삭제)
    employee_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False)
    # 시작 일시 — Naive local wall-clock start
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    # 종료 일시 — Naive local wall-clock end (exclusive)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    # 메모 — Optional note
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint("start_time < end_time", name="ck_employee_shifts_start_before_end"),
        Index("ix_employee_shifts_business_start", "business_id", "start_time"),
        Index("ix_employee_shifts_employee_start", "employee_id", "start_time"),
    )

    # 관계 — Relationships
    business = relationship("Business", back_populates="shifts")
    employee = relationship("Employee", back_populates="shifts")
