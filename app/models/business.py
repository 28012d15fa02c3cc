"""사업장 관련 SQLAlchemy ORM 모델 정의.

Business-related SQLAlchemy ORM model definitions.
A business owns its employees and their shifts, and stores its weekly
operating hours which bound every shift on the schedule grid.

Tables:
    - businesses: 사업장 (Businesses with weekly operating hours)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Business(Base):
    """사업장 모델 — 직원과 근무 스케줄의 소유 단위.

    Business model — Tenant that owns employees and shifts.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        name: 사업장 이름 (Business display name)
        business_hours: 요일별 영업시간 JSON 문자열, 미설정 시 None
                        (Per-weekday hours JSON string, None when unset)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        employees: 소속 직원 목록 (Employees of this business)
        shifts: 근무 일정 목록 (Shifts scheduled in this business)
    """

    __tablename__ = "businesses"

    # 사업장 고유 식별자 — Business unique identifier (UUID v4, auto-generated)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 사업장 이름 — Business display name
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # 영업시간 — {"monday": {"open": "09:00", "close": "18:00", "closed": false}, ...}
    business_hours: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 생성 일시 — Record creation timestamp (UTC)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    # 수정 일시 — Last modification timestamp (UTC, auto-updated)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    employees = relationship("Employee", back_populates="business", cascade="all, delete-orphan")
    shifts = relationship("EmployeeShift", back_populates="business", cascade="all, delete-orphan")
