"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    business: 사업장 및 영업시간 (Business and operating hours)
    schedule: 직원 및 직원 근무 (Employees and employee shifts)
"""

from app.models.business import Business
from app.models.schedule import Employee, EmployeeShift

__all__ = [
    "Business",
    "Employee", "EmployeeShift",
]
