"""근무 레포지토리 — 직원 근무 일정 쿼리.

Shift Repository — Queries for scheduled employee shifts.
Extends BaseRepository with date-range and per-employee-day lookups.
"""

from datetime import date, datetime, time, timedelta
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import EmployeeShift
from app.repositories.base import BaseRepository


class ShiftRepository(BaseRepository[EmployeeShift]):
    """근무 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the employee_shifts table.
    """

    def __init__(self) -> None:
        super().__init__(EmployeeShift)

    async def get_by_business(
        self,
        db: AsyncSession,
        business_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[EmployeeShift]:
        """사업장 근무를 시작 시각순으로 조회합니다.

        Retrieve a business's shifts ordered by start time. date_from and
        date_to are inclusive calendar days matched against start_time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            business_id: 사업장 ID (Business UUID)
            date_from: 시작일 필터, 포함 (Inclusive first day)
            date_to: 종료일 필터, 포함 (Inclusive last day)
            employee_id: 직원 필터 (Employee filter)

        Returns:
            list[EmployeeShift]: 근무 목록 (Shifts ordered by start_time)
        """
        query: Select = select(EmployeeShift).where(EmployeeShift.business_id == business_id)
        if date_from is not None:
            query = query.where(EmployeeShift.start_time >= datetime.combine(date_from, time()))
        if date_to is not None:
            upper: datetime = datetime.combine(date_to + timedelta(days=1), time())
            query = query.where(EmployeeShift.start_time < upper)
        if employee_id is not None:
            query = query.where(EmployeeShift.employee_id == employee_id)
        result = await db.execute(query.order_by(EmployeeShift.start_time))
        return list(result.scalars().all())

    async def get_for_employee_on_day(
        self,
        db: AsyncSession,
        employee_id: UUID,
        day: date,
    ) -> list[EmployeeShift]:
        """직원의 특정 날짜 근무를 조회합니다 (겹침 검사용).

        Retrieve one employee's shifts starting on a calendar day.
        """
        lower: datetime = datetime.combine(day, time())
        query: Select = (
            select(EmployeeShift)
            .where(EmployeeShift.employee_id == employee_id)
            .where(EmployeeShift.start_time >= lower)
            .where(EmployeeShift.start_time < lower + timedelta(days=1))
            .order_by(EmployeeShift.start_time)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
shift_repository: ShiftRepository = ShiftRepository()
