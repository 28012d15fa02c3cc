"""직원 레포지토리 — 직원 명부 쿼리.

Employee Repository — Roster queries scoped to a business.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Employee
from app.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """직원 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the employees table.
    """

    def __init__(self) -> None:
        super().__init__(Employee)

    async def get_by_business(
        self,
        db: AsyncSession,
        business_id: UUID,
        status: str | None = None,
    ) -> list[Employee]:
        """사업장 직원 목록을 이름순으로 조회합니다.

        Retrieve a business's employees ordered by name.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            business_id: 사업장 ID (Business UUID)
            status: 상태 필터, 선택 (Optional status filter, e.g. "active")

        Returns:
            list[Employee]: 직원 목록 (Employees ordered by name)
        """
        query: Select = select(Employee).where(Employee.business_id == business_id)
        if status is not None:
            query = query.where(Employee.status == status)
        result = await db.execute(query.order_by(Employee.name))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
employee_repository: EmployeeRepository = EmployeeRepository()
