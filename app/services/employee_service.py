"""직원 서비스 — 직원 명부 비즈니스 로직.

Employee Service — Roster listing and creation under a business.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.schedule import Employee
from app.repositories.employee_repository import employee_repository
from app.schemas.schedule import EmployeeCreate, EmployeeResponse
from app.services.business_service import business_service
from app.utils.exceptions import BadRequestError

# 허용 상태 — Allowed employee statuses
EMPLOYEE_STATUSES: tuple[str, ...] = ("active", "inactive")


class EmployeeService:
    """직원 관련 비즈니스 로직을 처리하는 서비스.

    Service handling employee roster logic.
    """

    def _to_response(self, employee: Employee) -> EmployeeResponse:
        return EmployeeResponse(
            id=str(employee.id),
            name=employee.name,
            status=employee.status,
        )

    async def list_employees(
        self,
        db: AsyncSession,
        business_id: UUID,
        status: str | None = None,
    ) -> list[EmployeeResponse]:
        """사업장 직원 목록을 조회합니다.

        List a business's employees, optionally filtered by status.

        Raises:
            NotFoundError: 사업장을 찾을 수 없을 때 (Business not found)
        """
        await business_service.get_business_model(db, business_id)
        employees: list[Employee] = await employee_repository.get_by_business(db, business_id, status)
        return [self._to_response(e) for e in employees]

    async def create_employee(
        self,
        db: AsyncSession,
        business_id: UUID,
        data: EmployeeCreate,
    ) -> EmployeeResponse:
        """새 직원을 등록합니다.

        Add an employee to a business's roster.

        Raises:
            NotFoundError: 사업장을 찾을 수 없을 때 (Business not found)
            BadRequestError: 알 수 없는 상태 값 (Unknown status)
        """
        await business_service.get_business_model(db, business_id)
        if data.status not in EMPLOYEE_STATUSES:
            raise BadRequestError(f"Unknown employee status: {data.status}")
        if not data.name.strip():
            raise BadRequestError("Employee name is required")

        employee: Employee = await employee_repository.create(
            db,
            {"business_id": business_id, "name": data.name.strip(), "status": data.status},
        )
        return self._to_response(employee)


# 싱글턴 인스턴스 — Singleton instance
employee_service: EmployeeService = EmployeeService()
