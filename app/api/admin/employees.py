"""관리자 직원 라우터 — 사업장 하위 직원 명부 엔드포인트.

Admin Employee Router — Roster endpoints nested under
/businesses/{business_id}/employees.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.schedule import EmployeeCreate, EmployeeResponse
from app.services.employee_service import employee_service

router: APIRouter = APIRouter()


@router.get(
    "/businesses/{business_id}/employees",
    response_model=list[EmployeeResponse],
)
async def list_employees(
    business_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    status: Annotated[str | None, Query()] = None,
) -> list[EmployeeResponse]:
    """사업장 직원 목록을 조회합니다.

    List a business's employees, optionally filtered by status.
    """
    return await employee_service.list_employees(db, business_id, status)


@router.post(
    "/businesses/{business_id}/employees",
    response_model=EmployeeResponse,
    status_code=201,
)
async def create_employee(
    business_id: UUID,
    data: EmployeeCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EmployeeResponse:
    """새 직원을 등록합니다."""
    result: EmployeeResponse = await employee_service.create_employee(db, business_id, data)
    await db.commit()
    return result
