"""관리자 근무 라우터 — 사업장 하위 직원 근무 CRUD 엔드포인트.

Admin Shift Router — CRUD endpoints for employee shifts under a business.
All endpoints are nested under /businesses/{business_id}/shifts; this is
the store the scheduling board's HttpShiftGateway talks to.
"""

from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.schedule import ShiftCreate, ShiftResponse, ShiftUpdate
from app.services.shift_service import shift_service

router: APIRouter = APIRouter()


@router.get(
    "/businesses/{business_id}/shifts",
    response_model=list[ShiftResponse],
)
async def list_shifts(
    business_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    date_from: Annotated[date | None, Query()] = None,
    date_to: Annotated[date | None, Query()] = None,
    employee_id: Annotated[UUID | None, Query()] = None,
) -> list[ShiftResponse]:
    """사업장 근무 목록을 조회합니다.

    List shifts starting within [date_from, date_to], optionally for one
    employee.
    """
    return await shift_service.list_shifts(db, business_id, date_from, date_to, employee_id)


@router.post(
    "/businesses/{business_id}/shifts",
    response_model=ShiftResponse,
    status_code=201,
)
async def create_shift(
    business_id: UUID,
    data: ShiftCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftResponse:
    """새 근무를 생성합니다.

    Create a shift. 409 on same-employee overlap, 400 when the interval
    breaks the grid or business-hours rules.
    """
    result: ShiftResponse = await shift_service.create_shift(db, business_id, data)
    await db.commit()
    return result


@router.put(
    "/businesses/{business_id}/shifts/{shift_id}",
    response_model=ShiftResponse,
)
async def update_shift(
    business_id: UUID,
    shift_id: UUID,
    data: ShiftUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ShiftResponse:
    """근무를 부분 수정합니다.

    Update an existing shift with the fields that were sent.
    """
    result: ShiftResponse = await shift_service.update_shift(db, business_id, shift_id, data)
    await db.commit()
    return result


@router.delete(
    "/businesses/{business_id}/shifts/{shift_id}",
    status_code=204,
)
async def delete_shift(
    business_id: UUID,
    shift_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """근무를 삭제합니다.

    Delete a shift by its ID.
    """
    await shift_service.delete_shift(db, business_id, shift_id)
    await db.commit()
