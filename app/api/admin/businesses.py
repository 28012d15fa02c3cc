"""관리자 사업장 라우터 — 사업장 및 영업시간 엔드포인트.

Admin Business Router — Business creation, lookup, grid time range, and
weekly operating hours.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.schemas.business import (
    BusinessCreate,
    BusinessHoursUpdate,
    BusinessResponse,
    WeekTimeRange,
)
from app.services.business_service import business_service

router: APIRouter = APIRouter()


@router.post(
    "/businesses",
    response_model=BusinessResponse,
    status_code=201,
)
async def create_business(
    data: BusinessCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessResponse:
    """새 사업장을 생성합니다.

    Create a new business.
    """
    result: BusinessResponse = await business_service.create_business(db, data)
    await db.commit()
    return result


@router.get(
    "/businesses/{business_id}",
    response_model=BusinessResponse,
)
async def get_business(
    business_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessResponse:
    """사업장 정보를 조회합니다."""
    return await business_service.get_business(db, business_id)


@router.get(
    "/businesses/{business_id}/time-range",
    response_model=WeekTimeRange,
)
async def get_time_range(
    business_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeekTimeRange:
    """주간 스케줄 그리드의 시간 범위를 조회합니다.

    Effective grid window; 07:00–21:00 when the business has no hours set.
    """
    return await business_service.get_time_range(db, business_id)


@router.put(
    "/businesses/{business_id}/business-hours",
    response_model=BusinessResponse,
)
async def update_business_hours(
    business_id: UUID,
    data: BusinessHoursUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BusinessResponse:
    """영업시간을 교체합니다.

    Replace the business's weekly operating hours.
    """
    result: BusinessResponse = await business_service.update_business_hours(
        db, business_id, data.business_hours
    )
    await db.commit()
    return result
