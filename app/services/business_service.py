"""사업장 서비스 — 사업장 및 영업시간 비즈니스 로직.

Business Service — Business logic for businesses and their weekly
operating hours, which determine the schedule grid's time window.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.business import Business
from app.repositories.business_repository import business_repository
from app.scheduling.business_hours import (
    DAYS_OF_WEEK,
    DEFAULT_DAY_HOURS,
    parse_business_hours,
    resolve_time_range,
    serialize_business_hours,
    time_to_minutes,
)
from app.scheduling.edit import parse_time_hhmm
from app.schemas.business import BusinessCreate, BusinessResponse, DayHours, WeekTimeRange
from app.utils.exceptions import BadRequestError, NotFoundError


class BusinessService:
    """사업장 관련 비즈니스 로직을 처리하는 서비스.

    Service handling business and operating-hours logic.
    """

    def _to_response(self, business: Business) -> BusinessResponse:
        """사업장 모델을 응답 스키마로 변환합니다.

        Convert a Business model instance to a BusinessResponse schema.

        Args:
            business: 사업장 모델 (Business model instance)

        Returns:
            BusinessResponse: 사업장 응답 (Business response)
        """
        return BusinessResponse(
            id=str(business.id),
            name=business.name,
            business_hours=(
                parse_business_hours(business.business_hours) if business.business_hours else None
            ),
            time_range=resolve_time_range(business.business_hours),
        )

    def _normalize_hours(self, hours: dict[str, DayHours]) -> dict[str, DayHours]:
        """영업시간 입력을 검증하고 7개 요일로 채웁니다.

        Validate submitted hours and fill missing weekdays with defaults.

        Raises:
            BadRequestError: 알 수 없는 요일, 잘못된 시각 형식, 개점 >= 폐점
                             (Unknown weekday, bad "HH:MM", off-grid time,
                             open not before close)
        """
        unknown: set[str] = set(hours) - set(DAYS_OF_WEEK)
        if unknown:
            raise BadRequestError(f"Unknown weekday: {', '.join(sorted(unknown))}")

        normalized: dict[str, DayHours] = {}
        for day in DAYS_OF_WEEK:
            day_hours: DayHours = hours.get(day, DEFAULT_DAY_HOURS)
            if parse_time_hhmm(day_hours.open) is None or parse_time_hhmm(day_hours.close) is None:
                raise BadRequestError(f"Invalid time format for {day}")
            if not day_hours.closed and (
                time_to_minutes(day_hours.open) % settings.SCHEDULE_MINUTES_PER_SLOT
                or time_to_minutes(day_hours.close) % settings.SCHEDULE_MINUTES_PER_SLOT
            ):
                raise BadRequestError(
                    f"Hours for {day} must fall on {settings.SCHEDULE_MINUTES_PER_SLOT}-minute boundaries"
                )
            if not day_hours.closed and time_to_minutes(day_hours.open) >= time_to_minutes(day_hours.close):
                raise BadRequestError(f"Opening time must be before closing time for {day}")
            normalized[day] = day_hours.model_copy()
        return normalized

    async def get_business_model(self, db: AsyncSession, business_id: UUID) -> Business:
        """사업장을 조회합니다. 없으면 404.

        Raises:
            NotFoundError: 사업장을 찾을 수 없을 때 (Business not found)
        """
        business: Business | None = await business_repository.get_by_id(db, business_id)
        if business is None:
            raise NotFoundError("Business not found")
        return business

    async def create_business(self, db: AsyncSession, data: BusinessCreate) -> BusinessResponse:
        """새 사업장을 생성합니다.

        Create a new business; hours are optional and may be set later.
        """
        serialized: str | None = None
        if data.business_hours is not None:
            serialized = serialize_business_hours(self._normalize_hours(data.business_hours))

        business: Business = await business_repository.create(
            db, {"name": data.name, "business_hours": serialized}
        )
        return self._to_response(business)

    async def get_business(self, db: AsyncSession, business_id: UUID) -> BusinessResponse:
        return self._to_response(await self.get_business_model(db, business_id))

    async def get_time_range(self, db: AsyncSession, business_id: UUID) -> WeekTimeRange:
        """주간 그리드 시간 범위를 조회합니다.

        Effective week window: configured hours, or 07:00–21:00 when unset.
        """
        business: Business = await self.get_business_model(db, business_id)
        return resolve_time_range(business.business_hours)

    async def update_business_hours(
        self,
        db: AsyncSession,
        business_id: UUID,
        hours: dict[str, DayHours],
    ) -> BusinessResponse:
        """영업시간을 교체합니다.

        Replace the business's weekly hours. Existing shifts are not
        revalidated against the new window.
        """
        await self.get_business_model(db, business_id)
        serialized: str = serialize_business_hours(self._normalize_hours(hours))
        business: Business | None = await business_repository.update(
            db, business_id, {"business_hours": serialized}
        )
        if business is None:
            raise NotFoundError("Business not found")
        return self._to_response(business)


# 싱글턴 인스턴스 — Singleton instance
business_service: BusinessService = BusinessService()
