"""근무 서비스 — 직원 근무 일정 CRUD 비즈니스 로직.

Shift Service — Business logic for employee shift CRUD.
Every write is checked against the shift invariants before it is flushed:
start before end, both on slot boundaries, inside the business window of
the start's calendar day, and no overlap with the same employee's other
shifts that day.
"""

from datetime import date, datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.business import Business
from app.models.schedule import EmployeeShift
from app.repositories.employee_repository import employee_repository
from app.repositories.shift_repository import shift_repository
from app.scheduling.business_hours import resolve_time_range
from app.scheduling.overlap import has_conflict
from app.scheduling.time_grid import TimeGridModel
from app.schemas.schedule import ShiftCreate, ShiftResponse, ShiftUpdate
from app.services.business_service import business_service
from app.utils.exceptions import BadRequestError, ConflictError, NotFoundError


def _parse_uuid(value: str, label: str) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise NotFoundError(f"{label} not found")


class ShiftService:
    """근무 관련 비즈니스 로직을 처리하는 서비스.

    Service handling employee shift business logic.
    """

    def _to_response(self, shift: EmployeeShift) -> ShiftResponse:
        """근무 모델을 응답 스키마로 변환합니다.

        Convert an EmployeeShift model instance to a ShiftResponse schema.
        """
        return ShiftResponse(
            id=str(shift.id),
            employee_id=str(shift.employee_id),
            start_time=shift.start_time,
            end_time=shift.end_time,
            notes=shift.notes,
        )

    async def _verify_employee(self, db: AsyncSession, employee_id: str, business_id: UUID) -> UUID:
        """직원이 사업장에 속하는지 확인합니다.

        Raises:
            NotFoundError: 직원을 찾을 수 없거나 다른 사업장 소속일 때
                           (Employee not found in this business)
        """
        employee_uuid: UUID = _parse_uuid(employee_id, "Employee")
        if await employee_repository.get_by_id(db, employee_uuid, business_id) is None:
            raise NotFoundError("Employee not found")
        return employee_uuid

    def _validate_interval(self, business: Business, start: datetime, end: datetime) -> None:
        """근무 구간 불변식을 검증합니다.

        Validate the interval invariants that do not need other shifts.

        Raises:
            BadRequestError: 시작 >= 종료, 슬롯 경계가 아님, 영업시간 밖
                             (Start not before end, off-grid, outside the window)
        """
        if start.tzinfo is not None or end.tzinfo is not None:
            raise BadRequestError("Shift times must be naive local times")
        if start >= end:
            raise BadRequestError("end must be after start")

        grid: TimeGridModel = TimeGridModel.from_time_range(resolve_time_range(business.business_hours))
        for value in (start, end):
            if value.second or value.microsecond or (value.hour * 60 + value.minute) % grid.minutes_per_slot:
                raise BadRequestError(
                    f"Shift times must fall on {grid.minutes_per_slot}-minute boundaries"
                )
        if not grid.contains(start, end):
            raise BadRequestError("outside business hours")

    async def _check_overlap(
        self,
        db: AsyncSession,
        employee_id: UUID,
        start: datetime,
        end: datetime,
        exclude_shift_id: UUID | None = None,
    ) -> None:
        same_day: list[EmployeeShift] = await shift_repository.get_for_employee_on_day(
            db, employee_id, start.date()
        )
        if has_conflict(same_day, employee_id, start, start, end, exclude_shift_id=exclude_shift_id):
            raise ConflictError()

    async def list_shifts(
        self,
        db: AsyncSession,
        business_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
        employee_id: UUID | None = None,
    ) -> list[ShiftResponse]:
        """사업장 근무 목록을 조회합니다.

        List a business's shifts, optionally limited to [date_from, date_to]
        and one employee.

        Raises:
            NotFoundError: 사업장을 찾을 수 없을 때 (Business not found)
        """
        await business_service.get_business_model(db, business_id)
        shifts: list[EmployeeShift] = await shift_repository.get_by_business(
            db, business_id, date_from, date_to, employee_id
        )
        return [self._to_response(s) for s in shifts]

    async def create_shift(
        self,
        db: AsyncSession,
        business_id: UUID,
        data: ShiftCreate,
    ) -> ShiftResponse:
        """새 근무를 생성합니다.

        Create a shift after validating it.

        Raises:
            NotFoundError: 사업장 또는 직원을 찾을 수 없을 때 (Business or employee not found)
            BadRequestError: 구간 불변식 위반 (Interval invariant violated)
            ConflictError: 같은 직원의 근무와 겹칠 때 (Same-employee overlap)
        """
        business: Business = await business_service.get_business_model(db, business_id)
        employee_uuid: UUID = await self._verify_employee(db, data.employee_id, business_id)
        self._validate_interval(business, data.start_time, data.end_time)
        await self._check_overlap(db, employee_uuid, data.start_time, data.end_time)

        shift: EmployeeShift = await shift_repository.create(
            db,
            {
                "business_id": business_id,
                "employee_id": employee_uuid,
                "start_time": data.start_time,
                "end_time": data.end_time,
                "notes": data.notes,
            },
        )
        return self._to_response(shift)

    async def update_shift(
        self,
        db: AsyncSession,
        business_id: UUID,
        shift_id: UUID,
        data: ShiftUpdate,
    ) -> ShiftResponse:
        """근무를 부분 수정합니다.

        Apply a partial update. When either time changes, the merged
        interval is validated and checked for overlap excluding this shift.

        Raises:
            NotFoundError: 근무를 찾을 수 없을 때 (Shift not found)
            BadRequestError: 구간 불변식 위반 (Interval invariant violated)
            ConflictError: 같은 직원의 근무와 겹칠 때 (Same-employee overlap)
        """
        business: Business = await business_service.get_business_model(db, business_id)
        existing: EmployeeShift | None = await shift_repository.get_by_id(db, shift_id, business_id)
        if existing is None:
            raise NotFoundError("Shift not found")

        update_data: dict = data.model_dump(exclude_unset=True)
        if any(key in update_data and update_data[key] is None for key in ("start_time", "end_time")):
            raise BadRequestError("start_time and end_time cannot be cleared")

        if "start_time" in update_data or "end_time" in update_data:
            start: datetime = update_data.get("start_time", existing.start_time)
            end: datetime = update_data.get("end_time", existing.end_time)
            self._validate_interval(business, start, end)
            await self._check_overlap(db, existing.employee_id, start, end, exclude_shift_id=shift_id)

        shift: EmployeeShift | None = await shift_repository.update(db, shift_id, update_data, business_id)
        if shift is None:
            raise NotFoundError("Shift not found")
        return self._to_response(shift)

    async def delete_shift(
        self,
        db: AsyncSession,
        business_id: UUID,
        shift_id: UUID,
    ) -> None:
        """근무를 삭제합니다.

        Raises:
            NotFoundError: 근무를 찾을 수 없을 때 (Shift not found)
        """
        deleted: bool = await shift_repository.delete(db, shift_id, business_id)
        if not deleted:
            raise NotFoundError("Shift not found")


# 싱글턴 인스턴스 — Singleton instance
shift_service: ShiftService = ShiftService()
