"""드래그 생성 컨트롤러 — 직원 칩을 그리드 칸에 놓아 근무 생성.

Drag-create controller: dropping an active employee's chip onto a grid cell
creates a shift starting at that cell with the default length (4 hours),
cut short at the business close. Creation is instantaneous on drop, so no
preview is involved.
"""

import logging
from datetime import date, datetime, timedelta

from app.config import settings
from app.scheduling.context import BoardContext
from app.scheduling.gestures import CommitOutcome
from app.scheduling.overlap import has_conflict
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP
from app.scheduling.time_grid import at_minutes
from app.schemas.schedule import ShiftCreate

logger = logging.getLogger(__name__)

# 네이티브 드래그 효과 — Native drag effect reported while hovering a cell
DROP_EFFECT_COPY: str = "copy"


class DragCreateController:
    """드롭으로 근무를 생성합니다.

    Attributes:
        default_minutes: 기본 근무 길이 분 (Default length of a dropped shift)
    """

    def __init__(self, ctx: BoardContext, default_minutes: int | None = None) -> None:
        self.ctx: BoardContext = ctx
        self.default_minutes: int = (
            settings.SCHEDULE_DEFAULT_SHIFT_MINUTES if default_minutes is None else default_minutes
        )

    def drag_over(self) -> str:
        """칸 위로 드래그 중 — 강조만 하고 상태는 바꾸지 않습니다."""
        return DROP_EFFECT_COPY

    def interval_for(self, day: date, slot_hour: int, slot_minute: int) -> tuple[datetime, datetime]:
        """놓은 칸의 (시작, 종료)를 계산합니다.

        start = day + slot time; end = start + min(default, minutes left
        until close).
        """
        start_minutes = slot_hour * 60 + slot_minute
        remaining = self.ctx.grid.end_minutes - start_minutes
        start = at_minutes(day, start_minutes)
        return start, start + timedelta(minutes=min(self.default_minutes, remaining))

    async def drop(
        self,
        employee_id: str,
        day: date,
        slot_hour: int,
        slot_minute: int,
    ) -> CommitOutcome:
        """직원을 칸에 놓아 근무를 생성합니다.

        Drop an employee onto a cell. Empty or unknown drag data, inactive
        employees, and cells outside the window are ignored; overlap aborts
        with a warning; otherwise add_shift is called.
        """
        if not employee_id:
            return CommitOutcome.IGNORED
        if not self.ctx.slot.is_idle:
            return CommitOutcome.BUSY

        employee = self.ctx.find_employee(employee_id)
        if employee is None or not employee.is_active:
            logger.debug("Drop ignored for unknown or inactive employee %s", employee_id)
            return CommitOutcome.IGNORED

        start, end = self.interval_for(day, slot_hour, slot_minute)
        grid = self.ctx.grid
        if start < grid.day_open(day) or end <= start:
            return CommitOutcome.IGNORED

        if has_conflict(self.ctx.shifts, employee_id, day, start, end):
            self.ctx.warn(SAME_EMPLOYEE_OVERLAP)
            return CommitOutcome.CONFLICT

        try:
            created = await self.ctx.gateway.add_shift(
                ShiftCreate(employee_id=employee_id, start_time=start, end_time=end)
            )
        except Exception:
            logger.warning("add_shift for employee %s failed", employee_id, exc_info=True)
            return CommitOutcome.FAILED
        if created is None:
            return CommitOutcome.FAILED
        return CommitOutcome.COMMITTED
