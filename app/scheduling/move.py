"""이동 컨트롤러 — 근무 본체 드래그로 요일/시각 변경.

Move controller: dragging a shift body moves it to another day column
and/or time, keeping its duration.

    Idle ─pointerdown(body)─▶ Moving ─pointermove*─▶ Moving ─pointerup─▶ Idle

Displacement beyond the drag threshold in either axis marks the gesture as
a drag; a release without it is a click and opens the edit surface.
"""

import logging
import math
from dataclasses import replace
from datetime import datetime

from app.config import settings
from app.scheduling.context import BoardContext
from app.scheduling.gestures import CommitOutcome, GridGeometry, Moving, PointerSample
from app.scheduling.overlap import has_conflict
from app.scheduling.preview import ShiftPreview
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP
from app.scheduling.time_grid import minutes_of_day
from app.schemas.schedule import ShiftResponse, ShiftUpdate

logger = logging.getLogger(__name__)


def _duration_minutes(shift: ShiftResponse) -> int:
    return int((shift.end_time - shift.start_time).total_seconds() // 60)


class MoveController:
    """근무 이동 제스처.

    Move gesture for a whole shift.

    Attributes:
        drag_threshold: 드래그로 판정하는 최소 이동 픽셀 (Pixels before a press becomes a drag)
    """

    def __init__(self, ctx: BoardContext, drag_threshold: float | None = None) -> None:
        self.ctx: BoardContext = ctx
        self.drag_threshold: float = (
            settings.SCHEDULE_DRAG_THRESHOLD_PX if drag_threshold is None else drag_threshold
        )

    @property
    def active(self) -> Moving | None:
        state = self.ctx.slot.state
        return state if isinstance(state, Moving) else None

    def begin(self, shift_id: str, origin: PointerSample) -> bool:
        shift = self.ctx.find_shift(shift_id)
        if shift is None:
            return False
        return self.ctx.slot.begin(Moving(shift=shift, origin=origin))

    # ------------------------------------------------------------------
    # 기하 계산 — Geometry
    # ------------------------------------------------------------------
    def target(self, state: Moving, sample: PointerSample, layout: GridGeometry) -> tuple[datetime, datetime]:
        """포인터 위치의 (시작, 종료)를 계산합니다.

        Day column from the horizontal position, slot from the vertical
        position, both clamped to the grid; the original duration is kept and
        the interval is fitted inside the target day's window.
        """
        grid = self.ctx.grid
        days = self.ctx.week_days

        day_width = (layout.width - layout.label_column_width) / len(days)
        day_index = math.floor((sample.x - layout.left - layout.label_column_width) / day_width)
        day_index = max(0, min(len(days) - 1, day_index))

        slot_index = grid.slot_index_at(sample.y - layout.top)
        start_minutes = grid.slot_start(slot_index)

        return grid.clamp_interval(days[day_index], start_minutes, _duration_minutes(state.shift))

    def vertical_target(self, shift: ShiftResponse, delta_minutes: int) -> tuple[datetime, datetime]:
        """그리드 좌표 없이 세로 이동량만으로 같은 날 안에서 옮깁니다.

        Same-day fallback used when the adapter has not published the grid
        rectangle: both edges move by -delta_minutes, where delta is positive
        when the pointer moved down, so a downward drag moves the shift
        earlier. The result is snapped to the grid and fitted inside the
        day's window.
        """
        start_minutes = self.ctx.grid.snap_minutes(minutes_of_day(shift.start_time) - delta_minutes)
        return self.ctx.grid.clamp_interval(
            shift.start_time.date(), start_minutes, _duration_minutes(shift)
        )

    # ------------------------------------------------------------------
    # 제스처 — Gesture
    # ------------------------------------------------------------------
    def move(self, sample: PointerSample) -> ShiftPreview | None:
        state = self.active
        if state is None:
            return None

        if not state.did_drag:
            delta_x, delta_y = sample.delta_from(state.origin)
            if abs(delta_x) > self.drag_threshold or abs(delta_y) > self.drag_threshold:
                state = replace(state, did_drag=True)
                self.ctx.slot.update(state)

        layout = self.ctx.layout
        if not state.did_drag or layout is None or not self.ctx.week_days:
            return None

        start, end = self.target(state, sample, layout)
        preview = ShiftPreview(shift_id=state.shift_id, start_time=start, end_time=end)
        self.ctx.preview.publish(preview)
        return preview

    async def end(self, sample: PointerSample, inside_grid: bool) -> CommitOutcome:
        """이동을 끝내고 클릭/취소/저장 중 하나로 처리합니다.

        Finish the gesture:
            - no drag: click, open the edit surface, discard any preview
            - released outside the grid: discard, no mutation
            - otherwise: validate the final interval and persist it
        """
        state = self.active
        if state is None:
            return CommitOutcome.IGNORED
        self.ctx.slot.finish()
        # 마지막 포인터 위치도 드래그 판정에 포함 — Final position counts toward the threshold
        if not state.did_drag:
            delta_x, delta_y = sample.delta_from(state.origin)
            if abs(delta_x) > self.drag_threshold or abs(delta_y) > self.drag_threshold:
                state = replace(state, did_drag=True)

        shift_id = state.shift_id

        if not state.did_drag:
            self.ctx.preview.clear(shift_id)
            current = self.ctx.find_shift(shift_id)
            if current is None:
                return CommitOutcome.STALE
            self.ctx.open_edit(current)
            return CommitOutcome.CLICK

        if not inside_grid:
            self.ctx.preview.clear(shift_id)
            return CommitOutcome.CANCELLED

        current = self.ctx.find_shift(shift_id)
        if current is None:
            logger.debug("Move target %s disappeared; aborting", shift_id)
            self.ctx.preview.clear(shift_id)
            return CommitOutcome.STALE

        layout = self.ctx.layout
        if layout is not None and self.ctx.week_days:
            start, end = self.target(replace(state, shift=current), sample, layout)
        else:
            # 현재 - 원점: 아래로 끌면 양수, 양 끝을 -delta 만큼 이동
            delta_minutes = self.ctx.grid.pixels_to_minutes(sample.y - state.origin.y)
            if delta_minutes == 0:
                self.ctx.preview.clear(shift_id)
                return CommitOutcome.UNCHANGED
            start, end = self.vertical_target(current, delta_minutes)

        if start == current.start_time and end == current.end_time:
            self.ctx.preview.clear(shift_id)
            return CommitOutcome.UNCHANGED

        if has_conflict(
            self.ctx.shifts,
            current.employee_id,
            start,
            start,
            end,
            exclude_shift_id=shift_id,
        ):
            self.ctx.preview.clear(shift_id)
            self.ctx.warn(SAME_EMPLOYEE_OVERLAP)
            return CommitOutcome.CONFLICT

        # 저장이 끝날 때까지 미리보기를 유지 — Preview stays until the write settles
        self.ctx.preview.publish(ShiftPreview(shift_id=shift_id, start_time=start, end_time=end))
        try:
            return await self.ctx.persist_update(shift_id, ShiftUpdate(start_time=start, end_time=end))
        finally:
            self.ctx.preview.clear(shift_id)
