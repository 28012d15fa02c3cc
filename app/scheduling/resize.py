"""리사이즈 컨트롤러 — 근무 하단 핸들 드래그로 종료 시각 조정.

Resize controller: dragging a shift's bottom handle changes its end time.

    Idle ─pointerdown(handle)─▶ Resizing ─pointermove*─▶ Resizing ─pointerup─▶ Idle

Every move recomputes the candidate end from the gesture origin (no drift
accumulates), snaps it to the grid, and clamps it to
[start + one slot, close of that day].
"""

import logging
from datetime import datetime, timedelta

from app.scheduling.context import BoardContext
from app.scheduling.gestures import CommitOutcome, PointerSample, Resizing
from app.scheduling.overlap import has_conflict
from app.scheduling.preview import ShiftPreview
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP
from app.schemas.schedule import ShiftUpdate

logger = logging.getLogger(__name__)


class ResizeController:
    """근무 종료 시각 리사이즈 제스처.

    Resize gesture for a shift's end time.
    """

    def __init__(self, ctx: BoardContext) -> None:
        self.ctx: BoardContext = ctx

    @property
    def active(self) -> Resizing | None:
        state = self.ctx.slot.state
        return state if isinstance(state, Resizing) else None

    def begin(self, shift_id: str, origin: PointerSample) -> bool:
        """리사이즈를 시작합니다. 다른 제스처가 진행 중이면 False."""
        shift = self.ctx.find_shift(shift_id)
        if shift is None:
            return False
        return self.ctx.slot.begin(
            Resizing(
                shift_id=shift.id,
                shift_start=shift.start_time,
                original_end=shift.end_time,
                origin=origin,
            )
        )

    def candidate_end(self, state: Resizing, sample: PointerSample) -> datetime:
        """포인터 위치로 스냅/제한된 종료 시각을 계산합니다.

        Candidate end for the pointer position: original end plus the
        rounded pointer delta, snapped, then clamped to at least one slot
        after the start and at most the close of the shift's day.
        """
        grid = self.ctx.grid
        _, delta_y = sample.delta_from(state.origin)
        delta_minutes = grid.pixels_to_minutes(delta_y)
        candidate = grid.snap(state.original_end + timedelta(minutes=delta_minutes))

        min_end = state.shift_start + timedelta(minutes=grid.minutes_per_slot)
        max_end = grid.day_close(state.shift_start)
        if candidate < min_end:
            candidate = min_end
        if candidate > max_end:
            candidate = max_end
        return candidate

    def move(self, sample: PointerSample) -> ShiftPreview | None:
        state = self.active
        if state is None:
            return None
        preview = ShiftPreview(
            shift_id=state.shift_id,
            start_time=state.shift_start,
            end_time=self.candidate_end(state, sample),
        )
        self.ctx.preview.publish(preview)
        return preview

    async def end(self, sample: PointerSample) -> CommitOutcome:
        """리사이즈를 끝내고 검증 후 저장합니다.

        Finish the gesture: recompute the candidate from the final pointer,
        abort silently if the shift vanished, warn on overlap, otherwise
        clear the preview and persist the new end time.
        """
        state = self.active
        if state is None:
            return CommitOutcome.IGNORED
        self.ctx.slot.finish()
        new_end = self.candidate_end(state, sample)

        shift = self.ctx.find_shift(state.shift_id)
        if shift is None:
            logger.debug("Resize target %s disappeared; aborting", state.shift_id)
            self.ctx.preview.clear(state.shift_id)
            return CommitOutcome.STALE

        if has_conflict(
            self.ctx.shifts,
            shift.employee_id,
            state.shift_start,
            state.shift_start,
            new_end,
            exclude_shift_id=shift.id,
        ):
            self.ctx.preview.clear(state.shift_id)
            self.ctx.warn(SAME_EMPLOYEE_OVERLAP)
            return CommitOutcome.CONFLICT

        self.ctx.preview.clear(state.shift_id)
        if new_end == shift.end_time:
            return CommitOutcome.UNCHANGED
        return await self.ctx.persist_update(shift.id, ShiftUpdate(end_time=new_end))
