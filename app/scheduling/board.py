"""스케줄 보드 — 주간 그리드의 상호작용 코어.

Schedule board: the UI-framework-agnostic core behind the weekly manager
grid. It owns the shared gesture slot and the preview, routes input to the
create / resize / move controllers, and exposes the render data a thin UI
adapter needs (time slots, day columns, shift blocks).

The shift and employee lists are owned by the caller: after a write
settles the caller refreshes them with set_shifts / set_employees, and the
board never edits them itself.
"""

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from app.config import settings
from app.scheduling.context import BoardContext
from app.scheduling.drag_create import DragCreateController
from app.scheduling.edit import ShiftEditor
from app.scheduling.gateway import ShiftGateway
from app.scheduling.gestures import (
    CommitOutcome,
    GestureState,
    GestureTarget,
    GridGeometry,
    InputEventSource,
    Moving,
    PointerSample,
    Resizing,
)
from app.scheduling.move import MoveController
from app.scheduling.overlap import day_key, has_conflict
from app.scheduling.preview import PreviewState
from app.scheduling.resize import ResizeController
from app.scheduling.signals import EditOpener, WarningSink, ignore_edit, log_warning
from app.scheduling.summary import WeeklySummary, summarize_week
from app.scheduling.time_grid import BlockRect, TimeGridModel, TimeSlot, at_minutes
from app.schemas.business import WeekTimeRange
from app.schemas.schedule import EmployeeResponse, ShiftCreate, ShiftResponse

logger = logging.getLogger(__name__)


def week_days_from(week_start: date, count: int | None = None) -> list[date]:
    count = settings.SCHEDULE_DAYS_PER_WEEK if count is None else count
    return [week_start + timedelta(days=i) for i in range(count)]


@dataclass(frozen=True)
class ShiftBlock:
    """렌더링할 근무 블록 — A shift block as the grid should draw it."""

    shift: ShiftResponse
    rect: BlockRect
    is_preview: bool = False


class ScheduleBoard:
    """주간 관리자 스케줄 보드.

    Weekly manager schedule board.

    Attributes:
        ctx: 컨트롤러 공유 컨텍스트 (Context shared by the controllers)
        creator: 드롭 생성 컨트롤러 (Drag-create controller)
        resizer: 리사이즈 컨트롤러 (Resize controller)
        mover: 이동 컨트롤러 (Move controller)
    """

    def __init__(
        self,
        gateway: ShiftGateway,
        week_start: date,
        *,
        shifts: Sequence[ShiftResponse] = (),
        employees: Sequence[EmployeeResponse] = (),
        time_range: WeekTimeRange | None = None,
        layout: GridGeometry | None = None,
        warn: WarningSink | None = None,
        open_edit: EditOpener | None = None,
        slot_height: float | None = None,
        minutes_per_slot: int | None = None,
        drag_threshold: float | None = None,
        default_shift_minutes: int | None = None,
    ) -> None:
        self._grid_options: dict[str, float | int | None] = {
            "slot_height": slot_height,
            "minutes_per_slot": minutes_per_slot,
        }
        self.week_start: date = week_start
        self.time_range: WeekTimeRange = time_range or WeekTimeRange.default()
        self.ctx: BoardContext = BoardContext(
            gateway=gateway,
            grid=TimeGridModel.from_time_range(self.time_range, **self._grid_options),
            week_days=week_days_from(week_start),
            shifts=list(shifts),
            employees=list(employees),
            layout=layout,
            warn=warn or log_warning,
            open_edit=open_edit or ignore_edit,
        )
        self.creator: DragCreateController = DragCreateController(self.ctx, default_shift_minutes)
        self.resizer: ResizeController = ResizeController(self.ctx)
        self.mover: MoveController = MoveController(self.ctx, drag_threshold)
        self._tasks: set[asyncio.Task[CommitOutcome]] = set()
        self._copying: bool = False

    # ------------------------------------------------------------------
    # 외부 데이터 — Caller-owned inputs
    # ------------------------------------------------------------------
    @property
    def grid(self) -> TimeGridModel:
        return self.ctx.grid

    @property
    def preview(self) -> PreviewState:
        return self.ctx.preview

    @property
    def gesture(self) -> GestureState:
        return self.ctx.slot.state

    @property
    def shifts(self) -> list[ShiftResponse]:
        return list(self.ctx.shifts)

    @property
    def week_days(self) -> list[date]:
        return list(self.ctx.week_days)

    def set_shifts(self, shifts: Sequence[ShiftResponse]) -> None:
        """권위 근무 목록을 교체합니다 — Replace the authoritative shift list."""
        self.ctx.shifts = list(shifts)

    def set_employees(self, employees: Sequence[EmployeeResponse]) -> None:
        self.ctx.employees = list(employees)

    def set_layout(self, layout: GridGeometry | None) -> None:
        self.ctx.layout = layout

    def set_time_range(self, time_range: WeekTimeRange | None) -> None:
        """영업시간 범위가 바뀌면 그리드와 슬롯을 다시 만듭니다."""
        self.time_range = time_range or WeekTimeRange.default()
        self.ctx.grid = TimeGridModel.from_time_range(self.time_range, **self._grid_options)

    def set_week(self, week_start: date) -> None:
        self.week_start = week_start
        self.ctx.week_days = week_days_from(week_start)

    def attach(self, source: InputEventSource):
        """입력 소스에 보드를 연결하고 해제 함수를 반환합니다."""
        return source.subscribe(self)

    # ------------------------------------------------------------------
    # 렌더링 데이터 — Render data
    # ------------------------------------------------------------------
    @property
    def time_slots(self) -> list[TimeSlot]:
        return self.ctx.grid.slots

    @property
    def total_height(self) -> float:
        return self.ctx.grid.total_height

    @property
    def active_employees(self) -> list[EmployeeResponse]:
        return [e for e in self.ctx.employees if e.is_active]

    def shifts_between(self, start_day: date, end_day: date) -> list[ShiftResponse]:
        """[start_day, end_day) 사이에 시작하는 근무."""
        lower, upper = at_minutes(start_day, 0), at_minutes(end_day, 0)
        return [s for s in self.ctx.shifts if lower <= s.start_time < upper]

    @property
    def visible_shifts(self) -> list[ShiftResponse]:
        days = self.ctx.week_days
        return self.shifts_between(days[0], days[-1] + timedelta(days=1)) if days else []

    def shifts_by_day(self) -> dict[str, list[ShiftResponse]]:
        by_day: dict[str, list[ShiftResponse]] = {day_key(d): [] for d in self.ctx.week_days}
        for shift in self.ctx.shifts:
            key = day_key(shift.start_time)
            if key in by_day:
                by_day[key].append(shift)
        return by_day

    def blocks_for_day(self, day: date) -> list[ShiftBlock]:
        """한 요일 열에 그릴 근무 블록.

        Blocks for one day column. The previewed shift is drawn at its
        preview position only, so a moving shift leaves its original column
        and a resizing shift keeps its start with the preview end.
        """
        key = day_key(day)
        preview = self.ctx.preview.current
        blocks: list[ShiftBlock] = []
        for shift in self.ctx.preview.render(self.ctx.shifts):
            if day_key(shift.start_time) != key:
                continue
            blocks.append(
                ShiftBlock(
                    shift=shift,
                    rect=self.ctx.grid.rect_for(shift),
                    is_preview=preview is not None and preview.shift_id == shift.id,
                )
            )
        return blocks

    def summary(self) -> WeeklySummary:
        return summarize_week(self.visible_shifts, self.ctx.employees, self.ctx.week_days)

    def editor(self) -> ShiftEditor:
        return ShiftEditor(self.ctx.gateway, time_range=self.time_range, all_shifts=self.ctx.shifts)

    # ------------------------------------------------------------------
    # 드래그 생성 — Drag-create
    # ------------------------------------------------------------------
    def drag_over(self, day: date, slot: TimeSlot) -> str:
        return self.creator.drag_over()

    async def drop_employee(self, employee_id: str, day: date, slot_hour: int, slot_minute: int) -> CommitOutcome:
        return await self.creator.drop(employee_id, day, slot_hour, slot_minute)

    # ------------------------------------------------------------------
    # 포인터 제스처 — Pointer gestures
    # ------------------------------------------------------------------
    def start_resize(self, shift_id: str, sample: PointerSample) -> bool:
        return self.resizer.begin(shift_id, sample)

    def start_move(self, shift_id: str, sample: PointerSample) -> bool:
        return self.mover.begin(shift_id, sample)

    def pointer_move(self, sample: PointerSample) -> None:
        state = self.ctx.slot.state
        if isinstance(state, Resizing):
            self.resizer.move(sample)
        elif isinstance(state, Moving):
            self.mover.move(sample)

    async def pointer_up(self, sample: PointerSample, inside_grid: bool | None = None) -> CommitOutcome:
        """현재 제스처를 끝냅니다.

        End the active gesture. When the adapter does not say whether the
        release happened inside the grid, the published grid rectangle decides
        (no rectangle counts as inside).
        """
        state = self.ctx.slot.state
        if isinstance(state, Resizing):
            return await self.resizer.end(sample)
        if isinstance(state, Moving):
            if inside_grid is None:
                layout = self.ctx.layout
                inside_grid = layout.contains(sample) if layout is not None else True
            return await self.mover.end(sample, inside_grid)
        return CommitOutcome.IGNORED

    def release(self, sample: PointerSample, inside_grid: bool | None = None) -> "asyncio.Task[CommitOutcome]":
        """포인터 업을 이벤트 루프에 예약하고 즉시 반환합니다.

        Schedule pointer_up on the running loop without waiting for the
        write; the task is tracked until it settles.
        """
        task = asyncio.get_running_loop().create_task(self.pointer_up(sample, inside_grid))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self) -> list[CommitOutcome]:
        """예약된 모든 커밋이 끝날 때까지 기다립니다."""
        if not self._tasks:
            return []
        return list(await asyncio.gather(*list(self._tasks)))

    # GestureListener — InputEventSource 콜백
    def on_gesture_start(self, target: GestureTarget, shift_id: str, sample: PointerSample) -> bool:
        if target is GestureTarget.RESIZE_HANDLE:
            return self.start_resize(shift_id, sample)
        return self.start_move(shift_id, sample)

    def on_gesture_move(self, sample: PointerSample) -> None:
        self.pointer_move(sample)

    def on_gesture_end(self, sample: PointerSample, inside_grid: bool | None = None) -> None:
        if self.ctx.slot.is_idle:
            return
        self.release(sample, inside_grid)

    # ------------------------------------------------------------------
    # 지난주 복사 / 삭제 — Copy from last week, delete
    # ------------------------------------------------------------------
    def last_week_shifts(self) -> list[ShiftResponse]:
        previous_start = self.week_start - timedelta(days=7)
        return self.shifts_between(previous_start, self.week_start)

    def can_copy_from_last_week(self) -> bool:
        return not self.visible_shifts and bool(self.last_week_shifts())

    async def copy_from_last_week(self) -> int:
        """지난주 근무를 같은 요일/시각으로 이번 주에 복사합니다.

        Re-create every shift of the previous week on the same weekday and
        time of the visible week, keeping duration and notes. Copies that fall
        outside the current window or overlap a shift of the same employee
        are skipped.

        Returns:
            int: 생성된 근무 수 (Number of shifts created)
        """
        if self._copying:
            return 0
        self._copying = True
        created = 0
        previous_start = self.week_start - timedelta(days=7)
        try:
            for shift in sorted(self.last_week_shifts(), key=lambda s: s.start_time):
                offset = shift.start_time.date() - previous_start
                new_start = datetime.combine(self.week_start + offset, shift.start_time.time())
                new_end = new_start + (shift.end_time - shift.start_time)
                if not self.ctx.grid.contains(new_start, new_end):
                    logger.debug("Skipping copy of %s: outside business hours", shift.id)
                    continue
                if has_conflict(self.ctx.shifts, shift.employee_id, new_start, new_start, new_end):
                    logger.debug("Skipping copy of %s: same-employee overlap", shift.id)
                    continue
                result = await self.ctx.gateway.add_shift(
                    ShiftCreate(
                        employee_id=shift.employee_id,
                        start_time=new_start,
                        end_time=new_end,
                        notes=shift.notes,
                    )
                )
                if result is not None:
                    created += 1
        finally:
            self._copying = False
        logger.info("Copied %d shift(s) into week of %s", created, self.week_start)
        return created

    async def delete_shift(self, shift_id: str) -> bool:
        if self.ctx.slot.is_pending(shift_id):
            return False
        async with self.ctx.slot.writing(shift_id):
            return await self.ctx.gateway.delete_shift(shift_id)
