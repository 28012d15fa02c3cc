"""제스처 상태 머신 — 리사이즈/이동 드래그의 공유 상태.

Gesture state machine shared by the resize and move controllers.

State:
    Idle ──(pointerdown on handle)──▶ Resizing ──(pointerup)──▶ Idle
    Idle ──(pointerdown on body)────▶ Moving ───(pointerup)──▶ Idle

Only one gesture can be active at a time, and a shift whose write is still
in flight cannot start a new gesture until that write settles. Input
toolkits adapt their native pointer events to the InputEventSource protocol.
"""

import enum
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, Union

from app.config import settings
from app.schemas.schedule import ShiftResponse


@dataclass(frozen=True)
class PointerSample:
    """포인터 위치 (뷰포트 좌표) — Pointer position in viewport coordinates."""

    x: float
    y: float

    def delta_from(self, origin: "PointerSample") -> tuple[float, float]:
        return self.x - origin.x, self.y - origin.y


@dataclass(frozen=True)
class GridGeometry:
    """그리드 영역의 화면 좌표 — On-screen rectangle of the grid body.

    label_column_width is the fixed time-label column on the left; the rest
    of the width is split evenly between the visible days.
    """

    left: float
    top: float
    width: float
    height: float
    label_column_width: float = field(default_factory=lambda: settings.SCHEDULE_TIME_COLUMN_WIDTH_PX)

    def contains(self, sample: PointerSample) -> bool:
        return (
            self.left <= sample.x <= self.left + self.width
            and self.top <= sample.y <= self.top + self.height
        )


class GestureTarget(str, enum.Enum):
    """포인터가 눌린 대상 — Which part of a shift block was pressed."""

    RESIZE_HANDLE = "resize_handle"
    SHIFT_BODY = "shift_body"


class CommitOutcome(str, enum.Enum):
    """제스처 종료 결과 — How a gesture or drop ended."""

    COMMITTED = "committed"  # 저장 완료 (Persisted)
    CONFLICT = "conflict"  # 겹침으로 중단, 경고 표시 (Overlap, warned)
    FAILED = "failed"  # 저장소 실패 (Gateway rejected or returned nothing)
    STALE = "stale"  # 대상 근무가 사라짐 (Target vanished, silent)
    CLICK = "click"  # 이동 없이 클릭 (Click, edit opened)
    CANCELLED = "cancelled"  # 그리드 밖 놓기 등 (Released outside / no movement)
    UNCHANGED = "unchanged"  # 위치 변화 없음 (Same interval as before)
    IGNORED = "ignored"  # 유효하지 않은 입력 (Nothing to do)
    BUSY = "busy"  # 다른 제스처 진행 중 (Another gesture or write active)


@dataclass(frozen=True)
class Idle:
    """대기 상태 — No gesture in progress."""


@dataclass(frozen=True)
class Resizing:
    """하단 핸들 드래그 중 — Dragging a shift's bottom handle."""

    shift_id: str
    shift_start: datetime
    original_end: datetime
    origin: PointerSample


@dataclass(frozen=True)
class Moving:
    """근무 본체 드래그 중 — Dragging a shift body."""

    shift: ShiftResponse
    origin: PointerSample
    did_drag: bool = False

    @property
    def shift_id(self) -> str:
        return self.shift.id


GestureState = Union[Idle, Resizing, Moving]

IDLE: Idle = Idle()


@dataclass
class GestureSlot:
    """모든 컨트롤러가 공유하는 단일 제스처 슬롯.

    The single mutable active-gesture slot shared by all controllers, plus
    the set of shift ids whose writes are still in flight.
    """

    state: GestureState = IDLE
    pending: set[str] = field(default_factory=set)

    @property
    def is_idle(self) -> bool:
        return isinstance(self.state, Idle)

    def is_pending(self, shift_id: str) -> bool:
        return shift_id in self.pending

    def begin(self, state: Resizing | Moving) -> bool:
        """대기 상태이고 대상 근무에 진행 중인 저장이 없을 때만 시작합니다."""
        if not self.is_idle or self.is_pending(state.shift_id):
            return False
        self.state = state
        return True

    def update(self, state: Resizing | Moving) -> None:
        self.state = state

    def finish(self) -> GestureState:
        state, self.state = self.state, IDLE
        return state

    @asynccontextmanager
    async def writing(self, shift_id: str) -> AsyncIterator[None]:
        """저장 중인 근무를 표시합니다 — Mark a shift as having a write in flight."""
        self.pending.add(shift_id)
        try:
            yield
        finally:
            self.pending.discard(shift_id)


class GestureListener(Protocol):
    """입력 소스가 호출하는 제스처 콜백 — Callbacks an input source drives."""

    def on_gesture_start(self, target: GestureTarget, shift_id: str, sample: PointerSample) -> bool: ...

    def on_gesture_move(self, sample: PointerSample) -> None: ...

    def on_gesture_end(self, sample: PointerSample, inside_grid: bool | None = None) -> None: ...


class InputEventSource(Protocol):
    """UI 툴킷 어댑터가 구현하는 입력 인터페이스.

    Implemented by the UI toolkit adapter: native pointer events are
    translated into gesture callbacks on subscribed listeners.
    """

    def subscribe(self, listener: GestureListener) -> Callable[[], None]: ...


class PointerEventSource:
    """리스너에게 포인터 이벤트를 전달하는 기본 입력 소스.

    Plain InputEventSource an adapter feeds with already-decoded pointer
    events (press on a shift part, drag, release).
    """

    def __init__(self) -> None:
        self._listeners: list[GestureListener] = []

    def subscribe(self, listener: GestureListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def press(self, target: GestureTarget, shift_id: str, x: float, y: float) -> bool:
        # 핸들에서 시작된 제스처는 첫 리스너가 소비하면 전파를 멈춥니다
        # A gesture claimed by one listener is not offered to the others
        sample = PointerSample(x, y)
        return any(listener.on_gesture_start(target, shift_id, sample) for listener in list(self._listeners))

    def drag(self, x: float, y: float) -> None:
        sample = PointerSample(x, y)
        for listener in list(self._listeners):
            listener.on_gesture_move(sample)

    def release(self, x: float, y: float, inside_grid: bool | None = None) -> None:
        sample = PointerSample(x, y)
        for listener in list(self._listeners):
            listener.on_gesture_end(sample, inside_grid)
