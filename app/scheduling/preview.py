"""미리보기 상태 — 저장 전 근무의 임시 렌더링 위치.

Preview state: the tentative, not-yet-persisted position of the shift being
resized or moved. It never enters the authoritative shift list; renderers
overlay it on top of that list until the write settles.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime

from app.schemas.schedule import ShiftResponse

PreviewListener = Callable[["ShiftPreview | None"], None]


@dataclass(frozen=True)
class ShiftPreview:
    """한 근무의 임시 위치 — Tentative start/end of one shift."""

    shift_id: str
    start_time: datetime
    end_time: datetime

    @property
    def day(self) -> date:
        return self.start_time.date()


class PreviewState:
    """최대 하나의 활성 미리보기를 보관합니다.

    Holds at most one active preview, keyed by shift id, and notifies
    listeners (the UI adapter) whenever it changes.
    """

    def __init__(self) -> None:
        self._current: ShiftPreview | None = None
        self._listeners: list[PreviewListener] = []

    @property
    def current(self) -> ShiftPreview | None:
        return self._current

    def subscribe(self, listener: PreviewListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, preview: ShiftPreview) -> None:
        if preview == self._current:
            return
        self._current = preview
        self._notify()

    def clear(self, shift_id: str | None = None) -> None:
        """미리보기를 지웁니다. shift_id가 주어지면 해당 근무일 때만.

        Discard the preview; with shift_id, only if it belongs to that shift.
        """
        if self._current is None:
            return
        if shift_id is not None and self._current.shift_id != shift_id:
            return
        self._current = None
        self._notify()

    def for_shift(self, shift_id: str) -> ShiftPreview | None:
        if self._current is not None and self._current.shift_id == shift_id:
            return self._current
        return None

    def render(self, shifts: Iterable[ShiftResponse]) -> list[ShiftResponse]:
        """권위 목록에 미리보기를 덮어쓴 렌더링용 사본을 반환합니다.

        Copies of the authoritative shifts with the preview applied; the
        input list is never modified.
        """
        rendered: list[ShiftResponse] = []
        for shift in shifts:
            preview = self.for_shift(shift.id)
            if preview is None:
                rendered.append(shift)
            else:
                rendered.append(
                    shift.model_copy(update={"start_time": preview.start_time, "end_time": preview.end_time})
                )
        return rendered

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)
