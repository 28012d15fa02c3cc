"""시간 그리드 모델 — 픽셀 ↔ 시각 변환.

Time grid model — pure geometry for the weekly schedule grid.
Maps a [start_minutes, end_minutes) business window onto a fixed-height
ordered sequence of slots and converts between pixel offsets and clock
times. Slot height and slot length are injected so the geometry works for
any grid scale.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Protocol

from app.config import settings
from app.schemas.business import MINUTES_PER_DAY, WeekTimeRange


class TimedShift(Protocol):
    """시작/종료 시각을 가진 근무 — Anything with start_time and end_time."""

    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class TimeSlot:
    """그리드 한 칸 — One slot boundary of the grid with its 12-hour label."""

    hour: int
    minute: int
    label: str

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute


@dataclass(frozen=True)
class BlockRect:
    """근무 블록의 세로 위치 — Vertical placement of a shift block in pixels."""

    top: float
    height: float


def round_half_up(value: float) -> int:
    """0.5를 올림하는 반올림 — Round to nearest integer, halves away from -inf."""
    return math.floor(value + 0.5)


def format_slot_label(hour: int, minute: int) -> str:
    """12시간제 라벨을 만듭니다 — e.g. "7:00 AM", "12:30 PM", "12:00 AM"."""
    suffix = "AM" if hour < 12 else "PM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def minutes_of_day(value: datetime) -> int:
    return value.hour * 60 + value.minute


def at_minutes(day: date | datetime, minutes: int) -> datetime:
    """날짜 + 자정 이후 분 → 일시. 1440분은 다음날 자정이 됩니다.

    Combine a calendar day with minutes since midnight (1440 rolls over to
    the next day's midnight).
    """
    if isinstance(day, datetime):
        day = day.date()
    return datetime.combine(day, time()) + timedelta(minutes=minutes)


class TimeGridModel:
    """주간 스케줄 그리드의 기하 모델.

    Geometry of the weekly schedule grid.

    Attributes:
        start_minutes: 그리드 시작 분 (Window start, minutes since midnight)
        end_minutes: 그리드 종료 분 (Window end, minutes since midnight)
        slot_height: 슬롯 높이 픽셀 (Pixel height of one slot)
        minutes_per_slot: 슬롯 길이 분 (Minutes per slot)
        min_block_height: 최소 블록 높이 픽셀 (Minimum rendered block height)
    """

    def __init__(
        self,
        start_minutes: int | None = None,
        end_minutes: int | None = None,
        slot_height: float | None = None,
        minutes_per_slot: int | None = None,
        min_block_height: float | None = None,
    ) -> None:
        self.start_minutes: int = (
            settings.SCHEDULE_DEFAULT_START_MINUTES if start_minutes is None else start_minutes
        )
        self.end_minutes: int = (
            settings.SCHEDULE_DEFAULT_END_MINUTES if end_minutes is None else end_minutes
        )
        self.slot_height: float = (
            settings.SCHEDULE_SLOT_HEIGHT_PX if slot_height is None else slot_height
        )
        self.minutes_per_slot: int = (
            settings.SCHEDULE_MINUTES_PER_SLOT if minutes_per_slot is None else minutes_per_slot
        )
        self.min_block_height: float = (
            settings.SCHEDULE_MIN_BLOCK_HEIGHT_PX if min_block_height is None else min_block_height
        )

        if not 0 <= self.start_minutes < self.end_minutes <= MINUTES_PER_DAY:
            raise ValueError(
                f"Invalid grid window [{self.start_minutes}, {self.end_minutes})"
            )
        if self.slot_height <= 0 or self.minutes_per_slot <= 0:
            raise ValueError("slot_height and minutes_per_slot must be positive")

        self._slots: list[TimeSlot] = self.slots_for(self.start_minutes, self.end_minutes)

    @classmethod
    def from_time_range(cls, time_range: WeekTimeRange | None, **kwargs) -> "TimeGridModel":
        """WeekTimeRange로 그리드를 만듭니다. None이면 기본 07:00–21:00.

        Build a grid for a business window (default window when None).
        """
        time_range = time_range or WeekTimeRange.default()
        return cls(time_range.start_minutes, time_range.end_minutes, **kwargs)

    # ------------------------------------------------------------------
    # 슬롯 — Slots
    # ------------------------------------------------------------------
    def slots_for(self, start_minutes: int, end_minutes: int) -> list[TimeSlot]:
        """[start, end) 구간의 슬롯 목록을 생성합니다.

        One TimeSlot per slot boundary in [start_minutes, end_minutes).
        """
        return [
            TimeSlot(hour=m // 60, minute=m % 60, label=format_slot_label(m // 60, m % 60))
            for m in range(start_minutes, end_minutes, self.minutes_per_slot)
        ]

    @property
    def slots(self) -> list[TimeSlot]:
        return list(self._slots)

    @property
    def slot_count(self) -> int:
        return len(self._slots)

    @property
    def total_height(self) -> float:
        return self.slot_count * self.slot_height

    @property
    def window_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    # ------------------------------------------------------------------
    # 변환 — Conversions
    # ------------------------------------------------------------------
    def time_to_offset(self, minutes: float, range_start: int | None = None) -> float:
        """자정 이후 분 → 그리드 상단 기준 픽셀 오프셋."""
        range_start = self.start_minutes if range_start is None else range_start
        return ((minutes - range_start) / self.minutes_per_slot) * self.slot_height

    def offset_to_time_of_day(self, offset: float, range_start: int | None = None) -> int:
        """픽셀 오프셋 → 가장 가까운 슬롯 경계로 스냅된 자정 이후 분."""
        range_start = self.start_minutes if range_start is None else range_start
        return self.snap_minutes(range_start + (offset / self.slot_height) * self.minutes_per_slot)

    def pixels_to_minutes(self, delta_px: float) -> int:
        """세로 이동 픽셀 → 분 (정수 반올림, 스냅 전)."""
        return round_half_up((delta_px / self.slot_height) * self.minutes_per_slot)

    def snap_minutes(self, minutes: float) -> int:
        """가장 가까운 슬롯 경계로 반올림합니다 (절반은 올림)."""
        return round_half_up(minutes / self.minutes_per_slot) * self.minutes_per_slot

    def snap(self, value: datetime) -> datetime:
        """일시를 가장 가까운 슬롯 경계로 스냅합니다 (초 단위는 버림).

        Snap a datetime to the nearest slot boundary on its calendar day;
        with 30-minute slots a minute-of-hour of 15 rounds up.
        """
        return at_minutes(value, self.snap_minutes(minutes_of_day(value)))

    def slot_index_at(self, offset: float) -> int:
        """그리드 상단 기준 오프셋이 속한 슬롯 인덱스 (범위로 제한)."""
        index = math.floor(offset / self.slot_height)
        return max(0, min(self.slot_count - 1, index))

    def slot_start(self, index: int) -> int:
        return self.start_minutes + index * self.minutes_per_slot

    # ------------------------------------------------------------------
    # 날짜 경계 — Per-day window
    # ------------------------------------------------------------------
    def day_open(self, day: date | datetime) -> datetime:
        return at_minutes(day, self.start_minutes)

    def day_close(self, day: date | datetime) -> datetime:
        return at_minutes(day, self.end_minutes)

    def clamp_interval(self, day: date, start_minutes: int, duration_minutes: int) -> tuple[datetime, datetime]:
        """구간을 그날 영업시간 안으로 이동시켜 맞춥니다.

        Fit an interval inside the day's window: the duration is kept (at
        least one slot, at most the window length) and the whole interval is
        shifted so neither edge leaves the window.
        """
        duration = max(self.minutes_per_slot, min(duration_minutes, self.window_minutes))
        start = max(self.start_minutes, min(start_minutes, self.end_minutes - duration))
        return at_minutes(day, start), at_minutes(day, start + duration)

    def contains(self, start: datetime, end: datetime) -> bool:
        """구간이 그날 영업시간 안에 있는지 확인합니다."""
        return self.day_open(start) <= start and end <= self.day_close(start)

    # ------------------------------------------------------------------
    # 렌더링 — Rendering
    # ------------------------------------------------------------------
    def rect_for(
        self,
        shift: TimedShift,
        range_start: int | None = None,
        end_time: datetime | None = None,
    ) -> BlockRect:
        """근무 블록의 top/height를 계산합니다.

        Block placement for a shift; end_time overrides the shift's end
        (resize preview). Height is floored at min_block_height for
        legibility only.
        """
        end = end_time or shift.end_time
        top = self.time_to_offset(minutes_of_day(shift.start_time), range_start)
        duration = (end - shift.start_time).total_seconds() / 60
        height = (duration / self.minutes_per_slot) * self.slot_height
        return BlockRect(top=top, height=max(height, self.min_block_height))
