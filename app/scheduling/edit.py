"""근무 편집 — 클릭으로 열리는 편집 화면의 검증과 저장.

Shift edit surface logic (opened by a click on a shift): parses the typed
"HH:MM" times, rounds them to the half hour, validates them against the
business window and the employee's other shifts, and saves or deletes
through the gateway.
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta

from app.scheduling.gateway import ShiftGateway
from app.scheduling.overlap import has_conflict_by_time
from app.scheduling.signals import SAME_EMPLOYEE_OVERLAP
from app.scheduling.time_grid import at_minutes, round_half_up
from app.schemas.business import WeekTimeRange
from app.schemas.schedule import ShiftResponse, ShiftUpdate

logger = logging.getLogger(__name__)

# 편집 오류 메시지 키 — Edit error message keys
INVALID_TIME_FORMAT: str = "invalid time format"
END_MUST_BE_AFTER_START: str = "end must be after start"
OUTSIDE_BUSINESS_HOURS: str = "outside business hours"
SAVE_FAILED: str = "save failed"

_TIME_PATTERN = re.compile(r"^\d{1,2}:\d{2}$")


def parse_time_hhmm(value: str) -> tuple[int, int] | None:
    """"HH:MM" → (시, 분). 형식이나 범위가 틀리면 None."""
    if not value or not _TIME_PATTERN.match(value):
        return None
    hour, minute = (int(part) for part in value.split(":"))
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def round_to_half_hour(hour: int, minute: int) -> tuple[int, int]:
    rounded = round_half_up((hour * 60 + minute) / 30) * 30
    return (rounded // 60) % 24, rounded % 60


def format_time_input(value: datetime) -> str:
    return value.strftime("%H:%M")


@dataclass(frozen=True)
class EditResult:
    """편집 저장 결과 — Outcome of saving the edit surface."""

    ok: bool
    error: str | None = None


class ShiftEditor:
    """근무 편집 화면의 동작.

    Attributes:
        gateway: 근무 저장소 게이트웨이 (Persistence gateway)
        time_range: 영업시간 범위, 설정 시 벗어나면 저장 차단 (Business window)
        all_shifts: 겹침 검사용 전체 근무 (Shifts checked for overlap)
    """

    def __init__(
        self,
        gateway: ShiftGateway,
        time_range: WeekTimeRange | None = None,
        all_shifts: Sequence[ShiftResponse] | None = None,
    ) -> None:
        self.gateway: ShiftGateway = gateway
        self.time_range: WeekTimeRange | None = time_range
        self.all_shifts: Sequence[ShiftResponse] | None = all_shifts

    def resolve(self, shift: ShiftResponse, start_text: str, end_text: str) -> tuple[datetime, datetime] | str:
        """입력 시각을 근무일 기준 일시로 변환하고 검증합니다.

        Resolve typed times on the shift's calendar day. An end at or before
        the start rolls over to the next day. Returns the (start, end) pair or
        an error message key.
        """
        start_parsed = parse_time_hhmm(start_text)
        end_parsed = parse_time_hhmm(end_text)
        if start_parsed is None or end_parsed is None:
            return INVALID_TIME_FORMAT

        day = shift.start_time.date()
        start_hour, start_minute = round_to_half_hour(*start_parsed)
        end_hour, end_minute = round_to_half_hour(*end_parsed)

        start = at_minutes(day, start_hour * 60 + start_minute)
        end_day = day + timedelta(days=1) if end_parsed <= start_parsed else day
        end = at_minutes(end_day, end_hour * 60 + end_minute)

        if end <= start:
            return END_MUST_BE_AFTER_START

        if self.time_range is not None:
            open_at = at_minutes(day, self.time_range.start_minutes)
            close_at = at_minutes(day, self.time_range.end_minutes)
            if start < open_at or end > close_at:
                return OUTSIDE_BUSINESS_HOURS

        if self.all_shifts is not None and has_conflict_by_time(
            self.all_shifts, shift.employee_id, start, end, exclude_shift_id=shift.id
        ):
            return SAME_EMPLOYEE_OVERLAP

        return start, end

    async def save(
        self,
        shift: ShiftResponse,
        start_text: str,
        end_text: str,
        notes: str = "",
    ) -> EditResult:
        resolved = self.resolve(shift, start_text, end_text)
        if isinstance(resolved, str):
            return EditResult(ok=False, error=resolved)

        start, end = resolved
        patch = ShiftUpdate(start_time=start, end_time=end, notes=notes.strip() or None)
        try:
            await self.gateway.update_shift(shift.id, patch)
        except Exception:
            logger.warning("Saving shift %s from the edit surface failed", shift.id, exc_info=True)
            return EditResult(ok=False, error=SAVE_FAILED)
        return EditResult(ok=True)

    async def delete(self, shift: ShiftResponse) -> bool:
        return await self.gateway.delete_shift(shift.id)
