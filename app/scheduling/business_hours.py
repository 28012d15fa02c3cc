"""영업시간 파싱 및 주간 시간 범위 계산.

Business-hours parsing and week time-range helpers.
Business hours are stored as a JSON string keyed by weekday name; the
schedule grid uses one window for the whole week: the earliest opening and
the latest closing across days that are not closed.
"""

import json
import math

from app.config import settings
from app.schemas.business import DayHours, WeekTimeRange

DAYS_OF_WEEK: tuple[str, ...] = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

# 기본 영업시간 — Default hours for days missing from the stored JSON
DEFAULT_DAY_HOURS: DayHours = DayHours(open="09:00", close="18:00")

# 모든 요일이 휴무일 때의 대체 범위 — Fallback when no day is open
_FALLBACK_START_MINUTES: int = 9 * 60
_FALLBACK_END_MINUTES: int = 18 * 60


def time_to_minutes(value: str) -> int:
    """"HH:MM" 문자열을 자정 이후 분(0–1439)으로 변환합니다.

    Parse "HH:MM" into minutes since midnight, clamped to 0..1439.
    Unparseable values fall back to 09:00.
    """
    try:
        hour_text, minute_text = value.split(":", 1)
        minutes = int(hour_text) * 60 + int(minute_text)
    except (AttributeError, ValueError):
        return _FALLBACK_START_MINUTES
    return max(0, min(23 * 60 + 59, minutes))


def default_business_hours() -> dict[str, DayHours]:
    return {day: DEFAULT_DAY_HOURS.model_copy() for day in DAYS_OF_WEEK}


def parse_business_hours(value: str | None) -> dict[str, DayHours]:
    """저장된 JSON 문자열을 요일별 영업시간으로 변환합니다.

    Parse the stored business-hours JSON string into per-weekday hours.
    Missing, non-object, or malformed input yields 09:00–18:00 every day;
    missing keys inside a valid object take the same defaults.

    Args:
        value: 영업시간 JSON 문자열 (Stored JSON string, may be None)

    Returns:
        dict[str, DayHours]: 요일 이름 → 영업시간 (Weekday name → hours)
    """
    if not value or not isinstance(value, str):
        return default_business_hours()

    trimmed: str = value.strip()
    if not trimmed.startswith("{"):
        return default_business_hours()

    try:
        parsed = json.loads(trimmed)
    except json.JSONDecodeError:
        return default_business_hours()

    hours: dict[str, DayHours] = {}
    for day in DAYS_OF_WEEK:
        raw = parsed.get(day) if isinstance(parsed.get(day), dict) else {}
        hours[day] = DayHours(
            closed=bool(raw.get("closed", False)),
            open=str(raw.get("open", DEFAULT_DAY_HOURS.open)),
            close=str(raw.get("close", DEFAULT_DAY_HOURS.close)),
        )
    return hours


def serialize_business_hours(hours: dict[str, DayHours]) -> str:
    return json.dumps({day: day_hours.model_dump() for day, day_hours in hours.items()})


def get_week_time_range(hours: dict[str, DayHours]) -> WeekTimeRange:
    """요일별 영업시간에서 주간 그리드 범위를 계산합니다.

    Compute one window for the week: earliest open and latest close across
    the days that are not closed. When nothing is open (or the result is
    empty) the 09:00–18:00 fallback is used. The window is widened
    outward to slot boundaries (open rounded down, close rounded up) so
    every grid slot and every shift edge lands on the slot grid.

    Args:
        hours: 요일별 영업시간 (Per-weekday hours)

    Returns:
        WeekTimeRange: 주간 그리드 범위 (Week grid window)
    """
    start_minutes: int = 24 * 60
    end_minutes: int = 0

    for day in DAYS_OF_WEEK:
        day_hours: DayHours | None = hours.get(day)
        if day_hours is not None and day_hours.closed:
            continue
        open_minutes = time_to_minutes(day_hours.open if day_hours else DEFAULT_DAY_HOURS.open)
        close_minutes = time_to_minutes(day_hours.close if day_hours else DEFAULT_DAY_HOURS.close)
        start_minutes = min(start_minutes, open_minutes)
        end_minutes = max(end_minutes, close_minutes)

    if start_minutes >= end_minutes:
        start_minutes, end_minutes = _FALLBACK_START_MINUTES, _FALLBACK_END_MINUTES

    step: int = settings.SCHEDULE_MINUTES_PER_SLOT
    start_minutes -= start_minutes % step
    end_minutes = min(24 * 60, math.ceil(end_minutes / step) * step)

    return WeekTimeRange(start_minutes=start_minutes, end_minutes=end_minutes)


def resolve_time_range(business_hours: str | None) -> WeekTimeRange:
    """사업장에 저장된 영업시간으로 그리드 범위를 결정합니다.

    Grid window for a business: the configured hours when present,
    otherwise the 07:00–21:00 default from settings.
    """
    if not business_hours:
        return WeekTimeRange.default()
    return get_week_time_range(parse_business_hours(business_hours))
