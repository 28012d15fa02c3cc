"""같은 직원 근무 겹침 검사.

Same-employee overlap validation.
Two half-open intervals [a, b) and [c, d) conflict iff a < d and c < b, so
back-to-back shifts touching at a boundary are allowed. Used by every
create, resize, and move commit on the board and by the shift store.
"""

from collections.abc import Iterable
from datetime import date, datetime
from typing import Any, Protocol


class ShiftLike(Protocol):
    """겹침 검사에 필요한 근무 속성 — Shift attributes the validator reads."""

    id: Any
    employee_id: Any
    start_time: datetime
    end_time: datetime


def as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


def day_key(value: date | datetime | str) -> str:
    """날짜 키 "YYYY-MM-DD" — Calendar-day key of a date, datetime, or ISO string."""
    if isinstance(value, str):
        return value[:10] if len(value) == 10 else as_datetime(value).date().isoformat()
    if isinstance(value, datetime):
        return value.date().isoformat()
    return value.isoformat()


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    return a_start < b_end and b_start < a_end


def _candidates(
    all_shifts: Iterable[ShiftLike],
    employee_id: Any,
    exclude_shift_id: Any | None,
) -> Iterable[ShiftLike]:
    # id 타입(UUID/str)이 섞여도 비교되도록 문자열로 정규화
    employee_key = str(employee_id)
    exclude_key = str(exclude_shift_id) if exclude_shift_id is not None else None
    for shift in all_shifts:
        if str(shift.employee_id) != employee_key:
            continue
        if exclude_key is not None and str(shift.id) == exclude_key:
            continue
        yield shift


def has_conflict(
    all_shifts: Iterable[ShiftLike],
    employee_id: Any,
    day: date | datetime | str,
    candidate_start: datetime | str,
    candidate_end: datetime | str,
    exclude_shift_id: Any | None = None,
) -> bool:
    """같은 직원의 같은 날 다른 근무와 겹치는지 확인합니다.

    True if [candidate_start, candidate_end) overlaps another shift of the
    same employee on the same calendar day. The shift being edited is
    skipped via exclude_shift_id so it never conflicts with itself.

    Args:
        all_shifts: 전체 근무 목록 (All shifts currently known)
        employee_id: 직원 ID (Employee to check)
        day: 날짜 키 또는 날짜 (Calendar day)
        candidate_start: 후보 시작 (Candidate start)
        candidate_end: 후보 종료 (Candidate end, exclusive)
        exclude_shift_id: 제외할 근무 ID (Shift to ignore, optional)

    Returns:
        bool: 겹침 여부 (Whether a conflict exists)
    """
    key = day_key(day)
    start = as_datetime(candidate_start)
    end = as_datetime(candidate_end)
    return any(
        day_key(shift.start_time) == key
        and intervals_overlap(start, end, shift.start_time, shift.end_time)
        for shift in _candidates(all_shifts, employee_id, exclude_shift_id)
    )


def has_conflict_by_time(
    all_shifts: Iterable[ShiftLike],
    employee_id: Any,
    candidate_start: datetime | str,
    candidate_end: datetime | str,
    exclude_shift_id: Any | None = None,
) -> bool:
    """날짜 구분 없이 같은 직원의 다른 근무와 겹치는지 확인합니다.

    Any-day variant of has_conflict, used by the edit surface where an end
    time may roll over to the next day.
    """
    start = as_datetime(candidate_start)
    end = as_datetime(candidate_end)
    return any(
        intervals_overlap(start, end, shift.start_time, shift.end_time)
        for shift in _candidates(all_shifts, employee_id, exclude_shift_id)
    )
