"""주간 근무 시간 요약.

Weekly hours summary per employee and per day, with the shifts behind each
cell so a renderer can open them. Active employees are always listed;
inactive employees appear only when they have shifts in the list.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date

from app.scheduling.overlap import day_key
from app.schemas.schedule import EmployeeResponse, ShiftResponse


def shift_hours(shift: ShiftResponse) -> float:
    return (shift.end_time - shift.start_time).total_seconds() / 3600


@dataclass
class EmployeeWeek:
    """한 직원의 주간 합계 — One employee's row in the summary."""

    employee_id: str
    name: str
    total_hours: float = 0.0
    hours_by_day: dict[str, float] = field(default_factory=dict)
    shifts_by_day: dict[str, list[ShiftResponse]] = field(default_factory=dict)


@dataclass
class WeeklySummary:
    days: list[str]
    rows: list[EmployeeWeek]

    def row(self, employee_id: str) -> EmployeeWeek | None:
        return next((r for r in self.rows if r.employee_id == employee_id), None)

    @property
    def total_hours(self) -> float:
        return sum(r.total_hours for r in self.rows)


def summarize_week(
    shifts: Iterable[ShiftResponse],
    employees: Sequence[EmployeeResponse],
    week_days: Sequence[date],
) -> WeeklySummary:
    """주간 근무 시간을 직원/요일별로 집계합니다.

    Aggregate hours per employee and per visible day. Shifts outside the
    visible days count toward the employee's total but not toward any day
    cell, as in the weekly table.

    Args:
        shifts: 근무 목록 (Shifts to aggregate)
        employees: 직원 명부 (Roster, used for names and ordering)
        week_days: 표시 날짜 (Visible days)

    Returns:
        WeeklySummary: 직원별 행 (One row per employee)
    """
    keys: list[str] = [day_key(d) for d in week_days]
    names: dict[str, str] = {e.id: e.name for e in employees}
    rows: dict[str, EmployeeWeek] = {}

    def ensure(employee_id: str) -> EmployeeWeek:
        if employee_id not in rows:
            rows[employee_id] = EmployeeWeek(
                employee_id=employee_id,
                name=names.get(employee_id, ""),
                hours_by_day={k: 0.0 for k in keys},
                shifts_by_day={k: [] for k in keys},
            )
        return rows[employee_id]

    for employee in employees:
        if employee.is_active:
            ensure(employee.id)

    for shift in shifts:
        row = ensure(shift.employee_id)
        hours = shift_hours(shift)
        row.total_hours += hours
        key = day_key(shift.start_time)
        if key in row.hours_by_day:
            row.hours_by_day[key] += hours
            row.shifts_by_day[key].append(shift)

    return WeeklySummary(days=keys, rows=list(rows.values()))
