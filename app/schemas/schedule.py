"""직원/근무 관련 Pydantic 요청/응답 스키마 정의.

Employee and employee-shift Pydantic request/response schema definitions.
The response schemas double as the read models of the scheduling core:
the board consumes ShiftResponse / EmployeeResponse lists and issues
ShiftCreate / ShiftUpdate commands through a gateway.
"""

from datetime import datetime

from pydantic import BaseModel, field_validator


def _require_naive(value: datetime | None) -> datetime | None:
    """시간대 정보가 없는 로컬 시각만 허용합니다 — Only naive wall-clock values."""
    if value is not None and value.tzinfo is not None:
        raise ValueError("shift times are naive local wall-clock values")
    return value


# === 직원 (Employee) 스키마 ===

class EmployeeCreate(BaseModel):
    """직원 생성 요청 스키마.

    Employee creation request schema.

    Attributes:
        name: 직원 이름 (Employee name)
        status: 상태 (Status, default "active")
    """

    name: str  # 직원 이름 (Employee name)
    status: str = "active"  # 상태 — "active" | "inactive"


class EmployeeResponse(BaseModel):
    """직원 응답 스키마.

    Employee response schema.

    Attributes:
        id: 직원 UUID (Employee identifier)
        name: 직원 이름 (Employee name)
        status: 상태 (Status)
    """

    id: str  # 직원 UUID 문자열 (Employee UUID as string)
    name: str  # 직원 이름 (Employee name)
    status: str = "active"  # 상태 (Status)

    @property
    def is_active(self) -> bool:
        return self.status == "active"


# === 근무 (Shift) 스키마 ===

class ShiftCreate(BaseModel):
    """근무 생성 요청 스키마.

    Shift creation request schema (the gateway's add_shift payload).

    Attributes:
        employee_id: 근무 직원 UUID (Assigned employee)
        start_time: 시작 일시 (Naive local start)
        end_time: 종료 일시 (Naive local end)
        notes: 메모, 선택 (Optional note)
    """

    employee_id: str  # 근무 직원 UUID (Employee identifier)
    start_time: datetime  # 시작 일시 (Start)
    end_time: datetime  # 종료 일시 (End, exclusive)
    notes: str | None = None  # 메모 (Optional note)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_naive_times(cls, value: datetime | None) -> datetime | None:
        return _require_naive(value)


class ShiftUpdate(BaseModel):
    """근무 수정 요청 스키마 (부분 업데이트).

    Shift update request schema (partial update). Only fields explicitly set
    are sent and applied.

    Attributes:
        start_time: 새 시작 일시, 선택 (New start, optional)
        end_time: 새 종료 일시, 선택 (New end, optional)
        notes: 새 메모, 선택 (New note, optional)
    """

    start_time: datetime | None = None  # 새 시작 일시 (New start)
    end_time: datetime | None = None  # 새 종료 일시 (New end)
    notes: str | None = None  # 새 메모 (New note)

    @field_validator("start_time", "end_time")
    @classmethod
    def check_naive_times(cls, value: datetime | None) -> datetime | None:
        return _require_naive(value)


class ShiftResponse(BaseModel):
    """근무 응답 스키마.

    Shift response schema, also the authoritative shift record the
    scheduling board renders.

    Attributes:
        id: 근무 UUID (Shift identifier)
        employee_id: 근무 직원 UUID (Assigned employee)
        start_time: 시작 일시 (Start)
        end_time: 종료 일시 (End, exclusive)
        notes: 메모 (Optional note)
    """

    id: str  # 근무 UUID 문자열 (Shift UUID as string)
    employee_id: str  # 직원 UUID 문자열 (Employee UUID as string)
    start_time: datetime  # 시작 일시 (Start)
    end_time: datetime  # 종료 일시 (End)
    notes: str | None = None  # 메모 (Optional note)
