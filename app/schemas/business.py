"""사업장/영업시간 관련 Pydantic 요청/응답 스키마 정의.

Business and operating-hours Pydantic request/response schema definitions.
WeekTimeRange is the single [start_minutes, end_minutes) window the weekly
schedule grid is drawn for.
"""

from pydantic import BaseModel, Field, computed_field, model_validator

from app.config import settings

MINUTES_PER_DAY: int = 24 * 60


class DayHours(BaseModel):
    """요일별 영업시간 스키마.

    Operating hours for one weekday.

    Attributes:
        closed: 휴무 여부 (Whether the business is closed that day)
        open: 개점 시각 "HH:MM" (Opening time)
        close: 폐점 시각 "HH:MM" (Closing time)
    """

    closed: bool = False  # 휴무일 여부 (Closed all day)
    open: str = "09:00"  # 개점 시각 (Opening time, "HH:MM")
    close: str = "18:00"  # 폐점 시각 (Closing time, "HH:MM")


class WeekTimeRange(BaseModel):
    """주간 그리드 시간 범위 스키마.

    Time window of the weekly schedule grid in minutes since midnight.
    Shifts must start and end inside [start_minutes, end_minutes].

    Attributes:
        start_minutes: 시작 분 (Window start, minutes since midnight)
        end_minutes: 종료 분 (Window end, minutes since midnight)
    """

    start_minutes: int = Field(ge=0, le=MINUTES_PER_DAY)  # 그리드 시작 (Grid start)
    end_minutes: int = Field(ge=0, le=MINUTES_PER_DAY)  # 그리드 종료 (Grid end)

    @model_validator(mode="after")
    def check_order(self) -> "WeekTimeRange":
        if self.start_minutes >= self.end_minutes:
            raise ValueError("start_minutes must be before end_minutes")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def start_hour(self) -> int:
        return self.start_minutes // 60

    @computed_field  # type: ignore[prop-decorator]
    @property
    def start_minute(self) -> int:
        return self.start_minutes % 60

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_hour(self) -> int:
        return self.end_minutes // 60

    @computed_field  # type: ignore[prop-decorator]
    @property
    def end_minute(self) -> int:
        return self.end_minutes % 60

    @classmethod
    def default(cls) -> "WeekTimeRange":
        """설정된 기본 범위(07:00–21:00)를 반환합니다.

        Window used when the business has not configured its hours.
        """
        return cls(
            start_minutes=settings.SCHEDULE_DEFAULT_START_MINUTES,
            end_minutes=settings.SCHEDULE_DEFAULT_END_MINUTES,
        )


class BusinessCreate(BaseModel):
    """사업장 생성 요청 스키마.

    Business creation request schema.

    Attributes:
        name: 사업장 이름 (Business name)
        business_hours: 요일별 영업시간, 선택 (Optional per-weekday hours)
    """

    name: str  # 사업장 이름 (Business name)
    business_hours: dict[str, DayHours] | None = None  # 요일별 영업시간 (Per-weekday hours)


class BusinessResponse(BaseModel):
    """사업장 응답 스키마.

    Business response schema.

    Attributes:
        id: 사업장 UUID (Business identifier)
        name: 사업장 이름 (Business name)
        business_hours: 요일별 영업시간 또는 None (Per-weekday hours or None)
        time_range: 그리드 시간 범위 (Effective grid window)
    """

    id: str  # 사업장 UUID 문자열 (Business UUID as string)
    name: str  # 사업장 이름 (Business name)
    business_hours: dict[str, DayHours] | None = None  # 요일별 영업시간 (Per-weekday hours)
    time_range: WeekTimeRange  # 유효 그리드 범위 (Effective grid window)


class BusinessHoursUpdate(BaseModel):
    """영업시간 수정 요청 스키마.

    Business-hours replacement request schema. Weekdays left out take the
    09:00–18:00 default.

    Attributes:
        business_hours: 요일별 영업시간 (Per-weekday hours)
    """

    business_hours: dict[str, DayHours]  # 요일별 영업시간 (Per-weekday hours)
