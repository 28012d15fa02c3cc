"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트, 보드 픽스처.

Test infrastructure — In-memory SQLite DB (aiosqlite), session, httpx
client, and scheduling board fixtures. Each test gets a fresh schema.
"""

import asyncio
from collections.abc import AsyncGenerator
from datetime import date, datetime, time

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.database import build_engine, create_schema, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.scheduling.board import ScheduleBoard
from app.scheduling.gestures import GridGeometry
from app.schemas.schedule import EmployeeResponse, ShiftCreate, ShiftResponse, ShiftUpdate
from app.utils.exceptions import GatewayError

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# 2026-03-02 is a Monday
MONDAY = date(2026, 3, 2)
TUESDAY = date(2026, 3, 3)

# 그리드 화면 좌표 — label column 72px, 7 day columns of 100px, top at 100px
GRID_LEFT = 0
GRID_TOP = 100
LABEL_WIDTH = 72
DAY_WIDTH = 100


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 매 테스트마다 새 스키마를 생성합니다."""
    eng = build_engine(TEST_DATABASE_URL)
    await create_schema(eng)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def business(db: AsyncSession):
    """영업시간 미설정 테스트 사업장을 생성합니다 (07:00–21:00)."""
    from app.models.business import Business
    b = Business(name="Test Cafe")
    db.add(b)
    await db.flush()
    await db.refresh(b)
    return b


@pytest_asyncio.fixture
async def employee(db: AsyncSession, business):
    """활성 직원을 생성합니다."""
    from app.models.schedule import Employee
    e = Employee(business_id=business.id, name="Alice", status="active")
    db.add(e)
    await db.flush()
    await db.refresh(e)
    return e


def at(day: date, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(day, time(hour, minute))


def make_shift(
    shift_id: str,
    employee_id: str,
    start: datetime,
    end: datetime,
    notes: str | None = None,
) -> ShiftResponse:
    return ShiftResponse(id=shift_id, employee_id=employee_id, start_time=start, end_time=end, notes=notes)


def cell_x(day_index: int) -> float:
    """요일 열 중앙의 x 좌표."""
    return GRID_LEFT + LABEL_WIDTH + day_index * DAY_WIDTH + DAY_WIDTH / 2


def slot_y(minutes: int, start_minutes: int = 7 * 60, slot_height: float = 48) -> float:
    """슬롯 안쪽(상단 +10px)의 y 좌표."""
    return GRID_TOP + (minutes - start_minutes) / 30 * slot_height + 10


class FakeGateway:
    """호출을 기록하는 메모리 게이트웨이 — Records every persistence call."""

    def __init__(self) -> None:
        self.added: list[ShiftCreate] = []
        self.updated: list[tuple[str, ShiftUpdate]] = []
        self.deleted: list[str] = []
        self.fail_add: bool = False
        self.fail_update: bool = False
        self.fail_delete: bool = False
        self.gate: asyncio.Event | None = None

    async def add_shift(self, payload: ShiftCreate) -> ShiftResponse | None:
        self.added.append(payload)
        if self.fail_add:
            return None
        return make_shift(
            f"new-{len(self.added)}",
            payload.employee_id,
            payload.start_time,
            payload.end_time,
            payload.notes,
        )

    async def update_shift(self, shift_id: str, patch: ShiftUpdate) -> ShiftResponse:
        self.updated.append((shift_id, patch))
        if self.gate is not None:
            await self.gate.wait()
        if self.fail_update:
            raise GatewayError("same-employee overlap", status_code=409)
        return make_shift(
            shift_id,
            "",
            patch.start_time or datetime(2000, 1, 1),
            patch.end_time or datetime(2000, 1, 1, 1),
        )

    async def delete_shift(self, shift_id: str) -> bool:
        self.deleted.append(shift_id)
        return not self.fail_delete


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def warned() -> list[str]:
    return []


@pytest.fixture
def opened() -> list[ShiftResponse]:
    return []


@pytest.fixture
def layout() -> GridGeometry:
    return GridGeometry(
        left=GRID_LEFT,
        top=GRID_TOP,
        width=LABEL_WIDTH + 7 * DAY_WIDTH,
        height=28 * 48,
        label_column_width=LABEL_WIDTH,
    )


@pytest.fixture
def employees() -> list[EmployeeResponse]:
    return [
        EmployeeResponse(id="emp-1", name="Alice", status="active"),
        EmployeeResponse(id="emp-2", name="Bob", status="active"),
        EmployeeResponse(id="emp-3", name="Carol", status="inactive"),
    ]


@pytest.fixture
def monday_shift() -> ShiftResponse:
    return make_shift("s-1", "emp-1", at(MONDAY, 9), at(MONDAY, 10))


@pytest.fixture
def board(gateway, warned, opened, layout, employees, monday_shift) -> ScheduleBoard:
    """월요일 09:00–10:00 근무 하나가 있는 07:00–21:00 보드."""
    return ScheduleBoard(
        gateway,
        MONDAY,
        shifts=[monday_shift],
        employees=employees,
        layout=layout,
        warn=warned.append,
        open_edit=opened.append,
    )
