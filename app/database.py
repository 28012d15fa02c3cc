"""근무 저장소 데이터베이스 계층.

Shift store database layer: engine construction for PostgreSQL (asyncpg) or
SQLite (aiosqlite, used by the test suite), the request-scoped session
dependency, and the ORM base that businesses, employees and shifts
register with.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings


class Base(DeclarativeBase):
    """근무 저장소 ORM 베이스 — Declarative base of the shift store models."""

    pass


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """드라이버에 맞는 옵션으로 비동기 엔진을 만듭니다.

    Build an async engine with driver-specific options:
        - asyncpg: prepared statement cache off (transaction-mode poolers),
          connections pinged before use
        - in-memory SQLite: one shared connection so every session sees the
          same schema

    Args:
        url: SQLAlchemy 비동기 연결 URL (Async connection URL)
        echo: SQL 로그 출력 여부 (Echo SQL statements)

    Returns:
        AsyncEngine: 비동기 엔진 (Async engine)
    """
    options: dict[str, Any] = {"echo": echo}
    if url.startswith("postgresql+asyncpg"):
        options.update(pool_pre_ping=True, connect_args={"statement_cache_size": 0})
    elif url.startswith("sqlite+aiosqlite"):
        options["connect_args"] = {"check_same_thread": False}
        if url.rstrip("/").endswith(":memory:") or url == "sqlite+aiosqlite://":
            options["poolclass"] = StaticPool
    return create_async_engine(url, **options)


async def create_schema(target: AsyncEngine) -> None:
    """등록된 모든 테이블을 생성합니다 (테스트/로컬 개발용).

    Production schemas come from the Alembic migration instead.
    """
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

# expire_on_commit=False: 커밋 후 응답 변환 시 재조회 없이 속성 접근
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 세션 — One session per request; routes commit explicitly."""
    async with async_session() as session:
        yield session
