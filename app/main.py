"""근무 저장소 API 애플리케이션.

Shift store API application. The scheduling board's HttpShiftGateway talks
to the routes mounted here under /api/v1/admin; every request passes through
the Axiom logging middleware first.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.admin import admin_router
from app.config import settings
from app.database import engine
from app.middleware.axiom_logging import AxiomLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("%s starting; grid %d-minute slots", settings.APP_NAME, settings.SCHEDULE_MINUTES_PER_SLOT)
    yield
    # 종료 시 커넥션 풀 정리 — Release pooled connections on shutdown
    await engine.dispose()


def create_app(include_routes: bool = True) -> FastAPI:
    """애플리케이션을 구성합니다.

    Build the API: Axiom logging (outermost, so rejected writes are captured
    with their detail), CORS for the board frontends, the health check, and
    optionally the shift store routes.

    Args:
        include_routes: 근무 저장소 라우터 포함 여부 (Mount the /api/v1/admin routes)
    """
    api = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    api.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # 마지막에 추가한 미들웨어가 가장 바깥 — Added last, runs first
    api.add_middleware(AxiomLoggingMiddleware)

    @api.get("/health")
    async def health_check() -> dict[str, str]:
        """로드밸런서용 상태 확인 — Health check for load balancers."""
        return {"status": "ok"}

    if include_routes:
        api.include_router(admin_router, prefix="/api/v1/admin")
    return api


app: FastAPI = create_app()
