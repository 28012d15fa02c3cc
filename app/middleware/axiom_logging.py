"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Sends one structured event per shift store request to Axiom: method,
route, business id, request body, status code, duration, and the error
detail of rejected writes (overlap 409s, invariant 400s). Passes requests
through untouched when Axiom is not configured.
"""

import json
import logging
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings

logger = logging.getLogger(__name__)

# 마스킹 대상 필드 패턴 — Fields to mask in request bodies and query params
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|apikey|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로 — Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

# /businesses/{id}/... 경로에서 사업장 ID 추출
_BUSINESS_PATH = re.compile(r"/businesses/([0-9a-fA-F-]{36})")


def _mask(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — Recursively mask sensitive fields in dicts/lists."""
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else _mask(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_mask(item, depth + 1) for item in data[:20]]
    return data


def _truncate(value: str, max_len: int = 500) -> str:
    if len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value


async def _read_json_body(request: Request) -> Any:
    """쓰기 요청의 JSON 본문을 읽습니다 — Read the JSON body of a write request."""
    if request.method not in ("POST", "PUT", "PATCH"):
        return None
    body_bytes = await request.body()
    if not body_bytes:
        return None
    try:
        return _mask(json.loads(body_bytes))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return "(non-json body)"


def _error_detail(body: bytes) -> str:
    """FastAPI 오류 응답에서 detail을 꺼냅니다."""
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _truncate(body.decode("utf-8", errors="replace"))
    detail = data.get("detail", data) if isinstance(data, dict) else data
    return _truncate(detail if isinstance(detail, str) else json.dumps(detail, default=str))


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 근무 저장소 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs every shift store request and response to Axiom.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # Axiom 미설정 또는 제외 경로는 패스스루 — Pass through when not configured
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        business = _BUSINESS_PATH.search(request.url.path)
        if business:
            event["business_id"] = business.group(1)
        if request.query_params:
            event["query_params"] = _mask(dict(request.query_params))
        request_body = await _read_json_body(request)
        if request_body is not None:
            event["request_body"] = request_body

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code

            # 오류 응답은 본문을 소비해 사유를 기록한 뒤 다시 감쌉니다
            # Error responses are consumed for their detail, then re-wrapped
            if response.status_code >= 400:
                resp_body = b""
                async for chunk in response.body_iterator:
                    resp_body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                event["error"] = _error_detail(resp_body)
                response = Response(
                    content=resp_body,
                    status_code=response.status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ingest(event)

        return response

    def _ingest(self, event: dict[str, Any]) -> None:
        # 로깅 실패는 요청 처리에 영향을 주지 않음 — Log delivery never fails a request
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            logger.warning("Axiom ingest failed for %s %s", event["method"], event["path"], exc_info=True)
