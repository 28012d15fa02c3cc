"""근무 영속성 게이트웨이 — 보드가 저장소와 대화하는 경계.

Shift persistence gateway: the boundary between the scheduling board and
the remote shift store.

Contract:
    add_shift    → ShiftResponse, or None on failure (nothing created locally)
    update_shift → ShiftResponse, raises GatewayError on failure
    delete_shift → True on success, False on failure

HttpShiftGateway implements the contract over the shift store's REST API
with httpx. Retries, if any, belong here rather than in the board.
"""

import logging
from datetime import date
from typing import Protocol

import httpx

from app.schemas.business import WeekTimeRange
from app.schemas.schedule import EmployeeResponse, ShiftCreate, ShiftResponse, ShiftUpdate
from app.utils.exceptions import GatewayError

logger = logging.getLogger(__name__)


class ShiftGateway(Protocol):
    """보드가 호출하는 저장소 연산 — Persistence operations the board calls."""

    async def add_shift(self, payload: ShiftCreate) -> ShiftResponse | None: ...

    async def update_shift(self, shift_id: str, patch: ShiftUpdate) -> ShiftResponse: ...

    async def delete_shift(self, shift_id: str) -> bool: ...


class HttpShiftGateway:
    """근무 저장소 REST API 클라이언트.

    REST client for one business's shifts in the shift store.

    Attributes:
        client: httpx 비동기 클라이언트 (Shared httpx AsyncClient)
        business_id: 사업장 ID (Business the board is scoped to)
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        business_id: str,
        base_path: str = "/api/v1/admin",
    ) -> None:
        self.client: httpx.AsyncClient = client
        self.business_id: str = business_id
        self._prefix: str = f"{base_path.rstrip('/')}/businesses/{business_id}"

    # ------------------------------------------------------------------
    # 쓰기 — Mutations
    # ------------------------------------------------------------------
    async def add_shift(self, payload: ShiftCreate) -> ShiftResponse | None:
        """근무를 생성합니다. 실패하면 None.

        Create a shift; any transport or HTTP error yields None.
        """
        try:
            response = await self.client.post(
                f"{self._prefix}/shifts",
                json=payload.model_dump(mode="json", exclude_none=True),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "add_shift rejected (%s): %s",
                exc.response.status_code,
                _error_detail(exc.response),
            )
            return None
        except httpx.HTTPError as exc:
            logger.warning("add_shift failed: %s", exc)
            return None
        return ShiftResponse.model_validate(response.json())

    async def update_shift(self, shift_id: str, patch: ShiftUpdate) -> ShiftResponse:
        """근무를 부분 수정합니다. 실패하면 GatewayError.

        Apply a partial update; only explicitly set fields are sent.

        Raises:
            GatewayError: 전송 실패 또는 오류 응답 (Transport error or error response)
        """
        try:
            response = await self.client.put(
                f"{self._prefix}/shifts/{shift_id}",
                json=patch.model_dump(mode="json", exclude_unset=True),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise GatewayError(
                _error_detail(exc.response), status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise GatewayError(str(exc)) from exc
        return ShiftResponse.model_validate(response.json())

    async def delete_shift(self, shift_id: str) -> bool:
        try:
            response = await self.client.delete(f"{self._prefix}/shifts/{shift_id}")
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.warning("delete_shift %s failed: %s", shift_id, exc)
            return False
        return True

    # ------------------------------------------------------------------
    # 읽기 — Reads used to refresh the board
    # ------------------------------------------------------------------
    async def list_shifts(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ShiftResponse]:
        params: dict[str, str] = {}
        if date_from is not None:
            params["date_from"] = date_from.isoformat()
        if date_to is not None:
            params["date_to"] = date_to.isoformat()
        response = await self.client.get(f"{self._prefix}/shifts", params=params)
        response.raise_for_status()
        return [ShiftResponse.model_validate(item) for item in response.json()]

    async def list_employees(self, status: str | None = None) -> list[EmployeeResponse]:
        params = {"status": status} if status else {}
        response = await self.client.get(f"{self._prefix}/employees", params=params)
        response.raise_for_status()
        return [EmployeeResponse.model_validate(item) for item in response.json()]

    async def get_time_range(self) -> WeekTimeRange:
        response = await self.client.get(f"{self._prefix}/time-range")
        response.raise_for_status()
        return WeekTimeRange.model_validate(response.json())


def _error_detail(response: httpx.Response) -> str:
    """오류 응답에서 detail을 추출합니다 — Extract FastAPI's error detail."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict):
        return str(body.get("detail", body))
    return str(body)
