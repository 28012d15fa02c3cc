"""Axiom 로깅 미들웨어 테스트.

Axiom logging middleware tests with a recording client in place of the
Axiom SDK client.
"""

import uuid

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from app.config import settings
from app.main import create_app
from app.middleware import axiom_logging
from app.utils.exceptions import ConflictError


class RecordingClient:
    """ingest_events 호출을 기록 — Records ingested events."""

    instances: list["RecordingClient"] = []

    def __init__(self, token: str) -> None:
        self.token = token
        self.events: list[dict] = []
        RecordingClient.instances.append(self)

    def ingest_events(self, dataset: str, events: list[dict]) -> None:
        self.events.extend(events)


class FailingClient(RecordingClient):
    def ingest_events(self, dataset: str, events: list[dict]) -> None:
        raise RuntimeError("axiom unavailable")


def build_app() -> FastAPI:
    api = create_app(include_routes=False)

    @api.post("/businesses/{business_id}/shifts")
    async def create(business_id: str, body: dict) -> dict:
        if body.get("conflict"):
            raise ConflictError()
        return {"ok": True}

    return api


@pytest.fixture
def configured(monkeypatch):
    RecordingClient.instances.clear()
    monkeypatch.setattr(settings, "AXIOM_API_TOKEN", "xaat-test")
    monkeypatch.setattr(settings, "AXIOM_DATASET", "shift-board")
    monkeypatch.setattr(axiom_logging, "AxiomClient", RecordingClient)


async def request(method: str, url: str, **kwargs):
    transport = ASGITransport(app=build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        return await ac.request(method, url, **kwargs)


class TestAxiomLogging:
    async def test_rejected_write_logged_with_detail(self, configured):
        business_id = str(uuid.uuid4())
        res = await request(
            "POST",
            f"/businesses/{business_id}/shifts",
            json={"conflict": True, "api_token": "secret-value"},
        )
        assert res.status_code == 409
        assert res.json()["detail"] == "same-employee overlap"

        (event,) = RecordingClient.instances[0].events
        assert event["status_code"] == 409
        assert event["business_id"] == business_id
        assert event["error"] == "same-employee overlap"
        assert event["request_body"] == {"conflict": True, "api_token": "***"}
        assert event["duration_ms"] >= 0

    async def test_success_has_no_error(self, configured):
        res = await request("POST", f"/businesses/{uuid.uuid4()}/shifts", json={})
        assert res.status_code == 200
        (event,) = RecordingClient.instances[0].events
        assert "error" not in event

    async def test_skipped_paths(self, configured):
        await request("GET", "/health")
        assert RecordingClient.instances[0].events == []

    async def test_not_configured_passes_through(self, monkeypatch):
        RecordingClient.instances.clear()
        monkeypatch.setattr(settings, "AXIOM_API_TOKEN", "")
        monkeypatch.setattr(axiom_logging, "AxiomClient", RecordingClient)
        res = await request("POST", f"/businesses/{uuid.uuid4()}/shifts", json={})
        assert res.status_code == 200
        assert RecordingClient.instances == []

    async def test_ingest_failure_does_not_fail_request(self, configured, monkeypatch):
        monkeypatch.setattr(axiom_logging, "AxiomClient", FailingClient)
        res = await request("POST", f"/businesses/{uuid.uuid4()}/shifts", json={})
        assert res.status_code == 200
