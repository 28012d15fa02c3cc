"""근무 저장소 API 테스트.

Shift store API tests — businesses, business hours, employees, and shift
CRUD with its interval and overlap rules.
"""

import uuid

import pytest
from httpx import AsyncClient

PREFIX = "/api/v1/admin/businesses"


def shift_url(business) -> str:
    return f"{PREFIX}/{business.id}/shifts"


async def create_shift(client: AsyncClient, business, employee, start: str, end: str, **extra):
    return await client.post(
        shift_url(business),
        json={"employee_id": str(employee.id), "start_time": start, "end_time": end, **extra},
    )


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}


class TestBusinesses:
    """사업장 및 영업시간 테스트."""

    async def test_create_without_hours_uses_default_window(self, client: AsyncClient):
        res = await client.post(PREFIX, json={"name": "Corner Bakery"})
        assert res.status_code == 201
        data = res.json()
        assert data["name"] == "Corner Bakery"
        assert data["business_hours"] is None
        assert data["time_range"]["start_minutes"] == 420
        assert data["time_range"]["end_minutes"] == 1260

    async def test_create_with_hours(self, client: AsyncClient):
        """입력하지 않은 요일은 09:00–18:00으로 채워짐."""
        res = await client.post(PREFIX, json={
            "name": "Diner",
            "business_hours": {"monday": {"open": "08:00", "close": "20:00"}},
        })
        assert res.status_code == 201
        data = res.json()
        assert data["business_hours"]["tuesday"] == {"closed": False, "open": "09:00", "close": "18:00"}
        assert (data["time_range"]["start_minutes"], data["time_range"]["end_minutes"]) == (480, 1200)

    async def test_get_business_and_time_range(self, client: AsyncClient, business):
        res = await client.get(f"{PREFIX}/{business.id}")
        assert res.status_code == 200
        assert res.json()["id"] == str(business.id)

        res = await client.get(f"{PREFIX}/{business.id}/time-range")
        assert res.status_code == 200
        assert res.json() == {
            "start_minutes": 420,
            "end_minutes": 1260,
            "start_hour": 7,
            "start_minute": 0,
            "end_hour": 21,
            "end_minute": 0,
        }

    async def test_unknown_business(self, client: AsyncClient):
        res = await client.get(f"{PREFIX}/{uuid.uuid4()}/time-range")
        assert res.status_code == 404
        assert res.json()["detail"] == "Business not found"

    async def test_update_business_hours(self, client: AsyncClient, business):
        res = await client.put(f"{PREFIX}/{business.id}/business-hours", json={
            "business_hours": {
                "saturday": {"open": "10:30", "close": "22:00"},
                "sunday": {"closed": True},
            },
        })
        assert res.status_code == 200
        data = res.json()
        assert data["business_hours"]["sunday"]["closed"] is True
        assert (data["time_range"]["start_minutes"], data["time_range"]["end_minutes"]) == (540, 1320)

    async def test_all_closed_falls_back(self, client: AsyncClient, business):
        days = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
        res = await client.put(f"{PREFIX}/{business.id}/business-hours", json={
            "business_hours": {day: {"closed": True} for day in days},
        })
        assert res.status_code == 200
        assert res.json()["time_range"]["start_minutes"] == 540
        assert res.json()["time_range"]["end_minutes"] == 1080

    @pytest.mark.parametrize(
        "hours",
        [
            {"funday": {"open": "09:00", "close": "18:00"}},
            {"monday": {"open": "9am", "close": "18:00"}},
            {"monday": {"open": "18:00", "close": "09:00"}},
            {"monday": {"open": "07:15", "close": "20:45"}},
        ],
    )
    async def test_invalid_hours_rejected(self, client: AsyncClient, business, hours):
        res = await client.put(f"{PREFIX}/{business.id}/business-hours", json={"business_hours": hours})
        assert res.status_code == 400


class TestEmployees:
    """직원 명부 테스트."""

    async def test_create_and_list(self, client: AsyncClient, business, employee):
        res = await client.post(
            f"{PREFIX}/{business.id}/employees",
            json={"name": "  Bob ", "status": "inactive"},
        )
        assert res.status_code == 201
        assert res.json()["name"] == "Bob"

        res = await client.get(f"{PREFIX}/{business.id}/employees")
        assert [e["name"] for e in res.json()] == ["Alice", "Bob"]

        res = await client.get(f"{PREFIX}/{business.id}/employees", params={"status": "active"})
        assert [e["name"] for e in res.json()] == ["Alice"]

    async def test_unknown_status_rejected(self, client: AsyncClient, business):
        res = await client.post(f"{PREFIX}/{business.id}/employees", json={"name": "Dan", "status": "away"})
        assert res.status_code == 400

    async def test_blank_name_rejected(self, client: AsyncClient, business):
        res = await client.post(f"{PREFIX}/{business.id}/employees", json={"name": "   "})
        assert res.status_code == 400


class TestCreateShift:
    """근무 생성 규칙 테스트."""

    async def test_create(self, client: AsyncClient, business, employee):
        res = await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T13:00:00", notes="open"
        )
        assert res.status_code == 201
        data = res.json()
        assert data["employee_id"] == str(employee.id)
        assert data["start_time"] == "2026-03-02T09:00:00"
        assert data["end_time"] == "2026-03-02T13:00:00"
        assert data["notes"] == "open"

    async def test_overlap_rejected(self, client: AsyncClient, business, employee):
        """같은 직원 같은 날 겹침 → 409."""
        await create_shift(client, business, employee, "2026-03-02T09:00:00", "2026-03-02T13:00:00")
        res = await create_shift(client, business, employee, "2026-03-02T12:00:00", "2026-03-02T14:00:00")
        assert res.status_code == 409
        assert res.json()["detail"] == "same-employee overlap"

    async def test_touching_allowed(self, client: AsyncClient, business, employee):
        await create_shift(client, business, employee, "2026-03-02T09:00:00", "2026-03-02T13:00:00")
        res = await create_shift(client, business, employee, "2026-03-02T13:00:00", "2026-03-02T15:00:00")
        assert res.status_code == 201

    async def test_other_employee_may_overlap(self, client: AsyncClient, db, business, employee):
        from app.models.schedule import Employee
        other = Employee(business_id=business.id, name="Bob", status="active")
        db.add(other)
        await db.flush()

        await create_shift(client, business, employee, "2026-03-02T09:00:00", "2026-03-02T13:00:00")
        res = await create_shift(client, business, other, "2026-03-02T09:00:00", "2026-03-02T13:00:00")
        assert res.status_code == 201

    @pytest.mark.parametrize(
        ("start", "end"),
        [
            ("2026-03-02T09:15:00", "2026-03-02T10:00:00"),  # off-grid
            ("2026-03-02T06:00:00", "2026-03-02T08:00:00"),  # before open
            ("2026-03-02T20:00:00", "2026-03-02T21:30:00"),  # after close
            ("2026-03-02T10:00:00", "2026-03-02T10:00:00"),  # empty
            ("2026-03-02T11:00:00", "2026-03-02T10:00:00"),  # reversed
        ],
    )
    async def test_invalid_interval_rejected(self, client: AsyncClient, business, employee, start, end):
        res = await create_shift(client, business, employee, start, end)
        assert res.status_code == 400

    async def test_aware_times_rejected(self, client: AsyncClient, business, employee):
        res = await create_shift(
            client, business, employee, "2026-03-02T09:00:00+09:00", "2026-03-02T10:00:00+09:00"
        )
        assert res.status_code == 422

    async def test_unknown_employee(self, client: AsyncClient, business):
        res = await client.post(shift_url(business), json={
            "employee_id": str(uuid.uuid4()),
            "start_time": "2026-03-02T09:00:00",
            "end_time": "2026-03-02T10:00:00",
        })
        assert res.status_code == 404

    async def test_malformed_employee_id(self, client: AsyncClient, business):
        res = await client.post(shift_url(business), json={
            "employee_id": "emp-1",
            "start_time": "2026-03-02T09:00:00",
            "end_time": "2026-03-02T10:00:00",
        })
        assert res.status_code == 404


class TestListShifts:
    async def test_date_filters_are_inclusive(self, client: AsyncClient, business, employee):
        await create_shift(client, business, employee, "2026-03-03T09:00:00", "2026-03-03T10:00:00")
        await create_shift(client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00")
        await create_shift(client, business, employee, "2026-03-09T09:00:00", "2026-03-09T10:00:00")

        res = await client.get(shift_url(business), params={"date_from": "2026-03-02", "date_to": "2026-03-08"})
        assert res.status_code == 200
        assert [s["start_time"][:10] for s in res.json()] == ["2026-03-02", "2026-03-03"]

        res = await client.get(shift_url(business), params={"employee_id": str(employee.id)})
        assert len(res.json()) == 3

    async def test_unknown_business(self, client: AsyncClient):
        res = await client.get(f"{PREFIX}/{uuid.uuid4()}/shifts")
        assert res.status_code == 404


class TestUpdateShift:
    """근무 수정 테스트."""

    async def test_extend_end_excludes_itself(self, client: AsyncClient, business, employee):
        created = (await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00"
        )).json()
        res = await client.put(f"{shift_url(business)}/{created['id']}", json={"end_time": "2026-03-02T10:30:00"})
        assert res.status_code == 200
        assert res.json()["start_time"] == "2026-03-02T09:00:00"
        assert res.json()["end_time"] == "2026-03-02T10:30:00"

    async def test_move_into_overlap_rejected(self, client: AsyncClient, business, employee):
        first = (await create_shift(
            client, business, employee, "2026-03-03T09:00:00", "2026-03-03T10:00:00"
        )).json()
        await create_shift(client, business, employee, "2026-03-03T13:00:00", "2026-03-03T16:00:00")
        res = await client.put(f"{shift_url(business)}/{first['id']}", json={
            "start_time": "2026-03-03T14:00:00",
            "end_time": "2026-03-03T15:00:00",
        })
        assert res.status_code == 409

    async def test_notes_only(self, client: AsyncClient, business, employee):
        created = (await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00"
        )).json()
        res = await client.put(f"{shift_url(business)}/{created['id']}", json={"notes": "keys"})
        assert res.status_code == 200
        assert res.json()["notes"] == "keys"
        assert res.json()["end_time"] == "2026-03-02T10:00:00"

    async def test_clearing_times_rejected(self, client: AsyncClient, business, employee):
        created = (await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00"
        )).json()
        res = await client.put(f"{shift_url(business)}/{created['id']}", json={"start_time": None})
        assert res.status_code == 400

    async def test_reversed_merge_rejected(self, client: AsyncClient, business, employee):
        created = (await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00"
        )).json()
        res = await client.put(f"{shift_url(business)}/{created['id']}", json={"start_time": "2026-03-02T11:00:00"})
        assert res.status_code == 400

    async def test_unknown_shift(self, client: AsyncClient, business):
        res = await client.put(f"{shift_url(business)}/{uuid.uuid4()}", json={"notes": "x"})
        assert res.status_code == 404


class TestDeleteShift:
    async def test_delete(self, client: AsyncClient, business, employee):
        created = (await create_shift(
            client, business, employee, "2026-03-02T09:00:00", "2026-03-02T10:00:00"
        )).json()
        res = await client.delete(f"{shift_url(business)}/{created['id']}")
        assert res.status_code == 204

        res = await client.delete(f"{shift_url(business)}/{created['id']}")
        assert res.status_code == 404
        assert (await client.get(shift_url(business))).json() == []
