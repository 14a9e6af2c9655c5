"""스케줄 API 테스트 — 단일/일괄 생성, 수정, 삭제 및 목록 조회.

Schedule API tests: single and batch create, update, delete, and the
grouped listing. Batches must be all or nothing.
"""

from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Schedule
from app.repositories.schedule_repository import schedule_repository
from tests.conftest import make_schedule

URL = "/api/schedules"
DAY = date(2025, 11, 1)


def shift(employee, role, start: str, end: str, on: str = "2025-11-01") -> dict:
    return {
        "date": on,
        "start_time": start,
        "end_time": end,
        "employee_id": employee.id,
        "assigned_role": role.id,
    }


async def count_schedules(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(Schedule))).scalar()


class TestScheduleCreate:
    """스케줄 생성 테스트."""

    async def test_create_single(self, client: AsyncClient, staff, roles):
        res = await client.post(URL, json=shift(staff["alice"], roles["cook"], "10:00", "14:00"))
        assert res.status_code == 201
        body = res.json()
        assert body["success"] is True
        assert body["message"] == "Schedule created successfully"
        assert body["data"]["id"] > 0
        assert body["data"]["start_time"] == "10:00"
        assert body["data"]["date"] == "2025-11-01"

    async def test_contained_shift_conflicts(self, client: AsyncClient, db, staff, roles):
        """기존 10:00-14:00 근무 안의 11:00-12:00은 충돌."""
        await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])

        res = await client.post(URL, json=shift(staff["alice"], roles["cook"], "11:00", "12:00"))
        assert res.status_code == 422
        body = res.json()
        assert body["success"] is False
        assert body["message"] == "Scheduling conflict: Employee already has a shift during this time"
        assert await count_schedules(db) == 1

    async def test_touching_shift_accepted(self, client: AsyncClient, db, staff, roles):
        """기존 근무 종료 시각에 시작하는 근무는 허용."""
        await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])

        res = await client.post(URL, json=shift(staff["alice"], roles["cook"], "14:00", "16:00"))
        assert res.status_code == 201
        assert await count_schedules(db) == 2

    async def test_other_employee_not_in_conflict(self, client: AsyncClient, db, staff, roles):
        await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])

        res = await client.post(URL, json=shift(staff["bob"], roles["server"], "10:00", "14:00"))
        assert res.status_code == 201

    async def test_field_errors(self, client: AsyncClient, staff, roles):
        res = await client.post(URL, json={
            "date": "2025-10-01",
            "start_time": "9am",
            "end_time": "17:00",
            "employee_id": 999,
        })
        assert res.status_code == 422
        body = res.json()
        assert body["message"] == "Validation failed"
        assert body["errors"]["date"] == ["The date must be a date after or equal to today."]
        assert body["errors"]["start_time"] == ["The start time does not match the format HH:MM."]
        assert body["errors"]["employee_id"] == ["The selected employee id is invalid."]
        assert body["errors"]["assigned_role"] == ["The assigned role field is required."]

    async def test_too_long_shift_rejected(self, client: AsyncClient, staff, roles):
        res = await client.post(URL, json=shift(staff["alice"], roles["cook"], "08:00", "22:00"))
        assert res.status_code == 422
        assert "end_time" in res.json()["errors"]

    async def test_batch_create(self, client: AsyncClient, db, staff, roles):
        res = await client.post(URL, json={"shifts": [
            shift(staff["alice"], roles["cook"], "08:00", "12:00"),
            shift(staff["bob"], roles["server"], "12:00", "20:00"),
        ]})
        assert res.status_code == 201
        body = res.json()
        assert body["message"] == "Schedules created successfully"
        assert len(body["data"]) == 2
        assert all(item["id"] > 0 for item in body["data"])
        assert await count_schedules(db) == 2

    async def test_batch_rejected_when_one_item_conflicts(self, client: AsyncClient, db, staff, roles):
        """[A 정상, B 기존 C와 충돌] → 전체 거부, 저장 0건, 오류는 B의 인덱스만."""
        await make_schedule(db, staff["bob"], DAY, "10:00", "14:00", roles["server"])

        res = await client.post(URL, json={"shifts": [
            shift(staff["alice"], roles["cook"], "08:00", "12:00"),
            shift(staff["bob"], roles["server"], "12:00", "16:00"),
        ]})
        assert res.status_code == 422
        errors = res.json()["errors"]
        assert [e["index"] for e in errors] == [1]
        assert errors[0]["type"] == "conflict"
        assert await count_schedules(db) == 1

    async def test_batch_reports_every_failed_index(self, client: AsyncClient, db, staff, roles):
        res = await client.post(URL, json={"shifts": [
            shift(staff["alice"], roles["cook"], "08:00", "12:00", on="2025-01-01"),
            shift(staff["alice"], roles["cook"], "13:00", "15:00"),
            {**shift(staff["bob"], roles["server"], "08:00", "12:00"), "employee_id": 999},
        ]})
        assert res.status_code == 422
        errors = res.json()["errors"]
        assert [e["index"] for e in errors] == [0, 2]
        assert errors[0]["fields"]["date"] == ["The date must be a date after or equal to today."]
        assert errors[1]["fields"]["employee_id"] == ["The selected employee id is invalid."]
        assert await count_schedules(db) == 0

    async def test_batch_items_conflicting_with_each_other(self, client: AsyncClient, db, staff, roles):
        """같은 배치 안의 두 근무가 겹치면 뒤의 항목이 보고됨."""
        res = await client.post(URL, json={"shifts": [
            shift(staff["alice"], roles["cook"], "10:00", "14:00"),
            shift(staff["alice"], roles["cook"], "13:00", "15:00"),
        ]})
        assert res.status_code == 422
        assert [e["index"] for e in res.json()["errors"]] == [1]
        assert await count_schedules(db) == 0

    async def test_empty_batch_rejected(self, client: AsyncClient):
        res = await client.post(URL, json={"shifts": []})
        assert res.status_code == 422
        body = res.json()
        assert body["message"] == "Validation failed"
        assert "shifts" in body["errors"]

    async def test_boolean_employee_id_rejected(self, client: AsyncClient, db, staff, roles):
        res = await client.post(URL, json={**shift(staff["alice"], roles["cook"], "10:00", "14:00"), "employee_id": True})
        assert res.status_code == 422
        assert "employee_id" in res.json()["errors"]
        assert await count_schedules(db) == 0

    async def test_storage_failure_rolls_back_batch(
        self, client: AsyncClient, db, staff, roles, monkeypatch: pytest.MonkeyPatch
    ):
        """두 번째 저장에서 DB 오류 → 500, 첫 번째 저장도 롤백."""
        original_create = schedule_repository.create
        calls = 0

        async def failing_create(session, data):
            nonlocal calls
            calls += 1
            if calls == 2:
                raise SQLAlchemyError("write failed")
            return await original_create(session, data)

        monkeypatch.setattr(schedule_repository, "create", failing_create)

        res = await client.post(URL, json={"shifts": [
            shift(staff["alice"], roles["cook"], "08:00", "12:00"),
            shift(staff["bob"], roles["server"], "12:00", "20:00"),
        ]})
        assert res.status_code == 500
        body = res.json()
        assert body["success"] is False
        assert body["message"] == "Failed to create schedules"
        assert calls == 2
        assert await count_schedules(db) == 0


class TestScheduleUpdate:
    """스케줄 수정 테스트."""

    async def test_update_single_excludes_itself(self, client: AsyncClient, db, staff, roles):
        """자기 자신과는 충돌하지 않음."""
        existing = await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])
        schedule_id = existing.id

        res = await client.put(f"{URL}/{schedule_id}", json={"start_time": "11:00", "end_time": "15:00"})
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Schedule updated successfully"
        assert body["data"]["start_time"] == "11:00"
        assert body["data"]["assigned_role"] == roles["cook"].id

    async def test_update_single_conflict(self, client: AsyncClient, db, staff, roles):
        await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])
        other = await make_schedule(db, staff["alice"], DAY, "15:00", "18:00", roles["cook"])

        res = await client.put(f"{URL}/{other.id}", json={"start_time": "13:00"})
        assert res.status_code == 422
        assert res.json()["message"].startswith("Scheduling conflict")

    async def test_update_missing_schedule(self, client: AsyncClient, staff):
        res = await client.put(f"{URL}/9999", json={"start_time": "11:00"})
        assert res.status_code == 404
        assert res.json()["success"] is False

    async def test_update_clears_assigned_role(self, client: AsyncClient, db, staff, roles):
        existing = await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])

        res = await client.put(f"{URL}/{existing.id}", json={"assigned_role": None})
        assert res.status_code == 200
        assert res.json()["data"]["assigned_role"] is None

    async def test_update_to_past_date_rejected(self, client: AsyncClient, db, staff, roles):
        existing = await make_schedule(db, staff["alice"], DAY, "10:00", "14:00", roles["cook"])

        res = await client.put(f"{URL}/{existing.id}", json={"date": "2025-10-01"})
        assert res.status_code == 422
        assert res.json()["errors"]["date"] == ["The date must be a date after or equal to today."]

    async def test_update_of_past_shift_rejected(self, client: AsyncClient, db, staff, roles):
        """날짜를 바꾸지 않아도 이미 지난 근무는 수정 불가."""
        past = await make_schedule(db, staff["alice"], date(2025, 10, 1), "10:00", "14:00", roles["cook"])
        past_id = past.id

        res = await client.put(f"{URL}/{past_id}", json={"start_time": "11:00"})
        assert res.status_code == 422
        assert res.json()["errors"]["date"] == ["The date must be a date after or equal to today."]

        stored = (await db.execute(select(Schedule.start_time).where(Schedule.id == past_id))).scalar()
        assert stored.strftime("%H:%M") == "10:00"

    async def test_batch_swap_times(self, client: AsyncClient, db, staff, roles):
        """배치 내에서 두 근무의 시간을 맞바꾸면 저장된 이전 값과 비교하지 않음."""
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        second = await make_schedule(db, staff["alice"], DAY, "12:00", "16:00", roles["cook"])

        res = await client.put(URL, json={"shifts": [
            {"id": first.id, "start_time": "12:00", "end_time": "16:00"},
            {"id": second.id, "start_time": "08:00", "end_time": "12:00"},
        ]})
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Schedules updated successfully"
        assert [item["start_time"] for item in body["data"]] == ["12:00", "08:00"]

    async def test_batch_update_all_or_nothing(self, client: AsyncClient, db, staff, roles):
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        first_id = first.id

        res = await client.put(URL, json={"shifts": [
            {"id": first_id, "start_time": "09:00"},
            {"id": 9999, "start_time": "10:00"},
        ]})
        assert res.status_code == 422
        errors = res.json()["errors"]
        assert errors == [{"index": 1, "type": "not_found", "message": "Schedule not found"}]

        stored = (await db.execute(select(Schedule.start_time).where(Schedule.id == first_id))).scalar()
        assert stored.strftime("%H:%M") == "08:00"

    async def test_batch_update_duplicate_ids(self, client: AsyncClient, db, staff, roles):
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])

        res = await client.put(URL, json={"shifts": [
            {"id": first.id, "start_time": "09:00"},
            {"id": first.id, "start_time": "10:00"},
        ]})
        assert res.status_code == 422
        assert res.json()["errors"][0]["type"] == "duplicate"

    async def test_batch_update_items_conflicting_with_each_other(self, client: AsyncClient, db, staff, roles):
        """수정 배치의 두 항목이 서로 겹치면 뒤의 항목이 보고되고 아무것도 저장되지 않음."""
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        second = await make_schedule(db, staff["alice"], DAY, "14:00", "18:00", roles["cook"])
        first_id, second_id = first.id, second.id

        res = await client.put(URL, json={"shifts": [
            {"id": first_id, "start_time": "10:00", "end_time": "13:00"},
            {"id": second_id, "start_time": "12:00", "end_time": "16:00"},
        ]})
        assert res.status_code == 422
        errors = res.json()["errors"]
        assert [e["index"] for e in errors] == [1]
        assert errors[0]["type"] == "conflict"

        stored = (await db.execute(select(Schedule.start_time).where(Schedule.id == first_id))).scalar()
        assert stored.strftime("%H:%M") == "08:00"


class TestScheduleDelete:
    """스케줄 삭제 테스트."""

    async def test_delete_single(self, client: AsyncClient, db, staff, roles):
        existing = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])

        res = await client.delete(f"{URL}/{existing.id}")
        assert res.status_code == 200
        assert res.json()["message"] == "Schedule deleted successfully"
        assert await count_schedules(db) == 0

    async def test_delete_single_missing(self, client: AsyncClient):
        res = await client.delete(f"{URL}/9999")
        assert res.status_code == 404

    async def test_batch_delete(self, client: AsyncClient, db, staff, roles):
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        second = await make_schedule(db, staff["bob"], DAY, "08:00", "12:00", roles["server"])

        res = await client.request("DELETE", URL, json={"shifts": [{"id": first.id}, {"id": second.id}]})
        assert res.status_code == 200
        body = res.json()
        assert body["message"] == "Schedules deleted successfully"
        assert sorted(body["data"]["deleted_ids"]) == sorted([first.id, second.id])
        assert await count_schedules(db) == 0

    async def test_batch_delete_rejects_unknown_id(self, client: AsyncClient, db, staff, roles):
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])

        res = await client.request("DELETE", URL, json={"shifts": [{"id": first.id}, {"id": 9999}]})
        assert res.status_code == 422
        assert [e["index"] for e in res.json()["errors"]] == [1]
        assert await count_schedules(db) == 1

    async def test_batch_delete_rejects_duplicate_ids(self, client: AsyncClient, db, staff, roles):
        first = await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])

        res = await client.request("DELETE", URL, json={"shifts": [{"id": first.id}, {"id": first.id}]})
        assert res.status_code == 422
        errors = res.json()["errors"]
        assert [e["index"] for e in errors] == [1]
        assert errors[0]["type"] == "duplicate"
        assert await count_schedules(db) == 1


class TestScheduleList:
    """스케줄 목록 조회 테스트."""

    async def test_grouped_by_role(self, client: AsyncClient, db, staff, roles):
        await make_schedule(db, staff["alice"], DAY, "22:00", "06:00", roles["cook"])
        await make_schedule(db, staff["alice"], date(2025, 11, 2), "08:00", "12:00", None)
        await make_schedule(db, staff["bob"], DAY, "09:00", "17:30", roles["server"])

        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()["data"]
        assert set(data) == {"cook", "server", "Unassigned"}

        night = data["cook"][0]
        assert night["shift"] == "22:00 - 06:00"
        assert night["duration"] == 8
        assert night["employee_name"] == "Alice"
        assert data["server"][0]["duration"] == 8.5

    async def test_filters(self, client: AsyncClient, db, staff, roles):
        await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        await make_schedule(db, staff["bob"], date(2025, 11, 5), "08:00", "12:00", roles["server"])

        res = await client.get(URL, params={"date": "2025-11-05"})
        assert set(res.json()["data"]) == {"server"}

        res = await client.get(URL, params={"employee_id": staff["alice"].id})
        assert set(res.json()["data"]) == {"cook"}

        res = await client.get(URL, params={"start_date": "2025-11-01", "end_date": "2025-11-03"})
        assert set(res.json()["data"]) == {"cook"}

    async def test_active_only(self, client: AsyncClient, db, staff, roles):
        await make_schedule(db, staff["alice"], DAY, "08:00", "12:00", roles["cook"])
        await make_schedule(db, staff["bob"], DAY, "08:00", "12:00", roles["server"])
        staff["bob"].end_date = date(2025, 10, 1)
        await db.commit()

        res = await client.get(URL, params={"active_only": "true"})
        assert set(res.json()["data"]) == {"cook"}
