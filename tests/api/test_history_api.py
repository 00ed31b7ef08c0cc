"""Tests for /history endpoints."""

import pytest


@pytest.fixture
def catalog(make_workout):
    make_workout(workout_id="M1", title="Leg Day")
    make_workout(workout_id="M2", title="Arm Day")
    make_workout(workout_id="WU", title="Warmup", category="warmup")
    make_workout(workout_id="CD", title="Cooldown", category="cooldown")


class TestLogSession:
    def test_logs_with_companions(self, client, catalog):
        response = client.post(
            "/history",
            json={"date": "2026-10-18", "workout_id": "M1", "warmup_id": "WU", "cooldown_id": "CD", "notes": "tough"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["workout_title"] == "Leg Day"
        assert body["warmup_title"] == "Warmup"
        assert body["cooldown_title"] == "Cooldown"
        assert body["workout_type"] == "workout"
        assert body["notes"] == "tough"

    def test_validation(self, client, catalog):
        assert client.post("/history", json={"date": "2026-10-18", "workout_id": "NOPE"}).status_code == 404
        response = client.post("/history", json={"date": "2026-10-18", "workout_id": "M1", "warmup_id": "CD"})
        assert response.status_code == 404
        assert response.json()["detail"] == "Warmup not found"
        response = client.post("/history", json={"date": "2026-10-18", "workout_id": "M1", "cooldown_id": "WU"})
        assert response.json()["detail"] == "Cooldown not found"
        assert client.post("/history", json={"date": "not-a-date", "workout_id": "M1"}).status_code == 422


class TestListHistory:
    def test_newest_first_with_filters(self, client, catalog):
        for day, workout_id in [("2026-10-01", "M1"), ("2026-10-10", "M2"), ("2026-10-15", "M1")]:
            client.post("/history", json={"date": day, "workout_id": workout_id})

        all_dates = [e["date"] for e in client.get("/history").json()]
        assert all_dates == ["2026-10-15", "2026-10-10", "2026-10-01"]

        filtered = client.get("/history", params={"start_date": "2026-10-05", "workout_id": "M1"}).json()
        assert [e["date"] for e in filtered] == ["2026-10-15"]

        bounded = client.get("/history", params={"end_date": "2026-10-10"}).json()
        assert [e["workout_title"] for e in bounded] == ["Arm Day", "Leg Day"]


class TestEditAndDelete:
    def test_update_notes(self, client, catalog):
        entry_id = client.post("/history", json={"date": "2026-10-18", "workout_id": "M1"}).json()["id"]

        assert client.patch(f"/history/{entry_id}", json={"notes": "felt great"}).json()["notes"] == "felt great"
        assert client.patch(f"/history/{entry_id}", json={"notes": ""}).json()["notes"] is None
        assert client.patch("/history/9999", json={"notes": "x"}).status_code == 404

    def test_delete_one_and_clear_all(self, client, catalog):
        first = client.post("/history", json={"date": "2026-10-17", "workout_id": "M1"}).json()["id"]
        client.post("/history", json={"date": "2026-10-18", "workout_id": "M2"})

        assert client.delete(f"/history/{first}").status_code == 200
        assert client.delete(f"/history/{first}").status_code == 404
        assert len(client.get("/history").json()) == 1

        assert client.delete("/history").json() == {"message": "All history cleared successfully"}
        assert client.get("/history").json() == []
