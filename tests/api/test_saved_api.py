"""Tests for /favorites and /watchlater endpoints."""

import pytest


@pytest.mark.parametrize("prefix", ["/favorites", "/watchlater"])
class TestSavedLists:
    def test_add_list_remove(self, client, make_workout, prefix):
        make_workout(workout_id="A", title="Leg Day", duration_min=25)
        make_workout(workout_id="B", title="Arm Day")

        assert client.post(prefix, json={"workout_id": "A"}).status_code == 201
        added = client.post(prefix, json={"workout_id": "B"}).json()
        assert added["title"] == "Arm Day"

        items = client.get(prefix).json()
        assert [item["workout_id"] for item in items] == ["B", "A"]
        assert items[1]["duration_min"] == 25

        assert client.delete(f"{prefix}/A").status_code == 200
        assert [item["workout_id"] for item in client.get(prefix).json()] == ["B"]

    def test_errors(self, client, make_workout, prefix):
        make_workout(workout_id="A")

        assert client.post(prefix, json={"workout_id": "NOPE"}).status_code == 404
        client.post(prefix, json={"workout_id": "A"})
        assert client.post(prefix, json={"workout_id": "A"}).status_code == 409
        assert client.delete(f"{prefix}/NOPE").status_code == 404
        assert client.post(prefix, json={}).status_code == 422


def test_lists_are_independent(client, make_workout):
    make_workout(workout_id="A")
    client.post("/favorites", json={"workout_id": "A"})

    assert client.get("/watchlater").json() == []
    assert client.post("/watchlater", json={"workout_id": "A"}).status_code == 201
