"""Tests for prayer topics."""

from conftest import auth


class TestTopics:
    def test_create_is_unassigned(self, client, editor):
        response = client.post(
            "/api/topics",
            json={"title": "Food bank", "body": "<p>Winter</p>"},
            headers=auth(editor),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["pray_day"] == 0
        assert data["pray_months"] == 0
        assert data["created_by"] == editor.id

    def test_create_requires_editor(self, client, make_person):
        member = make_person("Member")
        response = client.post("/api/topics", json={"title": "x"}, headers=auth(member))
        assert response.status_code == 403

    def test_list_by_day_then_title(self, client, make_topic):
        make_topic("Zambia", day=2)
        make_topic("Albania", day=2)
        make_topic("Unassigned")
        titles = [t["title"] for t in client.get("/api/topics").json()]
        assert titles == ["Unassigned", "Albania", "Zambia"]

    def test_update_keeps_rotation(self, client, make_topic, editor):
        t = make_topic("Missions", day=6)
        data = client.put(
            f"/api/topics/{t.id}", json={"title": "World Missions"}, headers=auth(editor)
        ).json()
        assert data["title"] == "World Missions"
        assert data["pray_day"] == 6

    def test_delete(self, client, make_topic, editor):
        topic_id = make_topic("Missions").id
        assert client.delete(f"/api/topics/{topic_id}", headers=auth(editor)).status_code == 204
        assert client.get(f"/api/topics/{topic_id}").status_code == 404

    def test_delete_missing(self, client, editor):
        assert client.delete("/api/topics/999", headers=auth(editor)).status_code == 404
