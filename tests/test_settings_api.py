"""Tests for settings, configuration and service health."""

from zoneinfo import ZoneInfo

from conftest import auth

from prayer_diary import config
from prayer_diary.config import get_local_timezone
from prayer_diary.models import Setting


class TestSettings:
    def test_upsert_requires_administrator(self, client, editor):
        response = client.put(
            "/api/settings", json={"settings": {"local_timezone": "UTC"}}, headers=auth(editor)
        )
        assert response.status_code == 403

    def test_upsert(self, client, admin):
        client.put(
            "/api/settings", json={"settings": {"local_timezone": "UTC"}}, headers=auth(admin)
        )
        response = client.put(
            "/api/settings",
            json={"settings": {"local_timezone": "Europe/London"}},
            headers=auth(admin),
        )
        assert response.json() == {"settings": {"local_timezone": "Europe/London"}}
        assert client.get("/api/settings").json() == response.json()


class TestLocalTimezone:
    def test_db_setting_wins(self, db, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.toml").write_text('local_timezone = "America/Chicago"\n')
        db.add(Setting(key="local_timezone", value="Europe/London"))
        db.commit()
        assert get_local_timezone(db) == ZoneInfo("Europe/London")

    def test_config_file_fallback(self, db, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "config.toml").write_text('local_timezone = "America/Chicago"\n')
        assert get_local_timezone(db) == ZoneInfo("America/Chicago")

    def test_defaults_to_utc(self, db, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert config.load_config_file() == {}
        assert get_local_timezone(db) == ZoneInfo("UTC")

    def test_unknown_zone_falls_back_to_utc(self, db, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        db.add(Setting(key="local_timezone", value="Mars/Olympus_Mons"))
        db.commit()
        assert get_local_timezone(db) == ZoneInfo("UTC")


class TestHealth:
    def test_health(self, client):
        data = client.get("/health").json()
        assert data["status"] == "ok"
        assert data["service"] == "prayer-diary"
