"""Tests for configuration, session storage and the task cache."""

import json
from unittest.mock import patch

from cadence.adapters.file_cache import FileTaskCache
from cadence.config import DATA_DIR, Config, Session, load_config
from cadence.core.tasks import Priority, SyncState, TaskStatus


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.conf")
        assert config == Config()
        assert config.tzinfo is None
        assert config.cache_path == DATA_DIR / "cache"

    def test_parses_values(self, tmp_path):
        config_file = tmp_path / "cadence.conf"
        config_file.write_text(
            "# Supabase project\n"
            "SUPABASE_URL = https://demo.supabase.co/\n"
            'SUPABASE_ANON_KEY = "anon#key" # quoted keeps the hash\n'
            "TIMEZONE = America/Toronto  # local\n"
            "DUE_SOON_HOURS = 4\n"
            "UPCOMING_DAYS = 14\n"
            "DEFAULT_SORT = priority\n"
            "SOMETHING_ELSE = ignored\n"
        )

        config = load_config(config_file)

        assert config.supabase_url == "https://demo.supabase.co"
        assert config.supabase_anon_key == "anon#key"
        assert config.timezone == "America/Toronto"
        assert str(config.tzinfo) == "America/Toronto"
        assert config.due_soon_hours == 4
        assert config.upcoming_days == 14
        assert config.default_sort == "priority"

    def test_bad_integer_keeps_default(self, tmp_path):
        config_file = tmp_path / "cadence.conf"
        config_file.write_text("UPCOMING_DAYS = soon\n")
        assert load_config(config_file).upcoming_days == 7

    def test_cache_dir_expands_user(self):
        assert "~" not in str(Config(cache_dir="~/cadence-cache").cache_path)

    def test_unknown_timezone_falls_back_to_local(self):
        assert Config(timezone="Mars/Olympus_Mons").tzinfo is None


class TestSession:
    def test_save_and_load(self, tmp_path):
        session_file = tmp_path / "config" / ".session.json"
        with patch("cadence.config.SESSION_FILE", session_file):
            Session(access_token="tok", refresh_token="r", expires_at=123, user_id="u1",
                    email="ada@example.com").save()
            loaded = Session.load()

        assert loaded.access_token == "tok"
        assert loaded.user_id == "u1"
        assert loaded.is_authenticated
        assert session_file.stat().st_mode & 0o777 == 0o600

    def test_load_corrupt_file(self, tmp_path):
        session_file = tmp_path / ".session.json"
        session_file.write_text("{not json")
        with patch("cadence.config.SESSION_FILE", session_file):
            assert not Session.load().is_authenticated

    def test_clear(self, tmp_path):
        session_file = tmp_path / ".session.json"
        session_file.write_text("{}")
        with patch("cadence.config.SESSION_FILE", session_file):
            Session.clear()
        assert not session_file.exists()

    def test_first_name(self):
        assert Session(display_name="Ada Lovelace").first_name == "Ada"
        assert Session(email="grace@example.com").first_name == "grace"
        assert Session().first_name == "there"

    def test_expires_soon(self):
        assert not Session(expires_at=0).expires_soon()
        assert Session(expires_at=1).expires_soon()


class TestFileTaskCache:
    def test_load_missing(self, tmp_path):
        assert FileTaskCache(tmp_path).load("u1") is None

    def test_save_and_load(self, tmp_path, make_task, now):
        cache = FileTaskCache(tmp_path / "nested")
        task = make_task("Cached", status=TaskStatus.DONE, priority=Priority.URGENT, completed_at=now,
                         due_at=now, category_id="c1", owner_id="u1")

        cache.save("u1", [task])
        loaded = cache.load("u1")

        assert loaded == [task]
        assert (tmp_path / "nested" / "tasks_u1.json").exists()

    def test_owners_are_separate(self, tmp_path, make_task):
        cache = FileTaskCache(tmp_path)
        cache.save("u1", [make_task()])
        assert cache.load("u2") is None

    def test_corrupt_file_is_ignored(self, tmp_path):
        (tmp_path / "tasks_u1.json").write_text(json.dumps([{"no": "id"}]))
        assert FileTaskCache(tmp_path).load("u1") is None

    def test_pending_round_trip(self, tmp_path, make_task):
        cache = FileTaskCache(tmp_path)
        task = make_task("Offline", id="local-1", category_id="c1", sync=SyncState.PENDING)

        cache.save_pending("u1", [task])

        assert cache.load_pending("u1") == [task]
        assert cache.load("u1") is None

    def test_pending_missing_is_empty(self, tmp_path):
        assert FileTaskCache(tmp_path).load_pending("u1") == []

    def test_saving_no_pending_removes_file(self, tmp_path, make_task):
        cache = FileTaskCache(tmp_path)
        cache.save_pending("u1", [make_task(sync=SyncState.PENDING)])
        cache.save_pending("u1", [])
        assert not (tmp_path / "pending_u1.json").exists()
