"""Tests for the library database."""

from pathlib import Path

from conftest import make_record
from db.database import (
    CURRENT_DB_VERSION,
    add_media_file,
    count_media_files,
    find_media_file,
    get_config,
    get_media_files,
    get_scan_directories,
    get_scan_directory_paths,
    initialize_database,
    record_scan_directory,
    set_config,
    update_scan_directory_rescan_time,
)
from db.models import Config

import pytest


class TestInitializeDatabase:
    def test_creates_database_file(self, tmp_path: Path):
        db = initialize_database(str(tmp_path / "app"))
        db.close()
        assert (tmp_path / "app" / "db.sqlite3").exists()

    def test_sets_schema_version(self, db):
        assert db.execute("PRAGMA user_version").fetchone()[0] == CURRENT_DB_VERSION

    def test_schema_creates_tables(self, db):
        tables = db.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        names = {row["name"] for row in tables}
        assert {"media_files", "scan_directories", "config_data"} <= names

    def test_reopen_keeps_data(self, tmp_path: Path):
        db = initialize_database(str(tmp_path))
        record_scan_directory(db, "/music")
        db.close()

        db = initialize_database(str(tmp_path))
        assert get_scan_directory_paths(db) == ["/music"]
        db.close()


class TestScanDirectories:
    def test_records_directories(self, db):
        record_scan_directory(db, "/music/test1")
        record_scan_directory(db, "/music/test2")
        assert get_scan_directory_paths(db) == ["/music/test1", "/music/test2"]

    def test_no_duplicates(self, db):
        record_scan_directory(db, "/music/duplicate")
        record_scan_directory(db, "/music/duplicate")
        assert get_scan_directory_paths(db) == ["/music/duplicate"]

    def test_alphabetical_order(self, db):
        for p in ("/music/zzz", "/music/aaa", "/music/mmm"):
            record_scan_directory(db, p)
        assert get_scan_directory_paths(db) == ["/music/aaa", "/music/mmm", "/music/zzz"]

    def test_ignores_blank_paths(self, db):
        record_scan_directory(db, None)
        record_scan_directory(db, "")
        record_scan_directory(db, "   ")
        assert get_scan_directory_paths(db) == []

    def test_rescan_updates_timestamp(self, db):
        record_scan_directory(db, "/music/rescan")
        assert get_scan_directories(db)[0].last_rescan_at is None

        record_scan_directory(db, "/music/rescan")

        d = get_scan_directories(db)[0]
        assert d.last_rescan_at is not None
        assert d.last_scanned_at == d.last_rescan_at

    def test_rescan_time_for_unknown_path_is_noop(self, db):
        update_scan_directory_rescan_time(db, "/music/non-existent")
        assert get_scan_directories(db) == []


class TestMediaFiles:
    def test_add_and_find(self, db):
        record = make_record("/music/a/song.mp3", title="Song")
        assert add_media_file(db, record)

        found = find_media_file(db, "/music/a/song.mp3")
        assert found == record

    def test_duplicate_path_is_skipped(self, db):
        assert add_media_file(db, make_record("/music/a/song.mp3"))
        assert not add_media_file(db, make_record("/music/a/song.mp3", title="Other"))
        assert count_media_files(db) == 1
        assert get_media_files(db)[0].title == "song"

    def test_find_missing_raises(self, db):
        with pytest.raises(ValueError):
            find_media_file(db, "/nope.mp3")


class TestConfig:
    def test_default_file_types(self, db):
        config = get_config(db)
        assert "mp3" in config.enabled_file_types
        assert "flac" in config.enabled_file_types
        assert len(config.enabled_file_types) == 10

    def test_set_config_normalizes(self, db):
        set_config(db, Config(enabled_file_types=[".MP3", "flac", " "]))
        assert get_config(db).enabled_file_types == ["flac", "mp3"]


class TestScanHistoryStore:
    def test_persist_and_delete_all(self, store, db):
        store.persist(make_record("/music/a/one.mp3"))
        store.record_scanned_root("/music/a")
        assert count_media_files(db) == 1
        assert store.list_scanned_roots() == ["/music/a"]

        store.delete_all()

        assert count_media_files(db) == 0
        assert store.list_scanned_roots() == []

    def test_trailing_separator_is_same_directory(self, db):
        record_scan_directory(db, "/music")
        record_scan_directory(db, "/music/")
        assert get_scan_directory_paths(db) == ["/music"]
