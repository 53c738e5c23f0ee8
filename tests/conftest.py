"""Shared fixtures for the import workflow tests."""

import sqlite3
from pathlib import Path

import pytest

from core.models import MediaRecord, ScanDirectory
from db.database import initialize_database
from db.store import ScanHistoryStore


def make_record(path: str, title: str | None = None) -> MediaRecord:
    name = Path(path).name
    return MediaRecord(
        file_path=path,
        file_name=name,
        title=title or Path(path).stem,
        artist="Artist",
        album="Album",
        genre=None,
        track_number=None,
        year=None,
        duration_s=180,
        file_size=1024,
        bit_rate=320,
        sample_rate=44100,
        file_type=Path(path).suffix.lstrip("."),
        last_modified=1700000000.0,
    )


class FakeScanner:
    """Returns canned records per directory; raises for directories mapped to an exception."""

    def __init__(self, results: dict):
        self.results = results
        self.calls: list[list[str]] = []

    def scan(self, root_paths: list[str]) -> list[MediaRecord]:
        self.calls.append(list(root_paths))
        result = self.results[root_paths[0]]
        if isinstance(result, Exception):
            raise result
        return list(result)


class MemoryStore:
    def __init__(self):
        self.persisted: list[MediaRecord] = []
        self.roots: list[str] = []
        self.fail_on: set[str] = set()
        self.fail_roots: set[str] = set()

    def persist(self, record: MediaRecord) -> None:
        if record.file_path in self.fail_on:
            raise sqlite3.OperationalError("database is locked")
        self.persisted.append(record)

    def record_scanned_root(self, path: str) -> None:
        if path in self.fail_roots:
            raise sqlite3.OperationalError("disk I/O error")
        if path not in self.roots:
            self.roots.append(path)

    def list_scanned_roots(self) -> list[str]:
        return sorted(self.roots)

    def list_scan_directories(self) -> list[ScanDirectory]:
        return [ScanDirectory(path=p, scanned_at=1700000000, last_rescan_at=None) for p in sorted(self.roots)]

    def delete_all(self) -> None:
        self.persisted.clear()
        self.roots.clear()


@pytest.fixture
def db(tmp_path: Path):
    conn = initialize_database(str(tmp_path / "data"))
    yield conn
    conn.close()


@pytest.fixture
def store(db) -> ScanHistoryStore:
    return ScanHistoryStore(db)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()
