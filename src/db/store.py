from __future__ import annotations

import sqlite3

from core.models import MediaRecord, ScanDirectory
from db.database import (
    add_media_file,
    clean_library,
    get_scan_directories,
    get_scan_directory_paths,
    record_scan_directory,
)


class ScanHistoryStore:
    """
    Imported records plus the roots they were scanned from.

    Bound to one sqlite connection, so a worker thread builds its own store
    over the connection it opened.
    """

    def __init__(self, db: sqlite3.Connection):
        self.db = db

    def list_scanned_roots(self) -> list[str]:
        return get_scan_directory_paths(self.db)

    def list_scan_directories(self) -> list[ScanDirectory]:
        return get_scan_directories(self.db)

    def record_scanned_root(self, path: str) -> None:
        record_scan_directory(self.db, path)

    def persist(self, record: MediaRecord) -> None:
        add_media_file(self.db, record)

    def delete_all(self) -> None:
        clean_library(self.db)
