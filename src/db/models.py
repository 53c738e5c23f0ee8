from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
import sqlite3

from core.models import MediaRecord, ScanDirectory


def media_record_from_row(row: sqlite3.Row) -> MediaRecord:
    return MediaRecord(
        file_path=row["file_path"],
        file_name=row["file_name"],
        title=row["title"],
        artist=row["artist"],
        album=row["album"],
        genre=row["genre"],
        track_number=row["track_number"],
        year=row["year"],
        duration_s=row["duration_s"],
        file_size=row["file_size"],
        bit_rate=row["bit_rate"],
        sample_rate=row["sample_rate"],
        file_type=row["file_type"],
        last_modified=row["last_modified"],
    )


def scan_directory_from_row(row: sqlite3.Row) -> ScanDirectory:
    # Note: sqlite3.Row doesn't support .get; use "in row.keys()" checks.
    keys = set(row.keys())
    return ScanDirectory(
        path=row["path"],
        scanned_at=int(row["scanned_at"]),
        last_rescan_at=row["last_rescan_at"] if "last_rescan_at" in keys else None,
    )


@dataclass
class Config:
    enabled_file_types: list[str]

    @staticmethod
    def from_row(row: Optional[sqlite3.Row]) -> "Config":
        raw = row["enabled_file_types"] if row is not None else ""
        return Config(
            enabled_file_types=[t for t in (raw or "").split(",") if t],
        )
