import os
import sqlite3
import time
import logging
from typing import List

from core.models import MediaRecord, ScanDirectory
from core.utils import normalize_extensions
from db.models import Config, media_record_from_row, scan_directory_from_row
from db.schema import SCHEMA_V1_SQL

logger = logging.getLogger(__name__)

CURRENT_DB_VERSION = 2
DB_FILE_NAME = "db.sqlite3"

def connect(db_path: str) -> sqlite3.Connection:
    db = sqlite3.connect(db_path)
    db.row_factory = sqlite3.Row
    return db

def initialize_database(app_data_dir: str) -> sqlite3.Connection:
    os.makedirs(app_data_dir, exist_ok=True)
    sqlite_path = os.path.join(app_data_dir, DB_FILE_NAME)
    logger.info("Database file path: %s", sqlite_path)

    db = connect(sqlite_path)

    existing_version = int(db.execute("PRAGMA user_version").fetchone()[0])
    upgrade_database_if_needed(db, existing_version)

    return db

def upgrade_database_if_needed(db: sqlite3.Connection, existing_version: int) -> None:
    logger.info("Existing database version: %d", existing_version)

    if existing_version >= CURRENT_DB_VERSION:
        return

    if existing_version <= 0:
        logger.info("Migrate database version 1...")
        db.execute("PRAGMA journal_mode=WAL")
        db.execute("PRAGMA user_version=1")
        db.executescript(SCHEMA_V1_SQL)
        db.commit()

    if existing_version <= 1:
        logger.info("Migrate database version 2...")
        db.execute("PRAGMA user_version=2")
        db.executescript("""
            ALTER TABLE scan_directories ADD COLUMN last_rescan_at INTEGER;
            CREATE INDEX idx_media_files_artist ON media_files(artist);
            CREATE INDEX idx_media_files_file_type ON media_files(file_type);
        """)
        db.commit()

# -------------------------------
# CONFIG
# -------------------------------
def get_config(db: sqlite3.Connection) -> Config:
    row = db.execute("SELECT enabled_file_types FROM config_data LIMIT 1").fetchone()
    return Config.from_row(row)


def set_config(db: sqlite3.Connection, config: Config):
    types = ",".join(sorted(normalize_extensions(config.enabled_file_types)))
    db.execute("UPDATE config_data SET enabled_file_types = ? WHERE 1", (types,))
    db.commit()

# -------------------------------
# SCAN DIRECTORIES
# -------------------------------
def get_scan_directories(db: sqlite3.Connection) -> List[ScanDirectory]:
    cursor = db.execute("""
        SELECT path, scanned_at, last_rescan_at
        FROM scan_directories
        ORDER BY path
    """)
    return [scan_directory_from_row(row) for row in cursor.fetchall()]


def get_scan_directory_paths(db: sqlite3.Connection) -> List[str]:
    return [d.path for d in get_scan_directories(db)]


def record_scan_directory(db: sqlite3.Connection, path: str | None) -> None:
    if not path or not path.strip():
        return
    path = os.path.normpath(path.strip())

    row = db.execute("SELECT id FROM scan_directories WHERE path = ?", (path,)).fetchone()
    if row:
        update_scan_directory_rescan_time(db, path)
        return

    db.execute(
        "INSERT INTO scan_directories (path, scanned_at) VALUES (?, ?)",
        (path, int(time.time()))
    )
    db.commit()


def update_scan_directory_rescan_time(db: sqlite3.Connection, path: str) -> None:
    # unknown paths are a no-op
    db.execute(
        "UPDATE scan_directories SET last_rescan_at = ? WHERE path = ?",
        (int(time.time()), path)
    )
    db.commit()

# -------------------------------
# MEDIA FILES
# -------------------------------
def add_media_file(db: sqlite3.Connection, record: MediaRecord) -> bool:
    """Insert one record. Returns False when the file path is already in the library."""
    cursor = db.execute("""
        INSERT OR IGNORE INTO media_files (
            file_path, file_name, title, artist, album, genre,
            track_number, year, duration_s, file_size,
            bit_rate, sample_rate, file_type, last_modified, date_added
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
    """, (
        record.file_path,
        record.file_name,
        record.title,
        record.artist,
        record.album,
        record.genre,
        record.track_number,
        record.year,
        record.duration_s,
        record.file_size,
        record.bit_rate,
        record.sample_rate,
        record.file_type,
        record.last_modified,
        int(time.time()),
    ))
    db.commit()
    return cursor.rowcount == 1


def find_media_file(db: sqlite3.Connection, file_path: str) -> MediaRecord:
    row = db.execute("SELECT * FROM media_files WHERE file_path = ?", (file_path,)).fetchone()
    if row:
        return media_record_from_row(row)
    raise ValueError("Media file not found")


def get_media_files(db: sqlite3.Connection) -> List[MediaRecord]:
    cursor = db.execute("SELECT * FROM media_files ORDER BY id")
    return [media_record_from_row(row) for row in cursor.fetchall()]


def get_media_file_paths(db: sqlite3.Connection) -> set[str]:
    cursor = db.execute("SELECT file_path FROM media_files")
    return {row["file_path"] for row in cursor.fetchall()}


def count_media_files(db: sqlite3.Connection) -> int:
    return int(db.execute("SELECT COUNT(*) FROM media_files").fetchone()[0])

# -------------------------------
# CLEAN LIBRARY
# -------------------------------
def clean_library(db: sqlite3.Connection) -> None:
    db.execute("DELETE FROM media_files")
    db.execute("DELETE FROM scan_directories")
    db.commit()
