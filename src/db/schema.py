from __future__ import annotations

DEFAULT_FILE_TYPES = "mp3,flac,ogg,wav,aac,m4a,wma,aiff,ape,opus"

# v1 schema; later versions are applied as migrations in db/database.py
SCHEMA_V1_SQL = f"""
CREATE TABLE config_data (
    id INTEGER PRIMARY KEY,
    enabled_file_types TEXT
);

CREATE TABLE scan_directories (
    id INTEGER PRIMARY KEY,
    path TEXT NOT NULL UNIQUE,
    scanned_at INTEGER NOT NULL
);

CREATE TABLE media_files (
    id INTEGER PRIMARY KEY,
    file_path TEXT NOT NULL UNIQUE,
    file_name TEXT,
    title TEXT,
    artist TEXT,
    album TEXT,
    genre TEXT,
    track_number INTEGER,
    year INTEGER,
    duration_s INTEGER,
    file_size INTEGER,
    bit_rate INTEGER,
    sample_rate INTEGER,
    file_type TEXT,
    last_modified FLOAT,
    date_added INTEGER
);

INSERT INTO config_data (enabled_file_types) VALUES ('{DEFAULT_FILE_TYPES}');
"""
