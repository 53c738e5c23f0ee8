# src/library/scan_library.py
from __future__ import annotations

import os
import logging
from typing import Iterable, Optional

from mutagen import File as MutagenFile
from mutagen._util import MutagenError

from core.models import MediaRecord
from core.utils import normalize_extensions

logger = logging.getLogger(__name__)

AUDIO_EXTS = {"mp3", "flac", "ogg", "wav", "aac", "m4a", "wma", "aiff", "ape", "opus"}


class ScanError(Exception):
    pass


def _log_walk_error(err: OSError) -> None:
    logger.warning("Skipping unreadable directory %s: %s", err.filename, err)


def iter_audio_paths(root: str, extensions: Iterable[str] = AUDIO_EXTS) -> list[str]:
    if not root or not os.path.isdir(root):
        raise ScanError(f"Invalid directory: {root}")
    try:
        # the root itself must be readable; only subdirectories are skipped
        with os.scandir(root):
            pass
    except OSError as e:
        raise ScanError(f"Cannot read {root}: {e}") from e

    exts = normalize_extensions(extensions)
    paths: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_log_walk_error):
        dirnames.sort()
        for fn in sorted(filenames):
            ext = os.path.splitext(fn)[1].lower().lstrip(".")
            if ext in exts:
                paths.append(os.path.join(dirpath, fn))
    return paths

def _first(easy, key: str) -> str | None:
    v = easy.get(key)
    if not v:
        return None
    if isinstance(v, list):
        return (str(v[0]).strip() if v else None) or None
    s = str(v).strip()
    return s or None

def _parse_number(raw: str | None) -> int | None:
    # "3/12" -> 3, "1999-04-01" -> 1999
    if not raw:
        return None
    try:
        head = str(raw).split("/")[0].split("-")[0].strip()
        return int(head)
    except ValueError:
        return None

def _basic_record(path: str) -> MediaRecord:
    st = os.stat(path)
    file_name = os.path.basename(path)
    stem, ext = os.path.splitext(file_name)
    return MediaRecord(
        file_path=os.path.abspath(path),
        file_name=file_name,
        title=stem,
        artist=None,
        album=None,
        genre=None,
        track_number=None,
        year=None,
        duration_s=None,
        file_size=st.st_size,
        bit_rate=None,
        sample_rate=None,
        file_type=ext.lower().lstrip("."),
        last_modified=st.st_mtime,
    )

def new_media_record_from_path(path: str) -> MediaRecord:
    """
    Build a MediaRecord for one audio file.

    File facts (size, mtime, type) always come from the filesystem. Tags and
    stream info come from mutagen; a file mutagen cannot parse still yields a
    record titled after its file name.
    """
    record = _basic_record(path)

    try:
        audio = MutagenFile(path, easy=True)
    except (MutagenError, Exception) as e:
        logger.warning("Error reading metadata from %s: %s", path, e)
        return record
    if audio is None:
        return record

    info = getattr(audio, "info", None)
    duration_s: Optional[int] = None
    bit_rate: Optional[int] = None
    sample_rate: Optional[int] = None
    if info is not None:
        if getattr(info, "length", None):
            duration_s = int(round(float(info.length)))
        if getattr(info, "bitrate", None):
            bit_rate = int(info.bitrate) // 1000   # kbps
        if getattr(info, "sample_rate", None):
            sample_rate = int(info.sample_rate)

    tags = audio.tags or {}

    return MediaRecord(
        file_path=record.file_path,
        file_name=record.file_name,
        title=_first(tags, "title") or record.title,
        artist=_first(tags, "artist"),
        album=_first(tags, "album"),
        genre=_first(tags, "genre"),
        track_number=_parse_number(_first(tags, "tracknumber")),
        year=_parse_number(_first(tags, "date")),
        duration_s=duration_s,
        file_size=record.file_size,
        bit_rate=bit_rate,
        sample_rate=sample_rate,
        file_type=record.file_type,
        last_modified=record.last_modified,
    )


class FileScanner:
    """Walks root directories and reads one MediaRecord per enabled audio file."""

    def __init__(
        self,
        extensions: Iterable[str] | None = None,
        known_paths: set[str] | None = None,
    ):
        self.extensions = normalize_extensions(extensions) if extensions else set(AUDIO_EXTS)
        # files already in the library are not read again
        self.known_paths = known_paths if known_paths is not None else set()

    def scan(self, root_paths: list[str]) -> list[MediaRecord]:
        records: list[MediaRecord] = []
        for root in root_paths:
            root = root.strip()
            try:
                paths = iter_audio_paths(root, self.extensions)
            except OSError as e:
                raise ScanError(f"Cannot read {root}: {e}") from e

            found = 0
            for p in paths:
                full = os.path.abspath(p)
                if full in self.known_paths:
                    continue
                try:
                    record = new_media_record_from_path(full)
                except OSError as e:
                    # vanished or unreadable between listing and stat
                    logger.warning("Error processing file %s: %s", full, e)
                    continue
                self.known_paths.add(full)
                records.append(record)
                found += 1

            logger.info("Found %d new music files in %s", found, root)
        return records
