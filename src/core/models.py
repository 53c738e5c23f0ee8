# core/models.py
from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class MediaRecord:
    file_path: str      # absolute path to the audio file
    file_name: str      # basename (song.mp3)
    title: str
    artist: str | None
    album: str | None
    genre: str | None
    track_number: int | None
    year: int | None
    duration_s: int | None
    file_size: int | None
    bit_rate: int | None
    sample_rate: int | None
    file_type: str      # lowercase extension without the dot
    last_modified: float | None

@dataclass(frozen=True)
class ScanDirectory:
    path: str
    scanned_at: int
    last_rescan_at: int | None

    @property
    def last_scanned_at(self) -> int:
        return self.last_rescan_at or self.scanned_at

@dataclass
class DirectoryEntry:
    path: str
    selected: bool
    status: str
    last_scanned: str
    is_root: bool
    root_path: str

    @classmethod
    def root(cls, path: str) -> "DirectoryEntry":
        return cls(
            path=path,
            selected=False,
            status="Ready",
            last_scanned="Never",
            is_root=True,
            root_path=path,
        )

    @classmethod
    def child(cls, path: str, root_path: str) -> "DirectoryEntry":
        # subdirectories start selected so expanding a root rescans all of it
        return cls(
            path=path,
            selected=True,
            status="Subdirectory",
            last_scanned="Never",
            is_root=False,
            root_path=root_path,
        )
