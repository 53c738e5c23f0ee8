# core/selection.py
from __future__ import annotations

import logging
from typing import Protocol

from core.models import DirectoryEntry, ScanDirectory
from core.utils import fmt_timestamp

logger = logging.getLogger(__name__)

STATUS_PREVIOUSLY_SCANNED = "Previously scanned"


class HistoryStore(Protocol):
    def list_scan_directories(self) -> list[ScanDirectory]: ...
    def delete_all(self) -> None: ...


class DirectorySelectionModel:
    """Previously scanned roots with a per-entry selection flag."""

    def __init__(self, store: HistoryStore):
        self.store = store
        self._entries: list[DirectoryEntry] = []

    @property
    def entries(self) -> list[DirectoryEntry]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def refresh(self) -> None:
        # always rebuilt from the store, never merged with the old list
        entries: list[DirectoryEntry] = []
        seen: set[str] = set()
        for d in self.store.list_scan_directories():
            if d.path in seen:
                continue
            seen.add(d.path)

            entry = DirectoryEntry.root(d.path)
            entry.status = STATUS_PREVIOUSLY_SCANNED
            entry.last_scanned = fmt_timestamp(d.last_scanned_at)
            entries.append(entry)

        self._entries = entries
        logger.debug("Loaded %d previously scanned directories", len(entries))

    def toggle_all(self, selected: bool) -> None:
        for entry in self._entries:
            entry.selected = selected

    def set_selected(self, index: int, selected: bool) -> None:
        self._entries[index].selected = selected

    def has_selection(self) -> bool:
        return any(e.selected for e in self._entries)

    def selected_paths(self) -> list[str]:
        return [e.path for e in self._entries if e.selected]

    def clear_all(self) -> None:
        """
        Delete every imported record and the scan history, then reload.
        Irreversible; callers confirm with the user first.
        """
        self.store.delete_all()
        logger.info("Library database cleared")
        self.refresh()
