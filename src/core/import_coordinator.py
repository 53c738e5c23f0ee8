# core/import_coordinator.py
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol

from core.models import MediaRecord
from core.utils import display_name

logger = logging.getLogger(__name__)

STATUS_NO_DIRECTORIES = "No directories selected"
STATUS_INITIALIZING = "Initializing scan..."
STATUS_COMPLETED = "Scan completed successfully"
STATUS_CANCELLED = "Scan cancelled"

Listener = Callable[[str, float], None]


class Scanner(Protocol):
    def scan(self, root_paths: list[str]) -> list[MediaRecord]: ...


class RecordStore(Protocol):
    def persist(self, record: MediaRecord) -> None: ...
    def record_scanned_root(self, path: str) -> None: ...


@dataclass
class ScanRun:
    directories: list[str]
    directories_done: int = 0
    records_saved: int = 0
    records_failed: int = 0
    failed_directories: list[str] = field(default_factory=list)
    cancelled: bool = False
    progress: float = 0.0

    @property
    def total(self) -> int:
        return len(self.directories)


class ImportCoordinator:
    """
    Runs one import over an ordered list of root directories.

    Each directory is scanned on its own; every returned record is persisted
    individually and the directory is then recorded as a scanned root.
    A directory whose scan raises is logged, reported and skipped; the run
    carries on with the next one. Cancellation is checked before each
    directory and between records.

    Progress: each of the n directories owns a 1/n slice, and records move
    through that slice in proportion to the directory's record count.
    """

    def __init__(self, scanner: Scanner, store: RecordStore):
        self.scanner = scanner
        self.store = store
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def _emit(self, run: ScanRun, status: str, progress: float | None = None) -> None:
        if progress is not None:
            # never move backwards, never leave [0, 1]
            run.progress = min(1.0, max(run.progress, progress))
        for listener in list(self._listeners):
            listener(status, run.progress)

    def _cancelled(self, run: ScanRun, cancel: threading.Event | None) -> bool:
        if cancel is None or not cancel.is_set():
            return False
        run.cancelled = True
        self._emit(run, STATUS_CANCELLED)
        return True

    def run(
        self,
        directories: Iterable[str],
        cancel: threading.Event | None = None,
    ) -> ScanRun:
        run = ScanRun(directories=[str(d) for d in directories])
        if not run.directories:
            self._emit(run, STATUS_NO_DIRECTORIES)
            return run

        n = run.total
        self._emit(run, STATUS_INITIALIZING, 0.0)

        for i, directory in enumerate(run.directories):
            if self._cancelled(run, cancel):
                logger.info("Scan cancelled before %s", directory)
                return run

            name = display_name(directory)
            self._emit(run, f"Scanning: {name}")

            try:
                records = self.scanner.scan([directory])
            except Exception as e:
                logger.exception("Error scanning directory: %s", directory)
                run.failed_directories.append(directory)
                self._emit(run, f"Error scanning: {name} - {e}", (i + 1) / n)
                continue

            m = len(records)
            self._emit(run, f"Processing {m} files from {name}")

            for j, record in enumerate(records):
                if self._cancelled(run, cancel):
                    logger.info(
                        "Scan cancelled in %s after %d of %d records",
                        directory, j, m,
                    )
                    return run

                try:
                    self.store.persist(record)
                    run.records_saved += 1
                except Exception as e:
                    logger.exception("Error saving record: %s", record.file_path)
                    run.records_failed += 1
                    self._emit(run, f"Error saving: {record.file_name} - {e}")

                self._emit(run, f"Processing {m} files from {name}", (i + (j + 1) / m) / n)

            try:
                self.store.record_scanned_root(directory)
            except Exception as e:
                logger.exception("Error recording scan directory: %s", directory)
                run.failed_directories.append(directory)
                self._emit(run, f"Error scanning: {name} - {e}", (i + 1) / n)
                continue

            run.directories_done += 1
            self._emit(run, f"Finished: {name}", (i + 1) / n)

        self._emit(run, STATUS_COMPLETED, 1.0)
        logger.info(
            "Scan finished: %d directories, %d records saved, %d failed",
            run.directories_done, run.records_saved, run.records_failed,
        )
        return run
