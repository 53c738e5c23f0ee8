# ui/workers/import_worker.py
from __future__ import annotations

import logging
import threading

from PySide6.QtCore import QThread, Signal

from core.import_coordinator import ImportCoordinator
from db.database import connect, get_config, get_media_file_paths
from db.store import ScanHistoryStore
from library.scan_library import FileScanner

logger = logging.getLogger(__name__)

PROGRESS_STEPS = 1000

class ImportWorker(QThread):
    status_signal = Signal(str)            # status text
    progress_signal = Signal(int, int)     # done, total (PROGRESS_STEPS)
    finished_signal = Signal(bool, str)    # ok, message

    def __init__(self, db_path: str, directories: list[str], parent=None):
        super().__init__(parent)
        self.db_path = db_path
        self.directories = list(directories)
        self._cancel = threading.Event()

    def cancel(self):
        self._cancel.set()

    def _on_event(self, status: str, progress: float):
        # runs on the worker thread; queued signals carry it to the GUI thread
        self.status_signal.emit(status)
        self.progress_signal.emit(int(round(progress * PROGRESS_STEPS)), PROGRESS_STEPS)

    def run(self):
        db = None
        try:
            # IMPORTANT: open db connection inside this thread
            db = connect(self.db_path)
            config = get_config(db)

            scanner = FileScanner(
                extensions=config.enabled_file_types or None,
                known_paths=get_media_file_paths(db),
            )
            coordinator = ImportCoordinator(scanner, ScanHistoryStore(db))
            coordinator.add_listener(self._on_event)

            run = coordinator.run(self.directories, cancel=self._cancel)

            if run.cancelled:
                self.finished_signal.emit(False, "Scan cancelled")
            elif run.failed_directories:
                self.finished_signal.emit(
                    True,
                    f"Scan completed with errors in {len(run.failed_directories)} "
                    f"of {run.total} directories",
                )
            else:
                self.finished_signal.emit(
                    True, f"Scan completed successfully ({run.records_saved} files imported)"
                )
        except Exception as e:
            logger.exception("Scan task failed")
            self.finished_signal.emit(False, f"Scan failed: {e}")
        finally:
            if db is not None:
                db.close()
