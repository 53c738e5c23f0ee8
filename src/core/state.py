from __future__ import annotations
from dataclasses import dataclass
from PySide6.QtCore import QObject, Signal, Slot

@dataclass(frozen=True)
class Notify:
    message: str
    notify_type: str = "info"   # info/success/warn/error

class AppState(QObject):
    notification = Signal(object)   # emits Notify
    status_changed = Signal(str)    # generic status text
    library_changed = Signal()      # records or scan history were modified

    def __init__(self):
        super().__init__()
        self.app_data_dir: str | None = None
        self.db_path: str | None = None
        self.db = None
        self.queued_notifications: list[Notify] = []

    @Slot(str, str)
    def notify(self, message: str, notify_type: str = "info"):
        self.notification.emit(Notify(message=message, notify_type=notify_type))
