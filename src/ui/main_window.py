from PySide6.QtWidgets import QMainWindow, QTabWidget

from core.state import Notify
from db.database import count_media_files
from ui.import_view import ImportView
from ui.toast import Toast


class MainWindow(QMainWindow):
    def __init__(self, app_state):
        super().__init__()
        self.setWindowTitle("MP3Org Python")
        self.resize(900, 650)
        self.app_state = app_state

        self.tabs = QTabWidget()
        self.import_view = ImportView(self.app_state, self)
        self.tabs.addTab(self.import_view, "Import")
        self.setCentralWidget(self.tabs)

        self.app_state.notification.connect(self._on_notify)
        self.app_state.status_changed.connect(lambda msg: self.statusBar().showMessage(msg, 4000))
        self.app_state.library_changed.connect(self._update_library_count)

        self._update_library_count()
        self.show_queued_notifications()

    def _update_library_count(self):
        try:
            count = count_media_files(self.app_state.db)
        except Exception as e:
            self.statusBar().showMessage(f"Library unavailable: {e}")
            return
        self.statusBar().showMessage(f"{count} files in library")

    def _on_notify(self, n: Notify):
        msg = getattr(n, "message", "") or ""
        if not msg:
            return
        # toast kinds use "warn"
        kind = (getattr(n, "notify_type", "info") or "info").lower()
        if kind == "warning":
            kind = "warn"
        Toast(self, msg, kind=kind).show_bottom_right()

    def show_queued_notifications(self):
        for n in self.app_state.queued_notifications:
            self._on_notify(n)
        self.app_state.queued_notifications.clear()

    def closeEvent(self, event):
        self.import_view.shutdown()
        super().closeEvent(event)
