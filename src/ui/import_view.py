import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QPlainTextEdit,
    QProgressBar, QTableView, QHeaderView, QCheckBox, QFileDialog, QMessageBox,
    QGroupBox
)
from PySide6.QtCore import Qt

from core.selection import DirectorySelectionModel
from db.store import ScanHistoryStore
from ui.models.directory_table_model import DirectoryTableModel
from ui.workers.import_worker import ImportWorker

logger = logging.getLogger(__name__)

class ImportView(QWidget):
    def __init__(self, app_state, parent=None):
        super().__init__(parent)
        self.app_state = app_state
        self.worker: ImportWorker | None = None

        selection = DirectorySelectionModel(ScanHistoryStore(self.app_state.db))
        self.table_model = DirectoryTableModel(selection, self)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(20, 20, 20, 20)
        layout.setSpacing(15)

        # --- Directory selection ---
        pick_box = QGroupBox("Directory Selection")
        pick_layout = QVBoxLayout(pick_box)
        pick_layout.addWidget(QLabel("Choose directories to scan for music files"))

        self.selected_area = QPlainTextEdit()
        self.selected_area.setPlaceholderText("Selected directories will appear here...")
        self.selected_area.setReadOnly(True)
        self.selected_area.setMaximumHeight(80)
        pick_layout.addWidget(self.selected_area)

        btn_row = QHBoxLayout()
        self.scan_btn = QPushButton("Add Directories to Scan")
        self.clear_btn = QPushButton("Clear Database")
        self.clear_btn.setObjectName("DangerButton")
        btn_row.addWidget(self.scan_btn)
        btn_row.addWidget(self.clear_btn)
        btn_row.addStretch(1)
        pick_layout.addLayout(btn_row)
        layout.addWidget(pick_box)

        # --- Rescan ---
        rescan_box = QGroupBox("Rescan Directories")
        rescan_layout = QVBoxLayout(rescan_box)
        rescan_layout.addWidget(QLabel("Select previously scanned directories to rescan"))

        self.table = QTableView()
        self.table.setModel(self.table_model)
        self.table.verticalHeader().setVisible(False)
        self.table.setSelectionBehavior(QTableView.SelectRows)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(0, QHeaderView.ResizeToContents)
        header.setSectionResizeMode(1, QHeaderView.Stretch)
        header.setSectionResizeMode(2, QHeaderView.ResizeToContents)
        header.setSectionResizeMode(3, QHeaderView.ResizeToContents)
        rescan_layout.addWidget(self.table)

        rescan_row = QHBoxLayout()
        self.select_all_chk = QCheckBox("Select All")
        self.rescan_btn = QPushButton("Rescan Selected Directories")
        self.rescan_btn.setEnabled(False)
        rescan_row.addWidget(self.select_all_chk)
        rescan_row.addWidget(self.rescan_btn)
        rescan_row.addStretch(1)
        rescan_layout.addLayout(rescan_row)
        layout.addWidget(rescan_box, 1)

        # --- Progress (hidden when idle) ---
        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setValue(0)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setVisible(False)

        self.progress_label = QLabel("")
        self.status_label = QLabel("Ready")

        progress_row = QHBoxLayout()
        progress_row.addWidget(self.progress_bar, 1)
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setVisible(False)
        progress_row.addWidget(self.cancel_btn)
        layout.addLayout(progress_row)
        layout.addWidget(self.progress_label)
        layout.addWidget(self.status_label)

        # connect
        self.scan_btn.clicked.connect(self.select_directories_to_scan)
        self.clear_btn.clicked.connect(self.clear_database)
        self.select_all_chk.toggled.connect(self.table_model.set_all_selected)
        self.rescan_btn.clicked.connect(self.rescan_selected_directories)
        self.cancel_btn.clicked.connect(self.cancel_scan)
        self.table_model.selectionChanged.connect(self._on_selection_changed)

        self.setStyleSheet("""
            QPushButton#DangerButton { background: #ff6b6b; color: white; }
        """)

        self.load_previously_scanned_directories()

    # ------------------ directory list ------------------
    def load_previously_scanned_directories(self):
        try:
            self.table_model.reload()
            # reload leaves every entry unselected
            self.select_all_chk.blockSignals(True)
            self.select_all_chk.setChecked(False)
            self.select_all_chk.blockSignals(False)
        except Exception as e:
            logger.exception("Error loading previously scanned directories")
            self.status_label.setText(f"Error loading directory list: {e}")

    def _on_selection_changed(self, has_selection: bool):
        self.rescan_btn.setEnabled(has_selection and self.worker is None)

    # ------------------ scanning ------------------
    def select_directories_to_scan(self):
        path = QFileDialog.getExistingDirectory(self, "Select Directories to Scan")
        if not path:
            return

        self.selected_area.setPlainText(path)
        self.scan_directories([path])

    def rescan_selected_directories(self):
        paths = self.table_model.selected_paths()
        if not paths:
            self.status_label.setText("No directories selected for rescanning")
            return
        self.scan_directories(paths)

    def scan_directories(self, directories: list[str]):
        if not directories:
            self.status_label.setText("No directories selected")
            return
        if self.worker is not None:
            return

        self._set_scanning(True)
        self.status_label.setText("Scanning directories...")

        self.worker = ImportWorker(self.app_state.db_path, directories, self)
        self.worker.status_signal.connect(self.progress_label.setText)
        self.worker.progress_signal.connect(self._update_scan_progress)
        self.worker.finished_signal.connect(self._scan_finished)
        self.worker.finished.connect(self.worker.deleteLater)
        self.worker.start()

    def cancel_scan(self):
        if self.worker is not None:
            self.worker.cancel()
            self.cancel_btn.setEnabled(False)

    def _set_scanning(self, scanning: bool):
        self.scan_btn.setEnabled(not scanning)
        self.clear_btn.setEnabled(not scanning)
        self.select_all_chk.setEnabled(not scanning)
        self.rescan_btn.setEnabled(not scanning and self.table_model.selection.has_selection())
        self.progress_bar.setVisible(scanning)
        self.cancel_btn.setVisible(scanning)
        self.cancel_btn.setEnabled(scanning)
        if scanning:
            self.progress_bar.setValue(0)

    def _update_scan_progress(self, done: int, total: int):
        total = max(int(total), 1)
        if self.progress_bar.maximum() != total:
            self.progress_bar.setRange(0, total)
        self.progress_bar.setValue(max(0, min(total, int(done))))

    def _scan_finished(self, ok: bool, msg: str):
        self.worker = None
        self._set_scanning(False)
        self.status_label.setText(msg)
        self.load_previously_scanned_directories()
        self.app_state.library_changed.emit()

        if ok:
            self.app_state.notify(msg, "success")
        else:
            self.app_state.notify(msg, "error" if msg.startswith("Scan failed") else "warn")

    # ------------------ clear ------------------
    def clear_database(self):
        res = QMessageBox.question(
            self,
            "Clear Database",
            "Are you sure you want to clear the database?\n\n"
            "This will remove all imported music files from the database. "
            "This action cannot be undone.",
            QMessageBox.StandardButton.Ok | QMessageBox.StandardButton.Cancel,
            QMessageBox.StandardButton.Cancel,
        )
        if res != QMessageBox.StandardButton.Ok:
            return

        try:
            self.table_model.clear_all()
            self.selected_area.clear()
            self.select_all_chk.setChecked(False)
            self.status_label.setText("Database cleared successfully")
            self.app_state.library_changed.emit()
        except Exception as e:
            logger.exception("Error clearing database")
            self.status_label.setText(f"Error clearing database: {e}")
            self.app_state.notify(f"Error clearing database: {e}", "error")

    def shutdown(self):
        # the in-flight record finishes; nothing after it is imported
        if self.worker is not None:
            self.worker.cancel()
            self.worker.wait()
