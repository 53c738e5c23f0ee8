# ui/models/directory_table_model.py
from __future__ import annotations
from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex, Signal
from core.selection import DirectorySelectionModel

HEADERS = ["Select", "Directory Path", "Status", "Last Scanned"]

class DirectoryTableModel(QAbstractTableModel):
    selectionChanged = Signal(bool)   # any entry selected

    def __init__(self, selection: DirectorySelectionModel, parent=None):
        super().__init__(parent)
        self.selection = selection

    def reload(self):
        self.beginResetModel()
        self.selection.refresh()
        self.endResetModel()
        self.selectionChanged.emit(self.selection.has_selection())

    def clear_all(self):
        self.beginResetModel()
        try:
            self.selection.clear_all()
        finally:
            self.endResetModel()
        self.selectionChanged.emit(self.selection.has_selection())

    def set_all_selected(self, selected: bool):
        self.selection.toggle_all(selected)
        if self.rowCount() > 0:
            top = self.index(0, 0)
            bottom = self.index(self.rowCount() - 1, 0)
            self.dataChanged.emit(top, bottom, [Qt.CheckStateRole])
        self.selectionChanged.emit(self.selection.has_selection())

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self.selection)

    def columnCount(self, parent=QModelIndex()) -> int:
        return len(HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole or orientation != Qt.Horizontal:
            return None
        return HEADERS[section]

    def flags(self, index: QModelIndex):
        if not index.isValid():
            return Qt.NoItemFlags
        f = Qt.ItemIsEnabled | Qt.ItemIsSelectable
        if index.column() == 0:
            f |= Qt.ItemIsUserCheckable
        return f

    def data(self, index: QModelIndex, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        entry = self.selection.entries[index.row()]
        col = index.column()

        if role == Qt.CheckStateRole and col == 0:
            return Qt.Checked if entry.selected else Qt.Unchecked
        if role == Qt.DisplayRole:
            if col == 1:
                return entry.path
            if col == 2:
                return entry.status
            if col == 3:
                return entry.last_scanned
        if role == Qt.ToolTipRole and col == 1:
            return entry.root_path
        if role == Qt.UserRole:
            return entry
        return None

    def setData(self, index: QModelIndex, value, role=Qt.EditRole) -> bool:
        if not index.isValid() or index.column() != 0 or role != Qt.CheckStateRole:
            return False
        checked = Qt.CheckState(value) == Qt.Checked
        self.selection.set_selected(index.row(), checked)
        self.dataChanged.emit(index, index, [Qt.CheckStateRole])
        self.selectionChanged.emit(self.selection.has_selection())
        return True

    def selected_paths(self) -> list[str]:
        return self.selection.selected_paths()
