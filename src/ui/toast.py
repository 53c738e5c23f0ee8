from PySide6.QtWidgets import QFrame, QLabel, QHBoxLayout
from PySide6.QtCore import Qt, QTimer

KINDS = ("info", "success", "warn", "error")

class Toast(QFrame):
    def __init__(self, parent, text: str, kind: str = "info", ms: int = 4000):
        super().__init__(parent)
        self.setWindowFlags(Qt.ToolTip)  # floats above
        self.setAttribute(Qt.WA_DeleteOnClose, True)

        self.label = QLabel(text)
        self.label.setWordWrap(True)
        layout = QHBoxLayout(self)
        layout.addWidget(self.label)

        kind = kind if kind in KINDS else "info"
        self.setObjectName(f"toast-{kind}")
        self.setStyleSheet("""
        QFrame { border-radius: 10px; padding: 10px 12px; background: #222; color: #fff; }
        QFrame#toast-success { background: #1f6f3b; }
        QFrame#toast-warn { background: #7a5b12; }
        QFrame#toast-error { background: #7a1b1b; }
        """)

        QTimer.singleShot(ms, self.close)

    def show_bottom_right(self, margin=16):
        p = self.window()
        if p is None or p is self:
            self.show()
            return
        self.adjustSize()
        self.setMaximumWidth(max(200, p.width() // 2))
        x = p.x() + p.width() - self.width() - margin
        y = p.y() + p.height() - self.height() - margin
        self.move(x, y)
        self.show()
