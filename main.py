import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import QStandardPaths
from PySide6.QtWidgets import QApplication

ROOT = Path(__file__).resolve().parent
SRC_DIR = ROOT / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from core.state import AppState, Notify
from db.database import DB_FILE_NAME, initialize_database
from ui.main_window import MainWindow

logger = logging.getLogger("mp3org")

def setup_logging() -> None:
    level = os.getenv("MP3ORG_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

def debug_log_schema(db) -> None:
    for table in ("media_files", "scan_directories", "config_data"):
        cur = db.execute(f"PRAGMA table_info({table})")
        logger.info("[%s table schema]", table)
        for _cid, name, col_type, _notnull, _default, _pk in cur.fetchall():
            logger.info("- %s (%s)", name, col_type)

def get_app_data_dir() -> str:
    base = os.getenv("MP3ORG_DATA_DIR") or QStandardPaths.writableLocation(
        QStandardPaths.AppDataLocation
    )
    os.makedirs(base, exist_ok=True)
    return base

def init_app_state() -> AppState:
    app_state = AppState()

    app_data_dir = get_app_data_dir()
    app_state.app_data_dir = app_data_dir
    app_state.db_path = os.path.join(app_data_dir, DB_FILE_NAME)

    try:
        app_state.db = initialize_database(app_data_dir)
    except Exception as e:
        logger.exception("Failed to open library database")
        raise SystemExit(f"Failed to open library database: {e}")

    if os.getenv("MP3ORG_DEBUG_SCHEMA") == "1":
        debug_log_schema(app_state.db)

    if not os.access(app_data_dir, os.W_OK):
        app_state.queued_notifications.append(
            Notify(message=f"Data directory is read-only: {app_data_dir}", notify_type="warn")
        )

    return app_state

def main() -> int:
    setup_logging()
    qt_app = QApplication(sys.argv)
    qt_app.setApplicationName("MP3Org Python")

    app_state = init_app_state()

    main_window = MainWindow(app_state)
    main_window.show()

    code = qt_app.exec()
    app_state.db.close()
    return code

if __name__ == "__main__":
    raise SystemExit(main())
