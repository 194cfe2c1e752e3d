from __future__ import annotations

# Allow running this file directly (python snackshop/main.py) by ensuring the project root is on sys.path
import os
import sys
if __package__ in (None, ""):
    sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import logging

from PySide6.QtWidgets import QApplication, QMessageBox

from snackshop.core.errors import DatabaseInitError
from snackshop.core.paths import db_path
from snackshop.core.settings import load_settings, Settings
from snackshop.data.db import open_database
from snackshop.ui_main import create_main_window

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> None:
    settings = load_settings()
    configure_logging(settings)
    app = QApplication.instance() or QApplication(sys.argv)

    path = db_path(settings.db_filename)
    try:
        engine = open_database(path, echo=settings.echo_sql)
    except DatabaseInitError as e:
        logger.error("Database open error for %s: %s", path, e)
        QMessageBox.critical(
            None,
            "Database Error",
            "Failed to connect or initialize the database. Application will exit.",
        )
        sys.exit(1)

    win = create_main_window(engine, settings)
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
