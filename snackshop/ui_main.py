from __future__ import annotations

import logging

from PySide6.QtWidgets import QApplication, QMainWindow
from sqlalchemy.engine import Engine

from snackshop.core.settings import load_settings, Settings
from snackshop.widgets.invoice_form import InvoiceForm

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Top-level window. Owns the database engine and disposes it on close."""

    def __init__(self, engine: Engine, settings: Settings | None = None) -> None:
        super().__init__()
        QApplication.setStyle("Fusion")
        self.settings: Settings = settings or load_settings()
        self.engine = engine
        self.setWindowTitle(self.settings.window_title)
        self.resize(720, 520)

        self.form = InvoiceForm(engine, self)
        self.setCentralWidget(self.form)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.engine.dispose()
        logger.info("Database closed")
        super().closeEvent(event)


def create_main_window(engine: Engine, settings: Settings | None = None) -> MainWindow:
    return MainWindow(engine, settings)
