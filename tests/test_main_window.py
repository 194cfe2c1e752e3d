from __future__ import annotations

import pytest

from snackshop import main as main_module
from snackshop.core.errors import DatabaseInitError
from snackshop.core.settings import Settings
from snackshop.ui_main import create_main_window
from snackshop.widgets.invoice_form import InvoiceForm


def test_main_window_hosts_the_form(qtbot, engine) -> None:
    win = create_main_window(engine, Settings(window_title="Test Shop"))
    qtbot.addWidget(win)
    assert win.windowTitle() == "Test Shop"
    assert isinstance(win.centralWidget(), InvoiceForm)
    assert win.form.engine is engine


def test_startup_aborts_when_database_fails(qtbot, monkeypatch, message_boxes) -> None:
    def _fail(*args, **kwargs):
        raise DatabaseInitError("unable to open database file")

    monkeypatch.setattr(main_module, "load_settings", lambda: Settings())
    monkeypatch.setattr(main_module, "open_database", _fail)
    monkeypatch.setattr(main_module, "create_main_window", lambda *a, **k: pytest.fail("window must not be created"))

    with pytest.raises(SystemExit) as excinfo:
        main_module.main()

    assert excinfo.value.code == 1
    assert message_boxes == [(
        "critical",
        "Database Error",
        "Failed to connect or initialize the database. Application will exit.",
    )]
