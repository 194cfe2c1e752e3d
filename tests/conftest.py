from __future__ import annotations

import os

# Widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path
from typing import List, Tuple

import pytest
from PySide6.QtWidgets import QMessageBox

from snackshop.data.db import open_database


@pytest.fixture
def engine(tmp_path: Path):
    eng = open_database(tmp_path / "snackshop.db")
    yield eng
    eng.dispose()


@pytest.fixture
def message_boxes(monkeypatch) -> List[Tuple[str, str, str]]:
    """Replace the blocking QMessageBox helpers with a recorder of (kind, title, text)."""
    calls: List[Tuple[str, str, str]] = []

    def _recorder(kind: str):
        def _record(parent, title, text, *args, **kwargs):
            calls.append((kind, title, text))
            return QMessageBox.StandardButton.Ok
        return _record

    for kind in ("warning", "critical", "information"):
        monkeypatch.setattr(QMessageBox, kind, _recorder(kind))
    return calls
