from pathlib import Path
import sqlite3
import sys

# Ensure project root is on sys.path when running directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snackshop.core.paths import db_path
from snackshop.core.settings import load_settings
from snackshop.data.db import open_database


def main() -> None:
    settings = load_settings()
    path = db_path(settings.db_filename)
    engine = open_database(path)
    engine.dispose()

    conn = sqlite3.connect(str(path))
    try:
        for table in ("invoices", "invoice_items"):
            cols = conn.execute(f"PRAGMA table_info('{table}')").fetchall()
            print(f"{table.upper()} COLUMNS:", [(c[1], c[2], bool(c[3])) for c in cols])
    finally:
        conn.close()
    print("Schema ready:", path)


if __name__ == "__main__":
    main()
