from __future__ import annotations

from datetime import date
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snackshop.core.paths import db_path
from snackshop.core.settings import load_settings
from snackshop.core.validation import validate_invoice
from snackshop.data.db import open_database
from snackshop.data.repo import (
    count_invoices,
    count_items,
    create_invoice,
    get_last_invoice,
    list_invoice_items,
)


def main() -> None:
    settings = load_settings()
    engine = open_database(db_path(settings.db_filename))
    try:
        customer, items = validate_invoice("Smoke Test Customer", [
            ("Chips", "2", "1.50"),
            ("Soda", "1", "0.99"),
        ])
        inv = create_invoice(engine, customer, date.today(), items)
        print("Invoice:", inv.id, inv.customer_name, inv.date)
        print("Counts:", count_invoices(engine), "invoices,", count_items(engine), "items")

        last = get_last_invoice(engine)
        if last is not None:
            for it in list_invoice_items(engine, last.id):
                print("  ", it.item_name, it.quantity, it.price)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
