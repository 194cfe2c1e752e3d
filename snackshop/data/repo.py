from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List, Optional

from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from snackshop.core.errors import InvoiceSaveError
from snackshop.core.validation import LineItem
from snackshop.data.db import session_scope, get_session
from snackshop.data.models import Invoice, InvoiceItem

logger = logging.getLogger(__name__)

_STAGE_MESSAGES = {
	"invoice": "Failed to insert invoice",
	"item": "Failed to insert invoice item",
	"commit": "Failed to commit transaction",
}


def create_invoice(engine: Engine, customer_name: str, invoice_date: date, items: Iterable[LineItem]) -> Invoice:
	"""
	Insert an invoice header and its items in a single transaction.

	Items are inserted one by one in the given order, each referencing the new
	invoice id. Any failure (including the commit) rolls the whole invoice back
	and is re-raised as InvoiceSaveError.

	Inputs are expected to be validated already (see core.validation); the
	table constraints still reject non-positive quantities and negative prices.
	"""
	stage = "invoice"
	count = 0
	try:
		with session_scope(engine) as s:
			inv = Invoice(customer_name=customer_name, date=invoice_date)
			s.add(inv)
			# Flush to get the generated id before inserting items
			s.flush()

			stage = "item"
			for item in items:
				s.add(InvoiceItem(
					invoice_id=inv.id,  # type: ignore[arg-type]
					item_name=item.item_name,
					quantity=item.quantity,
					price=item.price,
				))
				s.flush()
				count += 1
			stage = "commit"
	# OverflowError: a Python int too large for a SQLite INTEGER
	except (SQLAlchemyError, OverflowError) as e:
		message = f"{_STAGE_MESSAGES[stage]}: {e}"
		logger.exception("Invoice save rolled back (%s)", stage)
		raise InvoiceSaveError(message) from e

	logger.info("Saved invoice %s for %r with %d item(s)", inv.id, customer_name, count)
	# After commit, the returned instance is detached but not expired (expire_on_commit=False)
	return inv


def get_last_invoice(engine: Engine) -> Optional[Invoice]:
	"""Return the most recently created invoice (highest id), or None."""
	with get_session(engine) as s:
		stmt = select(Invoice).order_by(Invoice.id.desc()).limit(1)
		return s.exec(stmt).first()


def list_invoice_items(engine: Engine, invoice_id: int) -> List[InvoiceItem]:
	"""Return the items of one invoice in insertion (id) order."""
	with get_session(engine) as s:
		stmt = select(InvoiceItem).where(InvoiceItem.invoice_id == invoice_id).order_by(InvoiceItem.id.asc())
		return list(s.exec(stmt).all())


def count_invoices(engine: Engine) -> int:
	with get_session(engine) as s:
		return int(s.exec(select(func.count(Invoice.id))).one())


def count_items(engine: Engine) -> int:
	with get_session(engine) as s:
		return int(s.exec(select(func.count(InvoiceItem.id))).one())
