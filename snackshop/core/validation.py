from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from snackshop.core.errors import InvoiceValidationError

logger = logging.getLogger(__name__)

# (item name, quantity, price) exactly as typed into the grid
RawRow = Tuple[Optional[str], Optional[str], Optional[str]]

# Largest value a SQLite INTEGER column holds
MAX_QUANTITY = 2**63 - 1


@dataclass(frozen=True)
class LineItem:
	item_name: str
	quantity: int
	price: float


def parse_quantity(text: Optional[str]) -> Optional[int]:
	"""Return the integer in text, or None when it is not a plain integer."""
	s = (text or "").strip()
	# int() would accept digit separators like "1_000"
	if not s or "_" in s:
		return None
	try:
		value = int(s)
	except ValueError:
		return None
	return value if value <= MAX_QUANTITY else None


def parse_price(text: Optional[str]) -> Optional[float]:
	"""Return the finite number in text, or None."""
	s = (text or "").strip()
	if not s or "_" in s:
		return None
	try:
		value = float(s)
	except ValueError:
		return None
	return value if math.isfinite(value) else None


def validate_row(position: int, row: RawRow) -> LineItem:
	"""Check one grid row; position is 1-based and only used for messages."""
	name_text, qty_text, price_text = row
	name = (name_text or "").strip()
	if not name:
		raise InvoiceValidationError(f"Item name in row {position} is empty.", field="item_name", row=position)

	quantity = parse_quantity(qty_text)
	if quantity is None or quantity <= 0:
		raise InvoiceValidationError(f"Quantity in row {position} is invalid.", field="quantity", row=position)

	price = parse_price(price_text)
	if price is None or price < 0:
		raise InvoiceValidationError(f"Price in row {position} is invalid.", field="price", row=position)

	return LineItem(item_name=name, quantity=quantity, price=price)


def validate_invoice(customer_name: Optional[str], rows: Sequence[RawRow]) -> Tuple[str, List[LineItem]]:
	"""Validate a whole invoice before anything is written.

	Stops at the first violation. Returns the trimmed customer name and the
	parsed items in grid order.
	"""
	customer = (customer_name or "").strip()
	if not customer:
		raise InvoiceValidationError("Customer name cannot be empty.", field="customer_name")
	if not rows:
		raise InvoiceValidationError("Add at least one item to the invoice.", field="items")

	items = [validate_row(i + 1, row) for i, row in enumerate(rows)]
	logger.debug("Validated invoice for %r with %d item(s)", customer, len(items))
	return customer, items
