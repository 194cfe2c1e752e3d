from __future__ import annotations

from typing import Optional


class DatabaseInitError(RuntimeError):
	"""The database file could not be opened or its tables could not be created."""


class InvoiceValidationError(ValueError):
	"""User input broke an invoice rule; nothing has been written.

	row is the 1-based grid position for row-specific failures, else None.
	field is one of "customer_name", "items", "item_name", "quantity", "price".
	"""

	def __init__(self, message: str, *, field: str, row: Optional[int] = None) -> None:
		super().__init__(message)
		self.field = field
		self.row = row


class InvoiceSaveError(RuntimeError):
	"""An insert or the commit failed; the transaction was rolled back."""
