from __future__ import annotations

import logging
from datetime import date as _date
from typing import Optional

from PySide6.QtCore import Qt, QDate, Signal
from PySide6.QtWidgets import (
	QWidget,
	QFormLayout,
	QLineEdit,
	QDateEdit,
	QVBoxLayout,
	QHBoxLayout,
	QLabel,
	QPushButton,
	QMessageBox,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from snackshop.core.currency import fmt_money
from snackshop.core.errors import InvoiceSaveError, InvoiceValidationError
from snackshop.core.validation import validate_invoice
from snackshop.data.repo import create_invoice, get_last_invoice, list_invoice_items
from snackshop.widgets.line_items_table import LineItemsTable

logger = logging.getLogger(__name__)

DATE_DISPLAY_FORMAT = "yyyy-MM-dd"


class InvoiceForm(QWidget):
	"""Customer, date and line items of one invoice, plus the four actions on them.

	The engine is owned by the caller; the form only borrows it.
	"""

	invoiceSaved = Signal(int)  # new invoice id
	invoiceLoaded = Signal(int)  # id of the invoice shown

	def __init__(self, engine: Engine, parent=None) -> None:
		super().__init__(parent)
		self.engine = engine

		root = QVBoxLayout(self)
		root.setContentsMargins(12, 12, 12, 12)
		root.setSpacing(8)

		info_form = QFormLayout()
		info_form.setLabelAlignment(Qt.AlignLeft | Qt.AlignVCenter)
		self.customer_edit = QLineEdit()
		self.customer_edit.setPlaceholderText("Customer name")
		self.date_edit = QDateEdit()
		self.date_edit.setCalendarPopup(True)
		self.date_edit.setDisplayFormat(DATE_DISPLAY_FORMAT)
		self.date_edit.setDate(QDate.currentDate())
		info_form.addRow("Customer", self.customer_edit)
		info_form.addRow("Date", self.date_edit)
		root.addLayout(info_form)

		self.items = LineItemsTable(self)
		root.addWidget(self.items, 1)

		totals_row = QHBoxLayout()
		totals_row.addStretch(1)
		self.total_lbl = QLabel()
		self.total_lbl.setStyleSheet("font-weight: 600;")
		totals_row.addWidget(self.total_lbl)
		root.addLayout(totals_row)
		self._update_total(0.0)

		btns = QHBoxLayout()
		self.btn_add_item = QPushButton("Add Item")
		self.btn_remove_items = QPushButton("Remove Selected")
		self.btn_save = QPushButton("Save Invoice")
		self.btn_load_last = QPushButton("Load Last Invoice")
		btns.addWidget(self.btn_add_item)
		btns.addWidget(self.btn_remove_items)
		btns.addStretch(1)
		btns.addWidget(self.btn_load_last)
		btns.addWidget(self.btn_save)
		root.addLayout(btns)

		# Wire
		self.items.totalsChanged.connect(self._update_total)
		self.btn_add_item.clicked.connect(self.add_item)
		self.btn_remove_items.clicked.connect(self.remove_selected_items)
		self.btn_save.clicked.connect(self.save_invoice)
		self.btn_load_last.clicked.connect(self.load_last_invoice)

	# Field helpers
	def invoice_date(self) -> _date:
		qd = self.date_edit.date()
		return _date(qd.year(), qd.month(), qd.day())

	def set_invoice_date(self, value: _date) -> None:
		self.date_edit.setDate(QDate(value.year, value.month, value.day))

	def reset_form(self) -> None:
		"""Back to a blank invoice: no customer, today's date, no rows."""
		self.customer_edit.clear()
		self.date_edit.setDate(QDate.currentDate())
		self.items.clear_rows()

	def _update_total(self, total: float) -> None:
		self.total_lbl.setText(f"Total: {fmt_money(total)}")

	# Actions
	def add_item(self) -> None:
		self.items.add_row()

	def remove_selected_items(self) -> None:
		removed = self.items.remove_selected_rows()
		logger.debug("Removed %d row(s)", removed)

	def save_invoice(self) -> Optional[int]:
		"""Validate the form and store it as a new invoice.

		Returns the new invoice id, or None when validation or the database
		rejected it (the user has been told why).
		"""
		try:
			customer, items = validate_invoice(self.customer_edit.text(), self.items.rows())
		except InvoiceValidationError as e:
			logger.debug("Save rejected (%s, row %s): %s", e.field, e.row, e)
			QMessageBox.warning(self, "Input Error", str(e))
			return None

		try:
			inv = create_invoice(self.engine, customer, self.invoice_date(), items)
		except InvoiceSaveError as e:
			QMessageBox.critical(self, "Database Error", str(e))
			return None

		QMessageBox.information(self, "Success", "Invoice saved successfully!")
		self.reset_form()
		self.invoiceSaved.emit(int(inv.id))  # type: ignore[arg-type]
		return inv.id

	def load_last_invoice(self) -> bool:
		"""Show the most recently saved invoice.

		With no invoices the form is reset. A failed query is logged and the
		form keeps whatever was already filled in. Returns False on failure.
		"""
		try:
			inv = get_last_invoice(self.engine)
		except (SQLAlchemyError, ValueError):
			logger.exception("Failed to fetch last invoice")
			return False

		if inv is None:
			self.reset_form()
			return True

		self.customer_edit.setText(inv.customer_name)
		self.set_invoice_date(inv.date)
		self.items.clear_rows()

		try:
			rows = list_invoice_items(self.engine, inv.id)  # type: ignore[arg-type]
		except SQLAlchemyError:
			logger.exception("Failed to fetch items of invoice %s", inv.id)
			return False

		for it in rows:
			self.items.add_row(it.item_name, str(it.quantity), str(it.price))
		logger.info("Loaded invoice %s with %d item(s)", inv.id, len(rows))
		self.invoiceLoaded.emit(int(inv.id))  # type: ignore[arg-type]
		return True
