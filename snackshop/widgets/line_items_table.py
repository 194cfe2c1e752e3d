from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QAbstractItemView, QHeaderView, QTableWidget, QTableWidgetItem

from snackshop.core.currency import line_amount, sum_money
from snackshop.core.validation import RawRow, parse_price, parse_quantity


class LineItemsTable(QTableWidget):
	"""Editable invoice grid: item name, quantity and price, all kept as typed text.

	Nothing is validated here; Save validates the whole grid at once.
	"""

	totalsChanged = Signal(float)

	COL_NAME = 0
	COL_QTY = 1
	COL_PRICE = 2

	DEFAULT_QUANTITY = "1"
	DEFAULT_PRICE = "0.0"

	def __init__(self, parent=None) -> None:
		super().__init__(0, 3, parent)
		self.setHorizontalHeaderLabels(["Item Name", "Quantity", "Price"])
		self.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
		self.verticalHeader().setVisible(False)
		self.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
		self.setEditTriggers(
			QAbstractItemView.EditTrigger.DoubleClicked
			| QAbstractItemView.EditTrigger.EditKeyPressed
			| QAbstractItemView.EditTrigger.AnyKeyPressed
		)
		self.itemChanged.connect(self._on_item_changed)

	def add_row(self, item_name: str = "", quantity: str = DEFAULT_QUANTITY, price: str = DEFAULT_PRICE) -> int:
		"""Append a row and return its index."""
		r = self.rowCount()
		self.insertRow(r)
		self.setItem(r, self.COL_NAME, QTableWidgetItem(item_name))
		self.setItem(r, self.COL_QTY, QTableWidgetItem(quantity))
		self.setItem(r, self.COL_PRICE, QTableWidgetItem(price))
		self._emit_totals()
		return r

	def remove_selected_rows(self) -> int:
		"""Remove every selected row, bottom-most first, and return how many went."""
		rows = sorted(
			{r for rng in self.selectedRanges() for r in range(rng.topRow(), rng.bottomRow() + 1)},
			reverse=True,
		)
		for r in rows:
			self.removeRow(r)
		if rows:
			self._emit_totals()
		return len(rows)

	def clear_rows(self) -> None:
		self.setRowCount(0)
		self._emit_totals()

	def rows(self) -> List[RawRow]:
		"""Cell texts per row, in grid order."""
		return [
			(self._text(r, self.COL_NAME), self._text(r, self.COL_QTY), self._text(r, self.COL_PRICE))
			for r in range(self.rowCount())
		]

	def total(self) -> Decimal:
		"""Sum of quantity * price over rows whose numbers currently parse; others count as zero."""
		amounts = []
		for _name, qty_text, price_text in self.rows():
			qty = parse_quantity(qty_text)
			price = parse_price(price_text)
			if qty is None or price is None or qty <= 0 or price < 0:
				continue
			amounts.append(line_amount(qty, price))
		return sum_money(amounts)

	def _text(self, row: int, col: int) -> str:
		it: Optional[QTableWidgetItem] = self.item(row, col)
		return it.text() if it is not None else ""

	def _on_item_changed(self, item: QTableWidgetItem) -> None:
		if item.column() in (self.COL_QTY, self.COL_PRICE):
			self._emit_totals()

	def _emit_totals(self) -> None:
		self.totalsChanged.emit(float(self.total()))
