from __future__ import annotations

from datetime import date as _date
from typing import Optional, List

from sqlmodel import Field, SQLModel, Relationship
from sqlalchemy import CheckConstraint
from sqlalchemy.orm import relationship


class Invoice(SQLModel, table=True):
	__tablename__ = "invoices"
	__table_args__ = (
		CheckConstraint("trim(customer_name) <> ''", name="ck_invoices_customer_name"),
		{"sqlite_autoincrement": True},
	)

	id: Optional[int] = Field(default=None, primary_key=True)
	customer_name: str
	# SQLite stores Date as 'YYYY-MM-DD' text
	date: _date

	items: List["InvoiceItem"] = Relationship(
		sa_relationship=relationship("InvoiceItem", back_populates="invoice", passive_deletes=True)
	)


class InvoiceItem(SQLModel, table=True):
	__tablename__ = "invoice_items"
	__table_args__ = (
		CheckConstraint("trim(item_name) <> ''", name="ck_invoice_items_item_name"),
		CheckConstraint("quantity > 0", name="ck_invoice_items_quantity"),
		CheckConstraint("price >= 0", name="ck_invoice_items_price"),
		{"sqlite_autoincrement": True},
	)

	id: Optional[int] = Field(default=None, primary_key=True)
	invoice_id: int = Field(foreign_key="invoices.id", ondelete="CASCADE", index=True)
	item_name: str
	quantity: int
	price: float

	invoice: Optional["Invoice"] = Relationship(
		sa_relationship=relationship("Invoice", back_populates="items")
	)
