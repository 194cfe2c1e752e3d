from __future__ import annotations

import pytest

from snackshop.core.errors import InvoiceValidationError
from snackshop.core.validation import LineItem, parse_price, parse_quantity, validate_invoice


def test_valid_invoice_is_trimmed_and_parsed() -> None:
    customer, items = validate_invoice("  Ada  ", [
        (" Chips ", "2", "1.50"),
        ("Soda", " 1 ", "0.99"),
    ])
    assert customer == "Ada"
    assert items == [
        LineItem(item_name="Chips", quantity=2, price=1.5),
        LineItem(item_name="Soda", quantity=1, price=0.99),
    ]


def test_zero_price_is_allowed() -> None:
    _, items = validate_invoice("Ada", [("Free sample", "1", "0.0")])
    assert items[0].price == 0.0


@pytest.mark.parametrize(
    "customer, rows, field, row, message",
    [
        ("", [("Chips", "1", "1")], "customer_name", None, "Customer name cannot be empty."),
        ("   ", [("Chips", "1", "1")], "customer_name", None, "Customer name cannot be empty."),
        ("Ada", [], "items", None, "Add at least one item to the invoice."),
        ("Ada", [("  ", "1", "1")], "item_name", 1, "Item name in row 1 is empty."),
        ("Ada", [(None, "1", "1")], "item_name", 1, "Item name in row 1 is empty."),
        ("Ada", [("Chips", "0", "1")], "quantity", 1, "Quantity in row 1 is invalid."),
        ("Ada", [("Chips", "-3", "1")], "quantity", 1, "Quantity in row 1 is invalid."),
        ("Ada", [("Chips", "abc", "1")], "quantity", 1, "Quantity in row 1 is invalid."),
        ("Ada", [("Chips", "1.5", "1")], "quantity", 1, "Quantity in row 1 is invalid."),
        ("Ada", [("Chips", "1", "-1")], "price", 1, "Price in row 1 is invalid."),
        ("Ada", [("Chips", "1", "xyz")], "price", 1, "Price in row 1 is invalid."),
        ("Ada", [("Chips", "1", "")], "price", 1, "Price in row 1 is invalid."),
    ],
)
def test_rejections(customer, rows, field, row, message) -> None:
    with pytest.raises(InvoiceValidationError) as excinfo:
        validate_invoice(customer, rows)
    assert excinfo.value.field == field
    assert excinfo.value.row == row
    assert str(excinfo.value) == message


def test_first_failing_row_wins() -> None:
    rows = [
        ("Chips", "1", "1"),
        ("", "1", "1"),
        ("Soda", "abc", "1"),
    ]
    with pytest.raises(InvoiceValidationError) as excinfo:
        validate_invoice("Ada", rows)
    assert excinfo.value.row == 2
    assert excinfo.value.field == "item_name"


def test_name_checked_before_quantity_and_price() -> None:
    with pytest.raises(InvoiceValidationError) as excinfo:
        validate_invoice("Ada", [("", "abc", "xyz")])
    assert excinfo.value.field == "item_name"


def test_parse_helpers() -> None:
    assert parse_quantity(" 3 ") == 3
    assert parse_quantity("1_000") is None
    assert parse_quantity(None) is None
    assert parse_price("0.99") == 0.99
    assert parse_price("1e2") == 100.0
    assert parse_price("nan") is None
    assert parse_price("inf") is None


def test_quantity_beyond_sqlite_integer_range_is_rejected() -> None:
    assert parse_quantity(str(2**63 - 1)) == 2**63 - 1
    assert parse_quantity(str(2**63)) is None
    with pytest.raises(InvoiceValidationError) as excinfo:
        validate_invoice("Ada", [("Chips", "99999999999999999999", "1")])
    assert excinfo.value.field == "quantity"
    assert str(excinfo.value) == "Quantity in row 1 is invalid."
