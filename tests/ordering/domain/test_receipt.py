"""Tests for receipt rendering."""

from decimal import Decimal

from comicshop.identity.customer import Customer
from comicshop.ordering.order import FulfillmentMethod, Order
from comicshop.ordering.receipt import build_receipt


def _make_order(catalogue, **overrides):
    order = Order.create(lookup=catalogue.find_by_id, order_date=20240310, **overrides)
    order.add_item(catalogue.find_by_id(2), quantity=2)
    order.add_item(catalogue.find_by_id(1))
    return order


class TestReceiptLines:
    def test_lines_in_insertion_order(self, catalogue):
        receipt = build_receipt(_make_order(catalogue), catalogue.find_by_id)
        assert [line.product_id for line in receipt.lines] == [2, 1]

    def test_line_values(self, catalogue):
        receipt = build_receipt(_make_order(catalogue), catalogue.find_by_id)
        first = receipt.lines[0]
        assert first.description == "The Amazing Adventures #2"
        assert first.quantity == 2
        assert first.unit_price == Decimal("4.50")
        assert first.line_total == Decimal("9.00")

    def test_total(self, catalogue):
        receipt = build_receipt(_make_order(catalogue), catalogue.find_by_id)
        assert receipt.total == Decimal("28.99")

    def test_removed_product_line(self, catalogue):
        order = _make_order(catalogue)
        catalogue.remove(catalogue.find_by_id(1))
        receipt = build_receipt(order, catalogue.find_by_id)
        assert receipt.lines[1].description == "Product 1 (no longer stocked)"
        assert receipt.lines[1].line_total == Decimal("0.00")


class TestReceiptDates:
    def test_open_order_not_yet_shipped(self, catalogue):
        receipt = build_receipt(_make_order(catalogue), catalogue.find_by_id)
        assert receipt.order_date == "2024-03-10"
        assert receipt.ship_date == "Not yet shipped"

    def test_in_store_order(self, catalogue):
        order = _make_order(catalogue)
        order.submit(FulfillmentMethod.IN_STORE)
        assert build_receipt(order, catalogue.find_by_id).ship_date == "In-store purchase"

    def test_shipped_order(self, catalogue):
        order = _make_order(catalogue)
        order.submit(FulfillmentMethod.SHIP)
        order.mark_shipped(20240312)
        assert build_receipt(order, catalogue.find_by_id).ship_date == "2024-03-12"


class TestReceiptText:
    def test_walk_in_customer(self, catalogue):
        text = build_receipt(_make_order(catalogue), catalogue.find_by_id).as_text()
        assert "Customer: Walk-in" in text
        assert "Total: $28.99" in text

    def test_named_customer(self, catalogue):
        order = _make_order(catalogue, customer=Customer(first_name="Ada", last_name="Lovelace"))
        text = build_receipt(order, catalogue.find_by_id).as_text()
        assert "Customer: Ada Lovelace" in text
        assert "Order #1  2024-03-10" in text
