"""Tests for Order aggregate creation and structure."""

import pytest
from comicshop.identity.customer import Customer
from comicshop.ordering.order import FulfillmentMethod, Order, OrderStatus
from comicshop.shared.dates import NOT_SHIPPED, today
from comicshop.shared.money import ZERO
from pydantic import ValidationError


def _make_order(catalogue, **overrides):
    return Order.create(lookup=catalogue.find_by_id, **overrides)


class TestOrderCreation:
    def test_starts_open(self, catalogue):
        order = _make_order(catalogue)
        assert order.status == OrderStatus.OPEN
        assert order.is_open
        assert not order.is_submitted

    def test_starts_empty_with_zero_total(self, catalogue):
        order = _make_order(catalogue)
        assert order.is_empty
        assert order.item_count == 0
        assert order.total() == ZERO

    def test_order_date_defaults_to_today(self, catalogue):
        assert _make_order(catalogue).order_date == today()

    def test_explicit_order_date(self, catalogue):
        assert _make_order(catalogue, order_date=20240229).order_date == 20240229

    def test_invalid_order_date_rejected(self, catalogue):
        with pytest.raises(ValidationError):
            _make_order(catalogue, order_date=20230229)

    def test_order_date_is_immutable(self, catalogue):
        order = _make_order(catalogue, order_date=20240101)
        with pytest.raises(ValidationError):
            order.order_date = 20240102

    def test_ship_date_starts_unset(self, catalogue):
        order = _make_order(catalogue)
        assert order.shipped_date == NOT_SHIPPED
        assert order.fulfillment is None

    def test_ids_assigned_in_sequence(self, catalogue):
        assert _make_order(catalogue).order_id == 1
        assert _make_order(catalogue).order_id == 2

    def test_customer_attached(self, catalogue):
        customer = Customer(first_name="Ada", last_name="Lovelace")
        order = _make_order(catalogue, customer=customer)
        assert order.customer.full_name == "Ada Lovelace"


class TestStatusEnums:
    def test_status_values(self):
        assert {s.value for s in OrderStatus} == {"Open", "Awaiting_Shipment", "Shipped", "Completed_In_Store"}

    def test_fulfillment_values(self):
        assert {f.value for f in FulfillmentMethod} == {"In_Store", "Ship"}


class TestUnboundOrder:
    def test_order_without_lookup_totals_zero(self, catalogue):
        order = Order()
        order.add_item(catalogue.find_by_id(1))
        assert order.total() == ZERO

    def test_bind_attaches_lookup(self, catalogue):
        order = Order()
        order.add_item(catalogue.find_by_id(1))
        order.bind(catalogue.find_by_id)
        assert str(order.total()) == "19.99"

    def test_bound_lookup_is_consulted(self, catalogue):
        asked = []

        def lookup(product_id):
            asked.append(product_id)
            return catalogue.find_by_id(product_id)

        order = Order.create(lookup=lookup)
        order.add_item(catalogue.find_by_id(2))
        asked.clear()

        assert str(order.subtotal_of(catalogue.find_by_id(2))) == "4.50"
        assert asked == [2]
