import pytest
from comicshop.catalogue.catalogue import Catalogue
from comicshop.catalogue.product import Product
from comicshop.ordering.coordinator import OrderCoordinator
from comicshop.ordering.notifications import OrderObserver


class RecordingObserver(OrderObserver):
    """Collects every notification in arrival order."""

    def __init__(self):
        self.received = []

    def _record(self, notification):
        self.received.append(notification)

    on_catalog_changed = _record
    on_cart_changed = _record
    on_order_total_changed = _record
    on_cart_emptied = _record
    on_order_cleared = _record

    def of_type(self, notification_type):
        return [n for n in self.received if isinstance(n, notification_type)]

    def channels(self):
        return [n.channel for n in self.received]

    def clear(self):
        self.received.clear()


def make_product(**overrides):
    defaults = {
        "title": "The Amazing Adventures",
        "author": "R. Castellanos",
        "release_date": 20230115,
        "issue_number": 1,
        "unit_price": "3.99",
        "copies_available": 5,
    }
    defaults.update(overrides)
    return Product.create(**defaults)


@pytest.fixture
def catalogue():
    return Catalogue(
        [
            make_product(issue_number=1, unit_price="19.99", copies_available=3),
            make_product(issue_number=2, unit_price="4.50", copies_available=10),
            make_product(issue_number=3, unit_price="2.00", copies_available=0),
        ]
    )


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def coordinator(catalogue, observer):
    return OrderCoordinator(catalogue, observers=[observer])
