"""Domain events raised by the Order aggregate."""

from decimal import Decimal

from comicshop.shared.events import DomainEvent


class ItemAdded(DomainEvent):
    """A product got its first line in an open order."""

    order_id: int
    item_id: int
    product_id: int
    quantity: int
    new_total: Decimal


class ItemQuantityUpdated(DomainEvent):
    """The quantity on an existing line changed."""

    order_id: int
    item_id: int
    product_id: int
    previous_quantity: int
    new_quantity: int
    new_total: Decimal


class ItemRemoved(DomainEvent):
    """A line was dropped, either directly or by setting its quantity to zero."""

    order_id: int
    item_id: int
    product_id: int
    new_total: Decimal


class OrderSubmitted(DomainEvent):
    """The order was checked out; its lines and total are now frozen."""

    order_id: int
    status: str
    fulfillment: str
    item_count: int
    total: Decimal
    shipped_date: int


class OrderShipped(DomainEvent):
    order_id: int
    shipped_date: int
