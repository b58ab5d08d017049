"""Notifications the coordinator sends to presentation collaborators.

Each notification travels on its own channel: cart contents and the order
total are separate, so a view that only shows the total does not have to
re-read the cart. ``channel`` names the ``OrderObserver`` method that
receives it.
"""

from decimal import Decimal
from typing import ClassVar

from comicshop.shared.events import DomainEvent


class CatalogueChanged(DomainEvent):
    """The product list changed; re-read the whole catalogue."""

    channel: ClassVar[str] = "on_catalog_changed"

    reason: str
    product_ids: tuple[int, ...] = ()


class CartChanged(DomainEvent):
    """Lines in the open order changed; re-read the cart contents."""

    channel: ClassVar[str] = "on_cart_changed"

    order_id: int
    item_count: int
    product_id: int | None = None


class OrderTotalChanged(DomainEvent):
    channel: ClassVar[str] = "on_order_total_changed"

    order_id: int
    total: Decimal


class CartEmptied(DomainEvent):
    """The last line was removed; the cart view has nothing to show."""

    channel: ClassVar[str] = "on_cart_emptied"

    order_id: int


class OrderCleared(DomainEvent):
    """There is no open order any more, because it was submitted or abandoned."""

    channel: ClassVar[str] = "on_order_cleared"

    order_id: int
    reason: str
    status: str


class OrderObserver:
    """Base class for collaborators that re-render on state changes.

    Every handler is a no-op; override the ones the view cares about.
    """

    def on_catalog_changed(self, notification: CatalogueChanged) -> None:
        pass

    def on_cart_changed(self, notification: CartChanged) -> None:
        pass

    def on_order_total_changed(self, notification: OrderTotalChanged) -> None:
        pass

    def on_cart_emptied(self, notification: CartEmptied) -> None:
        pass

    def on_order_cleared(self, notification: OrderCleared) -> None:
        pass
