"""Order coordinator: the one place that touches the catalogue and the open order together.

Presentation collaborators receive a coordinator by injection, forward user
intents to it, and subscribe as observers to learn what to re-render.

Flow:
    1. add_item_to_order      → opens an order lazily, adds a line
    2. modify_item_quantity   → bounded by the product's copies available
    3. remove_item_from_order → idempotent; the last removal empties the cart
    4. submit_order           → decrements stock line by line, closes the order

Submission does not check that enough copies remain; stock is only bounded
when a quantity is chosen, so a product can end up with negative copies.
Products deleted mid-session are skipped at submission and the order still
completes.
"""

from decimal import Decimal

import structlog

from comicshop.catalogue.catalogue import Catalogue
from comicshop.catalogue.product import Product
from comicshop.identity.customer import Customer
from comicshop.ordering.notifications import (
    CartChanged,
    CartEmptied,
    CatalogueChanged,
    OrderCleared,
    OrderTotalChanged,
)
from comicshop.ordering.order import FulfillmentMethod, Order, OrderItem, validate_quantity
from comicshop.ordering.receipt import Receipt, build_receipt
from comicshop.shared.exceptions import NotInOrder
from comicshop.shared.money import ZERO

logger = structlog.get_logger(__name__)


class OrderCoordinator:
    def __init__(self, catalogue: Catalogue, observers=(), currency: str = "USD"):
        self.catalogue = catalogue
        self.currency = currency
        self.submitted_orders: list[Order] = []
        self._observers = list(observers)
        self._open_order: Order | None = None

    # -------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------
    def subscribe(self, observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, notification) -> None:
        logger.debug("Notifying observers", **notification.to_log_dict())
        for observer in list(self._observers):
            handler = getattr(observer, notification.channel)
            try:
                handler(notification)
            except Exception:
                logger.exception(
                    "Observer failed to handle notification",
                    observer=type(observer).__name__,
                    channel=notification.channel,
                )
                raise

    def _notify_cart(self, order: Order, product: Product | None = None) -> None:
        self._notify(
            CartChanged(
                order_id=order.order_id,
                item_count=order.item_count,
                product_id=product.product_id if product is not None else None,
            )
        )
        self._notify(OrderTotalChanged(order_id=order.order_id, total=order.total()))

    def _record_events(self, order: Order) -> None:
        """Drain the order's domain events into the log.

        Nothing subscribes to these; the log is their audit trail. Observers
        are told about changes through notifications instead.
        """
        for event in order.drain_events():
            logger.info("Order event", **event.to_log_dict())

    # -------------------------------------------------------------------
    # Catalogue maintenance
    # -------------------------------------------------------------------
    def add_product(self, product: Product) -> Product:
        self.catalogue.add(product)
        logger.info("Product added", product_id=product.product_id, title=product.display_name)
        self._notify(CatalogueChanged(reason="added", product_ids=(product.product_id,)))
        return product

    def update_product(self, product: Product) -> Product:
        """Replace a product from an edit form; an open cart sees the new price at once."""
        self.catalogue.update(product)
        logger.info(
            "Product updated",
            product_id=product.product_id,
            unit_price=str(product.unit_price),
            copies_available=product.copies_available,
        )
        self._notify(CatalogueChanged(reason="updated", product_ids=(product.product_id,)))

        order = self._open_order
        if order is not None and order.contains(product):
            self._notify_cart(order, product)
        return product

    def remove_product(self, product: Product) -> None:
        """Remove a product; an open cart keeps its line but it stops resolving."""
        if product not in self.catalogue:
            return

        self.catalogue.remove(product)
        logger.info("Product removed", product_id=product.product_id)
        self._notify(CatalogueChanged(reason="removed", product_ids=(product.product_id,)))

        order = self._open_order
        if order is not None and order.contains(product):
            self._notify_cart(order, product)

    # -------------------------------------------------------------------
    # Open order
    # -------------------------------------------------------------------
    @property
    def open_order(self) -> Order | None:
        return self._open_order

    def start_or_reuse_order(self, customer: Customer | None = None) -> Order:
        if self._open_order is None:
            self._open_order = Order.create(lookup=self.catalogue.find_by_id, customer=customer)
            logger.info("Order opened", order_id=self._open_order.order_id)
        elif customer is not None:
            self._open_order.customer = customer
        return self._open_order

    def add_item_to_order(self, product: Product, quantity=1) -> OrderItem:
        order = self.start_or_reuse_order()
        item = order.add_item(product, quantity)
        self._record_events(order)
        self._notify_cart(order, product)
        return item

    def modify_item_quantity(self, product: Product, quantity) -> None:
        order = self._open_order
        if order is None:
            if validate_quantity(quantity) == 0:
                return
            raise NotInOrder({"product_id": [f"Product {product.product_id} is not in an open order"]})

        was_empty = order.is_empty
        order.set_quantity(product, quantity)
        self._record_events(order)
        self._notify_cart(order, product)
        if order.is_empty and not was_empty:
            self._notify(CartEmptied(order_id=order.order_id))

    def remove_item_from_order(self, product: Product) -> None:
        order = self._open_order
        if order is None or not order.contains(product):
            return

        order.remove_item(product)
        self._record_events(order)
        self._notify_cart(order, product)
        if order.is_empty:
            self._notify(CartEmptied(order_id=order.order_id))

    def submit_order(
        self,
        fulfillment: FulfillmentMethod = FulfillmentMethod.IN_STORE,
        customer: Customer | None = None,
    ) -> Order | None:
        """Check out the open order against the catalogue.

        Returns the submitted order, or None when there was no open order.
        """
        order = self._open_order
        if order is None:
            return None

        log = logger.bind(order_id=order.order_id)
        if customer is not None:
            order.customer = customer

        touched = []
        for item in order.items:
            product = self.catalogue.find_by_id(item.product_id)
            if product is None:
                log.warning("Product missing from catalogue, stock not updated", product_id=item.product_id)
                continue

            product.copies_available -= item.quantity
            self.catalogue.update(product)
            touched.append(product.product_id)

            if product.copies_available < 0:
                log.warning(
                    "Stock oversold",
                    product_id=product.product_id,
                    copies_available=product.copies_available,
                )

        order.submit(fulfillment)
        self._record_events(order)
        self.submitted_orders.append(order)
        self._open_order = None

        log.info(
            "Order submitted",
            status=order.status.value,
            total=str(order.total()),
            items=order.item_count,
        )
        self._notify(CatalogueChanged(reason="order_submitted", product_ids=tuple(touched)))
        self._notify(OrderCleared(order_id=order.order_id, reason="submitted", status=order.status.value))
        return order

    def abandon_order(self) -> None:
        """Drop the open order without touching stock."""
        order = self._open_order
        if order is None:
            return

        self._open_order = None
        logger.info("Order abandoned", order_id=order.order_id, items=order.item_count)
        self._notify(OrderCleared(order_id=order.order_id, reason="abandoned", status=order.status.value))

    # -------------------------------------------------------------------
    # Read helpers for rendering catalogue rows
    # -------------------------------------------------------------------
    def product_exists_in_order(self, product: Product) -> bool:
        order = self._open_order
        return order is not None and order.contains(product)

    def get_order_item_quantity(self, product: Product) -> int:
        order = self._open_order
        return order.quantity_of(product) if order is not None else 0

    def get_subtotal(self, product: Product) -> Decimal:
        order = self._open_order
        return order.subtotal_of(product) if order is not None else ZERO

    def order_total(self) -> Decimal:
        order = self._open_order
        return order.total() if order is not None else ZERO

    def receipt(self, order: Order | None = None) -> Receipt | None:
        """Receipt for ``order``, or for the open order when none is given."""
        order = order if order is not None else self._open_order
        if order is None:
            return None
        return build_receipt(order, self.catalogue.find_by_id, self.currency)
