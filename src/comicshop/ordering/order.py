"""Order aggregate: one shopping cart, later one receipt.

An open order holds at most one line per product. Lines refer to products by
id and resolve them through the catalogue lookup the order was created with,
so price edits show up in an open cart immediately and a product deleted
mid-session simply stops resolving (its line totals to zero).

State Machine:
    OPEN → COMPLETED_IN_STORE                  (in-store sale, never ships)
    OPEN → AWAITING_SHIPMENT → SHIPPED         (mail order)

Submitting freezes every line at the price it had at checkout, so the total
of a submitted order no longer follows the catalogue.
"""

from collections.abc import Callable
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from comicshop.catalogue.product import Product
from comicshop.identity.customer import Customer
from comicshop.ordering.events import (
    ItemAdded,
    ItemQuantityUpdated,
    ItemRemoved,
    OrderShipped,
    OrderSubmitted,
)
from comicshop.shared.dates import NOT_APPLICABLE, NOT_SHIPPED, is_sentinel, today, validate_yyyymmdd
from comicshop.shared.exceptions import InvalidQuantity, NotInOrder, OrderClosed
from comicshop.shared.identity import EntityKind, allocate, identities
from comicshop.shared.money import CENT, ZERO

ProductLookup = Callable[[int], Product | None]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    OPEN = "Open"
    AWAITING_SHIPMENT = "Awaiting_Shipment"
    SHIPPED = "Shipped"
    COMPLETED_IN_STORE = "Completed_In_Store"


class FulfillmentMethod(Enum):
    IN_STORE = "In_Store"
    SHIP = "Ship"


def _no_products(product_id):
    return None


def validate_quantity(quantity) -> int:
    """Reject anything that is not a non-negative integer."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity({"quantity": [f"Quantity must be a whole number, got {quantity!r}"]})
    if quantity < 0:
        raise InvalidQuantity({"quantity": [f"Quantity cannot be negative, got {quantity}"]})
    return quantity


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
class OrderItem(BaseModel):
    """A (product, quantity) line.

    ``unit_price`` stays unset while the order is open and is filled in at
    submission; until then the line total is computed from the live product.
    """

    model_config = ConfigDict(validate_assignment=True)

    item_id: int = Field(default_factory=allocate(EntityKind.ORDER_ITEM), frozen=True, gt=0)
    product_id: int = Field(frozen=True)
    quantity: int = Field(ge=0)
    unit_price: Decimal | None = None

    def model_post_init(self, __context):
        identities.observe(EntityKind.ORDER_ITEM, self.item_id)

    def line_total(self, lookup: ProductLookup) -> Decimal:
        if self.unit_price is not None:
            price = self.unit_price
        else:
            product = lookup(self.product_id)
            if product is None:
                return ZERO
            price = product.unit_price
        return (price * self.quantity).quantize(CENT)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
class Order(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    order_id: int = Field(default_factory=allocate(EntityKind.ORDER), frozen=True, gt=0)
    customer: Customer | None = None
    order_date: int = Field(default_factory=today, frozen=True)
    status: OrderStatus = OrderStatus.OPEN
    fulfillment: FulfillmentMethod | None = None
    shipped_date: int = NOT_SHIPPED
    items: list[OrderItem] = Field(default_factory=list)

    # A plain function default would be bound to the instance as a method.
    _lookup: ProductLookup = PrivateAttr(default_factory=lambda: _no_products)
    _events: list = PrivateAttr(default_factory=list)

    def model_post_init(self, __context):
        identities.observe(EntityKind.ORDER, self.order_id)

    @field_validator("order_date", "shipped_date")
    @classmethod
    def dates_must_be_yyyymmdd(cls, value, info):
        if info.field_name == "shipped_date" and is_sentinel(value):
            return value
        return validate_yyyymmdd(value)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, lookup: ProductLookup, customer=None, order_date=None):
        values = {"customer": customer}
        if order_date is not None:
            values["order_date"] = order_date
        order = cls(**values)
        order.bind(lookup)
        return order

    def bind(self, lookup: ProductLookup) -> None:
        """Resolve product ids through ``lookup`` from now on."""
        self._lookup = lookup

    def raise_(self, event) -> None:
        self._events.append(event)

    def drain_events(self) -> list:
        events, self._events = self._events, []
        return events

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self.status == OrderStatus.OPEN

    @property
    def is_submitted(self) -> bool:
        return not self.is_open

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return len(self.items)

    def item_for(self, product: Product) -> OrderItem | None:
        return next((item for item in self.items if item.product_id == product.product_id), None)

    def contains(self, product: Product) -> bool:
        return self.item_for(product) is not None

    def quantity_of(self, product: Product) -> int:
        item = self.item_for(product)
        return item.quantity if item else 0

    def subtotal_of(self, product: Product) -> Decimal:
        item = self.item_for(product)
        return item.line_total(self._lookup) if item else ZERO

    def total(self) -> Decimal:
        """Sum of line totals, recomputed from current prices on every call."""
        return sum((item.line_total(self._lookup) for item in self.items), ZERO)

    # -------------------------------------------------------------------
    # Item management (only while OPEN)
    # -------------------------------------------------------------------
    def _assert_open(self, action):
        if not self.is_open:
            raise OrderClosed({"status": [f"Cannot {action}: order {self.order_id} is {self.status.value}"]})

    def add_item(self, product: Product, quantity=1) -> OrderItem:
        """Start a line for ``product``.

        A product that already has a line is left untouched; repeat
        purchases go through ``set_quantity``. A single copy is always
        accepted, larger quantities are bounded by the copies available.
        """
        self._assert_open("add items")

        existing = self.item_for(product)
        if existing is not None:
            return existing

        validate_quantity(quantity)
        if quantity == 0:
            raise InvalidQuantity({"quantity": ["A new line needs a quantity of at least 1"]})
        if quantity > 1 and quantity > product.copies_available:
            raise InvalidQuantity(
                {"quantity": [f"Only {product.copies_available} copies of {product.display_name} are available"]}
            )

        item = OrderItem(product_id=product.product_id, quantity=quantity)
        self.items.append(item)

        self.raise_(
            ItemAdded(
                order_id=self.order_id,
                item_id=item.item_id,
                product_id=product.product_id,
                quantity=quantity,
                new_total=self.total(),
            )
        )
        return item

    def set_quantity(self, product: Product, quantity) -> None:
        """Set the quantity on ``product``'s line; zero removes the line."""
        self._assert_open("change quantities")
        validate_quantity(quantity)

        if quantity == 0:
            self.remove_item(product)
            return

        item = self.item_for(product)
        if item is None:
            raise NotInOrder({"product_id": [f"Product {product.product_id} is not in order {self.order_id}"]})

        if quantity > product.copies_available:
            raise InvalidQuantity(
                {"quantity": [f"Only {product.copies_available} copies of {product.display_name} are available"]}
            )

        previous_quantity = item.quantity
        item.quantity = quantity

        self.raise_(
            ItemQuantityUpdated(
                order_id=self.order_id,
                item_id=item.item_id,
                product_id=product.product_id,
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                new_total=self.total(),
            )
        )

    def remove_item(self, product: Product) -> None:
        """Drop ``product``'s line if there is one."""
        self._assert_open("remove items")

        item = self.item_for(product)
        if item is None:
            return

        self.items.remove(item)

        self.raise_(
            ItemRemoved(
                order_id=self.order_id,
                item_id=item.item_id,
                product_id=product.product_id,
                new_total=self.total(),
            )
        )

    # -------------------------------------------------------------------
    # Lifecycle transitions
    # -------------------------------------------------------------------
    def submit(self, fulfillment: FulfillmentMethod = FulfillmentMethod.IN_STORE) -> None:
        """Freeze prices and leave the OPEN state."""
        self._assert_open("submit")

        for item in self.items:
            product = self._lookup(item.product_id)
            item.unit_price = product.unit_price if product is not None else ZERO

        self.fulfillment = fulfillment
        if fulfillment == FulfillmentMethod.IN_STORE:
            self.status = OrderStatus.COMPLETED_IN_STORE
            self.shipped_date = NOT_APPLICABLE
        else:
            self.status = OrderStatus.AWAITING_SHIPMENT
            self.shipped_date = NOT_SHIPPED

        self.raise_(
            OrderSubmitted(
                order_id=self.order_id,
                status=self.status.value,
                fulfillment=fulfillment.value,
                item_count=self.item_count,
                total=self.total(),
                shipped_date=self.shipped_date,
            )
        )

    def mark_shipped(self, shipped_date=None) -> None:
        """Replace the pending-shipment sentinel with the real ship date."""
        if self.status != OrderStatus.AWAITING_SHIPMENT:
            raise OrderClosed({"status": [f"Only orders awaiting shipment can ship, order is {self.status.value}"]})

        shipped_date = today() if shipped_date is None else validate_yyyymmdd(shipped_date)
        self.status = OrderStatus.SHIPPED
        self.shipped_date = shipped_date

        self.raise_(OrderShipped(order_id=self.order_id, shipped_date=shipped_date))
