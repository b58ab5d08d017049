"""Monotonic integer identities for products, customers, orders and order items.

Each entity kind has its own counter, seeded at 1. Entities constructed
without an explicit id draw the next value; entities constructed with one
report it through ``observe`` so the value is never handed out again.

Counters live for the lifetime of the process and are not thread-aware.
"""

from enum import Enum


class EntityKind(Enum):
    PRODUCT = "Product"
    CUSTOMER = "Customer"
    ORDER = "Order"
    ORDER_ITEM = "OrderItem"


class IdentityAllocator:
    def __init__(self):
        self._next = {}
        self.reset()

    def reset(self):
        """Restart every counter at 1."""
        self._next = {kind: 1 for kind in EntityKind}

    def next_id(self, kind: EntityKind) -> int:
        value = self._next[kind]
        self._next[kind] = value + 1
        return value

    def peek(self, kind: EntityKind) -> int:
        """Return the id the next ``next_id`` call would hand out."""
        return self._next[kind]

    def observe(self, kind: EntityKind, value: int) -> None:
        """Advance the counter past an explicitly assigned id."""
        if value >= self._next[kind]:
            self._next[kind] = value + 1


identities = IdentityAllocator()


def allocate(kind: EntityKind):
    """Build a default factory that draws from the process-wide allocator."""

    def _factory():
        return identities.next_id(kind)

    return _factory
