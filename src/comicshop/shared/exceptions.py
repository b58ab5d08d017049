"""Error taxonomy for the point-of-sale core.

Errors carry a ``messages`` dict keyed by field name, each value a list of
human-readable messages, so presentation code can show them next to the
input that was rejected.
"""


class ComicShopError(Exception):
    """Base class for all domain errors raised by the core."""

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class NotFound(ComicShopError):
    """A catalogue update targeted a product id that is not in the catalogue."""


class NotInOrder(ComicShopError):
    """A quantity was set for a product that has no line in the open order."""


class InvalidQuantity(ComicShopError):
    """A quantity was negative, not an integer, or above the copies available."""


class OrderClosed(ComicShopError):
    """A submitted order was asked to change."""


class DuplicateProduct(ComicShopError):
    """A product was added with an id the catalogue already holds."""


class ConfigurationError(ComicShopError):
    """Settings could not be resolved into a working shop."""
