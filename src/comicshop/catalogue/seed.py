"""Startup data for the catalogue.

The shop has no database; a seed source stands in for the initial load.
Sources are swappable so tests and alternative stores can start from a
different list.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Protocol

import structlog

from comicshop.catalogue.catalogue import Catalogue
from comicshop.catalogue.product import Product
from comicshop.shared.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class SeedSource(Protocol):
    def load(self) -> Iterable[Product]: ...


class DefaultSeed:
    """Ten consecutive issues of a single series at a fixed cover price."""

    title = "The Amazing Adventures"
    author = "R. Castellanos"
    unit_price = Decimal("3.99")
    stock_levels = (12, 8, 5, 0, 7, 3, 10, 1, 6, 4)
    first_release = (2023, 1)

    def load(self) -> Iterable[Product]:
        year, month = self.first_release
        for offset, copies in enumerate(self.stock_levels):
            release_year = year + (month - 1 + offset) // 12
            release_month = (month - 1 + offset) % 12 + 1
            yield Product.create(
                title=self.title,
                author=self.author,
                release_date=release_year * 10000 + release_month * 100 + 15,
                issue_number=offset + 1,
                unit_price=self.unit_price,
                copies_available=copies,
            )


class EmptySeed:
    def load(self) -> Iterable[Product]:
        return ()


class ListSeed:
    """Seed from an explicit list of products."""

    def __init__(self, products):
        self.products = list(products)

    def load(self) -> Iterable[Product]:
        return iter(self.products)


_NAMED_SEEDS = {
    "default": DefaultSeed,
    "empty": EmptySeed,
}


def seed_from_name(name: str) -> SeedSource:
    try:
        return _NAMED_SEEDS[name.lower()]()
    except KeyError:
        raise ConfigurationError(
            {"seed": [f"Unknown seed {name!r}, expected one of {', '.join(sorted(_NAMED_SEEDS))}"]}
        ) from None


def seed_catalogue(catalogue: Catalogue, source: SeedSource) -> int:
    """Load every product from ``source`` into ``catalogue``; return how many."""
    count = 0
    for product in source.load():
        catalogue.add(product)
        count += 1

    logger.info("Catalogue seeded", source=type(source).__name__, products=count)
    return count
