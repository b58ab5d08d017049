"""Composition root: builds a ready-to-use coordinator for presentation code.

Usage:
    from comicshop.app import build_shop

    shop = build_shop()
    shop.subscribe(my_view)
"""

import structlog

from comicshop.catalogue.catalogue import Catalogue
from comicshop.catalogue.seed import SeedSource, seed_catalogue, seed_from_name
from comicshop.config import Settings
from comicshop.logging import configure_logging
from comicshop.ordering.coordinator import OrderCoordinator

logger = structlog.get_logger(__name__)


def build_shop(settings: Settings | None = None, seed: SeedSource | None = None, observers=()) -> OrderCoordinator:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    catalogue = Catalogue()
    seed_catalogue(catalogue, seed if seed is not None else seed_from_name(settings.seed))

    logger.info("Shop ready", env=settings.env, products=len(catalogue), currency=settings.currency)
    return OrderCoordinator(catalogue, observers=observers, currency=settings.currency)
