"""In-memory catalogue of products.

The catalogue is the source of truth for price and stock. It knows nothing
about orders and emits no notifications of its own; the order coordinator
wraps its mutations and tells presentation collaborators what changed.
"""

import structlog

from comicshop.catalogue.product import Product
from comicshop.shared.exceptions import DuplicateProduct, NotFound

logger = structlog.get_logger(__name__)


class Catalogue:
    def __init__(self, products=()):
        self._products: list[Product] = []
        for product in products:
            self.add(product)

    def __len__(self):
        return len(self._products)

    def __iter__(self):
        return iter(list(self._products))

    def __contains__(self, product):
        product_id = product.product_id if isinstance(product, Product) else product
        return self._index_of(product_id) is not None

    def _index_of(self, product_id):
        return next(
            (index for index, existing in enumerate(self._products) if existing.product_id == product_id),
            None,
        )

    def products(self) -> list[Product]:
        """All products in the order they were added."""
        return list(self._products)

    def add(self, product: Product) -> None:
        """Append a product. Titles may repeat; ids may not."""
        if self._index_of(product.product_id) is not None:
            raise DuplicateProduct({"product_id": [f"Product {product.product_id} is already in the catalogue"]})

        self._products.append(product)
        logger.debug("Product added to catalogue", product_id=product.product_id, title=product.title)

    def update(self, product: Product) -> None:
        """Replace the record with the same id, keeping its position."""
        index = self._index_of(product.product_id)
        if index is None:
            raise NotFound({"product_id": [f"Product {product.product_id} is not in the catalogue"]})

        self._products[index] = product
        logger.debug(
            "Product updated in catalogue",
            product_id=product.product_id,
            unit_price=str(product.unit_price),
            copies_available=product.copies_available,
        )

    def remove(self, product: Product) -> None:
        """Remove the record with the same id; unknown ids are ignored."""
        index = self._index_of(product.product_id)
        if index is None:
            return

        del self._products[index]
        logger.debug("Product removed from catalogue", product_id=product.product_id)

    def find_by_id(self, product_id: int) -> Product | None:
        index = self._index_of(product_id)
        return None if index is None else self._products[index]
