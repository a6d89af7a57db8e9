"""
In-memory implementation of ProductRepository.

Reference adapter for tests, demos and the management commands.
"""

import asyncio
import logging
from typing import Dict, List, Optional

from catalog.domain.product import Product
from catalog.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class InMemoryProductRepository(ProductRepository):
    """Dict-backed product store with sequential ids."""

    def __init__(self):
        """Initialize an empty store."""
        self._products: Dict[int, Product] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def find_all(self) -> List[Product]:
        """List all products in id order."""
        async with self._lock:
            return [self._products[key] for key in sorted(self._products)]

    async def find_by_id(self, product_id: int) -> Optional[Product]:
        """Find a product by ID."""
        async with self._lock:
            return self._products.get(product_id)

    async def find_by_category(self, category: str) -> List[Product]:
        """List products of a category in id order."""
        async with self._lock:
            return [
                self._products[key]
                for key in sorted(self._products)
                if self._products[key].category == category
            ]

    async def save(self, product: Product) -> Product:
        """Save a product, assigning an id if absent."""
        async with self._lock:
            if product.id is None:
                saved = product.with_id(self._next_id).without_previous_price()
            else:
                saved = product.without_previous_price().touch()
            self._next_id = max(self._next_id, saved.id + 1)
            self._products[saved.id] = saved
        logger.debug("Saved product %s", saved.id)
        return saved

    async def exists_by_id(self, product_id: int) -> bool:
        """Check if a product exists."""
        async with self._lock:
            return product_id in self._products

    async def delete_by_id(self, product_id: int) -> None:
        """Delete a product; unknown ids are ignored."""
        async with self._lock:
            self._products.pop(product_id, None)
        logger.debug("Deleted product %s", product_id)
