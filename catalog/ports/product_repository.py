"""
Product repository port (interface).

This defines the contract for product persistence operations.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.product import Product


class ProductRepository(ABC):
    """
    Abstract repository for Product entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    async def find_all(self) -> List[Product]:
        """
        List all products.

        Returns:
            List of Product entities
        """
        pass

    @abstractmethod
    async def find_by_id(self, product_id: int) -> Optional[Product]:
        """
        Find a product by ID.

        Args:
            product_id: Product id

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_category(self, category: str) -> List[Product]:
        """
        List products of a category.

        Args:
            category: Exact category label

        Returns:
            List of Product entities
        """
        pass

    @abstractmethod
    async def save(self, product: Product) -> Product:
        """
        Save a product entity.

        Assigns an id when the product has none and refreshes ``updated_at``.

        Args:
            product: Product entity to save

        Returns:
            Saved product entity
        """
        pass

    @abstractmethod
    async def exists_by_id(self, product_id: int) -> bool:
        """
        Check if a product exists.

        Args:
            product_id: Product id

        Returns:
            True if product exists, False otherwise
        """
        pass

    @abstractmethod
    async def delete_by_id(self, product_id: int) -> None:
        """
        Delete a product.

        Args:
            product_id: Product id
        """
        pass
