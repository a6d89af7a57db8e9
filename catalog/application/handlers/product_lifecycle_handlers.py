"""
Product lifecycle handlers.

Handlers for create, update and delete commands. Each handler commits the
change to the repository first and then lets the notification service
publish the resulting events.
"""

import logging
from typing import List

from catalog.application.commands.create_product import (
    BulkCreateProductsCommand,
    CreateProductCommand,
)
from catalog.application.commands.delete_product import (
    BulkDeleteProductsCommand,
    DeleteProductCommand,
)
from catalog.application.commands.update_product import UpdateProductCommand
from catalog.application.services.notification_service import ProductNotificationService
from catalog.domain.product import Product
from catalog.ports.product_repository import ProductRepository
from core.domain.exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)


class CreateProductHandler:
    """Handler for CreateProductCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        notification_service: ProductNotificationService,
    ):
        """Initialize handler with repository and notification service."""
        self.product_repository = product_repository
        self.notification_service = notification_service

    async def handle(self, command: CreateProductCommand) -> Product:
        """
        Handle create product command.

        Returns:
            Saved Product entity with its assigned id

        Raises:
            InvalidProductError: If the product fails validation
        """
        product = Product.create(
            name=command.name,
            price=command.price,
            category=command.category,
            description=command.description,
            rating=command.rating,
            stock_quantity=command.stock_quantity,
            popularity=command.popularity,
            tags=command.tags,
            custom_attributes=command.custom_attributes,
        )
        saved = await self.product_repository.save(product)
        logger.info("Product created: %s", saved.id)

        self.notification_service.handle_create(saved)
        return saved


class UpdateProductHandler:
    """Handler for UpdateProductCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        notification_service: ProductNotificationService,
    ):
        """Initialize handler with repository and notification service."""
        self.product_repository = product_repository
        self.notification_service = notification_service

    async def handle(self, command: UpdateProductCommand) -> Product:
        """
        Handle update product command.

        Only fields set on the command change. ``stock_quantity`` also
        recomputes availability; ``in_stock`` alone does not touch the
        quantity.

        Returns:
            Updated Product entity

        Raises:
            ProductNotFoundError: If product not found
            InvalidProductError: If the update fails validation
        """
        existing = await self.product_repository.find_by_id(command.product_id)
        if not existing:
            raise ProductNotFoundError(f"Product {command.product_id} not found")

        updated = existing.with_details(
            name=command.name,
            description=command.description,
            category=command.category,
            rating=command.rating,
        )
        if command.price is not None:
            updated = updated.with_price(command.price)
        if command.tags is not None:
            updated = updated.with_tags(command.tags)
        if command.stock_quantity is not None:
            updated = updated.with_stock_quantity(command.stock_quantity)
        if command.in_stock is not None:
            updated = updated.with_in_stock(command.in_stock)

        saved = await self.product_repository.save(updated)
        logger.info("Product updated: %s", saved.id)

        self.notification_service.handle_update(existing, saved)
        return saved


class DeleteProductHandler:
    """Handler for DeleteProductCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        notification_service: ProductNotificationService,
    ):
        """Initialize handler with repository and notification service."""
        self.product_repository = product_repository
        self.notification_service = notification_service

    async def handle(self, command: DeleteProductCommand) -> bool:
        """
        Handle delete product command.

        Returns:
            True if the product existed and was deleted
        """
        existing = await self.product_repository.find_by_id(command.product_id)
        if not existing:
            logger.info("Product %s not found, nothing to delete", command.product_id)
            return False

        await self.product_repository.delete_by_id(command.product_id)
        logger.info("Product deleted: %s", command.product_id)

        self.notification_service.handle_delete(existing)
        return True


class BulkCreateProductsHandler:
    """Handler for BulkCreateProductsCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        notification_service: ProductNotificationService,
    ):
        """Initialize handler with repository and notification service."""
        self.create_handler = CreateProductHandler(product_repository, notification_service)

    async def handle(self, command: BulkCreateProductsCommand) -> List[Product]:
        """Create every product in order and return the saved entities."""
        return [await self.create_handler.handle(item) for item in command.products]


class BulkDeleteProductsHandler:
    """Handler for BulkDeleteProductsCommand."""

    def __init__(
        self,
        product_repository: ProductRepository,
        notification_service: ProductNotificationService,
    ):
        """Initialize handler with repository and notification service."""
        self.delete_handler = DeleteProductHandler(product_repository, notification_service)

    async def handle(self, command: BulkDeleteProductsCommand) -> int:
        """
        Delete every listed product. Unknown ids are skipped.

        Returns:
            Number of products deleted
        """
        deleted = 0
        for product_id in command.product_ids:
            if await self.delete_handler.handle(DeleteProductCommand(product_id)):
                deleted += 1
        return deleted
