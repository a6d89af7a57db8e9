"""
Unit tests for product lifecycle handlers.
"""

import pytest

from catalog.application.commands.create_product import (
    BulkCreateProductsCommand,
    CreateProductCommand,
)
from catalog.application.commands.delete_product import (
    BulkDeleteProductsCommand,
    DeleteProductCommand,
)
from catalog.application.commands.update_product import UpdateProductCommand
from catalog.application.handlers.product_lifecycle_handlers import (
    BulkCreateProductsHandler,
    BulkDeleteProductsHandler,
    CreateProductHandler,
    DeleteProductHandler,
    UpdateProductHandler,
)
from core.domain.exceptions import InvalidProductError, ProductNotFoundError


def _drain(subscription):
    events = []
    event = subscription.get_nowait()
    while event is not None:
        events.append(event)
        event = subscription.get_nowait()
    return events


@pytest.mark.asyncio
class TestProductLifecycleHandlers:
    """Tests for create, update and delete handlers."""

    @pytest.fixture
    def handlers(self, product_repository, notification_service):
        """Lifecycle handlers sharing one repository and bus."""
        return {
            "create": CreateProductHandler(product_repository, notification_service),
            "update": UpdateProductHandler(product_repository, notification_service),
            "delete": DeleteProductHandler(product_repository, notification_service),
        }

    async def test_create_product(self, handlers, notification_bus):
        """Test creation assigns an id and publishes an update."""
        updates = notification_bus.subscribe_product_updated()

        product = await handlers["create"].handle(
            CreateProductCommand(name="Desk Lamp", price=25.0, category="Office", tags=["light"])
        )

        assert product.id == 1
        assert product.in_stock is True
        events = _drain(updates)
        assert [e.product.id for e in events] == [1]

    async def test_create_invalid_product(self, handlers, product_repository):
        """Test invalid products are rejected before saving."""
        with pytest.raises(InvalidProductError):
            await handlers["create"].handle(CreateProductCommand(name="", price=1.0))
        assert await product_repository.find_all() == []

    async def test_update_product(self, handlers, notification_bus, product_repository):
        """Test only set fields change."""
        created = await handlers["create"].handle(
            CreateProductCommand(name="Desk Lamp", price=25.0, category="Office", stock_quantity=40)
        )

        updated = await handlers["update"].handle(
            UpdateProductCommand(product_id=created.id, name="LED Desk Lamp", rating=4.2)
        )

        assert updated.name == "LED Desk Lamp"
        assert updated.rating == 4.2
        assert updated.price == 25.0
        assert updated.previous_price is None
        assert (await product_repository.find_by_id(created.id)).name == "LED Desk Lamp"

    async def test_update_price_publishes_price_change(self, handlers, notification_bus):
        """Test a price update reaches price subscribers above their threshold."""
        created = await handlers["create"].handle(
            CreateProductCommand(name="Monitor", price=90.0, stock_quantity=40)
        )
        sensitive = notification_bus.subscribe_price_changed(min_price_difference=9)
        coarse = notification_bus.subscribe_price_changed(min_price_difference=15)

        await handlers["update"].handle(UpdateProductCommand(product_id=created.id, price=100.0))

        events = _drain(sensitive)
        assert len(events) == 1
        assert events[0].old_price == 90.0
        assert events[0].new_price == 100.0
        assert _drain(coarse) == []

    async def test_update_stock_publishes_low_stock(self, handlers, notification_bus):
        """Test a low stock level produces an alert for matching subscribers."""
        created = await handlers["create"].handle(
            CreateProductCommand(name="Monitor", price=90.0, stock_quantity=40)
        )
        updates = notification_bus.subscribe_product_updated()
        alerts = notification_bus.subscribe_low_stock()

        await handlers["update"].handle(
            UpdateProductCommand(product_id=created.id, stock_quantity=3)
        )
        await handlers["update"].handle(
            UpdateProductCommand(product_id=created.id, stock_quantity=20)
        )

        assert len(_drain(updates)) == 2
        assert [a.product.stock_quantity for a in _drain(alerts)] == [3]

    async def test_update_in_stock_only(self, handlers):
        """Test toggling availability leaves the quantity alone."""
        created = await handlers["create"].handle(
            CreateProductCommand(name="Monitor", price=90.0, stock_quantity=40)
        )
        updated = await handlers["update"].handle(
            UpdateProductCommand(product_id=created.id, in_stock=False)
        )

        assert updated.in_stock is False
        assert updated.stock_quantity == 40

    async def test_update_missing_product(self, handlers):
        """Test updating an unknown product raises."""
        with pytest.raises(ProductNotFoundError) as exc_info:
            await handlers["update"].handle(UpdateProductCommand(product_id=42, price=1.0))
        assert exc_info.value.code == "PRODUCT_NOT_FOUND"

    async def test_delete_product(self, handlers, notification_bus, product_repository):
        """Test deletion removes the product and publishes its removal."""
        created = await handlers["create"].handle(
            CreateProductCommand(name="Monitor", price=90.0, stock_quantity=40)
        )
        updates = notification_bus.subscribe_product_updated()
        alerts = notification_bus.subscribe_low_stock()

        assert await handlers["delete"].handle(DeleteProductCommand(product_id=created.id))

        assert await product_repository.find_by_id(created.id) is None
        assert [e.product.in_stock for e in _drain(updates)] == [False]
        assert len(_drain(alerts)) == 2

    async def test_delete_missing_product(self, handlers, notification_bus):
        """Test deleting an unknown product publishes nothing."""
        updates = notification_bus.subscribe_product_updated()

        assert await handlers["delete"].handle(DeleteProductCommand(product_id=42)) is False
        assert _drain(updates) == []


@pytest.mark.asyncio
class TestBulkHandlers:
    """Tests for bulk create and delete."""

    async def test_bulk_create(self, product_repository, notification_service):
        """Test every product is created in order."""
        handler = BulkCreateProductsHandler(product_repository, notification_service)
        products = await handler.handle(
            BulkCreateProductsCommand(
                products=[
                    CreateProductCommand(name="A", price=1.0),
                    CreateProductCommand(name="B", price=2.0),
                ]
            )
        )

        assert [p.id for p in products] == [1, 2]
        assert len(await product_repository.find_all()) == 2

    async def test_bulk_delete(self, seeded_repository, notification_service):
        """Test bulk delete counts the products it removed."""
        handler = BulkDeleteProductsHandler(seeded_repository, notification_service)

        assert await handler.handle(BulkDeleteProductsCommand(product_ids=[1, 2])) == 2
        assert await handler.handle(BulkDeleteProductsCommand(product_ids=[3, 99, 1])) == 1
        assert len(await seeded_repository.find_all()) == 11
