"""
Pytest configuration and shared fixtures.
"""

import pytest
import pytest_asyncio

from catalog.application.services.notification_service import ProductNotificationService
from catalog.domain.product import Product
from catalog.infrastructure.notification_bus import ProductNotificationBus
from catalog.infrastructure.repositories.in_memory_product_repository import (
    InMemoryProductRepository,
)
from catalog.infrastructure.sample_data import build_sample_products


@pytest.fixture
def product_repository():
    """Fixture for ProductRepository."""
    return InMemoryProductRepository()


@pytest.fixture
def notification_bus():
    """Fixture for ProductNotificationBus, closed on teardown."""
    bus = ProductNotificationBus(default_low_stock_threshold=5)
    yield bus
    bus.close()


@pytest.fixture
def notification_service(notification_bus):
    """Fixture for ProductNotificationService."""
    return ProductNotificationService(notification_bus, low_stock_threshold=10)


@pytest.fixture
def sample_product():
    """Create a sample product entity."""
    return Product.create(
        name="Noise-Cancelling Headphones",
        description="Over-ear wireless headphones",
        price=249.99,
        category="Audio",
        rating=4.6,
        stock_quantity=25,
        popularity=80,
        tags=["audio", "wireless", "bluetooth"],
        product_id=1,
    )


@pytest.fixture
def catalog_products():
    """Sample catalog with ids 1..n."""
    return [
        product.with_id(index)
        for index, product in enumerate(build_sample_products(), start=1)
    ]


@pytest_asyncio.fixture
async def seeded_repository(product_repository):
    """Repository holding the sample catalog."""
    for product in build_sample_products():
        await product_repository.save(product)
    return product_repository
