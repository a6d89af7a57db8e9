"""
Product notification service.

Decides which events a committed product mutation produces and publishes
them on the ProductNotificationBus.
"""

import logging
from typing import Optional

from catalog.domain.events import PriceChanged
from catalog.domain.product import Product
from catalog.infrastructure.notification_bus import ProductNotificationBus
from core.config import get_catalog_setting

logger = logging.getLogger(__name__)


class ProductNotificationService:
    """Bridge between product writes and the notification bus."""

    def __init__(self, bus: ProductNotificationBus, low_stock_threshold: Optional[int] = None):
        """
        Initialize service.

        Args:
            bus: Notification bus to publish on
            low_stock_threshold: Stock level at or below which a low-stock
                alert is published (defaults to LOW_STOCK_NOTIFY_THRESHOLD, 10).
                Subscriptions apply their own threshold on top.
        """
        self.bus = bus
        if low_stock_threshold is None:
            low_stock_threshold = get_catalog_setting("LOW_STOCK_NOTIFY_THRESHOLD")
        self.low_stock_threshold = low_stock_threshold

    def notify_product_updated(self, product: Product) -> None:
        """Notify subscribers about a product update."""
        logger.debug("Notifying subscribers about product update: %s", product.id)
        self.bus.publish_product_update(product)

    def notify_price_changed(self, product: Product, old_price: float, new_price: float) -> None:
        """Notify subscribers about a price change."""
        logger.debug(
            "Product price changed from %s to %s for product: %s",
            old_price,
            new_price,
            product.id,
        )
        self.bus.publish_price_change(
            PriceChanged(product=product, old_price=old_price, new_price=new_price)
        )

    def notify_low_stock(self, product: Product) -> None:
        """Notify subscribers about a low stock level."""
        logger.debug(
            "Low stock notification for product: %s (quantity: %s)",
            product.id,
            product.stock_quantity,
        )
        self.bus.publish_low_stock_alert(product)

    def is_low_stock(self, product: Product) -> bool:
        """Producer-side low-stock check."""
        return product.stock_quantity <= self.low_stock_threshold

    def handle_update(self, old_product: Product, new_product: Product) -> None:
        """
        Publish the events for an updated product.

        Args:
            old_product: Product before the update
            new_product: Product after the update
        """
        self.notify_product_updated(new_product)

        if old_product.price != new_product.price:
            self.notify_price_changed(new_product, old_product.price, new_product.price)

        if self.is_low_stock(new_product):
            self.notify_low_stock(new_product)

    def handle_create(self, product: Product) -> None:
        """Publish the events for a newly created product."""
        self.notify_product_updated(product)

        if self.is_low_stock(product):
            self.notify_low_stock(product)

    def handle_delete(self, product: Product) -> None:
        """
        Publish the events for a deleted product.

        A deletion is reported as an update to an out-of-stock copy,
        followed by an unconditional low-stock alert.
        """
        removed = product.with_stock_quantity(0).with_in_stock(False)
        self.handle_update(product, removed)
        self.notify_low_stock(removed)
