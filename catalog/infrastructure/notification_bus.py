"""
Product notification bus.

Three topics on top of the core EventBus: product updates, price changes
and low-stock alerts. Price-change and low-stock subscriptions carry a
threshold that filters events before they reach the subscriber.
"""

import logging
from typing import Optional

from catalog.domain.events import LowStock, PriceChanged, ProductUpdated
from catalog.domain.product import Product
from core.config import get_catalog_setting
from core.infrastructure.events import EventBus, Subscription

logger = logging.getLogger(__name__)

PRODUCT_UPDATED = "productUpdated"
PRICE_CHANGED = "priceChanged"
LOW_STOCK = "lowStock"

TOPICS = (PRODUCT_UPDATED, PRICE_CHANGED, LOW_STOCK)


class ProductNotificationBus:
    """
    Publish/subscribe channel for product change events.

    Construct one per process (or per test), inject it where needed and
    call ``close()`` on teardown.
    """

    def __init__(self, default_low_stock_threshold: Optional[int] = None):
        """
        Initialize bus.

        Args:
            default_low_stock_threshold: Threshold for low-stock
                subscriptions that do not pass one (defaults to the
                LOW_STOCK_SUBSCRIPTION_THRESHOLD setting, 5)
        """
        self._bus = EventBus(list(TOPICS))
        if default_low_stock_threshold is None:
            default_low_stock_threshold = get_catalog_setting("LOW_STOCK_SUBSCRIPTION_THRESHOLD")
        self.default_low_stock_threshold = default_low_stock_threshold
        logger.info("Product notification bus initialized")

    def subscriber_count(self, topic: str) -> int:
        """Number of live subscriptions on a topic."""
        return self._bus.topic(topic).subscriber_count

    def publish_product_update(self, product: Product) -> int:
        """Publish a product update."""
        logger.debug("Publishing product update for product ID: %s", product.id)
        return self._bus.publish(PRODUCT_UPDATED, ProductUpdated(product=product))

    def publish_price_change(self, event: PriceChanged) -> int:
        """Publish a price change."""
        logger.debug("Publishing price change for product ID: %s", event.product.id)
        return self._bus.publish(PRICE_CHANGED, event)

    def publish_low_stock_alert(self, product: Product) -> int:
        """Publish a low-stock alert."""
        logger.debug("Publishing low stock alert for product ID: %s", product.id)
        return self._bus.publish(LOW_STOCK, LowStock(product=product))

    def subscribe_product_updated(self) -> Subscription:
        """Subscribe to every product update."""
        logger.info("New subscription for product updates")
        return self._bus.subscribe(PRODUCT_UPDATED)

    def subscribe_price_changed(self, min_price_difference: Optional[float] = None) -> Subscription:
        """
        Subscribe to price changes.

        Args:
            min_price_difference: Only deliver changes with
                ``|new - old| >= min_price_difference`` (None delivers all)
        """
        logger.info(
            "New subscription for price changes with threshold: %s", min_price_difference
        )
        if min_price_difference is None:
            return self._bus.subscribe(PRICE_CHANGED)
        return self._bus.subscribe(
            PRICE_CHANGED,
            lambda event: event.price_difference >= min_price_difference,
        )

    def subscribe_low_stock(self, threshold: Optional[int] = None) -> Subscription:
        """
        Subscribe to low-stock alerts.

        Args:
            threshold: Only deliver products with ``stock_quantity <= threshold``
                (defaults to ``default_low_stock_threshold``)
        """
        if threshold is None:
            threshold = self.default_low_stock_threshold
        logger.info("New subscription for low stock alerts with threshold: %s", threshold)
        return self._bus.subscribe(
            LOW_STOCK,
            lambda event: event.product.stock_quantity <= threshold,
        )

    def close(self) -> None:
        """Cancel every subscription."""
        self._bus.close()
