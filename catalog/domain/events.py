"""
Product domain events.

Domain events represent something that happened to a catalog product.
Products are frozen, so every event carries a snapshot.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from catalog.domain.product import Product
from core.domain.events import DomainEvent


def percent_change(old_price: float, new_price: float) -> float:
    """Relative price change in percent (0 when the old price is zero)."""
    if old_price == 0:
        return 0.0
    return (new_price - old_price) / old_price * 100


@dataclass(frozen=True)
class ProductEvent(DomainEvent):
    """Base class for events about one product."""

    product: Product

    @property
    def aggregate_id(self) -> str:
        """Product id as a string."""
        return str(self.product.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        data = super().to_dict()
        data["product_id"] = self.product.id
        data["stock_quantity"] = self.product.stock_quantity
        return data


@dataclass(frozen=True)
class ProductUpdated(ProductEvent):
    """Event raised when a product is created or updated."""


@dataclass(frozen=True)
class LowStock(ProductEvent):
    """Event raised when a product's stock is low."""


@dataclass(frozen=True)
class PriceChanged(ProductEvent):
    """Event raised when a product's price changes."""

    old_price: float
    new_price: float
    percent_change: float = field(init=False, default=0.0)

    def __post_init__(self):
        """Derive the percentage change from the two prices."""
        object.__setattr__(self, "percent_change", percent_change(self.old_price, self.new_price))

    @property
    def price_difference(self) -> float:
        """Absolute price difference."""
        return abs(self.new_price - self.old_price)

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        data = super().to_dict()
        data.update(
            {
                "old_price": self.old_price,
                "new_price": self.new_price,
                "percent_change": self.percent_change,
            }
        )
        return data
