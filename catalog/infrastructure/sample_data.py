"""
Sample catalog used by demos and the management commands.
"""

import logging
from typing import List

from catalog.domain.product import Product
from catalog.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)

# name, description, price, category, in stock, rating, tags
SAMPLE_PRODUCTS = [
    ("High-Performance Laptop", "15-inch laptop with the latest processor, 16GB RAM and 512GB SSD",
     1299.99, "Electronics", True, 4.7, ["computer", "laptop", "portable"]),
    ("Flagship Smartphone", "Latest model with advanced camera system and all-day battery life",
     899.99, "Mobile Phones", True, 4.8, ["phone", "mobile", "camera", "android"]),
    ("Pro Tablet", "12-inch tablet for creative professionals with stylus support",
     799.99, "Electronics", True, 4.5, ["tablet", "stylus", "portable", "graphics"]),
    ("Noise-Cancelling Headphones", "Over-ear wireless headphones with premium sound quality",
     249.99, "Audio", True, 4.6, ["audio", "wireless", "bluetooth", "noise-cancelling"]),
    ("Wireless Earbuds", "True wireless earbuds with long battery life and water resistance",
     159.99, "Audio", True, 4.4, ["audio", "wireless", "earbuds", "water-resistant"]),
    ("Smart Speaker", "Voice-controlled speaker with room-filling sound",
     129.99, "Smart Home", True, 4.2, ["audio", "smart", "voice-control", "bluetooth"]),
    ("Premium Coffee Maker", "Programmable coffee machine with built-in grinder",
     149.99, "Kitchen", False, 4.3, ["kitchen", "coffee", "brewing", "appliance"]),
    ("High-Speed Blender", "Professional-grade blender for smoothies and food prep",
     199.99, "Kitchen", True, 4.5, ["kitchen", "blender", "smoothie", "food-processor"]),
    ("Gaming Console", "Next-gen gaming console with 4K capabilities",
     499.99, "Gaming", False, 4.9, ["gaming", "console", "4k", "entertainment"]),
    ("Gaming Headset", "Immersive surround sound headset for competitive gaming",
     149.99, "Gaming", True, 4.4, ["gaming", "audio", "headset", "microphone"]),
    ("Mechanical Gaming Keyboard", "Customizable RGB mechanical keyboard with programmable keys",
     129.99, "Gaming", True, 4.6, ["gaming", "keyboard", "mechanical", "rgb"]),
    ("Fitness Smartwatch", "Advanced fitness tracking with heart rate monitoring and GPS",
     199.99, "Wearables", True, 4.3, ["wearable", "fitness", "smartwatch", "gps"]),
    ("Wireless Laser Printer", "Fast, reliable printer with wireless connectivity",
     249.99, "Office", True, 4.0, ["office", "printer", "wireless", "laser"]),
    ("HD Webcam", "High-definition webcam for video conferencing",
     79.99, "Office", True, 4.2, ["office", "webcam", "video", "conference"]),
]


def build_sample_products() -> List[Product]:
    """Create the sample products (unsaved, without ids)."""
    products = []
    for name, description, price, category, in_stock, rating, tags in SAMPLE_PRODUCTS:
        products.append(
            Product.create(
                name=name,
                description=description,
                price=price,
                category=category,
                rating=rating,
                tags=tags,
                stock_quantity=10 if in_stock else 0,
            )
        )
    return products


async def load_sample_catalog(repository: ProductRepository) -> List[Product]:
    """
    Save the sample catalog into a repository.

    Args:
        repository: Target product store

    Returns:
        Saved products
    """
    saved = [await repository.save(product) for product in build_sample_products()]
    logger.info("Sample data loaded: %d products", len(saved))
    return saved
