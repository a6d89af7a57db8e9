"""
UpdateProductCommand.

Command to update an existing product. Fields left as None keep their
current value.
"""
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class UpdateProductCommand:
    """Command to update a product."""

    product_id: int
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    in_stock: Optional[bool] = None
    rating: Optional[float] = None
    tags: Optional[List[str]] = None
    stock_quantity: Optional[int] = None
