"""
CreateProductCommand.

Command to add products to the catalog.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass
class CreateProductCommand:
    """Command to create a product."""

    name: str
    price: float
    category: Optional[str] = None
    description: str = ""
    rating: Optional[float] = None
    stock_quantity: int = 10
    popularity: int = 0
    tags: List[str] = field(default_factory=list)
    custom_attributes: Dict[str, str] = field(default_factory=dict)


@dataclass
class BulkCreateProductsCommand:
    """Command to create several products."""

    products: List[CreateProductCommand] = field(default_factory=list)
