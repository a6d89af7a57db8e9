"""
DeleteProductCommand.
"""
from dataclasses import dataclass, field
from typing import List


@dataclass
class DeleteProductCommand:
    """Command to delete a product."""

    product_id: int


@dataclass
class BulkDeleteProductsCommand:
    """Command to delete several products."""

    product_ids: List[int] = field(default_factory=list)
