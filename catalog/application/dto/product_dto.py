"""
Product DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from catalog.domain.product import Product


@dataclass
class PageInfo:
    """DTO for pagination metadata."""

    total_elements: int
    total_pages: int
    current_page: int
    page_size: int


@dataclass
class ProductPage:
    """DTO for one page of products."""

    content: List[Product]
    page_info: PageInfo


@dataclass
class ProductAttributeDTO:
    """DTO for one projected attribute."""

    name: str
    value: str


@dataclass
class DynamicProductDTO:
    """DTO for a sparse product view with string-rendered values."""

    id: str
    attributes: List[ProductAttributeDTO] = field(default_factory=list)

    @classmethod
    def from_projection(cls, view: Dict[str, Any]) -> "DynamicProductDTO":
        """Render a projection produced by ``catalog.domain.projection``."""
        return cls(
            id=str(view["id"]),
            attributes=[
                ProductAttributeDTO(name=name, value=_render(value))
                for name, value in view.items()
                if name != "id"
            ],
        )

    def as_dict(self) -> Dict[str, str]:
        """Attributes keyed by name, including id."""
        data = {"id": self.id}
        data.update({attribute.name: attribute.value for attribute in self.attributes})
        return data


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (list, tuple)):
        return ",".join(str(item) for item in value)
    return str(value)
