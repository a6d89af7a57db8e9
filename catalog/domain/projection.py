"""
Attribute projector.

Builds sparse views of products from a list of attribute names. Standard
attributes are read through an explicit accessor registry; any other name
is looked up in the product's custom attributes. Unknown names are dropped
and ``id`` is always present.
"""

import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping

from catalog.domain.product import Product

logger = logging.getLogger(__name__)

Accessor = Callable[[Product], Any]

ATTRIBUTE_ACCESSORS: Mapping[str, Accessor] = {
    "id": lambda p: p.id,
    "name": lambda p: p.name,
    "description": lambda p: p.description,
    "price": lambda p: p.price,
    "category": lambda p: p.category,
    "inStock": lambda p: p.in_stock,
    "rating": lambda p: p.rating,
    "stockQuantity": lambda p: p.stock_quantity,
    "popularity": lambda p: p.popularity,
    "tags": lambda p: list(p.tags),
    "createdAt": lambda p: p.created_at,
    "updatedAt": lambda p: p.updated_at,
}

STANDARD_ATTRIBUTES = tuple(ATTRIBUTE_ACCESSORS)


def _resolve(product: Product, name: str) -> Any:
    accessor = ATTRIBUTE_ACCESSORS.get(name)
    value = accessor(product) if accessor else None
    if value is None:
        value = product.custom_attributes.get(name)
    return value


def project(product: Product, attribute_names: Iterable[str]) -> Dict[str, Any]:
    """
    Project a product onto the requested attributes.

    Args:
        product: Product to project
        attribute_names: Requested attribute names

    Returns:
        Dict keyed by attribute name; ``id`` is always included and
        attributes without a value are omitted
    """
    view: Dict[str, Any] = {"id": product.id}
    for name in attribute_names:
        if name in view:
            continue
        value = _resolve(product, name)
        if value is None:
            if name not in ATTRIBUTE_ACCESSORS:
                logger.debug("Dropping unknown attribute %r for product %s", name, product.id)
            continue
        view[name] = value
    return view


def project_all(products: Iterable[Product], attribute_names: Iterable[str]) -> List[Dict[str, Any]]:
    """Project every product, preserving input order."""
    names = list(attribute_names)
    return [project(product, names) for product in products]
