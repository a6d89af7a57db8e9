"""
Catalog engine configuration.

Tunables live in the ``CATALOG`` dict of the Django settings module.
When Django settings are not configured (the engine used as a plain
library) the built-in defaults apply.
"""

import logging
from typing import Any, Dict

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "DEFAULT_PAGE_SIZE": 10,
    "RELATED_MAX_RESULTS": 5,
    # Producer-side check before publishing a low-stock event
    "LOW_STOCK_NOTIFY_THRESHOLD": 10,
    # Default threshold of a low-stock subscription
    "LOW_STOCK_SUBSCRIPTION_THRESHOLD": 5,
    "REPORT_TOP_SELLERS": 5,
    "DEMAND_SEED": None,
}


def get_catalog_settings() -> Dict[str, Any]:
    """
    Return the effective catalog settings.

    Returns:
        DEFAULTS merged with the ``CATALOG`` settings dict, if any
    """
    try:
        overrides = getattr(settings, "CATALOG", {})
    except ImproperlyConfigured:
        overrides = {}
    unknown = set(overrides) - set(DEFAULTS)
    if unknown:
        logger.warning("Ignoring unknown CATALOG settings: %s", sorted(unknown))
    merged = dict(DEFAULTS)
    merged.update({key: value for key, value in overrides.items() if key in DEFAULTS})
    return merged


def get_catalog_setting(name: str) -> Any:
    """
    Return a single catalog setting.

    Args:
        name: Setting name (a key of DEFAULTS)

    Returns:
        Configured value or the built-in default
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown catalog setting: {name}")
    return get_catalog_settings()[name]
