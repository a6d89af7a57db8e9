"""
Test settings for CatalogEngine.
"""

from .base import *  # noqa: F403, F401

DEBUG = False

CATALOG = {
    "DEFAULT_PAGE_SIZE": 10,
    "RELATED_MAX_RESULTS": 5,
    "LOW_STOCK_NOTIFY_THRESHOLD": 10,
    "LOW_STOCK_SUBSCRIPTION_THRESHOLD": 5,
    "REPORT_TOP_SELLERS": 5,
    "DEMAND_SEED": 1234,
}

# Disable logging during tests
LOGGING_CONFIG = None
