"""
Development settings for CatalogEngine.
"""

from .base import *  # noqa: F403, F401

DEBUG = True

ALLOWED_HOSTS = ["localhost", "127.0.0.1", "0.0.0.0"]

# Reproducible demo reports
CATALOG["DEMAND_SEED"] = 42  # noqa: F405
