"""
Base Django settings for CatalogEngine.

These settings are shared across all environments.
Environment-specific overrides are in dev.py, test.py, and prod.py
"""
import os
from pathlib import Path

from .logging import get_logging_config

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY", "django-insecure-catalog-engine-local-development-key")

# Application definition
INSTALLED_APPS = [
    # Local apps
    "CatalogEngine.apps.CatalogEngineConfig",
    "core",
    "catalog",
]

# The catalog keeps its data in memory; no database is configured.
DATABASES = {}

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Catalog engine tunables (see core.config.DEFAULTS)
CATALOG = {
    "DEFAULT_PAGE_SIZE": int(os.environ.get("CATALOG_DEFAULT_PAGE_SIZE", "10")),
    "RELATED_MAX_RESULTS": 5,
    "LOW_STOCK_NOTIFY_THRESHOLD": 10,
    "LOW_STOCK_SUBSCRIPTION_THRESHOLD": 5,
    "REPORT_TOP_SELLERS": 5,
    "DEMAND_SEED": None,
}

# Observability
LOGGING = get_logging_config(os.environ.get("ENVIRONMENT", "development"))
