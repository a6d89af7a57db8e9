"""
App configuration for Catalog Engine.
"""

import logging
import sys

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CatalogEngineConfig(AppConfig):
    """App configuration for CatalogEngine."""

    name = "CatalogEngine"
    verbose_name = "Catalog Engine"

    def ready(self):
        """Called when Django starts."""
        # Skip for management commands that never serve traffic
        if len(sys.argv) > 1 and sys.argv[1] in ["check", "shell", "test"]:
            return

        if not hasattr(self, "_initialized"):
            self.setup_observability()
            self._initialized = True

    def setup_observability(self):
        """Setup observability after apps are ready."""
        from core.instrumentation import setup_opentelemetry

        logger.info("Setting up observability...")
        setup_opentelemetry()
        logger.info("Observability setup complete")
