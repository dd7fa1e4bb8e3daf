"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts with no configuration at all: it listens on port 3000
and keeps its products in ``products.json`` next to the package.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Product Inventory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file in addition to console output.
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    # Location of the JSON file holding the product collection.  A
    # relative path is resolved against the project root by the
    # ``store`` module.
    products_file: str = os.getenv("PRODUCTS_FILE", "products.json")


# Defaults are read when this module is first imported; tests and run.py
# must set PORT, PRODUCTS_FILE and friends before that.
settings = Settings()
