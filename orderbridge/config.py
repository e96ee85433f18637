"""
Configuration module for loading environment variables.

This module loads environment variables from a .env file and exposes the
storefront credentials and transformer settings used by the sync jobs.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from orderbridge.core import EngineConfig

load_dotenv()

# Storefront configuration
SHOPIFY_SHOP_DOMAIN = os.getenv("SHOPIFY_SHOP_DOMAIN", "")
SHOPIFY_ACCESS_TOKEN = os.getenv("SHOPIFY_ACCESS_TOKEN", "")
SHOPIFY_API_VERSION = os.getenv("SHOPIFY_API_VERSION", "2024-01")
SHOPIFY_WEBHOOK_SECRET = os.getenv("SHOPIFY_WEBHOOK_SECRET") or None

# Transformer configuration
ORDERBRIDGE_ON_ERROR = os.getenv("ORDERBRIDGE_ON_ERROR", "blank").lower()
ORDERBRIDGE_LOG_LEVEL = os.getenv("ORDERBRIDGE_LOG_LEVEL", "INFO").upper()
ORDERBRIDGE_TRACE = os.getenv("ORDERBRIDGE_TRACE", "false").lower() in ("true", "1", "yes", "on")

ON_ERROR_MODES = ("blank", "warn", "raise")


def engine_config_from_env(logger: Optional[logging.Logger] = None) -> EngineConfig:
    mode = ORDERBRIDGE_ON_ERROR if ORDERBRIDGE_ON_ERROR in ON_ERROR_MODES else "blank"
    if logger is None:
        logger = logging.getLogger("orderbridge")
        logger.setLevel(getattr(logging, ORDERBRIDGE_LOG_LEVEL, logging.INFO))
    return EngineConfig(default_on_error=mode, trace_enabled=ORDERBRIDGE_TRACE, logger=logger)
