from __future__ import annotations

import logging

from dotenv import load_dotenv

from .config import get_settings_module, load_settings
from .container import Container, build_container_from_settings
from .core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_container() -> Container:
    """Load .env, pick the settings module and wire everything up."""
    load_dotenv(override=False)

    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    db_config = getattr(settings, "DB_CONFIG")
    if getattr(settings, "DEBUG", False):
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            get_settings_module(),
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

    return build_container_from_settings(settings)
