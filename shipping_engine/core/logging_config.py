"""
Logging setup for scripts and services embedding the engine.

Library modules only ever call logging.getLogger(__name__); handlers are
configured once by the embedding process.
"""
import logging
from typing import Optional

from shipping_engine.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=level or settings.LOG_LEVEL, format=LOG_FORMAT)
    logging.getLogger(__name__).debug(f"Logging configured for {settings.APP_NAME}")
