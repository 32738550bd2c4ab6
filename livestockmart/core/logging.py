import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
PACKAGE_LOGGER = "livestockmart"


def configure_logging(level: Optional[str] = None) -> None:
    """Install the root handler once and apply `level` to the package loggers.

    Safe to call on every application start; only the level changes on repeat calls.
    """
    resolved = (level or "INFO").upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(resolved)
    logging.getLogger(PACKAGE_LOGGER).setLevel(resolved)
