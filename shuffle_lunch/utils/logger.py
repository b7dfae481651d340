"""Process-wide logging setup."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from shuffle_lunch.utils.config import get_settings


# third-party loggers that flood DEBUG output with connection chatter
QUIET_LOGGERS = ("urllib3", "httpx", "httpcore")

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root handler once.

    Later calls only adjust the root level, and only when ``level`` is given,
    so ``shuffle-lunch run --verbose`` can switch on per-placement DEBUG lines
    after modules have already created their loggers.
    """

    global _LOGGER_INITIALIZED
    settings = get_settings()
    resolved_level = (level or settings.log_level).upper()

    if _LOGGER_INITIALIZED:
        if level is not None:
            logging.getLogger().setLevel(resolved_level)
        return

    logging.basicConfig(level=resolved_level, format=settings.log_format, stream=sys.stdout)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    configure_logging()
    return logging.getLogger(name)
