# af_discounts/core/logging_config.py
import logging
import sys
from typing import Optional

import structlog

from .settings import Settings, get_settings


def setup_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog + standaard logging.
    The engine itself never calls this; the host application decides.
    """
    settings = settings or get_settings()
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# Globale logger op een stdlib logger: zonder setup_logging() filtert
# logging zelf (root = WARNING) en blijven debug events stil.
logger = structlog.wrap_logger(
    logging.getLogger("af_discounts"),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


def get_logger(component: str):
    """Bind per call, zodat setup_logging() ook na import nog effect heeft."""
    return logger.bind(component=component)
