import logging

import structlog

from .config import settings


def configure_logging(level: str | int | None = None) -> None:
    """Route structlog through stdlib logging as JSON lines.

    ``level`` defaults to ``Settings.log_level`` (``LOG_LEVEL`` in the
    environment). Level names are case-insensitive.
    """
    if level is None:
        level = settings.log_level
    if isinstance(level, str):
        level = level.upper()

    logging.basicConfig(level=level, format="%(message)s")
    # basicConfig leaves an already configured root logger alone
    logging.getLogger().setLevel(level)

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


configure_logging()


def get_logger(name: str | None = None):
    if name is None:
        return structlog.get_logger()
    return structlog.get_logger(name)
