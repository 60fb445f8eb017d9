# /examcell/core/logging_config.py

import logging
from typing import Optional

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> None:
    """
    Configure the root logger with a single console handler.

    Safe to call more than once; only the first call has any effect. Every
    module logs through `logging.getLogger(__name__)`, so the `examcell.*`
    loggers inherit this configuration.
    """
    global _configured
    if _configured:
        return

    level = _LEVELS.get(log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(log_format or DEFAULT_FORMAT))
    root_logger.addHandler(console_handler)

    _configured = True
    logging.getLogger(__name__).info("Logging configured at level %s", log_level.upper())
