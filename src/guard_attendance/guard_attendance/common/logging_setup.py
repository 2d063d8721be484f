"""Logging configuration.

Configured once at startup (see ``main.create_app``); modules only call
``logging.getLogger(__name__)``.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_initialized = False


def setup_logging(log_level: Optional[str] = None, *, debug: bool = False) -> None:
    global _initialized
    if _initialized:
        return

    level_name = (log_level or ("DEBUG" if debug else "INFO")).upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(console_handler)

    # Third-party chatter stays at WARNING unless we are debugging.
    if not debug:
        logging.getLogger("werkzeug").setLevel(logging.WARNING)
        logging.getLogger("mysql.connector").setLevel(logging.WARNING)

    _initialized = True
    logging.getLogger(__name__).info("Logging initialized (level=%s)", level_name)
