"""
Logging setup for hrtime.

Everything logs under the "hrtime" logger; the upstream client uses the
"hrtime.upstream" child so HR backend traffic can be tuned on its own.
"""

import logging
import sys
from typing import Optional

from hrtime.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that log every request at INFO
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """Configure the root handler once and return the application logger."""
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    app_logger = logging.getLogger("hrtime")
    app_logger.setLevel(log_level)
    return app_logger


def get_logger(component: str) -> logging.Logger:
    return logging.getLogger(f"hrtime.{component}")


logger = setup_logging()
