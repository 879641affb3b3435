"""
Logging setup for the Deck Tracker API.

- Production (default): concise INFO-level logs.
- Debugging: set LOG_LEVEL=DEBUG (or call setup_logging("DEBUG")) for the
  verbose format, including SQL statements from SQLAlchemy.
"""

import logging
import sys
from typing import Optional

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure the root logger on stdout."""
    numeric_level = _LEVELS.get((level or "INFO").upper(), logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    is_debug = numeric_level <= logging.DEBUG
    fmt = (
        "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(funcName)s | %(message)s"
        if is_debug
        else "%(asctime)s %(levelname).1s %(name)s: %(message)s"
    )
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt="%H:%M:%S"))

    root.setLevel(numeric_level)
    root.addHandler(handler)

    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if is_debug else logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO if is_debug else logging.WARNING)
