"""
Logger factory

All setstore modules obtain their logger through get_logger(__name__) so that
output shares one handler and one level, controlled by LOG_LEVEL.
"""

import logging
import os
import sys
from threading import Lock
from typing import Optional

ROOT_LOGGER_NAME = "setstore"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_configured = False
_configure_lock = Lock()


def _configure_root() -> None:
    """Attach a single stderr handler to the package root logger."""
    global _configured
    with _configure_lock:
        if _configured:
            return
        root = logging.getLogger(ROOT_LOGGER_NAME)
        level_name = os.getenv("LOG_LEVEL", "INFO").upper()
        root.setLevel(getattr(logging, level_name, logging.INFO))
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            root.addHandler(handler)
        _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger under the setstore namespace

    Args:
        name: Module name, usually __name__. Names outside the package are
            nested under the package root.

    Returns:
        Configured logging.Logger
    """
    _configure_root()
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


__all__ = ["get_logger"]
