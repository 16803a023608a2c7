# iplog/utils/logging.py

from __future__ import annotations
import logging
import os
import sys

ROOT_LOGGER = "iplog"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """
    Attach a stderr handler to the 'iplog' logger, once.

    The level defaults to IPLOG_LOG_LEVEL, then WARNING.
    """
    root = logging.getLogger(ROOT_LOGGER)
    level_name = (level or os.environ.get("IPLOG_LOG_LEVEL") or "WARNING").upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if any(getattr(h, "_iplog_stderr", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler._iplog_stderr = True
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    root.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger under the shared 'iplog' hierarchy."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
