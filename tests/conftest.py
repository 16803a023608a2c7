from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_iplog_logger():
    """Undo whatever cli.main / configure_logging did to the 'iplog' logger."""
    logger = logging.getLogger("iplog")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield logger
    logger.handlers[:] = saved[0]
    logger.level = saved[1]
    logger.propagate = saved[2]
