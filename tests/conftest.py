# Shared fixtures for the psql2ch test suite

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_psql2ch_logger():
    """Undo configure_logging() calls made by a test."""
    logger = logging.getLogger("psql2ch")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
