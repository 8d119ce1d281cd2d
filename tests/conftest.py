"""Test configuration and fixtures."""

import logging
import pytest

APP_LOGGERS = ("gallery_search", "search_test", "core", "security", "utils", "cli")


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach handlers installed by setup_logging so they don't outlive a test."""
    yield

    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.propagate = True
        logger.setLevel(logging.NOTSET)
