"""Root test configuration: logger isolation between tests"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_orgpub_logger():
    """Drop handlers installed by CLI runs so later tests never log to a closed stream."""
    yield
    logger = logging.getLogger("orgpub")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
