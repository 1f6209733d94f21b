# tests/conftest.py
# Resets the package logger between tests so handlers bound to captured
# streams do not leak from CLI tests into later ones.
import logging

import pytest

from ini_object.logging_utils import PACKAGE_LOGGER


@pytest.fixture(autouse=True)
def reset_package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)
