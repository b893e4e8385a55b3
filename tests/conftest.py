from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("campuscoffee")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
