"""Shared fixtures for html5_media tests."""

import copy
import logging

import pytest

from html5_media import i18n
from html5_media import logging as media_logging


@pytest.fixture(autouse=True)
def reset_logger():
    """Return the html5_media logger to its library defaults around each test."""

    def reset():
        logger = logging.getLogger(media_logging.LOGGER_NAME)
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    reset()
    yield
    reset()


@pytest.fixture
def restore_messages():
    """Undo in-place edits of the shared message table."""
    saved = copy.deepcopy(i18n.messages)
    yield i18n.messages
    i18n.messages.clear()
    i18n.messages.update(saved)
