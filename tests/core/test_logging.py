import logging

import pytest

from glm_assistant.core.logging import configure_logging


@pytest.fixture
def restore_root():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)


def test_configure_logging_sets_single_handler(restore_root):
    root = configure_logging(log_level="debug")

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("httpx").level == logging.WARNING


def test_configure_logging_rejects_unknown_level(restore_root):
    with pytest.raises(ValueError):
        configure_logging(log_level="chatty")
