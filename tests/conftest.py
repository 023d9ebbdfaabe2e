from __future__ import annotations

import logging

import pytest

from logging_setup import HANDLER_NAME


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Drop the CLI stderr handler so it never outlives a captured stream."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if handler.get_name() == HANDLER_NAME:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
