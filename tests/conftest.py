# tests/conftest.py

"""Shared pytest fixtures for all threadfinder tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def reset_logger() -> Generator[None, None, None]:
    """Detach handlers added by setup_logging so runs don't leak files."""
    yield
    root_logger = logging.getLogger("threadfinder")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)
