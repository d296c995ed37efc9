"""Shared fixtures for the autotyper test suite."""

import logging
from datetime import datetime, timezone

import pytest
from rich.logging import RichHandler

from autotyper.logging_config import ROOT_LOGGER_NAME

SAMPLE_DSL = "User email:s password:s isAdmin?:b createdAt:d tags:s[]"
LEGACY_SAMPLE_DSL = "type:user-email:s/password:s/isAdmin:b:o/createdAt:d/tags:s[]"


@pytest.fixture
def sample_dsl():
    """Modern-dialect DSL used across the suite."""
    return SAMPLE_DSL


@pytest.fixture
def legacy_sample_dsl():
    """The same record written in the old dialect."""
    return LEGACY_SAMPLE_DSL


@pytest.fixture
def now():
    """Fixed moment so example timestamps are predictable."""
    return datetime(2024, 1, 31, 9, 15, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def clean_package_logger():
    """Remove rich handlers installed by configure_logging() after each test."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in logger.handlers[:]:
        if isinstance(handler, RichHandler):
            handler.close()
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
