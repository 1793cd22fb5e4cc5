from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog
from click.testing import CliRunner

from ums.infrastructure.bootstrap import user_repository


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def _fresh_shared_repository() -> Generator[None, None, None]:
    """Each test starts from the seeded store."""
    user_repository.cache_clear()
    yield
    user_repository.cache_clear()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None, None, None]:
    """Undo configure_logging() calls made by the CLI or by a test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    ums = logging.getLogger("ums")
    ums_level = ums.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    ums.setLevel(ums_level)
    structlog.reset_defaults()
