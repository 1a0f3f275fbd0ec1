"""Shared test fixtures and configuration for the Recipe Extractor tests.

The test environment is selected before any settings are loaded, so the
YAML overrides in ``config/environments/test`` apply (database disabled,
short fetch timeout).
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest


os.environ["APP_ENV"] = "test"

from recipe_extractor.core.config import Settings, get_settings  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Generator[None]:
    """Drop cached settings so environment patches in one test don't leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings for the test environment."""
    return get_settings()
