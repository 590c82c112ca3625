"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

from ibadat.observability import reset_observability_cache
from ibadat.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Drop cached settings so env overrides from one test never leak into another."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_observability_cache()
