"""Root conftest - shared test configuration."""

import os

import pytest

from formula_engine.config import get_settings

# Ensure a developer .env never changes the ceilings tests rely on
os.environ.setdefault("FORMULA_MAX_N", "10")
os.environ.setdefault("FORMULA_MAX_K", "6")
os.environ.setdefault("FORMULA_MAX_GROUPS_ESTIMATE", "50000")
os.environ.setdefault("FORMULA_SORT_RESULTS", "true")


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
