"""
Shared fixtures.
"""

import pytest

from gtinspect.barcode.registry import get_default_registry
from gtinspect.config import get_settings


@pytest.fixture(autouse=True)
def clear_cached_settings(monkeypatch):
    """Give every test fresh settings and a fresh default registry."""
    for name in ("ENABLED_FORMATS", "LOG_LEVEL", "LOG_FORMAT", "OUTPUT_FORMAT", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_default_registry.cache_clear()
    yield
    get_settings.cache_clear()
    get_default_registry.cache_clear()
