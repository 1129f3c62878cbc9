import os
import sys

import pytest

# Add service directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from energy_data.provider import snapshot_cache
from energy_data.location import location_cache
from energy_data.weather import weather_cache


@pytest.fixture(autouse=True)
def clear_caches():
    """Provider caches are module-level; start every test empty"""
    for cache in (snapshot_cache, location_cache, weather_cache):
        cache.clear()
    yield
    for cache in (snapshot_cache, location_cache, weather_cache):
        cache.clear()
