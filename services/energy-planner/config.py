"""
Energy Planner configuration.
All settings come from the environment; defaults work for local development.
"""

import os

from scoring import models
from scoring.models import ScoringConstants

# External APIs
NASA_POWER_URL = os.environ.get(
    "NASA_POWER_URL", "https://power.larc.nasa.gov/api/temporal/daily/point"
)
IPAPI_URL = os.environ.get("IPAPI_URL", "https://ipapi.co/json/")
REVERSE_GEOCODE_URL = os.environ.get(
    "REVERSE_GEOCODE_URL", "https://api.bigdatacloud.net/data/reverse-geocode-client"
)
OPENWEATHER_URL = os.environ.get(
    "OPENWEATHER_URL", "https://api.openweathermap.org/data/2.5/weather"
)
WEATHER_API_KEY = os.environ.get("WEATHER_API_KEY", "")  # OpenWeatherMap key

HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10"))
CACHE_TTL_SECONDS = int(os.environ.get("CACHE_TTL_SECONDS", "3600"))  # 1 hour
WEATHER_CACHE_TTL_SECONDS = int(os.environ.get("WEATHER_CACHE_TTL_SECONDS", "600"))
HISTORY_DAYS = int(os.environ.get("HISTORY_DAYS", "30"))
CHART_SAMPLES = 7

DEFAULT_GRID_COST = float(os.environ.get("DEFAULT_GRID_COST", str(models.DEFAULT_GRID_COST)))  # per kWh

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
PORT = int(os.environ.get("PORT", "8030"))


def load_scoring_constants() -> ScoringConstants:
    """Defaults overridden by DERATING_FACTOR, GRID_EMISSION_FACTOR, ... when set"""
    overrides = {}
    env_fields = {
        "DERATING_FACTOR": "derating_factor",
        "GRID_EMISSION_FACTOR": "grid_emission_factor",
        "TREE_ABSORPTION_KG": "tree_absorption_kg",
        "SYSTEM_COST": "system_cost",
        "FALLBACK_AVERAGE_DEMAND": "fallback_average_demand",
    }
    for env_name, field in env_fields.items():
        value = os.environ.get(env_name)
        if value:
            overrides[field] = float(value)

    currency = os.environ.get("CURRENCY_SYMBOL")
    if currency:
        overrides["currency_symbol"] = currency

    return ScoringConstants(**overrides)
