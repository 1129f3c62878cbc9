"""
Models returned by the external data providers.
Every result carries the notices the dashboard shows as toasts.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Literal

from scoring.models import EnergySnapshot, WeatherData, Notice


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class Location(BaseModel):
    latitude: float
    longitude: float
    city: str = "Unknown"
    region: str = "Unknown"
    country: str = "Unknown"


class LocationResult(BaseModel):
    location: Location
    source: Literal["bigdatacloud", "fallback"] = "bigdatacloud"
    cached: bool = False
    notices: List[Notice] = Field(default_factory=list)


class SnapshotResult(BaseModel):
    snapshot: EnergySnapshot
    source: Literal["nasa-power", "fallback"] = "nasa-power"
    cached: bool = False
    notices: List[Notice] = Field(default_factory=list)


class WeatherResult(BaseModel):
    weather: WeatherData
    source: Literal["openweathermap", "fallback"] = "openweathermap"
    cached: bool = False
    notices: List[Notice] = Field(default_factory=list)


class IPLocationResult(BaseModel):
    coordinates: Optional[Coordinates] = None
    notices: List[Notice] = Field(default_factory=list)
