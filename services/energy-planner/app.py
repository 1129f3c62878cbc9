"""
Energy Planner Service
Rural electrification planner: NASA POWER solar/wind data, battery state,
recommendations, feasibility score and cost/carbon projections.
"""

import asyncio
import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field, model_validator

# Prometheus metrics
from prometheus_fastapi_instrumentator import Instrumentator

import config
from energy_data import (
    Location,
    LocationResult,
    SnapshotResult,
    WeatherResult,
    InvalidCoordinatesError,
    parse_coordinates,
    lookup_ip_location,
    reverse_geocode,
    fetch_energy_snapshot,
    fetch_weather,
)
from report import ExportRequest, build_report, render_report, report_filename
from scoring import (
    ScoringEngine,
    ScoringConstants,
    EnergySnapshot,
    BatteryState,
    EnergyConsumptionProfile,
    CostAnalysis,
    CarbonFootprint,
    Recommendation,
    FeasibilityResult,
    WeatherData,
    WeatherImpact,
    Notice,
    BatteryRequest,
    AnalysisRequest,
    AnalysisResult,
    recompute_battery,
)
from scoring.analytics import weather_impact
from scoring.consumption import default_profile

# Setup logging
logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Energy Planner Service",
    description="Renewable feasibility scoring and recommendations for rural sites",
    version="1.0.0"
)

# Initialize Prometheus metrics
Instrumentator().instrument(app).expose(app)

# CORS configuration - allow all origins for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

DEFAULT_CONSTANTS = config.load_scoring_constants()


def _engine(constants: Optional[ScoringConstants]) -> ScoringEngine:
    return ScoringEngine(constants or DEFAULT_CONSTANTS)


def _with_grid_cost(request: AnalysisRequest) -> AnalysisRequest:
    """Configured tariff when the request leaves it out"""
    if request.grid_cost_per_kwh is None:
        return request.model_copy(update={"grid_cost_per_kwh": config.DEFAULT_GRID_COST})
    return request


# ============== Models ==============

class ProjectionResponse(BaseModel):
    cost: CostAnalysis
    carbon: CarbonFootprint


class FeasibilityResponse(BaseModel):
    result: Optional[FeasibilityResult] = None


class DashboardRequest(BaseModel):
    """Coordinates are optional: without them the IP location is used"""
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    battery_capacity: float = Field(default=100.0, gt=0, description="kWh")
    battery_charge: float = Field(default=75.0, ge=0, description="kWh")
    consumption: EnergyConsumptionProfile = Field(default_factory=default_profile)
    grid_cost_per_kwh: float = Field(default=config.DEFAULT_GRID_COST, ge=0)
    constants: Optional[ScoringConstants] = None

    @model_validator(mode="after")
    def _both_or_neither(self) -> "DashboardRequest":
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be given together")
        if self.battery_charge > self.battery_capacity:
            raise ValueError("battery_charge cannot exceed battery_capacity")
        return self


class DashboardResponse(BaseModel):
    location: Optional[Location] = None
    snapshot: Optional[EnergySnapshot] = None
    data_source: Optional[str] = None
    weather: Optional[WeatherData] = None
    weather_impact: Optional[WeatherImpact] = None
    analysis: AnalysisResult
    notices: List[Notice] = Field(default_factory=list)


# ============== API Endpoints ==============

@app.get("/")
async def root():
    return {
        "service": "Energy Planner Service",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "energy-planner", "version": "1.0.0"}


@app.get("/defaults")
async def get_defaults():
    """Starting values for the dashboard forms"""
    return {
        "battery": recompute_battery(100.0, 75.0, None, DEFAULT_CONSTANTS).model_dump(),
        "consumption": default_profile().model_dump(),
        "grid_cost_per_kwh": config.DEFAULT_GRID_COST,
        "constants": DEFAULT_CONSTANTS.model_dump(),
    }


# ============== Data endpoints ==============

@app.get("/location/ip", response_model=LocationResult)
async def location_from_ip():
    """IP based detection, then reverse geocoding"""
    ip_result = await lookup_ip_location()
    if ip_result.coordinates is None:
        raise HTTPException(
            status_code=503,
            detail="Location detection failed, please enter coordinates manually",
        )
    coords = ip_result.coordinates
    return await reverse_geocode(coords.latitude, coords.longitude)


@app.get("/location/reverse", response_model=LocationResult)
async def location_reverse(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
):
    return await reverse_geocode(lat, lon)


@app.get("/location/manual", response_model=LocationResult)
async def location_manual(
    lat: str = Query(..., description="Latitude as typed"),
    lon: str = Query(..., description="Longitude as typed"),
):
    """Validate manually entered coordinates before anything else sees them"""
    try:
        coords = parse_coordinates(lat, lon)
    except InvalidCoordinatesError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return await reverse_geocode(coords.latitude, coords.longitude)


@app.get("/energy", response_model=SnapshotResult)
async def energy_snapshot(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
):
    """Solar/wind snapshot; falls back to demo data transparently"""
    return await fetch_energy_snapshot(lat, lon)


@app.get("/weather", response_model=WeatherResult)
async def weather(
    lat: float = Query(..., ge=-90, le=90, description="Latitude"),
    lon: float = Query(..., ge=-180, le=180, description="Longitude"),
):
    return await fetch_weather(lat, lon)


# ============== Engine endpoints ==============

@app.post("/battery", response_model=BatteryState)
async def battery_state(request: BatteryRequest):
    """Recompute percentage and runtime"""
    if request.current_charge > request.capacity:
        raise HTTPException(status_code=422, detail="current_charge cannot exceed capacity")
    return recompute_battery(
        request.capacity,
        request.current_charge,
        request.snapshot,
        request.constants or DEFAULT_CONSTANTS,
    )


@app.post("/recommendations", response_model=List[Recommendation])
async def recommendations(request: AnalysisRequest):
    """Rule order, not priority order"""
    request = _with_grid_cost(request)
    if request.snapshot is None:
        return []
    try:
        engine = _engine(request.constants)
        battery = recompute_battery(
            request.battery.capacity, request.battery.current_charge,
            request.snapshot, engine.constants,
        )
        cost, _ = engine.project(
            request.snapshot, battery, request.consumption, request.grid_cost_per_kwh
        )
        return engine.generate_recommendations(request.snapshot, battery, request.consumption, cost)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/feasibility", response_model=FeasibilityResponse)
async def feasibility(request: AnalysisRequest):
    """Result is null when no snapshot has been loaded"""
    try:
        engine = _engine(request.constants)
        battery = recompute_battery(
            request.battery.capacity, request.battery.current_charge,
            request.snapshot, engine.constants,
        )
        return FeasibilityResponse(result=engine.score_feasibility(request.snapshot, battery))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/projection", response_model=ProjectionResponse)
async def projection(request: AnalysisRequest):
    request = _with_grid_cost(request)
    if request.snapshot is None:
        raise HTTPException(status_code=422, detail="snapshot is required for projection")
    try:
        engine = _engine(request.constants)
        battery = recompute_battery(
            request.battery.capacity, request.battery.current_charge,
            request.snapshot, engine.constants,
        )
        cost, carbon = engine.project(
            request.snapshot, battery, request.consumption, request.grid_cost_per_kwh
        )
        return ProjectionResponse(cost=cost, carbon=carbon)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/analysis", response_model=AnalysisResult)
async def analysis(request: AnalysisRequest):
    """
    Full recomputation pass.

    Battery is always returned; recommendations, feasibility, projections
    and analytics only when a snapshot is present.
    """
    request = _with_grid_cost(request)
    try:
        return _engine(request.constants).analyze(request)
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/dashboard", response_model=DashboardResponse)
async def dashboard(request: DashboardRequest):
    """
    Fetch everything for a site, then run the engine.

    1. Coordinates from the request, or IP location
    2. Reverse geocoding, NASA POWER and weather concurrently
    3. Full analysis on whatever data came back (fallbacks included)
    """
    notices: List[Notice] = []
    constants = request.constants or DEFAULT_CONSTANTS
    engine = ScoringEngine(constants)

    lat, lon = request.latitude, request.longitude
    if lat is None:
        ip_result = await lookup_ip_location()
        notices.extend(ip_result.notices)
        if ip_result.coordinates is None:
            # Nothing to score yet: battery only
            battery = recompute_battery(
                request.battery_capacity, request.battery_charge, None, constants
            )
            return DashboardResponse(analysis=AnalysisResult(battery=battery), notices=notices)
        lat, lon = ip_result.coordinates.latitude, ip_result.coordinates.longitude

    location_result, snapshot_result, weather_result = await asyncio.gather(
        reverse_geocode(lat, lon),
        fetch_energy_snapshot(lat, lon),
        fetch_weather(lat, lon),
    )
    notices.extend(location_result.notices)
    notices.extend(snapshot_result.notices)
    notices.extend(weather_result.notices)

    try:
        result = engine.analyze(AnalysisRequest(
            snapshot=snapshot_result.snapshot,
            battery=BatteryState(
                capacity=request.battery_capacity,
                current_charge=request.battery_charge,
            ),
            consumption=request.consumption,
            grid_cost_per_kwh=request.grid_cost_per_kwh,
        ))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        f"Dashboard for {lat:.4f},{lon:.4f} ({snapshot_result.source}): "
        f"feasibility {result.feasibility.score if result.feasibility else 'n/a'}, "
        f"{len(result.recommendations)} recommendations"
    )

    return DashboardResponse(
        location=location_result.location,
        snapshot=snapshot_result.snapshot,
        data_source=snapshot_result.source,
        weather=weather_result.weather,
        weather_impact=weather_impact(weather_result.weather, snapshot_result.snapshot),
        analysis=result,
        notices=notices,
    )


@app.post("/export")
async def export_report(request: ExportRequest):
    """Download the dashboard state as a JSON document"""
    report = build_report(request, constants=DEFAULT_CONSTANTS)
    filename = report_filename(request.location)
    return Response(
        content=render_report(report),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
