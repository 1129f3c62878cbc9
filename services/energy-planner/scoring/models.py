"""
Scoring Engine Models
=====================
Pydantic models for the rural energy planning engine.

Key principles:
1. Inputs are plain numeric snapshots handed over by the data providers
2. Every derived record (cost, carbon, recommendations, feasibility) is a pure
   function of the inputs and the named constants below
3. Constants encode a regional policy (India grid factor by default) and can be
   overridden per request or via environment
4. No rendering concerns: feasibility carries a status enum, not an icon
"""

from pydantic import BaseModel, Field, computed_field, model_validator
from typing import List, Optional, Literal
from enum import Enum

# Grid tariff per kWh when the caller sets none
DEFAULT_GRID_COST = 8.5


class ScoringConstants(BaseModel):
    """
    Policy constants used by the projections and recommendations.
    Defaults describe a 5 kW rural setup on the Indian grid.
    """
    derating_factor: float = Field(default=0.8, gt=0, le=1, description="Usable share of theoretical renewable output")
    grid_emission_factor: float = Field(default=0.82, ge=0, description="kg CO2 per kWh drawn from the grid")
    tree_absorption_kg: float = Field(default=22.0, gt=0, description="kg CO2 absorbed by one tree per year")
    system_cost: float = Field(default=80000.0, ge=0, description="Installed system cost (currency)")
    fallback_average_demand: float = Field(default=5.0, gt=0, description="kWh/h used for runtime when no snapshot exists")
    currency_symbol: str = Field(default="₹", description="Symbol embedded in messages")


# ============== Energy snapshot ==============

class EnergySample(BaseModel):
    """Single chart sample (date label + value)"""
    model_config = {"frozen": True}

    label: str
    value: float


class ResourceReading(BaseModel):
    """Summary of one renewable resource over the fetched window"""
    model_config = {"frozen": True}

    current: float = Field(..., ge=0, description="Most recent value")
    average: float = Field(..., ge=0, description="Mean over the window")
    peak: float = Field(..., ge=0, description="Maximum over the window")
    data: List[EnergySample] = Field(default_factory=list, description="Recent samples, most-recent-last")


class EnergySnapshot(BaseModel):
    """
    Immutable solar/wind snapshot.
    Solar in kWh/m²/day (irradiance), wind in m/s at 10 m.
    """
    model_config = {"frozen": True}

    solar: ResourceReading
    wind: ResourceReading


# ============== Battery ==============

class BatteryState(BaseModel):
    """
    Battery state owned by the caller.
    percentage and runtime are derived: use battery.recompute_battery()
    after any change to capacity or charge.
    """
    capacity: float = Field(default=100.0, gt=0, description="Capacity in kWh")
    current_charge: float = Field(default=75.0, ge=0, description="Stored energy in kWh")
    percentage: float = Field(default=75.0, description="Derived: charge / capacity * 100")
    runtime: float = Field(default=15.0, description="Derived: hours of supply at average demand")

    @model_validator(mode="after")
    def _charge_within_capacity(self) -> "BatteryState":
        if self.current_charge > self.capacity:
            raise ValueError("current_charge cannot exceed capacity")
        return self


# ============== Consumption ==============

class Appliance(BaseModel):
    name: str
    power_kw: float = Field(..., ge=0, description="Rated power in kW")
    hours_per_day: float = Field(..., ge=0, le=24, description="Usage hours per day")

    @computed_field
    @property
    def daily_kwh(self) -> float:
        return self.power_kw * self.hours_per_day


class EnergyConsumptionProfile(BaseModel):
    """Household/site demand profile"""
    daily_demand: float = Field(default=25.0, gt=0, description="kWh per day")
    peak_hours: str = Field(default="18:00-22:00", description="Descriptive only, not parsed")
    appliances: List[Appliance] = Field(default_factory=list)

    @computed_field
    @property
    def total_load(self) -> float:
        """Sum of appliance energy per day (kWh)"""
        return sum(appliance.daily_kwh for appliance in self.appliances)


# ============== Derived analytics ==============

class CostAnalysis(BaseModel):
    """Only grid_cost_per_kwh is caller-settable; the rest comes from projection"""
    grid_cost_per_kwh: float = Field(default=DEFAULT_GRID_COST, ge=0, description="Grid tariff per kWh")
    renewable_savings_per_day: float = 0.0
    annual_savings: float = 0.0
    payback_period_years: float = Field(
        default=0.0,
        description="0 means no payback (annual savings <= 0), not instant payback"
    )


class CarbonFootprint(BaseModel):
    current_emissions: float = 0.0  # kg CO2/day at full grid supply
    renewable_reduction_per_day: float = 0.0  # kg CO2/day
    annual_savings: float = 0.0  # kg CO2/year
    trees_equivalent_per_year: float = 0.0


class RecommendationCategory(str, Enum):
    SOLAR = "solar"
    WIND = "wind"
    BATTERY = "battery"
    GRID = "grid"
    ECONOMIC = "economic"
    ENVIRONMENTAL = "environmental"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Recommendation(BaseModel):
    """Produced fresh on every pass, never mutated"""
    model_config = {"frozen": True}

    category: RecommendationCategory
    priority: Priority
    message: str
    action: str
    impact_score: float = Field(..., ge=0, le=100)
    confidence_score: float = Field(..., ge=0, le=100)


class FeasibilityStatus(str, Enum):
    OPTIMAL = "optimal"
    MODERATE = "moderate"
    NOT_RECOMMENDED = "not-recommended"


class FeasibilityBreakdown(BaseModel):
    """Points per category (for auditability)"""
    solar_pts: float = 0.0
    wind_pts: float = 0.0
    battery_pts: float = 0.0
    reliability_pts: float = 0.0


class FeasibilityResult(BaseModel):
    status: FeasibilityStatus
    score: float = Field(..., ge=0, le=100)
    reason_tags: List[str] = Field(default_factory=list)
    breakdown: FeasibilityBreakdown = Field(default_factory=FeasibilityBreakdown)

    @computed_field
    @property
    def reason(self) -> str:
        return ", ".join(self.reason_tags)


# ============== Supplementary analytics ==============

class PerformanceMetrics(BaseModel):
    """System performance percentages shown on the analytics panel"""
    solar_capacity_factor_pct: float = 0.0
    wind_capacity_factor_pct: float = 0.0
    battery_efficiency_pct: float = 95.0
    grid_independence_pct: float = 0.0


class OptimizationHints(BaseModel):
    additional_solar_kw: float = 0.0
    optimal_battery_kwh: float = 0.0  # sized for 36-hour backup
    load_shift_kwh: float = 0.0


class EnergyMixEntry(BaseModel):
    name: Literal["Solar", "Wind", "Battery", "Grid"]
    value: float


class SavingsPoint(BaseModel):
    month: str
    savings: float  # cumulative


class WeatherData(BaseModel):
    temperature: float  # deg C
    humidity: float  # %
    clouds: float  # % cloud cover
    condition: str


class WeatherImpact(BaseModel):
    solar_efficiency: Literal["excellent", "good", "reduced"]
    wind_potential: Literal["favorable", "moderate", "limited"]


class Notice(BaseModel):
    """Non-blocking notification for the presentation layer"""
    type: Literal["warning", "info", "success"] = "info"
    code: str
    message: str


# ============== Requests / responses ==============

class BatteryRequest(BaseModel):
    capacity: float = Field(default=100.0, gt=0)
    current_charge: float = Field(default=75.0, ge=0)
    snapshot: Optional[EnergySnapshot] = None
    constants: Optional[ScoringConstants] = None  # service defaults when absent


class AnalysisRequest(BaseModel):
    """Full engine input; snapshot may be absent when no data has loaded yet"""
    snapshot: Optional[EnergySnapshot] = None
    battery: BatteryState = Field(default_factory=BatteryState)
    consumption: EnergyConsumptionProfile = Field(default_factory=EnergyConsumptionProfile)
    grid_cost_per_kwh: Optional[float] = Field(default=None, ge=0)  # service default when absent
    constants: Optional[ScoringConstants] = None  # service defaults when absent


class AnalysisResult(BaseModel):
    battery: BatteryState
    recommendations: List[Recommendation] = Field(default_factory=list)
    feasibility: Optional[FeasibilityResult] = None
    cost: Optional[CostAnalysis] = None
    carbon: Optional[CarbonFootprint] = None
    performance: Optional[PerformanceMetrics] = None
    optimization: Optional[OptimizationHints] = None
    energy_mix: List[EnergyMixEntry] = Field(default_factory=list)
    savings_projection: List[SavingsPoint] = Field(default_factory=list)
