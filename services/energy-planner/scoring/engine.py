"""
Scoring Engine
==============
Recommendation & feasibility scoring for a rural renewable setup.

Key features:
1. Rule-based recommendations (independent rules, declaration order kept)
2. Additive feasibility score from solar, wind, battery and reliability bands
3. Cost and carbon projection from the snapshot averages
4. No I/O and no state: every call recomputes everything from its inputs
"""

from typing import List, Optional, Tuple
from .models import (
    DEFAULT_GRID_COST,
    ScoringConstants,
    EnergySnapshot,
    BatteryState,
    EnergyConsumptionProfile,
    CostAnalysis,
    CarbonFootprint,
    Recommendation,
    RecommendationCategory,
    Priority,
    FeasibilityStatus,
    FeasibilityBreakdown,
    FeasibilityResult,
    AnalysisRequest,
    AnalysisResult,
)
from .battery import recompute_battery
from . import analytics


# Feasibility status cut-offs (inclusive lower bounds)
OPTIMAL_MIN_SCORE = 80
MODERATE_MIN_SCORE = 60

# Environmental rule fires above this carbon figure (see _environmental_rule)
ENVIRONMENTAL_THRESHOLD = 0.5


class ScoringEngine:
    """
    Stateless scoring engine.

    Outputs:
    1. RECOMMENDATIONS: solar, wind, economic, environmental, battery, grid rules
    2. FEASIBILITY: solar (max 40) + wind (max 30) + battery (max 20) + reliability (max 10)
    3. PROJECTION: cost analysis and carbon footprint

    Callers sort recommendations for presentation if they want to; the engine
    returns them in rule order.
    """

    def __init__(self, constants: Optional[ScoringConstants] = None):
        self.constants = constants or ScoringConstants()

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def generate_recommendations(
        self,
        snapshot: EnergySnapshot,
        battery: BatteryState,
        consumption: EnergyConsumptionProfile,
        cost: CostAnalysis,
    ) -> List[Recommendation]:
        """Evaluate every rule in order; each appends zero or one recommendation"""
        rules = (
            self._solar_rule,
            self._wind_rule,
            self._economic_rule,
            self._environmental_rule,
            self._battery_rule,
            self._grid_rule,
        )
        recs = []
        for rule in rules:
            rec = rule(snapshot, battery, consumption, cost)
            if rec is not None:
                recs.append(rec)
        return recs

    def _solar_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        if snapshot.solar.current > 5 and battery.percentage < 50:
            return Recommendation(
                category=RecommendationCategory.SOLAR,
                priority=Priority.CRITICAL,
                message=(
                    f"Excellent solar conditions ({snapshot.solar.current:.1f} kWh/m²/day) "
                    f"with battery at {battery.percentage:.0f}%"
                ),
                action="Charge battery during peak sunlight hours",
                impact_score=85,
                confidence_score=92,
            )
        return None

    def _wind_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        if snapshot.wind.current > 5 and battery.percentage < 70:
            return Recommendation(
                category=RecommendationCategory.WIND,
                priority=Priority.HIGH,
                message=f"Strong wind speeds available ({snapshot.wind.current:.1f} m/s)",
                action="Activate wind turbine charging",
                impact_score=70,
                confidence_score=88,
            )
        return None

    def _economic_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        if snapshot.solar.average > 4 and snapshot.wind.average > 3:
            savings = (
                (snapshot.solar.average + snapshot.wind.average)
                * cost.grid_cost_per_kwh
                * self.constants.derating_factor
            )
            return Recommendation(
                category=RecommendationCategory.ECONOMIC,
                priority=Priority.MEDIUM,
                message=(
                    f"Hybrid solar-wind system can save {self.constants.currency_symbol}"
                    f"{savings:.0f} per day"
                ),
                action="Invest in a combined solar and wind installation",
                impact_score=60,
                confidence_score=85,
            )
        return None

    def _environmental_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        # Value is demand * factor / 1000 but reported as kg; kept as-is.
        carbon_reduction = consumption.daily_demand * self.constants.grid_emission_factor / 1000
        if carbon_reduction > ENVIRONMENTAL_THRESHOLD:
            return Recommendation(
                category=RecommendationCategory.ENVIRONMENTAL,
                priority=Priority.MEDIUM,
                message=f"Switching to renewables avoids {carbon_reduction:.2f} kg CO₂ per day",
                action="Prioritise renewable supply for high-demand appliances",
                impact_score=90,
                confidence_score=95,
            )
        return None

    def _battery_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        if battery.percentage < 20:
            return Recommendation(
                category=RecommendationCategory.BATTERY,
                priority=Priority.CRITICAL,
                message=f"Critical battery level ({battery.percentage:.0f}%)",
                action="Switch to grid backup immediately",
                impact_score=100,
                confidence_score=100,
            )
        return None

    def _grid_rule(self, snapshot, battery, consumption, cost) -> Optional[Recommendation]:
        if snapshot.solar.current < 3 and snapshot.wind.current < 3:
            return Recommendation(
                category=RecommendationCategory.GRID,
                priority=Priority.HIGH,
                message="Low renewable energy availability",
                action="Reduce consumption or use grid backup",
                impact_score=45,
                confidence_score=80,
            )
        return None

    # ------------------------------------------------------------------
    # Feasibility
    # ------------------------------------------------------------------

    def score_feasibility(
        self, snapshot: Optional[EnergySnapshot], battery: BatteryState
    ) -> Optional[FeasibilityResult]:
        """
        Additive point system, first matching band wins per category.
        Returns None without a snapshot rather than a zero score.
        """
        if snapshot is None:
            return None

        solar, wind = snapshot.solar, snapshot.wind
        tags = []

        if solar.average > 6:
            solar_pts = 40
            tags.append("excellent solar availability")
        elif solar.average > 4:
            solar_pts = 25
            tags.append("good solar potential")
        else:
            solar_pts = 10
            tags.append("limited solar resources")

        if wind.average > 5:
            wind_pts = 30
            tags.append("strong wind resources")
        elif wind.average > 3:
            wind_pts = 20
            tags.append("moderate wind potential")
        else:
            wind_pts = 5
            tags.append("low wind availability")

        if battery.runtime > 12:
            battery_pts = 20
            tags.append("sufficient battery capacity")
        elif battery.runtime > 6:
            battery_pts = 15
            tags.append("adequate battery runtime")
        else:
            battery_pts = 5
            tags.append("limited battery capacity")

        reliability_pts = 0
        if solar.peak > 7 or wind.peak > 6:
            reliability_pts = 10
            tags.append("reliable energy peaks")

        score = solar_pts + wind_pts + battery_pts + reliability_pts

        return FeasibilityResult(
            status=self._status_for(score),
            score=score,
            reason_tags=tags,
            breakdown=FeasibilityBreakdown(
                solar_pts=solar_pts,
                wind_pts=wind_pts,
                battery_pts=battery_pts,
                reliability_pts=reliability_pts,
            ),
        )

    @staticmethod
    def _status_for(score: float) -> FeasibilityStatus:
        if score >= OPTIMAL_MIN_SCORE:
            return FeasibilityStatus.OPTIMAL
        if score >= MODERATE_MIN_SCORE:
            return FeasibilityStatus.MODERATE
        return FeasibilityStatus.NOT_RECOMMENDED

    # ------------------------------------------------------------------
    # Cost & carbon
    # ------------------------------------------------------------------

    def daily_renewable_generation(self, snapshot: EnergySnapshot) -> float:
        return (snapshot.solar.average + snapshot.wind.average) * self.constants.derating_factor

    def project(
        self,
        snapshot: EnergySnapshot,
        battery: BatteryState,
        consumption: EnergyConsumptionProfile,
        grid_cost_per_kwh: float,
    ) -> Tuple[CostAnalysis, CarbonFootprint]:
        """Cost analysis and carbon footprint for the current snapshot"""
        c = self.constants
        generation = self.daily_renewable_generation(snapshot)
        grid_usage = max(0.0, consumption.daily_demand - generation)
        daily_savings = (consumption.daily_demand - grid_usage) * grid_cost_per_kwh
        annual_savings = daily_savings * 365
        payback = c.system_cost / annual_savings if annual_savings > 0 else 0.0

        cost = CostAnalysis(
            grid_cost_per_kwh=grid_cost_per_kwh,
            renewable_savings_per_day=daily_savings,
            annual_savings=annual_savings,
            payback_period_years=payback,
        )

        renewable_reduction = generation * c.grid_emission_factor
        annual_carbon_savings = renewable_reduction * 365
        carbon = CarbonFootprint(
            current_emissions=consumption.daily_demand * c.grid_emission_factor,
            renewable_reduction_per_day=renewable_reduction,
            annual_savings=annual_carbon_savings,
            trees_equivalent_per_year=annual_carbon_savings / c.tree_absorption_kg,
        )
        return cost, carbon

    # ------------------------------------------------------------------
    # Full pass
    # ------------------------------------------------------------------

    def analyze(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Recompute battery, then every derived record.
        Without a snapshot only the battery is returned.
        """
        battery = recompute_battery(
            request.battery.capacity,
            request.battery.current_charge,
            request.snapshot,
            self.constants,
        )
        snapshot = request.snapshot
        if snapshot is None:
            return AnalysisResult(battery=battery)

        grid_cost = request.grid_cost_per_kwh
        if grid_cost is None:
            grid_cost = DEFAULT_GRID_COST
        cost, carbon = self.project(snapshot, battery, request.consumption, grid_cost)
        return AnalysisResult(
            battery=battery,
            recommendations=self.generate_recommendations(
                snapshot, battery, request.consumption, cost
            ),
            feasibility=self.score_feasibility(snapshot, battery),
            cost=cost,
            carbon=carbon,
            performance=analytics.performance_metrics(snapshot, battery, request.consumption),
            optimization=analytics.optimization_hints(snapshot, request.consumption),
            energy_mix=analytics.energy_mix(snapshot, battery, request.consumption),
            savings_projection=analytics.savings_projection(cost),
        )


def generate_recommendations(
    snapshot: EnergySnapshot,
    battery: BatteryState,
    consumption: EnergyConsumptionProfile,
    cost: CostAnalysis,
    constants: Optional[ScoringConstants] = None,
) -> List[Recommendation]:
    return ScoringEngine(constants).generate_recommendations(snapshot, battery, consumption, cost)


def score_feasibility(
    snapshot: Optional[EnergySnapshot],
    battery: BatteryState,
    constants: Optional[ScoringConstants] = None,
) -> Optional[FeasibilityResult]:
    return ScoringEngine(constants).score_feasibility(snapshot, battery)


def project(
    snapshot: EnergySnapshot,
    battery: BatteryState,
    consumption: EnergyConsumptionProfile,
    grid_cost_per_kwh: float,
    constants: Optional[ScoringConstants] = None,
) -> Tuple[CostAnalysis, CarbonFootprint]:
    """
    Project cost savings and carbon reduction.

    Example:
        from scoring.engine import project
        from scoring.models import EnergySnapshot, ResourceReading, BatteryState, EnergyConsumptionProfile

        snapshot = EnergySnapshot(
            solar=ResourceReading(current=5.2, average=5.0, peak=7.5),
            wind=ResourceReading(current=3.9, average=4.0, peak=6.1),
        )
        cost, carbon = project(snapshot, BatteryState(), EnergyConsumptionProfile(), 8.5)
        print(f"{cost.renewable_savings_per_day:.1f} per day, {carbon.trees_equivalent_per_year:.0f} trees")
    """
    return ScoringEngine(constants).project(snapshot, battery, consumption, grid_cost_per_kwh)
