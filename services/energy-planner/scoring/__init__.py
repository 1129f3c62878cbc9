# Scoring Engine Module
# Recommendations, feasibility and cost/carbon projection for rural renewables

from .models import (
    ScoringConstants,
    EnergySample,
    ResourceReading,
    EnergySnapshot,
    BatteryState,
    Appliance,
    EnergyConsumptionProfile,
    CostAnalysis,
    CarbonFootprint,
    RecommendationCategory,
    Priority,
    Recommendation,
    FeasibilityStatus,
    FeasibilityBreakdown,
    FeasibilityResult,
    PerformanceMetrics,
    OptimizationHints,
    EnergyMixEntry,
    SavingsPoint,
    WeatherData,
    WeatherImpact,
    Notice,
    BatteryRequest,
    AnalysisRequest,
    AnalysisResult,
)
from .engine import ScoringEngine, generate_recommendations, score_feasibility, project
from .battery import recompute_battery

__all__ = [
    "ScoringConstants",
    "EnergySample",
    "ResourceReading",
    "EnergySnapshot",
    "BatteryState",
    "Appliance",
    "EnergyConsumptionProfile",
    "CostAnalysis",
    "CarbonFootprint",
    "RecommendationCategory",
    "Priority",
    "Recommendation",
    "FeasibilityStatus",
    "FeasibilityBreakdown",
    "FeasibilityResult",
    "PerformanceMetrics",
    "OptimizationHints",
    "EnergyMixEntry",
    "SavingsPoint",
    "WeatherData",
    "WeatherImpact",
    "Notice",
    "BatteryRequest",
    "AnalysisRequest",
    "AnalysisResult",
    "ScoringEngine",
    "generate_recommendations",
    "score_feasibility",
    "project",
    "recompute_battery",
]
