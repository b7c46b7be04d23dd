"""
Forecasting module for workshop attendance.
"""

from .models import (
    ForecastingEngine,
    WorkshopStats,
    RecencyWeighted,
    ForecastDecision,
    compute_workshop_stats,
    compute_recency_weighted,
    forecast_decision
)

__all__ = [
    "ForecastingEngine",
    "WorkshopStats",
    "RecencyWeighted",
    "ForecastDecision",
    "compute_workshop_stats",
    "compute_recency_weighted",
    "forecast_decision"
]
