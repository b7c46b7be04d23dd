"""
Advisor records module: data models, state manager and persistence.
"""

from .models import (
    WorkshopRecord,
    AdvisorRecord,
    ForecastInput,
    advisor_key,
    parse_advisor_key
)
from .storage import JsonFileStorage
from .manager import AdvisorManager, ImportResult, Recommendation

__all__ = [
    "WorkshopRecord",
    "AdvisorRecord",
    "ForecastInput",
    "advisor_key",
    "parse_advisor_key",
    "JsonFileStorage",
    "AdvisorManager",
    "ImportResult",
    "Recommendation"
]
