"""
Workshop Trend Calculator

Parses advisor stats blocks pasted from a spreadsheet and forecasts
attendance to decide when to close a workshop's registration.
"""

# records first: parsing and forecasting import its models
from .records import AdvisorManager, AdvisorRecord, WorkshopRecord, ForecastInput
from .parsing import parse_advisor_block, BlockParseError
from .forecasting import ForecastingEngine

__version__ = "0.1.0"

__all__ = [
    "AdvisorManager",
    "AdvisorRecord",
    "WorkshopRecord",
    "ForecastInput",
    "parse_advisor_block",
    "BlockParseError",
    "ForecastingEngine"
]
