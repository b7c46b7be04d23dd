"""
Advisor Manager for workshop history and live forecast inputs.

Owns the two keyed mappings the forecast screen works from:
1. advisors: advisor key -> AdvisorRecord (history merged by workshop date)
2. forecasts: advisor key -> ForecastInput (live registrations and target)

Every mutation is applied in full before it is persisted, and a failed
import leaves both mappings untouched.
"""

import logging
from typing import List, Dict, Union
from datetime import date, datetime
from dataclasses import dataclass
import pandas as pd

from ..config import Config
from .models import AdvisorRecord, ForecastInput, advisor_key
from ..parsing import parse_advisor_block
from ..forecasting.models import ForecastingEngine, ForecastDecision

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of importing one pasted block."""
    key: str
    code: str
    location: str
    is_new: bool
    workshop_count: int

    @property
    def message(self) -> str:
        verb = 'Added' if self.is_new else 'Updated'
        return (f"{verb} {self.code} ({self.location}) - "
                f"{self.workshop_count} completed workshop(s).")

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'key': self.key,
            'code': self.code,
            'location': self.location,
            'is_new': self.is_new,
            'workshop_count': self.workshop_count,
            'message': self.message
        }


@dataclass
class Recommendation:
    """Forecast row for one advisor."""
    key: str
    code: str
    location: str
    workshop_count: int
    show_rate: float
    avg_walkins: float
    inputs: ForecastInput
    decision: ForecastDecision

    @property
    def result(self) -> str:
        return self.decision.summary(self.code, self.location)

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'key': self.key,
            'code': self.code,
            'location': self.location,
            'workshop_count': self.workshop_count,
            'show_rate': self.show_rate,
            'avg_walkins': self.avg_walkins,
            'inputs': self.inputs.to_dict(),
            **self.decision.to_dict(),
            'result': self.result
        }


class AdvisorManager:
    """
    Manages advisor histories and forecast inputs with optional persistence.

    The parser and forecasting functions stay pure; this class is the only
    place state is read, mutated and saved.
    """

    def __init__(self, storage=None, default_target: float = None):
        """
        Initialize manager.

        Args:
            storage: Object with load()/save(advisors, forecasts), or None
                for an in-memory store
            default_target: Target given to newly imported advisors
                (default: Config.default_target())
        """
        self.storage = storage
        if default_target is None:
            default_target = Config.default_target()
        self.default_target = default_target
        self.reset_state()

    def reset_state(self) -> None:
        """Drop all advisors and forecast inputs (not persisted)."""
        self.advisors: Dict[str, AdvisorRecord] = {}
        self.forecasts: Dict[str, ForecastInput] = {}

    def load(self) -> None:
        """Replace state with what storage holds."""
        if self.storage is None:
            return
        advisors, forecasts = self.storage.load()
        self.load_state({'advisors': advisors, 'forecasts': forecasts})

    def load_state(self, state: Dict) -> None:
        """
        Load existing state from its dictionary form.

        Args:
            state: Dictionary with 'advisors' and 'forecasts' mappings
        """
        self.advisors = {
            key: AdvisorRecord.from_dict(data)
            for key, data in state.get('advisors', {}).items()
        }
        self.forecasts = {
            key: ForecastInput.from_dict(data)
            for key, data in state.get('forecasts', {}).items()
        }

    def get_state(self) -> Dict:
        """Get current state for persistence."""
        return {
            'advisors': {key: adv.to_dict() for key, adv in self.advisors.items()},
            'forecasts': {key: fc.to_dict() for key, fc in self.forecasts.items()}
        }

    def save(self) -> None:
        if self.storage is None:
            return
        state = self.get_state()
        self.storage.save(state['advisors'], state['forecasts'])

    def _get_advisor(self, key: str) -> AdvisorRecord:
        if key not in self.advisors:
            raise KeyError(f"Unknown advisor: {key}")
        return self.advisors[key]

    def import_block(self, text: str) -> ImportResult:
        """
        Parse a pasted block and merge it into the matching advisor.

        Args:
            text: Raw tab-separated text copied from the sheet

        Returns:
            ImportResult describing what was added or updated

        Raises:
            BlockParseError: If the block cannot be parsed; state is unchanged
        """
        parsed = parse_advisor_block(text)
        key = advisor_key(parsed.code, parsed.location)
        is_new = key not in self.advisors

        if is_new:
            advisor = AdvisorRecord(code=parsed.code, location=parsed.location)
            advisor.merge(parsed.workshops)
            self.advisors[key] = advisor
        else:
            self.advisors[key].merge(parsed.workshops)

        if key not in self.forecasts:
            self.forecasts[key] = ForecastInput(target=self.default_target)

        self.save()
        result = ImportResult(
            key=key,
            code=parsed.code,
            location=parsed.location,
            is_new=is_new,
            workshop_count=len(parsed.workshops)
        )
        logger.info(result.message)
        return result

    def delete_advisor(self, key: str) -> None:
        """Remove an advisor's history and forecast inputs."""
        self._get_advisor(key)
        del self.advisors[key]
        self.forecasts.pop(key, None)
        self.save()
        logger.info(f"Deleted advisor {key}")

    def update_forecast_input(self, key: str, **values) -> ForecastInput:
        """
        Set live inputs for an advisor; fields not given keep their value.

        Args:
            key: Advisor key
            **values: Any of current_feds, current_sps, target (raw values,
                blank or unparseable become 0)

        Returns:
            The updated ForecastInput
        """
        self._get_advisor(key)
        current = self.get_forecast_input(key).to_dict()
        current.update({k: v for k, v in values.items() if k in current})
        self.forecasts[key] = ForecastInput.from_dict(current)
        self.save()
        return self.forecasts[key]

    def get_forecast_input(self, key: str) -> ForecastInput:
        return self.forecasts.get(key) or ForecastInput(target=self.default_target)

    def get_engine(self, key: str) -> ForecastingEngine:
        return ForecastingEngine(self._get_advisor(key).workshops)

    def recommend(self, key: str, now: Union[date, datetime, None] = None) -> Recommendation:
        """Forecast decision for one advisor at its current inputs."""
        advisor = self._get_advisor(key)
        inputs = self.get_forecast_input(key)
        engine = ForecastingEngine(advisor.workshops)
        weighted = engine.recency_weighted(now)
        decision = engine.forecast(inputs.current_feds, inputs.current_sps, inputs.target, now)
        return Recommendation(
            key=key,
            code=advisor.code,
            location=advisor.location,
            workshop_count=len(advisor.workshops),
            show_rate=weighted.show_rate,
            avg_walkins=weighted.avg_walkins,
            inputs=inputs,
            decision=decision
        )

    def recommendations(self, now: Union[date, datetime, None] = None) -> List[Recommendation]:
        """Recommendations for every advisor, in key order."""
        return [self.recommend(key, now) for key in sorted(self.advisors)]

    def get_history(self, key: str) -> pd.DataFrame:
        return self._get_advisor(key).to_dataframe()

    def get_advisor_info(self) -> Dict:
        """Get information about stored advisors."""
        keys = sorted(self.advisors)
        return {
            'total_advisors': len(keys),
            'total_workshops': sum(len(self.advisors[k].workshops) for k in keys),
            'advisors': [
                {
                    'key': k,
                    'code': self.advisors[k].code,
                    'location': self.advisors[k].location,
                    'workshop_count': len(self.advisors[k].workshops)
                }
                for k in keys
            ]
        }
