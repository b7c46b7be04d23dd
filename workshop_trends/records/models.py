"""
Data models for advisor workshop history.
"""

from typing import List, Dict, Any, Optional, Tuple
from datetime import date
from dataclasses import dataclass, field
import pandas as pd


def advisor_key(code: str, location: Optional[str]) -> str:
    """Build the composite identity string used to key stored advisors."""
    return f"{code}|{(location or '').strip()}"


def parse_advisor_key(key: str) -> Tuple[str, str]:
    """Split an advisor key back into (code, location)."""
    code, _, location = key.partition('|')
    return code, location


def coerce_number(value: Any) -> float:
    """Coerce a live form value to a number; blank or unparseable gives 0."""
    if value is None or value == '':
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if number != number or number in (float('inf'), float('-inf')):
        return 0
    return int(number) if number.is_integer() else number


@dataclass(frozen=True)
class WorkshopRecord:
    """One completed workshop for one advisor/location."""

    workshop_date: str
    feds_close: float = 0
    sps_close: float = 0
    fed_confirmed: float = 0
    sps_confirmed: float = 0
    feds_attended: float = 0
    sps_attended: float = 0
    walkins: float = 0
    total_yes: float = 0

    @property
    def is_completed(self) -> bool:
        """Placeholder and future columns have no close count or no attendance."""
        return self.feds_close > 0 and self.feds_attended > 0

    @property
    def date(self) -> date:
        return date.fromisoformat(self.workshop_date)

    @classmethod
    def from_dict(cls, data: Dict) -> 'WorkshopRecord':
        """Create WorkshopRecord instance from dictionary."""
        return cls(
            workshop_date=data['workshop_date'],
            feds_close=data.get('feds_close', 0),
            sps_close=data.get('sps_close', 0),
            fed_confirmed=data.get('fed_confirmed', 0),
            sps_confirmed=data.get('sps_confirmed', 0),
            feds_attended=data.get('feds_attended', 0),
            sps_attended=data.get('sps_attended', 0),
            walkins=data.get('walkins', 0),
            total_yes=data.get('total_yes', 0)
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'workshop_date': self.workshop_date,
            'feds_close': self.feds_close,
            'sps_close': self.sps_close,
            'fed_confirmed': self.fed_confirmed,
            'sps_confirmed': self.sps_confirmed,
            'feds_attended': self.feds_attended,
            'sps_attended': self.sps_attended,
            'walkins': self.walkins,
            'total_yes': self.total_yes
        }


@dataclass
class AdvisorRecord:
    """
    Workshop history owned by one (code, location) identity.

    Workshops are semantically keyed by date: merging a later paste replaces
    any workshop with the same date and keeps the rest, sorted by date.
    """

    code: str
    location: str = ''
    workshops: List[WorkshopRecord] = field(default_factory=list)

    @property
    def key(self) -> str:
        return advisor_key(self.code, self.location)

    def merge(self, workshops: List[WorkshopRecord]) -> None:
        """Merge workshops into the history, last write wins per date."""
        by_date = {ws.workshop_date: ws for ws in self.workshops}
        for ws in workshops:
            by_date[ws.workshop_date] = ws
        self.workshops = sorted(by_date.values(), key=lambda ws: ws.workshop_date)

    def to_dataframe(self) -> pd.DataFrame:
        """History table, newest workshop first, one row per workshop with stats."""
        # Local import: forecasting depends on this module for WorkshopRecord.
        from ..forecasting.models import compute_workshop_stats

        rows = []
        for ws in sorted(self.workshops, key=lambda w: w.workshop_date, reverse=True):
            stats = compute_workshop_stats(ws)
            if stats is None:
                continue
            rows.append({
                'date': ws.workshop_date,
                'reg_at_close': stats.total_reg_close,
                'confirmed': stats.total_confirmed,
                'attended': stats.total_attended,
                'walkins': stats.walkins,
                'confirmation_rate': stats.confirmation_rate,
                'show_rate': stats.effective_show_rate
            })
        columns = ['date', 'reg_at_close', 'confirmed', 'attended', 'walkins',
                   'confirmation_rate', 'show_rate']
        return pd.DataFrame(rows, columns=columns)

    @classmethod
    def from_dict(cls, data: Dict) -> 'AdvisorRecord':
        """Create AdvisorRecord instance from dictionary."""
        return cls(
            code=data['code'],
            location=data.get('location', ''),
            workshops=[WorkshopRecord.from_dict(ws) for ws in data.get('workshops', [])]
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'code': self.code,
            'location': self.location,
            'workshops': [ws.to_dict() for ws in self.workshops]
        }


@dataclass
class ForecastInput:
    """Live registration inputs for one advisor, independent of history."""

    current_feds: float = 0
    current_sps: float = 0
    target: float = 0

    @classmethod
    def from_dict(cls, data: Dict) -> 'ForecastInput':
        """Create ForecastInput from raw (possibly blank) form values."""
        return cls(
            current_feds=coerce_number(data.get('current_feds')),
            current_sps=coerce_number(data.get('current_sps')),
            target=coerce_number(data.get('target'))
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'current_feds': self.current_feds,
            'current_sps': self.current_sps,
            'target': self.target
        }
