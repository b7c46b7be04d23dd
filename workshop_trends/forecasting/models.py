"""
Forecasting models for workshop attendance.

Show rates are decomposed into confirmed and unconfirmed cohorts per
workshop, blended across an advisor's history with inverse-age weights,
and inverted to find the registration count at which to close a workshop.
"""

from typing import List, Dict, Any, Optional, Union
from datetime import date, datetime
import math
import numpy as np
import pandas as pd
from dataclasses import dataclass
from sklearn.metrics import mean_absolute_error, mean_squared_error

from ..records.models import WorkshopRecord


@dataclass
class WorkshopStats:
    """Show-rate decomposition of one completed workshop."""
    total_reg_close: float
    total_confirmed: float
    total_attended: float
    walkins: float
    confirmation_rate: float
    attendance_of_confirmed: float
    unconfirmed_count: float
    unconfirmed_show_rate: float
    effective_show_rate: float


@dataclass
class RecencyWeighted:
    """History blended with 1/days weights."""
    show_rate: float
    avg_walkins: float


@dataclass
class ForecastDecision:
    """Close/keep-open decision for the live registration count."""
    total_reg: float
    expected_attendance: float
    close_at: int
    should_close: bool
    has_data: bool

    @property
    def verdict(self) -> Optional[str]:
        if not self.has_data:
            return None
        return 'CLOSE' if self.should_close else 'KEEP OPEN'

    def summary(self, code: str, location: str) -> str:
        """One-line recommendation, empty when there is no decision to make."""
        if not self.has_data:
            return ''
        relation = 'at/above' if self.should_close else 'below'
        return (f"{code} {location}: {_fmt(self.total_reg)} is {relation} "
                f"{self.close_at}: {self.verdict}")

    def to_dict(self) -> Dict:
        """Convert to dictionary representation."""
        return {
            'total_reg': self.total_reg,
            'expected_attendance': self.expected_attendance,
            'close_at': self.close_at,
            'should_close': self.should_close,
            'has_data': self.has_data,
            'verdict': self.verdict
        }


def _fmt(number: float) -> str:
    return str(int(number)) if float(number).is_integer() else f"{number:g}"


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def compute_workshop_stats(ws: WorkshopRecord) -> Optional[WorkshopStats]:
    """
    Decompose a workshop's attendance into confirmed and unconfirmed show rates.

    Returns None when nobody was registered at close.
    """
    total_reg_close = ws.feds_close + ws.sps_close
    if total_reg_close == 0:
        return None
    total_confirmed = ws.fed_confirmed + ws.sps_confirmed
    total_attended = ws.feds_attended + ws.sps_attended

    confirmation_rate = total_confirmed / total_reg_close if total_confirmed > 0 else 0
    attendance_of_confirmed = total_attended / total_confirmed if total_confirmed > 0 else 0

    unconfirmed_count = total_reg_close - total_confirmed
    unconfirmed_show_rate = 0
    if unconfirmed_count > 0 and total_confirmed > 0:
        # Back out walk-ins and what confirmed registrants already explain
        unconfirmed_show_rate = (
            (total_attended - ws.walkins) - total_confirmed * attendance_of_confirmed
        ) / unconfirmed_count

    effective_show_rate = (
        confirmation_rate * attendance_of_confirmed
        + (1 - confirmation_rate) * unconfirmed_show_rate
    )
    if not math.isfinite(effective_show_rate):
        effective_show_rate = (total_attended - ws.walkins) / total_reg_close

    return WorkshopStats(
        total_reg_close=total_reg_close,
        total_confirmed=total_confirmed,
        total_attended=total_attended,
        walkins=ws.walkins,
        confirmation_rate=confirmation_rate,
        attendance_of_confirmed=attendance_of_confirmed,
        unconfirmed_count=unconfirmed_count,
        unconfirmed_show_rate=unconfirmed_show_rate,
        effective_show_rate=effective_show_rate
    )


def compute_recency_weighted(workshops: List[WorkshopRecord],
                             now: Union[date, datetime, None] = None) -> RecencyWeighted:
    """
    Blend show rate and walk-ins across workshops held before ``now``.

    A workshop held d days ago weighs 1/(d+1); workshops on or after
    ``now``'s date are ignored.
    """
    today = _as_date(now or datetime.now())
    sr_num = sr_den = wk_num = wk_den = 0.0

    for ws in workshops:
        stats = compute_workshop_stats(ws)
        if stats is None:
            continue
        ws_date = _as_date(ws.workshop_date)
        if ws_date >= today:
            continue
        weight = 1 / ((today - ws_date).days + 1)
        if math.isfinite(stats.effective_show_rate):
            sr_num += stats.effective_show_rate * weight
            sr_den += weight
        wk_num += stats.walkins * weight
        wk_den += weight

    return RecencyWeighted(
        show_rate=sr_num / sr_den if sr_den > 0 else 0,
        avg_walkins=wk_num / wk_den if wk_den > 0 else 0
    )


def forecast_decision(show_rate: float,
                      avg_walkins: float,
                      current_feds: float,
                      current_sps: float,
                      target: float) -> ForecastDecision:
    """
    Decide whether current registrations already reach the attendance target.

    ``close_at`` solves ``reg * show_rate + avg_walkins >= target`` for reg.
    """
    total_reg = current_feds + current_sps
    expected = total_reg * show_rate + avg_walkins if total_reg > 0 else 0
    close_at = 0
    if target > 0 and show_rate > 0:
        close_at = math.ceil(max(0, (target - avg_walkins) / show_rate))
    return ForecastDecision(
        total_reg=total_reg,
        expected_attendance=expected,
        close_at=close_at,
        should_close=total_reg > 0 and close_at > 0 and total_reg >= close_at,
        has_data=total_reg > 0 and target > 0
    )


class ForecastingEngine:
    """
    Attendance forecasting over one advisor's workshop history.

    Wraps the pure functions above with loaded history, a backtest and
    model information for the API.
    """

    def __init__(self, workshops: Optional[List[WorkshopRecord]] = None):
        self._workshops = None
        if workshops is not None:
            self.load_history(workshops)

    def load_history(self, workshops: List[WorkshopRecord]) -> None:
        """
        Load workshop history for forecasting.

        Args:
            workshops: Completed workshops, in any order
        """
        self._workshops = sorted(workshops, key=lambda ws: ws.workshop_date)

    def _require_history(self) -> List[WorkshopRecord]:
        if self._workshops is None:
            raise ValueError("Workshop history not loaded. Call load_history() first.")
        return self._workshops

    def recency_weighted(self, now: Union[date, datetime, None] = None) -> RecencyWeighted:
        return compute_recency_weighted(self._require_history(), now)

    def forecast(self,
                 current_feds: float = 0,
                 current_sps: float = 0,
                 target: float = 0,
                 now: Union[date, datetime, None] = None) -> ForecastDecision:
        """
        Forecast attendance for the live registration count.

        Args:
            current_feds: Federal employees registered so far
            current_sps: Spouses registered so far
            target: Attendance target
            now: Reference time (default: now)

        Returns:
            ForecastDecision for the current inputs
        """
        weighted = self.recency_weighted(now)
        return forecast_decision(weighted.show_rate, weighted.avg_walkins,
                                 current_feds, current_sps, target)

    def evaluate_model(self) -> Dict[str, Any]:
        """
        Backtest attendance predictions against actual history.

        Each workshop with earlier history is predicted from the earlier
        workshops only, using its registration at close.

        Returns:
            Dictionary with evaluation metrics (MAE, RMSE, MAPE) and sample count
        """
        history = self._require_history()
        actual_values, predictions = [], []

        for i, ws in enumerate(history):
            stats = compute_workshop_stats(ws)
            earlier = history[:i]
            if stats is None or not earlier:
                continue
            weighted = compute_recency_weighted(earlier, ws.date)
            predictions.append(stats.total_reg_close * weighted.show_rate + weighted.avg_walkins)
            actual_values.append(stats.total_attended)

        if not actual_values:
            return {'samples': 0, 'mae': None, 'rmse': None, 'mape': None}

        actual = np.array(actual_values, dtype=float)
        predicted = np.array(predictions, dtype=float)
        mae = mean_absolute_error(actual, predicted)
        rmse = np.sqrt(mean_squared_error(actual, predicted))
        nonzero = actual != 0
        mape = (np.mean(np.abs((actual[nonzero] - predicted[nonzero]) / actual[nonzero])) * 100
                if nonzero.any() else None)

        return {
            'samples': len(actual_values),
            'mae': float(mae),
            'rmse': float(rmse),
            'mape': float(mape) if mape is not None else None
        }

    def to_dataframe(self, now: Union[date, datetime, None] = None) -> pd.DataFrame:
        """Per-workshop stats with the recency weight each one carries at ``now``."""
        today = _as_date(now or datetime.now())
        rows = []
        for ws in self._require_history():
            stats = compute_workshop_stats(ws)
            if stats is None:
                continue
            ws_date = ws.date
            weight = 1 / ((today - ws_date).days + 1) if ws_date < today else 0.0
            rows.append({
                'date': ws_date,
                'effective_show_rate': stats.effective_show_rate,
                'walkins': stats.walkins,
                'weight': weight
            })
        return pd.DataFrame(rows, columns=['date', 'effective_show_rate', 'walkins', 'weight'])

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about loaded history."""
        loaded = self._workshops is not None
        return {
            'weighting': 'inverse_days',
            'data_loaded': loaded,
            'data_points': len(self._workshops) if loaded else 0,
            'date_range': {
                'start': self._workshops[0].workshop_date,
                'end': self._workshops[-1].workshop_date
            } if loaded and self._workshops else None
        }
