"""
Forecast Data Types
===================

Immutable value objects passed between the normalizer, the method
forecasters and the ensemble.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Tuple

import pandas as pd


@dataclass(frozen=True)
class Observation:
    """A single raw sales record: quantity sold on a date."""

    date: Any
    quantity: Any


@dataclass(frozen=True)
class SalesSeries:
    """
    Cleaned sales history: one summed value per distinct date, ascending.

    Attributes:
        dates: Strictly increasing calendar dates
        values: Summed quantity for each date
        dropped_rows: Number of raw rows discarded while cleaning
    """

    dates: Tuple[date, ...]
    values: Tuple[float, ...]
    dropped_rows: int = 0

    def __post_init__(self):
        if len(self.dates) != len(self.values):
            raise ValueError("dates and values must have the same length")
        if any(b <= a for a, b in zip(self.dates, self.dates[1:])):
            raise ValueError("dates must be strictly increasing")

    def __len__(self) -> int:
        return len(self.values)

    @property
    def last_date(self) -> date:
        return self.dates[-1]

    def to_frame(self) -> pd.DataFrame:
        """Return the series as a DataFrame with ``ds`` and ``y`` columns."""
        return pd.DataFrame({'ds': pd.to_datetime(list(self.dates)), 'y': list(self.values)})


@dataclass(frozen=True)
class ForecastPoint:
    """One future period: point estimate and interval."""

    date: date
    predicted: int
    lower: int
    upper: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'date': self.date.isoformat(),
            'predicted': self.predicted,
            'lower': self.lower,
            'upper': self.upper,
        }


@dataclass(frozen=True)
class BlendWeights:
    """Weights applied to the linear, exponential and seasonal predictions."""

    linear: float
    exponential: float
    seasonal: float
    label: str = 'default'

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.linear, self.exponential, self.seasonal)


@dataclass(frozen=True)
class ForecastResult:
    """
    The engine's output for one invocation.

    ``generated_at`` is informational and excluded from equality, so two
    runs over identical inputs compare equal.
    """

    points: Tuple[ForecastPoint, ...]
    accuracy: float
    method: str
    periods: int
    generated_at: datetime = field(compare=False, default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the result to plain JSON-compatible types.

        Returns:
            Dictionary with ``forecast``, ``accuracy``, ``generated_at``
            and ``metadata`` keys
        """
        return {
            'forecast': [point.to_dict() for point in self.points],
            'accuracy': round(self.accuracy, 2),
            'generated_at': self.generated_at.isoformat(),
            'metadata': {
                'periods': self.periods,
                'method': self.method,
            },
        }

    def to_frame(self) -> pd.DataFrame:
        """Return the forecast as a DataFrame with ds, yhat, yhat_lower, yhat_upper."""
        records: List[Dict[str, Any]] = [
            {
                'ds': pd.Timestamp(p.date),
                'yhat': p.predicted,
                'yhat_lower': p.lower,
                'yhat_upper': p.upper,
            }
            for p in self.points
        ]
        return pd.DataFrame(records, columns=['ds', 'yhat', 'yhat_lower', 'yhat_upper'])
