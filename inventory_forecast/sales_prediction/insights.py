"""
Forecast Insights Module
========================

Plain-language summary of a forecast for the product screens: trend
direction, projected volumes, peak period, and a confidence/risk level
derived from how wide the intervals are relative to the predictions.

Usage:
    from inventory_forecast.sales_prediction import summarize_forecast

    insights = summarize_forecast(result)
    print(insights.trend, insights.confidence_level, insights.recommendation)
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..types import ForecastResult
from .base import round_half_up


TREND_CHANGE_THRESHOLD = 5.0
LOW_CONFIDENCE_SPREAD = 0.3
MEDIUM_CONFIDENCE_SPREAD = 0.15

_LEVELS = {
    'low': {
        'confidence_level': 'Low',
        'risk_level': 'High',
        'recommendation': (
            "Because our predictions have a wide range of possibilities, we recommend being "
            "careful with your stock orders. It's better to order smaller amounts more "
            "frequently until we see clearer patterns."
        ),
        'confidence_description': (
            "Our predictions have a wider range of possible outcomes. This means we're less "
            "certain about exactly how many items will sell each period."
        ),
        'risk_description': (
            "There's higher uncertainty in the forecast, so there's more risk of having too much "
            "or too little stock. We recommend checking your sales frequently."
        ),
    },
    'medium': {
        'confidence_level': 'Medium',
        'risk_level': 'Medium',
        'recommendation': (
            "The forecast has moderate certainty. We suggest keeping a close watch on your actual "
            "sales and adjusting your stock levels as needed."
        ),
        'confidence_description': (
            "Our predictions are reasonably reliable, but there's still some uncertainty. The "
            "actual sales might be a bit higher or lower than predicted."
        ),
        'risk_description': (
            "Moderate risk level - monitor your sales regularly and be prepared to adjust your "
            "stock levels if sales change unexpectedly."
        ),
    },
    'high': {
        'confidence_level': 'High',
        'risk_level': 'Low',
        'recommendation': (
            "Our predictions are very reliable. You can confidently plan your stock orders based "
            "on these numbers."
        ),
        'confidence_description': (
            "We're very confident in these predictions. The actual sales should be quite close "
            "to what we've forecasted."
        ),
        'risk_description': (
            "Low risk - you can make stock decisions based on this forecast. The predictions "
            "are stable and reliable."
        ),
    },
}

_TREND_SUFFIX = {
    'up': " Since sales are trending upward, consider gradually increasing your stock levels to meet the growing demand.",
    'down': " Since sales are trending downward, be cautious about ordering too much stock to avoid excess inventory.",
    'stable': "",
}


@dataclass(frozen=True)
class ForecastInsights:
    """Summary of a forecast for display alongside the chart."""

    trend: str
    trend_percentage: int
    average_predicted: int
    total_predicted: int
    peak_date: Optional[date]
    peak_predicted: Optional[int]
    relative_spread: Optional[float]
    confidence_level: str
    risk_level: str
    trend_description: str
    confidence_description: str
    risk_description: str
    recommendation: str

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['peak_date'] = self.peak_date.isoformat() if self.peak_date else None
        return data


def forecast_trend(result: ForecastResult) -> Dict[str, Any]:
    """
    Direction of the forecast from its first to its last point.

    Returns:
        Dictionary with ``trend`` ('up', 'down' or 'stable') and the
        rounded ``percentage`` change
    """
    if len(result.points) < 2:
        return {'trend': 'stable', 'percentage': 0}

    first = result.points[0].predicted
    last = result.points[-1].predicted
    if first == 0:
        return {'trend': 'stable', 'percentage': 0}

    change = (last - first) / first * 100
    percentage = round_half_up(change)

    if change > TREND_CHANGE_THRESHOLD:
        return {'trend': 'up', 'percentage': percentage}
    if change < -TREND_CHANGE_THRESHOLD:
        return {'trend': 'down', 'percentage': percentage}
    return {'trend': 'stable', 'percentage': percentage}


def _trend_description(trend: str, percentage: int) -> str:
    if trend == 'up':
        return f"Your sales are predicted to grow by about {abs(percentage)}% over the forecast period."
    if trend == 'down':
        return (
            f"Your sales are predicted to decrease by about {abs(percentage)}% over the forecast period. "
            "You might want to consider promotions or marketing to boost sales."
        )
    return "Your sales are predicted to stay relatively stable over the forecast period."


def summarize_forecast(result: ForecastResult) -> ForecastInsights:
    """
    Build display insights for a forecast.

    The confidence level comes from the mean of
    ``(upper - lower) / predicted`` across points: above 0.3 is Low,
    above 0.15 is Medium, otherwise High.

    Args:
        result: Forecast to summarize

    Returns:
        ForecastInsights
    """
    if not result.points:
        return ForecastInsights(
            trend='stable',
            trend_percentage=0,
            average_predicted=0,
            total_predicted=0,
            peak_date=None,
            peak_predicted=None,
            relative_spread=None,
            confidence_level='Unknown',
            risk_level='Unknown',
            trend_description="We need forecast data to show you the sales trend.",
            confidence_description="Confidence level will be calculated once a forecast is generated.",
            risk_description="Risk assessment requires forecast data.",
            recommendation="Please generate a forecast first to see insights and recommendations.",
        )

    predicted = [p.predicted for p in result.points]
    total = sum(predicted)
    peak = max(result.points, key=lambda p: p.predicted)

    spread = sum((p.upper - p.lower) / p.predicted for p in result.points if p.predicted) / len(result.points)

    if spread > LOW_CONFIDENCE_SPREAD:
        level = _LEVELS['low']
    elif spread > MEDIUM_CONFIDENCE_SPREAD:
        level = _LEVELS['medium']
    else:
        level = _LEVELS['high']

    trend = forecast_trend(result)

    return ForecastInsights(
        trend=trend['trend'],
        trend_percentage=trend['percentage'],
        average_predicted=round_half_up(total / len(predicted)),
        total_predicted=total,
        peak_date=peak.date,
        peak_predicted=peak.predicted,
        relative_spread=spread,
        confidence_level=level['confidence_level'],
        risk_level=level['risk_level'],
        trend_description=_trend_description(trend['trend'], trend['percentage']),
        confidence_description=level['confidence_description'],
        risk_description=level['risk_description'],
        recommendation=level['recommendation'] + _TREND_SUFFIX[trend['trend']],
    )
