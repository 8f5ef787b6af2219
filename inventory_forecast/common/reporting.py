"""
Reporting Module
================

Export forecasts in the formats the dashboard offers for download: the
per-period CSV and a JSON report with accuracy, metadata and insights.

Usage:
    from inventory_forecast.common import ForecastReporter

    reporter = ForecastReporter(output_dir="outputs/reports")
    reporter.save_csv(result)
    reporter.save_json(result, insights=summarize_forecast(result))
"""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd
from loguru import logger

from ..types import ForecastResult


CSV_HEADER = ['Date', 'Predicted Sales', 'Lower Bound', 'Upper Bound']


class ForecastReporter:
    """
    Report generation for forecast results.

    Example:
        >>> reporter = ForecastReporter(output_dir="outputs/reports")
        >>> paths = reporter.generate_forecast_report(result, insights)
        >>> print(paths['csv'])
    """

    def __init__(self, output_dir: str = "outputs/reports"):
        """
        Initialize ForecastReporter.

        Args:
            output_dir: Directory for saving reports
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"ForecastReporter initialized. Output: {self.output_dir}")

    @staticmethod
    def to_csv_frame(result: ForecastResult) -> pd.DataFrame:
        """Forecast points under the dashboard's CSV column names."""
        df = result.to_frame()
        df['ds'] = [point.date.isoformat() for point in result.points]
        df.columns = CSV_HEADER
        return df

    @classmethod
    def to_csv_text(cls, result: ForecastResult) -> str:
        """
        Render the forecast as CSV text.

        Example:
            >>> print(ForecastReporter.to_csv_text(result).splitlines()[0])
            Date,Predicted Sales,Lower Bound,Upper Bound
        """
        return cls.to_csv_frame(result).to_csv(index=False, lineterminator='\n')

    def save_csv(self, result: ForecastResult, report_date: Optional[date] = None) -> Path:
        """
        Save the forecast CSV as ``sales-forecast-YYYY-MM-DD.csv``.

        Args:
            result: Forecast to export
            report_date: Date in the file name (today if None)

        Returns:
            Path of the written file
        """
        report_date = report_date or date.today()
        csv_path = self.output_dir / f"sales-forecast-{report_date.isoformat()}.csv"

        self.to_csv_frame(result).to_csv(csv_path, index=False, lineterminator='\n')

        logger.info(f"Saved CSV report: {csv_path}")
        return csv_path

    def save_json(
        self,
        result: ForecastResult,
        insights: Optional[Any] = None,
        metrics: Optional[Dict[str, Any]] = None,
        report_name: str = "sales_forecast"
    ) -> Path:
        """
        Save the forecast, its metadata and optional insights as JSON.

        Args:
            result: Forecast to export
            insights: ForecastInsights (or a dict) to embed
            metrics: Extra error metrics to embed
            report_name: Base name for the file

        Returns:
            Path of the written file
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        json_path = self.output_dir / f"{report_name}_{timestamp}.json"

        json_data = result.to_dict()
        json_data['forecast_summary'] = {
            'periods': len(result),
            'start_date': result.points[0].date.isoformat() if result.points else None,
            'end_date': result.points[-1].date.isoformat() if result.points else None,
        }
        if insights is not None:
            json_data['insights'] = insights.to_dict() if hasattr(insights, 'to_dict') else insights
        if metrics:
            json_data['metrics'] = metrics

        with open(json_path, 'w') as f:
            json.dump(self._convert_to_serializable(json_data), f, indent=2)

        logger.info(f"Saved JSON report: {json_path}")
        return json_path

    def generate_forecast_report(
        self,
        result: ForecastResult,
        insights: Optional[Any] = None,
        metrics: Optional[Dict[str, Any]] = None,
        formats=('csv', 'json')
    ) -> Dict[str, Path]:
        """
        Write every requested report format.

        Returns:
            Dictionary of format -> file path
        """
        output_paths = {}

        if 'csv' in formats:
            output_paths['csv'] = self.save_csv(result)
        if 'json' in formats:
            output_paths['json'] = self.save_json(result, insights=insights, metrics=metrics)

        return output_paths

    def _convert_to_serializable(self, obj: Any) -> Any:
        """Convert numpy/pandas/date types to JSON serializable."""
        if isinstance(obj, dict):
            return {k: self._convert_to_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._convert_to_serializable(v) for v in obj]
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, pd.DataFrame):
            return obj.to_dict('records')
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        elif obj is None or isinstance(obj, (str, bool)):
            return obj
        elif isinstance(obj, float) and pd.isna(obj):
            return None
        else:
            return obj
