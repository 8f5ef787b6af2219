#!/usr/bin/env python3
"""
Inventory Forecast - Main Runner
================================

Command-line interface for forecasting weekly sales from an exported
sales sheet.

Usage:
    python run_forecast.py --data data/sales-template.csv
    python run_forecast.py --data uploads/sales.xlsx --horizon 12 --product PROD001
    python run_forecast.py --data data/sales.csv --config config/settings.yaml --output outputs

Examples:
    # Eight-week forecast for every product combined
    python run_forecast.py --data data/sales-template.csv

    # Sixteen-week forecast for one product, with debug logging
    python run_forecast.py --data data/sales.csv --product PROD002 --horizon 16 --log-level DEBUG
"""

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt
from loguru import logger

from inventory_forecast.common import (
    ForecastReporter,
    ForecastVisualizer,
    SalesDataLoader,
    SeriesNormalizer,
)
from inventory_forecast.config import ForecastConfig, load_settings
from inventory_forecast.exceptions import ForecastError
from inventory_forecast.sales_prediction import (
    EnsembleForecaster,
    ForecastEvaluator,
    summarize_forecast,
)

HORIZON_PRESETS = (4, 8, 12, 16)
DEFAULT_HORIZON = 8


def setup_logging(log_level: str = "INFO"):
    """Configure logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>"
    )


def run_forecast(args, config: ForecastConfig) -> dict:
    """Run the sales forecasting pipeline."""
    logger.info("Starting Sales Forecasting Pipeline")

    loader = SalesDataLoader()
    observations = loader.load(args.data, product_id=args.product)
    summary = loader.get_data_summary(observations)
    logger.info(
        f"{summary['records']} records across {summary['products']} products "
        f"({summary['start_date']} to {summary['end_date']})"
    )

    series = SeriesNormalizer(config).normalize(observations)

    ensemble = EnsembleForecaster(config)
    result = ensemble.forecast(series, args.horizon)

    weights = ensemble.analyze(series)['weights']
    metrics = ForecastEvaluator(config).calculate_metrics(
        list(series.values), ensemble.fitted(series, weights)
    )
    logger.info(f"In-sample fit: MAE={metrics['mae']:.2f}, RMSE={metrics['rmse']:.2f}")

    insights = summarize_forecast(result)
    logger.info(f"Trend: {insights.trend} ({insights.trend_percentage}%), confidence: {insights.confidence_level}")

    viz = ForecastVisualizer(output_dir=args.output)
    fig = viz.plot_forecast(series, result, save_name='sales_forecast')
    plt.close(fig)

    reporter = ForecastReporter(output_dir=args.output)
    paths = reporter.generate_forecast_report(result, insights=insights, metrics=metrics)

    logger.info(f"Forecast complete. Results saved to {args.output}")
    return {
        'result': result,
        'insights': insights,
        'metrics': metrics,
        'paths': paths,
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Inventory Sales Forecast',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--data',
        type=str,
        required=True,
        help='Path to sales sheet (.csv, .xlsx, .xls)'
    )

    parser.add_argument(
        '--horizon',
        type=int,
        default=DEFAULT_HORIZON,
        help=f'Number of weekly periods to forecast (presets: {", ".join(map(str, HORIZON_PRESETS))})'
    )

    parser.add_argument(
        '--product',
        type=str,
        default=None,
        help='Only forecast rows for this product ID'
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config/settings.yaml',
        help='Path to configuration file'
    )

    parser.add_argument(
        '--output',
        type=str,
        default='outputs',
        help='Output directory for results'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        default=None,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (overrides the config file)'
    )

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    setup_logging(args.log_level or (settings.get('logging') or {}).get('level', 'INFO'))

    try:
        config = ForecastConfig.from_dict(settings)
        Path(args.output).mkdir(parents=True, exist_ok=True)
        run_forecast(args, config)
    except (ForecastError, FileNotFoundError) as e:
        logger.error(f"Forecast failed: {e}")
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
