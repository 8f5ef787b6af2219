"""
Visualization Module
====================

Forecast chart for the product screens: the sales history, the blended
forecast and its interval band.

Usage:
    from inventory_forecast.common import ForecastVisualizer

    viz = ForecastVisualizer(output_dir="outputs/plots")
    viz.plot_forecast(series, result, save_name="prod001_forecast")
"""

from pathlib import Path
from typing import Optional, Tuple

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
from loguru import logger

from ..types import ForecastResult, SalesSeries


class ForecastVisualizer:
    """
    Static forecast charts with consistent styling.

    Example:
        >>> viz = ForecastVisualizer(output_dir="outputs/plots")
        >>> fig = viz.plot_forecast(series, result)
    """

    def __init__(
        self,
        output_dir: str = "outputs/plots",
        style: str = "seaborn-v0_8-whitegrid",
        figsize: Tuple[int, int] = (12, 6),
        dpi: int = 100,
        palette: str = "husl"
    ):
        """
        Initialize ForecastVisualizer.

        Args:
            output_dir: Directory for saving plots
            style: Matplotlib style
            figsize: Default figure size
            dpi: Resolution for saved figures
            palette: Color palette
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.figsize = figsize
        self.dpi = dpi

        try:
            plt.style.use(style)
        except OSError:
            logger.warning(f"Unknown matplotlib style '{style}', using default")

        sns.set_palette(palette)
        logger.info(f"ForecastVisualizer initialized. Output: {self.output_dir}")

    def plot_forecast(
        self,
        series: SalesSeries,
        result: ForecastResult,
        title: str = "Sales Forecast",
        save_name: Optional[str] = None
    ):
        """
        Plot history, forecast and interval band.

        Args:
            series: Normalized sales history
            result: Forecast produced from that history
            title: Plot title
            save_name: Filename (without extension) for saving the plot

        Returns:
            The matplotlib Figure
        """
        history = series.to_frame()
        forecast = result.to_frame()

        fig, ax = plt.subplots(figsize=self.figsize)

        ax.plot(history['ds'], history['y'], label='Actual', linewidth=2)

        if not forecast.empty:
            ax.plot(
                forecast['ds'],
                forecast['yhat'],
                label='Forecast',
                linestyle='--',
                linewidth=2
            )
            ax.fill_between(
                forecast['ds'],
                forecast['yhat_lower'],
                forecast['yhat_upper'],
                alpha=0.3,
                label='Range'
            )

        ax.set_xlabel('Date', fontsize=12)
        ax.set_ylabel('Units Sold', fontsize=12)
        ax.set_title(f"{title} ({result.accuracy:.1f}% accuracy)", fontsize=14, fontweight='bold')
        ax.legend()
        ax.grid(True, alpha=0.3)

        fig.autofmt_xdate()
        fig.tight_layout()

        if save_name:
            save_path = self.output_dir / f"{save_name}.png"
            fig.savefig(save_path, dpi=self.dpi, bbox_inches='tight')
            logger.info(f"Saved plot: {save_path}")

        return fig
