"""
Forecast Visualization.

Fan charts of an observed history followed by the predictive distributions
returned by ``Stochastic.forecast``.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..dist import Normal


@dataclass
class ForecastPlotConfig:
    """Configuration for forecast fan charts."""
    figure_size: Tuple[float, float] = (10, 5)
    dpi: int = 100
    history_color: str = 'black'
    forecast_color: str = 'tab:blue'
    band_alpha: float = 0.25
    show_legend: bool = True


def forecast_bands(forecast: List[Normal], confidence: float) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Median, lower and upper quantile of each forecast step."""
    median = np.array([f.quantile(0.5) for f in forecast])
    bounds = np.array([f.interval(confidence) for f in forecast]).reshape(len(forecast), 2)
    return median, bounds[:, 0], bounds[:, 1]


def plot_forecast(history: Sequence[float],
                  forecast: List[Normal],
                  confidence: float = 0.9,
                  ax: Optional[plt.Axes] = None,
                  config: Optional[ForecastPlotConfig] = None) -> plt.Figure:
    """
    Plot an observed history with a forecast median and confidence band.
    
    Parameters
    ----------
    history : Sequence[float]
        Observed values, plotted at steps 0..len(history)-1
    forecast : List[Normal]
        Predictive distributions for the following steps
    confidence : float
        Probability mass covered by the shaded band
    ax : plt.Axes, optional
        Axes to draw on; a new figure is created when None
    config : ForecastPlotConfig, optional
        Styling options
        
    Returns
    -------
    plt.Figure
        Figure containing the chart
    """
    config = config or ForecastPlotConfig()
    if ax is None:
        fig, ax = plt.subplots(figsize=config.figure_size, dpi=config.dpi)
    else:
        fig = ax.figure
    
    history = np.asarray(history, dtype=float)
    t_history = np.arange(len(history))
    ax.plot(t_history, history, color=config.history_color, label='Observed')
    
    if forecast:
        t_forecast = np.arange(len(history), len(history) + len(forecast))
        median, lower, upper = forecast_bands(forecast, confidence)
        ax.plot(t_forecast, median, color=config.forecast_color, linestyle='--', label='Forecast')
        ax.fill_between(t_forecast, lower, upper, color=config.forecast_color,
                        alpha=config.band_alpha, label=f'{confidence:.0%} interval')
    
    ax.set_xlabel('Step')
    ax.set_ylabel('Value')
    ax.grid(True, alpha=0.3)
    if config.show_legend:
        ax.legend()
    
    return fig
