"""Visualization of filter output."""

from .forecast_plot import ForecastPlotConfig, forecast_bands, plot_forecast

__all__ = [
    'ForecastPlotConfig',
    'forecast_bands',
    'plot_forecast'
]
