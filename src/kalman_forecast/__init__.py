"""
Kalman Forecast - online Bayesian state estimation and forecasting.

Tracks a scalar value observed with noise using a random-walk-plus-noise
Kalman filter, and projects the current belief forward as a sequence of
predictive normal distributions.
"""

__version__ = "0.1.0"

from .exceptions import (
    ForecastError,
    InvalidParameter,
    DimensionMismatch,
    SingularInnovationCovariance
)
from .dist import Normal, LogNormal, MultivariateNormal
from .core import LinearSystem, Stochastic, predict, observe, update, log_likelihood

__all__ = [
    'ForecastError',
    'InvalidParameter',
    'DimensionMismatch',
    'SingularInnovationCovariance',
    'Normal',
    'LogNormal',
    'MultivariateNormal',
    'LinearSystem',
    'Stochastic',
    'predict',
    'observe',
    'update',
    'log_likelihood'
]
