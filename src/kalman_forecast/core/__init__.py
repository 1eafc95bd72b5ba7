"""Core filtering algorithms.

- Linear-Gaussian Kalman filter steps (predict, observe, update)
- Random-walk-plus-noise stochastic model with forecasting
"""

from .kalman import (
    LinearSystem,
    predict,
    observe,
    update,
    log_likelihood,
    joseph_covariance
)
from .stochastic import Stochastic, DIFFUSE_PRIOR_COVARIANCE

__all__ = [
    # Kalman filtering
    'LinearSystem',
    'predict',
    'observe',
    'update',
    'log_likelihood',
    'joseph_covariance',
    
    # Models
    'Stochastic',
    'DIFFUSE_PRIOR_COVARIANCE'
]
