"""Probability distributions used as beliefs and forecast outputs."""

from .univariate import Normal, LogNormal
from .multivariate import MultivariateNormal

__all__ = [
    'Normal',
    'LogNormal',
    'MultivariateNormal'
]
