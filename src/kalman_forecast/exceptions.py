"""Error hierarchy shared by distributions, system descriptors and the filter."""

from scipy import linalg


class ForecastError(Exception):
    """Base class for all errors raised by kalman_forecast."""


class InvalidParameter(ForecastError, ValueError):
    """A distribution parameter, noise term or forecast horizon is out of range."""


class DimensionMismatch(ForecastError, ValueError):
    """Vector and matrix shapes disagree with the declared state dimension."""


class SingularInnovationCovariance(ForecastError, linalg.LinAlgError):
    """The innovation covariance S = C P C^T + R cannot be inverted."""
