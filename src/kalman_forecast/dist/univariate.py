"""Univariate normal and log-normal distributions.

Both distributions are immutable once constructed. ``LogNormal`` is defined
through an underlying ``Normal`` over log-space, so its quantile function is
``exp`` of the normal quantile rather than a separate implementation.

Quantile boundary behaviour: ``p = 0`` maps to the lower end of the support
(``-inf`` for Normal, ``0`` for LogNormal), ``p = 1`` maps to ``+inf``, and any
``p`` outside ``[0, 1]`` (or NaN) raises ``InvalidParameter``.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

import numpy as np
from scipy import stats

from ..exceptions import InvalidParameter

ArrayLike = Union[float, np.ndarray]


def _check_parameters(location: float, scale: float) -> Tuple[float, float]:
    """Coerce (location, scale) to floats and enforce finite location, scale > 0."""
    try:
        location = float(location)
        scale = float(scale)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"location and scale must be real numbers: {exc}") from exc

    if not np.isfinite(location):
        raise InvalidParameter(f"location must be finite, got {location}")
    if not np.isfinite(scale) or scale <= 0:
        raise InvalidParameter(f"scale must be finite and positive, got {scale}")
    return location, scale


def _check_probability(p: ArrayLike) -> np.ndarray:
    p = np.asarray(p, dtype=float)
    if np.any(np.isnan(p)) or np.any(p < 0) or np.any(p > 1):
        raise InvalidParameter(f"probability must lie in [0, 1], got {p}")
    return p


def _check_confidence(confidence: float) -> float:
    confidence = float(confidence)
    if not 0 < confidence < 1:
        raise InvalidParameter(f"confidence must lie in (0, 1), got {confidence}")
    return confidence


def _scalar_or_array(value: np.ndarray) -> ArrayLike:
    """Return a Python float for 0-d results, the array otherwise."""
    if np.ndim(value) == 0:
        return float(value)
    return value


@dataclass(frozen=True)
class Normal:
    """Gaussian distribution with a location and a positive scale.
    
    Parameters
    ----------
    location : float
        Mean of the distribution
    scale : float
        Standard deviation, must be finite and > 0
        
    Raises
    ------
    InvalidParameter
        If ``scale <= 0`` or either parameter is not a finite real number
    """
    location: float
    scale: float
    
    def __post_init__(self):
        location, scale = _check_parameters(self.location, self.scale)
        object.__setattr__(self, 'location', location)
        object.__setattr__(self, 'scale', scale)
    
    @property
    def mean(self) -> float:
        return self.location
    
    @property
    def variance(self) -> float:
        return self.scale ** 2
    
    def quantile(self, p: ArrayLike) -> ArrayLike:
        """Inverse CDF: the value x with P(X <= x) = p.
        
        Computed as ``location + scale * Phi^{-1}(p)``, so ``quantile(0.5)``
        equals ``location``.
        """
        p = _check_probability(p)
        return _scalar_or_array(self.location + self.scale * stats.norm.ppf(p))
    
    def cdf(self, x: ArrayLike) -> ArrayLike:
        return _scalar_or_array(stats.norm.cdf(x, loc=self.location, scale=self.scale))
    
    def pdf(self, x: ArrayLike) -> ArrayLike:
        return _scalar_or_array(stats.norm.pdf(x, loc=self.location, scale=self.scale))
    
    def interval(self, confidence: float) -> Tuple[float, float]:
        """Central interval holding ``confidence`` of the probability mass."""
        confidence = _check_confidence(confidence)
        tail = (1.0 - confidence) / 2.0
        return self.quantile(tail), self.quantile(1.0 - tail)
    
    def sample(self, size: Optional[Union[int, Tuple[int, ...]]] = None,
               rng: Optional[np.random.Generator] = None) -> ArrayLike:
        """Draw samples; uses the global NumPy state when ``rng`` is None."""
        source = np.random if rng is None else rng
        return _scalar_or_array(source.normal(self.location, self.scale, size))


@dataclass(frozen=True)
class LogNormal:
    """Distribution of ``exp(X)`` where ``X ~ Normal(location, scale)``.
    
    Raises
    ------
    InvalidParameter
        Under the same conditions as ``Normal``
    """
    location: float
    scale: float
    _normal: Normal = field(init=False, repr=False, compare=False)
    
    def __post_init__(self):
        normal = Normal(self.location, self.scale)
        object.__setattr__(self, 'location', normal.location)
        object.__setattr__(self, 'scale', normal.scale)
        object.__setattr__(self, '_normal', normal)
    
    @classmethod
    def from_normal(cls, normal: Normal) -> 'LogNormal':
        """Map a log-space Normal (e.g. a forecast of log values) back to value space."""
        return cls(normal.location, normal.scale)
    
    @property
    def log_normal(self) -> Normal:
        """The underlying Normal over ``log(X)``."""
        return self._normal
    
    @property
    def mean(self) -> float:
        return float(np.exp(self.location + self.scale ** 2 / 2.0))
    
    @property
    def variance(self) -> float:
        s2 = self.scale ** 2
        return float(np.expm1(s2) * np.exp(2.0 * self.location + s2))
    
    def quantile(self, p: ArrayLike) -> ArrayLike:
        """``exp`` of the underlying normal quantile; ``quantile(0.5) == exp(location)``."""
        return _scalar_or_array(np.exp(self._normal.quantile(p)))
    
    def cdf(self, x: ArrayLike) -> ArrayLike:
        x = np.asarray(x, dtype=float)
        log_x = np.log(np.where(x > 0, x, 1.0))
        values = np.where(x > 0, stats.norm.cdf(log_x, loc=self.location, scale=self.scale), 0.0)
        return _scalar_or_array(values)
    
    def pdf(self, x: ArrayLike) -> ArrayLike:
        x = np.asarray(x, dtype=float)
        safe_x = np.where(x > 0, x, 1.0)
        density = stats.norm.pdf(np.log(safe_x), loc=self.location, scale=self.scale) / safe_x
        return _scalar_or_array(np.where(x > 0, density, 0.0))
    
    def interval(self, confidence: float) -> Tuple[float, float]:
        lower, upper = self._normal.interval(confidence)
        return float(np.exp(lower)), float(np.exp(upper))
    
    def sample(self, size: Optional[Union[int, Tuple[int, ...]]] = None,
               rng: Optional[np.random.Generator] = None) -> ArrayLike:
        source = np.random if rng is None else rng
        return _scalar_or_array(source.lognormal(self.location, self.scale, size))
