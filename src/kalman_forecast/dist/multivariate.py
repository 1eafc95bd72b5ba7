"""Multivariate normal distribution used as the Kalman filter belief state."""

from typing import Optional, Sequence, Union

import numpy as np

from ..exceptions import DimensionMismatch, InvalidParameter
from .univariate import Normal

ROUNDING_TOLERANCE = 1e-9


def _frozen(array: np.ndarray) -> np.ndarray:
    array = np.array(array, dtype=float, copy=True)
    array.setflags(write=False)
    return array


class MultivariateNormal:
    """Gaussian belief over an n-dimensional state vector.
    
    The location and covariance are copied on construction and stored as
    read-only arrays; a filter step produces a new ``MultivariateNormal``
    rather than editing an existing one.
    
    Parameters
    ----------
    location : array_like, shape (n,)
        Mean vector
    covariance : array_like, shape (n, n) or (n*n,)
        Covariance matrix, either square or flattened in row-major order
    dim : int, optional
        Declared state dimension; checked against ``location`` when given
        
    Raises
    ------
    DimensionMismatch
        If the location length, covariance shape and ``dim`` disagree
    InvalidParameter
        If any entry is not finite, a variance is negative, or the
        covariance is not symmetric (to within rounding)
    """
    
    def __init__(self,
                 location: Union[Sequence[float], np.ndarray],
                 covariance: Union[Sequence[float], np.ndarray],
                 dim: Optional[int] = None):
        location = np.atleast_1d(np.asarray(location, dtype=float))
        if location.ndim != 1:
            raise DimensionMismatch(f"location must be a vector, got shape {location.shape}")
        
        n = location.shape[0]
        if dim is not None and n != dim:
            raise DimensionMismatch(f"location must have length {dim}, got {n}")
        
        covariance = self._as_square(np.asarray(covariance, dtype=float), n)
        
        if not np.all(np.isfinite(location)):
            raise InvalidParameter("location contains non-finite entries")
        if not np.all(np.isfinite(covariance)):
            raise InvalidParameter("covariance contains non-finite entries")
        # rounding from a filter step is tolerated relative to the largest entry
        tolerance = ROUNDING_TOLERANCE * np.max(np.abs(covariance), initial=0.0)
        if np.any(np.diag(covariance) < -tolerance):
            raise InvalidParameter(f"covariance diagonal must be non-negative, got {np.diag(covariance)}")
        if np.any(np.abs(covariance - covariance.T) > tolerance):
            raise InvalidParameter("covariance must be symmetric")
        covariance = 0.5 * (covariance + covariance.T)
        np.fill_diagonal(covariance, np.maximum(np.diag(covariance), 0.0))
        
        self._location = _frozen(location)
        self._covariance = _frozen(covariance)
    
    @staticmethod
    def _as_square(covariance: np.ndarray, n: int) -> np.ndarray:
        if covariance.ndim == 2:
            if covariance.shape != (n, n):
                raise DimensionMismatch(f"covariance must be ({n}, {n}), got {covariance.shape}")
            return covariance
        if covariance.size == n * n and covariance.ndim <= 1:
            return covariance.reshape(n, n)
        raise DimensionMismatch(
            f"covariance must be ({n}, {n}) or flat of length {n * n}, got shape {covariance.shape}"
        )
    
    @property
    def dim(self) -> int:
        return self._location.shape[0]
    
    @property
    def location(self) -> np.ndarray:
        return self._location
    
    @property
    def covariance(self) -> np.ndarray:
        return self._covariance
    
    @property
    def variance(self) -> np.ndarray:
        """Marginal variances (covariance diagonal)."""
        return np.diag(self._covariance).copy()
    
    def marginal(self, index: int) -> Normal:
        """Univariate Normal for one state component.
        
        Raises ``InvalidParameter`` if that component has zero variance.
        """
        if not -self.dim <= index < self.dim:
            raise DimensionMismatch(f"index {index} out of range for dimension {self.dim}")
        return Normal(self._location[index], np.sqrt(self._covariance[index, index]))
    
    def __repr__(self) -> str:
        return (f"MultivariateNormal(location={self._location.tolist()}, "
                f"covariance={self._covariance.tolist()})")
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, MultivariateNormal):
            return NotImplemented
        return (np.array_equal(self._location, other._location) and
                np.array_equal(self._covariance, other._covariance))
    
    __hash__ = None
