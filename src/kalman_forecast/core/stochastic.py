"""Random-walk-plus-noise model tracked with a one-dimensional Kalman filter.

The latent value follows a random walk with per-step variance ``walk`` and is
observed with variance ``noise``. ``Stochastic`` owns the belief over that value,
rebuilds the 1x1 ``LinearSystem`` from (noise, walk) on every call, and offers
filtering (``update``) and multi-step forecasting (``forecast``).
"""

import logging
import operator
import threading
from typing import List

import numpy as np

from ..dist import MultivariateNormal, Normal
from ..exceptions import InvalidParameter, SingularInnovationCovariance
from .kalman import SINGULAR_POLICIES, LinearSystem, log_likelihood, observe, predict, update

logger = logging.getLogger(__name__)

DIFFUSE_PRIOR_COVARIANCE = 1e12


def _check_variance(value: float, name: str) -> float:
    value = float(value)
    if not np.isfinite(value) or value < 0:
        raise InvalidParameter(f"{name} must be a finite, non-negative variance, got {value}")
    return value


class Stochastic:
    """Stochastic (random walk) component with a Gaussian belief state.
    
    The belief is held privately and only replaced by ``update``; callers read
    it through ``location``, ``covariance`` and ``belief``. ``update`` and the
    snapshot taken by ``forecast`` are serialised by a per-instance lock.
    
    Parameters
    ----------
    prior_location : float, default=0.0
        Mean of the initial belief
    prior_covariance : float, default=1e12
        Variance of the initial belief; the default is a diffuse prior
    singular : str, default="raise"
        Policy for a singular innovation covariance, see ``kalman.update``
    joseph : bool, default=False
        Use the Joseph-form covariance update
    """
    
    def __init__(self,
                 prior_location: float = 0.0,
                 prior_covariance: float = DIFFUSE_PRIOR_COVARIANCE,
                 singular: str = "raise",
                 joseph: bool = False):
        prior_covariance = _check_variance(prior_covariance, "prior_covariance")
        if singular not in SINGULAR_POLICIES:
            raise InvalidParameter(f"singular must be one of {SINGULAR_POLICIES}, got {singular!r}")
        self._belief = MultivariateNormal([prior_location], [prior_covariance])
        self.singular = singular
        self.joseph = joseph
        self.n_updates = 0
        self._lock = threading.Lock()
    
    @classmethod
    def from_settings(cls, settings) -> 'Stochastic':
        """Build a model from a ``config.Settings`` instance."""
        return cls(prior_location=settings.prior_location,
                   prior_covariance=settings.prior_covariance,
                   singular=settings.singular,
                   joseph=settings.joseph)
    
    @property
    def belief(self) -> MultivariateNormal:
        """Current belief (the Kalman filter state); immutable, so safe to hold."""
        return self._belief
    
    @property
    def location(self) -> float:
        return float(self._belief.location[0])
    
    @property
    def covariance(self) -> float:
        return float(self._belief.covariance[0, 0])
    
    @staticmethod
    def system(noise: float, walk: float) -> LinearSystem:
        """1x1 random-walk-plus-noise system: A = B = C = [1], Q = [walk], R = [noise]."""
        noise = _check_variance(noise, "noise")
        walk = _check_variance(walk, "walk")
        return LinearSystem(transition=[[1.0]],
                            control=[[1.0]],
                            observation=[[1.0]],
                            process_noise=[[walk]],
                            observation_noise=[[noise]])
    
    def update(self, noise: float, walk: float, value: float) -> float:
        """Predict then correct the belief with an observed value.

        The new belief is computed in full before it replaces the old one, so a
        raised ``SingularInnovationCovariance`` leaves the model unchanged.

        Returns
        -------
        float
            Log-likelihood of ``value`` under the predicted belief, the same
            number ``score`` gives just before this call. NaN when the
            ``"pinv"`` policy handled a singular innovation covariance.
        """
        system = self.system(noise, walk)
        with self._lock:
            predicted = predict(self._belief, system)
            posterior = update(predicted, system, value,
                               singular=self.singular, joseph=self.joseph)
            try:
                score = log_likelihood(predicted, system, value)
            except SingularInnovationCovariance:
                # only reachable under "pinv"; update() raised otherwise
                score = float("nan")
            self._belief = posterior
            self.n_updates += 1
            n_updates = self.n_updates

        logger.debug("Stochastic update %d: value=%s location=%.6g covariance=%.6g loglik=%.6g",
                     n_updates, value, posterior.location[0], posterior.covariance[0, 0], score)
        return score
    
    def score(self, noise: float, walk: float, value: float) -> float:
        """Log-likelihood of ``value`` as the next observation, without updating."""
        system = self.system(noise, walk)
        with self._lock:
            belief = self._belief
        return log_likelihood(predict(belief, system), system, value)
    
    def forecast(self, noise: float, walk: float, n: int) -> List[Normal]:
        """Predictive distributions for the next ``n`` observations.
        
        Each step predicts from the previous step's a-priori belief, so no
        correction is applied and the variance compounds with the horizon.
        The stored belief is not modified.
        
        Raises
        ------
        InvalidParameter
            If ``n`` is negative or not an integer
        """
        try:
            n = operator.index(n)
        except TypeError as exc:
            raise InvalidParameter(f"forecast horizon must be an integer, got {n!r}") from exc
        if n < 0:
            raise InvalidParameter(f"forecast horizon must be non-negative, got {n}")
        
        system = self.system(noise, walk)
        with self._lock:
            belief = self._belief
        start = float(belief.location[0])
        
        forecasts = []
        for _ in range(n):
            belief = predict(belief, system)
            observed = observe(belief, system)
            forecasts.append(Normal(location=observed.location[0],
                                    scale=np.sqrt(observed.covariance[0, 0])))
        
        logger.debug("Stochastic forecast: %d steps from location=%.6g", n, start)
        return forecasts
    
    def __repr__(self) -> str:
        return (f"Stochastic(location={self.location!r}, covariance={self.covariance!r}, "
                f"n_updates={self.n_updates})")
