"""Linear-Gaussian Kalman filter operations.

Implements the three stateless steps of a discrete linear dynamical system

    x_t = A x_{t-1} + w_t,    w_t ~ N(0, Q)
    y_t = C x_t + v_t,        v_t ~ N(0, R)

over a ``MultivariateNormal`` belief:

- ``predict``: x' = A x,  P' = A P A^T + Q
- ``observe``: (C x, C P C^T + R), the predictive observation distribution
- ``update``:  K = P' C^T S^{-1},  x'' = x' + K (v - C x'),  P'' = (I - K C) P'

Every function returns a new belief; none of them modify their inputs.
"""

import logging
import warnings
from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np
from scipy import linalg

from ..dist import MultivariateNormal
from ..exceptions import DimensionMismatch, InvalidParameter, SingularInnovationCovariance

logger = logging.getLogger(__name__)

SINGULAR_POLICIES = ("raise", "pinv")

Observation = Union[float, np.ndarray]


def _matrix(value, name: str) -> np.ndarray:
    matrix = np.atleast_2d(np.asarray(value, dtype=float))
    if matrix.ndim != 2:
        raise DimensionMismatch(f"{name} must be a matrix, got shape {matrix.shape}")
    matrix = matrix.copy()
    matrix.setflags(write=False)
    return matrix


@dataclass(frozen=True, eq=False)
class LinearSystem:
    """Matrices defining one step of a linear-Gaussian dynamical system.
    
    Attributes
    ----------
    transition : np.ndarray, shape (n, n)
        State transition matrix A
    control : np.ndarray, shape (n, m)
        Control input matrix B
    observation : np.ndarray, shape (k, n)
        Observation matrix C
    process_noise : np.ndarray, shape (n, n)
        Process noise covariance Q
    observation_noise : np.ndarray, shape (k, k)
        Observation noise covariance R
    """
    transition: np.ndarray
    control: np.ndarray
    observation: np.ndarray
    process_noise: np.ndarray
    observation_noise: np.ndarray
    
    def __post_init__(self):
        for name in ('transition', 'control', 'observation', 'process_noise', 'observation_noise'):
            object.__setattr__(self, name, _matrix(getattr(self, name), name))
        self._validate_dimensions()
    
    def _validate_dimensions(self) -> None:
        n = self.transition.shape[0]
        
        if self.transition.shape != (n, n):
            raise DimensionMismatch(f"transition must be square, got {self.transition.shape}")
        
        if self.control.shape[0] != n:
            raise DimensionMismatch(f"control must have {n} rows, got {self.control.shape}")
        
        if self.observation.shape[1] != n:
            raise DimensionMismatch(f"observation must have {n} columns, got {self.observation.shape}")
        
        if self.process_noise.shape != (n, n):
            raise DimensionMismatch(f"process_noise must be ({n}, {n}), got {self.process_noise.shape}")
        
        k = self.observation.shape[0]
        if self.observation_noise.shape != (k, k):
            raise DimensionMismatch(
                f"observation_noise must be ({k}, {k}), got {self.observation_noise.shape}"
            )
    
    @property
    def state_dim(self) -> int:
        return self.transition.shape[0]
    
    @property
    def control_dim(self) -> int:
        return self.control.shape[1]
    
    @property
    def observation_dim(self) -> int:
        return self.observation.shape[0]


def _check_compatible(belief: MultivariateNormal, system: LinearSystem) -> None:
    if belief.dim != system.state_dim:
        raise DimensionMismatch(
            f"belief has dimension {belief.dim} but system expects {system.state_dim}"
        )


def _observed_vector(value: Observation, system: LinearSystem) -> np.ndarray:
    v = np.atleast_1d(np.asarray(value, dtype=float))
    if v.shape != (system.observation_dim,):
        raise DimensionMismatch(
            f"observed value must have shape ({system.observation_dim},), got {v.shape}"
        )
    if not np.all(np.isfinite(v)):
        raise InvalidParameter(f"observed value must be finite, got {v}")
    return v


def predict(belief: MultivariateNormal,
            system: LinearSystem,
            control_input: Optional[np.ndarray] = None) -> MultivariateNormal:
    """Propagate the belief one step through the system (a-priori belief).
    
    Without a control input the mean is ``A x``; with one it is ``A x + B u``.
    The covariance ``A P A^T + Q`` never loses diagonal mass when A is the
    identity and Q is positive semi-definite.
    """
    _check_compatible(belief, system)
    A, Q = system.transition, system.process_noise
    
    x_pred = A @ belief.location
    if control_input is not None:
        u = np.atleast_1d(np.asarray(control_input, dtype=float))
        if u.shape != (system.control_dim,):
            raise DimensionMismatch(f"control input must have shape ({system.control_dim},), got {u.shape}")
        x_pred = x_pred + system.control @ u
    
    P_pred = A @ belief.covariance @ A.T + Q
    return MultivariateNormal(x_pred, P_pred)


def observe(belief: MultivariateNormal, system: LinearSystem) -> MultivariateNormal:
    """Map the belief into observation space, adding observation noise."""
    _check_compatible(belief, system)
    C, R = system.observation, system.observation_noise
    return MultivariateNormal(C @ belief.location, C @ belief.covariance @ C.T + R)


def _innovation(belief: MultivariateNormal,
                system: LinearSystem,
                value: Observation) -> Tuple[np.ndarray, np.ndarray]:
    """Innovation y = v - C x and its covariance S = C P C^T + R."""
    _check_compatible(belief, system)
    v = _observed_vector(value, system)
    C, R = system.observation, system.observation_noise
    y = v - C @ belief.location
    S = C @ belief.covariance @ C.T + R
    return y, S


def _invert_innovation(S: np.ndarray, singular: str) -> np.ndarray:
    if not np.all(np.isfinite(S)):
        raise SingularInnovationCovariance(f"innovation covariance is not finite: {S.tolist()}")
    
    try:
        return linalg.inv(S)
    except linalg.LinAlgError as exc:
        if singular == "raise":
            raise SingularInnovationCovariance(
                f"innovation covariance is singular: {S.tolist()}"
            ) from exc
    
    warnings.warn(f"Singular innovation covariance {S.tolist()}, using pseudoinverse",
                  RuntimeWarning)
    return linalg.pinv(S)


def joseph_covariance(P_pred: np.ndarray, K: np.ndarray, C: np.ndarray, R: np.ndarray) -> np.ndarray:
    """Joseph-stabilised posterior covariance (I - KC) P (I - KC)^T + K R K^T."""
    IKC = np.eye(P_pred.shape[0]) - K @ C
    return IKC @ P_pred @ IKC.T + K @ R @ K.T


def update(belief: MultivariateNormal,
           system: LinearSystem,
           value: Observation,
           singular: str = "raise",
           joseph: bool = False) -> MultivariateNormal:
    """Fuse an a-priori belief with an observed value (a-posteriori belief).
    
    Parameters
    ----------
    belief : MultivariateNormal
        A-priori belief, usually the output of ``predict``
    system : LinearSystem
        System whose observation matrix and noise produced ``value``
    value : float or np.ndarray, shape (k,)
        Observed value
    singular : str, default="raise"
        ``"raise"`` propagates ``SingularInnovationCovariance``; ``"pinv"``
        falls back to the pseudo-inverse and emits a ``RuntimeWarning``
    joseph : bool, default=False
        Use the Joseph form for the posterior covariance
        
    Returns
    -------
    MultivariateNormal
        Posterior belief
        
    Raises
    ------
    SingularInnovationCovariance
        If S cannot be inverted (or is not finite) and ``singular="raise"``
    """
    if singular not in SINGULAR_POLICIES:
        raise InvalidParameter(f"singular must be one of {SINGULAR_POLICIES}, got {singular!r}")
    
    y, S = _innovation(belief, system, value)
    S_inv = _invert_innovation(S, singular)
    
    C, P_pred = system.observation, belief.covariance
    K = P_pred @ C.T @ S_inv
    
    x_post = belief.location + K @ y
    if joseph:
        P_post = joseph_covariance(P_pred, K, C, system.observation_noise)
    else:
        P_post = (np.eye(belief.dim) - K @ C) @ P_pred
    
    logger.debug("Kalman update: innovation=%s gain=%s", y.tolist(), K.ravel().tolist())
    return MultivariateNormal(x_post, P_post)


def log_likelihood(belief: MultivariateNormal,
                   system: LinearSystem,
                   value: Observation) -> float:
    """Gaussian log-density of ``value`` under ``observe(belief, system)``.
    
    Raises
    ------
    SingularInnovationCovariance
        If the predictive observation covariance is not positive definite
    """
    y, S = _innovation(belief, system, value)
    sign, logdet = np.linalg.slogdet(S)
    if sign <= 0 or not np.isfinite(logdet):
        raise SingularInnovationCovariance(
            f"innovation covariance is not positive definite: {S.tolist()}"
        )
    quad = float(y @ linalg.solve(S, y, assume_a='pos'))
    return -0.5 * (len(y) * np.log(2.0 * np.pi) + logdet + quad)
