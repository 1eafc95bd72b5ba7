"""Synthetic random-walk-plus-noise series.

Generates data from exactly the model ``Stochastic`` assumes, for driving
the filter in experiments and tests.
"""

from typing import Optional, Tuple

import numpy as np

from ..exceptions import InvalidParameter


def simulate_random_walk(noise: float,
                         walk: float,
                         n_steps: int,
                         initial: float = 0.0,
                         rng: Optional[np.random.Generator] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Simulate a random walk observed with Gaussian noise.
    
    Parameters
    ----------
    noise : float
        Observation noise variance
    walk : float
        Per-step random walk variance
    n_steps : int
        Number of time steps
    initial : float
        Latent value before the first step
    rng : np.random.Generator, optional
        Random generator; NumPy's global state is used when None
        
    Returns
    -------
    states : ndarray [n_steps]
        Latent values
    observations : ndarray [n_steps]
        Noisy observations of the latent values
    """
    if noise < 0 or walk < 0:
        raise InvalidParameter(f"noise and walk must be non-negative, got noise={noise}, walk={walk}")
    if n_steps < 0:
        raise InvalidParameter(f"n_steps must be non-negative, got {n_steps}")
    
    source = np.random if rng is None else rng
    
    steps = source.normal(0.0, np.sqrt(walk), n_steps)
    states = initial + np.cumsum(steps)
    observations = states + source.normal(0.0, np.sqrt(noise), n_steps)
    
    return states, observations
