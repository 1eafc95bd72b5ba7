"""Global seeding for reproducible sampling and simulation.

``Normal.sample``, ``LogNormal.sample`` and ``simulate_random_walk`` fall back
to NumPy's global random state when no generator is passed; this module owns
the seed that state was last given.
"""

import operator
import os
from typing import Optional

import numpy as np

from ..exceptions import InvalidParameter

SEED_ENV_VAR = 'KALMAN_FORECAST_SEED'
DEFAULT_SEED = 42

_GLOBAL_SEED: Optional[int] = None


def set_global_seed(seed: int) -> None:
    """Seed NumPy's global random state and remember the seed.

    Parameters
    ----------
    seed : int
        Non-negative integer seed

    Raises
    ------
    InvalidParameter
        If ``seed`` is not a non-negative integer

    Examples
    --------
    >>> set_global_seed(42)
    """
    global _GLOBAL_SEED

    try:
        seed = operator.index(seed)
    except TypeError as exc:
        raise InvalidParameter(f"seed must be an integer, got {seed!r}") from exc
    if seed < 0:
        raise InvalidParameter(f"seed must be non-negative, got {seed}")

    np.random.seed(seed)
    _GLOBAL_SEED = seed


def get_global_seed() -> Optional[int]:
    return _GLOBAL_SEED


def ensure_reproducibility() -> int:
    """Seed from ``KALMAN_FORECAST_SEED`` unless a seed is already in effect.

    Falls back to ``DEFAULT_SEED`` when the variable is unset.

    Returns
    -------
    int
        The seed in effect

    Raises
    ------
    InvalidParameter
        If the environment variable is not an integer
    """
    if _GLOBAL_SEED is not None:
        return _GLOBAL_SEED

    raw = os.environ.get(SEED_ENV_VAR)
    if raw is None:
        seed = DEFAULT_SEED
    else:
        try:
            seed = int(raw)
        except ValueError as exc:
            raise InvalidParameter(f"{SEED_ENV_VAR} must be an integer, got {raw!r}") from exc

    set_global_seed(seed)
    return seed
