"""Installation checks: dependency versions and filter numerics."""

import importlib
import warnings
from typing import Optional

import numpy as np
from packaging import version

from ..core.kalman import update
from ..core.stochastic import Stochastic
from ..dist import MultivariateNormal
from ..exceptions import SingularInnovationCovariance
from .defaults import steady_state_covariance


def _version_problem(name: str, minimum: str) -> Optional[str]:
    try:
        module = importlib.import_module(name)
    except ImportError:
        return f"{name} is not installed"

    found = getattr(module, '__version__', '0')
    if version.parse(found) < version.parse(minimum):
        return f"{name} {minimum}+ required, found {found}"
    return None


def check_environment(min_numpy: str = "1.25", min_scipy: str = "1.11") -> None:
    """Check the installed numpy/scipy against minimum versions.

    matplotlib is only needed for ``viz``; a missing or old copy produces a
    ``UserWarning`` instead of an error.

    Raises
    ------
    RuntimeError
        Listing every required package that is missing or too old

    Examples
    --------
    >>> check_environment(min_numpy="1.24")
    """
    required = {'numpy': min_numpy, 'scipy': min_scipy}
    errors = [p for p in (_version_problem(n, v) for n, v in required.items()) if p]
    if errors:
        raise RuntimeError("Environment validation failed: " + "; ".join(errors))

    plotting = _version_problem('matplotlib', '3.5')
    if plotting:
        warnings.warn(f"{plotting}; forecast plots are unavailable", UserWarning)


def validate_numerical_stability(noise: float = 1.0, walk: float = 0.1, steps: int = 200) -> None:
    """Run the filter on cases with known answers.

    1. A 1x1 system with zero noise, zero walk and zero prior variance must
       raise ``SingularInnovationCovariance`` instead of producing NaNs.
    2. From the diffuse prior, ``steps`` updates with constant (noise, walk)
       must settle on ``steady_state_covariance(noise, walk)``.

    Raises
    ------
    RuntimeError
        If either case does not hold
    """
    degenerate = MultivariateNormal([0.0], [0.0])
    try:
        update(degenerate, Stochastic.system(0.0, 0.0), 1.0)
    except SingularInnovationCovariance:
        pass
    else:
        raise RuntimeError("Singular innovation covariance was not detected")

    model = Stochastic()
    for _ in range(steps):
        model.update(noise, walk, 0.0)

    expected = steady_state_covariance(noise, walk)
    if not np.isclose(model.covariance, expected, rtol=1e-6):
        raise RuntimeError(
            f"Filter covariance {model.covariance} did not converge to {expected}"
        )
