"""Default filter configurations for common tracking scenarios."""

from dataclasses import dataclass
from typing import List

@dataclass
class DefaultConfig:
    """Base configuration structure for a random-walk-plus-noise filter."""
    
    # Prior belief
    prior_location: float
    prior_covariance: float
    
    # Model parameters
    noise: float
    walk: float
    
    # Forecast parameters
    horizon: int
    confidence: float


# Diffuse prior, moderate drift: the general-purpose default
DIFFUSE_CONFIG = DefaultConfig(
    prior_location=0.0,
    prior_covariance=1e12,  # Essentially no initial knowledge
    noise=1.0,
    walk=0.1,
    horizon=10,
    confidence=0.9
)

# Slowly drifting signal buried in measurement noise
SMOOTH_CONFIG = DefaultConfig(
    prior_location=0.0,
    prior_covariance=1e12,
    noise=1.0,
    walk=0.01,  # Gain settles low, observations are heavily averaged
    horizon=20,
    confidence=0.9
)

# Fast-moving signal with accurate measurements
RESPONSIVE_CONFIG = DefaultConfig(
    prior_location=0.0,
    prior_covariance=1e12,
    noise=0.1,
    walk=1.0,  # Gain settles near one, the filter follows the latest value
    horizon=5,
    confidence=0.8
)

FILTER_PRESETS = {
    "diffuse": DIFFUSE_CONFIG,
    "smooth": SMOOTH_CONFIG,
    "responsive": RESPONSIVE_CONFIG
}

# Guidelines
DIFFUSE_THRESHOLD = 1e6  # Prior variances below this are informative
MAX_WALK_TO_NOISE = 1e4  # Beyond this the filter just echoes observations
MAX_HORIZON = 1000


def steady_state_covariance(noise: float, walk: float) -> float:
    """Posterior variance the filter converges to under constant (noise, walk).
    
    Fixed point of P = (P + walk) * noise / (P + walk + noise).
    """
    if walk == 0:
        return 0.0
    return (-walk + (walk ** 2 + 4.0 * walk * noise) ** 0.5) / 2.0


def validate_config(config: DefaultConfig) -> List[str]:
    """Validate configuration parameters and return list of warnings."""
    warnings = []
    
    if config.prior_covariance < DIFFUSE_THRESHOLD:
        warnings.append(f"Prior covariance {config.prior_covariance:g} is informative, "
                        f"early observations will be weighted less")
    
    if config.noise == 0 and config.walk == 0:
        warnings.append("noise and walk are both zero; the innovation covariance "
                        "becomes singular once the prior collapses")
    elif config.noise > 0 and config.walk / config.noise > MAX_WALK_TO_NOISE:
        warnings.append(f"walk/noise ratio {config.walk / config.noise:g} is very high, "
                        f"forecasts will track the last observation only")
    
    if config.horizon > MAX_HORIZON:
        warnings.append(f"Forecast horizon {config.horizon} is very long, "
                        f"intervals will be dominated by accumulated walk variance")
    
    return warnings
