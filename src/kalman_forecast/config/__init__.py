"""Configuration management for Kalman Forecast.

Provides global configuration, presets, logging setup and random seed
management for reproducible sampling.
"""

from .settings import get_config, set_config, Settings
from .random_state import set_global_seed, ensure_reproducibility
from .defaults import FILTER_PRESETS, DefaultConfig, steady_state_covariance, validate_config
from .logging_setup import setup_logging

__all__ = [
    'get_config',
    'set_config',
    'set_global_seed', 
    'ensure_reproducibility',
    'Settings',
    'FILTER_PRESETS',
    'DefaultConfig',
    'steady_state_covariance',
    'validate_config',
    'setup_logging'
]
