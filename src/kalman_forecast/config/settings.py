"""Main configuration settings with TOML loading support."""

from dataclasses import dataclass, asdict
from typing import Optional, Union
from pathlib import Path
import logging
import operator

import numpy as np

try:
    import tomllib  # Python 3.11+
except ImportError:
    try:
        import tomli as tomllib  # Fallback for older Python
    except ImportError:
        tomllib = None

try:
    import tomli_w
except ImportError:
    tomli_w = None

from ..core.kalman import SINGULAR_POLICIES
from ..core.stochastic import _check_variance
from ..exceptions import InvalidParameter
from .defaults import FILTER_PRESETS, DefaultConfig, validate_config

logger = logging.getLogger(__name__)

TOML_SECTIONS = ('prior', 'model', 'forecast', 'advanced')

@dataclass
class Settings:
    """Configuration for building and running a ``Stochastic`` model.
    
    Can be loaded from TOML files for user customization while providing
    sensible defaults for different tracking scenarios.
    """
    
    # Prior belief
    prior_location: float = 0.0
    prior_covariance: float = 1e12
    
    # Model parameters
    noise: float = 1.0
    walk: float = 0.1
    
    # Forecast parameters
    horizon: int = 10
    confidence: float = 0.9
    
    # Numerical behaviour
    singular: str = "raise"
    joseph: bool = False
    
    # Reproducibility
    random_seed: Optional[int] = None
    
    verbose: bool = False
    
    def __post_init__(self):
        """Reject invalid values, then log soft configuration warnings."""
        if not np.isfinite(self.prior_location):
            raise InvalidParameter(f"prior_location must be finite, got {self.prior_location}")
        self.prior_covariance = _check_variance(self.prior_covariance, "prior_covariance")
        self.noise = _check_variance(self.noise, "noise")
        self.walk = _check_variance(self.walk, "walk")
        try:
            self.horizon = operator.index(self.horizon)
        except TypeError as exc:
            raise InvalidParameter(f"horizon must be an integer, got {self.horizon!r}") from exc
        if self.horizon < 0:
            raise InvalidParameter(f"horizon must be non-negative, got {self.horizon}")
        if not 0 < self.confidence < 1:
            raise InvalidParameter(f"confidence must lie in (0, 1), got {self.confidence}")
        if self.singular not in SINGULAR_POLICIES:
            raise InvalidParameter(f"singular must be one of {SINGULAR_POLICIES}, got {self.singular!r}")
        
        warnings = validate_config(self.to_default_config())
        if warnings and self.verbose:
            for warning in warnings:
                logger.warning("Configuration warning: %s", warning)
    
    def to_default_config(self) -> DefaultConfig:
        return DefaultConfig(
            prior_location=self.prior_location,
            prior_covariance=self.prior_covariance,
            noise=self.noise,
            walk=self.walk,
            horizon=self.horizon,
            confidence=self.confidence
        )
    
    @classmethod
    def from_preset(cls, preset: str) -> 'Settings':
        """Create settings from a preset configuration.
        
        Parameters
        ----------
        preset : str
            Preset name ('diffuse', 'smooth', 'responsive')
            
        Returns
        -------
        Settings
            Settings object with preset values
        """
        if preset not in FILTER_PRESETS:
            raise ValueError(f"Unknown preset '{preset}'. Available: {list(FILTER_PRESETS.keys())}")
        
        config = FILTER_PRESETS[preset]
        return cls(
            prior_location=config.prior_location,
            prior_covariance=config.prior_covariance,
            noise=config.noise,
            walk=config.walk,
            horizon=config.horizon,
            confidence=config.confidence
        )
    
    @classmethod
    def from_toml(cls, toml_path: Union[str, Path]) -> 'Settings':
        """Load settings from TOML file.
        
        Values may sit in ``[prior]``, ``[model]``, ``[forecast]`` and
        ``[advanced]`` tables or at the top level.
        
        Raises
        ------
        ImportError
            If tomllib is not available
        FileNotFoundError
            If TOML file doesn't exist
        """
        if tomllib is None:
            raise ImportError("tomllib not available. Install tomli for Python < 3.11")
        
        toml_path = Path(toml_path)
        if not toml_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {toml_path}")
        
        with open(toml_path, 'rb') as f:
            config_data = tomllib.load(f)
        
        settings_data = {}
        for section in TOML_SECTIONS:
            if section in config_data:
                settings_data.update(config_data[section])
        
        for key, value in config_data.items():
            if not isinstance(value, dict):
                settings_data[key] = value
        
        return cls(**settings_data)
    
    def to_toml(self, toml_path: Union[str, Path]) -> None:
        """Save settings to TOML file.
        
        ``random_seed`` is omitted when unset since TOML has no null.
        
        Raises
        ------
        ImportError
            If tomli_w is not available
        """
        if tomli_w is None:
            raise ImportError("tomli_w not available. Install tomli-w for TOML writing")
        
        config_data = {
            'prior': {
                'prior_location': self.prior_location,
                'prior_covariance': self.prior_covariance
            },
            'model': {
                'noise': self.noise,
                'walk': self.walk
            },
            'forecast': {
                'horizon': self.horizon,
                'confidence': self.confidence
            },
            'advanced': {
                'singular': self.singular,
                'joseph': self.joseph,
                'verbose': self.verbose
            }
        }
        if self.random_seed is not None:
            config_data['advanced']['random_seed'] = self.random_seed
        
        with open(Path(toml_path), 'wb') as f:
            tomli_w.dump(config_data, f)
    
    def update(self, **kwargs) -> 'Settings':
        """Create new Settings with updated values."""
        current_dict = asdict(self)
        current_dict.update(kwargs)
        return Settings(**current_dict)


# Global configuration instance
_GLOBAL_CONFIG: Optional[Settings] = None

def get_config(config_path: Optional[Union[str, Path]] = None, 
               preset: Optional[str] = None,
               reload: bool = False) -> Settings:
    """Get global configuration settings.
    
    Parameters
    ----------
    config_path : Optional[Union[str, Path]]
        Path to TOML configuration file. If None, looks for default locations.
    preset : Optional[str]
        Preset configuration name used when no file is found.
    reload : bool
        Force reload configuration even if already loaded
    """
    global _GLOBAL_CONFIG
    
    if _GLOBAL_CONFIG is not None and not reload:
        return _GLOBAL_CONFIG
    
    if config_path is not None:
        _GLOBAL_CONFIG = Settings.from_toml(config_path)
    else:
        default_paths = [
            'kalman_forecast.toml',
            Path.home() / '.kalman_forecast.toml',
            Path.cwd() / 'config' / 'kalman_forecast.toml'
        ]
        
        config_loaded = False
        for path in default_paths:
            if Path(path).exists():
                try:
                    _GLOBAL_CONFIG = Settings.from_toml(path)
                    config_loaded = True
                    break
                except (OSError, ValueError, TypeError) as e:
                    logger.warning("Could not load config from %s: %s", path, e)
                    continue
        
        if not config_loaded:
            _GLOBAL_CONFIG = Settings.from_preset(preset or 'diffuse')
    
    if _GLOBAL_CONFIG.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(_GLOBAL_CONFIG.random_seed)
    
    return _GLOBAL_CONFIG

def set_config(settings: Settings) -> None:
    """Set global configuration settings."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = settings
    
    if settings.random_seed is not None:
        from .random_state import set_global_seed
        set_global_seed(settings.random_seed)
