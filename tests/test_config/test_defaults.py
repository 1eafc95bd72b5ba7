"""Tests for default configurations and configuration validation."""

import pytest

from kalman_forecast.config.defaults import (
    DefaultConfig,
    DIFFUSE_CONFIG,
    SMOOTH_CONFIG,
    RESPONSIVE_CONFIG,
    FILTER_PRESETS,
    DIFFUSE_THRESHOLD,
    MAX_HORIZON,
    steady_state_covariance,
    validate_config
)


def _config(**overrides) -> DefaultConfig:
    values = dict(prior_location=0.0, prior_covariance=1e12, noise=1.0,
                  walk=0.1, horizon=10, confidence=0.9)
    values.update(overrides)
    return DefaultConfig(**values)


class TestPresets:
    """Test suite for the preset configurations."""
    
    def test_presets_dictionary(self):
        assert set(FILTER_PRESETS) == {"diffuse", "smooth", "responsive"}
        assert FILTER_PRESETS["diffuse"] is DIFFUSE_CONFIG
        assert FILTER_PRESETS["smooth"] is SMOOTH_CONFIG
        assert FILTER_PRESETS["responsive"] is RESPONSIVE_CONFIG
    
    @pytest.mark.parametrize("name", ["diffuse", "smooth", "responsive"])
    def test_presets_produce_no_warnings(self, name):
        assert validate_config(FILTER_PRESETS[name]) == []
    
    def test_presets_use_diffuse_prior(self):
        for config in FILTER_PRESETS.values():
            assert config.prior_covariance >= DIFFUSE_THRESHOLD


class TestSteadyStateCovariance:
    """Test suite for steady_state_covariance."""
    
    @pytest.mark.parametrize("noise,walk", [(1.0, 0.1), (0.1, 1.0), (5.0, 5.0), (1.0, 0.0)])
    def test_fixed_point(self, noise, walk):
        """The steady state is a fixed point of predict + update."""
        p = steady_state_covariance(noise, walk)
        prior = p + walk
        
        assert p >= 0
        assert prior * noise / (prior + noise) == pytest.approx(p, abs=1e-12)
    
    def test_reference_value(self):
        assert steady_state_covariance(1.0, 0.1) == pytest.approx((-0.1 + 0.41 ** 0.5) / 2)


class TestValidateConfig:
    """Test suite for validate_config."""
    
    def test_valid_configuration(self):
        assert validate_config(_config()) == []
    
    def test_informative_prior(self):
        warnings = validate_config(_config(prior_covariance=10.0))
        
        assert len(warnings) == 1
        assert "informative" in warnings[0]
    
    def test_degenerate_noise(self):
        warnings = validate_config(_config(noise=0.0, walk=0.0))
        
        assert any("singular" in w for w in warnings)
    
    def test_walk_dominates_noise(self):
        warnings = validate_config(_config(noise=1e-6, walk=1.0))
        
        assert any("walk/noise" in w for w in warnings)
    
    def test_long_horizon(self):
        warnings = validate_config(_config(horizon=MAX_HORIZON + 1))
        
        assert any("horizon" in w for w in warnings)
    
    def test_multiple_warnings(self):
        warnings = validate_config(_config(prior_covariance=1.0, horizon=MAX_HORIZON * 2))
        
        assert len(warnings) == 2
