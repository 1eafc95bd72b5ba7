"""Tests for installation checks."""

import pytest
from unittest.mock import patch, MagicMock

from kalman_forecast.config import validate as validate_module
from kalman_forecast.config.validate import (
    check_environment,
    validate_numerical_stability
)


class TestEnvironmentChecking:
    """Test suite for check_environment."""
    
    def test_check_environment_success(self):
        """Current environment satisfies low minimums."""
        check_environment(min_numpy="1.20", min_scipy="1.7")
    
    def test_old_numpy_reported(self):
        with patch.dict('sys.modules', {'numpy': MagicMock(__version__="1.20.0")}):
            with pytest.raises(RuntimeError) as exc_info:
                check_environment(min_numpy="1.25", min_scipy="0.1")
        
        error_msg = str(exc_info.value)
        assert "numpy 1.25+ required" in error_msg
        assert "found 1.20.0" in error_msg
    
    def test_missing_scipy_reported(self):
        with patch.dict('sys.modules', {'scipy': None}):
            with pytest.raises(RuntimeError, match="scipy is not installed"):
                check_environment(min_numpy="0.1", min_scipy="1.11")
    
    def test_missing_matplotlib_warns(self):
        with patch.dict('sys.modules', {'matplotlib': None}):
            with pytest.warns(UserWarning, match="forecast plots are unavailable"):
                check_environment(min_numpy="0.1", min_scipy="0.1")


class TestNumericalStability:
    """Test suite for validate_numerical_stability."""
    
    def test_passes(self):
        validate_numerical_stability()
    
    @pytest.mark.parametrize("noise,walk", [(1.0, 1.0), (0.5, 0.01)])
    def test_passes_for_other_parameters(self, noise, walk):
        validate_numerical_stability(noise=noise, walk=walk, steps=500)
    
    def test_detects_missing_singular_error(self):
        """An update that returns a belief for a singular system is a failure."""
        with patch.object(validate_module, 'update', side_effect=lambda belief, *args: belief):
            with pytest.raises(RuntimeError, match="not detected"):
                validate_numerical_stability()
    
    def test_detects_wrong_steady_state(self):
        with patch.object(validate_module, 'steady_state_covariance', return_value=5.0):
            with pytest.raises(RuntimeError, match="did not converge"):
                validate_numerical_stability()
