"""Tests for synthetic random-walk-plus-noise generation."""

import pytest
import numpy as np

from kalman_forecast import InvalidParameter
from kalman_forecast.data import simulate_random_walk


class TestSimulateRandomWalk:
    """Test suite for simulate_random_walk."""
    
    def test_output_shapes(self, rng):
        states, observations = simulate_random_walk(1.0, 0.1, 100, rng=rng)
        
        assert states.shape == (100,)
        assert observations.shape == (100,)
    
    def test_reproducibility(self):
        rng1 = np.random.default_rng(42)
        rng2 = np.random.default_rng(42)
        
        xs1, ys1 = simulate_random_walk(1.0, 0.1, 50, rng=rng1)
        xs2, ys2 = simulate_random_walk(1.0, 0.1, 50, rng=rng2)
        
        np.testing.assert_array_equal(xs1, xs2)
        np.testing.assert_array_equal(ys1, ys2)
    
    def test_zero_noise_observes_state(self, rng):
        states, observations = simulate_random_walk(0.0, 0.5, 20, rng=rng)
        
        np.testing.assert_array_equal(states, observations)
    
    def test_zero_walk_is_constant(self, rng):
        states, _ = simulate_random_walk(1.0, 0.0, 20, initial=3.0, rng=rng)
        
        np.testing.assert_array_equal(states, np.full(20, 3.0))
    
    def test_increment_variance(self, rng):
        states, observations = simulate_random_walk(0.5, 2.0, 20000, rng=rng)
        
        assert np.var(np.diff(states)) == pytest.approx(2.0, rel=0.05)
        assert np.var(observations - states) == pytest.approx(0.5, rel=0.05)
    
    def test_empty(self, rng):
        states, observations = simulate_random_walk(1.0, 0.1, 0, rng=rng)
        
        assert len(states) == 0
        assert len(observations) == 0
    
    @pytest.mark.parametrize("noise,walk,n", [(-1.0, 0.1, 5), (1.0, -0.1, 5), (1.0, 0.1, -1)])
    def test_invalid(self, noise, walk, n):
        with pytest.raises(InvalidParameter):
            simulate_random_walk(noise, walk, n)
