"""Synthetic data generation for filter experiments."""

from .random_walk import simulate_random_walk

__all__ = [
    'simulate_random_walk'
]
