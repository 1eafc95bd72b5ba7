"""
Distribution tests for Kalman Forecast.

Tests for the probability primitives:
- Univariate Normal and LogNormal
- Multivariate Normal belief state
"""
