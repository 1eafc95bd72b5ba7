"""
Core algorithm tests for Kalman Forecast.

Tests for:
- Linear system descriptor validation
- Kalman predict / observe / update steps
- Stochastic random-walk model and forecasting
"""
