"""
Data generation tests for Kalman Forecast.
"""
