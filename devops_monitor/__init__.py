"""Simulated infrastructure monitor.

Periodic health checks driven by an environment-scoped profile, with
threshold classification and optional forecasting.
"""
