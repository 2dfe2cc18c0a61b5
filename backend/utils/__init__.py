"""
Shared helpers for the Satellite Telemetry Tracker.
"""
