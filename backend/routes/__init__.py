"""
API route blueprints for the Satellite Telemetry Tracker.
"""
from .satellite_routes import satellite_bp
from .pass_routes import pass_bp
from .telemetry_routes import telemetry_bp

__all__ = ['satellite_bp', 'pass_bp', 'telemetry_bp']
