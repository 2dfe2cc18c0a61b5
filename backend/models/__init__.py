"""
SQLAlchemy database models for the Satellite Telemetry Tracker.
"""
from flask_sqlalchemy import SQLAlchemy

# Objects handed out by the entity store stay readable after the store lock is released
db = SQLAlchemy(session_options={'expire_on_commit': False})

from .satellite import Satellite
from .telemetry import TelemetryPoint
from .satellite_pass import SatellitePass
from .orbital_elements import OrbitalElements

__all__ = ['db', 'Satellite', 'TelemetryPoint', 'SatellitePass', 'OrbitalElements']
