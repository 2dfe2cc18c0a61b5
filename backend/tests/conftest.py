"""
Shared fixtures: one application with a private in-memory database per test.
"""
from datetime import timedelta

import pytest

from app import create_app
from utils.time_util import utc_now


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def services(app):
    return app.extensions['tracker']


@pytest.fixture
def store(services):
    return services.store


@pytest.fixture
def iss(services):
    return services.satellites.create_satellite({
        'norad_id': 25544,
        'name': 'ISS (ZARYA)',
        'category': 'Space Station',
        'country': 'ISS',
        'launch_date': '1998-11-20',
    })


@pytest.fixture
def now():
    return utc_now()


@pytest.fixture
def add_point(services):
    """Append a telemetry sample for a satellite at a given instant."""
    def _add(satellite_id, timestamp, latitude=51.5, longitude=-0.1, altitude=420.0, **extra):
        values = {
            'satellite_id': satellite_id,
            'timestamp': timestamp,
            'latitude': latitude,
            'longitude': longitude,
            'altitude': altitude,
        }
        values.update(extra)
        return services.telemetry.record(values)
    return _add


@pytest.fixture
def add_pass(services):
    """Store a ten minute pass starting at a given instant."""
    def _add(satellite_id, start_time, max_elevation=45.0):
        return services.passes.create({
            'satellite_id': satellite_id,
            'start_time': start_time,
            'end_time': start_time + timedelta(minutes=10),
            'max_elevation': max_elevation,
        })
    return _add
