"""
Business logic services for the Satellite Telemetry Tracker.

Services:
- entity_store: lock-guarded create/get/list/update over the collections
- satellite_service: satellite catalog and orbital elements
- telemetry_service: latest/history telemetry queries and manual entry
- pass_service: upcoming pass queries
- live_position_service: N2YO live position polling
- bulk_transfer_service: CSV import and CSV/JSON export
- initial_loader: default catalog seeding

One set of services is built per application by `init_services` and kept
in `app.extensions['tracker']`.
"""
from flask import current_app

from .errors import (
    TrackerError,
    NotFoundError,
    ValidationError,
    ConfigurationError,
    UpstreamError,
)
from .entity_store import EntityStore
from .satellite_service import SatelliteService
from .telemetry_service import TelemetryService
from .pass_service import PassService
from .live_position_service import LivePositionService
from .bulk_transfer_service import BulkTransferService
from .initial_loader import InitialDataLoader


class TrackerServices:
    """
    The services of one application, sharing one entity store.
    """

    def __init__(self, store: EntityStore, config):
        window = config.get('DEFAULT_WINDOW_HOURS', 24)

        self.store = store
        self.satellites = SatelliteService(store)
        self.telemetry = TelemetryService(store, default_window_hours=window)
        self.passes = PassService(store, default_window_hours=window)
        self.live_positions = LivePositionService(self.satellites, self.telemetry, config)
        self.bulk_transfer = BulkTransferService(self.satellites, self.telemetry)
        self.initial_loader = InitialDataLoader(store)


def init_services(app, store: EntityStore = None) -> TrackerServices:
    """Build the services for `app` and register them as an extension."""
    services = TrackerServices(store or EntityStore(), app.config)
    app.extensions['tracker'] = services
    return services


def get_services() -> TrackerServices:
    """Services of the current application."""
    return current_app.extensions['tracker']


__all__ = [
    # Errors
    'TrackerError',
    'NotFoundError',
    'ValidationError',
    'ConfigurationError',
    'UpstreamError',

    # Services
    'EntityStore',
    'SatelliteService',
    'TelemetryService',
    'PassService',
    'LivePositionService',
    'BulkTransferService',
    'InitialDataLoader',

    # Wiring
    'TrackerServices',
    'init_services',
    'get_services',
]
