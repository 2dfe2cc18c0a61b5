"""
Telemetry query service.

"Latest" and windowed "history" reads over the telemetry collection, plus
the manual entry path. Both reads are indexed queries on
(satellite_id, timestamp); equal timestamps are ordered by insertion (id).
"""
from datetime import datetime
from typing import Dict, List, Optional

from models import TelemetryPoint
from services.entity_store import EntityStore
from services.validation import TELEMETRY_FIELDS, clean_payload, coerce_window_hours
from utils.time_util import utc_now, window_start


class TelemetryService:
    """
    Service for reading and appending telemetry samples.
    """

    def __init__(self, store: EntityStore, default_window_hours: float = 24):
        self.store = store
        self.default_window_hours = default_window_hours

    def latest(self, satellite_id: int) -> Optional[TelemetryPoint]:
        """
        Get the sample with the greatest timestamp for a satellite.

        Returns:
            The latest sample, or None when the satellite has no telemetry
        """
        return self.store.first(
            'telemetry',
            TelemetryPoint.satellite_id == satellite_id,
            order_by=[TelemetryPoint.timestamp.desc(), TelemetryPoint.id.desc()],
        )

    def history(self, satellite_id: int, window_hours=None,
                now: Optional[datetime] = None) -> List[TelemetryPoint]:
        """
        Get the samples of the trailing window, oldest first.

        Args:
            satellite_id: Satellite ID
            window_hours: Window length in hours (invalid values use the default)
            now: End of the window (default: current time)
        """
        hours = coerce_window_hours(window_hours, self.default_window_hours)
        cutoff = window_start(hours, now or utc_now())

        return self.store.select(
            'telemetry',
            TelemetryPoint.satellite_id == satellite_id,
            TelemetryPoint.timestamp >= cutoff,
            order_by=[TelemetryPoint.timestamp.asc(), TelemetryPoint.id.asc()],
        )

    def create(self, satellite_id: Optional[int], payload: Dict) -> TelemetryPoint:
        """
        Append a manually entered sample.

        The timestamp defaults to the current time. The satellite is not
        required to exist.
        """
        if isinstance(payload, dict) and not payload.get('timestamp'):
            payload = {**payload, 'timestamp': utc_now()}

        values = clean_payload(TELEMETRY_FIELDS, payload, what='telemetry data')
        values['satellite_id'] = satellite_id
        return self.store.create('telemetry', values)

    def record(self, values: Dict) -> TelemetryPoint:
        """Append an already validated sample (poller and CSV import)."""
        return self.store.create('telemetry', values)
