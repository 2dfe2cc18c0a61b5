"""
Pass schedule service.

Reads the precomputed pass collection through a forward-looking window.
"""
from datetime import datetime
from typing import Dict, List, Optional

from models import SatellitePass
from services.entity_store import EntityStore
from services.errors import ValidationError
from services.validation import PASS_FIELDS, clean_payload, coerce_window_hours
from utils.time_util import utc_now, window_end


class PassService:
    """
    Service for upcoming satellite passes.
    """

    def __init__(self, store: EntityStore, default_window_hours: float = 24):
        self.store = store
        self.default_window_hours = default_window_hours

    def upcoming(self, satellite_id: Optional[int] = None, window_hours=None,
                 now: Optional[datetime] = None) -> List[SatellitePass]:
        """
        Get passes starting within [now, now + window_hours], soonest first.

        Args:
            satellite_id: Restrict to one satellite (default: all)
            window_hours: Window length in hours (invalid values use the default)
            now: Start of the window (default: current time)
        """
        hours = coerce_window_hours(window_hours, self.default_window_hours)
        now = now or utc_now()
        future = window_end(hours, now)

        criteria = [
            SatellitePass.start_time >= now,
            SatellitePass.start_time <= future,
        ]
        if satellite_id is not None:
            criteria.append(SatellitePass.satellite_id == satellite_id)

        return self.store.select(
            'pass',
            *criteria,
            order_by=[SatellitePass.start_time.asc(), SatellitePass.id.asc()],
        )

    def create(self, payload: Dict) -> SatellitePass:
        """
        Store a predicted pass.

        Raises:
            ValidationError: on malformed payload or end_time <= start_time
        """
        values = clean_payload(PASS_FIELDS, payload, what='pass data')
        if values['end_time'] <= values['start_time']:
            raise ValidationError('Invalid pass data', errors=['end_time: must be after start_time'])
        return self.store.create('pass', values)
