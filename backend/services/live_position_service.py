"""
N2YO Live Position Service

Fetches the current position of one satellite from the N2YO tracking API
and appends it to the telemetry collection.

API Documentation: https://www.n2yo.com/api/

Endpoint used:
    GET /positions/{norad_id}/{observer_lat}/{observer_lng}/{observer_alt}/{seconds}/?apiKey=...

Calls are not retried or rate limited here. N2YO allows 1000 position
requests per hour per key; callers that poll in a loop must pace themselves.
"""
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from services.errors import ConfigurationError, NotFoundError, UpstreamError
from services.satellite_service import SatelliteService
from services.telemetry_service import TelemetryService
from services.validation import parse_float
from utils.time_util import utc_now

logger = logging.getLogger(__name__)


class LivePositionService:
    """
    Service for polling live positions from N2YO.

    Order of work for one poll:
    1. Resolve the satellite and the API key (no network yet)
    2. Call N2YO with no store lock held
    3. Map the first position into a complete telemetry record
    4. Append it through the telemetry service
    """

    DEFAULT_URL = 'https://api.n2yo.com/rest/v1/satellite'
    DEFAULT_TIMEOUT = 15
    SAMPLE_SECONDS = 1  # one position sample per request

    def __init__(self, satellites: SatelliteService, telemetry: TelemetryService,
                 config: Mapping[str, Any], session: Optional[requests.Session] = None):
        """
        Args:
            satellites: Catalog service used to resolve NORAD IDs
            telemetry: Telemetry service used to persist the sample
            config: Application config, read at call time
            session: HTTP session (default: a new requests.Session)
        """
        self.satellites = satellites
        self.telemetry = telemetry
        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'satellite-telemetry-tracker/1.0',
        })

    def _api_key(self) -> str:
        api_key = self.config.get('N2YO_API_KEY')
        if not api_key:
            raise ConfigurationError('N2YO API key not configured')
        return api_key

    def _observer(self, latitude, longitude, altitude) -> Dict[str, float]:
        defaults = self.config.get('DEFAULT_OBSERVER') or {}
        return {
            'latitude': defaults.get('latitude', 51.5074) if latitude is None else latitude,
            'longitude': defaults.get('longitude', -0.1278) if longitude is None else longitude,
            'altitude': defaults.get('altitude', 0.0) if altitude is None else altitude,
        }

    def fetch_positions(self, norad_id: int, observer: Dict[str, float], api_key: str) -> Dict:
        """
        Call the N2YO positions endpoint.

        Returns:
            Decoded JSON payload

        Raises:
            UpstreamError: on transport failure, timeout, HTTP error status,
                non-JSON body or an error reported in the body
        """
        base_url = (self.config.get('N2YO_API_URL') or self.DEFAULT_URL).rstrip('/')
        url = (
            f"{base_url}/positions/{norad_id}/"
            f"{observer['latitude']}/{observer['longitude']}/{observer['altitude']}/"
            f"{self.SAMPLE_SECONDS}/"
        )
        timeout = self.config.get('N2YO_TIMEOUT') or self.DEFAULT_TIMEOUT

        try:
            response = self.session.get(url, params={'apiKey': api_key}, timeout=timeout)
        except requests.Timeout:
            logger.error(f"[N2YO] Request for NORAD {norad_id} timed out after {timeout}s")
            raise UpstreamError('N2YO API request timed out')
        except requests.RequestException as e:
            logger.error(f"[N2YO] Request for NORAD {norad_id} failed: {e}")
            raise UpstreamError('N2YO API unavailable')

        if not response.ok:
            logger.error(f"[N2YO] HTTP {response.status_code} for NORAD {norad_id}")
            raise UpstreamError(f'N2YO API error: {response.status_code}')

        try:
            data = response.json()
        except ValueError:
            logger.error(f"[N2YO] Non-JSON response for NORAD {norad_id}: {response.text[:100]}")
            raise UpstreamError('N2YO API returned an invalid response')

        if not isinstance(data, dict):
            raise UpstreamError('N2YO API returned an invalid response')
        if data.get('error'):
            logger.error(f"[N2YO] API error for NORAD {norad_id}: {data['error']}")
            raise UpstreamError(f"N2YO API error: {data['error']}")

        return data

    @staticmethod
    def map_position(data: Dict) -> Dict:
        """
        Map the first N2YO position into telemetry column values.

        Raises:
            NotFoundError: when the payload carries no positions
            UpstreamError: when a required position field is missing or malformed
        """
        positions = data.get('positions') or []
        if not positions:
            raise NotFoundError('No position data available')
        if not isinstance(positions, list) or not isinstance(positions[0], dict):
            raise UpstreamError('N2YO API returned a malformed position list')

        position = positions[0]
        info = data.get('info') or {}
        if not isinstance(info, dict):
            raise UpstreamError('N2YO API returned a malformed info block')

        def optional(value):
            return None if value is None else parse_float(value)

        try:
            return {
                'timestamp': utc_now(),
                'latitude': parse_float(position['satlatitude']),
                'longitude': parse_float(position['satlongitude']),
                'altitude': parse_float(position['sataltitude']),
                'azimuth': optional(position.get('azimuth')),
                'declination': optional(position.get('dec')),
                'right_ascension': optional(position.get('ra')),
                'velocity': optional(info.get('velocity')),
                'visibility': 'eclipse' if position.get('eclipsed') else 'visible',
            }
        except (KeyError, TypeError, ValueError) as e:
            raise UpstreamError(f'N2YO API returned a malformed position: {e}')

    def poll(self, satellite_id: int, latitude: Optional[float] = None,
             longitude: Optional[float] = None, altitude: Optional[float] = None) -> Dict:
        """
        Fetch and store the live position of a satellite.

        Args:
            satellite_id: Satellite ID
            latitude: Observer latitude (default: configured observer)
            longitude: Observer longitude (default: configured observer)
            altitude: Observer altitude (default: configured observer)

        Returns:
            The N2YO payload with the stored record under 'telemetry_data'
        """
        satellite = self.satellites.require_satellite(satellite_id)
        api_key = self._api_key()
        observer = self._observer(latitude, longitude, altitude)

        data = self.fetch_positions(satellite.norad_id, observer, api_key)
        values = self.map_position(data)
        values['satellite_id'] = satellite.id

        stored = self.telemetry.record(values)
        logger.info(
            f"[N2YO] {satellite.name}: lat={stored.latitude:.4f} "
            f"lon={stored.longitude:.4f} alt={stored.altitude:.1f}km"
        )

        return {**data, 'telemetry_data': stored.to_dict()}
