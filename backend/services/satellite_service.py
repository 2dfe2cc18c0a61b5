"""
Satellite catalog service.

Handles the satellite collection and the orbital-element snapshots kept
for each satellite.
"""
import logging
from typing import Dict, List, Optional

from models import Satellite, OrbitalElements
from services.entity_store import EntityStore
from services.errors import NotFoundError, ValidationError
from services.validation import (
    ORBITAL_ELEMENTS_FIELDS,
    SATELLITE_FIELDS,
    clean_payload,
)

logger = logging.getLogger(__name__)


class SatelliteService:
    """
    Service for the satellite catalog and its orbital elements.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def list_satellites(self, include_inactive: bool = False) -> List[Satellite]:
        """
        List satellites in insertion order.

        Args:
            include_inactive: Also return deactivated satellites
        """
        satellites = self.store.list('satellite')
        if include_inactive:
            return satellites
        return [sat for sat in satellites if sat.is_active]

    def get_satellite(self, satellite_id: int) -> Optional[Satellite]:
        return self.store.get('satellite', satellite_id)

    def require_satellite(self, satellite_id: int) -> Satellite:
        """Get a satellite or raise NotFoundError."""
        satellite = self.get_satellite(satellite_id)
        if satellite is None:
            raise NotFoundError('Satellite not found')
        return satellite

    def get_by_norad_id(self, norad_id: int) -> Optional[Satellite]:
        return self.store.first('satellite', Satellite.norad_id == norad_id)

    def create_satellite(self, payload: Dict) -> Satellite:
        """
        Create a satellite from an API payload.

        Raises:
            ValidationError: on malformed payload or duplicate NORAD ID
        """
        values = clean_payload(SATELLITE_FIELDS, payload, what='satellite data')

        if self.get_by_norad_id(values['norad_id']) is not None:
            raise ValidationError(
                'Invalid satellite data',
                errors=[f"norad_id: {values['norad_id']} is already tracked"]
            )

        satellite = self.store.create('satellite', values)
        logger.info(f"[Satellites] Added {satellite.name} (NORAD: {satellite.norad_id})")
        return satellite

    def update_satellite(self, satellite_id: int, payload: Dict) -> Optional[Satellite]:
        """
        Merge the fields present in `payload` into a satellite.

        Returns:
            Updated satellite, or None if it does not exist
        """
        values = clean_payload(SATELLITE_FIELDS, payload, partial=True, what='satellite data')

        norad_id = values.get('norad_id')
        if norad_id is not None:
            existing = self.get_by_norad_id(norad_id)
            if existing is not None and existing.id != satellite_id:
                raise ValidationError(
                    'Invalid satellite data',
                    errors=[f'norad_id: {norad_id} is already tracked']
                )

        return self.store.update('satellite', satellite_id, values)

    def get_latest_orbital_elements(self, satellite_id: int) -> Optional[OrbitalElements]:
        """Most recent element set by epoch (later insert wins a tie)."""
        return self.store.first(
            'orbital_elements',
            OrbitalElements.satellite_id == satellite_id,
            order_by=[OrbitalElements.epoch.desc(), OrbitalElements.id.desc()],
        )

    def create_orbital_elements(self, satellite_id: Optional[int], payload: Dict) -> OrbitalElements:
        values = clean_payload(ORBITAL_ELEMENTS_FIELDS, payload, what='orbital elements')
        values['satellite_id'] = satellite_id
        return self.store.create('orbital_elements', values)
