"""
Initial Data Loader Service

Seeds the satellite catalog when the application starts with an empty
database. With the default in-memory database this runs on every start;
with a durable DATABASE_URL it only runs the first time.
"""
import logging
from typing import Dict, List

from services.entity_store import EntityStore

logger = logging.getLogger(__name__)


class InitialDataLoader:
    """
    Handles first-time catalog loading for the application.
    """

    def __init__(self, store: EntityStore):
        self.store = store

    def needs_initial_load(self) -> bool:
        """True if the satellite catalog is empty."""
        return self.store.count('satellite') == 0

    def run_initial_load(self, satellites: List[Dict]) -> int:
        """
        Load the default satellites.

        Args:
            satellites: Satellite payloads (see Config.DEFAULT_SATELLITES)

        Returns:
            Number of satellites added
        """
        if not self.needs_initial_load():
            logger.info("[InitialLoader] Catalog already populated, skipping seed")
            return 0

        added = 0
        for payload in satellites:
            self.store.create('satellite', dict(payload))
            added += 1

        logger.info(f"[InitialLoader] Seeded {added} default satellites")
        return added
