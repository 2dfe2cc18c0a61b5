"""
Entity Store

Generic create/get/list/update access to the four tracker collections:

- satellite:        catalog of tracked satellites
- telemetry:        append-only position samples
- pass:             append-only precomputed passes
- orbital_elements: append-only element-set snapshots

Identifiers come from AUTOINCREMENT primary keys, so they increase
monotonically and are never reused. Nothing is ever deleted.

All session work happens under one re-entrant lock, held for a single
operation only. The in-memory SQLite engine shares one connection between
threads, so the lock is the exclusive writer for every collection. Callers
must never hold it across network I/O.
"""
import logging
from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from models import db, Satellite, TelemetryPoint, SatellitePass, OrbitalElements
from services.errors import ValidationError

logger = logging.getLogger(__name__)


class EntityStore:
    """
    Lock-guarded access to the tracker collections.
    """

    KINDS = {
        'satellite': Satellite,
        'telemetry': TelemetryPoint,
        'pass': SatellitePass,
        'orbital_elements': OrbitalElements,
    }

    def __init__(self, database=None):
        self._db = database or db
        self._lock = RLock()

    def _model(self, kind: str):
        try:
            return self.KINDS[kind]
        except KeyError:
            raise KeyError(f'Unknown entity kind: {kind}')

    @staticmethod
    def _check_columns(model, payload: Dict[str, Any]):
        columns = set(model.__table__.columns.keys()) - {'id'}
        unknown = sorted(set(payload) - columns)
        if unknown:
            raise ValidationError(
                f'Unknown {model.__tablename__} fields',
                errors=[f'{name}: unknown field' for name in unknown]
            )

    @contextmanager
    def _transaction(self, kind: str):
        """
        Run one operation under the store lock and end its transaction
        before the lock is released, reads included.
        """
        with self._lock:
            session = self._db.session
            try:
                yield session
                session.commit()
            except IntegrityError as e:
                session.rollback()
                logger.warning(f"[EntityStore] Rejected {kind} write: {e.orig}")
                raise ValidationError(f'Conflicting {kind} data', errors=[str(e.orig)])
            except Exception:
                session.rollback()
                raise

    def create(self, kind: str, payload: Dict[str, Any]):
        """
        Insert a new entity and assign the next identifier of its collection.

        Args:
            kind: Entity kind (see KINDS)
            payload: Column values; `id` is ignored

        Returns:
            The stored entity
        """
        model = self._model(kind)
        values = {key: value for key, value in payload.items() if key != 'id'}
        self._check_columns(model, values)

        with self._transaction(kind) as session:
            entity = model(**values)
            session.add(entity)

        logger.debug(f"[EntityStore] Created {kind} #{entity.id}")
        return entity

    def get(self, kind: str, entity_id: int):
        """Return the entity with this id, or None."""
        model = self._model(kind)
        with self._transaction(kind) as session:
            entity = session.get(model, entity_id)
        return entity

    def list(self, kind: str) -> List:
        """Return every entity of a kind in insertion order."""
        model = self._model(kind)
        with self._transaction(kind) as session:
            entities = session.query(model).order_by(model.id.asc()).all()
        return entities

    def update(self, kind: str, entity_id: int, partial: Dict[str, Any]):
        """
        Shallow-merge `partial` into an existing entity.

        Fields not named in `partial` are left untouched. Returns None
        when the id does not exist.
        """
        model = self._model(kind)
        values = {key: value for key, value in partial.items() if key != 'id'}
        self._check_columns(model, values)

        with self._transaction(kind) as session:
            entity = session.get(model, entity_id)
            if entity is not None:
                for key, value in values.items():
                    setattr(entity, key, value)

        if entity is not None:
            logger.debug(f"[EntityStore] Updated {kind} #{entity_id}: {sorted(values)}")
        return entity

    def select(self, kind: str, *criteria, order_by=None, limit: Optional[int] = None) -> List:
        """
        Filtered read over one collection.

        Args:
            kind: Entity kind
            criteria: SQLAlchemy filter expressions
            order_by: Column expression or list of them (default: id)
            limit: Maximum number of rows
        """
        model = self._model(kind)
        if order_by is None:
            order_by = [model.id.asc()]
        elif not isinstance(order_by, (list, tuple)):
            order_by = [order_by]

        with self._transaction(kind) as session:
            query = session.query(model).filter(*criteria).order_by(*order_by)
            if limit is not None:
                query = query.limit(limit)
            rows = query.all()
        return rows

    def first(self, kind: str, *criteria, order_by=None):
        """First row of `select`, or None."""
        rows = self.select(kind, *criteria, order_by=order_by, limit=1)
        return rows[0] if rows else None

    def count(self, kind: str) -> int:
        model = self._model(kind)
        with self._transaction(kind) as session:
            total = session.query(model).count()
        return total
