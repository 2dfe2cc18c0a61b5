"""
Telemetry model for sampled satellite positions.
"""
from . import db
from utils.time_util import isoformat_utc


class TelemetryPoint(db.Model):
    """
    A single position/pointing sample for a satellite.

    Rows are append-only. `satellite_id` is not a foreign key: samples for
    satellites missing from the catalog are kept as they are.
    """
    __tablename__ = 'telemetry_data'
    __table_args__ = (
        db.Index('ix_telemetry_satellite_timestamp', 'satellite_id', 'timestamp'),
        {'sqlite_autoincrement': True},
    )

    VISIBILITY_VALUES = ('visible', 'eclipse', 'hidden')

    id = db.Column(db.Integer, primary_key=True)
    satellite_id = db.Column(db.Integer, nullable=True)
    timestamp = db.Column(db.DateTime, nullable=False)

    # Sub-satellite point
    latitude = db.Column(db.Float, nullable=False)  # degrees
    longitude = db.Column(db.Float, nullable=False)  # degrees
    altitude = db.Column(db.Float, nullable=False)  # km

    # Observer-relative pointing
    azimuth = db.Column(db.Float)
    declination = db.Column(db.Float)
    right_ascension = db.Column(db.Float)
    velocity = db.Column(db.Float)  # km/s
    visibility = db.Column(db.String(20))

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'satellite_id': self.satellite_id,
            'timestamp': isoformat_utc(self.timestamp),
            'latitude': self.latitude,
            'longitude': self.longitude,
            'altitude': self.altitude,
            'azimuth': self.azimuth,
            'declination': self.declination,
            'right_ascension': self.right_ascension,
            'velocity': self.velocity,
            'visibility': self.visibility,
        }

    def __repr__(self):
        return f'<TelemetryPoint satellite_id={self.satellite_id} timestamp={self.timestamp}>'
