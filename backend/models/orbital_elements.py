"""
Orbital elements model for element-set snapshots.
"""
from . import db
from utils.time_util import isoformat_utc


class OrbitalElements(db.Model):
    """
    Stores a snapshot of a satellite's mean orbital elements at an epoch.
    Several snapshots per satellite are kept, ordered by epoch.
    """
    __tablename__ = 'orbital_elements'
    __table_args__ = (
        db.Index('ix_orbital_satellite_epoch', 'satellite_id', 'epoch'),
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True)
    satellite_id = db.Column(db.Integer, nullable=True)
    epoch = db.Column(db.DateTime, nullable=False)

    mean_motion = db.Column(db.Float, nullable=False)  # revolutions per day
    eccentricity = db.Column(db.Float, nullable=False)
    inclination = db.Column(db.Float, nullable=False)  # degrees
    raan = db.Column(db.Float, nullable=False)  # degrees
    arg_perigee = db.Column(db.Float, nullable=False)  # degrees
    mean_anomaly = db.Column(db.Float, nullable=False)  # degrees
    bstar_drag = db.Column(db.Float)
    period = db.Column(db.Float)  # minutes

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'satellite_id': self.satellite_id,
            'epoch': isoformat_utc(self.epoch),
            'mean_motion': self.mean_motion,
            'eccentricity': self.eccentricity,
            'inclination': self.inclination,
            'raan': self.raan,
            'arg_perigee': self.arg_perigee,
            'mean_anomaly': self.mean_anomaly,
            'bstar_drag': self.bstar_drag,
            'period': self.period,
        }

    def __repr__(self):
        return f'<OrbitalElements satellite_id={self.satellite_id} epoch={self.epoch}>'
