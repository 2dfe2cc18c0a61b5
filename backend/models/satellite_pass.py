"""
Satellite pass model for precomputed visibility windows.
"""
from . import db
from utils.time_util import isoformat_utc


class SatellitePass(db.Model):
    """
    A precomputed pass of a satellite over the observer.
    """
    __tablename__ = 'satellite_passes'
    __table_args__ = (
        db.Index('ix_pass_satellite_start', 'satellite_id', 'start_time'),
        {'sqlite_autoincrement': True},
    )

    id = db.Column(db.Integer, primary_key=True)
    satellite_id = db.Column(db.Integer, nullable=True)
    start_time = db.Column(db.DateTime, nullable=False, index=True)
    end_time = db.Column(db.DateTime, nullable=False)
    max_elevation = db.Column(db.Float, nullable=False)  # degrees
    direction = db.Column(db.String(50))  # e.g. 'NW to SE'
    magnitude = db.Column(db.Float)

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'satellite_id': self.satellite_id,
            'start_time': isoformat_utc(self.start_time),
            'end_time': isoformat_utc(self.end_time),
            'max_elevation': self.max_elevation,
            'direction': self.direction,
            'magnitude': self.magnitude,
        }

    def __repr__(self):
        return f'<SatellitePass satellite_id={self.satellite_id} start={self.start_time}>'
