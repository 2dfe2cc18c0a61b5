"""
Satellite model for tracked satellites.
"""
from . import db


class Satellite(db.Model):
    """
    Represents a tracked satellite in the catalog.

    Satellites are never deleted; `is_active` is cleared instead.
    """
    __tablename__ = 'satellites'
    __table_args__ = {'sqlite_autoincrement': True}

    id = db.Column(db.Integer, primary_key=True)
    norad_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    category = db.Column(db.String(50))
    launch_date = db.Column(db.String(30))  # free-text date as supplied
    country = db.Column(db.String(30))
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def to_dict(self):
        """Convert model to dictionary."""
        return {
            'id': self.id,
            'norad_id': self.norad_id,
            'name': self.name,
            'category': self.category,
            'launch_date': self.launch_date,
            'country': self.country,
            'is_active': self.is_active,
        }

    def __repr__(self):
        return f'<Satellite {self.name} (NORAD: {self.norad_id})>'
