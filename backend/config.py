"""
Configuration management for the Satellite Telemetry Tracker backend.
"""
import os


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'telemetry-tracker-secret-key')

    # Database - in-memory SQLite by default (data lives for the process lifetime)
    # Set DATABASE_URL to a file or PostgreSQL URI to keep data across restarts
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite://')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Engine options - different for SQLite vs PostgreSQL
    @classmethod
    def get_engine_options(cls):
        db_uri = cls.SQLALCHEMY_DATABASE_URI
        if db_uri.startswith('sqlite'):
            # Flask-SQLAlchemy switches in-memory SQLite to a StaticPool itself
            return {
                'connect_args': {
                    'timeout': 30,  # Wait up to 30 seconds for lock
                    'check_same_thread': False,  # Allow multi-threaded access
                },
                'pool_pre_ping': True,
            }
        else:
            # PostgreSQL / other databases
            return {
                'pool_size': 10,
                'pool_recycle': 300,
                'pool_pre_ping': True,
            }

    SQLALCHEMY_ENGINE_OPTIONS = None  # Will be set dynamically

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    # N2YO tracking API (live positions)
    # Documentation: https://www.n2yo.com/api/
    # The key is only required by the live poll endpoint
    N2YO_API_URL = os.environ.get('N2YO_API_URL', 'https://api.n2yo.com/rest/v1/satellite')
    N2YO_API_KEY = os.environ.get('N2YO_API_KEY') or os.environ.get('SATELLITE_API_KEY')
    N2YO_TIMEOUT = float(os.environ.get('N2YO_TIMEOUT', 15))  # seconds

    # Observer used when the caller does not supply one (London)
    DEFAULT_OBSERVER = {
        'latitude': 51.5074,
        'longitude': -0.1278,
        'altitude': 0.0,
    }

    # Query windows (hours)
    DEFAULT_WINDOW_HOURS = 24

    # Satellites loaded into an empty catalog on startup
    SEED_DEFAULT_SATELLITES = os.environ.get('SEED_DEFAULT_SATELLITES', 'true').lower() == 'true'
    DEFAULT_SATELLITES = [
        {'norad_id': 25544, 'name': 'ISS (ZARYA)', 'category': 'Space Station',
         'country': 'ISS', 'launch_date': '1998-11-20', 'is_active': True},
        {'norad_id': 28654, 'name': 'NOAA-18', 'category': 'Weather',
         'country': 'US', 'launch_date': '2005-05-20', 'is_active': True},
        {'norad_id': 20580, 'name': 'HUBBLE SPACE TELESCOPE', 'category': 'Space Telescope',
         'country': 'US', 'launch_date': '1990-04-24', 'is_active': True},
        {'norad_id': 43013, 'name': 'STARLINK-1007', 'category': 'Communication',
         'country': 'US', 'launch_date': '2019-11-11', 'is_active': True},
        {'norad_id': 39084, 'name': 'WORLDVIEW-2', 'category': 'Earth Resources',
         'country': 'US', 'launch_date': '2009-10-08', 'is_active': True},
    ]


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration: private in-memory database, no provider key."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    N2YO_API_KEY = None
    SEED_DEFAULT_SATELLITES = False


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
