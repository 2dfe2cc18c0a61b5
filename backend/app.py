"""
Satellite Telemetry Tracker Backend Application
Flask application entry point with database initialization and API routes.
"""
import os
import logging
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate

from config import config
from models import db
from services import TrackerError, init_services
from utils.response_util import error_response, tracker_error_response


def configure_logging(app):
    """Configure root logging from the application config."""
    level = getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO)
    logging.basicConfig(level=level, format=app.config.get('LOG_FORMAT'))
    app.logger.setLevel(level)


def create_app(config_name=None):
    """
    Application factory function.

    Args:
        config_name: Configuration name ('development', 'production', 'testing' or 'default')

    Returns:
        Flask application instance
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])

    # Set dynamic engine options based on database type
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = config[config_name].get_engine_options()

    configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    Migrate(app, db)

    # Enable CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": "*",
            "methods": ["GET", "POST", "PUT", "PATCH", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    services = init_services(app)

    # Create tables and seed the catalog
    with app.app_context():
        db.create_all()
        if app.config.get('SEED_DEFAULT_SATELLITES'):
            services.initial_loader.run_initial_load(app.config['DEFAULT_SATELLITES'])

    # Register blueprints
    from routes.satellite_routes import satellite_bp
    from routes.pass_routes import pass_bp
    from routes.telemetry_routes import telemetry_bp

    app.register_blueprint(satellite_bp)
    app.register_blueprint(pass_bp)
    app.register_blueprint(telemetry_bp)

    # Health check endpoint
    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint for monitoring."""
        return jsonify({
            'status': 'ok',
            'message': 'Satellite Telemetry Tracker API is running',
            'version': '1.0.0',
            'data_source': 'N2YO live positions, CSV uploads',
            'live_polling_configured': bool(app.config.get('N2YO_API_KEY')),
        })

    # API info endpoint
    @app.route('/api', methods=['GET'])
    def api_info():
        """API information and available endpoints."""
        return jsonify({
            'name': 'Satellite Telemetry Tracker API',
            'version': '1.0.0',
            'endpoints': {
                'satellites': '/api/satellites',
                'telemetry': '/api/satellites/<id>/telemetry',
                'orbital_elements': '/api/satellites/<id>/orbital',
                'live_position': '/api/satellites/<id>/live',
                'export': '/api/satellites/<id>/export',
                'passes': '/api/passes',
                'upload': '/api/telemetry/upload',
                'health': '/api/health',
            }
        })

    # Error handlers
    @app.errorhandler(TrackerError)
    def tracker_error(error):
        if error.status_code >= 500:
            app.logger.error(f'{type(error).__name__}: {error.message}')
        return tracker_error_response(error)

    @app.errorhandler(404)
    def not_found(error):
        return error_response('Resource not found', 404)

    @app.errorhandler(405)
    def method_not_allowed(error):
        return error_response('Method not allowed', 405)

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return error_response('Internal server error', 500)

    return app


if __name__ == '__main__':
    app = create_app()
    port = int(os.environ.get('PORT', 5000))

    print("=" * 50)
    print("Satellite Telemetry Tracker API Server")
    print("=" * 50)
    print(f"Server running at: http://localhost:{port}")
    print(f"API documentation: http://localhost:{port}/api")
    print("=" * 50)

    app.run(
        host='0.0.0.0',
        port=port,
        debug=False,
        use_reloader=False
    )
