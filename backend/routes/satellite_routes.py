"""
API routes for satellites, their telemetry and orbital elements.
"""
from flask import Blueprint, Response, jsonify, request
from services import NotFoundError, get_services

satellite_bp = Blueprint('satellites', __name__, url_prefix='/api/satellites')


@satellite_bp.route('', methods=['GET'])
def get_satellites():
    """
    Get tracked satellites in catalog order.

    Query parameters:
    - include_inactive: Also list deactivated satellites (default: false)
    """
    include_inactive = request.args.get('include_inactive', 'false').lower() == 'true'
    satellites = get_services().satellites.list_satellites(include_inactive=include_inactive)

    return jsonify({
        'count': len(satellites),
        'satellites': [sat.to_dict() for sat in satellites]
    })


@satellite_bp.route('', methods=['POST'])
def create_satellite():
    """Add a satellite to the catalog."""
    satellite = get_services().satellites.create_satellite(request.get_json(silent=True))
    return jsonify(satellite.to_dict()), 201


@satellite_bp.route('/<int:satellite_id>', methods=['GET'])
def get_satellite(satellite_id):
    """Get a satellite by ID."""
    satellite = get_services().satellites.require_satellite(satellite_id)
    return jsonify(satellite.to_dict())


@satellite_bp.route('/<int:satellite_id>', methods=['PUT', 'PATCH'])
def update_satellite(satellite_id):
    """
    Update a satellite. Only the fields present in the body are changed.
    """
    satellite = get_services().satellites.update_satellite(
        satellite_id, request.get_json(silent=True)
    )
    if satellite is None:
        raise NotFoundError('Satellite not found')
    return jsonify(satellite.to_dict())


@satellite_bp.route('/<int:satellite_id>/telemetry', methods=['GET'])
def get_satellite_telemetry(satellite_id):
    """
    Get the latest sample and the recent history of a satellite.

    Query parameters:
    - hours: History window in hours (default: 24)
    """
    services = get_services()
    hours = request.args.get('hours')

    latest = services.telemetry.latest(satellite_id)
    history = services.telemetry.history(satellite_id, hours)

    return jsonify({
        'satellite_id': satellite_id,
        'latest': latest.to_dict() if latest else None,
        'history': [point.to_dict() for point in history],
    })


@satellite_bp.route('/<int:satellite_id>/telemetry', methods=['POST'])
def create_satellite_telemetry(satellite_id):
    """
    Record a telemetry sample by hand.
    The timestamp defaults to the time of the request.
    """
    point = get_services().telemetry.create(satellite_id, request.get_json(silent=True))
    return jsonify(point.to_dict()), 201


@satellite_bp.route('/<int:satellite_id>/orbital', methods=['GET'])
def get_orbital_elements(satellite_id):
    """Get the most recent orbital element set of a satellite."""
    elements = get_services().satellites.get_latest_orbital_elements(satellite_id)
    if elements is None:
        raise NotFoundError('No orbital elements found')
    return jsonify(elements.to_dict())


@satellite_bp.route('/<int:satellite_id>/orbital', methods=['POST'])
def create_orbital_elements(satellite_id):
    """Store an orbital element set for a satellite."""
    elements = get_services().satellites.create_orbital_elements(
        satellite_id, request.get_json(silent=True)
    )
    return jsonify(elements.to_dict()), 201


@satellite_bp.route('/<int:satellite_id>/live', methods=['GET'])
def get_live_position(satellite_id):
    """
    Fetch the live position from N2YO and store it as telemetry.

    Query parameters:
    - lat: Observer latitude (default: 51.5074)
    - lng: Observer longitude (default: -0.1278)
    - alt: Observer altitude (default: 0)
    """
    result = get_services().live_positions.poll(
        satellite_id,
        latitude=request.args.get('lat', type=float),
        longitude=request.args.get('lng', type=float),
        altitude=request.args.get('alt', type=float),
    )
    return jsonify(result)


@satellite_bp.route('/<int:satellite_id>/export', methods=['GET'])
def export_telemetry(satellite_id):
    """
    Export the telemetry history of a satellite.

    Query parameters:
    - format: 'csv' (default) or 'json'
    - hours: History window in hours (default: 24)
    """
    bulk_transfer = get_services().bulk_transfer
    export_format = request.args.get('format', 'csv').lower()
    hours = request.args.get('hours')

    if export_format == 'csv':
        filename = bulk_transfer.export_filename(satellite_id)
        return Response(
            bulk_transfer.export_csv(satellite_id, hours),
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename="{filename}"'}
        )

    return jsonify(bulk_transfer.export_json(satellite_id, hours))
