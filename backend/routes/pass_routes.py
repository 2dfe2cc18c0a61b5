"""
API routes for predicted satellite passes.
"""
from flask import Blueprint, jsonify, request
from services import get_services

pass_bp = Blueprint('passes', __name__, url_prefix='/api/passes')


@pass_bp.route('', methods=['GET'])
def get_upcoming_passes():
    """
    Get passes starting within the next hours, soonest first.

    Query parameters:
    - satelliteId: Restrict to one satellite (default: all)
    - hours: Look-ahead window in hours (default: 24)
    """
    satellite_id = request.args.get('satelliteId', type=int)
    if satellite_id is None:
        satellite_id = request.args.get('satellite_id', type=int)
    hours = request.args.get('hours')

    passes = get_services().passes.upcoming(satellite_id, hours)

    return jsonify({
        'count': len(passes),
        'passes': [p.to_dict() for p in passes]
    })


@pass_bp.route('', methods=['POST'])
def create_pass():
    """Store a predicted pass."""
    satellite_pass = get_services().passes.create(request.get_json(silent=True))
    return jsonify(satellite_pass.to_dict()), 201
