"""
API routes for bulk telemetry upload.
"""
from flask import Blueprint, request
from services import ValidationError, get_services
from services.validation import parse_int
from utils.response_util import success_response

telemetry_bp = Blueprint('telemetry', __name__, url_prefix='/api/telemetry')


@telemetry_bp.route('/upload', methods=['POST'])
def upload_csv():
    """
    Import telemetry rows from CSV text.

    Body (JSON):
    - csv_data: CSV document with at least timestamp, latitude, longitude, altitude
    - satellite_id: Satellite the rows belong to
    """
    body = request.get_json(silent=True) or {}
    csv_data = body.get('csv_data', body.get('csvData'))
    satellite_id = body.get('satellite_id', body.get('satelliteId'))

    if not csv_data or satellite_id in (None, ''):
        raise ValidationError('CSV data and satellite ID required')

    try:
        satellite_id = parse_int(satellite_id)
    except ValueError:
        raise ValidationError('Invalid satellite ID', errors=['satellite_id: expected an integer'])

    result = get_services().bulk_transfer.import_csv(csv_data, satellite_id)

    return success_response(
        data=result,
        message=f"Successfully processed {result['processed_count']} records"
    )
