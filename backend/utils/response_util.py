"""
JSON envelopes for API responses.

Read endpoints return their payload directly; write endpoints that report a
summary and every error path use these envelopes.
"""
from flask import jsonify


def success_response(data=None, message=None, status_code=200):
    """
    Build a success envelope: {'status': 'success', 'message': ..., 'data': ...}.

    Returns:
        Flask response tuple
    """
    body = {'status': 'success'}
    if message:
        body['message'] = message
    if data is not None:
        body['data'] = data
    return jsonify(body), status_code


def error_response(message, status_code=400, errors=None):
    """
    Build an error envelope: {'status': 'error', 'error': ..., 'errors': [...]}.

    `errors` lists per-field problems (for example 'latitude: expected a number')
    and is omitted when empty.
    """
    body = {
        'status': 'error',
        'error': message,
    }
    if errors:
        body['errors'] = list(errors)
    return jsonify(body), status_code


def tracker_error_response(error):
    """Error envelope for a services.errors.TrackerError."""
    return error_response(error.message, error.status_code, error.errors)
