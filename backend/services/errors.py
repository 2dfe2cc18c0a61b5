"""
Error types raised by the tracker services.

Each error carries the HTTP status the API layer answers with.
"""


class TrackerError(Exception):
    """Base exception for tracker errors"""
    status_code = 500

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class NotFoundError(TrackerError):
    """Raised when a satellite, element set or position sample is absent"""
    status_code = 404


class ValidationError(TrackerError):
    """Raised when a create/update/import payload is malformed"""
    status_code = 400


class ConfigurationError(TrackerError):
    """Raised when required process configuration is missing"""
    status_code = 500


class UpstreamError(TrackerError):
    """Raised when the tracking provider fails or answers with an error"""
    status_code = 502
