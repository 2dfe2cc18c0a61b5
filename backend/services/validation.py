"""
Payload validation for satellites, telemetry, passes and orbital elements.

Payloads arrive as JSON objects (or CSV rows) and are cleaned into keyword
arguments for the models. Keys may use the snake_case model names or the
camelCase spelling the dashboard sends; unknown keys are dropped.
"""
import math
from typing import Any, Callable, Dict, Optional, Tuple

from models import TelemetryPoint
from services.errors import ValidationError
from utils.time_util import parse_timestamp


def parse_float(value) -> float:
    """Parse a finite real number."""
    if isinstance(value, bool):
        raise ValueError('expected a number')
    number = float(value)
    if not math.isfinite(number):
        raise ValueError('expected a finite number')
    return number


def parse_int(value) -> int:
    """Parse an integer, accepting integral floats and numeric strings."""
    if isinstance(value, bool):
        raise ValueError('expected an integer')
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError('expected an integer')
        return int(value)
    return int(str(value).strip())


def parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ('true', '1', 'yes'):
        return True
    if isinstance(value, str) and value.strip().lower() in ('false', '0', 'no'):
        return False
    raise ValueError('expected a boolean')


def parse_text(value) -> str:
    if not isinstance(value, str):
        raise ValueError('expected a string')
    text = value.strip()
    if not text:
        raise ValueError('must not be empty')
    return text


def parse_visibility(value) -> str:
    text = parse_text(value).lower()
    if text not in TelemetryPoint.VISIBILITY_VALUES:
        choices = ', '.join(repr(choice) for choice in TelemetryPoint.VISIBILITY_VALUES)
        raise ValueError(f'expected one of {choices}')
    return text


class Field:
    """Describes one payload field: its parser, aliases and whether it is required."""

    def __init__(self, parser: Callable[[Any], Any], required: bool = False,
                 aliases: Tuple[str, ...] = (), default: Any = None):
        self.parser = parser
        self.required = required
        self.aliases = aliases
        self.default = default


SATELLITE_FIELDS = {
    'norad_id': Field(parse_int, required=True, aliases=('noradId',)),
    'name': Field(parse_text, required=True),
    'category': Field(parse_text),
    'launch_date': Field(parse_text, aliases=('launchDate',)),
    'country': Field(parse_text),
    'is_active': Field(parse_bool, aliases=('isActive',), default=True),
}

TELEMETRY_FIELDS = {
    'timestamp': Field(parse_timestamp, required=True),
    'latitude': Field(parse_float, required=True),
    'longitude': Field(parse_float, required=True),
    'altitude': Field(parse_float, required=True),
    'azimuth': Field(parse_float),
    'declination': Field(parse_float),
    'right_ascension': Field(parse_float, aliases=('rightAscension',)),
    'velocity': Field(parse_float),
    'visibility': Field(parse_visibility),
}

PASS_FIELDS = {
    'satellite_id': Field(parse_int, aliases=('satelliteId',)),
    'start_time': Field(parse_timestamp, required=True, aliases=('startTime',)),
    'end_time': Field(parse_timestamp, required=True, aliases=('endTime',)),
    'max_elevation': Field(parse_float, required=True, aliases=('maxElevation',)),
    'direction': Field(parse_text),
    'magnitude': Field(parse_float),
}

ORBITAL_ELEMENTS_FIELDS = {
    'epoch': Field(parse_timestamp, required=True),
    'mean_motion': Field(parse_float, required=True, aliases=('meanMotion',)),
    'eccentricity': Field(parse_float, required=True),
    'inclination': Field(parse_float, required=True),
    'raan': Field(parse_float, required=True),
    'arg_perigee': Field(parse_float, required=True, aliases=('argPerigee',)),
    'mean_anomaly': Field(parse_float, required=True, aliases=('meanAnomaly',)),
    'bstar_drag': Field(parse_float, aliases=('bstarDrag',)),
    'period': Field(parse_float),
}


def _lookup(payload: Dict, name: str, field: Field):
    """Return (present, value) for a field under its own name or an alias."""
    for key in (name,) + field.aliases:
        if key in payload:
            return True, payload[key]
    return False, None


def clean_payload(fields: Dict[str, Field], payload: Optional[Dict],
                  partial: bool = False, what: str = 'payload') -> Dict:
    """
    Validate a payload against a field table.

    Args:
        fields: Field table (one of the *_FIELDS mappings)
        payload: Incoming mapping
        partial: Only validate the fields present (update path)
        what: Noun used in the error message

    Returns:
        Dictionary of cleaned values keyed by model attribute name

    Raises:
        ValidationError: listing every invalid or missing field
    """
    if not isinstance(payload, dict):
        raise ValidationError(f'Invalid {what}', errors=['expected a JSON object'])

    cleaned = {}
    errors = []

    for name, field in fields.items():
        present, value = _lookup(payload, name, field)
        empty = value is None or (isinstance(value, str) and not value.strip())

        if not present or empty:
            if field.required and (not partial or present):
                errors.append(f'{name}: is required')
            elif present and field.default is not None:
                errors.append(f'{name}: must not be empty')
            elif present:
                cleaned[name] = None
            elif not partial and field.default is not None:
                cleaned[name] = field.default
            continue

        try:
            cleaned[name] = field.parser(value)
        except (TypeError, ValueError) as e:
            errors.append(f'{name}: {e}')

    if errors:
        raise ValidationError(f'Invalid {what}', errors=errors)

    return cleaned


def coerce_window_hours(value, default: float = 24) -> float:
    """
    Interpret a query window in hours.

    Missing, non-numeric, non-finite, zero or negative values fall back to
    `default` instead of raising.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(hours) or hours <= 0:
        return default
    return hours
