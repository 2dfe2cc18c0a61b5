"""
Bulk telemetry transfer service.

CSV import (with header check and per-row recovery) and CSV/JSON export of
a satellite's telemetry history.

CSV dialect: rows are read with the standard `csv` grammar, so a quoted
cell may contain commas. Blank lines are dropped before parsing and a
record may not span several lines.
"""
import csv
import io
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from services.errors import TrackerError, ValidationError
from services.satellite_service import SatelliteService
from services.telemetry_service import TelemetryService
from services.validation import parse_float
from utils.time_util import isoformat_utc, parse_timestamp, utc_now

logger = logging.getLogger(__name__)


REQUIRED_HEADERS = ['timestamp', 'latitude', 'longitude', 'altitude']

EXPORT_HEADERS = [
    'timestamp', 'latitude', 'longitude', 'altitude',
    'azimuth', 'declination', 'velocity', 'visibility',
]


def _split_line(line: str) -> List[str]:
    """Split one physical line into cells; an open quote ends with the line."""
    return next(csv.reader([line]))


def _cell(row: Dict[str, Optional[str]], name: str) -> Optional[str]:
    value = row.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def _optional_float(row: Dict[str, Optional[str]], name: str) -> Optional[float]:
    value = _cell(row, name)
    return None if value is None else parse_float(value)


def parse_row(row: Dict[str, Optional[str]]) -> Dict:
    """
    Convert one CSV row (header -> cell) into telemetry column values.

    Raises:
        ValueError: if a required cell is missing or a cell does not parse
    """
    timestamp = _cell(row, 'timestamp')
    if timestamp is None:
        raise ValueError('timestamp is empty')

    values = {
        'timestamp': parse_timestamp(timestamp),
        'azimuth': _optional_float(row, 'azimuth'),
        'declination': _optional_float(row, 'declination'),
        'right_ascension': _optional_float(row, 'right_ascension'),
        'velocity': _optional_float(row, 'velocity'),
        'visibility': _cell(row, 'visibility'),
    }
    for name in ('latitude', 'longitude', 'altitude'):
        value = _cell(row, name)
        if value is None:
            raise ValueError(f'{name} is empty')
        values[name] = parse_float(value)

    return values


class BulkTransferService:
    """
    Service for CSV ingestion and telemetry export.
    """

    def __init__(self, satellites: SatelliteService, telemetry: TelemetryService):
        self.satellites = satellites
        self.telemetry = telemetry

    def import_csv(self, raw_text: str, satellite_id: int) -> Dict[str, int]:
        """
        Import telemetry rows from CSV text.

        The first non-empty line is the header. Rows that fail to parse are
        logged and skipped; they count in total_rows but not processed_count.

        Args:
            raw_text: CSV document
            satellite_id: Satellite the rows belong to (not required to exist)

        Returns:
            {'processed_count': stored rows, 'total_rows': data rows}

        Raises:
            ValidationError: when the input is empty or required headers are missing
        """
        if not isinstance(raw_text, str):
            raise ValidationError('CSV data must be text')

        lines = [line for line in raw_text.splitlines() if line.strip()]
        if not lines:
            raise ValidationError('CSV data is empty')

        try:
            headers = [header.strip().lower() for header in _split_line(lines[0])]
        except csv.Error as e:
            raise ValidationError(f'Unreadable CSV header: {e}')

        missing = [header for header in REQUIRED_HEADERS if header not in headers]
        if missing:
            raise ValidationError(
                f"Missing required headers: {', '.join(missing)}",
                errors=[f'{header}: header is required' for header in missing]
            )

        processed = 0
        for line_number, line in enumerate(lines[1:], start=1):
            try:
                cells = _split_line(line)
                row = {header: (cells[index] if index < len(cells) else None)
                       for index, header in enumerate(headers)}
                values = parse_row(row)
            except (csv.Error, ValueError) as e:
                logger.warning(f"[BulkTransfer] Skipping invalid row {line_number}: {e}")
                continue

            values['satellite_id'] = satellite_id
            try:
                self.telemetry.record(values)
            except (TrackerError, SQLAlchemyError) as e:
                logger.warning(f"[BulkTransfer] Skipping unstorable row {line_number}: {e}")
                continue
            processed += 1

        total = len(lines) - 1
        logger.info(f"[BulkTransfer] Imported {processed}/{total} rows for satellite {satellite_id}")

        return {
            'processed_count': processed,
            'total_rows': total,
        }

    def export_csv(self, satellite_id: int, window_hours=None) -> str:
        """
        Render the telemetry history of a satellite as CSV.

        Unset optional values are written as empty cells.
        """
        history = self.telemetry.history(satellite_id, window_hours)

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(EXPORT_HEADERS)
        for point in history:
            writer.writerow([
                isoformat_utc(point.timestamp),
                point.latitude,
                point.longitude,
                point.altitude,
                '' if point.azimuth is None else point.azimuth,
                '' if point.declination is None else point.declination,
                '' if point.velocity is None else point.velocity,
                point.visibility or '',
            ])

        return buffer.getvalue()

    def export_json(self, satellite_id: int, window_hours=None) -> Dict:
        """
        Build a structured export of a satellite's telemetry history.
        """
        history = self.telemetry.history(satellite_id, window_hours)
        satellite = self.satellites.get_satellite(satellite_id)

        telemetry_data: List[Dict] = [point.to_dict() for point in history]
        return {
            'satellite': satellite.to_dict() if satellite else None,
            'telemetry_data': telemetry_data,
            'export_time': isoformat_utc(utc_now()),
            'data_points': len(telemetry_data),
        }

    def export_filename(self, satellite_id: int) -> str:
        satellite = self.satellites.get_satellite(satellite_id)
        name = satellite.name if satellite else 'satellite'
        return f'{name}_telemetry.csv'
