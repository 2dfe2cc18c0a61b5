"""
Tests for CSV import and CSV/JSON export.
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import DataError

from services.errors import ValidationError
from utils.time_util import isoformat_utc


class TestImport:

    def test_scenario_one_good_one_bad_row(self, services, store):
        csv_text = "timestamp,latitude,longitude,altitude\n2024-01-01T00:00:00Z,10,20,500\nBAD,x,y,z\n"

        result = services.bulk_transfer.import_csv(csv_text, 1)

        assert result == {'processed_count': 1, 'total_rows': 2}
        stored = store.list('telemetry')
        assert len(stored) == 1
        assert stored[0].satellite_id == 1
        assert stored[0].timestamp == datetime(2024, 1, 1)
        assert (stored[0].latitude, stored[0].longitude, stored[0].altitude) == (10.0, 20.0, 500.0)

    @pytest.mark.parametrize('header', [
        'latitude,longitude,altitude',
        'timestamp,longitude,altitude',
        'timestamp,latitude,altitude',
        'timestamp,latitude,longitude',
    ])
    def test_missing_required_header_stores_nothing(self, services, store, header):
        rows = '\n'.join([header, '2024-01-01T00:00:00Z,1,2,3'])

        with pytest.raises(ValidationError) as excinfo:
            services.bulk_transfer.import_csv(rows, 1)

        assert excinfo.value.message.startswith('Missing required headers:')
        assert store.count('telemetry') == 0

    def test_empty_input_is_rejected(self, services):
        with pytest.raises(ValidationError):
            services.bulk_transfer.import_csv('\n  \n', 1)

    def test_bad_latitude_rows_are_counted_not_stored(self, services):
        lines = ['timestamp,latitude,longitude,altitude']
        for minute in range(10):
            latitude = 'north' if minute % 3 == 0 else str(minute)
            lines.append(f'2024-01-01T00:{minute:02d}:00Z,{latitude},20,500')

        result = services.bulk_transfer.import_csv('\n'.join(lines), 1)

        assert result == {'processed_count': 6, 'total_rows': 10}

    def test_headers_are_trimmed_and_case_insensitive(self, services, store):
        csv_text = " Timestamp , LATITUDE,Longitude , Altitude\n2024-01-01T00:00:00Z, 1 , 2 , 3\n"

        assert services.bulk_transfer.import_csv(csv_text, 1)['processed_count'] == 1
        assert store.list('telemetry')[0].latitude == 1.0

    def test_optional_columns(self, services, store):
        csv_text = (
            "timestamp,latitude,longitude,altitude,azimuth,declination,right_ascension,velocity,visibility\n"
            "2024-01-01T00:00:00Z,1,2,3,0,-12.5,44.7,7.66,eclipse\n"
            "2024-01-01T00:01:00Z,1,2,3,,,,,\n"
        )

        result = services.bulk_transfer.import_csv(csv_text, 1)
        full, sparse = store.list('telemetry')

        assert result['processed_count'] == 2
        assert full.azimuth == 0.0
        assert full.declination == -12.5
        assert full.right_ascension == 44.7
        assert full.velocity == 7.66
        assert full.visibility == 'eclipse'
        assert sparse.azimuth is None
        assert sparse.right_ascension is None
        assert sparse.visibility is None

    def test_blank_lines_are_ignored(self, services):
        csv_text = "\ntimestamp,latitude,longitude,altitude\n\n2024-01-01T00:00:00Z,1,2,3\n\n"

        assert services.bulk_transfer.import_csv(csv_text, 1) == {
            'processed_count': 1, 'total_rows': 1,
        }

    def test_short_row_is_skipped(self, services):
        csv_text = "timestamp,latitude,longitude,altitude\n2024-01-01T00:00:00Z,1,2\n"

        assert services.bulk_transfer.import_csv(csv_text, 1)['processed_count'] == 0

    def test_quoted_cells_keep_their_commas(self, services, store):
        csv_text = 'timestamp,latitude,longitude,altitude,visibility\n2024-01-01T00:00:00Z,1,2,3,"hidden, low"\n'

        services.bulk_transfer.import_csv(csv_text, 1)

        assert store.list('telemetry')[0].visibility == 'hidden, low'

    def test_bad_optional_value_skips_row(self, services):
        csv_text = "timestamp,latitude,longitude,altitude,velocity\n2024-01-01T00:00:00Z,1,2,3,fast\n"

        assert services.bulk_transfer.import_csv(csv_text, 1) == {
            'processed_count': 0, 'total_rows': 1,
        }

    def test_unstorable_row_is_skipped(self, services, store, monkeypatch):
        record = services.telemetry.record

        def strict_record(values):
            if len(values.get('visibility') or '') > 20:
                raise DataError('INSERT', {}, Exception('value too long for type character varying(20)'))
            return record(values)

        monkeypatch.setattr(services.telemetry, 'record', strict_record)
        csv_text = (
            "timestamp,latitude,longitude,altitude,visibility\n"
            "2024-01-01T00:00:00Z,1,2,3,visible\n"
            "2024-01-01T00:01:00Z,1,2,3," + 'x' * 40 + "\n"
            "2024-01-01T00:02:00Z,1,2,3,eclipse\n"
        )

        assert services.bulk_transfer.import_csv(csv_text, 1) == {
            'processed_count': 2, 'total_rows': 3,
        }
        assert [p.visibility for p in store.list('telemetry')] == ['visible', 'eclipse']


class TestExport:

    def test_csv_export_format(self, services, iss, add_point, now):
        timestamp = now - timedelta(minutes=5)
        add_point(iss.id, timestamp, latitude=51.5, longitude=-0.1, altitude=420.3,
                  azimuth=0.0, velocity=7.66, visibility='visible')

        lines = services.bulk_transfer.export_csv(iss.id).splitlines()

        assert lines[0] == 'timestamp,latitude,longitude,altitude,azimuth,declination,velocity,visibility'
        assert lines[1] == f'{isoformat_utc(timestamp)},51.5,-0.1,420.3,0.0,,7.66,visible'
        assert len(lines) == 2

    def test_csv_export_respects_window(self, services, iss, add_point, now):
        add_point(iss.id, now - timedelta(hours=3))
        add_point(iss.id, now - timedelta(minutes=30))

        assert len(services.bulk_transfer.export_csv(iss.id, 1).splitlines()) == 2
        assert len(services.bulk_transfer.export_csv(iss.id, 4).splitlines()) == 3

    def test_csv_round_trip(self, services, iss, add_point, now, store):
        for minutes in (50, 30, 10):
            add_point(iss.id, now - timedelta(minutes=minutes), declination=-5.0)

        exported = services.bulk_transfer.export_csv(iss.id)
        result = services.bulk_transfer.import_csv(exported, iss.id + 1)

        assert result == {'processed_count': 3, 'total_rows': 3}
        assert len(services.telemetry.history(iss.id + 1)) == 3

    def test_export_does_not_mutate(self, services, iss, add_point, now, store):
        add_point(iss.id, now - timedelta(minutes=5))

        services.bulk_transfer.export_csv(iss.id)
        services.bulk_transfer.export_json(iss.id)

        assert store.count('telemetry') == 1

    def test_json_export(self, services, iss, add_point, now):
        first = add_point(iss.id, now - timedelta(minutes=20))
        second = add_point(iss.id, now - timedelta(minutes=10))

        export = services.bulk_transfer.export_json(iss.id)

        assert export['satellite']['name'] == 'ISS (ZARYA)'
        assert [p['id'] for p in export['telemetry_data']] == [first.id, second.id]
        assert export['data_points'] == 2
        assert export['export_time'].endswith('Z')

    def test_json_export_for_unknown_satellite(self, services):
        export = services.bulk_transfer.export_json(77)

        assert export['satellite'] is None
        assert export['data_points'] == 0

    def test_export_filename(self, services, iss):
        assert services.bulk_transfer.export_filename(iss.id) == 'ISS (ZARYA)_telemetry.csv'
        assert services.bulk_transfer.export_filename(77) == 'satellite_telemetry.csv'
