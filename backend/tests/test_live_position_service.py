"""
Tests for the N2YO live position poller.
"""
import pytest
import requests

from services.errors import ConfigurationError, NotFoundError, UpstreamError
from tests.helpers import N2YO_POSITIONS, acquired_elsewhere, make_response, make_session


@pytest.fixture
def configured(app):
    app.config['N2YO_API_KEY'] = 'test-key'
    return app


def _poller(services, session):
    services.live_positions.session = session
    return services.live_positions


def test_poll_maps_and_stores_position(services, configured, iss, store):
    session = make_session(make_response(N2YO_POSITIONS))
    result = _poller(services, session).poll(iss.id)

    stored = result['telemetry_data']
    assert stored['satellite_id'] == iss.id
    assert stored['latitude'] == pytest.approx(-39.90318514)
    assert stored['longitude'] == pytest.approx(158.28897924)
    assert stored['altitude'] == pytest.approx(417.85)
    assert stored['azimuth'] == pytest.approx(254.31)
    assert stored['declination'] == pytest.approx(-43.99279118)
    assert stored['right_ascension'] == pytest.approx(44.77078138)
    assert stored['velocity'] == pytest.approx(7.66)
    assert stored['visibility'] == 'eclipse'

    assert result['info'] == N2YO_POSITIONS['info']
    assert store.count('telemetry') == 1
    assert services.telemetry.latest(iss.id).id == stored['id']


def test_poll_uses_default_observer(services, configured, iss):
    session = make_session(make_response(N2YO_POSITIONS))
    _poller(services, session).poll(iss.id)

    url = session.get.call_args.args[0]
    assert url.endswith('/positions/25544/51.5074/-0.1278/0.0/1/')
    assert session.get.call_args.kwargs['params'] == {'apiKey': 'test-key'}
    assert session.get.call_args.kwargs['timeout'] == 15


def test_poll_observer_overrides(services, configured, iss):
    session = make_session(make_response(N2YO_POSITIONS))
    _poller(services, session).poll(iss.id, latitude=40.0, longitude=-74.0, altitude=10.0)

    assert '/positions/25544/40.0/-74.0/10.0/1/' in session.get.call_args.args[0]


def test_visible_when_not_eclipsed(services, configured, iss):
    payload = {**N2YO_POSITIONS, 'positions': [
        {**N2YO_POSITIONS['positions'][0], 'eclipsed': False},
    ]}
    session = make_session(make_response(payload))

    result = _poller(services, session).poll(iss.id)

    assert result['telemetry_data']['visibility'] == 'visible'


def test_missing_api_key_fails_before_network(services, iss, store):
    session = make_session(make_response(N2YO_POSITIONS))

    with pytest.raises(ConfigurationError):
        _poller(services, session).poll(iss.id)

    session.get.assert_not_called()
    assert store.count('telemetry') == 0


def test_unknown_satellite(services, configured):
    session = make_session(make_response(N2YO_POSITIONS))

    with pytest.raises(NotFoundError):
        _poller(services, session).poll(404)

    session.get.assert_not_called()


def test_http_error_status_is_upstream_error(services, configured, iss, store):
    session = make_session(make_response({'error': 'down'}, status_code=503))

    with pytest.raises(UpstreamError) as excinfo:
        _poller(services, session).poll(iss.id)

    assert excinfo.value.status_code == 502
    assert store.count('telemetry') == 0


@pytest.mark.parametrize('error', [
    requests.Timeout('slow'),
    requests.ConnectionError('refused'),
])
def test_transport_failure_is_upstream_error(services, configured, iss, store, error):
    session = make_session(error=error)

    with pytest.raises(UpstreamError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_error_field_in_body_is_upstream_error(services, configured, iss, store):
    session = make_session(make_response({'error': 'Invalid API Key!'}))

    with pytest.raises(UpstreamError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_non_json_body_is_upstream_error(services, configured, iss, store):
    session = make_session(make_response(json_error=ValueError('not json')))

    with pytest.raises(UpstreamError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_empty_positions_is_not_found(services, configured, iss, store):
    session = make_session(make_response({'info': N2YO_POSITIONS['info'], 'positions': []}))

    with pytest.raises(NotFoundError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_malformed_position_stores_nothing(services, configured, iss, store):
    position = dict(N2YO_POSITIONS['positions'][0])
    del position['sataltitude']
    session = make_session(make_response({**N2YO_POSITIONS, 'positions': [position]}))

    with pytest.raises(UpstreamError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_repeated_polls_append(services, configured, iss, store):
    session = make_session(make_response(N2YO_POSITIONS))
    poller = _poller(services, session)

    first = poller.poll(iss.id)['telemetry_data']
    second = poller.poll(iss.id)['telemetry_data']

    assert second['id'] > first['id']
    assert store.count('telemetry') == 2


@pytest.mark.parametrize('payload', [
    {**N2YO_POSITIONS, 'info': [1]},
    {**N2YO_POSITIONS, 'positions': {'satlatitude': 1.0}},
    {**N2YO_POSITIONS, 'positions': ['not-a-position']},
])
def test_unexpected_payload_shape_is_upstream_error(services, configured, iss, store, payload):
    session = make_session(make_response(payload))

    with pytest.raises(UpstreamError):
        _poller(services, session).poll(iss.id)

    assert store.count('telemetry') == 0


def test_store_lock_is_free_during_request(services, configured, iss, store):
    seen = []

    def get(*args, **kwargs):
        seen.append(acquired_elsewhere(store._lock, timeout=1))
        return make_response(N2YO_POSITIONS)

    session = make_session()
    session.get.side_effect = get

    _poller(services, session).poll(iss.id)

    assert seen == [True]
    assert store.count('telemetry') == 1
