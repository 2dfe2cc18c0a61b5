"""
Test doubles for the N2YO HTTP session.
"""
from threading import Thread
from unittest.mock import MagicMock


# Trimmed N2YO /positions response for the ISS
N2YO_POSITIONS = {
    'info': {
        'satname': 'SPACE STATION',
        'satid': 25544,
        'transactionscount': 4,
        'velocity': 7.66,
    },
    'positions': [
        {
            'satlatitude': -39.90318514,
            'satlongitude': 158.28897924,
            'sataltitude': 417.85,
            'azimuth': 254.31,
            'elevation': -69.09,
            'ra': 44.77078138,
            'dec': -43.99279118,
            'timestamp': 1521354418,
            'eclipsed': True,
        }
    ],
}


def make_response(payload=None, status_code=200, json_error=None):
    """Fake requests.Response carrying a JSON payload."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = '' if payload is None else str(payload)
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


def make_session(response=None, error=None):
    """Fake requests.Session whose get() returns `response` or raises `error`."""
    session = MagicMock()
    session.headers = {}
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


def acquired_elsewhere(lock, **acquire_kwargs):
    """Whether a second thread can take `lock` (released again right away)."""
    result = []

    def attempt():
        acquired = lock.acquire(**acquire_kwargs)
        if acquired:
            lock.release()
        result.append(acquired)

    thread = Thread(target=attempt)
    thread.start()
    thread.join()
    return result[0]
