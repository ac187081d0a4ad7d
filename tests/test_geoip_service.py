"""
Tests for the ip-api.com client
"""
import pytest
import requests

import geoip_service
from geoip_service import GeoIPService


class FakeResponse:
    def __init__(self, payload=None, status_code=200, json_error=False):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f'{self.status_code} Error')

    def json(self):
        if self.json_error:
            raise ValueError('No JSON object could be decoded')
        return self.payload


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def install(response=None, exc=None):
        def fake_get(url, params=None, timeout=None):
            calls.append({'url': url, 'params': params, 'timeout': timeout})
            if exc is not None:
                raise exc
            return response
        monkeypatch.setattr(geoip_service.requests, 'get', fake_get)
        return calls

    return install


def test_lookup_returns_provider_body(captured):
    body = {'query': '8.8.8.8', 'status': 'success', 'country': 'United States',
            'city': 'Ashburn', 'isp': 'Google LLC'}
    calls = captured(FakeResponse(body))

    data, err = GeoIPService().lookup('8.8.8.8')

    assert err is None
    assert data == body
    assert calls[0]['url'] == 'http://ip-api.com/json/8.8.8.8'
    assert calls[0]['timeout'] == 5
    assert 'query' in calls[0]['params']['fields']


def test_unsuccessful_status_is_passed_through(captured):
    body = {'query': 'abc', 'status': 'fail', 'message': 'invalid query'}
    captured(FakeResponse(body))

    data, err = GeoIPService().lookup('abc')

    assert err is None
    assert data['status'] == 'fail'


def test_timeout(captured):
    captured(exc=requests.exceptions.Timeout())

    data, err = GeoIPService().lookup('8.8.8.8')

    assert data is None
    assert err == 'timeout'


def test_connection_error(captured):
    captured(exc=requests.exceptions.ConnectionError('refused'))

    data, err = GeoIPService().lookup('8.8.8.8')

    assert data is None
    assert err.startswith('lookup_error')


def test_http_error_status(captured):
    captured(FakeResponse(status_code=429))

    data, err = GeoIPService().lookup('8.8.8.8')

    assert data is None
    assert err.startswith('lookup_error')


def test_invalid_json(captured):
    captured(FakeResponse(json_error=True))

    data, err = GeoIPService().lookup('8.8.8.8')

    assert data is None
    assert err.startswith('lookup_error')


def test_single_request_no_retry(captured):
    calls = captured(exc=requests.exceptions.ConnectionError('refused'))

    GeoIPService().lookup('1.1.1.1')

    assert len(calls) == 1
