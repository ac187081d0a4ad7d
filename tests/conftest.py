import os

os.environ['DATABASE_URL'] = 'sqlite://'

import pytest

import app as app_module
from history_store import HistoryStore, LookupRecord, db


class FakeGeoIP:
    """Stands in for GeoIPService.lookup, echoes the IP back like ip-api.com"""

    def __init__(self):
        self.calls = []
        self.error = None
        self.status = 'success'

    def lookup(self, ip):
        self.calls.append(ip)
        if self.error:
            return None, self.error
        return {
            'query': ip,
            'status': self.status,
            'country': 'United States',
            'city': 'Mountain View',
            'isp': 'Google LLC',
        }, None


@pytest.fixture
def flask_app():
    app = app_module.app
    app.config['TESTING'] = True
    with app.app_context():
        db.drop_all()
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture
def app_ctx(flask_app):
    with flask_app.app_context():
        yield


@pytest.fixture
def store(app_ctx):
    return HistoryStore(db)


@pytest.fixture
def fake_geo(monkeypatch):
    fake = FakeGeoIP()
    monkeypatch.setattr(app_module.geoip_service, 'lookup', fake.lookup)
    return fake


@pytest.fixture
def record_count(flask_app):
    def count():
        with flask_app.app_context():
            return db.session.query(LookupRecord).count()
    return count
