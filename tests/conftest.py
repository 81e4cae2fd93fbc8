import mongomock
import pytest
import requests

from task_service.app import create_app
from task_service.utils import db as db_module

from .helpers import FlaskTestAdapter, register

TEST_CONFIG = {
    "TESTING": True,
    "JWT_SECRET_KEY": "test-jwt-secret-that-is-long-enough-for-hs256",
    "MONGO_DB_NAME": "task_tracker_test",
    "LOG_LEVEL": "WARNING",
}


@pytest.fixture()
def mongo_client(monkeypatch):
    """In-memory MongoDB shared by the app under test; fresh per test."""
    client = mongomock.MongoClient(tz_aware=True)
    monkeypatch.setattr(db_module, "MongoClient", lambda *args, **kwargs: client)
    return client


@pytest.fixture()
def app(mongo_client):
    return create_app(TEST_CONFIG)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def db(mongo_client):
    return mongo_client[TEST_CONFIG["MONGO_DB_NAME"]]


@pytest.fixture()
def alice(client):
    resp = register(client)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture()
def bob(client):
    resp = register(client, name="Bob", email="bob@example.com", password="hunter22")
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture()
def adapter(client):
    return FlaskTestAdapter(client)


@pytest.fixture()
def http(adapter):
    """requests.Session whose traffic to http://testserver lands in the Flask app."""
    session = requests.Session()
    session.mount("http://testserver", adapter)
    return session
