import pytest

from config import TestConfig
from sentinela import create_app, db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield


def register(client, email="driver@example.com", password="secret123", display_name="Driver One"):
    return client.post(
        "/api/auth/register",
        json={"email": email, "password": password, "display_name": display_name},
    )


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(client):
    """Register a driver and return (headers, user_id)."""
    resp = register(client)
    assert resp.status_code == 201
    body = resp.get_json()
    return bearer(body["token"]), body["user"]["id"]
