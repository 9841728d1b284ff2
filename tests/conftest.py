import pytest
from fastapi.testclient import TestClient

from ticketgate.config import Settings
from ticketgate.main import create_app
from ticketgate.models import Base


@pytest.fixture()
def settings(tmp_path):
    db_path = tmp_path / "test.db"
    return Settings(
        _env_file=None,
        database_url=f"sqlite+pysqlite:///{db_path}",
        session_secret="test-session-secret",
        auth0_domain="tenant.example.com",
        client_id="web-client",
        client_secret="web-secret",
        external_url="http://testserver",
        port=3000,
        max_tickets_per_vatin=3,
    )


@pytest.fixture()
def app(settings):
    app = create_app(settings)
    Base.metadata.create_all(app.state.engine)
    yield app
    app.dependency_overrides.clear()
    app.state.engine.dispose()


@pytest.fixture()
def engine(app):
    return app.state.engine


@pytest.fixture()
def SessionLocal(app):
    return app.state.session_factory


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def ticket_payload(**overrides):
    payload = {"vatin": "12345678901", "firstName": "Ana", "lastName": "Horvat"}
    payload.update(overrides)
    return payload
