import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["APP_ENV"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from simple_budget.db.models import Base
from simple_budget.db.session import get_db, make_engine
from simple_budget.main import app


@pytest.fixture()
def engine():
    """
    In-memory SQLite engine shared by every connection, with a fresh schema per test.
    """
    engine = make_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def db_app(session_factory):
    """The application with its database dependency pointed at the test engine."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture()
def client(db_app):
    with TestClient(db_app) as c:
        yield c


def register(client, name, email, password):
    response = client.post("/api/register", json={"name": name, "email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture()
def alice(client):
    """Registered user; returns (user json, basic auth tuple)."""
    user = register(client, "Alice", "alice@example.com", "alice-pw")
    return user, ("alice@example.com", "alice-pw")


@pytest.fixture()
def bob(client):
    user = register(client, "Bob", "bob@example.com", "bob-pw")
    return user, ("bob@example.com", "bob-pw")
