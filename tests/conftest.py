"""
Shared fixtures.

Every test gets a fresh in-memory SQLite database. API tests talk to the
real FastAPI app through TestClient with ``get_db`` pointed at that
database; service tests use a session on it directly.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from spendfy.db.core import Base, UserDB, UserStatus, get_db
from spendfy.main import app
from spendfy.security import hash_password


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        database = session_factory()
        try:
            yield database
        finally:
            database.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user through the API and return its bearer headers."""
    def _register(email="joao@email.com", name="João Silva", password="senha123"):
        response = client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _register


@pytest.fixture
def make_user(db):
    """Insert a user row directly, skipping the API."""
    def _make_user(email="joao@email.com", name="João Silva", password="senha123",
                   status=UserStatus.ACTIVE):
        user = UserDB(name=name, email=email, password_hash=hash_password(password), status=status)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user
