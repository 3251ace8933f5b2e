"""
Test configuration for the MedApp backend and registration client.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from medapp.config import Settings
from medapp.database import Base, Database, enable_sqlite_foreign_keys
from medapp.main import create_app

# Test database URL
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def settings():
    """Settings pointing at the in-memory test database."""
    return Settings(database_url=TEST_DATABASE_URL, create_tables=False)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    database = Database(engine)
    database.create_tables()
    try:
        yield database
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def app(settings, db):
    """Application wired to the test database."""
    return create_app(settings=settings, database=db)


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client with a test database handle.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def ana():
    """Signup form used across the tests."""
    return {
        "first_name": "Ana",
        "last_name": "Lee",
        "email": "ana@x.com",
        "password": "p1",
    }
