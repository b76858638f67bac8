"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from taletrail.api.dependencies import get_identity_provider
from taletrail.db.database import get_db
from taletrail.db.schema import Base
from taletrail.main import create_app
from tests.fakes import FakeIdentityProvider

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make tests independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def client(
    db_session_repo: Session, identity_provider: FakeIdentityProvider
) -> Generator[TestClient, None, None]:
    """HTTP client against the app, wired to the test database and the fake identity service."""
    app = create_app(with_lifespan=False)
    app.dependency_overrides[get_db] = lambda: db_session_repo
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
