"""Shared pytest fixtures for backend tests."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from restapi.api.deps import get_album_repository, get_auth_service
from restapi.db.session import Base, init_db
from restapi.main import create_app
from tests.mocks import InMemoryAlbumRepository, MockAuthService


@pytest.fixture(scope="function")
def engine():
    """Fresh in-memory SQLite database per test; StaticPool keeps the one connection alive."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db(engine: Engine):
    """Get a DB session bound to the test engine."""
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def app(engine: Engine) -> FastAPI:
    return create_app(engine)


@pytest.fixture(scope="function")
def client(app: FastAPI):
    """Test client backed by the real SQL repositories and auth service."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def album_repo() -> InMemoryAlbumRepository:
    return InMemoryAlbumRepository()


@pytest.fixture(scope="function")
def mock_client(app: FastAPI, album_repo: InMemoryAlbumRepository):
    """Test client with the album repository and auth service swapped for doubles."""
    app.dependency_overrides[get_album_repository] = lambda: album_repo
    app.dependency_overrides[get_auth_service] = lambda: MockAuthService()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
