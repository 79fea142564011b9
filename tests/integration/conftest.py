"""
Integration test configuration
"""
import pytest
from fastapi.testclient import TestClient

from src.app.main import app
from src.db.base import Base, build_engine, get_db


@pytest.fixture
def engine(tmp_path):
    """File database so request sessions get their own connections."""
    engine = build_engine(f"sqlite:///{tmp_path / 'proofing.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def client(session_factory):
    """FastAPI test client running the app lifespan against the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def read_session(session_factory):
    """Open a short-lived session for assertions; close it before the next request."""
    def factory():
        return session_factory()
    return factory
