"""
Pytest configuration and fixtures for backend tests.
"""
import os
import sys
from typing import Generator
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Keep the application engine off the working directory during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from app.core.database import Base, enable_sqlite_savepoints, get_db
from app.services.category_mgmt import CategoryMgmtService
from app.services.category_query import CategoryQueryService
from app.services.category_store import CategoryStore
from main import app


@pytest.fixture(scope="function")
def session_factory(tmp_path) -> Generator[sessionmaker, None, None]:
    """A file-backed SQLite database per test, safe to use from several threads."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}",
        connect_args={"check_same_thread": False},
        echo=False,
    )
    enable_sqlite_savepoints(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db_session: Session) -> CategoryStore:
    return CategoryStore(db_session)


@pytest.fixture
def mgmt_service(store: CategoryStore) -> CategoryMgmtService:
    return CategoryMgmtService(store, order_seed=10)


@pytest.fixture
def query_service(store: CategoryStore) -> CategoryQueryService:
    return CategoryQueryService(store)


@pytest.fixture(scope="function")
def client(session_factory) -> TestClient:
    """Create a test client with overridden database dependency."""
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_category_data():
    """Sample category data for testing."""
    return {
        "categoryTitle": "Python",
        "categoryURI": "/python",
        "categoryDescription": "Notes about Python",
        "categoryOrder": 3,
    }
