import pytest
import os
import httpx
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set env before importing app components
os.environ["APP_ENV"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JOBTRACKER_DATE_FORMAT"] = "%Y-%m-%d"

from jobtracker.database import Base, get_db
from jobtracker.main import app
from jobtracker.client.notifications import Notifier
from jobtracker.client.persistence import JobsClient
from jobtracker.client.tracker import JobTracker
from helpers import FakeJobsClient
from fastapi.testclient import TestClient

# SQLite in-memory database configuration
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture(scope="session", autouse=True)
def setup_database():
    """Create tables once for the whole test session."""
    import jobtracker.models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture(scope="function")
def db_session():
    """Get a clean database session for each test function with rollback safety."""
    connection = engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()

@pytest.fixture(scope="function")
def override_db(db_session):
    """Route every request's get_db to the test session."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield db_session
    app.dependency_overrides.clear()

@pytest.fixture(scope="function")
def client(override_db):
    """Get a TestClient that uses the test database session via dependency override."""
    with TestClient(app) as c:
        yield c

@pytest.fixture(scope="function")
def jobs_client(override_db):
    """JobsClient talking to the in-process service through httpx's ASGI transport."""
    return JobsClient(
        base_url="http://testserver/api",
        transport=httpx.ASGITransport(app=app),
    )

@pytest.fixture(scope="function")
def notifier():
    return Notifier(history=10)

@pytest.fixture(scope="function")
def tracker(jobs_client, notifier):
    return JobTracker(client=jobs_client, notifier=notifier)

@pytest.fixture(scope="function")
def mock_api():
    """
    Factory for a JobsClient backed by httpx.MockTransport.

    `handler(request) -> httpx.Response` decides every reply; the requests
    seen are collected in `calls`.
    """
    calls = []

    def _make(handler):
        def _record(request):
            calls.append(request)
            return handler(request)
        return JobsClient(
            base_url="http://testserver/api",
            transport=httpx.MockTransport(_record),
        )

    _make.calls = calls
    return _make

@pytest.fixture(scope="function")
def fake_client():
    return FakeJobsClient()

