"""Pytest configuration and fixtures."""

import os

from sqlalchemy.engine import make_url

# Never point tests at the application database: use a sibling _test database
# on the same server, or a local SQLite file
APP_DATABASE_URL = os.getenv("DATABASE_URL")
if APP_DATABASE_URL and not APP_DATABASE_URL.startswith("sqlite"):
    _app_url = make_url(APP_DATABASE_URL)
    SQLALCHEMY_DATABASE_URL = _app_url.set(database=f"{_app_url.database}_test").render_as_string(
        hide_password=False
    )
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

if SQLALCHEMY_DATABASE_URL == APP_DATABASE_URL:
    raise RuntimeError(f"Refusing to run tests against the app database {APP_DATABASE_URL}")

# Must be set before src.config is imported anywhere
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models import Assignment, User  # noqa: E402, F401


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's details."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop the database, each test cleans up after itself


@pytest.fixture(scope="session")
def app_database_url():
    """The DATABASE_URL the environment had before tests redirected it."""
    return APP_DATABASE_URL


@pytest.fixture(scope="session")
def test_database_url():
    """The database the test session actually uses."""
    return SQLALCHEMY_DATABASE_URL


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_auth_headers(client):
    """Return a function that registers a user and returns auth headers for them."""

    def register(username: str, email: str, password: str = "testpass123") -> AuthHeaders:
        response = client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['token']}"},
            user_id=data["user"]["id"],
            email=email,
        )

    return register


@pytest.fixture
def auth_headers(make_auth_headers):
    """Create a user and return auth headers with user info."""
    return make_auth_headers("Test User", "test@example.com")


@pytest.fixture
def other_auth_headers(make_auth_headers):
    """Create a second, unrelated user."""
    return make_auth_headers("Other User", "other@example.com")
