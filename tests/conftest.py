import os

os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ["ALLOW_MOCK_TOKENS"] = "true"
os.environ.pop("DS_API_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db import Base, get_db
from app.models.profile import Profile, ProfileRole
from app.models.resource import Resource

# Use SQLite in-memory for test DB
TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"
# For in-memory SQLite we must use a StaticPool so multiple connections share the
# same in-memory database during the test run. Otherwise each connection gets
# an isolated empty in-memory DB which breaks tests that use separate sessions
# (e.g. TestClient requests vs test DB setup).
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_test_db():
    # recreate schema for each test to ensure isolation
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()


def bearer(role: str) -> dict:
    """Authorization header for one of the fixed mock tokens, e.g. bearer("super-admin")."""
    return {"Authorization": f"Bearer mock-{role}-token"}


@pytest.fixture
def mentee_headers():
    return bearer("mentee")


@pytest.fixture
def mentor_headers():
    return bearer("mentor")


@pytest.fixture
def moderator_headers():
    return bearer("moderator")


@pytest.fixture
def admin_headers():
    return bearer("admin")


@pytest.fixture
def super_admin_headers():
    return bearer("super-admin")


@pytest.fixture
def make_profile(db_session):
    """Factory that inserts a profile and returns it."""
    counter = {"n": 0}

    def _make(role: ProfileRole = ProfileRole.mentee, **fields):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "profile_id": f"auth0|{role.value}-{n}",
            "email": f"{role.value}{n}@example.com",
            "first_name": role.value.title(),
            "last_name": f"Number{n}",
            "role": role,
            "is_active": True,
            "pending": False,
        }
        data.update(fields)
        profile = Profile(**data)
        db_session.add(profile)
        db_session.commit()
        db_session.refresh(profile)
        return profile
    return _make


@pytest.fixture
def make_resource(db_session):
    def _make(**fields):
        data = {
            "resource_name": "Lenovo Chromebook S330",
            "category": "Computers",
            "condition": "New",
            "assigned": False,
            "monetary_value": "$250",
            "deductible_donation": True,
        }
        data.update(fields)
        resource = Resource(**data)
        db_session.add(resource)
        db_session.commit()
        db_session.refresh(resource)
        return resource
    return _make
