"""
Pytest configuration for account service tests.

Points the service at an in-memory SQLite database before the application
modules are imported, so tests never touch ./users.db.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("LOG_DIR", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from account_platform.account_platform.account_service.db import Base, engine, SessionLocal  # noqa: E402
from account_platform.account_platform.account_service.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    # Drop all tables and recreate them before each test
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
