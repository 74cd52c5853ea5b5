"""
Test configuration for pytest
"""

import pytest
import os
import tempfile
from fastapi.testclient import TestClient
from sqlmodel import Session
from typing import Dict, Generator

# Test environment variables, set before the application reads its settings
_test_dir = tempfile.mkdtemp(prefix="attendance-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_test_dir, 'default.db')}"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["STRIPE_SECRET_KEY"] = "sk_test_123"
os.environ["STRIPE_WEBHOOK_SECRET"] = "whsec_test_secret"
os.environ["STRIPE_PRICE_TIER2"] = "price_growth"
os.environ["STRIPE_PRICE_TIER3"] = "price_business"
os.environ["TAP_COOLDOWN_MINUTES"] = "0"

from attendance_tracker.core.config import Settings, get_settings  # noqa: E402
from attendance_tracker.core.database import build_engine, get_session, run_migrations  # noqa: E402
from attendance_tracker.core.plans import get_plan_catalog  # noqa: E402
from attendance_tracker.main import app  # noqa: E402

PASSWORD = "pw123456"


@pytest.fixture(scope="function")
def engine(tmp_path):
    """A fresh SQLite file migrated through the real revisions"""
    test_engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    run_migrations(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture(scope="function")
def db(engine) -> Generator[Session, None, None]:
    """Create a clean database session for each test"""
    with Session(engine) as session:
        yield session


@pytest.fixture(scope="function")
def catalog():
    return get_plan_catalog()


@pytest.fixture(scope="function")
def client(engine) -> Generator[TestClient, None, None]:
    """API client bound to the test database"""
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def override_settings():
    """Swap in settings for a single test, e.g. override_settings(TAP_COOLDOWN_MINUTES=10)"""
    def apply(**values) -> Settings:
        settings = Settings(**values)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings
    return apply


def register(client: TestClient, company: str, email: str, password: str = PASSWORD):
    return client.post(
        "/api/auth/register",
        json={"companyName": company, "email": email, "password": password},
    )


def login(client: TestClient, email: str, password: str = PASSWORD) -> Dict[str, str]:
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


def kiosk_headers(client: TestClient, auth_headers: Dict[str, str]) -> Dict[str, str]:
    response = client.get("/api/kiosks", headers=auth_headers)
    assert response.status_code == 200, response.text
    return {"X-API-Key": response.json()[0]["api_key"]}


@pytest.fixture(scope="function")
def acme(client) -> Dict[str, str]:
    """Registered company "Acme"; returns its bearer auth headers"""
    assert register(client, "Acme", "a@acme.test").status_code == 201
    return login(client, "a@acme.test")


@pytest.fixture(scope="function")
def globex(client) -> Dict[str, str]:
    """A second, independent tenant"""
    assert register(client, "Globex", "owner@globex.test").status_code == 201
    return login(client, "owner@globex.test")
