import os
import tempfile
import uuid
from collections.abc import Callable, Generator
from pathlib import Path

# Settings and the engine are built at import time, so the test database must be chosen first.
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="invoice-api-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{(_TEST_DB_DIR / 'test.db').as_posix()}"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-for-hs256"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.api.deps import get_lookup_cache  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import engine  # noqa: E402
from app.main import app  # noqa: E402

USER_PASSWORD = "Secret123"
CUSTOMER_PASSWORD = "Cust0mer!"


@pytest.fixture(scope="session", autouse=True)
def create_schema() -> Generator[None, None, None]:
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(autouse=True)
def clean_state() -> Generator[None, None, None]:
    yield
    get_lookup_cache().clear()
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers(client: TestClient) -> Callable[..., dict[str, str]]:
    """Register a fresh user and return bearer headers for it."""

    def _make(email: str | None = None, password: str = USER_PASSWORD) -> dict[str, str]:
        email = email or f"{uuid.uuid4().hex[:12]}@example.com"
        register = client.post(
            "/api/users/register",
            json={"name": "Test User", "email": email, "password": password},
        )
        assert register.status_code == 201, register.text
        login = client.post("/api/users/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        return {"Authorization": f"Bearer {login.json()['access_token']}"}

    return _make


@pytest.fixture
def create_customer(client: TestClient) -> Callable[..., dict]:
    def _make(headers: dict[str, str], name: str = "ACME Corp", email: str | None = None) -> dict:
        payload = {
            "name": name,
            "email": email or f"{uuid.uuid4().hex[:12]}@customer.example.com",
            "password": CUSTOMER_PASSWORD,
            "address": "1 Main Street",
        }
        response = client.post("/api/customers/", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture
def create_invoice(client: TestClient) -> Callable[..., dict]:
    def _make(
        headers: dict[str, str],
        customer_id: int,
        rows: list[dict] | None = None,
        comment: str | None = "Monthly services",
    ) -> dict:
        payload = {
            "customer_id": customer_id,
            "start_date": "2024-01-01T00:00:00",
            "end_date": "2024-01-31T00:00:00",
            "rows": rows or [{"service": "Consulting", "quantity": "3", "amount": "12.50"}],
            "comment": comment,
        }
        response = client.post("/api/invoices/", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _make
