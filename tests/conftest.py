from __future__ import annotations

import itertools
import os
import sys
import tempfile
import uuid
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
API_DIR = ROOT / "API"
if str(API_DIR) not in sys.path:
    sys.path.insert(0, str(API_DIR))

# Test-mode runtime guards:
# - throwaway SQLite database instead of Postgres
# - fixed, distinct signing secrets per identity class
# - a bootstrap admin so staff endpoints can be exercised
_DB_DIR = tempfile.mkdtemp(prefix="cafeteria-tests-")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("API_BASE", "/api")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_DB_DIR}/cafeteria.sqlite")
os.environ.setdefault("STUDENT_TOKEN_KEY", "student-signing-key-for-tests-0123456789")
os.environ.setdefault("ADMIN_TOKEN_KEY", "admin-signing-key-for-tests-9876543210abc")
os.environ.setdefault("BOOTSTRAP_ADMIN_USERNAME", "root-admin")
os.environ.setdefault("BOOTSTRAP_ADMIN_PASSWORD", "root-admin-password")

from cafeteria.core.settings import settings  # noqa: E402
from cafeteria.main import app  # noqa: E402

_weeks = itertools.count(1)


@pytest.fixture(scope="session")
def client() -> TestClient:
    with TestClient(app) as tc:
        yield tc


@pytest.fixture(scope="session")
def url():
    def _url(path: str) -> str:
        return f"{settings.api_base}{path}"

    return _url


@pytest.fixture(scope="session")
def tokens():
    return app.state.tokens


@pytest.fixture(scope="session")
def admin_headers(client, url) -> dict[str, str]:
    resp = client.post(
        url("/staff/login"),
        json={
            "username": os.environ["BOOTSTRAP_ADMIN_USERNAME"],
            "password": os.environ["BOOTSTRAP_ADMIN_PASSWORD"],
        },
    )
    assert resp.status_code == 200, resp.text
    return {"x-access-token": resp.json()["token"]}


@pytest.fixture
def student_headers(client, url) -> dict[str, str]:
    resp = client.post(
        url("/student/register"),
        json={
            "name": f"Student {uuid.uuid4().hex[:8]}",
            "enrolled_from": "2024-01-01",
            "enrolled_to": "2027-06-30",
        },
    )
    assert resp.status_code == 201, resp.text
    return {"x-access-token": resp.json()["token"]}


@pytest.fixture
def fresh_week() -> tuple[int, int]:
    """A (year, week) pair no other test in the session has used."""
    n = next(_weeks)
    return 2100 + n // 52, n % 52 + 1
