import logging

from cafeteria.core.logging import SecretRedactionFilter, redact_secrets


def test_redact_secrets_masks_sensitive_values():
    raw = (
        "x-access-token: eyJhbGciOi.payload.sig "
        "authorization=Bearer abc123 "
        "STUDENT_TOKEN_KEY=super-secret-key "
        "password=my-password"
    )
    masked = redact_secrets(raw)
    assert "eyJhbGciOi.payload.sig" not in masked
    assert "abc123" not in masked
    assert "super-secret-key" not in masked
    assert "my-password" not in masked
    assert masked.count("[REDACTED]") >= 4


def test_redaction_filter_rewrites_formatted_record():
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="login attempt password=%s",
        args=("hunter2",),
        exc_info=None,
    )
    assert SecretRedactionFilter().filter(record) is True
    assert "hunter2" not in record.getMessage()


def test_token_services_are_read_only_after_startup(client):
    from cafeteria.main import app

    services = app.state.tokens
    client.get("/health")
    assert app.state.tokens is services


def test_database_errors_are_generic(client, url, student_headers, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from cafeteria.storage import repository

    async def _boom(*_args, **_kwargs):
        raise OperationalError("SELECT * FROM students WHERE id = 1", {}, Exception("db unavailable"))

    monkeypatch.setattr(repository, "get_student", _boom)
    resp = client.get(url("/student"), headers=student_headers)
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"]["code"] == "database_error"
    assert "SELECT" not in str(body)
    assert "db unavailable" not in str(body)


def test_unhandled_errors_keep_request_id_header(client, url, student_headers, monkeypatch):
    from fastapi.testclient import TestClient

    from cafeteria.main import app
    from cafeteria.storage import repository

    async def _crash(*_args, **_kwargs):
        raise RuntimeError("kitchen on fire")

    monkeypatch.setattr(repository, "get_student", _crash)
    raw = TestClient(app, raise_server_exceptions=False)
    resp = raw.get(url("/student"), headers={**student_headers, "x-request-id": "rid-500"})
    assert resp.status_code == 500
    assert resp.headers["x-request-id"] == "rid-500"
    body = resp.json()
    assert body["error"]["code"] == "internal_error"
    assert body["error"]["request_id"] == "rid-500"
    assert "kitchen on fire" not in str(body)
