import logging

import pytest

from cafeteria.core.logging import (
    DOMAIN_AUTH,
    SuppressHealthCheckFilter,
    get_domain_logger,
    log_auth_rejection,
)


def _record(msg, *args):
    return logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, msg, args, None)


def test_unknown_domain_is_refused():
    with pytest.raises(ValueError):
        get_domain_logger(__name__, "kitchen")


def test_auth_rejection_line_names_class_path_and_reason(caplog):
    logger = get_domain_logger("cafeteria.tests", DOMAIN_AUTH)
    with caplog.at_level(logging.INFO, logger="cafeteria.tests"):
        log_auth_rejection(logger, "admin", "/api/menu", "token_expired")
    record = caplog.records[-1]
    assert record.getMessage() == "auth rejected | class=admin path=/api/menu reason=token_expired"
    assert record.domain == DOMAIN_AUTH


def test_guard_logs_rejection_without_the_token(client, url, caplog):
    with caplog.at_level(logging.INFO, logger="cafeteria.core.auth"):
        resp = client.get(url("/student"), headers={"x-access-token": "not-a-jwt-value"})
    assert resp.status_code == 401
    lines = [r.getMessage() for r in caplog.records if r.name == "cafeteria.core.auth"]
    assert "auth rejected | class=student path=/api/student reason=token_invalid" in lines
    assert all("not-a-jwt-value" not in line for line in lines)


def test_health_access_lines_are_dropped():
    health = SuppressHealthCheckFilter("/health")
    assert health.filter(_record('%s - "%s %s HTTP/%s" %d', "127.0.0.1:5000", "GET", "/health", "1.1", 200)) is False
    assert health.filter(_record('%s - "%s %s HTTP/%s" %d', "127.0.0.1:5000", "GET", "/health", "1.1", 503)) is True
    assert health.filter(_record('%s - "%s %s HTTP/%s" %d', "127.0.0.1:5000", "GET", "/api/menu/all", "1.1", 200)) is True
