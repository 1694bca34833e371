import pytest
from fastapi import HTTPException

from cafeteria.core.results import FAILURE_STATUS, FailureKind, Result, unwrap


def test_every_failure_kind_maps_to_a_status():
    assert set(FAILURE_STATUS) == set(FailureKind)


def test_unwrap_raises_with_auth_challenge_on_401():
    with pytest.raises(HTTPException) as excinfo:
        unwrap(Result.fail(FailureKind.INVALID_TOKEN, "Invalid token"))
    assert excinfo.value.status_code == 401
    assert excinfo.value.headers == {"WWW-Authenticate": "x-access-token"}


def test_unwrap_returns_value_on_success():
    assert unwrap(Result.success(7)) == 7
