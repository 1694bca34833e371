"""Explicit success/failure values for auth and storage operations.

Expected outcomes (duplicate username, unknown week, bad signature) are
returned as a :class:`Result` carrying a :class:`FailureKind` instead of being
raised. Route handlers turn failures into HTTP errors with
:func:`raise_for_failure`.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeVar

from fastapi import HTTPException

T = TypeVar("T")


class FailureKind(str, Enum):
    MISSING_CREDENTIAL = "token_required"
    INVALID_TOKEN = "token_invalid"
    EXPIRED_TOKEN = "token_expired"
    BAD_CREDENTIALS = "bad_credentials"
    INVALID_INPUT = "invalid_input"
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"


FAILURE_STATUS: dict[FailureKind, int] = {
    FailureKind.MISSING_CREDENTIAL: 401,
    FailureKind.INVALID_TOKEN: 401,
    FailureKind.EXPIRED_TOKEN: 401,
    FailureKind.BAD_CREDENTIALS: 400,
    FailureKind.INVALID_INPUT: 400,
    FailureKind.ALREADY_EXISTS: 409,
    FailureKind.NOT_FOUND: 404,
}


@dataclass(frozen=True)
class Failure:
    kind: FailureKind
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    failure: Failure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, kind: FailureKind, message: str) -> "Result[T]":
        return cls(failure=Failure(kind=kind, message=message))


def raise_for_failure(failure: Failure) -> NoReturn:
    headers = None
    if FAILURE_STATUS[failure.kind] == 401:
        headers = {"WWW-Authenticate": "x-access-token"}
    raise HTTPException(status_code=FAILURE_STATUS[failure.kind], detail=failure.message, headers=headers)


def unwrap(result: Result[T]) -> T:
    """Return the success value or raise the matching HTTP error."""
    if result.failure is not None:
        raise_for_failure(result.failure)
    return result.value  # type: ignore[return-value]
