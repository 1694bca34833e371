from __future__ import annotations

from dataclasses import dataclass

from fastapi import Header, Request

from cafeteria.core.logging import DOMAIN_AUTH, get_domain_logger, log_auth_rejection
from cafeteria.core.results import raise_for_failure
from cafeteria.core.tokens import TokenService, TokenServices

TOKEN_HEADER = "x-access-token"

logger = get_domain_logger(__name__, DOMAIN_AUTH)


@dataclass(frozen=True)
class StudentIdentity:
    student_id: int
    issued_at: str


@dataclass(frozen=True)
class AdminIdentity:
    username: str


def _token_services(request: Request) -> TokenServices:
    return request.app.state.tokens


def _admit(request: Request, service: TokenService, token: str | None) -> dict:
    result = service.verify(token)
    if result.failure is not None:
        log_auth_rejection(logger, service.name, request.url.path, result.failure.kind.value)
        raise_for_failure(result.failure)
    return result.value


def require_student(
    request: Request,
    x_access_token: str | None = Header(default=None, alias=TOKEN_HEADER),
) -> StudentIdentity:
    claims = _admit(request, _token_services(request).student, x_access_token)
    identity = StudentIdentity(student_id=claims["id"], issued_at=str(claims["issuedAt"]))
    request.state.identity = identity
    return identity


def require_admin(
    request: Request,
    x_access_token: str | None = Header(default=None, alias=TOKEN_HEADER),
) -> AdminIdentity:
    claims = _admit(request, _token_services(request).admin, x_access_token)
    identity = AdminIdentity(username=claims["username"])
    request.state.identity = identity
    return identity
