"""Bearer token issuance and verification for students and staff.

Each identity class owns a :class:`TokenService` with its own signing secret
and its own required claim set, so a token minted for one class never
verifies under the other:

- student tokens: ``{"id", "issuedAt", "nonce"}``, no expiry
- admin tokens: ``{"username", "nonce", "iat", "exp"}``, 12 hour lifetime

Verification is stateless; the services are built once at startup and only
read afterwards.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from cafeteria.core.results import FailureKind, Result
from cafeteria.core.settings import Settings

MIN_SECRET_LENGTH = 32
STUDENT_CLAIMS = ("id", "issuedAt", "nonce")
ADMIN_CLAIMS = ("username", "nonce", "exp")

_nonce_source = random.SystemRandom()


def _nonce() -> float:
    return _nonce_source.random()


class TokenService:
    def __init__(
        self,
        secret: str,
        *,
        name: str,
        required_claims: tuple[str, ...],
        claim_types: dict[str, type] | None = None,
        algorithm: str = "HS256",
    ) -> None:
        if not secret:
            raise ValueError(f"{name}_token_key_blank")
        if len(secret) < MIN_SECRET_LENGTH:
            raise ValueError(f"{name}_token_key_too_short")
        self._secret = secret
        self.name = name
        self.required_claims = required_claims
        self.claim_types = claim_types or {}
        self.algorithm = algorithm

    def __repr__(self) -> str:
        return f"TokenService(name={self.name!r}, algorithm={self.algorithm!r})"

    def sign(self, claims: dict[str, Any]) -> str:
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> Result[dict[str, Any]]:
        if not token:
            return Result.fail(FailureKind.MISSING_CREDENTIAL, "A token is required for authentication")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": list(self.required_claims)},
            )
        except jwt.ExpiredSignatureError:
            return Result.fail(FailureKind.EXPIRED_TOKEN, "Invalid token")
        except jwt.PyJWTError:
            return Result.fail(FailureKind.INVALID_TOKEN, "Invalid token")
        for claim, expected in self.claim_types.items():
            value = claims.get(claim)
            # bool is an int subclass; a boolean id is never valid.
            if isinstance(value, bool) or not isinstance(value, expected):
                return Result.fail(FailureKind.INVALID_TOKEN, "Invalid token")
        return Result.success(claims)


@dataclass(frozen=True)
class TokenServices:
    student: TokenService
    admin: TokenService
    admin_ttl: timedelta = timedelta(hours=12)


def build_token_services(cfg: Settings) -> TokenServices:
    student_key = cfg.student_token_key.get_secret_value()
    admin_key = cfg.admin_token_key.get_secret_value()
    if student_key and student_key == admin_key:
        raise ValueError("student_and_admin_token_keys_must_differ")
    return TokenServices(
        student=TokenService(
            student_key,
            name="student",
            required_claims=STUDENT_CLAIMS,
            claim_types={"id": int},
            algorithm=cfg.jwt_algorithm,
        ),
        admin=TokenService(
            admin_key,
            name="admin",
            required_claims=ADMIN_CLAIMS,
            claim_types={"username": str},
            algorithm=cfg.jwt_algorithm,
        ),
        admin_ttl=timedelta(hours=cfg.admin_token_ttl_hours),
    )


def issue_student_token(service: TokenService, student_id: int, *, now: datetime | None = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    return service.sign(
        {
            "id": int(student_id),
            "issuedAt": issued_at.isoformat(),
            "nonce": _nonce(),
        }
    )


def issue_admin_token(
    service: TokenService,
    username: str,
    *,
    ttl: timedelta = timedelta(hours=12),
    now: datetime | None = None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    return service.sign(
        {
            "username": username,
            "nonce": _nonce(),
            "iat": issued_at,
            "exp": issued_at + ttl,
        }
    )
