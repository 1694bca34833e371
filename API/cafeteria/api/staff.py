"""Staff API: admin provisioning, login and enlistment reporting."""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria.core.auth import AdminIdentity, require_admin
from cafeteria.core.logging import DOMAIN_STAFF, get_domain_logger
from cafeteria.core.results import unwrap
from cafeteria.core.settings import settings
from cafeteria.core.tokens import issue_admin_token
from cafeteria.schemas.staff import StaffCredentials
from cafeteria.schemas.student import TokenResponse
from cafeteria.storage import repository
from cafeteria.storage.database import get_db

router = APIRouter(prefix=f"{settings.api_base}/staff", tags=["staff"])
logger = get_domain_logger(__name__, DOMAIN_STAFF)


def _not_implemented() -> HTTPException:
    return HTTPException(status_code=501, detail="not_implemented")


@router.post("/register", status_code=201)
async def register_admin(
    payload: StaffCredentials,
    identity: AdminIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    admin = unwrap(await repository.create_admin(db, username=payload.username, password=payload.password))
    logger.info("Admin %s registered new admin %s", identity.username, admin.username)
    return Response(status_code=201)


@router.post("/login", response_model=TokenResponse)
async def login(payload: StaffCredentials, request: Request, db: AsyncSession = Depends(get_db)):
    result = await repository.authenticate_admin(db, username=payload.username, password=payload.password)
    if not result.ok:
        logger.info("Failed admin login | username=%s", payload.username)
    admin = unwrap(result)
    tokens = request.app.state.tokens
    return TokenResponse(token=issue_admin_token(tokens.admin, admin.username, ttl=tokens.admin_ttl))


@router.get("/enlistment")
async def enlistment_report(
    identity: AdminIdentity = Depends(require_admin),
    year: int = Query(...),
    week: int = Query(...),
):
    raise _not_implemented()


@router.post("/enrolled_number")
async def set_enrolled_number(identity: AdminIdentity = Depends(require_admin)):
    raise _not_implemented()


@router.get("/enrolled_number")
async def get_enrolled_number(identity: AdminIdentity = Depends(require_admin)):
    raise _not_implemented()
