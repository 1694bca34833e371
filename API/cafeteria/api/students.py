"""Student API: self-registration, profile and weekly meal enlistment."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria.core.auth import StudentIdentity, require_student
from cafeteria.core.logging import DOMAIN_STUDENTS, get_domain_logger
from cafeteria.core.results import unwrap
from cafeteria.core.settings import settings
from cafeteria.core.tokens import issue_student_token
from cafeteria.schemas.student import (
    EnlistmentRequest,
    EnlistmentResponse,
    StudentRegisterRequest,
    StudentResponse,
    TokenResponse,
)
from cafeteria.storage import repository
from cafeteria.storage.database import get_db

router = APIRouter(prefix=f"{settings.api_base}/student", tags=["student"])
logger = get_domain_logger(__name__, DOMAIN_STUDENTS)


def _days(payload: EnlistmentRequest) -> dict[str, bool]:
    return {day: getattr(payload, day) for day in repository.WEEKDAYS}


def _enlistment_out(row) -> EnlistmentResponse:
    # student_id is never echoed back; the caller is implied by the token.
    return EnlistmentResponse(
        id=row.id,
        year=row.year,
        week=row.week,
        monday=row.monday,
        tuesday=row.tuesday,
        wednesday=row.wednesday,
        thursday=row.thursday,
        friday=row.friday,
        created_on=row.created_on,
    )


@router.post("/register", status_code=201, response_model=TokenResponse)
async def register_student(payload: StudentRegisterRequest, request: Request, db: AsyncSession = Depends(get_db)):
    student = unwrap(
        await repository.create_student(
            db,
            name=payload.name,
            enrolled_from=payload.enrolled_from,
            enrolled_to=payload.enrolled_to,
        )
    )
    logger.info("Registered student | id=%s", student.id)
    token = issue_student_token(request.app.state.tokens.student, student.id)
    return TokenResponse(token=token)


@router.get("", response_model=StudentResponse)
async def get_student(
    identity: StudentIdentity = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    student = unwrap(await repository.get_student(db, identity.student_id))
    return StudentResponse(
        name=student.name,
        enrolled_from=student.enrolled_from,
        enrolled_to=student.enrolled_to,
        created_on=student.created_on,
    )


@router.delete("", status_code=410)
async def delete_student(
    identity: StudentIdentity = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    unwrap(await repository.delete_student(db, identity.student_id))
    logger.info("Deleted student | id=%s", identity.student_id)
    return Response(status_code=410)


@router.post("/enlistment", status_code=201)
async def create_enlistment(
    payload: EnlistmentRequest,
    identity: StudentIdentity = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    unwrap(
        await repository.create_enlistment(
            db,
            student_id=identity.student_id,
            year=payload.year,
            week=payload.week,
            days=_days(payload),
        )
    )
    return Response(status_code=201)


@router.patch("/enlistment")
async def update_enlistment(
    payload: EnlistmentRequest,
    identity: StudentIdentity = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    unwrap(
        await repository.update_enlistment(
            db,
            student_id=identity.student_id,
            year=payload.year,
            week=payload.week,
            days=_days(payload),
        )
    )
    return Response(status_code=200)


@router.get("/enlistment/all", response_model=list[EnlistmentResponse])
async def list_enlistments(
    identity: StudentIdentity = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    rows = await repository.list_enlistments(db, identity.student_id)
    return [_enlistment_out(row) for row in rows]


@router.get("/enlistment/single", response_model=EnlistmentResponse)
async def get_enlistment(
    identity: StudentIdentity = Depends(require_student),
    year: int = Query(...),
    week: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    row = unwrap(await repository.get_enlistment(db, student_id=identity.student_id, year=year, week=week))
    return _enlistment_out(row)
