"""Query functions behind the route handlers.

Each function owns one unit of work on the given session and reports expected
outcomes through :class:`~cafeteria.core.results.Result`. Unexpected database
errors propagate to the application's exception handlers.
"""
from __future__ import annotations

from datetime import date, datetime, timezone

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria.core.logging import DOMAIN_STORAGE, get_domain_logger
from cafeteria.core.password import hash_password, verify_password
from cafeteria.core.results import FailureKind, Result
from cafeteria.models.entities import Admin, Enlistment, Menu, Student

logger = get_domain_logger(__name__, DOMAIN_STORAGE)

# Checked against when the username is unknown so both login paths cost one pbkdf2 round.
_DUMMY_DIGEST = hash_password("cafeteria-unknown-admin")

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday")


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Students
# ---------------------------------------------------------------------------


async def create_student(db: AsyncSession, *, name: str, enrolled_from: date, enrolled_to: date) -> Result[Student]:
    if enrolled_from > enrolled_to:
        return Result.fail(FailureKind.INVALID_INPUT, "enrolled_to must be greater than enrolled_from")
    student = Student(name=name, enrolled_from=enrolled_from, enrolled_to=enrolled_to, created_on=_now())
    db.add(student)
    await db.commit()
    return Result.success(student)


async def get_student(db: AsyncSession, student_id: int) -> Result[Student]:
    student = (await db.execute(select(Student).where(Student.id == student_id))).scalar_one_or_none()
    if student is None:
        return Result.fail(FailureKind.NOT_FOUND, "Student not found")
    return Result.success(student)


async def delete_student(db: AsyncSession, student_id: int) -> Result[None]:
    await db.execute(delete(Enlistment).where(Enlistment.student_id == student_id))
    deleted = await db.execute(delete(Student).where(Student.id == student_id))
    await db.commit()
    if not deleted.rowcount:
        return Result.fail(FailureKind.NOT_FOUND, "Student not found")
    return Result.success()


# ---------------------------------------------------------------------------
# Enlistments
# ---------------------------------------------------------------------------


async def create_enlistment(
    db: AsyncSession,
    *,
    student_id: int,
    year: int,
    week: int,
    days: dict[str, bool],
) -> Result[Enlistment]:
    # Student tokens outlive deleted students.
    owner = (await db.execute(select(Student.id).where(Student.id == student_id))).scalar_one_or_none()
    if owner is None:
        return Result.fail(FailureKind.NOT_FOUND, "Student not found")

    existing = (
        await db.execute(
            select(Enlistment.id).where(
                Enlistment.student_id == student_id,
                Enlistment.year == year,
                Enlistment.week == week,
            )
        )
    ).scalar_one_or_none()
    if existing is not None:
        return Result.fail(FailureKind.ALREADY_EXISTS, "Enlistment for this week already exists")

    enlistment = Enlistment(
        student_id=student_id,
        year=year,
        week=week,
        created_on=_now(),
        **{day: bool(days.get(day, False)) for day in WEEKDAYS},
    )
    db.add(enlistment)
    try:
        await db.commit()
    except IntegrityError:
        # Concurrent insert for the same week.
        await db.rollback()
        logger.warning("Enlistment insert rejected | student_id=%s year=%s week=%s", student_id, year, week)
        return Result.fail(FailureKind.ALREADY_EXISTS, "Enlistment for this week already exists")
    return Result.success(enlistment)


async def update_enlistment(
    db: AsyncSession,
    *,
    student_id: int,
    year: int,
    week: int,
    days: dict[str, bool],
) -> Result[None]:
    updated = await db.execute(
        update(Enlistment)
        .where(
            Enlistment.student_id == student_id,
            Enlistment.year == year,
            Enlistment.week == week,
        )
        .values(**{day: bool(days.get(day, False)) for day in WEEKDAYS})
    )
    await db.commit()
    if not updated.rowcount:
        return Result.fail(FailureKind.NOT_FOUND, "Enlistment not found")
    return Result.success()


async def list_enlistments(db: AsyncSession, student_id: int) -> list[Enlistment]:
    result = await db.execute(
        select(Enlistment)
        .where(Enlistment.student_id == student_id)
        .order_by(Enlistment.year, Enlistment.week)
    )
    return list(result.scalars().all())


async def get_enlistment(db: AsyncSession, *, student_id: int, year: int, week: int) -> Result[Enlistment]:
    enlistment = (
        await db.execute(
            select(Enlistment).where(
                Enlistment.student_id == student_id,
                Enlistment.year == year,
                Enlistment.week == week,
            )
        )
    ).scalar_one_or_none()
    if enlistment is None:
        return Result.fail(FailureKind.NOT_FOUND, "Enlistment not found")
    return Result.success(enlistment)


# ---------------------------------------------------------------------------
# Admins
# ---------------------------------------------------------------------------


def normalize_username(username: str) -> str:
    return (username or "").strip()


async def count_admins(db: AsyncSession) -> int:
    return int((await db.execute(select(func.count(Admin.username)))).scalar_one())


async def create_admin(db: AsyncSession, *, username: str, password: str) -> Result[Admin]:
    name = normalize_username(username)
    if not name or not password:
        return Result.fail(FailureKind.INVALID_INPUT, "All input is required")

    existing = (await db.execute(select(Admin.username).where(Admin.username == name))).scalar_one_or_none()
    if existing is not None:
        return Result.fail(FailureKind.ALREADY_EXISTS, "User already exists, please login")

    admin = Admin(username=name, password=hash_password(password))
    db.add(admin)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        return Result.fail(FailureKind.ALREADY_EXISTS, "User already exists, please login")
    return Result.success(admin)


async def authenticate_admin(db: AsyncSession, *, username: str, password: str) -> Result[Admin]:
    name = normalize_username(username)
    admin = (await db.execute(select(Admin).where(Admin.username == name))).scalar_one_or_none()
    if admin is None:
        verify_password(password, _DUMMY_DIGEST)
        return Result.fail(FailureKind.BAD_CREDENTIALS, "Username or password incorrect.")
    if not verify_password(password, admin.password):
        return Result.fail(FailureKind.BAD_CREDENTIALS, "Username or password incorrect.")
    return Result.success(admin)


# ---------------------------------------------------------------------------
# Menus
# ---------------------------------------------------------------------------


async def create_menu(db: AsyncSession, *, year: int, week: int, dishes: dict[str, str | None]) -> Result[Menu]:
    existing = (
        await db.execute(select(Menu.id).where(Menu.year == year, Menu.week == week))
    ).scalar_one_or_none()
    if existing is not None:
        return Result.fail(FailureKind.ALREADY_EXISTS, "Menu for this week already exists")

    menu = Menu(year=year, week=week, created_on=_now(), **{day: dishes.get(day) for day in WEEKDAYS})
    db.add(menu)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        return Result.fail(FailureKind.ALREADY_EXISTS, "Menu for this week already exists")
    return Result.success(menu)


async def get_menu(db: AsyncSession, *, year: int, week: int) -> Result[Menu]:
    menu = (await db.execute(select(Menu).where(Menu.year == year, Menu.week == week))).scalar_one_or_none()
    if menu is None:
        return Result.fail(FailureKind.NOT_FOUND, "Menu not found")
    return Result.success(menu)


async def list_menus(db: AsyncSession) -> list[Menu]:
    result = await db.execute(select(Menu).order_by(Menu.year, Menu.week))
    return list(result.scalars().all())
