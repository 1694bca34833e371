"""Menu API: weekly menu publication (staff) and lookup (public)."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria.core.auth import AdminIdentity, require_admin
from cafeteria.core.logging import DOMAIN_MENU, get_domain_logger
from cafeteria.core.results import unwrap
from cafeteria.core.settings import settings
from cafeteria.schemas.menu import MenuRequest, MenuResponse
from cafeteria.storage import repository
from cafeteria.storage.database import get_db

router = APIRouter(prefix=f"{settings.api_base}/menu", tags=["menu"])
logger = get_domain_logger(__name__, DOMAIN_MENU)


def _menu_out(row) -> MenuResponse:
    return MenuResponse(
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


@router.post("", status_code=201)
async def publish_menu(
    payload: MenuRequest,
    identity: AdminIdentity = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    dishes = {day: getattr(payload, day) for day in repository.WEEKDAYS}
    unwrap(await repository.create_menu(db, year=payload.year, week=payload.week, dishes=dishes))
    logger.info("Menu published | year=%s week=%s by=%s", payload.year, payload.week, identity.username)
    return Response(status_code=201)


@router.get("/single", response_model=MenuResponse)
async def get_menu(
    year: int = Query(...),
    week: int = Query(...),
    db: AsyncSession = Depends(get_db),
):
    return _menu_out(unwrap(await repository.get_menu(db, year=year, week=week)))


@router.get("/all", response_model=list[MenuResponse])
async def list_menus(db: AsyncSession = Depends(get_db)):
    return [_menu_out(row) for row in await repository.list_menus(db)]
