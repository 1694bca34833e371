import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cafeteria.core.settings import Settings
from cafeteria.models.base import Base
from cafeteria.models import entities  # noqa: F401  (registers tables on Base.metadata)
from cafeteria.storage import repository

logger = logging.getLogger(__name__)


async def initialize_database(session: AsyncSession, engine, cfg: Settings) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await seed_bootstrap_admin(session, cfg)


async def seed_bootstrap_admin(session: AsyncSession, cfg: Settings) -> bool:
    """Create the first admin when the admins table is empty.

    Staff registration itself requires an admin token, so a fresh deployment
    needs one account provisioned out of band. Controlled by
    BOOTSTRAP_ADMIN_USERNAME / BOOTSTRAP_ADMIN_PASSWORD; nothing is created
    unless both are set.
    """
    if not cfg.bootstrap_admin_username or not cfg.bootstrap_admin_password:
        return False
    if await repository.count_admins(session) > 0:
        return False

    result = await repository.create_admin(
        session,
        username=cfg.bootstrap_admin_username,
        password=cfg.bootstrap_admin_password,
    )
    if not result.ok:
        logger.warning("Bootstrap admin not created: %s", result.failure.message)
        return False
    logger.info("Seeded bootstrap admin %s", result.value.username)
    return True
