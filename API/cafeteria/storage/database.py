from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from cafeteria.core.settings import settings

engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=not settings.database_url.startswith("sqlite"),
)
SessionLocal = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_db() -> AsyncSession:
    async with SessionLocal() as session:
        yield session
