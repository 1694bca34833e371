from fastapi import APIRouter

from cafeteria.core.settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "service": "cafeteria-api",
        "env": settings.app_env,
    }
