from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from cafeteria.api.health import router as health_router
from cafeteria.api.menu import router as menu_router
from cafeteria.api.staff import router as staff_router
from cafeteria.api.students import router as students_router
from cafeteria.core.bootstrap import initialize_database
from cafeteria.core.errors import (
    database_exception_handler,
    http_exception_handler,
    request_id_middleware,
    unhandled_exception_handler,
    validation_exception_handler,
)
from cafeteria.core.logging import configure_logging
from cafeteria.core.settings import settings
from cafeteria.core.tokens import build_token_services
from cafeteria.storage.database import SessionLocal, engine


configure_logging(settings.log_level)

app = FastAPI(title="Cafeteria API", version="0.1.0")
# Signing secrets are read once here; requests only ever read app.state.tokens.
app.state.tokens = build_token_services(settings)
app.include_router(health_router)
app.include_router(students_router)
app.include_router(staff_router)
app.include_router(menu_router)
app.middleware("http")(request_id_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, database_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


@app.on_event("startup")
async def on_startup():
    async with SessionLocal() as session:
        await initialize_database(session, engine, settings)


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
