import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from alembic.config import Config
from alembic import command

from mini_jira.db import init_db
from mini_jira.core import get_settings
from mini_jira.core.errors import register_exception_handlers
from mini_jira.core.middleware import RequestLoggingMiddleware
from mini_jira.api.v1 import api_router
from mini_jira.logs import api_logger

settings = get_settings()

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def run_migrations() -> None:
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
    command.upgrade(alembic_cfg, "head")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    if settings.RUN_MIGRATIONS:
        # alembic's env.py drives its own event loop
        await asyncio.to_thread(run_migrations)
        api_logger.info("Database migrations applied")

    await init_db()
    api_logger.info("Database initialized")

    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Project and issue tracking API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    max_age=3600,
)

app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"name": settings.PROJECT_NAME, "version": app.version, "status": "running"}


if __name__ == "__main__":
    import uvicorn

    api_logger.info("Starting server on http://0.0.0.0:8000")
    uvicorn.run(
        "mini_jira.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info"
    )
