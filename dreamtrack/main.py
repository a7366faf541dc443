from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from dreamtrack.config import get_settings
from dreamtrack.db import engine
from dreamtrack.logging_config import configure_logging, request_id_scope
from dreamtrack.routes.api import api_router

configure_logging()
logger = logging.getLogger(__name__)

REQUIRED_TABLES = {"dreams", "dream_tasks"}


def _log_schema_readiness() -> None:
    try:
        tables = set(inspect(engine).get_table_names())
    except SQLAlchemyError:
        logger.exception("Schema readiness check failed")
        return
    missing = REQUIRED_TABLES - tables
    if missing:
        logger.warning("Schema not ready; run alembic upgrade head (missing=%s)", ",".join(sorted(missing)))
    else:
        logger.info("Schema readiness check passed")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting DreamTrack application")
    _log_schema_readiness()
    yield
    logger.info("Shutting down DreamTrack application")


def create_app() -> FastAPI:
    app = FastAPI(title="DreamTrack", version="0.1.0", lifespan=lifespan)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        with request_id_scope(request_id):
            response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(api_router, prefix="/api")
    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("dreamtrack.main:app", host=settings.app_host, port=settings.app_port)
