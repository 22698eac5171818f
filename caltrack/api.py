# -*- coding: utf-8 -*-
"""
CalTrack API

Food, activity and weight logging with daily/weekly rollups against personal goals.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .activities.api import router as activities_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .config import settings
from .errors import install_error_handlers
from .foods.api import router as foods_router
from .stats.api import router as stats_router
from .users.api import router as users_router
from .weight.api import router as weight_router

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app = FastAPI(
    title="CalTrack API",
    description="Calorie, activity and weight tracking",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(foods_router)
app.include_router(activities_router)
app.include_router(weight_router)
app.include_router(stats_router)


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    configure_logging()
    logger.info("Starting CalTrack API on %s:%s", settings.host, settings.port)
    uvicorn.run("caltrack.api:app", host=settings.host, port=settings.port, reload=False)
