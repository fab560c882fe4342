"""Application entry point for the FastAPI backend."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db
from .routers import (
    admin_router,
    auth_router,
    fact_checks_router,
    functions_router,
    news_router,
    opportunities_router,
    reports_router,
    rpc_router,
    services_router,
    storage_public_router,
    storage_router,
)
from .security.api_key import require_api_key

logger = logging.getLogger(__name__)

settings = get_settings()
APP_NAME = settings.app_name
API_VERSION = settings.api_version

app = FastAPI(title=APP_NAME, version=API_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_project_key = [Depends(require_api_key)]

app.include_router(auth_router, dependencies=_project_key)
app.include_router(rpc_router, dependencies=_project_key)
app.include_router(news_router, dependencies=_project_key)
app.include_router(services_router, dependencies=_project_key)
app.include_router(opportunities_router, dependencies=_project_key)
app.include_router(reports_router, dependencies=_project_key)
app.include_router(fact_checks_router, dependencies=_project_key)
app.include_router(admin_router, dependencies=_project_key)
app.include_router(storage_router, dependencies=_project_key)
app.include_router(functions_router, dependencies=_project_key)
app.include_router(storage_public_router)


@app.on_event("startup")
async def _startup() -> None:
    """Ensure the database schema exists before serving."""

    try:
        init_db()
    except Exception:  # pragma: no cover - best effort logging
        logger.exception("Database initialisation failed")
        raise

    logger.info("%s %s started (environment=%s)", APP_NAME, API_VERSION, settings.app_env)


@app.get("/api", tags=["system"], dependencies=_project_key)
def api_info() -> dict[str, str]:
    return {"service": APP_NAME, "version": API_VERSION}


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    return {"status": "ok", "environment": settings.app_env}
