# -*- coding: utf-8 -*-
"""
VitaPulse API

Health calculators, food logging, meal planning, fitness progress, symptom checking, community forum,
admin dashboard, clinical reference and i18n behind one FastAPI application.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .admin.api import router as admin_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request, get_token_from_request
from .calculators.api import router as calculators_router
from .clinical.api import router as clinical_router
from .community.api import router as community_router
from .config import settings
from .food.api import router as food_router
from .gamification.api import router as gamification_router
from .i18n.api import router as i18n_router
from .meals.api import router as meals_router
from .profile.api import router as profile_router
from .progress.api import router as progress_router
from .symptoms.api import router as symptoms_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="VitaPulse API",
    description="Consumer health and wellness API: calculators, food log, meal plans, community.",
    version=VERSION,
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


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.db_path)
    logger.info("VitaPulse API %s started (db=%s)", VERSION, settings.db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.db_path)


_TOKEN_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/auth/logout",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _resolve_user(request: Request, call_next):
    # Public routes stay public; a presented token must still be valid.
    path = request.url.path
    if (
        path.startswith("/api")
        and path != "/api/health"
        and not any(path.startswith(p) for p in _TOKEN_EXEMPT_PREFIXES)
        and get_token_from_request(request)
    ):
        try:
            request.state.user = get_current_user_from_request(request)
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(calculators_router)
app.include_router(food_router)
app.include_router(meals_router)
app.include_router(symptoms_router)
app.include_router(community_router)
app.include_router(admin_router)
app.include_router(clinical_router)
app.include_router(i18n_router)
app.include_router(profile_router)
app.include_router(progress_router)
app.include_router(gamification_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    try:
        port = int(settings.port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("vitapulse.api:app", host=settings.host, port=port, reload=False)
