# -*- coding: utf-8 -*-
"""
Coach Hub API

Admin console and member backend for a faith-based fitness coaching platform:
content strategy, content calendar, discipline routines, nutrition templates,
training programs, social tooling and account administration.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .admin_users.api import functions_router as admin_functions_router
from .admin_users.api import router as admin_users_router
from .app_db import init_app_db
from .auth.api import router as auth_router
from .auth.security import get_current_user_from_request
from .config import settings
from .content.api import functions_router as content_functions_router
from .content.api import router as content_router
from .content_calendar.api import functions_router as calendar_functions_router
from .content_calendar.api import router as calendar_router
from .discipline.api import router as discipline_router
from .logging_setup import setup_logging
from .nutrition.api import router as nutrition_router
from .onboarding.api import router as onboarding_router
from .programs.api import functions_router as programs_functions_router
from .programs.api import router as programs_router
from .social.api import functions_router as social_functions_router
from .social.api import router as social_router

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"

app = FastAPI(
    title="Coach Hub API",
    description="Content strategy, discipline, nutrition and program tooling for Redeemed Strength",
    version=API_VERSION,
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
    init_app_db(settings.app_db_path)
    logger.info("App database ready at %s", settings.app_db_path)


# Ensure the app DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.app_db_path)


_AUTH_EXEMPT_PREFIXES = (
    "/api/auth/login",
    "/api/auth/register",
    "/api/auth/logout",
    "/api/docs",
    "/api/redoc",
    "/api/openapi.json",
)


@app.middleware("http")
async def _auth_gate(request: Request, call_next):
    path = request.url.path
    if path.startswith("/api") and path != "/api/health" and not any(path.startswith(p) for p in _AUTH_EXEMPT_PREFIXES):
        try:
            user = get_current_user_from_request(request)
            request.state.user = user
        except HTTPException as exc:
            return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    return await call_next(request)


app.include_router(auth_router)
app.include_router(onboarding_router)
app.include_router(content_router)
app.include_router(calendar_router)
app.include_router(discipline_router)
app.include_router(nutrition_router)
app.include_router(programs_router)
app.include_router(social_router)
app.include_router(admin_users_router)

# Edge functions: LLM proxies, account administration and seeding.
app.include_router(content_functions_router)
app.include_router(calendar_functions_router)
app.include_router(programs_functions_router)
app.include_router(social_functions_router)
app.include_router(admin_functions_router)


@app.get("/api/health")
def health_check():
    return {
        "status": "ok",
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm_configured": bool(settings.llm_api_key),
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("coachhub.api:app", host=settings.host, port=settings.port, reload=False)
