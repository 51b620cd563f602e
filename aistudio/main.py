"""Main FastAPI application"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .api import auth, avatars, lighting
from .api import settings as settings_api
from .api.errors import register_error_handlers
from .config import settings
from .database import engine, init_db, ping_db
from .services.log_service import log_service
from .services.settings_cache import SettingsCache


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    try:
        await init_db()
        app.state.db_available = await ping_db()
    except (SQLAlchemyError, OSError) as e:
        log_service.error(f"Database connection failed; running on defaults: {e}")
        app.state.db_available = False

    log_service.info(f"Startup complete (database available: {app.state.db_available})")
    try:
        yield
    finally:
        await engine.dispose()


def create_app(settings_cache: Optional[SettingsCache] = None) -> FastAPI:
    app = FastAPI(
        title="AI Studio API",
        description="Admin settings, feature flags and studio resources",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings_cache = settings_cache or SettingsCache()
    app.state.db_available = True

    # If ALLOWED_ORIGINS is not set, default to ["*"]
    allowed_origins = ["*"]
    allow_credentials = False  # Credentials cannot be used with "*"

    if settings.ALLOWED_ORIGINS:
        allowed_origins = [
            origin.strip()
            for origin in settings.ALLOWED_ORIGINS.split(",")
            if origin.strip()
        ]
        allow_credentials = True

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    register_error_handlers(app)

    app.include_router(auth.router)
    app.include_router(settings_api.router)
    app.include_router(lighting.router)
    app.include_router(avatars.router)

    @app.get("/health")
    async def health():
        """Liveness check"""
        return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/api")
    async def api_root():
        """API root"""
        return {
            "name": app.title,
            "version": app.version,
            "docs": "/docs",
            "openapi": "/openapi.json",
        }

    return app


app = create_app()
