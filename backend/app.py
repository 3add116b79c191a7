"""FastAPI application entry point for the APOD gateway."""

import logging
import sys
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from config import Settings, settings
from errors import register_error_handlers
from services.apod import ApodService
from services.cache import TTLCache

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def build_apod_service(app_settings: Settings) -> ApodService:
    """One cache per process, shared by every request."""
    return ApodService(
        api_key=app_settings.api_key,
        cache=TTLCache(ttl_seconds=app_settings.apod_cache_ttl_seconds),
        base_url=app_settings.apod_base_url,
        timeout=app_settings.upstream_timeout_seconds,
    )


def create_app(app_settings: Settings | None = None, apod_service: ApodService | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="APOD Gateway", version="1.0.0")
    app.state.settings = app_settings
    app.state.apod_service = apod_service or build_apod_service(app_settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.apod import router as apod_router
    from routes.health import router as health_router

    app.include_router(health_router)
    app.include_router(apod_router)

    # Static site last so API routes take precedence over files under "/"
    if Path(app_settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=app_settings.static_dir, html=True), name="static")

    @app.on_event("startup")
    async def _validate_config() -> None:
        for warning in app_settings.validate():
            logger.warning(warning)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info("APOD gateway on http://localhost:%d/ (today: /space/apod/today)", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
