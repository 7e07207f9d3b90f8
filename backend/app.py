"""FastAPI application entry point for the carbon intensity API."""

import logging
import sys

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.cache import DatasetCache

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


def create_app(dataset_cache: DatasetCache | None = None) -> FastAPI:
    app = FastAPI(title="Carbon Intensity API", version="1.0.0")

    # One cache per app instance; tests inject their own
    app.state.dataset_cache = dataset_cache or DatasetCache()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        # CORSMiddleware only answers requests that send an Origin header
        if "*" in settings.cors_origins:
            response.headers.setdefault("Access-Control-Allow-Origin", "*")
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.carbon import router as carbon_router
    from routes.health import router as health_router
    from routes.meta import router as meta_router

    app.include_router(meta_router)
    app.include_router(health_router)
    app.include_router(carbon_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        problems = settings.validate()
        if problems:
            logger.warning("Configuration problems: %s", "; ".join(problems))
        logger.info("Serving carbon data from %s", settings.carbon_data_url)

    return app


app = create_app()


def main() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
