"""
Main Application - Main Layer

Builds the FastAPI application: the home and services routers under the API
prefix, a health endpoint listing the registered backends, and the lifespan
that starts and stops the plugins through the container.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from homehub.main.config import AppSettings, get_settings
from homehub.main.container import app_lifespan, init_container
from homehub.presentation.controllers import home_router, services_router
from homehub.shared import configure_logging, get_logger, update_logging_from_settings

configure_logging()
update_logging_from_settings(get_settings())

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with app_lifespan() as container:
        app.state.container = container
        app.state.started_at = datetime.now(timezone.utc)
        logger.info(
            "app.started",
            services=container.service_registry().get_ids(),
            storage=container.config.storage.backend(),
        )
        yield
    logger.info("app.stopped")


def _health(settings: AppSettings):
    async def health(request: Request) -> Dict[str, Any]:
        """Liveness plus the backends this instance can talk to."""
        started_at = getattr(request.app.state, "started_at", None)
        container = getattr(request.app.state, "container", None)
        return {
            "status": "ok",
            "version": settings.api.version,
            "git_commit": settings.api.git_commit,
            "docs": f"{settings.api.prefix}/docs",
            "uptime_seconds": (
                int((datetime.now(timezone.utc) - started_at).total_seconds())
                if started_at
                else 0
            ),
            "services": (
                container.service_registry().get_ids() if container else []
            ),
        }

    return health


def create_app() -> FastAPI:
    """
    Create the application from the current settings.

    A new container is initialized on every call, so tests can build an
    app per environment.
    """
    settings = get_settings()
    init_container(settings)
    prefix = settings.api.prefix

    app = FastAPI(
        title=settings.api.title,
        description=settings.api.description,
        version=settings.api.version,
        docs_url=f"{prefix}/docs",
        redoc_url=f"{prefix}/redoc",
        openapi_url=f"{prefix}/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(home_router, prefix=prefix)
    app.include_router(services_router, prefix=prefix)
    app.add_api_route("/health", _health(settings), methods=["GET"], tags=["System"])

    logger.info("app.created", prefix=prefix, environment=settings.environment)
    return app


app = create_app()
