"""Contact Service - Main Application.

Contact directory with groups, backed by PostgreSQL.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.errors import register_exception_handlers
from .api.v1.router import api_router
from .core.config import Settings, get_settings
from .core.constants import ApiEndpoints
from .core.logging import get_logger, setup_logging
from .db.database import build_engine, build_session_factory
from .middleware.request_id import RequestIDMiddleware

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    The database engine is created on startup and disposed on shutdown; every
    request checks a session out of app.state.session_factory.

    Args:
        settings: Service settings (defaults to the process settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        logger.info(
            "Service starting",
            extra={
                'environment': settings.ENVIRONMENT,
                'version': settings.APP_VERSION
            }
        )

        engine = build_engine(settings)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)

        yield

        logger.info("Service shutting down")
        await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Contact directory with groups",
        lifespan=lifespan,
        docs_url=ApiEndpoints.DOCS,
        redoc_url=ApiEndpoints.REDOC,
        openapi_url=ApiEndpoints.OPENAPI
    )
    app.state.settings = settings

    register_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(
        api_router,
        prefix=settings.API_V1_PREFIX
    )

    @app.get(ApiEndpoints.HEALTH, tags=["Health"])
    async def health_check():
        """Liveness probe."""
        return {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "contact_service.main:app",
        host="0.0.0.0",
        port=_settings.HTTP_PORT,
        reload=_settings.DEBUG,
        log_level=_settings.LOG_LEVEL.lower()
    )
