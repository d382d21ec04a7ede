"""
Writing Assistant FastAPI Application

Routes editor writing operations and chat turns to the configured language
model providers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from loguru import logger

from .shared.core.config import Settings
from .shared.core.connection_manager import ConnectionManager
from .shared.core.dependencies import get_settings
from .shared.core.exceptions import AssistantError
from .shared.core.initializer import Initializer
from .shared.core.logging import configure_logging
from .shared.middleware import add_monitoring_middleware
from .shared.models.responses import ErrorResponse
from .shared.services.endpoint.factory import EndpointFactory
from .shared.services.query import Orchestrator
from .shared.services.session import ConversationStore
from .shared.api import providers, health
from .web_api.router import router as web_router


async def startup(app: FastAPI, settings: Settings) -> None:
    """Build the shared resources and keep them on app.state."""
    conn_manager = ConnectionManager(settings)
    await conn_manager.initialize()
    app.state.connection_manager = conn_manager

    provider_config = await Initializer(settings.provider_config_file, default_model=settings.default_model).initialize()

    store = ConversationStore(max_turns=settings.max_turns)
    factory = EndpointFactory(store, http_client=conn_manager.get_http_client())
    registry = factory.build_registry(provider_config)

    app.state.provider_registry = registry
    app.state.orchestrator = Orchestrator(registry, store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Initialize resources at startup, cleanup at shutdown.
    """
    settings = app.state.settings
    configure_logging(settings)
    logger.info(f"Starting {settings.app_name} {settings.version} ({settings.environment})...")

    await startup(app, settings)
    logger.info(
        f"{settings.app_name} started: providers={app.state.provider_registry.keys()}, "
        f"active={app.state.provider_registry.current_key}"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    if hasattr(app.state, "provider_registry"):
        await app.state.provider_registry.aclose()
    if hasattr(app.state, 'connection_manager'):
        await app.state.connection_manager.close()
        logger.info("Connection manager closed")
    logger.info(f"{settings.app_name} shut down gracefully")


async def assistant_error_handler(request: Request, exc: AssistantError) -> JSONResponse:
    """Render orchestration errors as ErrorResponse bodies."""
    if exc.category == "upstream":
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}")
    body = ErrorResponse(error="Internal server error", code="internal_error", details={"category": "internal"})
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app(settings: Settings = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-provider AI orchestration for the writing assistant",
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    if settings.enable_metrics:
        add_monitoring_middleware(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
        max_age=settings.cors_max_age,
    )

    app.add_exception_handler(AssistantError, assistant_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(web_router, prefix=settings.api_prefix)
    app.include_router(providers.router, prefix=settings.api_prefix, tags=["providers"])
    app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])

    @app.get("/")
    async def root():
        """Service information."""
        return {
            "service": settings.app_name,
            "version": settings.version,
            "status": "operational",
            "endpoints": {
                "ai": [
                    f"{settings.api_prefix}/ai/unified",
                    f"{settings.api_prefix}/ai/chat",
                    f"{settings.api_prefix}/ai/models",
                    f"{settings.api_prefix}/ai/switch-model",
                    f"{settings.api_prefix}/ai/sessions",
                    f"{settings.api_prefix}/ai/continue",
                    f"{settings.api_prefix}/ai/polish",
                    f"{settings.api_prefix}/ai/summarize",
                ],
                "health": f"{settings.api_prefix}/health",
                "docs": "/docs",
            },
        }

    return app


app = create_app()


def main():
    """
    Main entry point for running the server.
    For production, run behind gunicorn with uvicorn workers.
    """
    settings = get_settings()
    logger.info(f"Starting server on {settings.host}:{settings.port} (workers={settings.workers})")

    uvicorn.run(
        "assistant_backend.main:app",
        host=settings.host,
        port=settings.port,
        workers=settings.workers,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
        access_log=True,
        loop="asyncio",
    )


if __name__ == "__main__":
    main()
