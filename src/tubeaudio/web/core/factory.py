"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tubeaudio.web.core.container import Container
from tubeaudio.web.core.errors import register_exception_handlers
from tubeaudio.web.core.lifespan import lifespan
from tubeaudio.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from tubeaudio.web.routers import (
    audio_api_routes,
    conversion_api_routes,
    health_api_routes,
    playlist_api_routes,
)


def create_app(container: Container | None = None) -> FastAPI:
    """Create FastAPI application with dependency injection.

    This factory function creates a fully configured FastAPI application with:
    - Dependency injection container setup
    - All routers configured under the /api prefix
    - JSON error responses for domain exceptions
    - Lifespan management for startup and shutdown

    Args:
        container: Optional pre-built container, e.g. with test overrides.

    Returns:
        FastAPI: The configured application instance.
    """
    container = container or Container()

    app = FastAPI(
        lifespan=lifespan,
        title="tubeaudio API",
        description="Convert video references to audio, catalog them and stream them back",
        version="1.0.0",
    )
    app.container = container  # type: ignore[attr-defined]

    config = container.config()

    # The browser player is served from a different origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,  # nosemgrep
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Range", "Content-Length", "Accept-Ranges", "X-Audio-Id"],
    )

    app.add_middleware(StructuredRequestLoggingMiddleware)

    register_exception_handlers(app)

    container.wire(
        modules=[
            "tubeaudio.web.routers.audio_api_routes",
            "tubeaudio.web.routers.conversion_api_routes",
            "tubeaudio.web.routers.health_api_routes",
            "tubeaudio.web.routers.playlist_api_routes",
        ]
    )

    app.include_router(conversion_api_routes.router, prefix="/api", tags=["Conversion API"])
    app.include_router(audio_api_routes.router, prefix="/api", tags=["Audio API"])
    app.include_router(playlist_api_routes.router, prefix="/api", tags=["Playlist API"])
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    return app
