"""Main application entrypoint for the comic upload proxy."""

from fastapi import FastAPI

from comicproxy.api.v1 import routes_health
from comicproxy.api.v1.routes_upload import router as upload_router
from comicproxy.core.config import settings
from comicproxy.core.logging import setup_logging
from comicproxy.middleware import HTTPErrorLoggingMiddleware


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    setup_logging()

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
    )

    app.add_middleware(HTTPErrorLoggingMiddleware)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(upload_router)

    return app


# Export app instance for ASGI servers
app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    port = int(os.getenv("PORT", "8080"))
    uvicorn.run(app, host="0.0.0.0", port=port)
