"""Main FastAPI application"""

from fastapi import FastAPI
from typing import Optional
import logging

from beanstore.core.config import Settings, get_settings
from beanstore.core.events import lifespan
from beanstore.core.exceptions import setup_exception_handlers
from beanstore.core.logging import setup_logging
from beanstore.core.middleware import setup_middleware
from beanstore.api import api_router, health_router

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Explicit settings; read from the environment when omitted

    Returns:
        Configured FastAPI app; storage is opened by its lifespan
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Coffee storefront API: catalog, session cart and orders",
        version=settings.APP_VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )
    app.state.settings = settings

    setup_middleware(app, settings)
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")
    app.include_router(health_router)

    # Root endpoint
    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "message": f"Welcome to {settings.APP_NAME}",
            "docs": "/api/docs",
            "health": "/health"
        }

    return app

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "beanstore.main:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=None if settings.DEBUG else settings.WORKERS
    )
