"""
Application lifecycle events
Handles startup and shutdown tasks
"""

from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from .database import create_engine_from_settings, create_session_factory, init_db, close_db

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Builds the storage layer once and hands it to request handlers via app.state
    """
    settings = app.state.settings
    logger.info(f"Starting {settings.APP_NAME}...")

    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    try:
        await init_db(engine)
        logger.info(f"{settings.APP_NAME} started successfully")

        yield

    finally:
        logger.info(f"Shutting down {settings.APP_NAME}...")
        await close_db(engine)
        logger.info(f"{settings.APP_NAME} shutdown complete")
