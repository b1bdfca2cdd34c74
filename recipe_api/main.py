"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from recipe_api import __version__
from recipe_api.api.v1 import api_router
from recipe_api.core.config import Settings, get_settings
from recipe_api.core.exceptions import StartupError, register_exception_handlers
from recipe_api.db.base import Base
from recipe_api.db.session import create_engine, create_session_maker

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: connect to the DB or refuse to serve; shutdown: dispose the engine."""
    settings: Settings = app.state.settings
    engine = None
    try:
        engine = create_engine(settings)
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        if settings.database_create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError, ImportError) as e:
        logger.error("Error connecting to the database: %s", e)
        if engine is not None:
            await engine.dispose()
        raise StartupError("database unreachable") from e
    logger.info("Connection to the database successful")

    app.state.engine = engine
    app.state.session_maker = create_session_maker(engine)
    yield
    await engine.dispose()


def create_application(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    cors_origins = settings.cors_origin_list
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=cors_origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)
    return app
