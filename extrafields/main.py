import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from extrafields.config import settings
from extrafields.database import create_tables, engine
from extrafields.exception_handlers import register_exception_handlers
from extrafields.middleware.logging import StructuredLoggingMiddleware, setup_logging
from extrafields.routes import connector, fields

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on startup when configured to, dispose the engine on shutdown."""
    logger.info("Starting up the application...")
    if settings.create_tables:
        await create_tables()
        logger.info("Database tables created (if not existing).")

    yield

    logger.info("Shutting down the application...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="Custom text fields for CMS resources",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(connector.router, tags=["Connector"])
    app.include_router(fields.router, prefix="/api/v1")

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": f"{settings.app_name} is running", "version": settings.app_version}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app
