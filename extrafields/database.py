import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from extrafields.config import settings

logger = logging.getLogger(__name__)

DATABASE_URL = settings.database_url


def build_engine(database_url: str, environment: str = "development") -> AsyncEngine:
    """Create the async engine with pool settings suited to the backend."""
    if database_url.startswith("sqlite"):
        # SQLite pools are managed by the dialect
        return create_async_engine(database_url, echo=settings.debug)

    # Environment-based configurations
    if environment == "production":
        return create_async_engine(
            database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
        )
    return create_async_engine(
        database_url,
        echo=settings.debug,
        pool_size=10,
        max_overflow=20,
        pool_timeout=30,
    )


engine = build_engine(settings.database_url, settings.environment)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db():
    logger.debug("Opening database session...")
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.error(f"Database session error: {e}")
            raise
        finally:
            try:
                await db.close()
                logger.debug("Database session closed.")
            except Exception as close_error:
                logger.warning(f"Error closing database session: {close_error}")


async def create_tables(bind: AsyncEngine | None = None) -> None:
    """Create the extension tables if they do not exist yet."""
    # Register the models on Base.metadata
    import extrafields.models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
