"""
Pytest configuration and fixtures for Extra Fields tests
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

import extrafields.models  # noqa: F401
from extrafields.database import Base, get_db
from extrafields.exception_handlers import register_exception_handlers
from extrafields.host import Host
from extrafields.routes import connector, fields
from extrafields.services import field_service


@pytest.fixture(scope="function")
async def test_engine(tmp_path):
    """
    File-backed SQLite database per test.

    NullPool gives every session its own connection, so the TestClient's
    event loop and the test's event loop never share one.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(session_factory):
    """Provide a database session for tests that need it."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def host(test_db) -> Host:
    """Host context with every permission granted."""
    return Host(db=test_db)


@pytest.fixture
async def bio_field(test_db):
    """A field named 'bio'."""
    return await field_service.create_field(test_db, "bio", description="Short biography")


@pytest.fixture(scope="function")
def client(session_factory):
    """Create test client with database dependency override"""
    # Create a minimal test app without lifespan
    test_app = FastAPI()
    test_app.include_router(connector.router)
    test_app.include_router(fields.router, prefix="/api/v1")
    register_exception_handlers(test_app)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    test_app.dependency_overrides[get_db] = override_get_db
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
