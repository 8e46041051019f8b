"""Pytest configuration and fixtures."""

import os
import pytest
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing warehouse modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SQL_ECHO", "false")

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    """Fresh in-memory store, one shared connection."""
    from warehouse.db.session import create_engine

    engine = create_engine(MEMORY_URL, poolclass=StaticPool)
    yield engine
    await engine.dispose()


@pytest.fixture
async def migrated_engine(engine):
    from warehouse.db.migrate import reset_models

    await reset_models(engine)
    return engine


@pytest.fixture
def session_factory(migrated_engine):
    from warehouse.db.session import create_session_factory

    return create_session_factory(migrated_engine)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def repo(db):
    from warehouse.crud.product_repository import ProductRepository

    return ProductRepository(db)


@pytest.fixture
async def seeded(repo):
    """Sport Hat with red/X, green/M and green/L variants."""
    from warehouse.db.seed import seed_demo_catalog

    return await seed_demo_catalog(repo)
