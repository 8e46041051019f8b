import asyncio
import logging
from typing import NamedTuple, Optional
from sqlalchemy import event, text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from warehouse.core.config import settings
from warehouse.core.exceptions import StoreConnectionError
from warehouse.db.query_logger import install_query_hook

logger = logging.getLogger(__name__)

Base = declarative_base()

ASYNC_POSTGRES_DRIVER = "postgresql+asyncpg"


class StoreTarget(NamedTuple):
    url: URL
    connect_args: dict
    search_path: Optional[str]


def resolve_url(dsn: str) -> StoreTarget:
    """Turn ``scheme://user:pw@host:port/db?sslmode=..&search_path=..`` into what the async driver accepts.

    asyncpg does not understand libpq query parameters, so ``sslmode`` and
    ``search_path`` are moved into connect arguments.
    """
    url = make_url(dsn)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername=ASYNC_POSTGRES_DRIVER)

    connect_args = {}
    search_path = None
    if url.drivername == ASYNC_POSTGRES_DRIVER:
        query = dict(url.query)
        sslmode = query.pop("sslmode", None)
        search_path = query.pop("search_path", None)
        url = url.set(query=query)
        if sslmode:
            connect_args["ssl"] = sslmode
        if search_path:
            connect_args["server_settings"] = {"search_path": search_path}

    return StoreTarget(url=url, connect_args=connect_args, search_path=search_path)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(dsn: str, echo_queries: bool = False, **engine_kwargs) -> AsyncEngine:
    target = resolve_url(dsn)
    engine = create_async_engine(target.url, connect_args=target.connect_args, **engine_kwargs)

    if target.url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    if echo_queries:
        install_query_hook(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def connect(engine: AsyncEngine) -> None:
    """Open one connection and run a trivial query. Single attempt."""
    safe_url = engine.url.render_as_string(hide_password=True)
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        raise StoreConnectionError(f"Could not connect to {safe_url}: {e}") from e
    logger.info("STORE_CONNECTED", extra={"url": safe_url})


engine = create_engine(settings.database_url, echo_queries=settings.SQL_ECHO)

AsyncSessionLocal = create_session_factory(engine)
