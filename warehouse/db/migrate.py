import asyncio
import logging
from typing import Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.schema import CreateSchema
from warehouse.core.exceptions import MigrationError
from warehouse.db.session import Base
from warehouse.models import Product, ProductVariant

logger = logging.getLogger(__name__)

DEFAULT_MODELS = (Product, ProductVariant)


async def reset_models(engine: AsyncEngine, *models, schema: Optional[str] = None) -> None:
    """Drop and recreate the tables behind ``models``.

    Development-only reset: existing rows are lost. Tables are dropped and
    created in foreign-key order regardless of the order given. On
    PostgreSQL the first schema of ``schema`` (a search path) is created
    first when missing.
    """
    tables = [model.__table__ for model in (models or DEFAULT_MODELS)]
    table_names = [table.name for table in tables]

    try:
        async with engine.begin() as conn:
            if schema and conn.dialect.name == "postgresql":
                schema_name = schema.split(",")[0].strip()
                await conn.execute(CreateSchema(schema_name, if_not_exists=True))
            await conn.run_sync(Base.metadata.drop_all, tables=tables)
            await conn.run_sync(Base.metadata.create_all, tables=tables)
    except (SQLAlchemyError, OSError, asyncio.TimeoutError) as e:
        raise MigrationError(f"Could not reset tables {table_names}: {e}") from e

    logger.info("TABLES_RESET", extra={"tables": table_names})
