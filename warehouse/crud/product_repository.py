# warehouse/crud/product_repository.py
import logging
from contextlib import asynccontextmanager
from typing import Sequence
from uuid import UUID
from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from warehouse.core.exceptions import ConstraintError, NotFoundError, QueryError
from warehouse.crud.base import AbstractRepository
from warehouse.crud.filters import variant_filter_clauses
from warehouse.models import Product, ProductVariant
from warehouse.schemas.product import ProductCreate, ProductUpdate, ProductVariantCreate, VariantFilter

logger = logging.getLogger(__name__)

class ProductRepository(AbstractRepository[Product, ProductVariant]):
    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _statement(self, operation: str, commit: bool = False):
        """Translate store failures into warehouse errors, rolling back the session on failure."""
        try:
            yield
            if commit:
                await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConstraintError(f"{operation} violates a constraint: {e.orig}") from e
        except (SQLAlchemyError, OSError) as e:
            await self.db.rollback()
            raise QueryError(f"{operation} failed: {e}") from e

    async def insert_product(self, data: ProductCreate) -> Product:
        product = Product(name=data.name, brand=data.brand)
        async with self._statement("insert product", commit=True):
            self.db.add(product)
            # id and created_at come back from the INSERT via RETURNING
            await self.db.flush()

        logger.info("PRODUCT_INSERTED", extra={"product_id": str(product.id)})
        return product

    async def bulk_insert_variants(self, variants: Sequence[ProductVariantCreate]) -> list[ProductVariant]:
        if not variants:
            return []

        rows = [variant.model_dump() for variant in variants]
        stmt = insert(ProductVariant).returning(ProductVariant)
        async with self._statement("insert product variants", commit=True):
            result = await self.db.scalars(stmt, rows)
            created = list(result.all())

        logger.info("VARIANTS_INSERTED", extra={"count": len(created)})
        return created

    async def get_product_with_variants(self, product_id: UUID) -> Product:
        stmt = (
            select(Product)
            .options(joinedload(Product.variants))
            .where(Product.id == product_id)
            .execution_options(populate_existing=True)
        )
        async with self._statement("select product with variants"):
            result = await self.db.execute(stmt)
            product = result.unique().scalars().first()

        if product is None:
            raise NotFoundError("Product", product_id)
        return product

    async def get_variants_by_product_id(self, product_id: UUID) -> list[ProductVariant]:
        stmt = select(ProductVariant).where(ProductVariant.product_id == product_id)
        async with self._statement("select product variants"):
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

    async def find_variants(self, variant_filter: VariantFilter) -> list[ProductVariant]:
        stmt = select(ProductVariant).where(*variant_filter_clauses(variant_filter))
        async with self._statement("filter product variants"):
            result = await self.db.execute(stmt)
            return list(result.scalars().all())

    async def update_product(self, product_id: UUID, changes: ProductUpdate) -> int:
        """Write only the non-zero fields of ``changes``; return how many rows matched."""
        values = changes.changed_fields()
        if not values:
            raise QueryError(f"No fields to update for product {product_id}", retryable=False)

        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(**values)
            .execution_options(synchronize_session="evaluate")
        )
        async with self._statement("update product", commit=True):
            result = await self.db.execute(stmt)

        logger.info(
            "PRODUCT_UPDATED",
            extra={"product_id": str(product_id), "fields": sorted(values), "rows": result.rowcount}
        )
        return result.rowcount
