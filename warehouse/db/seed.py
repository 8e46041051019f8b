import logging
from warehouse.crud.base import AbstractRepository
from warehouse.schemas.product import ProductCreate, ProductVariantCreate

logger = logging.getLogger(__name__)

DEMO_PRODUCT = {"name": "Sport Hat", "brand": "brand"}

DEMO_VARIANTS = [
    {"name": "red", "properties": {"color": "red", "size": "X"}},
    {"name": "green", "properties": {"color": "green", "size": "M"}},
    {"name": "green", "properties": {"color": "green", "size": "L"}},
]

async def seed_demo_catalog(repo: AbstractRepository):
    """Insert the demo product and its variants; return ``(product, variants)``."""
    product = await repo.insert_product(ProductCreate(**DEMO_PRODUCT))
    variants = await repo.bulk_insert_variants([
        ProductVariantCreate(product_id=product.id, **variant)
        for variant in DEMO_VARIANTS
    ])
    logger.info("DEMO_CATALOG_SEEDED", extra={"product_id": str(product.id), "variants": len(variants)})
    return product, variants
