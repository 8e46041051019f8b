import asyncio
import logging
import sys
from warehouse.core.config import settings
from warehouse.core.exceptions import WarehouseError
from warehouse.crud.product_repository import ProductRepository
from warehouse.db.migrate import reset_models
from warehouse.db.seed import seed_demo_catalog
from warehouse.db.session import AsyncSessionLocal, connect, engine, resolve_url
from warehouse.logging_config import setup_logging
from warehouse.schemas.product import ProductOut, ProductUpdate, ProductVariantOut, VariantFilter

logger = logging.getLogger("warehouse")


async def run_demo(engine, session_factory, schema=None):
    await connect(engine)
    await reset_models(engine, schema=schema)

    async with session_factory() as db:
        repo = ProductRepository(db)

        product, _ = await seed_demo_catalog(repo)
        logger.info("PRODUCT_CREATED", extra={"product_id": str(product.id)})

        # preload all variants of the product
        loaded = await repo.get_product_with_variants(product.id)
        for variant in loaded.variants:
            logger.info("VARIANT_PRELOADED", extra={"product": loaded.name, "variant": ProductVariantOut.model_validate(variant).model_dump(mode="json")})

        # select only variants, filtered on a JSON property
        green_large = await repo.find_variants(VariantFilter(name="green", property_patterns={"size": "L"}))
        logger.info(
            "VARIANTS_FILTERED",
            extra={"variants": [ProductVariantOut.model_validate(v).model_dump(mode="json") for v in green_large]}
        )

        rows = await repo.update_product(product.id, ProductUpdate(name="new name", brand="new brand"))
        logger.info("ROWS_UPDATED", extra={"rows": rows})

        updated = await repo.get_product_with_variants(product.id)
        return ProductOut.model_validate(updated)


async def main():
    try:
        return await run_demo(engine, AsyncSessionLocal, schema=resolve_url(settings.database_url).search_path)
    finally:
        await engine.dispose()


def run():
    setup_logging(log_dir=settings.LOG_DIR)
    try:
        product = asyncio.run(main())
    except WarehouseError as e:
        logger.exception("DEMO_FAILED", extra={"error": type(e).__name__, "retryable": e.retryable})
        sys.exit(1)
    except Exception as e:
        logger.exception("DEMO_FAILED", extra={"error": type(e).__name__, "retryable": False})
        sys.exit(1)
    logger.info("DEMO_FINISHED", extra={"product": product.model_dump(mode="json")})


if __name__ == "__main__":
    run()
