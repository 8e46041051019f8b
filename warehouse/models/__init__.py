from warehouse.models.timestamps import TimestampColumns
from warehouse.models.product import Product
from warehouse.models.product_variant import ProductVariant

__all__ = ["TimestampColumns", "Product", "ProductVariant"]
