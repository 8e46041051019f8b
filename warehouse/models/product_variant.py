from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import composite, relationship
from warehouse.db.session import Base
from warehouse.models.defaults import gen_random_uuid
from warehouse.models.timestamps import TimestampColumns

class ProductVariant(Base):
    __tablename__ = "product_variant"

    id = Column(Uuid(as_uuid=True), primary_key=True, server_default=gen_random_uuid())
    name = Column(String, nullable=False)  # e.g. "green"
    product_id = Column(Uuid(as_uuid=True), ForeignKey("product.id"), nullable=False, index=True)
    properties = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False, default=dict)  # e.g. {"color": "green", "size": "L"}

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)
    timestamps = composite(TimestampColumns, created_at, updated_at)

    product = relationship("Product", back_populates="variants")

    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self):
        return f"<ProductVariant id={self.id} name={self.name!r} properties={self.properties!r}>"
