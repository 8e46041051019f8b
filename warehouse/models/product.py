from sqlalchemy import Column, DateTime, String, Uuid, func
from sqlalchemy.orm import composite, relationship
from warehouse.db.session import Base
from warehouse.models.defaults import gen_random_uuid
from warehouse.models.timestamps import TimestampColumns

class Product(Base):
    __tablename__ = "product"

    id = Column(Uuid(as_uuid=True), primary_key=True, server_default=gen_random_uuid())
    name = Column(String, nullable=False)  # e.g. "Sport Hat"
    brand = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True)
    timestamps = composite(TimestampColumns, created_at, updated_at)

    variants = relationship("ProductVariant", back_populates="product", cascade="all, delete")

    __mapper_args__ = {"eager_defaults": True}

    def __repr__(self):
        return f"<Product id={self.id} name={self.name!r} brand={self.brand!r}>"
