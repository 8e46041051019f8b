from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field, JsonValue
from typing import Any, Dict, List, Optional, Union

# Open-ended variant attributes: any JSON value (str | number | bool | null | list | object)
Properties = Dict[str, JsonValue]


class ProductCreate(BaseModel):
    name: str
    brand: str


class ProductUpdate(BaseModel):
    name: Optional[str] = None
    brand: Optional[str] = None
    updated_at: Optional[datetime] = None

    def changed_fields(self) -> Dict[str, Any]:
        """Fields that were set to a non-zero value; everything else is left alone in storage."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None and value != ""
        }


class ProductVariantCreate(BaseModel):
    name: str
    product_id: UUID
    properties: Properties = Field(default_factory=dict)


class VariantFilter(BaseModel):
    name: Optional[str] = None
    product_id: Optional[UUID] = None
    # Keys are property paths, dotted for nested objects: "size", "dims.width"
    properties: Dict[str, Union[str, int, float, bool]] = Field(default_factory=dict)
    property_patterns: Dict[str, str] = Field(default_factory=dict)  # SQL LIKE, e.g. {"size": "L%"}


class TimestampsOut(BaseModel):
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ProductVariantOut(BaseModel):
    id: UUID
    name: str
    product_id: UUID
    properties: Properties
    timestamps: TimestampsOut

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: UUID
    name: str
    brand: str
    timestamps: TimestampsOut
    variants: List[ProductVariantOut] = []

    model_config = ConfigDict(from_attributes=True)
