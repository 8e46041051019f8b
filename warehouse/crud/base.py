# warehouse/crud/base.py
from abc import ABC, abstractmethod
from typing import Generic, Sequence, TypeVar
from uuid import UUID

T = TypeVar("T")
V = TypeVar("V")

class AbstractRepository(ABC, Generic[T, V]):
    @abstractmethod
    async def insert_product(self, data) -> T: ...

    @abstractmethod
    async def bulk_insert_variants(self, variants: Sequence) -> list[V]: ...

    @abstractmethod
    async def get_product_with_variants(self, product_id: UUID) -> T: ...

    @abstractmethod
    async def get_variants_by_product_id(self, product_id: UUID) -> list[V]: ...

    @abstractmethod
    async def find_variants(self, variant_filter) -> list[V]: ...

    @abstractmethod
    async def update_product(self, product_id: UUID, changes) -> int: ...
