"""Errors raised by the warehouse data layer.

Callers only ever see these; driver and SQLAlchemy exceptions are chained
as ``__cause__``. ``retryable`` marks the failures a pooled production
deployment could retry with backoff. Nothing in this package retries.
"""


class WarehouseError(Exception):
    retryable = False


class StoreConnectionError(WarehouseError):
    """Store unreachable or credentials rejected."""
    retryable = True


class MigrationError(WarehouseError):
    """DDL failed while resetting the schema."""


class ConstraintError(WarehouseError):
    """Uniqueness or foreign-key rule violated."""


class NotFoundError(WarehouseError):
    def __init__(self, entity: str, identity):
        super().__init__(f"{entity} {identity} not found")
        self.entity = entity
        self.identity = identity


class QueryError(WarehouseError):
    """Malformed predicate or a store failure while running a statement."""

    def __init__(self, message: str, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable
