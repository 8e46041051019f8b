from sqlalchemy import Boolean, cast, literal
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.elements import ColumnElement
from warehouse.core.exceptions import QueryError
from warehouse.models import ProductVariant
from warehouse.schemas.product import VariantFilter


def _property_segments(path: str) -> tuple:
    segments = tuple(path.split("."))
    if not all(segments):
        raise QueryError(f"Malformed property path {path!r}", retryable=False)
    return segments


def property_expression(path: str):
    """JSON element of ``ProductVariant.properties`` at a dotted path."""
    segments = _property_segments(path)
    if len(segments) == 1:
        return ProductVariant.properties[segments[0]]
    return ProductVariant.properties[segments]


class property_equals(ColumnElement):
    """``properties`` holds ``value`` at the path ``segments``.

    PostgreSQL compares JSON values by containment, so rows holding a
    value of another JSON type at that path simply do not match. Other
    stores compare the extracted value typed by ``value``.
    """
    type = Boolean()
    inherit_cache = False

    def __init__(self, segments: tuple, value):
        self.segments = segments
        self.value = value


@compiles(property_equals)
def _compile_property_equals(element, compiler, **kw):
    column = ProductVariant.__table__.c.properties
    expression = column[element.segments[0]] if len(element.segments) == 1 else column[element.segments]
    value = element.value
    # bool before int: True is an int too
    if isinstance(value, bool):
        clause = expression.as_boolean() == value
    elif isinstance(value, (int, float)):
        clause = expression.as_float() == value
    else:
        clause = expression.as_string() == value
    return compiler.process(clause, **kw)


@compiles(property_equals, "postgresql")
def _compile_property_equals_postgresql(element, compiler, **kw):
    document = element.value
    for segment in reversed(element.segments):
        document = {segment: document}
    column = ProductVariant.__table__.c.properties
    clause = column.op("@>", return_type=Boolean)(cast(literal(document, JSONB), JSONB))
    return compiler.process(clause, **kw)


def variant_filter_clauses(variant_filter: VariantFilter) -> list[ColumnElement]:
    """WHERE clauses for ``variant_filter``, all of which must hold.

    Property predicates extract the value from every row's JSON document;
    nothing indexes them, so they always scan the whole table.
    """
    clauses = []
    if variant_filter.name is not None:
        clauses.append(ProductVariant.name == variant_filter.name)
    if variant_filter.product_id is not None:
        clauses.append(ProductVariant.product_id == variant_filter.product_id)

    for path, value in variant_filter.properties.items():
        clauses.append(property_equals(_property_segments(path), value))
    for path, pattern in variant_filter.property_patterns.items():
        clauses.append(property_expression(path).as_string().like(pattern))

    return clauses
