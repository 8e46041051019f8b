from sqlalchemy import Uuid
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.expression import FunctionElement


class gen_random_uuid(FunctionElement):
    """Server-side random UUID, used as a column ``server_default``."""
    type = Uuid()
    name = "gen_random_uuid"
    inherit_cache = True


@compiles(gen_random_uuid)
def _compile_gen_random_uuid(element, compiler, **kw):
    return "gen_random_uuid()"


# SQLite keeps non-native UUIDs as 32 hex characters
@compiles(gen_random_uuid, "sqlite")
def _compile_gen_random_uuid_sqlite(element, compiler, **kw):
    return "lower(hex(randomblob(16)))"
