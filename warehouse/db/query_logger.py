import logging
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine

sql_logger = logging.getLogger("sql_queries")

def log_query(statement: str, parameters, executemany: bool):
    sql_logger.info(
        "SQL_QUERY",  # ← label, the statement goes into extra
        extra={
            "statement": statement,
            "parameters": repr(parameters),
            "executemany": executemany,
        }
    )

def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    log_query(statement, parameters, executemany)

def install_query_hook(engine: AsyncEngine):
    """Log every statement the engine sends, with its bound parameters."""
    target = engine.sync_engine
    if not event.contains(target, "before_cursor_execute", _before_cursor_execute):
        event.listen(target, "before_cursor_execute", _before_cursor_execute)
