"""
Async engine construction.

On SQLite the driver defers BEGIN until the first write, which would leave
guard reads outside the transaction that later writes. SQLite engines
therefore open every transaction with BEGIN IMMEDIATE, taking the write
lock before the first read.
"""

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def create_engine(db_uri: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(db_uri, **kwargs)
    if make_url(db_uri).get_backend_name() == "sqlite":
        _begin_immediate(engine)
    return engine


def _begin_immediate(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")
