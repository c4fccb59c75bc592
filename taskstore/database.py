# taskstore/database.py
import logging
from fastapi import Request
from sqlalchemy import event, select, insert, text
from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base
from taskstore.config import Settings
from taskstore.core.errors import StoreConnectionError, StoreUnreachableError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


async def connect(settings: Settings) -> AsyncEngine:
    """
    Build the pooled engine and open one connection right away, so a wrong
    host or bad credentials fail here instead of on the first query.
    """
    url = make_url(settings.database_url)
    options = {"echo": settings.DB_ECHO}
    if url.get_backend_name() == "postgresql":
        options["pool_size"] = settings.DB_POOL_SIZE
        options["connect_args"] = {"timeout": settings.DB_CONNECT_TIMEOUT}

    engine = create_async_engine(url, **options)
    if url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (sa_exc.SQLAlchemyError, OSError) as e:
        await engine.dispose()
        raise StoreConnectionError(f"unable to connect to {url.render_as_string()}: {e}") from e

    logger.info("Connected to %s", url.render_as_string())
    return engine


async def ping(engine: AsyncEngine) -> None:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (sa_exc.SQLAlchemyError, OSError) as e:
        raise StoreUnreachableError(f"database not responding: {e}") from e


async def close(engine: AsyncEngine) -> None:
    # dispose() on an already disposed engine just drops an empty pool
    await engine.dispose()
    logger.info("Connection pool closed")


async def init_schema(engine: AsyncEngine) -> None:
    """Create the tables and the sentinel "default" user when missing."""
    from taskstore.models.user import User, DEFAULT_USER_ID
    from taskstore.models.label import Label  # noqa: F401 (registers the table)
    from taskstore.models.task import Task  # noqa: F401

    # a concurrent create_all can collide on catalog keys (pg_type)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except sa_exc.IntegrityError as e:
        msg = str(getattr(e, "orig", e))
        if "duplicate key value violates unique constraint" in msg:
            logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
        else:
            raise

    async with engine.begin() as conn:
        result = await conn.execute(select(User.id).where(User.id == DEFAULT_USER_ID))
        if result.first() is None:
            await conn.execute(insert(User).values(id=DEFAULT_USER_ID, name="default"))
            logger.info("Inserted default user %d", DEFAULT_USER_ID)


def get_engine(request: Request) -> AsyncEngine:
    return request.app.state.engine
