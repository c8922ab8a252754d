"""
Database engine management.

Provides SQLAlchemy engines keyed by connection string. Pooling is whatever
SQLAlchemy's engine offers; this module only chooses its parameters.

Dependencies: sqlalchemy, debitor_store.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from debitor_store.configs import get_settings


@lru_cache(maxsize=None)
def get_engine(connection_string: str) -> Engine:
    """
    Create (once per connection string) an SQLAlchemy engine.

    Server databases get a QueuePool with pool_pre_ping=True so stale
    connections are detected before use. SQLite URLs get SQLAlchemy's default
    pool for the file/memory mode in use.

    Args:
        connection_string: SQLAlchemy database URL

    Returns:
        Engine: Engine shared by every call with the same connection string
        for the life of the process; the cache is unbounded so no engine is
        dropped without being disposed

    Raises:
        ArgumentError: If the URL cannot be parsed
        NoSuchModuleError: If the dialect or driver is not installed

    Usage:
        engine = get_engine("sqlite:///musterprojekt.db")
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    """
    db_config = get_settings().database
    url = make_url(connection_string)

    if url.get_backend_name() == "sqlite":
        return create_engine(url, echo=db_config.echo_sql)

    return create_engine(
        url,
        echo=db_config.echo_sql,
        poolclass=QueuePool,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,  # Verify connections before using
    )
