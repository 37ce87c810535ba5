"""
db/connection.py
----------------
Manages the MySQL connection pool.
Uses SQLAlchemy's QueuePool over PyMySQL: at most ``pool_size`` connections are
open at once, further callers wait up to ``pool_timeout`` seconds for one to be
released. ``pool_pre_ping`` checks every connection on checkout so connections
dropped by the server while idle are replaced transparently, and every
connection is rolled back when it is returned.

Consumers should prefer the ``connection()`` context manager, which always
returns the connection to the pool:

    with connection() as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1")
        conn.commit()
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import PoolProxiedConnection

from config import DB_CONFIG, DatabaseConfig
from utils.logger import get_logger

logger = get_logger(__name__)

_engine: Optional[Engine] = None


def pool_options(config: DatabaseConfig) -> dict:
    """QueuePool bounds: a hard cap of pool_size, no overflow, pre-ping keep-alive."""
    return {
        "pool_size": config.pool_size,
        "max_overflow": 0,
        "pool_timeout": config.pool_timeout,
        "pool_pre_ping": True,
    }


def build_engine(config: DatabaseConfig) -> Engine:
    """
    Create the engine backing the pool. No connection is opened here.

    Args:
        config: Connection settings and pool bounds.
    """
    url = URL.create(
        "mysql+pymysql",
        username=config.user,
        password=config.password,
        host=config.host,
        port=config.port,
        database=config.database,
        query={"charset": "utf8mb4"},
    )
    return create_engine(
        url,
        connect_args={"connect_timeout": config.connect_timeout},
        **pool_options(config),
    )


def init_pool(config: DatabaseConfig = DB_CONFIG, engine: Optional[Engine] = None) -> None:
    """
    Initialize the process-wide connection pool and run a startup health check.

    A failed health check is only logged; real failures surface when
    application code acquires a connection.

    Args:
        config: Connection settings (defaults to the environment).
        engine: A prebuilt engine, mainly for tests.
    """
    global _engine
    if _engine is not None:
        return
    _engine = engine if engine is not None else build_engine(config)
    logger.info(
        f"Database connection pool initialized (max {_engine.pool.size()} connections)."
    )
    check_connection(config)


def check_connection(config: DatabaseConfig = DB_CONFIG) -> bool:
    """
    Open and release one pooled connection, logging the outcome.

    Returns:
        True if a connection could be opened, False otherwise.
    """
    if _engine is None:
        logger.error("Database pool not initialized. Call init_pool() first.")
        return False
    try:
        with _engine.connect():
            pass
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        logger.error(f"Host: {config.host}")
        logger.error(f"Port: {config.port}")
        logger.error(f"User: {config.user}")
        logger.error("Please ensure MySQL is running and credentials in .env are correct")
        return False
    logger.info(f"Database connected successfully to {config.database}")
    return True


def get_connection() -> PoolProxiedConnection:
    """
    Get a connection from the pool.

    Returns:
        A pooled DB-API connection. Must be handed back with
        ``release_connection()``, also on error paths.

    Raises:
        RuntimeError: If the pool has not been initialized.
        sqlalchemy.exc.TimeoutError: If no connection was released in time.
    """
    if _engine is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _engine.raw_connection()


def release_connection(conn: PoolProxiedConnection) -> None:
    """
    Return a connection back to the pool. Uncommitted work is rolled back.

    Args:
        conn: The connection obtained from ``get_connection()``.
    """
    conn.close()


@contextmanager
def connection() -> Iterator[PoolProxiedConnection]:
    """
    Scoped acquisition: yields a pooled connection and always releases it.

    A connection whose body raised a driver error is invalidated instead
    of being recycled.
    """
    conn = get_connection()
    driver_error = _engine.dialect.loaded_dbapi.Error
    try:
        yield conn
    except driver_error as e:
        conn.invalidate(e)
        raise
    finally:
        release_connection(conn)


def close_pool() -> None:
    """Close all connections in the pool."""
    global _engine
    if _engine is not None:
        _engine.dispose()
        _engine = None
        logger.info("Database connection pool closed.")
