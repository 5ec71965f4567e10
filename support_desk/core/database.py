from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock

from psycopg import Connection
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from support_desk.core.config import get_settings
from support_desk.core.logging import get_logger

logger = get_logger(__name__)

_pools: dict[str, ConnectionPool] = {}
_pools_lock = Lock()


def get_database_url() -> str:
    return get_settings().database_url


def get_pool(database_url: str) -> ConnectionPool:
    """Return the pool for ``database_url``, opening it on first use."""
    with _pools_lock:
        pool = _pools.get(database_url)
        if pool is None:
            settings = get_settings()
            pool = ConnectionPool(
                database_url,
                min_size=settings.database_pool_min_size,
                max_size=settings.database_pool_max_size,
                kwargs={"row_factory": dict_row},
                open=True,
            )
            _pools[database_url] = pool
            logger.info(
                "Database pool opened",
                extra={
                    "pool_min_size": settings.database_pool_min_size,
                    "pool_max_size": settings.database_pool_max_size,
                },
            )
        return pool


def close_pools() -> None:
    with _pools_lock:
        pools = list(_pools.values())
        _pools.clear()
    for pool in pools:
        pool.close()
    if pools:
        logger.info("Database pools closed", extra={"pool_count": len(pools)})


@contextmanager
def get_connection(database_url: str | None = None) -> Iterator[Connection]:
    url = database_url or get_database_url()
    with get_pool(url).connection() as connection:
        yield connection
