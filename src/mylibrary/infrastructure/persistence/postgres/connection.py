"""PostgreSQL async connection pool."""

from psycopg import AsyncConnection, IsolationLevel
from psycopg_pool import AsyncConnectionPool

_ISOLATION_LEVELS = {
    "serializable": IsolationLevel.SERIALIZABLE,
    "repeatable_read": IsolationLevel.REPEATABLE_READ,
}


def create_pool(
    conninfo: str,
    min_size: int = 2,
    max_size: int = 10,
    timeout: float = 5.0,
    statement_timeout_ms: int = 5000,
    isolation_level: str = "serializable",
) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (e.g. via PoolLifespanMiddleware in ASGI lifespan).
    Every connection runs at ``isolation_level`` with a server-side
    statement timeout; ``timeout`` bounds the wait for a free connection.
    """
    level = _ISOLATION_LEVELS[isolation_level]

    async def configure(conn: AsyncConnection) -> None:
        await conn.set_isolation_level(level)

    kwargs = {}
    if statement_timeout_ms:
        kwargs["options"] = f"-c statement_timeout={statement_timeout_ms}"

    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout,
        kwargs=kwargs,
        configure=configure,
        open=False,
    )
