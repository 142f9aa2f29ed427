"""
Pooled aiosqlite connections for the stock database.

Reads borrow a connection with `get_connection()`. Writes go through
`get_transaction()`, which holds the database write lock from the first
statement to COMMIT, so a stock check and the movement it guards cannot
interleave with another writer.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

# Applied to every connection as it is opened
_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "foreign_keys=ON",
)


async def _open_connection(db_path: Path, busy_timeout: int) -> aiosqlite.Connection:
    # Autocommit mode; write transactions are begun by hand
    conn = await aiosqlite.connect(db_path, isolation_level=None)
    for pragma in (*_PRAGMAS, f"busy_timeout={busy_timeout}"):
        await conn.execute(f"PRAGMA {pragma}")
    conn.row_factory = aiosqlite.Row
    return conn


class ConnectionPool:
    """A fixed set of connections to one SQLite file, lent out one at a time."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._connections: list[aiosqlite.Connection] = []
        self._available: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opening = asyncio.Lock()

    @property
    def initialized(self) -> bool:
        return bool(self._connections)

    @property
    def in_use(self) -> int:
        """Connections currently lent out."""
        return len(self._connections) - self._available.qsize()

    async def initialize(self) -> None:
        """Create the database directory and open `pool_size` connections."""
        async with self._opening:
            if self._connections:
                return

            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            opened = [
                await _open_connection(self.db_path, self.busy_timeout)
                for _ in range(self.pool_size)
            ]
            for conn in opened:
                self._available.put_nowait(conn)
            self._connections = opened

        logger.info(
            "sqlite_pool_opened",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """Lend out a connection, opening the pool on first use."""
        if not self._connections:
            await self.initialize()

        conn = await self._available.get()
        try:
            yield conn
        finally:
            self._available.put_nowait(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """Lend out a connection inside BEGIN IMMEDIATE ... COMMIT.

        Any exception raised in the block rolls the whole transaction back.
        """
        async with self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.execute("ROLLBACK")
                raise
            await conn.execute("COMMIT")

    async def close(self) -> None:
        async with self._opening:
            connections, self._connections = self._connections, []
            self._available = asyncio.Queue()
            for conn in connections:
                await conn.close()

        if connections:
            logger.info("sqlite_pool_closed", db_path=str(self.db_path))


_pool: ConnectionPool | None = None


async def get_pool() -> ConnectionPool:
    """The process-wide pool, built from `settings.storage` on first call."""
    global _pool
    if _pool is None:
        storage = get_settings().storage
        _pool = ConnectionPool(
            db_path=storage.db_path,
            pool_size=storage.pool_size,
            busy_timeout=storage.busy_timeout,
        )
        await _pool.initialize()
    return _pool


async def close_pool() -> None:
    global _pool
    pool, _pool = _pool, None
    if pool is not None:
        await pool.close()


@asynccontextmanager
async def get_connection() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.acquire() as conn:
        yield conn


@asynccontextmanager
async def get_transaction() -> AsyncIterator[aiosqlite.Connection]:
    pool = await get_pool()
    async with pool.transaction() as conn:
        yield conn
