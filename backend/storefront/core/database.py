"""
PostgreSQL store handle

A single Database object owns the connection pool for the whole process.
It is created and connected at startup, handed to services explicitly,
and closed at shutdown.

Author: TM3
Updated: 2025-10-17
"""
import time
import threading
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool
from fastapi import Request

from storefront.core.errors import InternalError, StoreUnavailableError

logger = logging.getLogger(__name__)


# ============================================================================
# Schema
# ============================================================================

# Order line items are stored as an embedded JSONB document so an order stays
# renderable after the products it references change or disappear.
SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS products (
    id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name TEXT NOT NULL CHECK (name <> ''),
    price NUMERIC(12, 2) NOT NULL CHECK (price >= 0),
    description TEXT,
    stock INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0),
    image TEXT NOT NULL DEFAULT '/images/placeholder.jpg',
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

CREATE INDEX IF NOT EXISTS idx_products_created_at ON products (created_at DESC);

CREATE TABLE IF NOT EXISTS customers (
    id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    name TEXT,
    email TEXT,
    address TEXT,
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

CREATE TABLE IF NOT EXISTS orders (
    id TEXT PRIMARY KEY DEFAULT gen_random_uuid()::text,
    customer_id TEXT,
    customer_name TEXT,
    customer_email TEXT,
    total NUMERIC(12, 2) NOT NULL CHECK (total >= 0),
    status TEXT NOT NULL DEFAULT 'pending',
    items JSONB NOT NULL DEFAULT '[]'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT clock_timestamp()
);

CREATE INDEX IF NOT EXISTS idx_orders_created_at ON orders (created_at DESC);
"""


class Database:
    """
    Connection pool wrapper for the application store

    Usage:
        db = Database(settings.DATABASE_URL)
        db.connect()
        with db.transaction() as cursor:
            cursor.execute("SELECT * FROM products")
        db.close()
    """

    def __init__(self, dsn: str, min_connections: int = 1, max_connections: int = 10,
                 pool_timeout: float = 30.0):
        self.dsn = dsn
        self.min_connections = min_connections
        self.max_connections = max_connections
        self.pool_timeout = pool_timeout
        self._pool: Optional[ThreadedConnectionPool] = None
        # ThreadedConnectionPool raises PoolError when exhausted instead of
        # waiting, so checkouts queue on this semaphore first
        self._slots = threading.BoundedSemaphore(max_connections)

    @property
    def is_connected(self) -> bool:
        return self._pool is not None and not self._pool.closed

    def connect(self, max_retries: int = 3, retry_delay: float = 1.0) -> "Database":
        """
        Open the connection pool, retrying on connection failures

        Retries with exponential backoff on psycopg2.OperationalError and
        verifies the first connection with a simple query.

        Args:
            max_retries: Maximum number of connection attempts (default: 3)
            retry_delay: Initial delay between retries in seconds (default: 1.0)

        Returns:
            self, connected

        Raises:
            StoreUnavailableError: If DATABASE_URL is empty or all attempts fail
        """
        if not self.dsn:
            raise StoreUnavailableError("DATABASE_URL not configured")

        last_error = None

        for attempt in range(1, max_retries + 1):
            try:
                logger.debug(f"Database connection attempt {attempt}/{max_retries}")
                pool = ThreadedConnectionPool(self.min_connections, self.max_connections, self.dsn)

                conn = pool.getconn()
                try:
                    with conn.cursor() as cursor:
                        cursor.execute("SELECT 1")
                    conn.rollback()
                finally:
                    pool.putconn(conn)

                self._pool = pool
                logger.info(f"Connected to PostgreSQL on attempt {attempt}")
                return self

            except psycopg2.OperationalError as e:
                last_error = e
                error_msg = str(e).strip()

                if "SSL connection has been closed unexpectedly" in error_msg:
                    logger.warning(f"SSL connection error on attempt {attempt}/{max_retries}: {error_msg}")
                else:
                    logger.warning(f"Connection error on attempt {attempt}/{max_retries}: {error_msg}")

                if attempt < max_retries:
                    delay = retry_delay * (2 ** (attempt - 1))
                    logger.info(f"Retrying in {delay:.2f} seconds...")
                    time.sleep(delay)

        logger.error(f"All {max_retries} connection attempts failed")
        raise StoreUnavailableError(f"Could not connect to the database: {last_error}") from last_error

    def close(self):
        """Close every pooled connection. Safe to call more than once."""
        if self._pool is not None and not self._pool.closed:
            self._pool.closeall()
            logger.info("Database connection pool closed")
        self._pool = None

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Borrow a pooled connection for the duration of the block

        Waits up to pool_timeout seconds when every connection is in use.

        Raises:
            InternalError: If connect() has not been called
            StoreUnavailableError: If no connection frees up in time
        """
        if not self.is_connected:
            raise InternalError("Database is not connected")

        if not self._slots.acquire(timeout=self.pool_timeout):
            logger.error(f"No database connection available after {self.pool_timeout}s")
            raise StoreUnavailableError("Timed out waiting for a database connection")

        try:
            conn = self._pool.getconn()
            try:
                yield conn
            finally:
                # Broken connections are discarded instead of going back to the pool
                self._pool.putconn(conn, close=bool(conn.closed))
        finally:
            self._slots.release()

    @contextmanager
    def transaction(self) -> Iterator[RealDictCursor]:
        """
        Run the block in a single transaction

        Yields a RealDictCursor. Commits when the block completes and rolls
        back (re-raising) when it raises.
        """
        with self.connection() as conn:
            cursor = conn.cursor(cursor_factory=RealDictCursor)
            try:
                yield cursor
                conn.commit()
            except Exception:
                if not conn.closed:
                    conn.rollback()
                raise
            finally:
                if not cursor.closed:
                    cursor.close()

    def init_schema(self):
        """Create tables and indexes if they do not exist yet"""
        with self.transaction() as cursor:
            cursor.execute(SCHEMA_SQL)
        logger.info("Database schema ready")

    def ping(self) -> float:
        """Run SELECT 1 and return the round trip in milliseconds"""
        with self.connection() as conn:
            start = time.time()
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
            conn.rollback()
            return round((time.time() - start) * 1000, 2)


def get_database(request: Request) -> Database:
    """
    FastAPI dependency returning the process-wide store handle

    Usage:
        @router.get("/items")
        def read_items(db: Database = Depends(get_database)):
            ...
    """
    return request.app.state.db
