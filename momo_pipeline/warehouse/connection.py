"""
PostgreSQL connection pool management using psycopg3

The pool is shared by the concurrent workers of a batch, so it is sized
to at least the batch concurrency by the CLI.
"""
import os
import time
from contextlib import contextmanager

from psycopg import OperationalError
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool


class DatabaseConnectionPool:
    """
    PostgreSQL connection pool manager using psycopg3
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        database: str | None = None,
        user: str | None = None,
        password: str | None = None,
        min_size: int = 2,
        max_size: int = 10,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize database connection pool

        Args:
            host: Database host (defaults to env var DB_HOST)
            port: Database port (defaults to env var DB_PORT)
            database: Database name (defaults to env var DB_NAME)
            user: Database user (defaults to env var DB_USER)
            password: Database password (defaults to env var DB_PASSWORD)
            min_size: Minimum pool size
            max_size: Maximum pool size
            timeout: Seconds to wait for a connection

        Raises:
            ValueError: If no password is configured
        """
        self.host = host or os.getenv("DB_HOST", "localhost")
        self.port = port or int(os.getenv("DB_PORT", "5432"))
        self.database = database or os.getenv("DB_NAME", "momo")
        self.user = user or os.getenv("DB_USER", "momo")
        self.password = password or os.getenv("DB_PASSWORD")

        if not self.password:
            raise ValueError(
                "Database password must be provided. "
                "Set DB_PASSWORD environment variable or pass to constructor."
            )

        self.min_size = min_size
        self.max_size = max(max_size, min_size)
        self.timeout = timeout

        self.conninfo = (
            f"host={self.host} "
            f"port={self.port} "
            f"dbname={self.database} "
            f"user={self.user} "
            f"password={self.password} "
            f"connect_timeout={int(self.timeout)}"
        )

        self._pool: ConnectionPool | None = None

    def open(self, max_retries: int = 3, retry_delay: float = 2.0) -> None:
        """
        Open the connection pool with retry logic.

        Args:
            max_retries: Maximum number of connection attempts
            retry_delay: Delay between retries in seconds

        Raises:
            OperationalError: If connection fails after all retries
        """
        if self._pool is not None:
            return

        for attempt in range(1, max_retries + 1):
            pool = ConnectionPool(
                conninfo=self.conninfo,
                min_size=self.min_size,
                max_size=self.max_size,
                timeout=self.timeout,
                kwargs={"row_factory": dict_row},
                open=False,
            )
            try:
                # Fails with PoolTimeout (an OperationalError) if min_size
                # connections cannot be established in time
                pool.open(wait=True, timeout=self.timeout)
                self._pool = pool
                return
            except OperationalError as e:
                pool.close()
                if attempt < max_retries:
                    time.sleep(retry_delay)
                else:
                    raise OperationalError(
                        f"Failed to connect to database after {max_retries} attempts: {e}"
                    ) from e

    def close(self) -> None:
        """Close the connection pool"""
        if self._pool is not None:
            self._pool.close()
            self._pool = None

    @contextmanager
    def get_connection(self):
        """
        Get a connection from the pool

        Yields:
            psycopg.Connection: Database connection

        Raises:
            RuntimeError: If pool is not open
        """
        if self._pool is None:
            raise RuntimeError("Connection pool is not open. Call open() first.")

        with self._pool.connection() as conn:
            yield conn

    def execute_query(self, query: str, params: tuple | None = None) -> list[dict]:
        """
        Execute a SELECT (or RETURNING) statement and return its rows

        Args:
            query: SQL statement
            params: Query parameters (optional)

        Returns:
            List of dictionaries (one per row)
        """
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                rows = cur.fetchall()
            conn.commit()
            return rows

    def execute_command(self, command: str, params: tuple | None = None) -> int:
        """
        Execute an INSERT/UPDATE/DELETE/DDL command

        Args:
            command: SQL command
            params: Command parameters (optional)

        Returns:
            Number of rows affected
        """
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(command, params)
                rowcount = cur.rowcount
            conn.commit()
            return rowcount

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
