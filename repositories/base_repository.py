"""
Base Repository
Generic repository pattern for database operations
Provides common query helpers and connection handling
"""

from abc import ABC
from typing import Any, Dict, List, Optional

import asyncpg

from utils.logger import get_logger


class BaseRepository(ABC):
    """
    Base repository class for database operations.

    This is an abstract base class - do not instantiate directly.
    Subclasses provide the table name.

    A repository created without a pool stays usable: reads return nothing
    and writes are skipped with a warning.
    """

    def __init__(self, pool: Optional[asyncpg.Pool], table_name: str):
        """
        Create a new repository instance.

        Args:
            pool: PostgreSQL connection pool, or None when the database is disabled
            table_name: Database table name
        """
        if self.__class__ == BaseRepository:
            raise TypeError("Cannot instantiate abstract BaseRepository directly")

        self.pool = pool
        self.table_name = table_name
        self.logger = get_logger(self.__class__.__name__)

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.pool is not None

    async def query(
        self,
        sql: str,
        params: Optional[List[Any]] = None
    ) -> Optional[asyncpg.Record]:
        """
        Execute a raw query returning a single row.

        Args:
            sql: SQL query string
            params: Query parameters

        Returns:
            Query result or None when not connected
        """
        if not self.is_connected():
            self.logger.warning("Database not connected, query skipped")
            return None

        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchrow(sql, *(params or []))
        except Exception as e:
            self.logger.error(f"Query failed: {e}")
            raise

    async def query_many(
        self,
        sql: str,
        params: Optional[List[Any]] = None
    ) -> List[asyncpg.Record]:
        """
        Execute a raw query returning multiple rows.

        Args:
            sql: SQL query string
            params: Query parameters

        Returns:
            List of query results
        """
        if not self.is_connected():
            self.logger.warning("Database not connected, query skipped")
            return []

        try:
            async with self.pool.acquire() as conn:
                return await conn.fetch(sql, *(params or []))
        except Exception as e:
            self.logger.error(f"Query failed: {e}")
            raise

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> int:
        """
        Execute a statement that returns no rows.

        Args:
            sql: SQL statement
            params: Statement parameters

        Returns:
            Number of affected rows (0 when not connected)
        """
        if not self.is_connected():
            self.logger.warning("Database not connected, write skipped")
            return 0

        try:
            async with self.pool.acquire() as conn:
                result = await conn.execute(sql, *(params or []))
        except Exception as e:
            self.logger.error(f"Statement failed: {e}")
            raise

        # Status is e.g. "DELETE 2" or "INSERT 0 1", the row count comes last
        try:
            return int(result.split()[-1])
        except (AttributeError, IndexError, ValueError):
            return 0

    async def delete_where(self, conditions: Dict[str, Any]) -> int:
        """
        Delete records by conditions.

        Args:
            conditions: Key-value conditions

        Returns:
            Number of deleted records
        """
        keys = list(conditions.keys())
        values = list(conditions.values())

        if not keys:
            raise ValueError("Delete conditions cannot be empty")

        where_clause = " AND ".join(
            f"{self.to_snake_case(key)} = ${i + 1}"
            for i, key in enumerate(keys)
        )
        return await self.execute(f"DELETE FROM {self.table_name} WHERE {where_clause}", values)

    @staticmethod
    def to_snake_case(s: str) -> str:
        """Convert camelCase to snake_case."""
        result = []
        for i, char in enumerate(s):
            if char.isupper() and i > 0:
                result.append("_")
            result.append(char.lower())
        return "".join(result)
