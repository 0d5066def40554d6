"""
Database connection management using asyncpg.
"""

import asyncpg
from typing import Optional

from bot.config import config
from utils.logger import get_logger

logger = get_logger("Database")

_pool: Optional[asyncpg.Pool] = None


async def init_database() -> None:
    """Initialize database connection pool."""
    global _pool

    if not config.DATABASE_URL:
        logger.warning("DATABASE_URL not set - settings and bans will not be stored")
        return

    try:
        _pool = await asyncpg.create_pool(
            config.DATABASE_URL,
            min_size=1,
            max_size=10,
            command_timeout=60,
        )
        logger.info("Database connected successfully")
        await _init_tables()
    except Exception as e:
        logger.error(f"Failed to connect to database: {e}")
        raise


async def _init_tables() -> None:
    """Initialize database tables if they don't exist."""
    if not _pool:
        return

    async with _pool.acquire() as conn:
        await conn.execute("""
            CREATE TABLE IF NOT EXISTS scoped_settings (
                scope_id VARCHAR(255) NOT NULL,
                name VARCHAR(255) NOT NULL,
                value BOOLEAN NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (scope_id, name)
            )
        """)

        await conn.execute("""
            CREATE TABLE IF NOT EXISTS bans (
                target_type VARCHAR(16) NOT NULL,
                target_id VARCHAR(255) NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (target_type, target_id)
            )
        """)

        logger.info("Database tables initialized")


async def close_database() -> None:
    """Close database connection pool."""
    global _pool

    if _pool:
        await _pool.close()
        _pool = None
        logger.info("Database connection closed")


def is_connected() -> bool:
    """Check if database is connected."""
    return _pool is not None


def get_pool() -> Optional[asyncpg.Pool]:
    """Get the database connection pool."""
    return _pool
