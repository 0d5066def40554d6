"""
Ban Repository
Tracks users and servers the bot ignores
"""

from typing import Optional

import asyncpg

from repositories.base_repository import BaseRepository

USER_TARGET = "user"
SERVER_TARGET = "server"


class BanRepository(BaseRepository):
    """Repository for the bans table."""

    def __init__(self, pool: Optional[asyncpg.Pool]):
        super().__init__(pool, "bans")

    async def ban(self, target_type: str, target_id: str) -> None:
        """
        Ban a user or a server.

        Args:
            target_type: "user" or "server"
            target_id: Discord ID of the target
        """
        sql = f"""
            INSERT INTO {self.table_name} (target_type, target_id, created_at)
            VALUES ($1, $2, CURRENT_TIMESTAMP)
            ON CONFLICT (target_type, target_id) DO NOTHING
        """
        await self.execute(sql, [target_type, target_id])

    async def unban(self, target_type: str, target_id: str) -> bool:
        """
        Lift a ban.

        Returns:
            True if the target was banned
        """
        deleted = await self.delete_where({"targetType": target_type, "targetId": target_id})
        return deleted > 0

    async def is_banned(self, user_id: str, guild_id: Optional[str] = None) -> bool:
        """
        Check whether input from this user (in this guild) should be ignored.

        Args:
            user_id: Author ID
            guild_id: Guild ID, None for direct messages

        Returns:
            True if the user or the guild is banned
        """
        if not self.is_connected():
            return False

        sql = f"""
            SELECT 1 FROM {self.table_name}
            WHERE (target_type = $1 AND target_id = $2)
               OR (target_type = $3 AND target_id = $4)
            LIMIT 1
        """
        row = await self.query(sql, [USER_TARGET, user_id, SERVER_TARGET, guild_id or ""])
        return row is not None
