"""
Settings Repository
Stores boolean settings per scope and resolves them along a scope chain
"""

from typing import Dict, Iterable, Optional, Sequence

import asyncpg

from repositories.base_repository import BaseRepository


class SettingsRepository(BaseRepository):
    """
    Repository for the scoped_settings table.

    A scope is a channel ID, a guild ID or "global". Resolving a setting walks
    the scope chain from most to least specific and the first stored value wins.
    """

    def __init__(self, pool: Optional[asyncpg.Pool]):
        """
        Create SettingsRepository instance.

        Args:
            pool: PostgreSQL connection pool
        """
        super().__init__(pool, "scoped_settings")

    async def _fetch_values(
        self,
        scope: Sequence[str],
        names: Sequence[str],
    ) -> Dict[str, bool]:
        if not self.is_connected() or not scope or not names:
            return {}

        sql = f"""
            SELECT scope_id, name, value FROM {self.table_name}
            WHERE scope_id = ANY($1::text[]) AND name = ANY($2::text[])
        """
        rows = await self.query_many(sql, [list(scope), list(names)])

        # Earlier scopes are more specific
        rank = {scope_id: index for index, scope_id in enumerate(scope)}
        best: Dict[str, tuple] = {}
        for row in rows:
            current_rank = rank.get(row["scope_id"], len(scope))
            previous = best.get(row["name"])
            if previous is None or current_rank < previous[0]:
                best[row["name"]] = (current_rank, bool(row["value"]))

        return {name: value for name, (_, value) in best.items()}

    async def resolve_boolean(self, scope: Sequence[str], name: str, default: bool) -> bool:
        """
        Resolve one boolean setting.

        Args:
            scope: Scope IDs, most specific first
            name: Qualified setting name
            default: Value when no scope stores one

        Returns:
            The most specific stored value, or default
        """
        values = await self._fetch_values(scope, [name])
        return values.get(name, default)

    async def resolve_many(
        self,
        scope: Sequence[str],
        names: Sequence[str],
        default: bool,
    ) -> Dict[str, bool]:
        """
        Resolve several boolean settings in one query.

        Returns:
            Dict with an entry for every requested name
        """
        values = await self._fetch_values(scope, names)
        return {name: values.get(name, default) for name in names}

    async def set_boolean(self, scope_id: str, name: str, value: bool) -> None:
        """
        Store a boolean setting for one scope.

        Args:
            scope_id: Channel, guild or global scope ID
            name: Qualified setting name
            value: Value to store
        """
        sql = f"""
            INSERT INTO {self.table_name} (scope_id, name, value, updated_at)
            VALUES ($1, $2, $3, CURRENT_TIMESTAMP)
            ON CONFLICT (scope_id, name)
            DO UPDATE SET value = $3, updated_at = CURRENT_TIMESTAMP
        """
        await self.execute(sql, [scope_id, name, value])

    async def clear(self, scope_id: str, names: Iterable[str]) -> int:
        """
        Remove stored values for one scope so outer scopes apply again.

        Returns:
            Number of removed values
        """
        names = list(names)
        if not names:
            return 0

        sql = f"""
            DELETE FROM {self.table_name}
            WHERE scope_id = $1 AND name = ANY($2::text[])
        """
        return await self.execute(sql, [scope_id, names])
