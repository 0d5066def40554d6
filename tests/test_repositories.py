"""
Tests for repositories/ with a mocked asyncpg pool
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from repositories.ban_repository import BanRepository
from repositories.base_repository import BaseRepository
from repositories.settings_repository import SettingsRepository

SCOPE = ("10", "100", "global")


def make_pool():
    conn = MagicMock()
    conn.fetch = AsyncMock(return_value=[])
    conn.fetchrow = AsyncMock(return_value=None)
    conn.execute = AsyncMock(return_value="INSERT 0 1")

    pool = MagicMock()
    pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    pool.acquire.return_value.__aexit__ = AsyncMock(return_value=False)
    return pool, conn


class TestBaseRepository:
    def test_cannot_instantiate_directly(self):
        with pytest.raises(TypeError):
            BaseRepository(None, "anything")

    def test_to_snake_case(self):
        assert BaseRepository.to_snake_case("targetType") == "target_type"

    @pytest.mark.asyncio
    async def test_delete_where_requires_conditions(self):
        with pytest.raises(ValueError):
            await BanRepository(None).delete_where({})


class TestSettingsRepository:
    @pytest.mark.asyncio
    async def test_most_specific_scope_wins(self):
        pool, conn = make_pool()
        conn.fetch.return_value = [
            {"scope_id": "global", "name": "commands/ping", "value": False},
            {"scope_id": "10", "name": "commands/ping", "value": True},
            {"scope_id": "100", "name": "commands/ping", "value": False},
        ]

        repository = SettingsRepository(pool)
        assert await repository.resolve_boolean(SCOPE, "commands/ping", False) is True

        args = conn.fetch.await_args.args
        assert args[1] == list(SCOPE)
        assert args[2] == ["commands/ping"]

    @pytest.mark.asyncio
    async def test_resolve_many_fills_defaults(self):
        pool, conn = make_pool()
        conn.fetch.return_value = [{"scope_id": "100", "name": "nsfw", "value": True}]

        repository = SettingsRepository(pool)
        resolved = await repository.resolve_many(SCOPE, ["nsfw", "spoilers"], False)

        assert resolved == {"nsfw": True, "spoilers": False}

    @pytest.mark.asyncio
    async def test_without_database_defaults_apply(self):
        repository = SettingsRepository(None)

        assert await repository.resolve_boolean(SCOPE, "commands/ping", True) is True
        assert await repository.resolve_many(SCOPE, ["nsfw"], False) == {"nsfw": False}
        await repository.set_boolean("10", "commands/ping", False)
        assert await repository.clear("10", ["commands/ping"]) == 0

    @pytest.mark.asyncio
    async def test_set_boolean_upserts(self):
        pool, conn = make_pool()

        await SettingsRepository(pool).set_boolean("10", "commands/ping", False)

        sql, *params = conn.execute.await_args.args
        assert "ON CONFLICT (scope_id, name)" in sql
        assert params == ["10", "commands/ping", False]

    @pytest.mark.asyncio
    async def test_clear_returns_deleted_count(self):
        pool, conn = make_pool()
        conn.execute.return_value = "DELETE 2"

        removed = await SettingsRepository(pool).clear("10", ["commands/ping", "commands/roll"])

        assert removed == 2
        assert conn.execute.await_args.args[1:] == ("10", ["commands/ping", "commands/roll"])

    @pytest.mark.asyncio
    async def test_clear_nothing(self):
        pool, conn = make_pool()
        assert await SettingsRepository(pool).clear("10", []) == 0
        conn.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_query_errors_propagate(self):
        pool, conn = make_pool()
        conn.fetch.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError):
            await SettingsRepository(pool).resolve_boolean(SCOPE, "commands/ping", True)


class TestBanRepository:
    @pytest.mark.asyncio
    async def test_ban(self):
        pool, conn = make_pool()

        await BanRepository(pool).ban("user", "42")

        assert conn.execute.await_args.args[1:] == ("user", "42")

    @pytest.mark.asyncio
    async def test_unban(self):
        pool, conn = make_pool()
        repository = BanRepository(pool)

        conn.execute.return_value = "DELETE 1"
        assert await repository.unban("user", "42") is True

        sql = conn.execute.await_args.args[0]
        assert "target_type = $1 AND target_id = $2" in sql

        conn.execute.return_value = "DELETE 0"
        assert await repository.unban("user", "42") is False

    @pytest.mark.asyncio
    async def test_is_banned(self):
        pool, conn = make_pool()
        repository = BanRepository(pool)

        assert await repository.is_banned("42", "100") is False

        conn.fetchrow.return_value = {"?column?": 1}
        assert await repository.is_banned("42", None) is True
        assert conn.fetchrow.await_args.args[1:] == ("user", "42", "server", "")

    @pytest.mark.asyncio
    async def test_no_database_bans_nobody(self):
        assert await BanRepository(None).is_banned("42", "100") is False
