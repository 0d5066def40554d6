"""
Tests for utils/ and bot/permissions.py
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from bot.config import Config, parse_id_list
from bot.permissions import DiscordIdentity
from commands.context import GLOBAL_SCOPE, InvocationContext, ScopeKind
from utils.discord import DiscordMessenger, DiscordUtils
from utils.logger import ActivityLogger
from utils.validation import ValidationUtils

SNOWFLAKE = "123456789012345678"


def make_member(manage_guild=False, administrator=False, roles=()):
    member = MagicMock()
    member.guild_permissions.manage_guild = manage_guild
    member.guild_permissions.administrator = administrator
    member.roles = []
    for name in roles:
        role = MagicMock()
        role.name = name
        member.roles.append(role)
    return member


def make_message(author, guild_id=100, channel_id=10):
    message = MagicMock()
    message.author = author
    message.guild.id = guild_id
    message.guild.name = "Guild"
    message.channel.id = channel_id
    message.channel.name = "general"
    message.content = "ping"
    return message


class TestValidationUtils:
    def test_snowflake(self):
        assert ValidationUtils.validate_snowflake(SNOWFLAKE).sanitized == SNOWFLAKE
        assert ValidationUtils.validate_snowflake(f"<@!{SNOWFLAKE}>").sanitized == SNOWFLAKE
        assert not ValidationUtils.validate_snowflake("123")
        assert ValidationUtils.validate_snowflake("", "user ID").error == "user ID is required"
        assert not ValidationUtils.is_valid_snowflake(True)

    def test_sanitize_input(self):
        assert ValidationUtils.sanitize_input("  pi\u200bng\x07 ") == "ping"
        assert ValidationUtils.sanitize_input(None) == ""

    def test_message_length(self):
        assert ValidationUtils.validate_message_length("short")
        result = ValidationUtils.validate_message_length("x" * 2001)
        assert not result
        assert len(result.value) == 2000
        assert result.value.endswith("...")

    def test_args_length(self):
        assert ValidationUtils.validate_args_length(["a", "b"], 2, 2)
        assert not ValidationUtils.validate_args_length(["a"], 2, 2)
        assert not ValidationUtils.validate_args_length(["a", "b", "c"], 2, 2)


class TestDiscordUtils:
    @pytest.mark.parametrize(
        "seconds,expected",
        [(5, "5s"), (5.7, "5s"), (90, "1m 30s"), (3660, "1h 1m")],
    )
    def test_format_duration(self, seconds, expected):
        assert DiscordUtils.format_duration(seconds) == expected

    def test_server_admin_by_permission(self):
        assert DiscordUtils.is_server_admin(make_message(make_member(manage_guild=True)))
        assert DiscordUtils.is_server_admin(make_message(make_member(administrator=True)))

    def test_server_admin_by_role(self):
        message = make_message(make_member(roles=["Bot Admin"]))
        assert DiscordUtils.is_server_admin(message, "Bot Admin")
        assert not DiscordUtils.is_server_admin(message, "Moderator")
        assert not DiscordUtils.is_server_admin(message)

    def test_describe_channel(self):
        message = make_message(make_member())
        assert DiscordUtils.describe_channel(message.channel, message.guild) == "Guild >> #general"
        assert DiscordUtils.describe_channel(message.channel, None) == "DM"


class TestDiscordMessenger:
    @pytest.mark.asyncio
    async def test_send_and_delete(self):
        context = MagicMock()
        context.channel.send = AsyncMock()
        messenger = DiscordMessenger(auto_delete_seconds=3)

        await messenger.send(context, "hello")
        await messenger.send_and_delete(context, "bye")

        context.channel.send.assert_any_await("hello")
        context.channel.send.assert_any_await("bye", delete_after=3)

    @pytest.mark.asyncio
    async def test_send_errors_propagate(self):
        context = MagicMock()
        context.channel.send = AsyncMock(side_effect=RuntimeError("Missing Permissions"))

        with pytest.raises(RuntimeError):
            await DiscordMessenger().send(context, "hello")


class TestInvocationContext:
    def test_from_guild_message(self):
        author = make_member()
        author.id = 1
        author.display_name = "alice"
        context = InvocationContext.from_message(make_message(author))

        assert context.invoker_id == "1"
        assert context.invoker_name == "alice"
        assert context.scope_kind is ScopeKind.GROUP
        assert context.settings_scope == ("10", "100", GLOBAL_SCOPE)
        assert context.describe_location() == "Guild >> #general"

    def test_direct_message_scope(self):
        context = InvocationContext(content="ping", invoker_id="1", invoker_name="alice", channel_id="10")

        assert context.scope_kind is ScopeKind.DIRECT
        assert context.is_in_server is False
        assert context.settings_scope == ("10", GLOBAL_SCOPE)
        assert context.describe_location() == "DM"


class TestDiscordIdentity:
    def test_bot_admin(self):
        identity = DiscordIdentity(["3"])
        assert identity.is_bot_admin("3")
        assert not identity.is_bot_admin("4")

    def test_scope_admin_needs_server(self):
        identity = DiscordIdentity([], "Bot Admin")
        context = InvocationContext(content="allow", invoker_id="1", invoker_name="alice", channel_id="10")
        assert not identity.is_scope_admin(context)

    def test_scope_admin_by_role(self):
        identity = DiscordIdentity([], "Bot Admin")
        author = make_member(roles=["Bot Admin"])
        author.id = 1
        context = InvocationContext.from_message(make_message(author))
        assert identity.is_scope_admin(context)

    def test_empty_role_name_means_none(self):
        assert DiscordIdentity([], "").server_admin_role_name is None


class TestConfig:
    def test_parse_id_list(self):
        assert parse_id_list(" 1, 2,,3 ") == ("1", "2", "3")
        assert parse_id_list("") == ()

    def test_validate_requires_token(self):
        with pytest.raises(ValueError):
            Config().validate()
        Config(DISCORD_TOKEN="token").validate()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BOT_ADMIN_IDS", "1,2")
        monkeypatch.setenv("SETTINGS_CATEGORY_SEPARATOR", ".")
        monkeypatch.setenv("AUTO_DELETE_SECONDS", "10")

        loaded = Config.from_env()
        assert loaded.BOT_ADMIN_IDS == ("1", "2")
        assert loaded.SETTINGS_CATEGORY_SEPARATOR == "."
        assert loaded.AUTO_DELETE_SECONDS == 10


class TestActivityLogger:
    def test_log_input_reaction(self):
        activity_logger = ActivityLogger("ActivityTest")
        activity_logger._logger = MagicMock()
        context = InvocationContext(content="ping", invoker_id="1", invoker_name="alice", channel_id="10")

        activity_logger.log_input_reaction("COMMAND", context, True)
        activity_logger.log_input_reaction("COMMAND", context, False, "Not cooled down")

        activity_logger._logger.info.assert_called_once_with("[SUCCESS] [COMMAND] DM alice: ping")
        activity_logger._logger.warning.assert_called_once_with(
            "[COMMAND] DM alice: ping (FAILED: Not cooled down)"
        )

    def test_log_failure_includes_traceback(self):
        activity_logger = ActivityLogger("ActivityTest")
        activity_logger._logger = MagicMock()
        error = RuntimeError("boom")

        activity_logger.log_failure("COMMAND", "Command 'ping' errored.", error)

        activity_logger._logger.error.assert_called_once_with("[COMMAND] Command 'ping' errored.", exc_info=error)
