"""
Tests for commands/public_error.py
"""

from unittest.mock import MagicMock

import discord
import pytest

from commands import strings
from commands.public_error import PublicError, PublicMessageType


class TestClassification:
    """from_exception and the factory methods."""

    def test_public_error_returned_as_is(self):
        error = PublicError.create_with_no_public_message("quiet")
        assert PublicError.from_exception(error) is error

    def test_generic_wraps_cause(self):
        cause = KeyError("x")
        error = PublicError.from_exception(cause)

        assert error.message_type is PublicMessageType.GENERIC
        assert error.internal_error is cause
        assert error.public_message is None
        assert error.log_description == strings.UNHANDLED_EXCEPTION_LOG

    def test_forbidden_is_privilege_error(self):
        cause = discord.Forbidden(MagicMock(status=403, reason="Forbidden"), "Missing Access")
        error = PublicError.from_exception(cause)

        assert error.message_type is PublicMessageType.INSUFFICIENT_PRIVILEGE
        assert error.internal_error is cause

    def test_privilege_error_passthrough(self):
        error = PublicError.create_insufficient_privilege_error(RuntimeError("Missing Permissions"))
        assert PublicError.create_insufficient_privilege_error(error) is error

    def test_other_public_error_is_not_privilege_error(self):
        error = PublicError.create_with_custom_public_message("hi", False, "log")
        assert PublicError.create_insufficient_privilege_error(error) is None

    def test_unrelated_error_is_not_privilege_error(self):
        assert PublicError.create_insufficient_privilege_error(ValueError("nope")) is None

    def test_no_public_message_never_deletes(self):
        error = PublicError.create_with_no_public_message("quiet")
        assert error.delete_automatically is False
        assert error.message_type is PublicMessageType.NONE


class TestPublicMessage:
    """Which text a channel sees for each error type."""

    def test_resolve_public_message(self, config):
        assert PublicError.create_with_generic_public_message(False, None).resolve_public_message(config) == (
            config.GENERIC_ERROR_MESSAGE
        )
        privilege = PublicError.create_insufficient_privilege_error(RuntimeError("Missing Permissions"))
        assert privilege.resolve_public_message(config) == config.MISSING_PERMISSIONS_ERROR_MESSAGE
        custom = PublicError.create_with_custom_public_message("Custom", False, None)
        assert custom.resolve_public_message(config) == "Custom"
        assert PublicError.create_with_no_public_message(None).resolve_public_message(config) is None

    @pytest.mark.asyncio
    async def test_output_generic_auto_delete(self, environment, make_context, messenger, activity_logger, config):
        error = PublicError.create_with_generic_public_message(True, None)
        await error.output("TEST", make_context("ping"), environment, activity_logger)

        assert messenger.sent == [(config.GENERIC_ERROR_MESSAGE, True)]
        assert activity_logger.reactions == [("TEST", "ping", False, strings.GENERIC_ERROR_DESCRIPTION_LOG)]

    @pytest.mark.asyncio
    async def test_force_silent_fail(self, environment, make_context, messenger, activity_logger):
        error = PublicError.create_with_custom_public_message("Loud", False, "Custom")
        await error.output("TEST", make_context("ping"), environment, activity_logger, force_silent_fail=True)

        assert messenger.sent == []
        assert activity_logger.reactions == [("TEST", "ping", False, "Custom")]

    @pytest.mark.asyncio
    async def test_internal_error_logged_not_sent(self, environment, make_context, messenger, activity_logger):
        cause = RuntimeError("password=hunter2")
        error = PublicError.from_exception(cause)
        await error.output("TEST", make_context("ping"), environment, activity_logger)

        assert all("hunter2" not in text for text in messenger.texts)
        assert activity_logger.failures == [("TEST", strings.create_error_description("ping"), cause)]
