"""
Public Error
Classifies command failures into what the invoker sees and what gets logged
"""

from enum import Enum
from typing import Any, Optional

import discord

from commands import strings


class PublicMessageType(Enum):
    """How a failure is surfaced in the channel."""

    NONE = "none"
    GENERIC = "generic"
    INSUFFICIENT_PRIVILEGE = "insufficient_privilege"
    CUSTOM = "custom"


class InvokeFailure(Enum):
    """Which invocation gate rejected an attempt."""

    NOT_COOLED_DOWN = "not_cooled_down"
    ONLY_BOT_ADMIN = "only_bot_admin"
    ONLY_IN_SERVER = "only_in_server"
    MUST_BE_SERVER_ADMIN = "must_be_server_admin"
    COMMAND_DISABLED = "command_disabled"
    REQUIRED_SETTING_DISABLED = "required_setting_disabled"


class PublicError(Exception):
    """
    A failure carrying the message that should be sent to the invoker's channel.

    That message is sent instead of the generic error message. The internal
    error, if any, is logged with its traceback and never shown publicly.

    Use the create_* factory methods rather than the constructor.
    """

    def __init__(
        self,
        message_type: PublicMessageType,
        public_message: Optional[str] = None,
        delete_automatically: bool = False,
        log_description: Optional[str] = None,
        internal_error: Optional[BaseException] = None,
        reason: Optional[InvokeFailure] = None,
    ):
        super().__init__(log_description or public_message or message_type.value)
        self.message_type = message_type
        self.public_message = public_message
        self.delete_automatically = bool(delete_automatically)
        self.log_description = log_description
        self.internal_error = internal_error
        self.reason = reason

    @classmethod
    def create_with_custom_public_message(
        cls,
        public_message: str,
        delete_automatically: bool,
        log_description: Optional[str],
        internal_error: Optional[BaseException] = None,
        reason: Optional[InvokeFailure] = None,
    ) -> "PublicError":
        """
        Create an error with its own public message.

        Args:
            public_message: Text to send to the channel
            delete_automatically: Remove the sent message after a short delay
            log_description: Brief description for logs (generic if empty)
            internal_error: Underlying exception whose traceback should be logged
            reason: Gate that produced the failure
        """
        return cls(
            PublicMessageType.CUSTOM,
            public_message,
            delete_automatically,
            log_description,
            internal_error,
            reason,
        )

    @classmethod
    def create_with_generic_public_message(
        cls,
        delete_automatically: bool,
        log_description: Optional[str],
        internal_error: Optional[BaseException] = None,
    ) -> "PublicError":
        """Create an error that sends the configured generic error message."""
        return cls(
            PublicMessageType.GENERIC,
            None,
            delete_automatically,
            log_description,
            internal_error,
        )

    @classmethod
    def create_with_no_public_message(
        cls,
        log_description: Optional[str],
        internal_error: Optional[BaseException] = None,
        reason: Optional[InvokeFailure] = None,
    ) -> "PublicError":
        """Create an error that is only logged."""
        return cls(
            PublicMessageType.NONE,
            None,
            False,
            log_description,
            internal_error,
            reason,
        )

    @classmethod
    def create_insufficient_privilege_error(cls, error: BaseException) -> Optional["PublicError"]:
        """
        Wrap a Discord permission failure.

        Returns:
            A PublicError if the error means the bot lacks permissions, else None
        """
        if isinstance(error, PublicError):
            if error.message_type is PublicMessageType.INSUFFICIENT_PRIVILEGE:
                return error
            return None

        if isinstance(error, discord.Forbidden) or strings.MISSING_PERMISSIONS_DISCORD_ERROR in str(error):
            return cls(
                PublicMessageType.INSUFFICIENT_PRIVILEGE,
                None,
                False,
                strings.MISSING_PERMISSIONS_LOG,
                error,
            )
        return None

    @classmethod
    def from_exception(cls, error: BaseException) -> "PublicError":
        """
        Classify anything raised by a gate or a command action.

        Args:
            error: The raised exception

        Returns:
            The error itself if already classified, otherwise a privilege or
            generic PublicError wrapping it
        """
        if isinstance(error, PublicError):
            return error

        privilege_error = cls.create_insufficient_privilege_error(error)
        if privilege_error is not None:
            return privilege_error

        return cls.create_with_generic_public_message(
            False,
            strings.UNHANDLED_EXCEPTION_LOG,
            error,
        )

    def resolve_public_message(self, config: Any) -> Optional[str]:
        """Text to send for this error, or None to stay silent."""
        if self.message_type is PublicMessageType.GENERIC:
            return config.GENERIC_ERROR_MESSAGE
        if self.message_type is PublicMessageType.INSUFFICIENT_PRIVILEGE:
            return config.MISSING_PERMISSIONS_ERROR_MESSAGE
        if self.message_type is PublicMessageType.CUSTOM:
            return self.public_message
        return None

    async def output(
        self,
        logger_title: str,
        context: Any,
        environment: Any,
        activity_logger: Any,
        force_silent_fail: bool = False,
    ) -> None:
        """
        Surface the error in the channel and log it.

        Args:
            logger_title: Subsystem tag for the log entries
            context: InvocationContext the failure happened in
            environment: CommandEnvironment holding config and messenger
            activity_logger: ActivityLogger to record the attempt to
            force_silent_fail: Log only, send nothing
        """
        public_message = None
        if not force_silent_fail:
            public_message = self.resolve_public_message(environment.config)

        if public_message:
            try:
                if self.delete_automatically:
                    await environment.messenger.send_and_delete(context, public_message)
                else:
                    await environment.messenger.send(context, public_message)
            except Exception as e:
                activity_logger.log_failure(logger_title, strings.SEND_ERROR_MESSAGE_FAILED, e)

        log_description = self.log_description or strings.GENERIC_ERROR_DESCRIPTION_LOG
        activity_logger.log_input_reaction(logger_title, context, False, log_description)

        if self.internal_error is not None:
            activity_logger.log_failure(
                logger_title,
                strings.create_error_description(context.content),
                self.internal_error,
            )
