"""
Admin Commands
Built-in commands for channel restrictions and bans
"""

from typing import Any, List, Optional, Sequence, Tuple

from commands import strings
from commands.command import Command, CommandDefinition
from commands.public_error import PublicError
from utils.validation import ValidationUtils

BAN_TARGET_TYPES = ("user", "server")


def _find_command(name: str, commands: Sequence[Command]) -> Optional[Command]:
    for command in commands:
        if name in command.aliases:
            return command
    return None


def create_allow_command(user_commands: Sequence[Command]) -> CommandDefinition:
    """
    Create the `allow` command.

    Args:
        user_commands: Snapshot of user commands taken at load time

    Returns:
        Definition that restricts a channel to the named commands
    """
    restrictable = tuple(command for command in user_commands if command.can_be_channel_restricted)

    async def allow(context: Any, suffix: str, environment: Any) -> None:
        names = [name.lower() for name in suffix.split()]
        if not names:
            raise PublicError.create_with_custom_public_message(
                strings.ALLOW_NO_ARGUMENTS,
                False,
                strings.ALLOW_NO_ARGUMENTS_LOG,
            )

        allowed: List[Command] = []
        unknown: List[str] = []
        for name in names:
            command = _find_command(name, restrictable)
            if command is None:
                unknown.append(name)
            elif command not in allowed:
                allowed.append(command)

        if unknown:
            raise PublicError.create_with_custom_public_message(
                strings.create_allow_unknown_commands_string(unknown),
                False,
                strings.ALLOW_UNKNOWN_COMMANDS_LOG,
            )

        for command in restrictable:
            await environment.settings.set_boolean(
                context.channel_id,
                command.enabled_setting_name,
                command in allowed,
            )

        await environment.messenger.send(
            context,
            strings.create_allow_success_string(command.primary_alias for command in allowed),
        )

    return CommandDefinition(
        aliases=["allow"],
        action=allow,
        server_admin_only=True,
        only_in_server=True,
        can_be_channel_restricted=False,
        short_description=strings.ALLOW_SHORT_DESCRIPTION,
        usage_example=strings.ALLOW_USAGE,
    )


def create_unrestrict_command(user_commands: Sequence[Command]) -> CommandDefinition:
    """
    Create the `unrestrict` command.

    Args:
        user_commands: Snapshot of user commands taken at load time

    Returns:
        Definition that clears every channel override set by `allow`
    """
    setting_names = [
        command.enabled_setting_name
        for command in user_commands
        if command.can_be_channel_restricted
    ]

    async def unrestrict(context: Any, suffix: str, environment: Any) -> None:
        await environment.settings.clear(context.channel_id, setting_names)
        await environment.messenger.send(context, strings.UNRESTRICT_SUCCESS)

    return CommandDefinition(
        aliases=["unrestrict"],
        action=unrestrict,
        server_admin_only=True,
        only_in_server=True,
        can_be_channel_restricted=False,
        short_description=strings.UNRESTRICT_SHORT_DESCRIPTION,
    )


def _parse_ban_arguments(suffix: str, usage: str) -> Tuple[str, str]:
    args = suffix.split()
    if not ValidationUtils.validate_args_length(args, 2, 2) or args[0].lower() not in BAN_TARGET_TYPES:
        raise PublicError.create_with_custom_public_message(
            usage,
            False,
            strings.BAN_INVALID_ARGUMENTS_LOG,
        )

    target_type = args[0].lower()
    validation = ValidationUtils.validate_snowflake(args[1], f"{target_type} ID")
    if not validation:
        raise PublicError.create_with_custom_public_message(
            f"❌ {validation.error}",
            False,
            strings.BAN_INVALID_ARGUMENTS_LOG,
        )
    return target_type, validation.sanitized


def _require_bans(environment: Any) -> Any:
    if environment.bans is None:
        raise PublicError.create_with_custom_public_message(
            strings.BANS_UNAVAILABLE,
            False,
            strings.BANS_UNAVAILABLE_LOG,
        )
    return environment.bans


async def _ban(context: Any, suffix: str, environment: Any) -> None:
    bans = _require_bans(environment)
    target_type, target_id = _parse_ban_arguments(suffix, strings.BAN_USAGE)
    await bans.ban(target_type, target_id)
    await environment.messenger.send(context, strings.create_ban_success_string(target_type, target_id))


async def _unban(context: Any, suffix: str, environment: Any) -> None:
    bans = _require_bans(environment)
    target_type, target_id = _parse_ban_arguments(suffix, strings.UNBAN_USAGE)
    if await bans.unban(target_type, target_id):
        await environment.messenger.send(context, strings.create_unban_success_string(target_type, target_id))
    else:
        await environment.messenger.send(context, strings.create_not_banned_string(target_type, target_id))


def create_ban_commands() -> List[CommandDefinition]:
    """Create the `ban` and `unban` commands."""
    return [
        CommandDefinition(
            aliases=["ban"],
            action=_ban,
            bot_admin_only=True,
            can_be_channel_restricted=False,
            short_description=strings.BAN_SHORT_DESCRIPTION,
            usage_example="ban user 123456789012345678",
            hidden=True,
        ),
        CommandDefinition(
            aliases=["unban"],
            action=_unban,
            bot_admin_only=True,
            can_be_channel_restricted=False,
            short_description=strings.UNBAN_SHORT_DESCRIPTION,
            usage_example="unban user 123456789012345678",
            hidden=True,
        ),
    ]


def create_admin_commands(user_commands: Sequence[Command]) -> List[CommandDefinition]:
    """
    Create every admin built-in.

    Args:
        user_commands: Snapshot of user commands taken at load time

    Returns:
        Definitions in the order they are appended to the command list
    """
    return [
        create_allow_command(user_commands),
        create_unrestrict_command(user_commands),
        *create_ban_commands(),
    ]
