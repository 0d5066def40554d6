"""
Help Command
Shows available commands and command details
"""

from typing import Any, Optional, Sequence

from commands import strings
from commands.command import Command, CommandDefinition
from commands.public_error import PublicError
from utils.discord import DiscordUtils
from utils.validation import ValidationUtils


def generate_help(commands: Sequence[Command]) -> str:
    """
    Generate help text for all visible commands.

    Args:
        commands: Commands to list

    Returns:
        Formatted help string
    """
    lines = [
        "📖 **Commands**",
        "",
    ]

    for command in commands:
        if command.hidden:
            continue
        description = f" - {command.short_description}" if command.short_description else ""
        lines.append(f"• `{command.primary_alias}`{description}")

    lines.append("")
    lines.append("Use `help <command>` for details on one command.")
    return "\n".join(lines)


def generate_command_help(command: Command) -> str:
    """
    Generate detailed help for a single command.

    Args:
        command: Command to describe

    Returns:
        Formatted help string
    """
    lines = [
        f"📖 **Command:** `{command.primary_alias}`",
        "",
    ]

    description = command.long_description or command.short_description
    if description:
        lines.append(f"**Description:** {description}")

    if len(command.aliases) > 1:
        aliases_formatted = ", ".join(f"`{alias}`" for alias in command.aliases)
        lines.append(f"**Aliases:** {aliases_formatted}")

    if command.usage_example:
        lines.append(f"**Example:** `{command.usage_example}`")

    if command.cooldown:
        lines.append(f"**Cooldown:** {DiscordUtils.format_duration(command.cooldown)}")

    restrictions = []
    if command.only_in_server:
        restrictions.append("server only")
    if command.server_admin_only:
        restrictions.append("server admins")
    if command.bot_admin_only:
        restrictions.append("bot admins")
    if restrictions:
        lines.append(f"**Restricted to:** {', '.join(restrictions)}")

    return "\n".join(lines)


def _find_command(name: str, commands: Sequence[Command]) -> Optional[Command]:
    for command in commands:
        if name in command.aliases:
            return command
    return None


def create_help_command(user_commands: Sequence[Command]) -> CommandDefinition:
    """
    Create the `help` command.

    Args:
        user_commands: Snapshot of user commands taken at load time

    Returns:
        Definition listing user commands
    """
    async def help_action(context: Any, suffix: str, environment: Any) -> Optional[str]:
        if not user_commands:
            return strings.NO_COMMANDS_FOR_HELP_LOG

        name = suffix.split()[0].lower() if suffix else ""
        if name:
            command = _find_command(name, user_commands)
            if command is None or command.hidden:
                raise PublicError.create_with_custom_public_message(
                    strings.create_unknown_help_command_string(name),
                    True,
                    strings.UNKNOWN_HELP_COMMAND_LOG,
                )
            help_text = generate_command_help(command)
        else:
            help_text = generate_help(user_commands)

        validation = ValidationUtils.validate_message_length(help_text)
        await environment.messenger.send(context, help_text if validation else validation.value)
        return None

    return CommandDefinition(
        aliases=["help"],
        action=help_action,
        can_be_channel_restricted=False,
        short_description=strings.HELP_SHORT_DESCRIPTION,
        usage_example=strings.HELP_USAGE,
    )
