"""
Reload Command
Lets a bot admin reload every command without restarting
"""

import inspect
from typing import Any, Callable

from commands import strings
from commands.command import CommandDefinition


def create_reload_command(reload_action: Callable[[], Any]) -> CommandDefinition:
    """
    Create the `reload` command.

    Args:
        reload_action: Zero-argument callable (sync or async) that reloads commands

    Returns:
        Bot-admin-only command definition
    """
    async def reload(context: Any, suffix: str, environment: Any) -> None:
        result = reload_action()
        if inspect.isawaitable(result):
            await result
        await environment.messenger.send(context, strings.RELOAD_SUCCESS)

    return CommandDefinition(
        aliases=["reload"],
        action=reload,
        bot_admin_only=True,
        short_description=strings.RELOAD_SHORT_DESCRIPTION,
        hidden=True,
    )
