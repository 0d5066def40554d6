"""
Template for new command modules. Files starting with an underscore are not loaded.

Copy this file, drop the underscore, and fill in the definition. Every module
must expose a `command` attribute holding a CommandDefinition or a dict with
the same keys.
"""

from commands.command import CommandDefinition


async def action(context, suffix, environment):
    # context.settings holds the resolved required_settings
    await environment.messenger.send(context, f"You said: {suffix}")


command = CommandDefinition(
    aliases=["example"],
    action=action,
    unique_id="example",
    cooldown=0,
    required_settings=[],
    short_description="An example command.",
)
