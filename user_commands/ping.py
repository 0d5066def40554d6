"""Replies with pong."""

from commands.command import CommandDefinition


async def ping(context, suffix, environment):
    await environment.messenger.send(context, "🏓 Pong!")


command = CommandDefinition(
    aliases=["ping", "p"],
    action=ping,
    unique_id="ping",
    short_description="Check that the bot is responding.",
    usage_example="ping",
)
