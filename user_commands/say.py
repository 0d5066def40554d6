"""Server admins can make the bot repeat a message."""

from commands.command import CommandDefinition
from utils.validation import ValidationUtils


async def say(context, suffix, environment):
    text = ValidationUtils.sanitize_input(suffix)
    if not text:
        return "Nothing to say"

    result = ValidationUtils.validate_message_length(text)
    await environment.messenger.send(context, text if result else result.value)


command = CommandDefinition(
    aliases="say",
    action=say,
    unique_id="say",
    server_admin_only=True,
    only_in_server=True,
    short_description="Make the bot say something.",
    usage_example="say hello everyone",
)
