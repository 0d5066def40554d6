"""
Discord Utilities
Helper functions for Discord interactions
"""

from typing import Any, Optional


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    def format_duration(seconds: float) -> str:
        """
        Format duration in human readable format.

        Args:
            seconds: Duration in seconds

        Returns:
            Formatted duration string
        """
        seconds = int(seconds)
        if seconds < 60:
            return f"{seconds}s"
        if seconds < 3600:
            mins = seconds // 60
            secs = seconds % 60
            return f"{mins}m {secs}s"
        hours = seconds // 3600
        mins = (seconds % 3600) // 60
        return f"{hours}h {mins}m"

    @staticmethod
    def is_server_admin(message: Any, admin_role_name: Optional[str] = None) -> bool:
        """
        Check whether the author of a guild message administers the guild.

        Args:
            message: Discord message sent in a guild
            admin_role_name: Role name that also grants admin rights

        Returns:
            True if the author can manage the guild or holds the admin role
        """
        member = getattr(message, "author", None)
        if member is None:
            return False

        permissions = getattr(member, "guild_permissions", None)
        if permissions is not None and (permissions.manage_guild or permissions.administrator):
            return True

        if admin_role_name:
            roles = getattr(member, "roles", None) or []
            return any(role.name == admin_role_name for role in roles)

        return False

    @staticmethod
    def describe_channel(channel: Any, guild: Any = None) -> str:
        """
        Describe where a message was sent, for logs.

        Args:
            channel: Discord channel
            guild: Discord guild, None for direct messages

        Returns:
            "Guild >> #channel" or "DM"
        """
        if guild is None:
            return "DM"
        channel_name = getattr(channel, "name", None) or getattr(channel, "id", "?")
        return f"{guild.name} >> #{channel_name}"


class DiscordMessenger:
    """
    Sends command replies to the channel an invocation came from.

    Failures propagate so the caller can tell a missing permission apart
    from other errors.
    """

    def __init__(self, auto_delete_seconds: float = 6):
        self.auto_delete_seconds = auto_delete_seconds

    async def send(self, context: Any, text: str) -> Any:
        return await context.channel.send(text)

    async def send_and_delete(self, context: Any, text: str) -> Any:
        """Send a message that Discord removes after auto_delete_seconds."""
        return await context.channel.send(text, delete_after=self.auto_delete_seconds)
